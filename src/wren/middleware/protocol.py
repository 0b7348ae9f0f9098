"""Middleware protocol and Next type alias.

A middleware is any callable matching::

    async def my_mw(ctx: HttpContext, next: Next) -> None: ...

No base class required. The framework checks the shape, not the lineage.
Middleware works on the shared, mutable ``ctx.response``; not calling
``next`` ends the request at that stage.
"""

from collections.abc import Awaitable, Callable
from typing import Protocol, TypeAlias

from wren.http.context import HttpContext

# The next stage in the pipeline
Next: TypeAlias = Callable[[HttpContext], Awaitable[None]]


class Middleware(Protocol):
    """Protocol for wren middleware.

    Accepts both functions and callable objects::

        # Function middleware
        async def timing(ctx: HttpContext, next: Next) -> None:
            start = time.monotonic()
            await next(ctx)
            logger.info("%s took %.3fs", ctx.path, time.monotonic() - start)

        # Class middleware
        class RequireJson:
            async def __call__(self, ctx: HttpContext, next: Next) -> None:
                ...
    """

    async def __call__(self, ctx: HttpContext, next: Next) -> None: ...


def compose(stages: tuple[Middleware, ...], endpoint: Next) -> Next:
    """Wrap *endpoint* with *stages*; the first stage runs outermost."""
    handler = endpoint
    for mw in reversed(stages):

        async def make_next(ctx: HttpContext, _mw: Middleware = mw, _next: Next = handler) -> None:
            await _mw(ctx, _next)

        handler = make_next
    return handler
