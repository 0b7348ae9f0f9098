"""Status-code handlers — post-response interceptors chosen by status code.

After a route's handler (and hooks) finish, the dispatcher looks at the
final ``ctx.response.status`` and runs the first registered handler that
claims it. Order is registration order and is part of the contract: when
two handlers accept the same code, the one registered first always wins.

Class form::

    class NotFoundPage:
        def can_handle(self, status: int) -> bool:
            return status == 404

        async def handle(self, ctx: HttpContext) -> None:
            await ctx.response.write("nothing here")

    app.add_status_handler(NotFoundPage())

Decorator form::

    @app.status_handler(401, 403)
    async def denied(ctx: HttpContext) -> None:
        ...
"""

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from wren._internal.invoke import invoke

if TYPE_CHECKING:
    from wren.http.context import HttpContext


@runtime_checkable
class StatusCodeHandler(Protocol):
    """Anything that can decide on and handle a status code."""

    def can_handle(self, status: int) -> bool: ...

    async def handle(self, ctx: "HttpContext") -> None: ...


@dataclass(frozen=True, slots=True)
class StatusHandler:
    """A ``(predicate, handler)`` pair implementing ``StatusCodeHandler``.

    *func* may be sync or async.
    """

    predicate: Callable[[int], bool]
    func: Callable[["HttpContext"], Any]

    @classmethod
    def for_codes(cls, codes: Iterable[int], func: Callable[["HttpContext"], Any]) -> "StatusHandler":
        """Build a handler accepting exactly *codes*."""
        accepted = frozenset(codes)
        return cls(predicate=accepted.__contains__, func=func)

    def can_handle(self, status: int) -> bool:
        return bool(self.predicate(status))

    async def handle(self, ctx: "HttpContext") -> None:
        await invoke(self.func, ctx)


def resolve_status_handler(
    handlers: Sequence[StatusCodeHandler],
    status: int,
) -> StatusCodeHandler | None:
    """Return the first handler in *handlers* accepting *status*, else ``None``."""
    for handler in handlers:
        if handler.can_handle(status):
            return handler
    return None
