"""Per-route dispatcher.

``create_route_handler`` builds the function the router calls for one
compiled route. For every request it:

1. creates a fresh module instance and re-reads the route's handler
   from it (a missing route is a ``RouteConsistencyError``);
2. for HEAD, swaps the response body for an in-memory buffer;
3. runs the module's ``before`` hook, whose result gates steps 4;
4. runs the route handler, then the module's ``after`` hook;
5. runs the first status-code handler accepting the final status;
6. for HEAD, measures and discards the buffered body and sets
   ``Content-Length`` to the measured size.

Exceptions from hooks and handlers propagate unchanged.
"""

import logging
from collections.abc import Awaitable, Callable, Sequence

from wren._internal.invoke import invoke
from wren._internal.types import ModuleFactory
from wren.errors import RouteConsistencyError
from wren.http.context import HttpContext
from wren.http.response import BufferedBody
from wren.module import Module
from wren.routing.route import RouteEntry
from wren.status import StatusCodeHandler, resolve_status_handler

logger = logging.getLogger("wren.dispatch")

RouteDispatch = Callable[[HttpContext], Awaitable[None]]


def create_route_handler(
    entry: RouteEntry,
    factory: ModuleFactory,
    status_handlers: Sequence[StatusCodeHandler] = (),
) -> RouteDispatch:
    """Return the dispatch function for *entry*.

    *factory* produces a module of ``entry.module_type`` for each request.
    *status_handlers* is scanned in order after the route runs.
    """
    key = entry.key

    async def dispatch(ctx: HttpContext) -> None:
        module: Module = factory()

        route_handler = module.routes.get(key)
        if route_handler is None:
            raise RouteConsistencyError(key.verb, key.path)

        buffer: BufferedBody | None = None
        if ctx.request.is_head:
            # The transport can't be rewound once written; buffer instead.
            buffer = BufferedBody()
            ctx.response.body = buffer

        carry_on = True
        if module.before is not None:
            carry_on = bool(await invoke(module.before, ctx))

        if carry_on:
            await invoke(route_handler, ctx)
            if module.after is not None:
                await invoke(module.after, ctx)
        else:
            logger.debug(
                "%s.before stopped %s %s with status %d",
                type(module).__name__,
                ctx.method,
                ctx.path,
                ctx.response.status,
            )

        status_handler = resolve_status_handler(status_handlers, ctx.response.status)
        if status_handler is not None:
            await invoke(status_handler.handle, ctx)

        if buffer is not None:
            length = buffer.length
            buffer.truncate()
            ctx.response.content_length = length

    dispatch.__name__ = f"dispatch_{entry.module_type.__name__}"
    dispatch.__qualname__ = dispatch.__name__
    return dispatch
