"""Request pipeline assembly.

Stage order, outermost first::

    GlobalAfterHook        (only if options.after)
    GlobalBeforeHook       (only if options.before)
    app middleware         (registration order)
    RoutingStage           -> per-route dispatch on match
    MethodNotAllowedGuard  -> 405 for known paths
    not_found              -> 404
"""

import logging

from wren.config import WrenOptions
from wren.http.context import HttpContext
from wren.middleware.hooks import GlobalAfterHook, GlobalBeforeHook
from wren.middleware.method_not_allowed import MethodNotAllowedGuard
from wren.middleware.protocol import Middleware, Next, compose
from wren.routing.router import Router

logger = logging.getLogger("wren.server")


async def not_found(ctx: HttpContext) -> None:
    """Terminal stage: nothing owns this path."""
    logger.debug("404 %s %s", ctx.method, ctx.path)
    ctx.response.status = 404


class RoutingStage:
    """Hand matched requests to their route's dispatch function.

    Unmatched requests continue to the next stage.
    """

    __slots__ = ("router",)

    def __init__(self, router: Router) -> None:
        self.router = router

    async def __call__(self, ctx: HttpContext, next: Next) -> None:
        match = self.router.match(ctx.method, ctx.path)
        if match is None:
            await next(ctx)
            return
        if match.path_params:
            ctx.request = ctx.request.with_path_params(match.path_params)
        await match.route.handler(ctx)


def build_pipeline(
    router: Router,
    known_paths: frozenset[str],
    *,
    options: WrenOptions | None = None,
    middleware: tuple[Middleware, ...] = (),
) -> Next:
    """Compose the full request pipeline for a frozen app."""
    stages: list[Middleware] = []
    if options is not None and options.after is not None:
        stages.append(GlobalAfterHook(options.after))
    if options is not None and options.before is not None:
        stages.append(GlobalBeforeHook(options.before))
    stages.extend(middleware)
    stages.append(RoutingStage(router))
    stages.append(MethodNotAllowedGuard(known_paths))
    return compose(tuple(stages), not_found)
