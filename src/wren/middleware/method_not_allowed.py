"""Method-not-allowed guard.

Runs after the router found no route for ``(method, path)``. When the
path itself belongs to the app under some other verb the request ends
here with 405 and no body; otherwise it continues (usually to 404).

The guard only knows the path is owned, not which verbs are valid, so
it sets no ``Allow`` header.
"""

import logging
from collections.abc import Iterable

from wren.http.context import HttpContext
from wren.middleware.protocol import Next
from wren.routing.table import normalize_path

logger = logging.getLogger("wren.server")


class MethodNotAllowedGuard:
    """Short-circuit requests to known paths with 405.

    Usage::

        guard = MethodNotAllowedGuard(table.known_paths)
        await guard(ctx, not_found)
    """

    __slots__ = ("known_paths",)

    def __init__(self, known_paths: Iterable[str]) -> None:
        self.known_paths = frozenset(normalize_path(p) for p in known_paths)

    async def __call__(self, ctx: HttpContext, next: Next) -> None:
        if normalize_path(ctx.request.path) in self.known_paths:
            logger.debug("405 %s %s", ctx.method, ctx.path)
            ctx.response.status = 405
            return
        await next(ctx)
