"""Middleware — Protocol-based, no inheritance required.

A middleware is any callable matching:
    async def mw(ctx: HttpContext, next: Next) -> None

Built-in stages:
    GlobalAfterHook -- Runs the app-wide after hook once routing completes
    GlobalBeforeHook -- Runs the app-wide before hook, may stop the request
    MethodNotAllowedGuard -- 405 for known paths with an unregistered verb
"""

from wren.middleware.hooks import GlobalAfterHook, GlobalBeforeHook
from wren.middleware.method_not_allowed import MethodNotAllowedGuard
from wren.middleware.protocol import Middleware, Next, compose

__all__ = [
    "GlobalAfterHook",
    "GlobalBeforeHook",
    "Middleware",
    "MethodNotAllowedGuard",
    "Next",
    "compose",
]
