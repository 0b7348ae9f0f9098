"""Shared type aliases used across wren modules."""

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, TypeAlias

if TYPE_CHECKING:
    from wren.http.context import HttpContext

# Route handler: writes its result to ctx.response; sync or async
RequestHandler: TypeAlias = Callable[["HttpContext"], Awaitable[None] | None]

# Before hook: returns False to stop the rest of its scope
BeforeHook: TypeAlias = Callable[["HttpContext"], Awaitable[bool] | bool]

# After hook: return value is ignored
AfterHook: TypeAlias = Callable[["HttpContext"], Awaitable[Any] | Any]

# Module factory: zero-argument callable producing a fresh module
ModuleFactory: TypeAlias = Callable[[], Any]
