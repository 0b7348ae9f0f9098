"""Global Before/After hooks as pipeline stages.

The app installs these around the routing stage only when the matching
``WrenOptions`` field is set. ``GlobalAfterHook`` is installed outside
``GlobalBeforeHook``, so it runs even when the before hook stops the
request.
"""

from wren._internal.invoke import invoke
from wren._internal.types import AfterHook, BeforeHook
from wren.http.context import HttpContext
from wren.middleware.protocol import Next


class GlobalBeforeHook:
    """Run *hook* first; a falsy result skips everything downstream."""

    __slots__ = ("hook",)

    def __init__(self, hook: BeforeHook) -> None:
        self.hook = hook

    async def __call__(self, ctx: HttpContext, next: Next) -> None:
        if await invoke(self.hook, ctx):
            await next(ctx)


class GlobalAfterHook:
    """Run *hook* once the downstream stage has completed."""

    __slots__ = ("hook",)

    def __init__(self, hook: AfterHook) -> None:
        self.hook = hook

    async def __call__(self, ctx: HttpContext, next: Next) -> None:
        await next(ctx)
        await invoke(self.hook, ctx)
