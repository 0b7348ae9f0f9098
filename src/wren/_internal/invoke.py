"""Invoke helpers — call sync or async callables uniformly.

Route handlers, module hooks, global hooks, and status-code handlers can
all be ``def`` or ``async def``. Any code that calls one of them goes
through ``invoke`` so the sync/async check lives in exactly one place.

Usage::

    from wren._internal.invoke import invoke

    carry_on = await invoke(module.before, ctx)
"""

import inspect
from typing import Any


async def invoke(func: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *func* and await the result if it's awaitable."""
    result = func(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
