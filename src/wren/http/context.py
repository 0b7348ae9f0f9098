"""Per-request context handed to handlers, hooks, and middleware."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from wren.http.request import Request
from wren.http.response import Response

if TYPE_CHECKING:
    from wren.negotiation import ResponseNegotiator


@dataclass(slots=True)
class HttpContext:
    """One request, its response, and the app services it may need.

    Owned exclusively by the task serving the request. ``items`` is a
    scratch dict for hooks and handlers to hand values to each other::

        def before(ctx: HttpContext) -> bool:
            ctx.items["user"] = load_user(ctx.request)
            return True
    """

    request: Request
    response: Response
    negotiators: tuple[ResponseNegotiator, ...] = ()
    items: dict[str, Any] = field(default_factory=dict)

    @property
    def method(self) -> str:
        return self.request.method

    @property
    def path(self) -> str:
        return self.request.path

    @property
    def path_params(self) -> dict[str, str]:
        return self.request.path_params
