"""Response negotiation — pick a serializer by the request's ``Accept`` header.

Negotiators are registered on the app (``app.add_negotiator``) and tried
in registration order; ``DefaultJsonNegotiator`` is always appended last
and is also the fallback when nothing matches.

Selection walks the client's media ranges from highest to lowest
quality (ties keep header order) and, for each range, asks every
negotiator ``can_handle(range)``. The first yes wins.
"""

import dataclasses
import json as json_module
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from wren._internal.invoke import invoke

if TYPE_CHECKING:
    from wren.http.context import HttpContext

JSON_CONTENT_TYPE = "application/json; charset=utf-8"


@runtime_checkable
class ResponseNegotiator(Protocol):
    """Serializes a model onto the response for the media ranges it accepts."""

    def can_handle(self, media_range: str) -> bool: ...

    async def handle(self, ctx: "HttpContext", model: Any) -> None: ...


def parse_accept(header: str | None) -> list[str]:
    """Return media ranges from an ``Accept`` header, best first.

    Ranges with ``q=0`` are dropped. A missing or empty header yields
    ``["*/*"]``.
    """
    if not header or not header.strip():
        return ["*/*"]

    ranked: list[tuple[float, int, str]] = []
    for index, part in enumerate(header.split(",")):
        media, *params = (p.strip() for p in part.split(";"))
        if not media:
            continue
        quality = 1.0
        for param in params:
            name, _, value = param.partition("=")
            if name.strip().lower() == "q":
                try:
                    quality = float(value)
                except ValueError:
                    quality = 0.0
        if quality > 0:
            ranked.append((quality, index, media.lower()))

    ranked.sort(key=lambda item: (-item[0], item[1]))
    return [media for _, _, media in ranked]


def _json_default(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=str)
    return str(value)


def dump_json(model: Any) -> bytes:
    """Serialize *model* to UTF-8 JSON bytes (dataclasses become objects)."""
    return json_module.dumps(model, default=_json_default).encode("utf-8")


class DefaultJsonNegotiator:
    """Writes the model as JSON. Accepts ``*/*``, ``application/*``,
    ``application/json``, and any ``+json`` suffix type."""

    __slots__ = ()

    def can_handle(self, media_range: str) -> bool:
        return (
            media_range in ("*/*", "application/*", "application/json")
            or media_range.endswith("+json")
        )

    async def handle(self, ctx: "HttpContext", model: Any) -> None:
        body = dump_json(model)
        ctx.response.content_type = JSON_CONTENT_TYPE
        ctx.response.content_length = len(body)
        await ctx.response.write(body)


DEFAULT_NEGOTIATOR = DefaultJsonNegotiator()


def select_negotiator(ctx: "HttpContext") -> ResponseNegotiator:
    """Choose the negotiator for this request's ``Accept`` header."""
    for media_range in parse_accept(ctx.request.headers.get("accept")):
        for negotiator in ctx.negotiators:
            if negotiator.can_handle(media_range):
                return negotiator
    return DEFAULT_NEGOTIATOR


async def negotiate(ctx: "HttpContext", model: Any, *, status: int | None = None) -> None:
    """Write *model* using the negotiator chosen for this request.

    Usage::

        async def show(ctx: HttpContext) -> None:
            await negotiate(ctx, {"id": ctx.path_params["id"]})
    """
    if status is not None:
        ctx.response.status = status
    negotiator = select_negotiator(ctx)
    await invoke(negotiator.handle, ctx, model)


async def as_json(ctx: "HttpContext", model: Any, *, status: int | None = None) -> None:
    """Write *model* as JSON regardless of ``Accept``."""
    if status is not None:
        ctx.response.status = status
    await DEFAULT_NEGOTIATOR.handle(ctx, model)
