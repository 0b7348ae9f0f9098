"""Bind request data onto dataclasses.

GET and HEAD bind from the query string; every other method binds from
the JSON body. Only ``str``, ``int``, ``float`` and ``bool`` fields are
converted; anything else is passed through as parsed. No validation
happens here.

Usage::

    @dataclass
    class NewUser:
        name: str
        age: int = 0

    async def create(ctx: HttpContext) -> None:
        user = await bind(ctx, NewUser)
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, TypeVar

from wren.errors import HTTPError

if TYPE_CHECKING:
    from wren.http.context import HttpContext

T = TypeVar("T")

_BUILTIN_TYPES: dict[str, type] = {
    "str": str,
    "int": int,
    "float": float,
    "bool": bool,
}


async def bind(ctx: HttpContext, cls: type[T]) -> T:
    """Create a *cls* instance from the request.

    Raises ``HTTPError(400)`` when a JSON body is malformed or is not an
    object, or when required fields are missing.
    """
    if not dataclasses.is_dataclass(cls):
        msg = f"bind() needs a dataclass type, got {cls!r}"
        raise TypeError(msg)

    request = ctx.request
    data: Mapping[str, Any]
    if request.method in ("GET", "HEAD"):
        data = request.query
    else:
        raw = await request.body()
        if not raw:
            data = {}
        else:
            try:
                data = await request.json()
            except ValueError as exc:
                raise HTTPError(status=400, detail=f"Malformed JSON body: {exc}") from exc
            if not isinstance(data, dict):
                raise HTTPError(status=400, detail="JSON body must be an object")

    try:
        return extract_dataclass(cls, data)
    except TypeError as exc:
        raise HTTPError(status=400, detail=str(exc)) from exc


def extract_dataclass(cls: type[T], data: Mapping[str, Any]) -> T:
    """Instantiate dataclass *cls* from *data*, converting simple field types.

    Missing keys use the field default; conversion failures keep the raw
    value.
    """
    kwargs: dict[str, Any] = {}

    for f in dataclasses.fields(cls):  # type: ignore[arg-type]
        if not f.init or f.name not in data:
            continue
        target_type = f.type
        if isinstance(target_type, str):
            target_type = _BUILTIN_TYPES.get(target_type, target_type)
        kwargs[f.name] = _convert(data[f.name], target_type)

    return cls(**kwargs)


def _convert(value: Any, target_type: Any) -> Any:
    """Convert *value* to *target_type*, returning *value* unchanged on failure."""
    if target_type is str:
        return value.strip() if isinstance(value, str) else str(value)

    if target_type is bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.lower() in ("true", "1", "yes", "on")
        return bool(value)

    if target_type in (int, float):
        try:
            return target_type(value)
        except (ValueError, TypeError):
            return value

    return value
