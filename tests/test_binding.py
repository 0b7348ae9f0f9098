"""Tests for wren.binding — request data onto dataclasses."""

from dataclasses import dataclass, field
from typing import Any

import pytest

from wren.binding import bind, extract_dataclass
from wren.errors import HTTPError
from wren.http.context import HttpContext
from wren.http.request import Request
from wren.http.response import Response


def _make_ctx(method: str = "POST", body: bytes = b"", query_string: bytes = b"") -> HttpContext:
    scope: dict[str, Any] = {
        "type": "http",
        "method": method,
        "path": "/users",
        "headers": [(b"content-type", b"application/json")],
        "query_string": query_string,
    }

    async def receive() -> dict[str, Any]:
        return {"type": "http.request", "body": body, "more_body": False}

    return HttpContext(request=Request.from_asgi(scope, receive), response=Response())


@dataclass
class NewUser:
    name: str
    age: int = 0
    admin: bool = False
    score: float = 0.0


@dataclass
class Page:
    page: int = 1
    q: str = ""
    tags: list[str] = field(default_factory=list)


class TestExtractDataclass:
    def test_converts_simple_types(self) -> None:
        user = extract_dataclass(NewUser, {"name": " ada ", "age": "36", "admin": "yes", "score": "1.5"})
        assert user == NewUser(name="ada", age=36, admin=True, score=1.5)

    def test_defaults_for_missing(self) -> None:
        assert extract_dataclass(NewUser, {"name": "ada"}) == NewUser(name="ada")

    def test_unknown_keys_ignored(self) -> None:
        assert extract_dataclass(NewUser, {"name": "ada", "role": "x"}) == NewUser(name="ada")

    def test_failed_conversion_keeps_raw(self) -> None:
        assert extract_dataclass(NewUser, {"name": "ada", "age": "old"}).age == "old"

    def test_bool_from_json_value(self) -> None:
        assert extract_dataclass(NewUser, {"name": "a", "admin": True}).admin is True
        assert extract_dataclass(NewUser, {"name": "a", "admin": 0}).admin is False

    def test_non_simple_types_pass_through(self) -> None:
        assert extract_dataclass(Page, {"tags": ["a", "b"]}).tags == ["a", "b"]

    def test_missing_required_raises_type_error(self) -> None:
        with pytest.raises(TypeError):
            extract_dataclass(NewUser, {})


class TestBind:
    async def test_json_body(self) -> None:
        ctx = _make_ctx(body=b'{"name": "ada", "age": 36}')
        assert await bind(ctx, NewUser) == NewUser(name="ada", age=36)

    async def test_query_for_get(self) -> None:
        ctx = _make_ctx("GET", query_string=b"page=3&q=wren")
        assert await bind(ctx, Page) == Page(page=3, q="wren")

    async def test_query_for_head(self) -> None:
        ctx = _make_ctx("HEAD", query_string=b"page=2")
        assert (await bind(ctx, Page)).page == 2

    async def test_empty_body_uses_defaults(self) -> None:
        assert await bind(_make_ctx("PUT"), Page) == Page()

    async def test_malformed_json(self) -> None:
        with pytest.raises(HTTPError) as exc_info:
            await bind(_make_ctx(body=b"{nope"), NewUser)
        assert exc_info.value.status == 400
        assert "Malformed JSON" in exc_info.value.detail

    async def test_non_object_json(self) -> None:
        with pytest.raises(HTTPError) as exc_info:
            await bind(_make_ctx(body=b"[1, 2]"), NewUser)
        assert exc_info.value.status == 400

    async def test_missing_required_field(self) -> None:
        with pytest.raises(HTTPError) as exc_info:
            await bind(_make_ctx(body=b'{"age": 3}'), NewUser)
        assert exc_info.value.status == 400

    async def test_non_dataclass_rejected(self) -> None:
        with pytest.raises(TypeError, match="dataclass"):
            await bind(_make_ctx(body=b"{}"), dict)
