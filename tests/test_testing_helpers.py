"""Tests for wren.testing — TestClient and TestResponse."""

import pytest

from wren import App, HttpContext, Module
from wren.testing import TestClient, TestResponse


class EchoModule(Module):
    def __init__(self) -> None:
        super().__init__()
        self.post("/echo", self.echo)
        self.get("/query", self.query)
        self.add_route("PURGE", "/echo", self.purge)

    async def echo(self, ctx: HttpContext) -> None:
        ctx.response.content_type = ctx.request.content_type or "application/octet-stream"
        await ctx.response.write(await ctx.request.body())

    async def query(self, ctx: HttpContext) -> None:
        await ctx.response.write(ctx.request.query.get("q", ""))

    async def purge(self, ctx: HttpContext) -> None:
        ctx.response.status = 202


def _app() -> App:
    app = App()
    app.add_module(EchoModule)
    return app


class TestTestResponse:
    def test_text_and_json(self) -> None:
        response = TestResponse(status=200, headers=(), body=b'{"a": 1}')
        assert response.text == '{"a": 1}'
        assert response.json() == {"a": 1}

    def test_header_lookup(self) -> None:
        response = TestResponse(
            status=200,
            headers=(("content-type", "text/plain"), ("content-length", "3"), ("vary", "a"), ("vary", "b")),
            body=b"abc",
        )
        assert response.header("Content-Type") == "text/plain"
        assert response.header("vary") == "a"
        assert response.header("missing") is None
        assert response.content_type == "text/plain"
        assert response.content_length == 3

    def test_no_content_length(self) -> None:
        assert TestResponse(status=204, headers=(), body=b"").content_length is None

    def test_frozen(self) -> None:
        response = TestResponse(status=200, headers=(), body=b"")
        with pytest.raises(AttributeError):
            response.status = 500  # type: ignore[misc]


class TestTestClient:
    async def test_raw_body(self) -> None:
        async with TestClient(_app()) as client:
            response = await client.post("/echo", body=b"raw bytes", headers={"content-type": "text/plain"})

        assert response.body == b"raw bytes"
        assert response.content_type == "text/plain"

    async def test_json_body_sets_content_type(self) -> None:
        async with TestClient(_app()) as client:
            response = await client.post("/echo", json={"x": 1})

        assert response.json() == {"x": 1}
        assert response.content_type == "application/json"

    async def test_query_string(self) -> None:
        async with TestClient(_app()) as client:
            response = await client.get("/query?q=wren")

        assert response.text == "wren"

    async def test_custom_method(self) -> None:
        async with TestClient(_app()) as client:
            response = await client.request("purge", "/echo")

        assert response.status == 202
