"""Tests for wren.routing.router — compiled trie-based router."""

import pytest

from wren.errors import ConfigurationError
from wren.routing.route import Route
from wren.routing.router import Router, parse_path


async def _handler(ctx) -> None:
    return None


def _route(path: str, methods: frozenset[str] | None = None) -> Route:
    return Route(path=path, handler=_handler, methods=methods or frozenset({"GET"}))


def _router(*routes: Route) -> Router:
    r = Router()
    for route in routes:
        r.add(route)
    r.compile()
    return r


class TestParsePath:
    def test_static(self) -> None:
        segments = parse_path("/users")
        assert len(segments) == 1
        assert segments[0].value == "users"
        assert segments[0].is_param is False

    def test_multi_static(self) -> None:
        segments = parse_path("/api/v2/users")
        assert [s.value for s in segments] == ["api", "v2", "users"]

    def test_param(self) -> None:
        segments = parse_path("/users/{id}")
        assert segments[1].is_param is True
        assert segments[1].param_name == "id"
        assert segments[1].param_type == "str"

    def test_typed_param(self) -> None:
        segments = parse_path("/users/{id:int}")
        assert segments[1].param_type == "int"

    def test_root(self) -> None:
        assert parse_path("/") == []

    def test_rejects_flask_style_param(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            parse_path("/share/<slug>")
        assert "<param>" in str(exc_info.value)
        assert "{param}" in str(exc_info.value)

    def test_rejects_unknown_converter(self) -> None:
        with pytest.raises(ConfigurationError, match="uuid"):
            parse_path("/users/{id:uuid}")


class TestRouterMatching:
    def test_root(self) -> None:
        match = _router(_route("/")).match("GET", "/")
        assert match is not None
        assert match.path_params == {}

    def test_static(self) -> None:
        match = _router(_route("/users")).match("GET", "/users")
        assert match is not None
        assert match.route.path == "/users"

    def test_trailing_slash_ignored(self) -> None:
        assert _router(_route("/users")).match("GET", "/users/") is not None

    def test_static_segments_case_insensitive(self) -> None:
        assert _router(_route("/Users")).match("GET", "/USERS") is not None

    def test_unknown_path_is_none(self) -> None:
        assert _router(_route("/users")).match("GET", "/orders") is None

    def test_wrong_method_is_none(self) -> None:
        assert _router(_route("/users")).match("POST", "/users") is None

    def test_param_capture(self) -> None:
        match = _router(_route("/users/{id}")).match("GET", "/users/alice")
        assert match is not None
        assert match.path_params == {"id": "alice"}

    def test_param_value_keeps_case(self) -> None:
        match = _router(_route("/users/{id}")).match("GET", "/users/Alice")
        assert match is not None
        assert match.path_params == {"id": "Alice"}

    def test_typed_param_rejects_non_matching(self) -> None:
        r = _router(_route("/users/{id:int}"))
        assert r.match("GET", "/users/abc") is None
        match = r.match("GET", "/users/42")
        assert match is not None
        assert match.path_params == {"id": "42"}

    def test_static_preferred_over_param(self) -> None:
        static = _route("/users/me")
        r = _router(static, _route("/users/{id}"))
        match = r.match("GET", "/users/me")
        assert match is not None
        assert match.route is static

    def test_catch_all(self) -> None:
        match = _router(_route("/files/{rest:path}")).match("GET", "/files/a/b/c.txt")
        assert match is not None
        assert match.path_params == {"rest": "a/b/c.txt"}

    def test_catch_all_respects_method(self) -> None:
        assert _router(_route("/files/{rest:path}")).match("PUT", "/files/a") is None

    def test_separate_routes_per_method(self) -> None:
        get_route = _route("/items", frozenset({"GET"}))
        post_route = _route("/items", frozenset({"POST"}))
        r = _router(get_route, post_route)

        assert r.match("GET", "/items").route is get_route  # type: ignore[union-attr]
        assert r.match("POST", "/items").route is post_route  # type: ignore[union-attr]


class TestRouterCompilation:
    def test_add_after_compile_raises(self) -> None:
        r = _router(_route("/"))
        with pytest.raises(RuntimeError, match="after compilation"):
            r.add(_route("/late"))

    def test_duplicate_method_and_path_raises(self) -> None:
        r = Router()
        r.add(_route("/users"))
        with pytest.raises(ConfigurationError, match="Duplicate route"):
            r.add(_route("/USERS/"))

    def test_conflicting_param_names_raise(self) -> None:
        r = Router()
        r.add(_route("/users/{id}"))
        with pytest.raises(ConfigurationError, match="conflicts"):
            r.add(_route("/users/{name}/posts"))

    def test_same_param_shared(self) -> None:
        r = Router()
        r.add(_route("/users/{id}"))
        r.add(_route("/users/{id}/posts"))
        r.compile()
        match = r.match("GET", "/users/7/posts")
        assert match is not None
        assert match.path_params == {"id": "7"}
