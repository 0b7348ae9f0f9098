"""Compiled router with trie-based path matching.

Routes are registered during app freeze and compiled into an immutable
lookup structure. Static segments match case-insensitively.

``match`` only answers "which route handles this method and path";
it returns ``None`` otherwise. Deciding between 405 and 404 is left to
the stages after routing.
"""

import re
from dataclasses import dataclass

from wren.errors import ConfigurationError
from wren.routing.params import CONVERTERS
from wren.routing.route import PathSegment, Route, RouteMatch


def parse_path(path: str) -> list[PathSegment]:
    """Parse a route path string into segments.

    Examples::

        "/users"          -> [PathSegment("users")]
        "/users/{id}"     -> [PathSegment("users"), PathSegment("{id}", is_param=True, ...)]
        "/users/{id:int}" -> [PathSegment("{id:int}", is_param=True, param_type="int")]
        "/files/{path:path}" -> [PathSegment("{path:path}", is_param=True, param_type="path")]
    """
    segments: list[PathSegment] = []
    for part in path.strip("/").split("/"):
        if not part:
            continue
        if part.startswith("<") and part.endswith(">"):
            msg = (
                f"Route {path!r} uses <param> syntax; wren expects {{param}} "
                f"(e.g. /users/{{id}})."
            )
            raise ConfigurationError(msg)
        if part.startswith("{") and part.endswith("}"):
            inner = part[1:-1]
            if ":" in inner:
                param_name, param_type = inner.split(":", 1)
            else:
                param_name = inner
                param_type = "str"
            if param_type not in CONVERTERS:
                msg = f"Unknown path converter {param_type!r} in route {path!r}."
                raise ConfigurationError(msg)
            segments.append(
                PathSegment(
                    value=part,
                    is_param=True,
                    param_name=param_name,
                    param_type=param_type,
                )
            )
        else:
            segments.append(PathSegment(value=part))
    return segments


class _TrieNode:
    """A node in the route trie. Mutable during compilation only."""

    __slots__ = ("catch_all_route", "children", "param_child", "routes_by_method")

    def __init__(self) -> None:
        # Static segment children, keyed case-folded: "users" -> node
        self.children: dict[str, _TrieNode] = {}
        # Single parameter child (only one param pattern per level)
        self.param_child: _ParamEdge | None = None
        # Catch-all route (path converter)
        self.catch_all_route: _CatchAllEdge | None = None
        # Routes at this node, keyed by HTTP method
        self.routes_by_method: dict[str, Route] = {}


@dataclass(slots=True)
class _ParamEdge:
    """A parameter edge in the trie."""

    param_name: str
    param_type: str
    regex: re.Pattern[str]
    node: _TrieNode


@dataclass(slots=True)
class _CatchAllEdge:
    """A catch-all (path) edge — consumes remaining path."""

    param_name: str
    route_by_method: dict[str, Route]


class Router:
    """Compiled router with trie-based path matching.

    Usage::

        router = Router()
        router.add(Route("/users", dispatch, frozenset({"GET"})))
        router.add(Route("/users/{id:int}", dispatch, frozenset({"GET"})))
        router.compile()
        match = router.match("GET", "/users/42")
    """

    __slots__ = ("_compiled", "_root")

    def __init__(self) -> None:
        self._root = _TrieNode()
        self._compiled = False

    def add(self, route: Route) -> None:
        """Add a route to the router. Must be called before compile()."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)

        segments = parse_path(route.path)
        node = self._root

        for seg in segments:
            if seg.is_param and seg.param_type == "path":
                # Catch-all: consumes rest of path, must be last segment
                if node.catch_all_route is None:
                    node.catch_all_route = _CatchAllEdge(
                        param_name=seg.param_name or "path",
                        route_by_method={},
                    )
                self._register(node.catch_all_route.route_by_method, route)
                return

            if seg.is_param:
                if node.param_child is None:
                    pattern, _ = CONVERTERS[seg.param_type]
                    node.param_child = _ParamEdge(
                        param_name=seg.param_name or "",
                        param_type=seg.param_type,
                        regex=re.compile(f"^{pattern}$"),
                        node=_TrieNode(),
                    )
                elif (node.param_child.param_name, node.param_child.param_type) != (
                    seg.param_name,
                    seg.param_type,
                ):
                    msg = (
                        f"Route {route.path!r} conflicts with an existing parameter "
                        f"{{{node.param_child.param_name}:{node.param_child.param_type}}} "
                        f"at the same position."
                    )
                    raise ConfigurationError(msg)
                node = node.param_child.node
            else:
                key = seg.value.casefold()
                if key not in node.children:
                    node.children[key] = _TrieNode()
                node = node.children[key]

        self._register(node.routes_by_method, route)

    @staticmethod
    def _register(routes_by_method: dict[str, Route], route: Route) -> None:
        for method in route.methods:
            if method in routes_by_method:
                msg = f"Duplicate route: {method} {route.path!r} is already registered."
                raise ConfigurationError(msg)
            routes_by_method[method] = route

    def compile(self) -> None:
        """Freeze the router. No more routes can be added."""
        self._compiled = True

    def match(self, method: str, path: str) -> RouteMatch | None:
        """Match a request method and path against compiled routes.

        Returns a ``RouteMatch`` when a route registered for *method*
        matches *path*, else ``None``.
        """
        parts = [p for p in path.strip("/").split("/") if p]
        return self._match_node(self._root, method, parts, 0, {})

    def _match_node(
        self,
        node: _TrieNode,
        method: str,
        parts: list[str],
        index: int,
        params: dict[str, str],
    ) -> RouteMatch | None:
        """Recursively match path parts against the trie."""
        # All parts consumed
        if index == len(parts):
            route = node.routes_by_method.get(method)
            if route is not None:
                return RouteMatch(route=route, path_params=params)
            return None

        part = parts[index]

        # 1. Static child first (exact, case-insensitive)
        child = node.children.get(part.casefold())
        if child is not None:
            result = self._match_node(child, method, parts, index + 1, params)
            if result is not None:
                return result

        # 2. Parameter child
        if node.param_child is not None:
            edge = node.param_child
            if edge.regex.match(part):
                new_params = {**params, edge.param_name: part}
                result = self._match_node(edge.node, method, parts, index + 1, new_params)
                if result is not None:
                    return result

        # 3. Catch-all
        if node.catch_all_route is not None:
            route = node.catch_all_route.route_by_method.get(method)
            if route is not None:
                remaining = "/".join(parts[index:])
                new_params = {**params, node.catch_all_route.param_name: remaining}
                return RouteMatch(route=route, path_params=new_params)

        return None
