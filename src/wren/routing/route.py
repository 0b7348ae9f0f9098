"""Route keys, route entries, and router records."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, NamedTuple


class RouteKey(NamedTuple):
    """A ``(verb, path)`` pair identifying one handler within a module.

    Unique per pair — the same path may be declared with several verbs.
    """

    verb: str
    path: str


@dataclass(frozen=True, slots=True)
class RouteEntry:
    """One compiled route: which module type owns ``(verb, path)``.

    Produced once at startup and never modified.
    """

    verb: str
    path: str
    module_type: type

    @property
    def key(self) -> RouteKey:
        return RouteKey(self.verb, self.path)


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route path.

    Static:  ``/users``  (is_param=False)
    Param:   ``/{id}``   (is_param=True, param_name="id")
    Typed:   ``/{id:int}`` (is_param=True, param_name="id", param_type="int")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None
    param_type: str = "str"


@dataclass(frozen=True, slots=True)
class Route:
    """A route as the router stores it: path template, methods, dispatch function."""

    path: str
    handler: Callable[..., Awaitable[Any]]
    methods: frozenset[str]
    name: str | None = None


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    path_params: dict[str, str]
