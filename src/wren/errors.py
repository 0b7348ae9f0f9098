"""Wren exception hierarchy.

Shared across the route table, dispatcher, App, and ASGI handler so every
module raises and catches the same types.
"""

from dataclasses import dataclass


class WrenError(Exception):
    """Base for all wren-specific errors."""


class ConfigurationError(WrenError):
    """Raised when modules or app configuration are invalid.

    Typically raised while a module declares its routes or during
    ``App._freeze()`` at startup.
    """


class RouteConsistencyError(WrenError):
    """A route compiled at startup is missing from a live module instance.

    The route table is built from the same mapping the dispatcher reads at
    request time, so this only happens when a module changes its routes
    after startup. Never recovered; the ASGI handler maps it to a 500.
    """

    def __init__(self, verb: str, path: str) -> None:
        self.verb = verb
        self.path = path
        super().__init__(f"Route {verb} {path!r} was no longer found")


@dataclass(frozen=True, slots=True)
class HTTPError(WrenError):
    """An error that maps directly to an HTTP status code.

    Handlers and hooks may raise it to abort with a status. The ASGI
    handler turns it into a response when nothing has been sent yet.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)
