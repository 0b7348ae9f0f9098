"""Wren — module-based routing and handler composition for ASGI.

Modules group routes with request-scoped Before/After hooks; the app
compiles them into a route table, answers 405 for known paths with an
unregistered verb, derives HEAD from GET, and runs status-code handlers
after each route.

Basic usage::

    from wren import App, HttpContext, Module, negotiate

    class HelloModule(Module):
        def __init__(self) -> None:
            super().__init__()
            self.get("/", self.index)

        async def index(self, ctx: HttpContext) -> None:
            await negotiate(ctx, {"hello": "world"})

    app = App()
    app.add_module(HelloModule)
    app.run()
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "HTTPError",
    "HttpContext",
    "Middleware",
    "Module",
    "Next",
    "Request",
    "Response",
    "ResponseNegotiator",
    "RouteConsistencyError",
    "RouteKey",
    "StatusCodeHandler",
    "WrenError",
    "WrenOptions",
    "as_json",
    "bind",
    "negotiate",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import wren`` fast while providing a clean top-level API.
    """
    if name == "App":
        from wren.app import App

        return App

    if name in ("AppConfig", "WrenOptions"):
        from wren import config as _config

        return getattr(_config, name)

    if name == "Module":
        from wren.module import Module

        return Module

    if name == "RouteKey":
        from wren.routing.route import RouteKey

        return RouteKey

    if name == "HttpContext":
        from wren.http.context import HttpContext

        return HttpContext

    if name == "Request":
        from wren.http.request import Request

        return Request

    if name == "Response":
        from wren.http.response import Response

        return Response

    if name in ("Middleware", "Next"):
        from wren.middleware import protocol as _mw

        return getattr(_mw, name)

    if name in ("ResponseNegotiator", "as_json", "negotiate"):
        from wren import negotiation as _neg

        return getattr(_neg, name)

    if name == "StatusCodeHandler":
        from wren.status import StatusCodeHandler

        return StatusCodeHandler

    if name == "bind":
        from wren.binding import bind

        return bind

    if name in ("ConfigurationError", "HTTPError", "RouteConsistencyError", "WrenError"):
        from wren import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
