"""Route modules — groups of route declarations with module-scoped hooks.

A module declares its routes in ``__init__``::

    class UsersModule(Module):
        def __init__(self) -> None:
            super().__init__("/users")
            self.before = self.require_token
            self.get("/", self.list_users)
            self.post("/", self.create_user)
            self.get("/{id:int}", self.show_user)

        async def require_token(self, ctx: HttpContext) -> bool:
            if "authorization" not in ctx.request.headers:
                ctx.response.status = 401
                return False
            return True

        async def list_users(self, ctx: HttpContext) -> None:
            await negotiate(ctx, USERS)

The app creates a fresh instance per request (through the module's
factory), so instance attributes are request-scoped.
"""

from collections.abc import Mapping
from types import MappingProxyType

from wren._internal.types import AfterHook, BeforeHook, RequestHandler
from wren.errors import ConfigurationError
from wren.routing.route import RouteKey


def join_path(base_path: str, path: str) -> str:
    """Join a module base path and a route path into ``/a/b`` form.

    ``join_path("/api/", "/users/")`` -> ``"/api/users"``;
    ``join_path("", "/")`` -> ``"/"``.
    """
    parts = [p for p in (base_path.strip("/"), path.strip("/")) if p]
    return "/" + "/".join(parts)


class Module:
    """Base class for route modules.

    Attributes:
        before: Optional hook run before the matched route's handler.
            Returning ``False`` skips the handler and ``after``.
        after: Optional hook run after the handler completes.
    """

    def __init__(self, base_path: str = "") -> None:
        self.base_path = base_path
        self.before: BeforeHook | None = None
        self.after: AfterHook | None = None
        self._routes: dict[RouteKey, RequestHandler] = {}

    @property
    def routes(self) -> Mapping[RouteKey, RequestHandler]:
        """Read-only view of ``(verb, path) -> handler`` in declaration order."""
        return MappingProxyType(self._routes)

    def add_route(self, verb: str, path: str, handler: RequestHandler) -> RouteKey:
        """Declare *handler* for ``verb`` at ``base_path + path``."""
        key = RouteKey(verb.upper(), join_path(self.base_path, path))
        if key in self._routes:
            msg = f"{type(self).__name__} declares {key.verb} {key.path!r} twice."
            raise ConfigurationError(msg)
        self._routes[key] = handler
        return key

    def get(self, path: str, handler: RequestHandler) -> None:
        """Declare a GET route. The same handler also answers HEAD."""
        self.add_route("GET", path, handler)
        self.add_route("HEAD", path, handler)

    def head(self, path: str, handler: RequestHandler) -> None:
        self.add_route("HEAD", path, handler)

    def post(self, path: str, handler: RequestHandler) -> None:
        self.add_route("POST", path, handler)

    def put(self, path: str, handler: RequestHandler) -> None:
        self.add_route("PUT", path, handler)

    def patch(self, path: str, handler: RequestHandler) -> None:
        self.add_route("PATCH", path, handler)

    def delete(self, path: str, handler: RequestHandler) -> None:
        self.add_route("DELETE", path, handler)

    def options(self, path: str, handler: RequestHandler) -> None:
        self.add_route("OPTIONS", path, handler)
