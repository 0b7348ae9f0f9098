"""Wren application class.

Mutable during setup (module, status-handler, negotiator, and middleware
registration). Frozen at runtime when app.run(), lifespan startup, or the
first ASGI call compiles the route table.
"""

import inspect
import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from wren._internal.asgi import Receive, Scope, Send
from wren._internal.types import ModuleFactory
from wren.config import AppConfig, WrenOptions
from wren.errors import ConfigurationError
from wren.middleware.protocol import Middleware, Next
from wren.module import Module
from wren.negotiation import DEFAULT_NEGOTIATOR, ResponseNegotiator
from wren.routing.route import Route
from wren.routing.router import Router
from wren.routing.table import RouteTable, build_route_table
from wren.server.dispatch import create_route_handler
from wren.server.handler import handle_request
from wren.server.pipeline import build_pipeline
from wren.status import StatusCodeHandler, StatusHandler

logger = logging.getLogger("wren.app")

M = TypeVar("M", bound=type[Module])


@dataclass(frozen=True, slots=True)
class _ModuleRegistration:
    """A module type and the factory that builds one per request."""

    module_type: type[Module]
    factory: ModuleFactory


class App:
    """The wren application.

    Usage::

        app = App(options=WrenOptions(after=log_request))
        app.add_module(UsersModule)
        app.add_module(OrdersModule, factory=lambda: OrdersModule(db))

        @app.status_handler(404)
        async def not_found(ctx: HttpContext) -> None:
            await as_json(ctx, {"error": "not found"})

    Thread safety:
        Setup is single-threaded. The freeze transition uses a Lock +
        double-check so exactly one thread compiles the app even if
        several workers call ``__call__()`` on first request.
    """

    __slots__ = (
        "_freeze_lock",
        "_frozen",
        "_middleware_list",
        "_modules",
        "_negotiator_list",
        "_shutdown_hooks",
        "_startup_hooks",
        "_status_handlers",
        # Compiled state (populated by _freeze)
        "_negotiators",
        "_pipeline",
        "_route_table",
        "_router",
        "config",
        "options",
    )

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        options: WrenOptions | None = None,
    ) -> None:
        self.config: AppConfig = config or AppConfig()
        self.options: WrenOptions = options or WrenOptions()
        self._modules: list[_ModuleRegistration] = []
        self._status_handlers: list[StatusCodeHandler] = []
        self._negotiator_list: list[ResponseNegotiator] = []
        self._middleware_list: list[Middleware] = []
        self._startup_hooks: list[Callable[..., Any]] = []
        self._shutdown_hooks: list[Callable[..., Any]] = []
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

        # Compiled state, set during _freeze()
        self._route_table: RouteTable | None = None
        self._router: Router | None = None
        self._pipeline: Next | None = None
        self._negotiators: tuple[ResponseNegotiator, ...] = ()

    # -- Registration --

    def add_module(self, module_type: type[Module], factory: ModuleFactory | None = None) -> None:
        """Register a module type.

        *factory* builds a fresh instance for every request that hits one
        of the module's routes; it defaults to calling ``module_type()``.
        """
        self._check_not_frozen()
        if not (isinstance(module_type, type) and issubclass(module_type, Module)):
            msg = f"{module_type!r} is not a Module subclass"
            raise ConfigurationError(msg)
        if any(reg.module_type is module_type for reg in self._modules):
            msg = f"Module {module_type.__name__} is already registered"
            raise ConfigurationError(msg)
        self._modules.append(_ModuleRegistration(module_type, factory or module_type))

    def module(self, module_type: M) -> M:
        """Class decorator form of ``add_module`` (default factory)."""
        self.add_module(module_type)
        return module_type

    def add_status_handler(self, handler: StatusCodeHandler) -> None:
        """Register a status-code handler. Earlier registrations take priority."""
        self._check_not_frozen()
        self._status_handlers.append(handler)

    def status_handler(self, *codes: int) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Register a function handling the given status codes.

        Usage::

            @app.status_handler(404, 410)
            def gone(ctx: HttpContext) -> None:
                ...
        """
        if not codes:
            msg = "status_handler() needs at least one status code"
            raise ConfigurationError(msg)

        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            self.add_status_handler(StatusHandler.for_codes(codes, func))
            return func

        return decorator

    def add_negotiator(self, negotiator: ResponseNegotiator) -> None:
        """Register a response negotiator, tried before the default JSON one."""
        self._check_not_frozen()
        self._negotiator_list.append(negotiator)

    def add_middleware(self, middleware: Middleware) -> None:
        """Add a middleware stage between the global hooks and routing."""
        self._check_not_frozen()
        self._middleware_list.append(middleware)

    def on_startup(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register a function to run on ASGI lifespan startup (sync or async)."""
        self._check_not_frozen()
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register a function to run on ASGI lifespan shutdown (sync or async)."""
        self._check_not_frozen()
        self._shutdown_hooks.append(func)
        return func

    # -- Introspection --

    @property
    def route_table(self) -> RouteTable:
        """The compiled route table (freezes the app if needed)."""
        self._ensure_frozen()
        assert self._route_table is not None
        return self._route_table

    # -- Server --

    def run(self, host: str | None = None, port: int | None = None, *, app_path: str | None = None) -> None:
        """Compile the app and serve it with uvicorn."""
        self._ensure_frozen()

        from wren.server.serve import run_server

        run_server(
            self,
            host or self.config.host,
            port or self.config.port,
            reload=self.config.reload and self.config.debug,
            app_path=app_path,
            log_level=self.config.log_level,
        )

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(scope, receive, send)
            return

        self._ensure_frozen()
        assert self._pipeline is not None

        await handle_request(
            scope,
            receive,
            send,
            pipeline=self._pipeline,
            negotiators=self._negotiators,
            debug=self.config.debug,
        )

    async def _handle_lifespan(self, scope: Scope, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol.

        Freezes the app at startup (before the first HTTP request), then
        runs startup/shutdown hooks and signals completion to the server.
        """
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    self._ensure_frozen()
                    await self._run_hooks(self._startup_hooks)
                except Exception as exc:
                    logger.exception("Startup failed")
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await self._run_hooks(self._shutdown_hooks)
                await send({"type": "lifespan.shutdown.complete"})
                return

    @staticmethod
    async def _run_hooks(hooks: list[Callable[..., Any]]) -> None:
        for hook in hooks:
            result = hook()
            if inspect.isawaitable(result):
                await result

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile the app into its frozen runtime state.

        MUST only be called while holding _freeze_lock.
        """
        # 1. Startup scope: one throwaway instance per module, read for routes
        modules: list[Module] = []
        for reg in self._modules:
            module = reg.factory()
            if not isinstance(module, reg.module_type):
                msg = (
                    f"Factory for {reg.module_type.__name__} returned "
                    f"{type(module).__name__}, not a {reg.module_type.__name__}"
                )
                raise ConfigurationError(msg)
            modules.append(module)

        table = build_route_table(modules)
        del modules

        # 2. One dispatch function per (verb, path), each with its module factory
        factories = {reg.module_type: reg.factory for reg in self._modules}
        status_handlers = tuple(self._status_handlers)
        router = Router()
        for entry in table.entries:
            dispatch = create_route_handler(entry, factories[entry.module_type], status_handlers)
            router.add(
                Route(
                    path=entry.path,
                    handler=dispatch,
                    methods=frozenset({entry.verb}),
                    name=entry.module_type.__name__,
                )
            )
            logger.debug("%s %s -> %s", entry.verb, entry.path, entry.module_type.__name__)
        router.compile()

        # 3. Pipeline: global hooks, middleware, router, 405 guard, 404
        self._negotiators = (*self._negotiator_list, DEFAULT_NEGOTIATOR)
        self._pipeline = build_pipeline(
            router,
            table.known_paths,
            options=self.options,
            middleware=tuple(self._middleware_list),
        )
        self._route_table = table
        self._router = router
        self._frozen = True

        logger.info(
            "Compiled %d routes (%d paths) from %d modules",
            len(table),
            len(table.known_paths),
            len(self._modules),
        )

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register modules, handlers, and middleware before calling app.run()."
            )
            raise RuntimeError(msg)
