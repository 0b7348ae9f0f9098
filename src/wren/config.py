"""Application configuration.

AppConfig and WrenOptions are frozen dataclasses — immutable after
creation, IDE-autocompletable, no string-key dict lookups.
"""

from dataclasses import dataclass

from wren._internal.types import AfterHook, BeforeHook


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(debug=True, port=3000)
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False

    # Logging (applied by ``wren run``; the library never configures handlers)
    log_level: str = "info"

    # Reload (development mode, requires debug=True)
    reload: bool = False


@dataclass(frozen=True, slots=True)
class WrenOptions:
    """App-wide hooks wrapped around the whole routing stage.

    ``before`` returning ``False`` stops the request before routing (no
    route, no 405). ``after`` runs once routing completes, including when
    ``before`` stopped the request. ``None`` means the stage is not
    installed at all::

        async def require_api_key(ctx: HttpContext) -> bool:
            if ctx.request.headers.get("x-api-key") != KEY:
                ctx.response.status = 401
                return False
            return True

        app = App(options=WrenOptions(before=require_api_key))
    """

    before: BeforeHook | None = None
    after: AfterHook | None = None
