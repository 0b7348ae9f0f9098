"""Serve a wren App with uvicorn.

Uvicorn only reloads when given an import string, so ``reload`` is
honoured only when *app_path* is provided (``wren run`` always passes it).
"""

import logging

logger = logging.getLogger("wren.server")


def run_server(
    app: object,
    host: str,
    port: int,
    *,
    reload: bool = False,
    app_path: str | None = None,
    log_level: str = "info",
) -> None:
    """Start uvicorn with the given ASGI app.

    Args:
        app: ASGI callable (wren App instance).
        host: Bind host address.
        port: Bind port number.
        reload: Restart on code changes (needs *app_path*).
        app_path: ``"module:attribute"`` import string for the app.
        log_level: uvicorn log level name.
    """
    import uvicorn

    if reload and app_path is None:
        logger.warning("reload needs an import string; starting without reload")
        reload = False

    target = app_path if reload else app
    logger.info("Serving on http://%s:%d", host, port)
    uvicorn.run(
        target,
        host=host,
        port=port,
        reload=reload,
        log_level=log_level,
        lifespan="on",
    )
