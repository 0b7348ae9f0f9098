"""``wren run`` — serve an app with uvicorn."""

import argparse
import logging
import sys

from wren.cli._resolve import resolve_app


def run_app(args: argparse.Namespace) -> None:
    """Resolve ``args.app``, configure logging, and start uvicorn.

    CLI flags override the app's ``AppConfig``.
    """
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    log_level = args.log_level or app.config.log_level
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app._ensure_frozen()

    from wren.server.serve import run_server

    run_server(
        app,
        args.host or app.config.host,
        args.port or app.config.port,
        reload=args.reload or (app.config.debug and app.config.reload),
        app_path=args.app,
        log_level=log_level,
    )
