"""``wren routes`` — list compiled routes.

Resolves an import string to a wren App, freezes it, and prints one row
per ``(verb, path)`` with the owning module.
"""

import argparse
import sys

from wren.cli._resolve import resolve_app


def run_routes(args: argparse.Namespace) -> None:
    """Print METHOD, PATH, MODULE for every compiled route."""
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    table = app.route_table
    if not table.entries:
        print("No routes registered.")
        return

    rows = [(entry.verb, entry.path, entry.module_type.__name__) for entry in table.entries]

    max_method = max(6, *(len(r[0]) for r in rows))  # "METHOD" header
    max_path = max(4, *(len(r[1]) for r in rows))  # "PATH" header

    fmt = f"{{:<{max_method}}}  {{:<{max_path}}}  {{}}"
    print(fmt.format("METHOD", "PATH", "MODULE"))
    sep_len = max_method + max_path + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for verb, path, module_name in rows:
        print(fmt.format(verb, path, module_name))
