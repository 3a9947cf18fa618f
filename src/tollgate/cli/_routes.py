"""``tollgate routes`` — list registered routes.

Prints METHOD, PATH, AUTH and HANDLER for every route, in
registration order. The Not-Found fallback is not listed.
"""

import argparse
import sys

from tollgate.cli._resolve import resolve_app


def run_routes(args: argparse.Namespace) -> None:
    """List registered routes for a tollgate app."""
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    routes = app.routes
    if not routes:
        print("No routes registered.")
        return

    rows: list[tuple[str, str, str, str]] = []
    for route in routes:
        methods_str = ", ".join(sorted(route.methods))
        auth = "bearer" if route.auth else "-"
        handler_name = getattr(route.handler, "__name__", str(route.handler))
        if route.name:
            handler_name = f"{handler_name} ({route.name})"
        rows.append((methods_str, route.path, auth, handler_name))

    max_methods = max(max(len(r[0]) for r in rows), 6)  # "METHOD" header
    max_path = max(max(len(r[1]) for r in rows), 4)  # "PATH" header
    max_auth = max(max(len(r[2]) for r in rows), 4)  # "AUTH" header

    fmt = f"{{:<{max_methods}}}  {{:<{max_path}}}  {{:<{max_auth}}}  {{}}"
    print(fmt.format("METHOD", "PATH", "AUTH", "HANDLER"))
    sep_len = max_methods + max_path + max_auth + 6 + max(len(r[3]) for r in rows)
    print("-" * min(sep_len, 80))
    for row in rows:
        print(fmt.format(*row))
