"""Tollgate CLI — serve the app and inspect its route table.

Entry point registered as ``tollgate`` in ``pyproject.toml``::

    [project.scripts]
    tollgate = "tollgate.cli:main"
"""

import argparse
import sys

DEFAULT_APP = "tollgate.service:create_app"


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``tollgate`` command."""
    parser = argparse.ArgumentParser(
        prog="tollgate",
        description="Tollgate — a JSON HTTP service with bearer-token auth.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- tollgate run -----------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Start dev or production server")
    run_parser.add_argument(
        "app",
        nargs="?",
        default=DEFAULT_APP,
        help=f"Import string (default: {DEFAULT_APP})",
    )
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    run_parser.add_argument(
        "--production",
        action="store_true",
        help="Run in production mode (multi-worker)",
    )
    run_parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Worker count (0=auto-detect, production only)",
    )

    # -- tollgate routes --------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered routes")
    routes_parser.add_argument(
        "app",
        nargs="?",
        default=DEFAULT_APP,
        help=f"Import string (default: {DEFAULT_APP})",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "run":
        from tollgate.cli._run import run_server

        run_server(args)
    elif args.command == "routes":
        from tollgate.cli._routes import run_routes

        run_routes(args)
