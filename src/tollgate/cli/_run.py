"""``tollgate run`` — development or production server command."""

import argparse
import sys

from tollgate._internal.logs import configure_logging
from tollgate.cli._resolve import resolve_app


def run_server(args: argparse.Namespace) -> None:
    """Start the tollgate server (dev or production mode).

    Resolves ``args.app`` to an App, then delegates to either
    ``run_dev_server()`` (debug config) or ``run_production_server()``
    (``--production`` or debug off). CLI flags override app config.
    """
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    host = args.host or app.config.host
    port = args.port or app.config.port

    configure_logging(app.log_level)
    app.print_banner(host, port)

    production_mode = args.production or not app.config.debug

    if production_mode:
        from tollgate.server.production import run_production_server

        run_production_server(
            app,
            host=host,
            port=port,
            workers=args.workers if args.workers is not None else app.config.workers,
            log_format=app.config.log_format,
            log_level=app.config.log_level,
        )
    else:
        from tollgate.server.dev import run_dev_server

        run_dev_server(
            app,
            host,
            port,
            reload=app.config.debug,
            log_level=app.config.log_level,
        )
