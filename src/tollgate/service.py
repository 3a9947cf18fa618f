"""The tollgate service: public, protected and health endpoints.

Usage::

    from tollgate.service import create_app

    app = create_app()
    app.run()

Or from the command line::

    tollgate run
"""

from typing import Any

from tollgate._internal.clock import iso_timestamp
from tollgate.app import App
from tollgate.config import AppConfig
from tollgate.middleware.access import RequestLogger

PUBLIC_MESSAGE = "This is a public route, accessible to everyone"
PROTECTED_MESSAGE = "You have accessed the protected route successfully!"
HEALTH_STATUS = "Server is running"


def public() -> dict[str, Any]:
    return {"message": PUBLIC_MESSAGE}


def protected() -> dict[str, Any]:
    return {"message": PROTECTED_MESSAGE}


def health() -> dict[str, Any]:
    """Liveness check. The timestamp is taken per request."""
    return {"status": HEALTH_STATUS, "timestamp": iso_timestamp()}


def create_app(config: AppConfig | None = None) -> App:
    """Build the service app.

    Without *config*, settings come from the environment
    (see ``AppConfig.from_env``).
    """
    app = App(config or AppConfig.from_env())
    app.add_middleware(RequestLogger())

    app.route("/public", name="Public Route")(public)
    app.route("/protected", name="Protected Route", auth=True)(protected)
    app.route("/health", name="Health Check")(health)

    return app
