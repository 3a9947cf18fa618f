"""Development server.

Starts a pounce ASGI server with the live tollgate App object.
Single worker, reload enabled when the app runs in debug mode.
"""

from typing import Any


def run_dev_server(
    app: Any,
    host: str,
    port: int,
    *,
    reload: bool = False,
    log_level: str = "info",
) -> None:
    """Start a pounce dev server with the given App.

    Pounce's ``run()`` takes an import string, but tollgate has a live
    ``App`` object. We use ``pounce.Server`` directly with the ASGI
    callable.

    Args:
        app: ASGI callable (tollgate App instance).
        host: Bind host address.
        port: Bind port number.
        reload: Enable auto-reload on file changes.
        log_level: Pounce log level.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = ServerConfig(
        host=host,
        port=port,
        workers=1,
        reload=reload,
        log_level=log_level,
    )
    server = Server(config, app)
    server.run()
