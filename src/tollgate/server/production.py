"""Production server.

Starts a multi-worker pounce server. The app's own ``/health`` route
answers health checks, so pounce's built-in one stays off.
"""

from typing import Any


def run_production_server(
    app: Any,
    host: str = "0.0.0.0",
    port: int = 3000,
    workers: int = 0,  # 0 = auto-detect from CPU count
    *,
    log_format: str = "text",
    log_level: str = "info",
    keep_alive_timeout: float = 5.0,
    request_timeout: float = 30.0,
) -> None:
    """Run a tollgate app in production mode.

    Args:
        app: tollgate App instance.
        host: Bind address (default: 0.0.0.0 for all interfaces).
        port: Bind port (default: 3000).
        workers: Worker count (0 = auto-detect from CPU count).
        log_format: Log format ("json" or "text").
        log_level: Log level (debug, info, warning, error, critical).
        keep_alive_timeout: Keep-alive connection timeout (seconds).
        request_timeout: Individual request timeout (seconds).
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = ServerConfig(
        host=host,
        port=port,
        workers=workers,
        log_format=log_format,
        log_level=log_level,
        keep_alive_timeout=keep_alive_timeout,
        request_timeout=request_timeout,
        health_check_path=None,
    )
    server = Server(config, app)
    server.run()
