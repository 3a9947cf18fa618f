"""Tollgate — a small JSON HTTP service with a bearer-token gate.

Requests pass through an ordered chain of stages. Each stage returns
``Continue``, ``Respond`` or ``Fail``; the first non-``Continue``
outcome ends the chain.

Basic usage::

    from tollgate import App, AppConfig, RequestLogger

    app = App(AppConfig(token="s3cr3t"))
    app.add_middleware(RequestLogger())

    @app.route("/protected", auth=True)
    def protected():
        return {"message": "welcome"}

    app.run()
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "BearerAuth",
    "ConfigurationError",
    "Continue",
    "Fail",
    "Request",
    "RequestLogger",
    "Respond",
    "Response",
    "TollgateError",
    "create_app",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import tollgate`` fast while providing a clean top-level API.
    """
    if name == "App":
        from tollgate.app import App

        return App

    if name == "AppConfig":
        from tollgate.config import AppConfig

        return AppConfig

    if name == "Request":
        from tollgate.http.request import Request

        return Request

    if name == "Response":
        from tollgate.http.response import Response

        return Response

    if name in ("Continue", "Respond", "Fail"):
        from tollgate.middleware import protocol

        return getattr(protocol, name)

    if name in ("RequestLogger", "BearerAuth"):
        import tollgate.middleware as middleware

        return getattr(middleware, name)

    if name in ("TollgateError", "ConfigurationError"):
        from tollgate import errors

        return getattr(errors, name)

    if name == "create_app":
        from tollgate.service import create_app

        return create_app

    msg = f"module 'tollgate' has no attribute {name!r}"
    raise AttributeError(msg)
