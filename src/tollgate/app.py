"""Tollgate application class.

Mutable during setup (route registration, middleware, error handlers).
Frozen at runtime when app.run() or __call__() is first invoked.
"""

import logging
import sys
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from tollgate._internal.asgi import Receive, Scope, Send
from tollgate._internal.invoke import invoke
from tollgate._internal.logs import configure_logging
from tollgate.config import AppConfig
from tollgate.errors import ConfigurationError
from tollgate.http.request import Request
from tollgate.http.response import Response
from tollgate.middleware.auth import AuthConfig, BearerAuth
from tollgate.middleware.chain import Terminal
from tollgate.middleware.protocol import Stage
from tollgate.routing.route import Route
from tollgate.routing.router import Router
from tollgate.server.errors import custom_not_found, not_found
from tollgate.server.handler import dispatch, handle_request

logger = logging.getLogger("tollgate.server")

_ERROR_CODES = frozenset({404, 500})


@dataclass(slots=True)
class _PendingRoute:
    """A route waiting to be compiled."""

    path: str
    handler: Callable[..., Any]
    methods: list[str] | None
    name: str | None
    auth: bool = False


class App:
    """The tollgate application.

    Mutable during setup (route registration, middleware, error handlers).
    Frozen at runtime when ``app.run()`` or ``__call__()`` is first invoked.

    Thread safety:
        The setup phase is single-threaded (decorators at import time).
        The freeze transition uses a Lock + double-check so exactly one
        thread compiles the app, even when several pounce workers call
        ``__call__()`` concurrently on the first request.
    """

    __slots__ = (
        "_error_handlers",
        "_freeze_lock",
        "_frozen",
        "_middleware",
        "_middleware_list",
        "_pending_routes",
        # Compiled state (populated by _freeze)
        "_router",
        "_shutdown_hooks",
        "_startup_hooks",
        "config",
    )

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self._pending_routes: list[_PendingRoute] = []
        self._middleware_list: list[Stage] = []
        self._error_handlers: dict[int, Callable[..., Any]] = {}
        self._startup_hooks: list[Callable[..., Any]] = []
        self._shutdown_hooks: list[Callable[..., Any]] = []
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

        # Compiled state, set during _freeze()
        self._router: Router | None = None
        self._middleware: tuple[Stage, ...] = ()

    # -- Route registration --

    def route(
        self,
        path: str,
        *,
        methods: list[str] | None = None,
        name: str | None = None,
        auth: bool = False,
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Register a route handler via decorator.

        Args:
            path: Exact URL path, e.g. ``"/public"``.
            methods: HTTP methods. Defaults to ``["GET"]``.
            name: Optional display name, shown in the startup banner.
            auth: If True, a ``BearerAuth`` stage runs before the handler.
        """

        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            self._check_not_frozen()
            self._pending_routes.append(_PendingRoute(path, func, methods, name, auth))
            return func

        return decorator

    # -- Error handlers --

    def error(self, code: int) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Register a 404 or 500 handler via decorator.

        A 404 handler takes the request (or nothing). A 500 handler may
        take nothing, the request, or the request and the exception.
        """
        if code not in _ERROR_CODES:
            msg = f"Unsupported error handler code {code}; expected 404 or 500."
            raise ConfigurationError(msg)

        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            self._check_not_frozen()
            self._error_handlers[code] = func
            return func

        return decorator

    # -- Middleware --

    def add_middleware(self, middleware: Stage) -> None:
        """Add a global stage. Global stages run before route stages."""
        self._check_not_frozen()
        self._middleware_list.append(middleware)

    # -- Lifecycle hooks --

    def on_startup(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register an async or sync startup hook via decorator.

        Hooks run in registration order during ASGI lifespan startup,
        before the server begins accepting HTTP requests.
        """
        self._check_not_frozen()
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register an async or sync shutdown hook via decorator."""
        self._check_not_frozen()
        self._shutdown_hooks.append(func)
        return func

    # -- Introspection --

    @property
    def routes(self) -> list[Route]:
        """Compiled routes in registration order. Freezes the app."""
        self._ensure_frozen()
        assert self._router is not None
        return self._router.routes

    @property
    def middleware(self) -> tuple[Stage, ...]:
        """Compiled global stages. Freezes the app."""
        self._ensure_frozen()
        return self._middleware

    @property
    def log_level(self) -> str:
        """Level for ``tollgate.*`` loggers when serving. Debug mode forces ``debug``."""
        return "debug" if self.config.debug else self.config.log_level

    # -- Server --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Start the server (dev or production based on config.debug).

        Compiles the app, writes the startup banner to stderr, and
        starts serving requests.

        - **Development mode** (debug=True): single worker with auto-reload
        - **Production mode** (debug=False): multi-worker
        """
        self._ensure_frozen()

        _host = host or self.config.host
        _port = port or self.config.port

        configure_logging(self.log_level)
        self.print_banner(_host, _port)
        logger.info("Starting server on %s:%d", _host, _port)

        if self.config.debug:
            from tollgate.server.dev import run_dev_server

            run_dev_server(
                self,
                _host,
                _port,
                reload=self.config.debug,
                log_level=self.config.log_level,
            )
        else:
            from tollgate.server.production import run_production_server

            run_production_server(
                self,
                host=_host,
                port=_port,
                workers=self.config.workers,
                log_format=self.config.log_format,
                log_level=self.config.log_level,
            )

    def print_banner(self, host: str, port: int) -> None:
        """Write the endpoint listing to stderr, if enabled in config."""
        if not self.config.banner:
            return
        from tollgate.server.banner import render_banner

        sys.stderr.write(render_banner(self.routes, host, port))

    # -- In-process dispatch --

    async def handle(self, request: Request) -> Response:
        """Run *request* through the pipeline without ASGI.

        Returns exactly one Response; never raises for handler failures.
        """
        self._ensure_frozen()
        assert self._router is not None
        return await dispatch(
            request,
            router=self._router,
            middleware=self._middleware,
            error_handler=self._error_handlers.get(500),
        )

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point.

        Handles lifespan scopes directly, then delegates HTTP scopes to
        the request handler pipeline.
        """
        if scope["type"] == "lifespan":
            await self._handle_lifespan(scope, receive, send)
            return

        self._ensure_frozen()

        assert self._router is not None

        await handle_request(
            scope,
            receive,
            send,
            router=self._router,
            middleware=self._middleware,
            error_handler=self._error_handlers.get(500),
        )

    async def _handle_lifespan(
        self,
        scope: Scope,
        receive: Receive,
        send: Send,
    ) -> None:
        """Run the ASGI lifespan protocol.

        Freezes the app at startup (before first HTTP request), then
        runs registered startup/shutdown hooks and signals completion
        back to the server.
        """
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    self._ensure_frozen()
                    for hook in self._startup_hooks:
                        await invoke(hook)
                    await send({"type": "lifespan.startup.complete"})
                except Exception as exc:
                    logger.exception("Startup failed")
                    await send(
                        {
                            "type": "lifespan.startup.failed",
                            "message": str(exc),
                        }
                    )
                    return

            elif msg_type == "lifespan.shutdown":
                for hook in self._shutdown_hooks:
                    await invoke(hook)
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile the app into its frozen runtime state.

        MUST only be called while holding _freeze_lock.
        """
        router = Router(
            case_sensitive=self.config.case_sensitive,
            strict_slashes=self.config.strict_slashes,
        )

        # One BearerAuth stage shared by every protected route. Built
        # only when needed so an empty token is fine for public-only apps.
        auth: BearerAuth | None = None
        if any(pending.auth for pending in self._pending_routes):
            auth = BearerAuth(AuthConfig(token=self.config.token))

        for pending in self._pending_routes:
            methods = frozenset(m.upper() for m in (pending.methods or ["GET"]))
            terminal = Terminal(pending.handler)
            stages: tuple[Stage, ...] = (
                (auth, terminal) if pending.auth and auth is not None else (terminal,)
            )
            router.add(
                Route(
                    path=pending.path,
                    handler=pending.handler,
                    methods=methods,
                    stages=stages,
                    name=pending.name,
                    auth=pending.auth,
                )
            )

        custom_404 = self._error_handlers.get(404)
        fallback_handler = custom_not_found(custom_404) if custom_404 else not_found
        router.set_fallback(
            Route(
                path="*",
                handler=fallback_handler,
                methods=frozenset(),
                stages=(Terminal(fallback_handler),),
                name="not_found",
            )
        )
        router.compile()

        self._router = router
        self._middleware = tuple(self._middleware_list)
        self._frozen = True

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register routes, middleware, and hooks before calling app.run()."
            )
            raise ConfigurationError(msg)
