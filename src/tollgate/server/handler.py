"""ASGI handler — translates ASGI scope/messages to tollgate types.

The only component that touches raw ASGI for HTTP requests. Converts
the scope to a Request, resolves the route, runs the chain, and sends
exactly one Response back through ASGI send().

Per request::

    Start -> global stages (logging, ...) -> route stages (auth?, handler)
          -> Respond
    any stage may Fail -> error handler -> Respond
"""

from collections.abc import Callable
from typing import Any

from tollgate._internal.asgi import Receive, Scope, Send
from tollgate.http.request import Request
from tollgate.http.response import Response
from tollgate.middleware.chain import run_chain
from tollgate.middleware.protocol import Fail, Respond, Stage
from tollgate.routing.router import Router
from tollgate.server.errors import check_encodable, handle_internal_error
from tollgate.server.sender import send_response


async def dispatch(
    request: Request,
    *,
    router: Router,
    middleware: tuple[Stage, ...],
    error_handler: Callable[..., Any] | None = None,
) -> Response:
    """Run *request* through the pipeline and return its one response.

    Global *middleware* always runs first, in registration order.
    The matched route's stages (or the fallback's) follow. A body that
    cannot be encoded as JSON is a failure like any other.
    """
    match = router.match(request.method, request.path)
    outcome = await run_chain((*middleware, *match.route.stages), request)

    match outcome:
        case Respond(response=response):
            try:
                check_encodable(response)
            except (TypeError, ValueError) as exc:
                return await handle_internal_error(exc, request, error_handler)
            return response
        case Fail(error=error):
            return await handle_internal_error(error, request, error_handler)


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    router: Router,
    middleware: tuple[Stage, ...],
    error_handler: Callable[..., Any] | None = None,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope)
    response = await dispatch(
        request,
        router=router,
        middleware=middleware,
        error_handler=error_handler,
    )
    await send_response(response, send, head=request.method == "HEAD")
