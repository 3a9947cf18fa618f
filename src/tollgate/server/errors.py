"""Fallback terminals: Not-Found and the internal error handler.

``not_found`` is an ordinary terminal handler installed as the router's
fallback route. ``handle_internal_error`` runs outside the chain,
whenever the chain ends in ``Fail``.
"""

import json as json_module
import logging
from collections.abc import Callable
from typing import Any

from tollgate._internal.invoke import invoke, positional_arity
from tollgate.http.request import Request
from tollgate.http.response import Response, error_response
from tollgate.middleware.chain import to_response

logger = logging.getLogger("tollgate.server")

NOT_FOUND = "Route not found"
INTERNAL_ERROR = "Internal server error"


def not_found(request: Request) -> Response:
    """404 terminal: echo the unmatched path and method."""
    logger.debug("404 %s %s", request.method, request.path)
    return error_response(404, NOT_FOUND, path=request.path, method=request.method)


def custom_not_found(handler: Callable[..., Any]) -> Callable[[Request], Any]:
    """Wrap a user-registered 404 handler as a fallback terminal.

    The handler may take the request or nothing. A 200 result is
    coerced to 404.
    """
    pass_request = positional_arity(handler) >= 1

    async def fallback(request: Request) -> Response:
        logger.debug("404 %s %s", request.method, request.path)
        result = await invoke(handler, request) if pass_request else await invoke(handler)
        response = to_response(result)
        if response.status == 200:
            response = response.with_status(404)
        return response

    fallback.__name__ = getattr(handler, "__name__", "not_found")
    return fallback


def check_encodable(response: Response) -> None:
    """Raise ``TypeError``/``ValueError`` if the body is not valid JSON data.

    The body is only encoded when it is sent, after the error boundary
    has closed, so handlers' results are checked before that point.
    """
    json_module.dumps(dict(response.body))


def internal_error_response() -> Response:
    """The generic 500 body. Never carries error detail."""
    return error_response(500, INTERNAL_ERROR)


async def call_error_handler(
    handler: Callable[..., Any],
    request: Request,
    exc: Exception,
) -> Response:
    """Invoke a user-registered 500 handler.

    Error handlers may accept zero, one (request), or two
    (request, exc) args. Supports both sync and async handlers.
    """
    arity = positional_arity(handler)
    if arity >= 2:
        result = await invoke(handler, request, exc)
    elif arity == 1:
        result = await invoke(handler, request)
    else:
        result = await invoke(handler)
    response = to_response(result)
    check_encodable(response)
    if response.status == 200:
        response = response.with_status(500)
    return response


async def handle_internal_error(
    exc: Exception,
    request: Request,
    handler: Callable[..., Any] | None = None,
) -> Response:
    """Log *exc* and turn it into a 500 response.

    Never raises. A failing custom *handler* is logged and the default
    body is sent instead.
    """
    logger.error("500 %s %s", request.method, request.path, exc_info=exc)

    if handler is None:
        return internal_error_response()

    try:
        return await call_error_handler(handler, request, exc)
    except Exception:
        logger.exception("Error handler failed for %s %s", request.method, request.path)
        return internal_error_response()
