"""Request logging stage.

Logs one line per request — ``[timestamp] METHOD path`` — then always
continues. Registered as the first global stage so the line is written
before routing, auth, or any handler runs.
"""

import logging

from tollgate._internal.clock import Clock, iso_timestamp, utc_now
from tollgate.http.request import Request
from tollgate.middleware.protocol import CONTINUE, Continue

ACCESS_LOGGER = "tollgate.access"


class RequestLogger:
    """Access-log stage.

    Usage::

        app.add_middleware(RequestLogger())

    Args:
        logger: Logger to write to. Defaults to ``tollgate.access``.
        clock: Zero-argument callable returning the current UTC datetime.
    """

    __slots__ = ("_clock", "_logger")

    def __init__(
        self,
        logger: logging.Logger | None = None,
        clock: Clock = utc_now,
    ) -> None:
        self._logger = logger or logging.getLogger(ACCESS_LOGGER)
        self._clock = clock

    async def __call__(self, request: Request) -> Continue:
        self._logger.info(
            "[%s] %s %s", iso_timestamp(self._clock()), request.method, request.path
        )
        return CONTINUE

    def __repr__(self) -> str:
        return f"RequestLogger(logger={self._logger.name!r})"
