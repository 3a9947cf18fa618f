"""Stage protocol and the Outcome sum type.

A stage is any callable matching::

    async def my_stage(request: Request) -> Outcome: ...

Plain ``def`` works too. No base class required. The chain executor
checks the returned value, not the lineage.

Instead of calling a ``next()`` continuation, a stage *returns* what it
wants to happen:

- ``Continue()`` -- hand the request to the next stage
- ``Respond(response)`` -- stop here and send *response*
- ``Fail(error)`` -- stop here and divert to the error handler

Raising an exception is the same as returning ``Fail(exc)``.
"""

from collections.abc import Awaitable
from dataclasses import dataclass
from typing import Protocol

from tollgate.http.request import Request
from tollgate.http.response import Response


@dataclass(frozen=True, slots=True)
class Continue:
    """Pass control to the next stage."""


@dataclass(frozen=True, slots=True)
class Respond:
    """Short-circuit the chain with a response."""

    response: Response


@dataclass(frozen=True, slots=True)
class Fail:
    """Abort the chain; the error handler produces the response."""

    error: Exception


type Outcome = Continue | Respond | Fail

CONTINUE = Continue()


class Stage(Protocol):
    """Protocol for tollgate stages.

    Accepts both functions and callable objects::

        # Function stage
        async def require_json(request: Request) -> Outcome:
            if request.headers.get("accept") == "application/json":
                return CONTINUE
            return Respond(Response({"error": "Not acceptable"}, status=406))

        # Class stage
        class Maintenance:
            def __init__(self, enabled: bool) -> None:
                self.enabled = enabled

            async def __call__(self, request: Request) -> Outcome:
                ...
    """

    def __call__(self, request: Request) -> Outcome | Awaitable[Outcome]: ...
