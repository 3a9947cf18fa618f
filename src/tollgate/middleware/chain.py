"""Chain executor — runs stages in order until one stops the chain.

The executor is a plain loop. Each stage returns an ``Outcome``; the
loop advances on ``Continue`` and stops on ``Respond`` or ``Fail``.
Exceptions raised by a stage are captured as ``Fail`` so the caller
always gets exactly one terminal outcome back.
"""

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from tollgate._internal.invoke import invoke, positional_arity
from tollgate.errors import StageError
from tollgate.http.request import Request
from tollgate.http.response import Response
from tollgate.middleware.protocol import Continue, Fail, Outcome, Respond, Stage

logger = logging.getLogger("tollgate.server")


def stage_name(stage: object) -> str:
    """Human-readable name for a stage (function name or class name)."""
    name = getattr(stage, "__name__", None)
    if name is None:
        name = type(stage).__name__
    return name


async def run_chain(stages: Iterable[Stage], request: Request) -> Respond | Fail:
    """Run *stages* in order and return the outcome that ended the chain.

    Never raises for stage failures. If every stage continues, the
    result is a ``Fail`` carrying a ``StageError``: a well-formed chain
    always ends in a terminal stage.
    """
    for stage in stages:
        try:
            outcome = await invoke(stage, request)
        except Exception as exc:
            return Fail(exc)

        match outcome:
            case Continue():
                continue
            case Respond() | Fail():
                logger.debug(
                    "%s %s stopped at %s", request.method, request.path, stage_name(stage)
                )
                return outcome
            case _:
                msg = (
                    f"Stage {stage_name(stage)!r} returned {type(outcome).__name__}; "
                    "expected Continue, Respond or Fail."
                )
                return Fail(StageError(msg))

    msg = f"No stage produced a response for {request.method} {request.path}"
    return Fail(StageError(msg))


def to_response(value: Any) -> Response:
    """Convert a terminal handler's return value to a Response.

    Dispatch order:

    1. ``Response``          -> pass through
    2. ``Mapping``           -> 200, JSON body
    3. ``(Mapping, int)``    -> JSON body, override status
    """
    match value:
        case Response():
            return value
        case Mapping():
            return Response(body=value)
        case (Mapping() as body, int() as status):
            return Response(body=body, status=status)
        case _:
            msg = (
                f"Cannot convert {type(value).__name__} to a response. "
                "Return a Response, a mapping, or (mapping, status)."
            )
            raise TypeError(msg)


class Terminal:
    """Adapts a route handler into the last stage of a chain.

    The handler is called with the request (if its signature accepts
    one) and its return value becomes the ``Respond`` outcome.
    """

    def __init__(self, handler: Callable[..., Any]) -> None:
        self.handler = handler
        self.__name__ = stage_name(handler)
        self._pass_request = positional_arity(handler) >= 1

    async def __call__(self, request: Request) -> Outcome:
        if self._pass_request:
            result = await invoke(self.handler, request)
        else:
            result = await invoke(self.handler)
        return Respond(to_response(result))

    def __repr__(self) -> str:
        return f"Terminal({self.__name__})"


@dataclass(frozen=True, slots=True)
class Chain:
    """An immutable, ordered sequence of stages.

    Usage::

        chain = Chain((RequestLogger(), BearerAuth(config), Terminal(handler)))
        outcome = await chain.run(request)
    """

    stages: tuple[Stage, ...] = ()

    def then(self, *stages: Stage) -> Chain:
        """Return a new Chain with *stages* appended."""
        return Chain((*self.stages, *stages))

    async def run(self, request: Request) -> Respond | Fail:
        """Run the chain for *request*."""
        return await run_chain(self.stages, request)

    def __len__(self) -> int:
        return len(self.stages)
