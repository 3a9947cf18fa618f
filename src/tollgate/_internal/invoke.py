"""Invoke helpers — call sync or async callables uniformly.

Stages, route handlers, error handlers and lifecycle hooks can all be
``def`` or ``async def``. This module keeps the sync/async check in
exactly one place.

Usage::

    from tollgate._internal.invoke import invoke

    result = await invoke(handler, *args, **kwargs)
"""

import inspect
import sys
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's awaitable."""
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result


def positional_arity(handler: Any) -> int:
    """Number of positional arguments *handler* can take.

    Route handlers may be written as ``def health():`` or
    ``def health(request):``; error handlers may also take the
    exception. Callers pass only as many arguments as there is room for.
    ``*args`` counts as unlimited.
    """
    try:
        sig = inspect.signature(handler)
    except (TypeError, ValueError):
        return sys.maxsize

    count = 0
    for param in sig.parameters.values():
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return sys.maxsize
        if param.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            count += 1
    return count
