"""Route and RouteMatch frozen dataclasses."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from tollgate.middleware.protocol import Stage


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition.

    ``stages`` is the per-route chain, ending in the terminal stage
    that wraps ``handler``. Global middleware is not included; the
    request handler prepends it at dispatch time.
    """

    path: str
    handler: Callable[..., Any]
    methods: frozenset[str]
    stages: tuple[Stage, ...]
    name: str | None = None
    auth: bool = False


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a route lookup.

    ``fallback`` is True when no exact entry matched and the router
    handed back its fallback route instead.
    """

    route: Route
    fallback: bool = False
