"""Routing — exact ``(method, path)`` route table with an explicit fallback.

Routes are registered during setup and compiled into an immutable
lookup structure when the app freezes.
"""

from tollgate.routing.route import Route, RouteMatch
from tollgate.routing.router import Router

__all__ = ["Route", "RouteMatch", "Router"]
