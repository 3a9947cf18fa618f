"""Compiled router with exact ``(method, path)`` lookup and an explicit fallback.

Routes are registered during setup and compiled into an immutable
lookup structure when the app freezes. Matching tries every exact
entry first; only when all of them miss does the fallback route
answer. Registration order never decides whether the fallback wins.
"""

from tollgate.errors import ConfigurationError
from tollgate.routing.route import Route, RouteMatch


class Router:
    """Exact-match router.

    Usage::

        router = Router()
        router.add(Route("/public", handler, frozenset({"GET"}), stages))
        router.set_fallback(not_found_route)
        router.compile()
        match = router.match("GET", "/public")

    Args:
        case_sensitive: When False, ``/Public`` matches ``/public``.
        strict_slashes: When False, one trailing slash is ignored
            (``/public/`` matches ``/public``).
    """

    __slots__ = ("_compiled", "_fallback", "_routes", "_table", "case_sensitive", "strict_slashes")

    def __init__(self, *, case_sensitive: bool = False, strict_slashes: bool = False) -> None:
        self.case_sensitive = case_sensitive
        self.strict_slashes = strict_slashes
        self._table: dict[tuple[str, str], Route] = {}
        self._routes: list[Route] = []
        self._fallback: Route | None = None
        self._compiled = False

    def normalize(self, path: str) -> str:
        """Normalize *path* the way lookups see it."""
        if not self.strict_slashes and len(path) > 1 and path.endswith("/"):
            path = path[:-1]
        if not self.case_sensitive:
            path = path.lower()
        return path or "/"

    def add(self, route: Route) -> None:
        """Add a route to the router. Must be called before compile()."""
        self._check_not_compiled()

        key_path = self.normalize(route.path)
        for method in route.methods:
            key = (method, key_path)
            if key in self._table:
                existing = self._table[key]
                msg = (
                    f"Duplicate route {method} {route.path!r}: already registered "
                    f"for {existing.path!r}."
                )
                raise ConfigurationError(msg)
            self._table[key] = route
        self._routes.append(route)

    def set_fallback(self, route: Route) -> None:
        """Set the route that answers when no exact entry matches."""
        self._check_not_compiled()
        self._fallback = route

    @property
    def routes(self) -> list[Route]:
        """All registered routes in registration order (fallback excluded)."""
        return list(self._routes)

    @property
    def fallback(self) -> Route | None:
        return self._fallback

    def compile(self) -> None:
        """Freeze the router. No more routes can be added."""
        if self._fallback is None:
            msg = "Router has no fallback route; call set_fallback() before compile()."
            raise ConfigurationError(msg)
        self._compiled = True

    def match(self, method: str, path: str) -> RouteMatch:
        """Match a request against the table, falling back when nothing matches.

        ``HEAD`` is served by the ``GET`` route for the same path unless
        a ``HEAD`` route was registered explicitly.
        """
        key_path = self.normalize(path)

        route = self._table.get((method, key_path))
        if route is None and method == "HEAD":
            route = self._table.get(("GET", key_path))
        if route is not None:
            return RouteMatch(route=route)

        assert self._fallback is not None, "Router used before compile()"
        return RouteMatch(route=self._fallback, fallback=True)

    def _check_not_compiled(self) -> None:
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise ConfigurationError(msg)
