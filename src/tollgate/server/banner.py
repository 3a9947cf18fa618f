"""Startup banner — lists the endpoints a running app serves.

Rendered with a kida template and written to stderr before the server
starts accepting connections.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from kida import Environment

from tollgate.routing.route import Route

_RULE = "=" * 40

_BANNER_SOURCE = """
{{ rule }}
Server running at http://{{ host }}:{{ port }}
{{ rule }}

Available endpoints:

{% for endpoint in endpoints %}  {{ endpoint.label }}:
    {{ endpoint.method }} http://{{ host }}:{{ port }}{{ endpoint.path }}

{% end %}{{ rule }}
"""


@dataclass(frozen=True, slots=True)
class _Endpoint:
    label: str
    method: str
    path: str


def _endpoints(routes: Iterable[Route]) -> list[_Endpoint]:
    endpoints: list[_Endpoint] = []
    for route in routes:
        label = route.name or getattr(route.handler, "__name__", route.path)
        if route.auth:
            label = f"{label} (requires Bearer token)"
        for method in sorted(route.methods):
            endpoints.append(_Endpoint(label, method, route.path))
    return endpoints


def render_banner(routes: Iterable[Route], host: str, port: int) -> str:
    """Render the endpoint listing for *routes* served at *host*:*port*.

    ``0.0.0.0`` and ``127.0.0.1`` are shown as ``localhost``.
    """
    display_host = "localhost" if host in {"0.0.0.0", "127.0.0.1"} else host
    template = Environment().from_string(_BANNER_SOURCE)
    return template.render(
        {
            "rule": _RULE,
            "host": display_host,
            "port": port,
            "endpoints": _endpoints(routes),
        }
    )
