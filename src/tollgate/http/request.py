"""Immutable HTTP request.

Frozen metadata only. No stage in the pipeline reads a body, so the
request never holds on to the ASGI ``receive`` callable.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from tollgate.http.headers import Headers


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    Created once per request by the ASGI handler and passed unchanged
    through every stage of the chain.
    """

    method: str
    path: str
    headers: Headers = field(default_factory=Headers)
    http_version: str = "1.1"
    client: tuple[str, int] | None = None

    @classmethod
    def from_asgi(cls, scope: Mapping[str, Any]) -> Request:
        """Create a Request from an ASGI HTTP scope.

        ``path`` is the raw, still percent-encoded path when the server
        provides ``raw_path``: ``/n%20pe`` is routed and echoed as sent.
        """
        client = scope.get("client")
        raw_path = scope.get("raw_path")
        return cls(
            method=scope["method"],
            path=raw_path.decode("latin-1") if raw_path else scope["path"],
            headers=Headers(tuple(scope.get("headers", ()))),
            http_version=scope.get("http_version", "1.1"),
            client=tuple(client) if client else None,
        )
