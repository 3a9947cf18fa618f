"""JSON HTTP response with chainable .with_*() transformation API.

Each transformation returns a new Response. Immutable by convention,
built incrementally by design.
"""

import json as json_module
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any

JSON_CONTENT_TYPE = "application/json; charset=utf-8"


@dataclass(frozen=True, slots=True)
class Response:
    """An HTTP response with a structured (JSON) body.

    Construct with a body mapping, then chain ``.with_*()`` calls to set
    status and headers. Each call returns a new ``Response``::

        Response({"error": "Route not found"}).with_status(404)
    """

    body: Mapping[str, Any] = field(default_factory=dict)
    status: int = 200
    headers: tuple[tuple[str, str], ...] = ()
    content_type: str = JSON_CONTENT_TYPE

    # -- Chainable transformations --

    def with_status(self, status: int) -> Response:
        """Return a new Response with a different status code."""
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> Response:
        """Return a new Response with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    def with_headers(self, headers: Mapping[str, str]) -> Response:
        """Return a new Response with additional headers."""
        new = tuple(headers.items())
        return replace(self, headers=(*self.headers, *new))

    # -- Body helpers --

    @property
    def body_bytes(self) -> bytes:
        """Body serialized as compact UTF-8 JSON."""
        return json_module.dumps(
            dict(self.body), separators=(",", ":"), ensure_ascii=False
        ).encode("utf-8")

    @property
    def text(self) -> str:
        """Body serialized as a JSON string."""
        return self.body_bytes.decode("utf-8")

    def header(self, name: str) -> str | None:
        """Return the first header value matching *name* (case-insensitive)."""
        name_lower = name.lower()
        for key, value in self.headers:
            if key.lower() == name_lower:
                return value
        return None


def error_response(status: int, message: str, **extra: Any) -> Response:
    """Build ``{"error": message, **extra}`` with *status*."""
    return Response(body={"error": message, **extra}, status=status)
