"""Bearer token authentication stage.

Checks the ``Authorization`` header against the single configured
token. On failure the stage short-circuits with a 401 JSON response;
on success it continues to the route handler.

The header is parsed by positional split: split on single spaces and
take the segment right after the first one. Known limitations, kept
as-is:

- the scheme (``Bearer``) is not checked, only that a second segment exists
- no trimming and no case folding (``Bearer  tok`` has an empty credential)
- plain string equality, not a constant-time comparison

Usage::

    auth = BearerAuth(AuthConfig(token="mysecrettoken"))

    @app.route("/protected", auth=True)
    def protected(): ...
"""

from dataclasses import dataclass

from tollgate.errors import ConfigurationError
from tollgate.http.request import Request
from tollgate.http.response import error_response
from tollgate.middleware.protocol import CONTINUE, Continue, Respond
from tollgate.security.audit import emit_security_event

MISSING_HEADER = "Authorization header is missing"
MISSING_TOKEN = "Bearer token is missing"
INVALID_TOKEN = "Invalid or expired token"


@dataclass(frozen=True, slots=True)
class AuthConfig:
    """Bearer authentication configuration.

    Attributes:
        token: The one valid credential.
        header: Request header carrying the credential.
    """

    token: str
    header: str = "authorization"

    def __post_init__(self) -> None:
        if not self.token:
            msg = "AuthConfig requires a non-empty token."
            raise ConfigurationError(msg)


def extract_bearer_token(value: str) -> str | None:
    """Return the credential from an ``Authorization`` header value.

    ``"Bearer abc"`` -> ``"abc"``; ``"Bearer"`` and ``"Bearer "`` -> ``None``;
    ``"Bearer abc def"`` -> ``"abc"``.
    """
    parts = value.split(" ")
    if len(parts) < 2:
        return None
    return parts[1] or None


class BearerAuth:
    """Stage that admits only requests carrying the configured token."""

    __slots__ = ("_config",)

    def __init__(self, config: AuthConfig) -> None:
        self._config = config

    @property
    def config(self) -> AuthConfig:
        return self._config

    async def __call__(self, request: Request) -> Continue | Respond:
        value = request.headers.get(self._config.header)
        if not value:
            emit_security_event("auth.header.missing", request=request)
            return Respond(error_response(401, MISSING_HEADER))

        token = extract_bearer_token(value)
        if token is None:
            emit_security_event("auth.token.missing", request=request)
            return Respond(error_response(401, MISSING_TOKEN))

        if token != self._config.token:
            emit_security_event("auth.token.invalid", request=request)
            return Respond(error_response(401, INVALID_TOKEN))

        emit_security_event("auth.token.accepted", request=request)
        return CONTINUE

    def __repr__(self) -> str:
        return f"BearerAuth(header={self._config.header!r})"
