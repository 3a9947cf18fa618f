"""Middleware — ordered stages returning Continue, Respond or Fail.

A stage is any callable matching:
    async def stage(request: Request) -> Outcome

Built-in stages:
    RequestLogger -- one access-log line per request, always continues
    BearerAuth -- single-token bearer authentication, 401 on failure
"""

from tollgate.middleware.access import RequestLogger
from tollgate.middleware.auth import AuthConfig, BearerAuth, extract_bearer_token
from tollgate.middleware.chain import Chain, Terminal, run_chain
from tollgate.middleware.protocol import (
    CONTINUE,
    Continue,
    Fail,
    Outcome,
    Respond,
    Stage,
)

__all__ = [
    "CONTINUE",
    "AuthConfig",
    "BearerAuth",
    "Chain",
    "Continue",
    "Fail",
    "Outcome",
    "RequestLogger",
    "Respond",
    "Stage",
    "Terminal",
    "extract_bearer_token",
    "run_chain",
]
