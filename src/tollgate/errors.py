"""Tollgate exception hierarchy.

Shared across Router, App, the chain executor, and middleware so every
module raises and catches the same types.

Client authentication failures and routing misses are not exceptions:
they are ordinary responses produced by a stage. Everything here means
either "the app was set up wrong" or "a stage broke the chain contract".
"""


class TollgateError(Exception):
    """Base for all tollgate-specific errors."""


class ConfigurationError(TollgateError):
    """Raised when app configuration is invalid.

    Typically raised during ``App._freeze()`` at startup, or while
    loading ``AppConfig.from_env()``.
    """


class StageError(TollgateError):
    """A stage broke the chain contract.

    Raised (and immediately converted to a failure) when a stage returns
    something other than ``Continue``, ``Respond`` or ``Fail``, or when
    every stage continued and nothing produced a response.
    """
