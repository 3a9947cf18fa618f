"""Security helpers — audit event channel for authentication telemetry."""

from tollgate.security.audit import (
    SecurityEvent,
    emit_security_event,
    set_security_event_sink,
)

__all__ = [
    "SecurityEvent",
    "emit_security_event",
    "set_security_event_sink",
]
