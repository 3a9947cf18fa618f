"""UTC timestamps in ISO-8601 form with millisecond precision.

``2024-01-01T12:00:00.000Z``, always with a ``Z`` suffix.
Used by the access log line and the health endpoint.
"""

from collections.abc import Callable
from datetime import UTC, datetime

type Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


def iso_timestamp(moment: datetime | None = None) -> str:
    """Format *moment* (default: now) as ISO-8601 UTC with milliseconds."""
    moment = utc_now() if moment is None else moment.astimezone(UTC)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")
