"""
RFC 3339 timestamps as integer nanoseconds.

The exporter stamps every message with nanosecond precision, e.g.
``2025-02-14T09:30:11.123456789Z``. The standard library's ``datetime`` keeps
only microseconds, so instants are carried as integer nanoseconds since the
Unix epoch instead. Durations are plain signed nanosecond counts.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone

from .exceptions import TimestampParseError

NANOS_PER_MILLISECOND = 1_000_000
NANOS_PER_SECOND = 1_000_000_000

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_RFC3339 = re.compile(
    r"(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})"
    r"[Tt](?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2})"
    r"(?:\.(?P<fraction>\d+))?"
    r"(?:(?P<utc>[Zz])|(?P<sign>[+-])(?P<off_hour>\d{2}):(?P<off_minute>\d{2}))",
    re.ASCII,
)


def parse_rfc3339(text: str) -> int:
    """
    Parse an RFC 3339 timestamp into nanoseconds since the Unix epoch.

    Fractional seconds may carry any number of digits; digits beyond
    nanosecond precision are truncated. Both ``Z`` and numeric offsets are
    accepted.

    Raises:
        TimestampParseError: If the text is not a valid RFC 3339 timestamp.
    """
    match = _RFC3339.fullmatch(text)
    if match is None:
        raise TimestampParseError(text, "does not match YYYY-MM-DDTHH:MM:SS[.frac](Z|+HH:MM)")

    try:
        wall = datetime(
            int(match["year"]),
            int(match["month"]),
            int(match["day"]),
            int(match["hour"]),
            int(match["minute"]),
            int(match["second"]),
            tzinfo=timezone.utc,
        )
    except ValueError as exc:
        raise TimestampParseError(text, str(exc)) from exc

    offset_seconds = 0
    if match["utc"] is None:
        off_hour, off_minute = int(match["off_hour"]), int(match["off_minute"])
        if off_hour > 23 or off_minute > 59:
            raise TimestampParseError(text, "UTC offset out of range")
        offset_seconds = off_hour * 3600 + off_minute * 60
        if match["sign"] == "-":
            offset_seconds = -offset_seconds

    # Local wall time minus the offset gives UTC.
    seconds = (wall - _EPOCH) // timedelta(seconds=1) - offset_seconds
    fraction = (match["fraction"] or "")[:9].ljust(9, "0")
    return seconds * NANOS_PER_SECOND + int(fraction)


def format_rfc3339(timestamp_ns: int) -> str:
    """Format nanoseconds since the Unix epoch as a UTC RFC 3339 string."""
    seconds, nanos = divmod(timestamp_ns, NANOS_PER_SECOND)
    wall = _EPOCH + timedelta(seconds=seconds)
    return f"{wall:%Y-%m-%dT%H:%M:%S}.{nanos:09d}Z"


def to_milliseconds(duration_ns: int) -> int:
    """Whole milliseconds in a duration, truncated toward zero."""
    millis = abs(duration_ns) // NANOS_PER_MILLISECOND
    return millis if duration_ns >= 0 else -millis
