"""Reusable type definitions shared by the chain clock, exporter and report."""

from .base import CamelModel, StrictBaseModel
from .exceptions import TimestampParseError
from .timestamp import (
    NANOS_PER_MILLISECOND,
    NANOS_PER_SECOND,
    format_rfc3339,
    parse_rfc3339,
    to_milliseconds,
)
from .uint import MAX_INT64, BaseUint, Uint64

__all__ = [
    # Core types
    "BaseUint",
    "Uint64",
    "MAX_INT64",
    "CamelModel",
    "StrictBaseModel",
    # Time
    "NANOS_PER_MILLISECOND",
    "NANOS_PER_SECOND",
    "format_rfc3339",
    "parse_rfc3339",
    "to_milliseconds",
    # Exceptions
    "TimestampParseError",
]
