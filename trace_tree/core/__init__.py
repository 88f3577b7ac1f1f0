"""Core types, timestamps and errors."""

from .types import TraceType, TimestampType, TraceConfig
from .timestamp import Timestamp
from .errors import (
    TraceTreeError,
    MalformedTreeError,
    OutOfRangeError,
    TraceDecodeError,
    UnsupportedTraceError,
    MissingTimestampTypeError,
)

__all__ = [
    "TraceType",
    "TimestampType",
    "TraceConfig",
    "Timestamp",
    "TraceTreeError",
    "MalformedTreeError",
    "OutOfRangeError",
    "TraceDecodeError",
    "UnsupportedTraceError",
    "MissingTimestampTypeError",
]
