"""Value formatters for human-readable output."""

from .time_formatter import format_elapsed_ns, format_real_ns, UNKNOWN
from .registry import (
    Formatter,
    ELAPSED_TIMESTAMP_FORMATTER,
    REAL_TIMESTAMP_FORMATTER,
    DEFAULT_PROPERTY_FORMATTER,
    format_property_value,
    get_formatter,
    offset_real_timestamp_formatter,
    timestamp_formatter_for,
)

__all__ = [
    "format_elapsed_ns",
    "format_real_ns",
    "UNKNOWN",
    "Formatter",
    "ELAPSED_TIMESTAMP_FORMATTER",
    "REAL_TIMESTAMP_FORMATTER",
    "DEFAULT_PROPERTY_FORMATTER",
    "format_property_value",
    "get_formatter",
    "offset_real_timestamp_formatter",
    "timestamp_formatter_for",
]
