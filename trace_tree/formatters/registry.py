"""
Formatter registry mapping a formatter identity to a value -> string function.
"""

from enum import Enum
from typing import Any, Callable, Dict

from ..core.types import TimestampType
from .time_formatter import format_elapsed_ns, format_real_ns


class Formatter:
    """
    A named, stateless value formatter.
    
    Formatters compare by identity, so two property trees are only equal when
    their nodes share the same registered formatter instance.
    """
    
    def __init__(self, name: str, func: Callable[[Any], str]):
        self.name = name
        self._func = func
    
    def __call__(self, value: Any) -> str:
        return self._func(value)
    
    def __repr__(self):
        return f"Formatter({self.name!r})"


def format_property_value(value: Any) -> str:
    """Default stringification by value kind."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, float):
        return f"{value:g}" if value.is_integer() else repr(value)
    return str(value)


ELAPSED_TIMESTAMP_FORMATTER = Formatter("elapsed-timestamp", format_elapsed_ns)
REAL_TIMESTAMP_FORMATTER = Formatter("real-timestamp", format_real_ns)
DEFAULT_PROPERTY_FORMATTER = Formatter("default", format_property_value)

_REGISTRY: Dict[str, Formatter] = {
    f.name: f for f in (
        ELAPSED_TIMESTAMP_FORMATTER,
        REAL_TIMESTAMP_FORMATTER,
        DEFAULT_PROPERTY_FORMATTER,
    )
}


def offset_real_timestamp_formatter(offset_ns: int) -> Formatter:
    """
    Formatter rendering elapsed-clock nanoseconds as wall-clock time.
    
    The offset is added before formatting, so raw elapsed fields of an entry
    read in the same domain as its real timestamp.
    """
    def format_shifted(value: Any) -> str:
        if isinstance(value, bool) or not isinstance(value, int):
            return format_real_ns(value)
        return format_real_ns(value + offset_ns)
    
    return Formatter(f"real-timestamp{offset_ns:+d}", format_shifted)


def get_formatter(name: str) -> Formatter:
    """
    Look up a registered formatter.
    
    Raises:
        KeyError: If no formatter is registered under name
    """
    return _REGISTRY[name]


def timestamp_formatter_for(timestamp_type: TimestampType) -> Formatter:
    """Formatter rendering timestamps of the given domain."""
    if timestamp_type is TimestampType.REAL:
        return REAL_TIMESTAMP_FORMATTER
    return ELAPSED_TIMESTAMP_FORMATTER
