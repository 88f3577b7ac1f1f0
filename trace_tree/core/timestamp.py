"""
Immutable timestamp value bound to a time domain.
"""

from dataclasses import dataclass
from functools import total_ordering

from ..formatters.registry import timestamp_formatter_for
from .types import TimestampType


@total_ordering
@dataclass(frozen=True)
class Timestamp:
    """A nanosecond instant in either the elapsed or the real time domain."""
    type: TimestampType
    value_ns: int
    
    def __post_init__(self):
        if isinstance(self.value_ns, bool) or not isinstance(self.value_ns, int):
            raise TypeError(f"Timestamp value must be an int, got {type(self.value_ns).__name__}")
    
    def _check_same_domain(self, other: 'Timestamp') -> None:
        if self.type is not other.type:
            raise TypeError(
                f"Cannot combine {self.type.name} and {other.type.name} timestamps"
            )
    
    def __lt__(self, other):
        if not isinstance(other, Timestamp):
            return NotImplemented
        self._check_same_domain(other)
        return self.value_ns < other.value_ns
    
    def __sub__(self, other):
        """Difference in nanoseconds between two timestamps of the same domain."""
        if not isinstance(other, Timestamp):
            return NotImplemented
        self._check_same_domain(other)
        return self.value_ns - other.value_ns
    
    def __add__(self, offset_ns):
        if isinstance(offset_ns, bool) or not isinstance(offset_ns, int):
            return NotImplemented
        return Timestamp(self.type, self.value_ns + offset_ns)
    
    def format(self) -> str:
        """Human-readable rendering using the formatter of this timestamp's domain."""
        return timestamp_formatter_for(self.type)(self.value_ns)
    
    def __str__(self):
        return self.format()
