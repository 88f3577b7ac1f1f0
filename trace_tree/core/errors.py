"""
Exceptions raised by trace parsing and property tree construction.
"""


class TraceTreeError(Exception):
    """Base class for all trace_tree errors."""


class MalformedTreeError(TraceTreeError):
    """A property tree violates a construction invariant."""


class OutOfRangeError(TraceTreeError, IndexError):
    """An entry index lies outside the loaded trace."""
    
    def __init__(self, index: int, length: int):
        super().__init__(f"Entry index {index} out of range [0, {length})")
        self.index = index
        self.length = length


class TraceDecodeError(TraceTreeError):
    """A trace file or one of its records could not be decoded."""


class UnsupportedTraceError(TraceDecodeError):
    """No decoder recognises the trace file."""


class MissingTimestampTypeError(TraceTreeError, ValueError):
    """The trace does not carry timestamps of the requested domain."""
