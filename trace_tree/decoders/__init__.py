"""Format-specific decoders composed into TraceParser."""

from .base import LoadedTrace, TraceDecoder, to_int
from .protolog_decoder import ProtoLogDecoder, format_message
from .transitions_decoder import TransitionsDecoder

__all__ = [
    "LoadedTrace",
    "TraceDecoder",
    "to_int",
    "ProtoLogDecoder",
    "format_message",
    "TransitionsDecoder",
]
