"""
Decoder contract: the format-specific strategy a TraceParser is composed with.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, BinaryIO, Dict, List, Optional, Set, Tuple

from ..core.types import TraceConfig, TraceType


@dataclass(frozen=True)
class LoadedTrace:
    """Undecoded records of a trace, ordered by elapsed time."""
    records: Tuple[Dict[str, Any], ...]
    elapsed_ns: Tuple[int, ...]
    real_to_elapsed_offset_ns: Optional[int] = None


class TraceDecoder(ABC):
    """
    Turns one trace format into records, timestamps and decoded entry fields.
    
    load() only extracts what is needed to enumerate entries; the expensive
    per-entry work happens in decode_entry(), called when an entry is requested.
    """
    
    trace_type: TraceType
    root_id: str
    entry_name: str
    
    @abstractmethod
    def matches(self, top_level_keys: Set[str]) -> bool:
        """True if a document with these top-level keys is in this decoder's format."""
    
    @abstractmethod
    def load(self, stream: BinaryIO, header: Dict[str, Any], config: TraceConfig) -> LoadedTrace:
        """
        Read every record of the document.
        
        Args:
            stream: Seekable binary stream positioned at the start of the document
            header: Top-level scalar fields of the document
            config: Parsing configuration
        """
    
    @abstractmethod
    def decode_entry(self, record: Dict[str, Any]) -> Dict[str, Any]:
        """Decode one record into a fresh mapping of entry fields."""


def to_int(value: Any) -> Optional[int]:
    """
    Convert an int64 field to int.
    
    The protobuf JSON mapping writes 64-bit integers as strings, so both
    forms are accepted. Anything else yields None.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, Decimal) and value == value.to_integral_value():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def sort_by_elapsed(pairs: List[Tuple[int, Dict[str, Any]]]) -> Tuple[Tuple[Dict[str, Any], ...], Tuple[int, ...]]:
    """Stable sort of (elapsed_ns, record) pairs; returns (records, timestamps)."""
    pairs = sorted(pairs, key=lambda pair: pair[0])
    return tuple(record for _, record in pairs), tuple(ns for ns, _ in pairs)
