"""
Trace Tree - trace entry parsing and property tree computation
"""

__version__ = "1.0.0"

from .core.types import TraceType, TimestampType, TraceConfig
from .core.timestamp import Timestamp
from .parsers import TraceParser, load_parser, load_parser_from_stream
from .tree import PropertySource, PropertyTreeNode, PropertyTreeBuilder

__all__ = [
    "TraceType",
    "TimestampType",
    "TraceConfig",
    "Timestamp",
    "TraceParser",
    "load_parser",
    "load_parser_from_stream",
    "PropertySource",
    "PropertyTreeNode",
    "PropertyTreeBuilder",
]
