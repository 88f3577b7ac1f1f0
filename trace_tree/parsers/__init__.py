"""Trace parsers and file loading."""

from .trace_parser import TraceParser
from .file_loader import load_parser, load_parser_from_stream, read_header

__all__ = ["TraceParser", "load_parser", "load_parser_from_stream", "read_header"]
