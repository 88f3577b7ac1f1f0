"""JSON serialization for the web API."""

from .result_builder import serialize_tree, serialize_timestamps, describe_parser

__all__ = ["serialize_tree", "serialize_timestamps", "describe_parser"]
