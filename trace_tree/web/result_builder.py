"""
Result builder for JSON output of parsed traces.
"""

from typing import Any, Dict, List, Optional

from ..core.timestamp import Timestamp
from ..core.types import TimestampType
from ..parsers.trace_parser import TraceParser
from ..tree.property_tree_node import PropertyTreeNode


def serialize_tree(node: PropertyTreeNode) -> Dict[str, Any]:
    """
    Convert a property tree to a structure ready for jsonify().
    
    Integer values are emitted as strings: nanosecond timestamps exceed the
    range JavaScript clients can represent exactly.
    """
    result = node.to_dict()
    for item in _walk_dicts(result):
        value = item['value']
        if isinstance(value, int) and not isinstance(value, bool):
            item['value'] = str(value)
    return result


def _walk_dicts(item: Dict[str, Any]):
    yield item
    for child in item['children']:
        yield from _walk_dicts(child)


def serialize_timestamps(timestamps: Optional[List[Timestamp]]) -> Optional[List[Dict[str, str]]]:
    if timestamps is None:
        return None
    return [
        {'value_ns': str(ts.value_ns), 'formatted': ts.format()}
        for ts in timestamps
    ]


def describe_parser(trace_id: str, filename: str, parser: TraceParser) -> Dict[str, Any]:
    """Summary of a loaded trace."""
    return {
        'trace_id': trace_id,
        'filename': filename,
        'trace_type': parser.get_trace_type().value,
        'length': parser.get_length_entries(),
        'timestamp_types': [
            t.value for t in TimestampType
            if parser.get_timestamps(t) is not None
        ],
    }
