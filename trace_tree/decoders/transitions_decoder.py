"""
Shell and window manager transitions decoding.
"""

import logging
from typing import Any, BinaryIO, Dict, Optional, Set

import ijson

from ..core.types import TraceConfig, TraceType
from .base import LoadedTrace, TraceDecoder, sort_by_elapsed, to_int

logger = logging.getLogger("trace_tree.decoders.transitions")

# First present field wins when stamping a transition.
TIMESTAMP_FIELDS = (
    ('shellData', 'dispatchTimeNs'),
    ('wmData', 'sendTimeNs'),
    ('wmData', 'createTimeNs'),
)

INT64_SUFFIXES = ('Ns', 'Id')

# Top-level names owned by the parser and the transition operations.
RESERVED_FIELDS = {
    'timestamp': 'rawTimestamp',
    'duration': 'rawDuration',
    'status': 'rawStatus',
}


def _entry_timestamp(transition: Dict[str, Any]) -> Optional[int]:
    for section, field in TIMESTAMP_FIELDS:
        data = transition.get(section)
        if not isinstance(data, dict):
            continue
        value = to_int(data.get(field))
        if value is not None:
            return value
    return None


def _normalize(value: Any, key: str = '') -> Any:
    """Deep copy of a record, turning int64 strings of *Ns / *Id fields into ints."""
    if isinstance(value, dict):
        return {k: _normalize(v, k) for k, v in value.items()}
    if isinstance(value, list):
        return [_normalize(v, key) for v in value]
    if isinstance(value, str) and key.endswith(INT64_SUFFIXES):
        number = to_int(value)
        return value if number is None else number
    return value


class TransitionsDecoder(TraceDecoder):
    """
    Decoder for JSON-encoded transitions captures ("transitions" list).
    
    Top-level "timestamp", "duration" and "status" fields of a record are
    decoded as "rawTimestamp", "rawDuration" and "rawStatus" so they cannot
    collide with the nodes the parser and the operations add.
    """
    
    trace_type = TraceType.TRANSITION
    root_id = "TransitionsTraceEntry"
    entry_name = "transition"
    
    def matches(self, top_level_keys: Set[str]) -> bool:
        return 'transitions' in top_level_keys
    
    def load(self, stream: BinaryIO, header: Dict[str, Any], config: TraceConfig) -> LoadedTrace:
        offset_ns = config.real_to_elapsed_offset_ns
        if offset_ns is None:
            offset_ns = to_int(header.get('realToElapsedTimeOffsetNanos'))
        
        pairs = []
        for transition in ijson.items(stream, 'transitions.item'):
            if not isinstance(transition, dict):
                logger.warning("Skipping transition that is not an object: %r", transition)
                continue
            elapsed_ns = _entry_timestamp(transition)
            if elapsed_ns is None:
                logger.warning("Skipping transition %s without any timestamp", transition.get('id'))
                continue
            pairs.append((elapsed_ns, transition))
        
        records, elapsed = sort_by_elapsed(pairs)
        logger.info("Loaded %d transitions", len(records))
        return LoadedTrace(records, elapsed, offset_ns)
    
    def decode_entry(self, record: Dict[str, Any]) -> Dict[str, Any]:
        fields = _normalize(record)
        for name, renamed in RESERVED_FIELDS.items():
            if name in fields:
                fields[renamed] = fields.pop(name)
        return fields
