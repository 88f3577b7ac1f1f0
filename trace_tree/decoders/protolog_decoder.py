"""
ProtoLog decoding: resolves message hashes against a viewer config and
rebuilds the human-readable log text.
"""

import json
import logging
import re
from typing import Any, BinaryIO, Dict, List, Optional, Set

import ijson

from ..core.types import TraceConfig, TraceType
from .base import LoadedTrace, TraceDecoder, sort_by_elapsed, to_int

logger = logging.getLogger("trace_tree.decoders.protolog")

UNKNOWN_FIELD = "<unknown>"

FORMAT_SPECIFIER = re.compile(r'%(.)', re.DOTALL)

# Java prints negative %o and %x values as unsigned 64-bit two's complement
INT64_MASK = 0xFFFFFFFFFFFFFFFF


def format_message(
    message: str,
    str_params: List[Any],
    sint64_params: List[Any],
    double_params: List[Any],
    boolean_params: List[Any]
) -> str:
    """
    Substitute ProtoLog parameters into a Java-style format string.
    
    %d, %o and %x consume integer parameters, %f, %e and %g consume doubles,
    %s consumes strings and %b booleans. %% is a literal percent sign. A
    specifier with no parameter left renders as "<unknown>"; unrecognised
    specifiers are copied through untouched. Negative %o and %x values
    render as their unsigned 64-bit two's complement.
    
    Args:
        message: Format string from the viewer config
        str_params: String parameters, in order
        sint64_params: Integer parameters, in order
        double_params: Floating point parameters, in order
        boolean_params: Boolean parameters, in order
        
    Returns:
        The formatted log text
    """
    queues = {
        's': iter(str_params),
        'd': iter(sint64_params),
        'f': iter(double_params),
        'b': iter(boolean_params),
    }
    queues['o'] = queues['x'] = queues['d']
    queues['e'] = queues['g'] = queues['f']
    
    def substitute(match):
        spec = match.group(1)
        if spec == '%':
            return '%'
        if spec not in queues:
            return match.group(0)
        param = next(queues[spec], None)
        if param is None:
            return UNKNOWN_FIELD
        if spec in 'dox':
            number = to_int(param)
            if number is None:
                return UNKNOWN_FIELD
            if spec == 'o':
                return format(number & INT64_MASK, 'o')
            if spec == 'x':
                return format(number & INT64_MASK, 'x')
            return str(number)
        if spec in 'feg':
            return ('%' + spec) % float(param)
        if spec == 'b':
            return 'true' if param is True or param == 'true' else 'false'
        return str(param)
    
    return FORMAT_SPECIFIER.sub(substitute, message)


def load_viewer_config(path: str) -> Dict[str, Any]:
    """Read a ProtoLog viewer config JSON file."""
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


class ProtoLogDecoder(TraceDecoder):
    """
    Decoder for JSON-encoded ProtoLog captures.
    
    The capture holds a "log" list of messages identified by "messageHash" and
    stamped with "elapsedRealtimeNanos". Message text, level, group and source
    location come from a viewer config, either embedded under "viewerConfig",
    passed in directly or read from TraceConfig.viewer_config_path.
    
    Args:
        viewer_config: Viewer config mapping; takes precedence over any other source
    """
    
    trace_type = TraceType.PROTO_LOG
    root_id = "LogMessage"
    entry_name = "message"
    
    def __init__(self, viewer_config: Optional[Dict[str, Any]] = None):
        self.viewer_config = viewer_config
        self._messages: Dict[str, Dict[str, Any]] = {}
        self._groups: Dict[str, Dict[str, Any]] = {}
        if viewer_config is not None:
            self._use_viewer_config(viewer_config)
    
    def matches(self, top_level_keys: Set[str]) -> bool:
        return 'log' in top_level_keys
    
    def _use_viewer_config(self, viewer_config: Dict[str, Any]) -> None:
        self._messages = {str(k): v for k, v in viewer_config.get('messages', {}).items()}
        self._groups = dict(viewer_config.get('groups', {}))
    
    def load(self, stream: BinaryIO, header: Dict[str, Any], config: TraceConfig) -> LoadedTrace:
        if self.viewer_config is None:
            embedded = next(ijson.items(stream, 'viewerConfig'), None)
            stream.seek(0)
            if embedded is not None:
                self._use_viewer_config(embedded)
            elif config.viewer_config_path:
                self._use_viewer_config(load_viewer_config(config.viewer_config_path))
            else:
                logger.warning("No ProtoLog viewer config available; messages will not be resolved")
        
        offset_ns = config.real_to_elapsed_offset_ns
        if offset_ns is None:
            offset_ms = to_int(header.get('realTimeToElapsedTimeOffsetMillis'))
            if offset_ms is not None:
                offset_ns = offset_ms * 1_000_000
        
        pairs = []
        skipped = 0
        for message in ijson.items(stream, 'log.item'):
            if not isinstance(message, dict):
                skipped += 1
                continue
            elapsed_ns = to_int(message.get('elapsedRealtimeNanos'))
            if elapsed_ns is None:
                skipped += 1
                continue
            pairs.append((elapsed_ns, message))
        if skipped:
            logger.warning("Skipped %d malformed ProtoLog messages or messages without elapsedRealtimeNanos", skipped)
        
        records, elapsed = sort_by_elapsed(pairs)
        logger.info("Loaded %d ProtoLog messages", len(records))
        return LoadedTrace(records, elapsed, offset_ns)
    
    def decode_entry(self, record: Dict[str, Any]) -> Dict[str, Any]:
        message_hash = str(record.get('messageHash'))
        str_params = list(record.get('strParams', []))
        sint64_params = list(record.get('sint64Params', []))
        double_params = list(record.get('doubleParams', []))
        boolean_params = list(record.get('booleanParams', []))
        
        config = self._messages.get(message_hash)
        if config is None:
            params = str_params + sint64_params + double_params + boolean_params
            return {
                'text': f"Unknown message hash {message_hash} with params: "
                        + ', '.join(str(p) for p in params),
                'tag': UNKNOWN_FIELD,
                'level': UNKNOWN_FIELD,
                'at': UNKNOWN_FIELD,
            }
        
        group = self._groups.get(config.get('group'), {})
        return {
            'text': format_message(
                config.get('message', ''),
                str_params,
                sint64_params,
                double_params,
                boolean_params
            ),
            'tag': group.get('tag', UNKNOWN_FIELD),
            'level': config.get('level', UNKNOWN_FIELD),
            'at': config.get('at', UNKNOWN_FIELD),
        }
