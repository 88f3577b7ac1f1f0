"""
Trace file loading: sniffs the format with a streaming JSON parser and
builds the matching TraceParser.
"""

import logging
from typing import Any, BinaryIO, Dict, List, Optional, Set, Tuple

import ijson

from ..core.errors import TraceDecodeError, UnsupportedTraceError
from ..core.types import TraceConfig
from ..decoders.base import TraceDecoder
from ..decoders.protolog_decoder import ProtoLogDecoder
from ..decoders.transitions_decoder import TransitionsDecoder
from .trace_parser import TraceParser

logger = logging.getLogger("trace_tree.parsers.loader")

SCALAR_EVENTS = {'string', 'number', 'boolean'}


def default_decoders() -> List[TraceDecoder]:
    """Fresh decoder instances for every supported format."""
    return [ProtoLogDecoder(), TransitionsDecoder()]


def read_header(stream: BinaryIO) -> Tuple[Set[str], Dict[str, Any]]:
    """
    Scan a JSON document for its top-level keys and scalar fields.
    
    Args:
        stream: Binary stream positioned at the start of the document
        
    Returns:
        Tuple of (top_level_keys, header)
        - top_level_keys: Names of all top-level fields
        - header: Top-level fields holding scalar values
        
    Raises:
        UnsupportedTraceError: If the document is not a JSON object
    """
    keys = set()
    header = {}
    
    for prefix, event, value in ijson.parse(stream):
        if prefix == '':
            if event == 'map_key':
                keys.add(value)
            elif event not in ('start_map', 'end_map'):
                raise UnsupportedTraceError("Trace document must be a JSON object")
        elif prefix in keys and event in SCALAR_EVENTS:
            header[prefix] = value
    
    return keys, header


def load_parser_from_stream(
    stream: BinaryIO,
    config: Optional[TraceConfig] = None,
    decoders: Optional[List[TraceDecoder]] = None
) -> TraceParser:
    """
    Build a parser for a trace held in a seekable binary stream.
    
    Args:
        stream: Seekable binary stream holding the trace document
        config: Parsing configuration
        decoders: Candidate decoders, tried in order; defaults to all supported formats
        
    Returns:
        TraceParser for the first decoder recognising the document
        
    Raises:
        UnsupportedTraceError: If no decoder recognises the document
        TraceDecodeError: If the document is not valid JSON or its sections
            do not have the expected shape
    """
    config = config or TraceConfig()
    decoders = decoders if decoders is not None else default_decoders()
    
    try:
        keys, header = read_header(stream)
        decoder = next((d for d in decoders if d.matches(keys)), None)
        if decoder is None:
            raise UnsupportedTraceError(
                f"Unrecognised trace with top-level fields: {', '.join(sorted(keys)) or '[none]'}"
            )
        
        stream.seek(0)
        loaded = decoder.load(stream, header, config)
    except ijson.JSONError as e:
        raise TraceDecodeError(f"Invalid trace document: {e}") from e
    except (AttributeError, TypeError, ValueError) as e:
        # Structurally wrong sections, or an unreadable viewer config
        raise TraceDecodeError(f"Malformed trace document: {e}") from e
    
    logger.info("Loaded %s trace with %d entries", decoder.trace_type.name, len(loaded.records))
    return TraceParser(decoder, loaded, config)


def load_parser(file_path: str, config: Optional[TraceConfig] = None) -> TraceParser:
    """
    Build a parser for a trace file.
    
    Args:
        file_path: Path to the trace JSON file
        config: Parsing configuration
        
    Returns:
        TraceParser for the file's format
    """
    with open(file_path, 'rb') as f:
        return load_parser_from_stream(f, config)
