"""
Trace parser: enumerates entries of a loaded trace and materializes their property trees.
"""

import logging
from typing import List, Optional

from ..core.errors import (
    MalformedTreeError,
    MissingTimestampTypeError,
    OutOfRangeError,
    TraceDecodeError,
)
from ..core.timestamp import Timestamp
from ..core.types import TimestampType, TraceConfig, TraceType
from ..decoders.base import LoadedTrace, TraceDecoder
from ..formatters.registry import timestamp_formatter_for
from ..operations.base import OperationPipeline
from ..operations.pipelines import operations_for
from ..tree.builder import PropertyTreeBuilder
from ..tree.property_tree_node import PropertyTreeNode

logger = logging.getLogger("trace_tree.parsers")


class TraceParser:
    """
    Parser for one loaded trace, composed with the decoder of its format.
    
    Records are kept undecoded and are never modified after load. Every call to
    get_entry() decodes its record into a freshly built tree, so returned trees
    share no state with each other or with the parser.
    
    Args:
        decoder: Format-specific decoding strategy
        loaded: Records and elapsed timestamps produced by decoder.load()
        config: Parsing configuration
        pipeline: Operations to run over each entry in either domain; defaults to
            the trace type's pipeline for the requested timestamp domain
    """
    
    def __init__(
        self,
        decoder: TraceDecoder,
        loaded: LoadedTrace,
        config: Optional[TraceConfig] = None,
        pipeline: Optional[OperationPipeline] = None
    ):
        self.decoder = decoder
        self.config = config or TraceConfig()
        self._records = loaded.records
        self._elapsed_ns = loaded.elapsed_ns
        self._real_offset_ns = loaded.real_to_elapsed_offset_ns
        
        if pipeline is not None:
            self._pipelines = {t: pipeline for t in TimestampType}
        elif self.config.apply_operations:
            self._pipelines = {
                t: operations_for(decoder.trace_type, t, self._real_offset_ns)
                for t in TimestampType
            }
        else:
            self._pipelines = {t: OperationPipeline() for t in TimestampType}
    
    def pipeline_for(self, timestamp_type: TimestampType) -> OperationPipeline:
        return self._pipelines[timestamp_type]
    
    def get_trace_type(self) -> TraceType:
        return self.decoder.trace_type
    
    def get_length_entries(self) -> int:
        return len(self._records)
    
    def get_timestamps(self, timestamp_type: TimestampType) -> Optional[List[Timestamp]]:
        """
        One timestamp per entry, in entry order.
        
        Returns:
            List of timestamps, or None if the trace does not carry the domain
        """
        if timestamp_type is TimestampType.ELAPSED:
            return [Timestamp(TimestampType.ELAPSED, ns) for ns in self._elapsed_ns]
        if self._real_offset_ns is None:
            return None
        return [Timestamp(TimestampType.REAL, ns + self._real_offset_ns) for ns in self._elapsed_ns]
    
    def _timestamp_ns(self, index: int, timestamp_type: TimestampType) -> int:
        elapsed_ns = self._elapsed_ns[index]
        if timestamp_type is TimestampType.ELAPSED:
            return elapsed_ns
        if self._real_offset_ns is None:
            raise MissingTimestampTypeError(
                f"{self.get_trace_type().name} trace has no {timestamp_type.name} timestamps"
            )
        return elapsed_ns + self._real_offset_ns
    
    def get_entry(self, index: int, timestamp_type: TimestampType) -> PropertyTreeNode:
        """
        Decode an entry into a property tree.
        
        The tree holds the decoded RAW fields plus a "timestamp" node in the
        requested domain, and has been passed through the operation pipeline.
        
        Args:
            index: Entry index in [0, get_length_entries())
            timestamp_type: Domain of the attached timestamp
            
        Returns:
            Freshly built property tree
            
        Raises:
            OutOfRangeError: If index is outside the trace
            MissingTimestampTypeError: If the trace does not carry timestamp_type
            TraceDecodeError: If the record cannot be decoded or its fields do
                not form a valid tree
        """
        length = self.get_length_entries()
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < length:
            raise OutOfRangeError(index, length)
        
        timestamp_ns = self._timestamp_ns(index, timestamp_type)
        
        try:
            fields = self.decoder.decode_entry(self._records[index])
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise TraceDecodeError(
                f"Failed to decode {self.get_trace_type().name} entry {index}: {e}"
            ) from e
        
        try:
            tree = PropertyTreeBuilder.from_fields(
                self.decoder.root_id, self.decoder.entry_name, fields
            ).build()
            tree.add_child(PropertyTreeNode(
                id=f"{tree.id}.timestamp",
                name='timestamp',
                value=timestamp_ns,
                formatter=timestamp_formatter_for(timestamp_type),
            ))
        except MalformedTreeError as e:
            raise TraceDecodeError(
                f"Malformed {self.get_trace_type().name} entry {index}: {e}"
            ) from e
        
        return self.pipeline_for(timestamp_type).apply(tree)
