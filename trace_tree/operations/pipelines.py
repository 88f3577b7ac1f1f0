"""
Operation pipelines wired per trace type.
"""

from typing import Optional

from ..core.types import TimestampType, TraceType
from ..formatters.registry import offset_real_timestamp_formatter
from .add_duration import AddDuration
from .add_status import AddStatus
from .base import OperationPipeline
from .set_formatters import DEFAULT_SUFFIX_FORMATTERS, SetFormatters


def operations_for(
    trace_type: TraceType,
    timestamp_type: TimestampType = TimestampType.ELAPSED,
    real_to_elapsed_offset_ns: Optional[int] = None
) -> OperationPipeline:
    """
    Build a fresh pipeline for a trace type.
    
    Args:
        trace_type: Trace format the pipeline will run on
        timestamp_type: Domain the entries are requested in
        real_to_elapsed_offset_ns: Offset shifting elapsed times to wall-clock time;
            *TimeNs fields are rendered as real time when it is given for a REAL request
        
    Returns:
        OperationPipeline; empty for formats without derived properties
    """
    if trace_type is not TraceType.TRANSITION:
        return OperationPipeline()
    
    suffix_formatters = DEFAULT_SUFFIX_FORMATTERS
    if timestamp_type is TimestampType.REAL and real_to_elapsed_offset_ns is not None:
        suffix_formatters = {'TimeNs': offset_real_timestamp_formatter(real_to_elapsed_offset_ns)}
    
    return OperationPipeline([
        SetFormatters(suffix_formatters),
        AddDuration(parent_path=('wmData',)),
        AddStatus(),
    ])
