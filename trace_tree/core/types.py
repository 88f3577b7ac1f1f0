"""
Type definitions shared by parsers, operations and formatters.
"""

from enum import Enum
from typing import Optional


class TraceType(Enum):
    """Trace formats understood by the parsers."""
    PROTO_LOG = "protolog"
    TRANSITION = "transitions"


class TimestampType(Enum):
    """Time domains a trace entry can be addressed in."""
    ELAPSED = "elapsed"
    REAL = "real"


class TraceConfig:
    """Configuration for trace parsing."""
    
    def __init__(
        self,
        viewer_config_path: Optional[str] = None,
        apply_operations: bool = True,
        real_to_elapsed_offset_ns: Optional[int] = None
    ):
        """
        Initialize trace parsing configuration.
        
        Args:
            viewer_config_path: Path to a ProtoLog viewer config JSON file used to
                               resolve message hashes. Ignored for other formats and
                               when the capture embeds its own viewer config.
            
            apply_operations: If True, runs the trace type's operation pipeline over
                             every returned entry, adding calculated properties.
                             Default: True
            
            real_to_elapsed_offset_ns: Offset added to elapsed timestamps to obtain
                                       wall-clock timestamps. Overrides the offset
                                       recorded in the capture; lets a capture
                                       without a wall-clock anchor expose REAL time.
                                       Default: None (use the capture's own offset)
        """
        self.viewer_config_path = viewer_config_path
        self.apply_operations = apply_operations
        self.real_to_elapsed_offset_ns = real_to_elapsed_offset_ns
