"""
Duration derived from a pair of send/finish timestamps.
"""

import logging

from ..formatters.registry import ELAPSED_TIMESTAMP_FORMATTER
from ..tree.property_tree_node import PropertySource, PropertyTreeNode
from .base import FieldPath, Operation, int_value, resolve_path

logger = logging.getLogger("trace_tree.operations.add_duration")


class AddDuration(Operation):
    """
    Adds a root-level CALCULATED duration computed as finish - send.
    
    The two timestamps are read from sibling leaves under parent_path. When
    either is missing, or the root already has a node called name, the tree is
    returned unchanged; a RAW node of that name is logged as a warning.
    A finish time earlier than the send time is logged as a data-integrity
    warning and no duration is added.
    
    Args:
        parent_path: Child names leading from the root to the parent of both leaves
        send_field: Name of the send time leaf (nanoseconds)
        finish_field: Name of the finish time leaf (nanoseconds)
        name: Name of the added node
    """
    
    def __init__(
        self,
        parent_path: FieldPath = ('wmData',),
        send_field: str = 'sendTimeNs',
        finish_field: str = 'finishTimeNs',
        name: str = 'duration'
    ):
        self.parent_path = tuple(parent_path)
        self.send_field = send_field
        self.finish_field = finish_field
        self.name = name
    
    def apply(self, tree: PropertyTreeNode) -> PropertyTreeNode:
        existing = tree.get_child_by_name(self.name)
        if existing is not None:
            if existing.source is not PropertySource.CALCULATED:
                logger.warning(
                    "%s already has a raw %r property; duration not calculated", tree.id, self.name
                )
            return tree
        
        parent = resolve_path(tree, self.parent_path)
        if parent is None:
            return tree
        
        send_ns = int_value(parent.get_child_by_name(self.send_field))
        finish_ns = int_value(parent.get_child_by_name(self.finish_field))
        if send_ns is None or finish_ns is None:
            return tree
        
        duration_ns = finish_ns - send_ns
        if duration_ns < 0:
            logger.warning(
                "Negative duration in %s: %s=%d precedes %s=%d; duration omitted",
                tree.id, self.finish_field, finish_ns, self.send_field, send_ns
            )
            return tree
        
        # An absent placeholder of the same name would block add_child
        tree.remove_child(self.name)
        tree.add_child(PropertyTreeNode(
            id=f"{tree.id}.{self.name}",
            name=self.name,
            value=duration_ns,
            source=PropertySource.CALCULATED,
            formatter=ELAPSED_TIMESTAMP_FORMATTER,
        ))
        return tree
