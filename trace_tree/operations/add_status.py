"""
Transition status derived from the transition's lifecycle timestamps.
"""

import logging

from ..tree.property_tree_node import PropertySource, PropertyTreeNode
from .base import Operation, int_value, resolve_path

ABORTED = "ABORTED"
MERGED = "MERGED"
PLAYED = "PLAYED"

logger = logging.getLogger("trace_tree.operations.add_status")

# Checked in order; the first present timestamp decides the status.
STATUS_RULES = (
    (ABORTED, ('wmData', 'abortTimeNs')),
    (MERGED, ('shellData', 'mergeTimeNs')),
    (PLAYED, ('wmData', 'finishTimeNs')),
    (PLAYED, ('shellData', 'dispatchTimeNs')),
)


class AddStatus(Operation):
    """Adds a root-level CALCULATED status: ABORTED, MERGED or PLAYED."""
    
    def __init__(self, name: str = 'status'):
        self.name = name
    
    def apply(self, tree: PropertyTreeNode) -> PropertyTreeNode:
        existing = tree.get_child_by_name(self.name)
        if existing is not None:
            if existing.source is not PropertySource.CALCULATED:
                logger.warning(
                    "%s already has a raw %r property; status not calculated", tree.id, self.name
                )
            return tree
        
        for status, path in STATUS_RULES:
            if int_value(resolve_path(tree, path)) is not None:
                # An absent placeholder of the same name would block add_child
                tree.remove_child(self.name)
                tree.add_child(PropertyTreeNode(
                    id=f"{tree.id}.{self.name}",
                    name=self.name,
                    value=status,
                    source=PropertySource.CALCULATED,
                ))
                break
        return tree
