"""
Operation contract and the pipeline that applies operations in order.
"""

import logging
from abc import ABC, abstractmethod
from typing import Iterable, Optional, Tuple

from ..tree.property_tree_node import PropertyTreeNode

logger = logging.getLogger("trace_tree.operations")

FieldPath = Tuple[str, ...]


def resolve_path(tree: PropertyTreeNode, path: FieldPath) -> Optional[PropertyTreeNode]:
    """
    Follow a sequence of child names from tree.
    
    Args:
        tree: Node to start from
        path: Child names to follow, outermost first; an empty path resolves to tree
        
    Returns:
        The node at the end of the path, or None if any step is absent
    """
    node = tree
    for name in path:
        node = node.get_child_by_name(name)
        if node is None:
            return None
    return node


def int_value(node: Optional[PropertyTreeNode]) -> Optional[int]:
    """Integer value of node, or None when the node is absent or not integral."""
    if node is None:
        return None
    value = node.value
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


class Operation(ABC):
    """
    A transformation deriving properties over a property tree.
    
    Implementations must not raise for a structurally valid tree, however many
    of the fields they read are missing, and applying an operation to its own
    output must not change it further.
    """
    
    @abstractmethod
    def apply(self, tree: PropertyTreeNode) -> PropertyTreeNode:
        """Apply the operation and return the resulting tree."""


class OperationPipeline:
    """Ordered sequence of operations configured for one trace type."""
    
    def __init__(self, operations: Iterable[Operation] = ()):
        self.operations = list(operations)
    
    def apply(self, tree: PropertyTreeNode) -> PropertyTreeNode:
        for operation in self.operations:
            tree = operation.apply(tree)
        logger.debug("Applied %d operations to %s", len(self.operations), tree.id)
        return tree
    
    def __len__(self):
        return len(self.operations)
