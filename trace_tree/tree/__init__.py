"""Property tree data model."""

from .property_tree_node import PropertySource, PropertyTreeNode
from .builder import NodeSpec, PropertyTreeBuilder

__all__ = ["PropertySource", "PropertyTreeNode", "NodeSpec", "PropertyTreeBuilder"]
