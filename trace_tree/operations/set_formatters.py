"""
Attaches formatters to raw properties by field name.
"""

from typing import Dict, Optional

from ..formatters.registry import ELAPSED_TIMESTAMP_FORMATTER, Formatter
from ..tree.property_tree_node import PropertyTreeNode
from .base import Operation

DEFAULT_SUFFIX_FORMATTERS = {
    'TimeNs': ELAPSED_TIMESTAMP_FORMATTER,
}


class SetFormatters(Operation):
    """
    Sets a formatter on every valued node whose name ends with a configured suffix.
    
    Nodes that already carry a formatter keep it. Provenance is not touched.
    """
    
    def __init__(self, suffix_formatters: Optional[Dict[str, Formatter]] = None):
        self.suffix_formatters = dict(suffix_formatters or DEFAULT_SUFFIX_FORMATTERS)
    
    def apply(self, tree: PropertyTreeNode) -> PropertyTreeNode:
        for node in tree.walk():
            if node.value is None or node.formatter is not None:
                continue
            for suffix, formatter in self.suffix_formatters.items():
                if node.name.endswith(suffix):
                    node.formatter = formatter
                    break
        return tree
