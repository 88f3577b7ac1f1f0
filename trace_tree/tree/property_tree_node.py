"""
Property tree node: one named value of a decoded trace entry.
"""

from enum import Enum
from typing import Any, Dict, Iterator, List, Optional

from ..core.errors import MalformedTreeError
from ..formatters.registry import Formatter, format_property_value


class PropertySource(Enum):
    """Provenance of a property."""
    RAW = "raw"
    CALCULATED = "calculated"


class PropertyTreeNode:
    """
    A named node holding an optional scalar value and ordered, uniquely named children.
    
    Nodes are normally created through PropertyTreeBuilder, which validates the
    tree once. Children are kept in a dict so lookup by name is O(1) while
    preserving insertion order.
    """
    
    def __init__(
        self,
        id: str,
        name: str,
        value: Any = None,
        source: PropertySource = PropertySource.RAW,
        formatter: Optional[Formatter] = None,
        is_root: bool = False,
        root_id: Optional[str] = None
    ):
        self.id = id
        self.name = name
        self.value = value
        self.source = source
        self.formatter = formatter
        self.is_root = is_root
        self.root_id = root_id
        self._children: Dict[str, 'PropertyTreeNode'] = {}
    
    def add_child(self, child: 'PropertyTreeNode') -> 'PropertyTreeNode':
        """
        Append a child node.
        
        Raises:
            MalformedTreeError: If a child with the same name exists or child is a root
        """
        if child.is_root:
            raise MalformedTreeError(f"Root node '{child.name}' cannot be nested under '{self.id}'")
        if child.name in self._children:
            raise MalformedTreeError(f"Duplicate child '{child.name}' under '{self.id}'")
        self._children[child.name] = child
        return child
    
    def remove_child(self, name: str) -> Optional['PropertyTreeNode']:
        return self._children.pop(name, None)
    
    def get_child_by_name(self, name: str) -> Optional['PropertyTreeNode']:
        """Exact-match lookup of a direct child; absent children yield None."""
        child = self._children.get(name)
        if child is None or child.is_absent():
            return None
        return child
    
    def get_all_children(self) -> List['PropertyTreeNode']:
        return list(self._children.values())
    
    def has_children(self) -> bool:
        return bool(self._children)
    
    def is_absent(self) -> bool:
        """A node carrying neither a value nor children counts as absent."""
        return self.value is None and not self._children
    
    def formatted_value(self) -> str:
        if self.value is None:
            return ""
        if self.formatter is not None:
            return self.formatter(self.value)
        return format_property_value(self.value)
    
    def walk(self) -> Iterator['PropertyTreeNode']:
        """Depth-first, pre-order traversal starting at this node."""
        yield self
        for child in self._children.values():
            yield from child.walk()
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result = {
            'id': self.id,
            'name': self.name,
            'value': self.value,
            'formatted_value': self.formatted_value(),
            'source': self.source.value,
            'children': [child.to_dict() for child in self._children.values()],
        }
        if self.is_root:
            result['root_id'] = self.root_id
        return result
    
    def __eq__(self, other):
        if not isinstance(other, PropertyTreeNode):
            return NotImplemented
        return (
            self.id == other.id
            and self.name == other.name
            and type(self.value) is type(other.value)
            and self.value == other.value
            and self.source is other.source
            and self.formatter is other.formatter
            and self.is_root == other.is_root
            and self.root_id == other.root_id
            and list(self._children.values()) == list(other._children.values())
        )
    
    __hash__ = None
    
    def __repr__(self):
        return f"PropertyTreeNode({self.id!r}, value={self.value!r}, source={self.source.name})"
