"""
Validated construction of property trees.
"""

from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence, TypedDict

from ..core.errors import MalformedTreeError
from ..formatters.registry import Formatter
from .property_tree_node import PropertySource, PropertyTreeNode


class NodeSpec(TypedDict, total=False):
    """Description of one node to build."""
    name: str
    value: Any
    source: PropertySource
    formatter: Optional[Formatter]
    children: List['NodeSpec']
    is_root: bool


class PropertyTreeBuilder:
    """
    Builds a property tree from nested node specifications.
    
    All invariants are checked once in build(): the root carries a root id and
    a name, child names are unique within a parent and no nested node claims
    to be a root. Violations raise MalformedTreeError.
    
    Args:
        root_id: Identifies the trace entry kind (e.g. "TransitionsTraceEntry")
        name: Name of the root node
        value: Optional value of the root node
        children: Child node specifications, in order
    """
    
    def __init__(
        self,
        root_id: str,
        name: str,
        value: Any = None,
        children: Sequence[NodeSpec] = ()
    ):
        self.root_id = root_id
        self.name = name
        self.value = value
        self.children = list(children)
    
    def build(self) -> PropertyTreeNode:
        if not self.root_id or not self.name:
            raise MalformedTreeError("Root node requires both a root id and a name")
        
        root = PropertyTreeNode(
            id=f"{self.root_id} {self.name}",
            name=self.name,
            value=self.value,
            is_root=True,
            root_id=self.root_id,
        )
        for spec in self.children:
            root.add_child(self._build_node(spec, root.id))
        return root
    
    def _build_node(self, spec: NodeSpec, parent_id: str) -> PropertyTreeNode:
        name = spec.get('name')
        if name is None or name == '':
            raise MalformedTreeError(f"Child of '{parent_id}' has no name")
        if spec.get('is_root'):
            raise MalformedTreeError(f"Node '{name}' under '{parent_id}' is flagged as a second root")
        
        node = PropertyTreeNode(
            id=f"{parent_id}.{name}",
            name=str(name),
            value=spec.get('value'),
            source=spec.get('source', PropertySource.RAW),
            formatter=spec.get('formatter'),
        )
        for child_spec in spec.get('children', []):
            node.add_child(self._build_node(child_spec, node.id))
        return node
    
    @classmethod
    def from_fields(cls, root_id: str, name: str, fields: Dict[str, Any]) -> 'PropertyTreeBuilder':
        """
        Create a builder for decoded record fields.
        
        Nested dicts become child nodes, lists become children named by index
        and None fields are dropped. Every node is RAW.
        
        Args:
            root_id: Identifies the trace entry kind
            name: Name of the root node
            fields: Decoded field mapping
            
        Returns:
            PropertyTreeBuilder ready to build()
        """
        return cls(root_id, name, children=_specs_from_mapping(fields))


def _raw_scalar(value: Any) -> Any:
    if isinstance(value, Decimal):
        return float(value)
    return value


def _spec_from_value(name: str, value: Any) -> Optional[NodeSpec]:
    if value is None:
        return None
    if isinstance(value, dict):
        return {'name': name, 'children': _specs_from_mapping(value)}
    if isinstance(value, (list, tuple)):
        children = [_spec_from_value(str(i), item) for i, item in enumerate(value)]
        return {'name': name, 'children': [c for c in children if c is not None]}
    return {'name': name, 'value': _raw_scalar(value), 'source': PropertySource.RAW}


def _specs_from_mapping(fields: Dict[str, Any]) -> List[NodeSpec]:
    specs = []
    for key, value in fields.items():
        spec = _spec_from_value(str(key), value)
        if spec is not None:
            specs.append(spec)
    return specs
