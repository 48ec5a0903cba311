"""Tree subpackage: the labeled node data model.

Re-exports the public API for the tree module:
- Label: identity + name + metadata, compared by identity
- Node: a labeled node holding nothing, a scalar, or child nodes
- PayloadKind: StrEnum of the three payload variants
- TreeBuilder: converts nested Python values into Node trees and back
"""

from aggtree.tree.label import Label
from aggtree.tree.nodes import Node
from aggtree.tree.payload import PayloadKind
from aggtree.tree.builder import TreeBuilder

__all__ = ["Label", "Node", "PayloadKind", "TreeBuilder"]
