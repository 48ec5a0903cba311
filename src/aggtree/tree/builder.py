"""TreeBuilder: converts nested Python values into Node trees and back.

Uses recursive dispatch:
- Mappings become child lists whose children are labeled by key.
- Lists and tuples become child lists of unlabeled children; items that
  already are Nodes are attached as they are.
- Everything else (including None) becomes a leaf.

Example::

    builder = TreeBuilder()
    office = builder.build({"January": 100, "February": 600}, label="Office 1")
    # office: Node("Office 1") -> [Node("January", 100), Node("February", 600)]
    builder.to_python(office)
    # {"January": 100, "February": 600}
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from aggtree.tree.label import Label
from aggtree.tree.nodes import Node
from aggtree.tree.payload import PayloadKind

__all__ = ["TreeBuilder"]


@dataclass
class TreeBuilder:
    """Converts nested dicts/lists/scalars into a Node tree.

    Mapping keys become label names (and identities).  A key that is not a
    string is used as the identity, with ``str(key)`` as the display name.

    The dispatch order matters: Node is checked first because a Node is
    itself iterable.
    """

    def build(self, value: Any, label: Label | str | Mapping[str, Any] | None = None) -> Node:
        """Convert ``value`` into a Node tree.

        Args:
            value: A Node, mapping, list/tuple or scalar.
            label: Label for the returned root.

        Returns:
            The root Node.  A Node passed in is returned as is, or as a
            relabeled copy when ``label`` is given.
        """
        if isinstance(value, Node):
            if label is None:
                return value
            relabeled = value.deep_dup()
            relabeled.label = label
            return relabeled

        if isinstance(value, Mapping):
            return self._build_mapping(value, label)

        if isinstance(value, (list, tuple)):
            return Node(label=label, data=[self.build(item) for item in value])

        return Node(label=label, data=value)

    def _build_mapping(self, mapping: Mapping[Any, Any], label: Any) -> Node:
        children = [
            self.build(item, label=self._key_label(key)) for key, item in mapping.items()
        ]
        return Node(label=label, data=children)

    @staticmethod
    def _key_label(key: Any) -> Label:
        if isinstance(key, str):
            return Label(name=key)
        return Label(name=str(key), identity=key)

    def to_python(self, node: Node) -> Any:
        """Convert a Node tree back into nested dicts/lists/scalars.

        A child list becomes a dict keyed by label identity when every child
        is labeled and the identities are distinct, and a list otherwise.
        Labels of list items are not preserved, and an empty child list
        becomes an empty dict.
        """
        if node.kind is not PayloadKind.CHILDREN:
            return node.data

        children = node.children
        identities = [child.label.identity for child in children if child.label is not None]
        if len(identities) == len(children) and len(set(identities)) == len(identities):
            return {
                identity: self.to_python(child)
                for identity, child in zip(identities, children, strict=True)
            }
        return [self.to_python(child) for child in children]
