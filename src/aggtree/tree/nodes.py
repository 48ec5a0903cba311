"""Node: the labeled tree entity of aggtree.

A node carries an optional Label and exactly one payload variant
(see PayloadKind): nothing, a scalar, or an ordered list of child nodes.

Parents own their children.  The back-reference from child to parent is a
``weakref.ref`` and is only ever written when a node is attached to a
parent (``add_child``, assigning ``data``, or the ``parent`` constructor
argument).  Attaching a node that already has a parent silently moves it:
callers must not share one Node between two parents.

Example::

    from aggtree import Node

    office = Node("Office 1", [Node("January", 100), Node("February", 600)])
    office.sum()                       # 700
    office.children[0].parent is office  # True
"""

from __future__ import annotations

import logging
import weakref
from collections.abc import Callable, Hashable, Iterator, Mapping, Sequence
from typing import Any

from aggtree.algorithm import compare, filter as filtering, merge, reduce
from aggtree.algorithm.config import NullPolicy, OrphanStrategy
from aggtree.errors import InvalidOperation, NotEnumerable
from aggtree.ids import next_id
from aggtree.result import ChildSum
from aggtree.tree.label import Label
from aggtree.tree.payload import PayloadKind, kind_of

__all__ = ["Node"]

logger = logging.getLogger(__name__)


class Node:
    """A node in a labeled aggregation tree.

    Args:
        label:   A Label, a string (name and identity), a mapping accepted by
                 ``Label.coerce``, or None.
        data:    None (absent), a list/tuple of Nodes (children), or any
                 other value (scalar).
        parent:  Optional owning node; stored as a weak reference.
        node_id: Identifier; drawn from the active IdSource when omitted.
    """

    __slots__ = ("__weakref__", "_data", "_kind", "_label", "_parent", "id")

    def __init__(
        self,
        label: Label | str | Mapping[str, Any] | None = None,
        data: Any = None,
        *,
        parent: Node | None = None,
        node_id: Hashable | None = None,
    ) -> None:
        self._parent: weakref.ref[Node] | None = None
        self._label: Label | None = None
        self._kind = PayloadKind.ABSENT
        self._data: Any = None
        self.id: Hashable = node_id if node_id is not None else next_id()
        self.label = label
        self.data = data
        if parent is not None:
            self._set_parent(parent)

    # ------------------------------------------------------------------
    # Payload, label and parent
    # ------------------------------------------------------------------

    @property
    def kind(self) -> PayloadKind:
        """Which payload variant this node holds."""
        return self._kind

    @property
    def data(self) -> Any:
        """The raw payload: None, a scalar, or the live child list."""
        return self._data

    @data.setter
    def data(self, items: Any) -> None:
        kind = kind_of(items)
        if kind is PayloadKind.CHILDREN:
            items = list(items)
            for item in items:
                _require_node(item)
            for item in items:
                item._set_parent(self)
        self._kind = kind
        self._data = items

    @property
    def label(self) -> Label | None:
        return self._label

    @label.setter
    def label(self, spec: Label | str | Mapping[str, Any] | None) -> None:
        self._label = None if spec is None else Label.coerce(spec)

    @property
    def parent(self) -> Node | None:
        """The owning node, or None for a root (or a collected parent)."""
        return self._parent() if self._parent is not None else None

    def _set_parent(self, parent: Node) -> None:
        self._parent = weakref.ref(parent)

    def add_child(self, item: Node) -> Node:
        """Append ``item`` as the last child and return it.

        An absent payload becomes a child list first.

        Raises:
            NotEnumerable: This node holds a scalar.
            InvalidOperation: ``item`` is not a Node.
        """
        _require_node(item)
        if self._kind is PayloadKind.ABSENT:
            self.data = []
        if self._kind is not PayloadKind.CHILDREN:
            raise NotEnumerable(parent=self, item=item)
        item._set_parent(self)
        self._data.append(item)
        return item

    # ------------------------------------------------------------------
    # Shape predicates
    # ------------------------------------------------------------------

    @property
    def holds_children(self) -> bool:
        """True when the payload is a child list, even an empty one."""
        return self._kind is PayloadKind.CHILDREN

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @property
    def is_branch(self) -> bool:
        return bool(self.children)

    @property
    def is_twig(self) -> bool:
        return self.is_branch and all(child.is_leaf for child in self._data)

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def is_oneling(self) -> bool:
        """True when the node has no siblings (a root, or an only child)."""
        return not self.siblings

    @property
    def is_empty(self) -> bool:
        return reduce.is_empty(self)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    @property
    def children(self) -> list[Node]:
        """A new list of the children; empty for leaves."""
        return list(self._data) if self._kind is PayloadKind.CHILDREN else []

    @property
    def leaves(self) -> list[Node]:
        return [child for child in self.children if child.is_leaf]

    @property
    def child_branches(self) -> list[Node]:
        return [child for child in self.children if child.is_branch]

    @property
    def siblings(self) -> list[Node]:
        parent = self.parent
        if parent is None:
            return []
        return [child for child in parent.children if child is not self]

    @property
    def ancestors(self) -> list[Node]:
        """Ancestors from the root down to the direct parent."""
        chain: list[Node] = []
        node = self.parent
        while node is not None:
            chain.append(node)
            node = node.parent
        chain.reverse()
        return chain

    @property
    def label_path(self) -> list[Label | None]:
        return [node.label for node in (*self.ancestors, self)]

    @property
    def leaf_labels(self) -> list[Label]:
        """Unique labels of all leaves below this node, in first-seen order."""
        seen: dict[Label, None] = {}
        for node in self.walk():
            if node is not self and node.is_leaf and node.label is not None:
                seen.setdefault(node.label, None)
        return list(seen)

    def walk(self) -> Iterator[Node]:
        """Yield this node and then every descendant, pre-order."""
        yield self
        for child in self.children:
            yield from child.walk()

    __iter__ = walk

    def find(self, target: Hashable | Callable[[Node], bool]) -> Node | None:
        """Return the first node (pre-order) matching an id or a predicate."""
        if callable(target):
            return next((node for node in self.walk() if target(node)), None)
        return next((node for node in self.walk() if node.id == target), None)

    def find_by(self, query: Mapping[str, Any]) -> Node | None:
        """Return the first node whose ``to_comparable_dict`` contains ``query``.

        Nested mappings in ``query`` match partially, e.g.
        ``{"label": {"name": "Food"}}``.
        """
        return self.find(lambda node: _contains(node.to_comparable_dict(), query))

    def to_comparable_dict(self) -> dict[str, Any]:
        """Plain-dict view of this node: id, scalar data and label fields."""
        view: dict[str, Any] = {"id": self.id}
        if self._kind is not PayloadKind.CHILDREN:
            view["data"] = self._data
        if self._label is not None:
            view["label"] = {
                "id": self._label.identity,
                "name": self._label.name,
                "meta": dict(self._label.metadata),
            }
        return view

    # ------------------------------------------------------------------
    # Comparison and copying
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        return compare.nodes_equal(self, other)

    def __hash__(self) -> int:
        return compare.node_hash(self)

    def __lt__(self, other: Node) -> bool:
        return compare.compare_nodes(self, other) < 0

    def __le__(self, other: Node) -> bool:
        return compare.compare_nodes(self, other) <= 0

    def __gt__(self, other: Node) -> bool:
        return compare.compare_nodes(self, other) > 0

    def __ge__(self, other: Node) -> bool:
        return compare.compare_nodes(self, other) >= 0

    def sorted_children(self) -> list[Node]:
        return compare.sorted_children(self)

    def deep_dup(self) -> Node:
        """Independent copy of this subtree (same ids, no parent)."""
        return compare.deep_dup(self)

    def __deepcopy__(self, memo: dict[int, Any]) -> Node:
        return compare.deep_dup(self)

    def __repr__(self) -> str:
        name = self._label.name if self._label is not None else None
        if self._kind is PayloadKind.CHILDREN:
            names = ", ".join(
                f"{child.label.name if child.label is not None else None}..."
                for child in self._data
            )
            return f"<Node label={name!r} children=[{names}]>"
        return f"<Node label={name!r} data={self._data!r}>"

    # ------------------------------------------------------------------
    # Tree algorithms
    # ------------------------------------------------------------------

    def filter(
        self,
        predicate: filtering.Predicate | None = None,
        *,
        identity: Hashable = filtering.MISSING,
        keep_leafs: bool = False,
        orphan_strategy: OrphanStrategy | str = OrphanStrategy.DISCARD,
    ) -> Node | None:
        """Filtered copy of this tree; see ``aggtree.algorithm.filter``."""
        return filtering.filter_node(
            self,
            predicate,
            identity=identity,
            keep_leafs=keep_leafs,
            orphan_strategy=orphan_strategy,
        )

    def compact_onelings(self) -> Node | None:
        return filtering.compact_onelings(self)

    def merge(self, other: Node, combiner: merge.Combiner | None = None) -> Node:
        """Merged copy of this tree and ``other``; see ``aggtree.algorithm.merge``."""
        return merge.merge_nodes(self, other, combiner)

    def combine(
        self,
        other: Node,
        operator: Callable[[Any, Any], Any],
        null_policy: NullPolicy | str | None = None,
    ) -> Node:
        return merge.combine_nodes(self, other, operator, null_policy)

    # ------------------------------------------------------------------
    # Reduction
    # ------------------------------------------------------------------

    def value(self) -> Any:
        """The scalar payload.  Raises NotALeaf on a branch."""
        return reduce.leaf_value(self)

    def reducible_values(self) -> Any:
        return reduce.reducible_values(self)

    def reduce(self, fn: Callable[[Any], Any]) -> Any:
        return reduce.fold(self, fn)

    def sum(self) -> Any:
        return reduce.total(self)

    def average(self) -> float | None:
        return reduce.average(self)

    def child_sums(
        self,
        by_labels: Sequence[Label] | None = None,
        by_leaf_labels: bool = False,
    ) -> list[ChildSum]:
        return reduce.child_sums(self, by_labels=by_labels, by_leaf_labels=by_leaf_labels)

    # ------------------------------------------------------------------
    # In-place transforms
    # ------------------------------------------------------------------

    def transform_labels(
        self, fn: Callable[[Label | None, Node], Label | str | None]
    ) -> Node:
        """Replace every label in this subtree with ``fn(label, node)``."""
        self.label = fn(self._label, self)
        for child in self.children:
            child.transform_labels(fn)
        return self

    def transform_values(self, fn: Callable[[Any, Node], Any]) -> Node:
        """Replace every leaf value in this subtree with ``fn(value, node)``."""
        if self._kind is PayloadKind.CHILDREN:
            for child in self._data:
                child.transform_values(fn)
        else:
            self.data = fn(self._data, self)
        return self


def _require_node(item: Any) -> None:
    if not isinstance(item, Node):
        msg = f"child lists hold Nodes only, got {type(item).__name__}: {item!r}"
        raise InvalidOperation(msg)


def _contains(view: Mapping[str, Any], query: Mapping[str, Any]) -> bool:
    for key, expected in query.items():
        if key not in view:
            return False
        actual = view[key]
        if isinstance(expected, Mapping) and isinstance(actual, Mapping):
            if not _contains(actual, expected):
                return False
        elif actual != expected:
            return False
    return True
