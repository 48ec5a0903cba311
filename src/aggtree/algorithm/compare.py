"""Structural equality, hashing, ordering and deep copy for Node trees.

Equality ignores child order: two child lists are equal when they hold the
same nodes the same number of times.  Hashing is consistent with equality
so nodes can be deduplicated through ``set``/``dict``.

Ordering exists to make equality and sorting independent of insertion
order; it is not a meaningful ranking of business data.  Precedence, first
non-tie wins:

1. absent payload before present payload
2. scalar payload before child list
3. label identity, when both labels exist and are mutually orderable
4. numeric value, when both payloads are numeric scalars
5. size: child count, or ``len()`` of a sized scalar
"""

from __future__ import annotations

import copy
import functools
import numbers
from collections import Counter
from collections.abc import Set as AbstractSet
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from aggtree.tree.label import identities_ordered
from aggtree.tree.payload import PayloadKind

if TYPE_CHECKING:
    from collections.abc import Callable

    from aggtree.tree.nodes import Node

__all__ = [
    "compare_nodes",
    "deep_dup",
    "node_hash",
    "nodes_equal",
    "sort_key",
    "sorted_children",
]


def _is_numeric(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    return isinstance(value, (numbers.Real, Decimal))


def _size(node: Node) -> int:
    # Child count for child lists, len() for sized scalars.
    try:
        return len(node.data)
    except TypeError:
        return 0


def _sign(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


def nodes_equal(a: Node, b: Node) -> bool:
    """Return True when labels (by identity) and payloads are equal."""
    if a is b:
        return True
    if a.label != b.label or a.kind is not b.kind:
        return False
    if a.kind is PayloadKind.CHILDREN:
        left, right = a.data, b.data
        # Multiset comparison: Counter buckets by node_hash, then nodes_equal.
        return len(left) == len(right) and Counter(left) == Counter(right)
    return bool(a.data == b.data)


def _scalar_hash(value: Any) -> int:
    if isinstance(value, AbstractSet):
        return hash(frozenset(value))
    try:
        return hash(value)
    except TypeError:
        # Unhashable scalars (dicts, lists, ...) share one bucket.
        return 0


def node_hash(node: Node) -> int:
    """Hash consistent with ``nodes_equal``."""
    kind = node.kind
    if kind is PayloadKind.CHILDREN:
        payload_hash = hash(tuple(sorted(node_hash(child) for child in node.data)))
    elif kind is PayloadKind.SCALAR:
        payload_hash = _scalar_hash(node.data)
    else:
        payload_hash = hash(None)
    return hash((kind, hash(node.label), payload_hash))


def compare_nodes(a: Node, b: Node) -> int:
    """Three-way comparison of two nodes: -1, 0 or 1."""
    if nodes_equal(a, b):
        return 0

    a_present = a.kind is not PayloadKind.ABSENT
    b_present = b.kind is not PayloadKind.ABSENT
    if a_present != b_present:
        return 1 if a_present else -1

    a_children = a.kind is PayloadKind.CHILDREN
    b_children = b.kind is PayloadKind.CHILDREN
    if a_children != b_children:
        return 1 if a_children else -1

    if a.label is not None and b.label is not None:
        order = identities_ordered(a.label, b.label)
        if order:
            return order

    if (
        a.kind is PayloadKind.SCALAR
        and _is_numeric(a.data)
        and _is_numeric(b.data)
    ):
        order = _sign(a.data, b.data)
        if order:
            return order

    return _sign(_size(a), _size(b))


sort_key: Callable[[Node], Any] = functools.cmp_to_key(compare_nodes)


def sorted_children(node: Node) -> list[Node]:
    """Return the node's children in canonical order (empty for leaves)."""
    return sorted(node.children, key=sort_key)


def deep_dup(node: Node) -> Node:
    """Return an independent copy of ``node`` and its whole subtree.

    The copy keeps the node id, owns deep copies of every label and scalar,
    and has no parent.  Parent links inside the copy point at copied nodes.
    """
    label = node.label.deep_dup() if node.label is not None else None
    if node.kind is PayloadKind.CHILDREN:
        data: Any = [deep_dup(child) for child in node.data]
    else:
        data = copy.deepcopy(node.data)
    return type(node)(label=label, data=data, node_id=node.id)
