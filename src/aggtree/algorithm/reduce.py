"""Reducer: folds, sums and averages over the leaf values of a tree.

``reducible_values`` mirrors the tree shape: a node holding children
becomes a list of its children's reducible values, a leaf becomes its
scalar (None when absent).  Sum and average flatten that structure and
skip absent values.
"""

from __future__ import annotations

import functools
import operator
from collections.abc import Callable, Iterator, Sequence
from typing import TYPE_CHECKING, Any

import numpy as np

from aggtree.algorithm.filter import filter_node
from aggtree.errors import InvalidOperation, NotALeaf
from aggtree.result import ChildSum
from aggtree.tree.payload import PayloadKind

if TYPE_CHECKING:
    from aggtree.tree.label import Label
    from aggtree.tree.nodes import Node

__all__ = [
    "average",
    "child_sums",
    "flatten_values",
    "fold",
    "is_empty",
    "leaf_value",
    "reducible_values",
    "total",
]


def leaf_value(node: Node) -> Any:
    """Return the scalar payload of a leaf.

    An absent payload and an empty child list both yield None.

    Raises:
        NotALeaf: The node has children.
    """
    if node.kind is PayloadKind.CHILDREN:
        if node.data:
            msg = f"{node!r} is a branch and has no value"
            raise NotALeaf(msg)
        return None
    return node.data


def reducible_values(node: Node) -> Any:
    """Nested lists of leaf values, shaped like the tree."""
    if node.kind is PayloadKind.CHILDREN:
        return [reducible_values(child) for child in node.data]
    return node.data


def fold(node: Node, fn: Callable[[Any], Any]) -> Any:
    """Apply ``fn`` once to ``reducible_values(node)``."""
    return fn(reducible_values(node))


def flatten_values(node: Node) -> Iterator[Any]:
    """Yield present leaf values depth-first, left to right."""
    if node.kind is PayloadKind.CHILDREN:
        for child in node.data:
            yield from flatten_values(child)
    elif node.kind is PayloadKind.SCALAR:
        yield node.data


def total(node: Node) -> Any:
    """Sum of all present leaf values, or None when there are none.

    Values are folded with ``+`` so the scalar type is preserved
    (ints stay ints, Decimals stay Decimals).
    """
    values = list(flatten_values(node))
    if not values:
        return None
    return functools.reduce(operator.add, values)


def average(node: Node) -> float | None:
    """Arithmetic mean of all present leaf values, or None when there are none."""
    values = list(flatten_values(node))
    if not values:
        return None
    return float(np.mean(np.asarray(values, dtype=float)))


def is_empty(node: Node) -> bool:
    """True when the tree carries no data.

    Absent payloads are empty; a sized scalar is empty when its length is 0;
    a child list is empty when every child is (vacuously true for []).
    """
    kind = node.kind
    if kind is PayloadKind.ABSENT:
        return True
    if kind is PayloadKind.CHILDREN:
        return all(is_empty(child) for child in node.data)
    try:
        return len(node.data) == 0
    except TypeError:
        return False


def child_sums(
    node: Node,
    by_labels: Sequence[Label] | None = None,
    by_leaf_labels: bool = False,
) -> list[ChildSum]:
    """Aggregate each child of ``node``.

    Args:
        node:           Node whose children are aggregated.
        by_labels:      When given, each child is summed once per label,
                        after filtering it down to that label identity.
        by_leaf_labels: Shortcut for ``by_labels=node.leaf_labels``.

    Raises:
        InvalidOperation: Both ``by_labels`` and ``by_leaf_labels`` are set.
    """
    if by_leaf_labels and by_labels is not None:
        msg = "choose either by_labels or by_leaf_labels, not both"
        raise InvalidOperation(msg)
    if by_leaf_labels:
        by_labels = node.leaf_labels

    rows: list[ChildSum] = []
    for child in node.children:
        if by_labels is None:
            values: Any = total(child)
        else:
            values = []
            for label in by_labels:
                filtered = filter_node(child, identity=label.identity)
                values.append((label, total(filtered) if filtered is not None else None))
        rows.append(ChildSum(child=child, label=child.label, values=values))
    return rows
