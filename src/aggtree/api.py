"""Public API functions for aggtree.

Functional counterparts of the Node methods, plus ``build`` and
``combine_all``.  Merge, combine and filter never mutate their operands.
``build`` attaches Nodes found inside a list to the new parent as they are;
a Node passed as the root is copied before it is relabeled.
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Hashable, Iterable, Mapping
from typing import Any

from aggtree.algorithm import filter as filtering
from aggtree.algorithm.config import NullPolicy, OrphanStrategy
from aggtree.algorithm.merge import Combiner, combine_nodes, merge_nodes
from aggtree.errors import InvalidOperation
from aggtree.tree.builder import TreeBuilder
from aggtree.tree.label import Label
from aggtree.tree.nodes import Node

__all__ = [
    "build",
    "combine",
    "combine_all",
    "compact_onelings",
    "filter_tree",
    "merge",
]

_builder = TreeBuilder()


def build(value: Any, label: Label | str | Mapping[str, Any] | None = None) -> Node:
    """Build a Node tree from nested dicts, lists and scalars.

    Args:
        value: ``{"January": 100, "February": 600}``, ``[1, 2, [3, None]]``,
               a scalar, or an existing Node.
        label: Label of the returned root.

    Returns:
        The root Node.
    """
    return _builder.build(value, label=label)


def merge(left: Node, right: Node, combiner: Combiner | None = None) -> Node:
    """Return the structural merge of two trees.

    Children are paired by label identity.  Paired leaves resolve through
    ``combiner(label, left_value, right_value)``; without one the right
    value wins.

    Raises:
        ShapeConflict: A child list meets a scalar.
    """
    return merge_nodes(left, right, combiner)


def combine(
    left: Node,
    right: Node,
    operator: Callable[[Any, Any], Any],
    null_policy: NullPolicy | str | None = None,
) -> Node:
    """Merge two trees applying ``operator`` to paired leaf values.

    Args:
        left:        Leading operand (label and child order).
        right:       Second operand.
        operator:    Binary function, e.g. ``operator.add``.
        null_policy: Absent-value handling.  Defaults to zero-fill for
                     ``+``/``-``, null-on-zero-divisor for division-like
                     operators and null propagation otherwise.

    Returns:
        A new tree labeled like ``left``.
    """
    return combine_nodes(left, right, operator, null_policy)


def combine_all(
    trees: Iterable[Node],
    operator: Callable[[Any, Any], Any],
    null_policy: NullPolicy | str | None = None,
) -> Node:
    """Left-fold ``combine`` over a sequence of trees.

    ``combine_all([a, b, c], operator.add)`` is
    ``combine(combine(a, b, operator.add), c, operator.add)``.

    Raises:
        InvalidOperation: ``trees`` is empty.
    """
    trees = list(trees)
    if not trees:
        msg = "combine_all needs at least one tree"
        raise InvalidOperation(msg)
    if len(trees) == 1:
        return trees[0].deep_dup()
    return functools.reduce(
        lambda acc, tree: combine_nodes(acc, tree, operator, null_policy), trees
    )


def filter_tree(
    tree: Node,
    predicate: filtering.Predicate | None = None,
    *,
    identity: Hashable = filtering.MISSING,
    keep_leafs: bool = False,
    orphan_strategy: OrphanStrategy | str = OrphanStrategy.DISCARD,
) -> Node | None:
    """Return a filtered copy of ``tree``.

    See ``aggtree.algorithm.filter`` for the meaning of the predicate
    answers and of ``orphan_strategy``.

    Raises:
        InvalidOperation: Neither ``predicate`` nor ``identity`` was given.
    """
    return filtering.filter_node(
        tree,
        predicate,
        identity=identity,
        keep_leafs=keep_leafs,
        orphan_strategy=orphan_strategy,
    )


def compact_onelings(tree: Node) -> Node | None:
    """Return a copy of ``tree`` with every non-root only child collapsed."""
    return filtering.compact_onelings(tree)
