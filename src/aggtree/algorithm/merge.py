"""Merge and combine: structural unification of two Node trees.

Both operations return a new tree carrying the left operand's label and id;
neither operand is mutated.

Branch pairing:
- Left children come first, in left order.  Each one is merged with the
  first not-yet-used right child carrying an equal label (by identity).
  Unlabeled children pair with unlabeled children, in order.
- Right children that found no partner follow, in right order.

Leaf pairing (scalar or absent on both sides):
- merge:   ``combiner(label, left_value, right_value)`` or, without a
           combiner, the right value overwrites the left one.
- combine: ``operator(left_value, right_value)`` guarded by a NullPolicy.

An absent payload facing a child list is treated as an empty child list.
A scalar facing a child list (even an empty one) raises ShapeConflict.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from aggtree.algorithm.compare import deep_dup
from aggtree.algorithm.config import NullPolicy, default_null_policy
from aggtree.errors import ShapeConflict
from aggtree.tree.payload import PayloadKind

if TYPE_CHECKING:
    from aggtree.tree.label import Label
    from aggtree.tree.nodes import Node

__all__ = ["Combiner", "combine_nodes", "merge_nodes", "null_safe"]

logger = logging.getLogger(__name__)

Combiner = Callable[["Label | None", Any, Any], Any]


def _payload_kinds(left: Node, right: Node) -> tuple[PayloadKind, PayloadKind]:
    left_kind, right_kind = left.kind, right.kind
    # Absent opposite a child list behaves like an empty child list.
    if left_kind is PayloadKind.ABSENT and right_kind is PayloadKind.CHILDREN:
        left_kind = PayloadKind.CHILDREN
    elif right_kind is PayloadKind.ABSENT and left_kind is PayloadKind.CHILDREN:
        right_kind = PayloadKind.CHILDREN
    return left_kind, right_kind


def merge_nodes(left: Node, right: Node, combiner: Combiner | None = None) -> Node:
    """Merge ``right`` into a copy of ``left``.

    Args:
        left:     Operand whose label, id and child order lead the result.
        right:    Operand merged onto it.
        combiner: ``(label, left_value, right_value) -> value`` resolving
                  paired leaves.  Without it the right value wins.

    Returns:
        A new tree.

    Raises:
        ShapeConflict: A child list is paired with a scalar anywhere in the
            two trees.
    """
    left_kind, right_kind = _payload_kinds(left, right)
    label = left.label.deep_dup() if left.label is not None else None

    if left_kind is PayloadKind.CHILDREN and right_kind is PayloadKind.CHILDREN:
        return type(left)(
            label=label,
            data=_merge_children(left.children, right.children, combiner),
            node_id=left.id,
        )

    if left_kind is not PayloadKind.CHILDREN and right_kind is not PayloadKind.CHILDREN:
        if combiner is not None:
            value = combiner(left.label, left.data, right.data)
        else:
            value = right.data
        return type(left)(label=label, data=copy.deepcopy(value), node_id=left.id)

    logger.debug("shape conflict merging %r with %r", left, right)
    msg = (
        f"Cannot merge a {left.kind} node with a {right.kind} node "
        f"(labels {left.label!r} and {right.label!r})"
    )
    raise ShapeConflict(msg)


def _merge_children(
    left_children: list[Node],
    right_children: list[Node],
    combiner: Combiner | None,
) -> list[Node]:
    unmatched = list(right_children)
    merged: list[Node] = []

    for child in left_children:
        partner = _take_partner(child, unmatched)
        if partner is None:
            merged.append(deep_dup(child))
        else:
            merged.append(merge_nodes(child, partner, combiner))

    if unmatched:
        logger.debug("appending %d right-only child(ren)", len(unmatched))
    merged.extend(deep_dup(child) for child in unmatched)
    return merged


def _take_partner(child: Node, candidates: list[Node]) -> Node | None:
    # Two missing labels match; a missing label never matches a present one.
    for index, candidate in enumerate(candidates):
        if candidate.label == child.label:
            return candidates.pop(index)
    return None


def null_safe(
    operator: Callable[[Any, Any], Any],
    null_policy: NullPolicy | str | None = None,
) -> Combiner:
    """Wrap a binary operator into a merge combiner honoring ``null_policy``.

    When ``null_policy`` is None it is derived from the operator through
    ``default_null_policy``.
    """
    policy = (
        default_null_policy(operator) if null_policy is None else NullPolicy(null_policy)
    )

    def combiner(label: Label | None, left: Any, right: Any) -> Any:
        if left is None and right is None:
            return None
        if policy is NullPolicy.ZERO_FILL:
            left = 0 if left is None else left
            right = 0 if right is None else right
        elif left is None or right is None:
            logger.debug("absent operand under %s for %r", policy, label)
            return None
        elif policy is NullPolicy.NULL_ON_ZERO_DIVISOR and right == 0:
            logger.debug("zero divisor for %r", label)
            return None
        return operator(left, right)

    return combiner


def combine_nodes(
    left: Node,
    right: Node,
    operator: Callable[[Any, Any], Any],
    null_policy: NullPolicy | str | None = None,
) -> Node:
    """Merge two trees, combining paired leaves arithmetically.

    Args:
        left:        Operand whose label and child order lead the result.
        right:       Second operand.
        operator:    Binary function applied to paired leaf values, e.g.
                     ``operator.add``.
        null_policy: Handling of absent values; defaults to
                     ``default_null_policy(operator)``.

    Raises:
        ShapeConflict: As for ``merge_nodes``.
    """
    return merge_nodes(left, right, null_safe(operator, null_policy))
