"""Filter engine: predicate-driven pruning of Node trees.

A predicate is called as ``predicate(accumulator, candidate)`` for every
child of a node holding children, where ``accumulator`` is the result node
being assembled for the candidate's parent.  Its answer is a Decision
(``True``/``False``/``None`` are accepted as KEEP/DROP/UNDECIDED):

- KEEP:      a deep copy of the candidate and its whole subtree is attached.
- DROP:      the candidate is discarded.  With ``OrphanStrategy.ADOPT`` its
             subtree is filtered with the same predicate and the survivors
             are attached to the accumulator instead (orphan adoption).
- UNDECIDED: a candidate holding children is filtered recursively and kept
             if anything survives; a leaf is kept only with ``keep_leafs``.

Filtering never mutates its input; every node in the result is a copy.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Hashable
from typing import TYPE_CHECKING, Any

from aggtree.algorithm.compare import deep_dup
from aggtree.algorithm.config import Decision, FilterConfig, OrphanStrategy
from aggtree.errors import InvalidOperation
from aggtree.tree.payload import PayloadKind

if TYPE_CHECKING:
    from aggtree.tree.nodes import Node

__all__ = ["MISSING", "Predicate", "compact_onelings", "filter_node", "identity_predicate"]

logger = logging.getLogger(__name__)

Predicate = Callable[["Node", "Node"], Any]


class _Missing:
    """Sentinel type: ``None`` is a legitimate label identity."""

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


def identity_predicate(identity: Hashable) -> Predicate:
    """Predicate keeping leaves whose label identity equals ``identity``.

    Leaves with another (or no) label are dropped; nodes holding children
    are left undecided so the search continues below them.
    """

    def predicate(accumulator: Node, candidate: Node) -> Decision:
        if candidate.kind is PayloadKind.CHILDREN:
            return Decision.UNDECIDED
        if candidate.label is not None and candidate.label.identity == identity:
            return Decision.KEEP
        return Decision.DROP

    return predicate


def filter_node(
    node: Node,
    predicate: Predicate | None = None,
    *,
    identity: Hashable = MISSING,
    keep_leafs: bool = False,
    orphan_strategy: OrphanStrategy | str = OrphanStrategy.DISCARD,
) -> Node | None:
    """Return a filtered copy of ``node``.

    Args:
        node:            Root of the tree to filter.  Never mutated.
        predicate:       ``(accumulator, candidate) -> Decision | bool | None``.
        identity:        Shortcut for ``identity_predicate(identity)``; used
                         when no predicate is given.
        keep_leafs:      Keep leaves the predicate is undecided about.
        orphan_strategy: ``"discard"`` or ``"adopt"``.

    Returns:
        The filtered copy.  A root holding children always yields a node with
        the root's label and a (possibly empty) child list.  A root without a
        child list is judged itself: a copy when kept, otherwise ``None``.

    Raises:
        InvalidOperation: Neither a predicate nor an identity was supplied,
            or the orphan strategy is unknown.
    """
    if predicate is None:
        if identity is MISSING:
            msg = "filter requires a predicate or a label identity"
            raise InvalidOperation(msg)
        predicate = identity_predicate(identity)
    config = FilterConfig(keep_leafs=keep_leafs, orphan_strategy=orphan_strategy)
    return _filter(node, predicate, config)


def _filter(node: Node, predicate: Predicate, config: FilterConfig) -> Node | None:
    if node.kind is not PayloadKind.CHILDREN:
        copied = deep_dup(node)
        if Decision.of(predicate(copied, copied)) is Decision.KEEP:
            return copied
        return None

    if not node.data:
        return deep_dup(node)

    label = node.label.deep_dup() if node.label is not None else None
    result = type(node)(label=label, data=[], node_id=node.id)

    for candidate in node.data:
        decision = Decision.of(predicate(result, candidate))

        if decision is Decision.KEEP:
            result.add_child(deep_dup(candidate))
            continue

        adopting = (
            decision is Decision.DROP
            and config.orphan_strategy is OrphanStrategy.ADOPT
        )
        if candidate.kind is PayloadKind.CHILDREN and (
            decision is Decision.UNDECIDED or adopting
        ):
            filtered = _filter(deep_dup(candidate), predicate, config)
            if filtered is None or not filtered.children:
                continue
            if decision is Decision.UNDECIDED:
                result.add_child(filtered)
            else:
                logger.debug(
                    "adopting %d orphan(s) of %r into %r",
                    len(filtered.children),
                    candidate.label,
                    result.label,
                )
                for orphan in filtered.children:
                    result.add_child(orphan)
        elif decision is Decision.UNDECIDED and config.keep_leafs:
            result.add_child(deep_dup(candidate))

    return result


def _oneling_predicate(accumulator: Node, candidate: Node) -> Decision:
    if candidate.is_oneling and not candidate.is_root:
        return Decision.DROP
    return Decision.UNDECIDED


def compact_onelings(node: Node) -> Node | None:
    """Collapse every non-root node that is its parent's only child.

    The collapsed node's children are re-attached to its grandparent.
    """
    return filter_node(
        node,
        _oneling_predicate,
        keep_leafs=True,
        orphan_strategy=OrphanStrategy.ADOPT,
    )
