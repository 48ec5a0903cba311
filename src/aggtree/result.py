"""ChildSum dataclass: one row of ``Node.child_sums`` output."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from aggtree.tree.label import Label
    from aggtree.tree.nodes import Node

__all__ = ["ChildSum"]


@dataclass(frozen=True, slots=True)
class ChildSum:
    """Aggregate of one child of a node.

    Attributes:
        child:  The child node itself (not a copy).
        label:  The child's label, or None.
        values: The child's total, or, when sums were requested per label,
            a list of ``(label, total)`` pairs where ``total`` is the sum of
            the child filtered down to that label identity (None when
            nothing matched).
    """

    child: Node
    label: Label | None
    values: Any
