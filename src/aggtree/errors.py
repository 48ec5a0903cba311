"""Exception hierarchy for aggtree.

Every error raised by the library derives from ``TreeError`` and from the
builtin exception closest to the failure, so callers may catch either::

    try:
        node.add_child(child)
    except NotEnumerable:       # or TreeError, or TypeError
        ...
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "InvalidLabelSpec",
    "InvalidOperation",
    "NotALeaf",
    "NotEnumerable",
    "ShapeConflict",
    "TreeError",
]


class TreeError(Exception):
    """Base class for all aggtree errors."""


class InvalidLabelSpec(TreeError, TypeError):
    """A label was given in an unsupported form, or its metadata is not a mapping."""


class NotALeaf(TreeError, TypeError):
    """A scalar value was requested from a branch."""


class NotEnumerable(TreeError, TypeError):
    """A child was appended to a node holding a scalar payload.

    Attributes:
        parent: The node that refused the child.
        item:   The rejected child.
    """

    def __init__(self, parent: Any = None, item: Any = None) -> None:
        self.parent = parent
        self.item = item
        msg = f"cannot add a child to a node holding scalar data: {parent!r}"
        super().__init__(msg)


class ShapeConflict(TreeError, ValueError):
    """Merge or combine was asked to unify a child list with a scalar."""


class InvalidOperation(TreeError, ValueError):
    """An operation was invoked with missing or contradictory arguments."""
