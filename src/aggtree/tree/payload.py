"""PayloadKind StrEnum: the three shapes a Node payload can take.

- ABSENT   -> "absent"   : no data at all (``None``)
- SCALAR   -> "scalar"   : a single value (number, string, ...)
- CHILDREN -> "children" : an ordered list of child nodes, possibly empty
"""

from __future__ import annotations

from enum import StrEnum, auto
from typing import Any

__all__ = ["PayloadKind", "kind_of"]


class PayloadKind(StrEnum):
    ABSENT = auto()
    SCALAR = auto()
    CHILDREN = auto()


def kind_of(data: Any) -> PayloadKind:
    """Classify a raw payload.  Lists and tuples are child lists."""
    if data is None:
        return PayloadKind.ABSENT
    if isinstance(data, (list, tuple)):
        return PayloadKind.CHILDREN
    return PayloadKind.SCALAR
