"""Decision, OrphanStrategy, NullPolicy and FilterConfig.

Decision is the three-valued answer of a filter predicate.  OrphanStrategy
selects what happens to the subtree of a dropped node.  NullPolicy selects
how ``combine`` treats absent operands.  FilterConfig is a frozen
(immutable) dataclass bundling the filter options.
"""

from __future__ import annotations

import operator
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum, auto
from typing import Any

from aggtree.errors import InvalidOperation

__all__ = [
    "Decision",
    "FilterConfig",
    "NullPolicy",
    "OrphanStrategy",
    "default_null_policy",
]


class Decision(StrEnum):
    """Answer of a filter predicate for one candidate node.

    - KEEP:      keep the candidate and its entire subtree.
    - DROP:      discard the candidate (see OrphanStrategy for its subtree).
    - UNDECIDED: no verdict on the candidate; keep recursing into it.
    """

    KEEP = auto()
    DROP = auto()
    UNDECIDED = auto()

    @classmethod
    def of(cls, answer: Any) -> Decision:
        """Map a predicate answer onto a Decision.

        ``True``/``False``/``None`` map to KEEP/DROP/UNDECIDED; Decision
        members pass through unchanged.
        """
        if isinstance(answer, Decision):
            return answer
        if answer is None:
            return cls.UNDECIDED
        if answer is True:
            return cls.KEEP
        if answer is False:
            return cls.DROP
        msg = f"Filter predicate must return a Decision, bool or None, got {answer!r}"
        raise InvalidOperation(msg)


class OrphanStrategy(StrEnum):
    """What happens to the descendants of a dropped node.

    - DISCARD: they are dropped with it.
    - ADOPT:   they are filtered with the same predicate and survivors are
               attached to the dropped node's parent.
    """

    DISCARD = auto()
    ADOPT = auto()


class NullPolicy(StrEnum):
    """How ``combine`` treats absent leaf values.

    Two absent operands always yield an absent result.  Otherwise:

    - ZERO_FILL:            an absent operand counts as 0.
    - NULL_PROPAGATE:       an absent operand makes the result absent.
    - NULL_ON_ZERO_DIVISOR: like NULL_PROPAGATE, and a zero right operand
                            also makes the result absent.
    """

    ZERO_FILL = auto()
    NULL_PROPAGATE = auto()
    NULL_ON_ZERO_DIVISOR = auto()


_DEFAULT_POLICIES: dict[Callable[[Any, Any], Any], NullPolicy] = {
    operator.add: NullPolicy.ZERO_FILL,
    operator.sub: NullPolicy.ZERO_FILL,
    operator.truediv: NullPolicy.NULL_ON_ZERO_DIVISOR,
    operator.floordiv: NullPolicy.NULL_ON_ZERO_DIVISOR,
    operator.mod: NullPolicy.NULL_ON_ZERO_DIVISOR,
}


def default_null_policy(op: Callable[[Any, Any], Any]) -> NullPolicy:
    """Return the conventional NullPolicy for a binary operator.

    Addition and subtraction zero-fill, division-like operators null out on
    a zero divisor, anything else propagates absence.
    """
    return _DEFAULT_POLICIES.get(op, NullPolicy.NULL_PROPAGATE)


@dataclass(frozen=True, slots=True)
class FilterConfig:
    """Immutable options for the filter engine.

    Attributes:
        keep_leafs: Keep leaves the predicate was undecided about.
        orphan_strategy: Fate of a dropped node's descendants.  Strings are
            accepted and converted to OrphanStrategy.
    """

    keep_leafs: bool = False
    orphan_strategy: OrphanStrategy = OrphanStrategy.DISCARD

    def __post_init__(self) -> None:
        strategy = self.orphan_strategy
        if not isinstance(strategy, OrphanStrategy):
            try:
                strategy = OrphanStrategy(strategy)
            except ValueError:
                msg = f"Unknown orphan strategy {self.orphan_strategy!r}"
                raise InvalidOperation(msg) from None
            # frozen dataclass: bypass __setattr__ for the normalised value
            object.__setattr__(self, "orphan_strategy", strategy)
