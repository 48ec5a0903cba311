"""IdSource Protocol: the pluggable identifier generator for nodes.

Any object with a conformant ``next_id`` method satisfies the protocol;
no inheritance is required.

Example::

    import itertools
    from aggtree.protocols import IdSource

    class Counter:
        def __init__(self) -> None:
            self._it = itertools.count(1)

        def next_id(self) -> int:
            return next(self._it)

    assert isinstance(Counter(), IdSource)
"""

from __future__ import annotations

from collections.abc import Hashable
from typing import Protocol, runtime_checkable


@runtime_checkable
class IdSource(Protocol):
    """Structural protocol for node identifier sources.

    ``next_id`` must return a hashable value that is unique within the
    process for as long as the source is installed.
    """

    def next_id(self) -> Hashable: ...
