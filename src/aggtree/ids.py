"""Identifier sources for Node construction.

The active source is module state so tests can swap it out::

    from aggtree.ids import SequentialIdSource, use_id_source

    with use_id_source(SequentialIdSource(prefix="n")):
        Node(data=1).id   # "n1"
"""

from __future__ import annotations

import itertools
import logging
import uuid
from collections.abc import Hashable, Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from aggtree.protocols import IdSource

__all__ = [
    "SequentialIdSource",
    "UUIDSource",
    "get_id_source",
    "next_id",
    "set_id_source",
    "use_id_source",
]

logger = logging.getLogger(__name__)


class UUIDSource:
    """Random UUID4 strings. The default source."""

    def next_id(self) -> str:
        return str(uuid.uuid4())


class SequentialIdSource:
    """Deterministic ids: ``f"{prefix}{n}"`` for n = start, start + 1, ...

    With an empty prefix the bare integers are returned instead.
    """

    def __init__(self, prefix: str = "", start: int = 1) -> None:
        self._prefix = prefix
        self._counter = itertools.count(start)

    def next_id(self) -> Hashable:
        n = next(self._counter)
        return f"{self._prefix}{n}" if self._prefix else n


_source: IdSource = UUIDSource()


def get_id_source() -> IdSource:
    """Return the currently installed id source."""
    return _source


def set_id_source(source: IdSource) -> IdSource:
    """Install ``source`` and return the previously installed one."""
    global _source
    previous = _source
    _source = source
    logger.debug("id source swapped: %r -> %r", previous, source)
    return previous


@contextmanager
def use_id_source(source: IdSource) -> Iterator[IdSource]:
    """Install ``source`` for the duration of a ``with`` block."""
    previous = set_id_source(source)
    try:
        yield source
    finally:
        set_id_source(previous)


def next_id() -> Hashable:
    """Draw the next identifier from the active source."""
    return _source.next_id()
