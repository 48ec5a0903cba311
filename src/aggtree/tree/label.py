"""Label: identity + display name + free-form metadata attached to a Node.

Two labels are equal iff their identities are equal; the identity is also
the hash key.  ``name`` and ``metadata`` never take part in comparisons.
"""

from __future__ import annotations

import copy
from collections.abc import Hashable, Mapping
from dataclasses import dataclass, field
from typing import Any

from aggtree.errors import InvalidLabelSpec

__all__ = ["Label", "identities_ordered"]


def _freeze(identity: Any) -> Hashable:
    # Lists make natural composite ids (e.g. a date range) but are unhashable.
    if isinstance(identity, list):
        return tuple(_freeze(part) for part in identity)
    return identity


@dataclass(slots=True, eq=False)
class Label:
    """A node label.

    Attributes:
        name:     Display string.
        identity: Comparison and hash key.  Defaults to ``name``.
        metadata: Arbitrary string-keyed values with no behavioral role.
    """

    name: Any = None
    identity: Hashable = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.identity is None:
            self.identity = self.name
        self.identity = _freeze(self.identity)
        if self.metadata is None:
            self.metadata = {}
        elif isinstance(self.metadata, Mapping):
            self.metadata = dict(self.metadata)
        else:
            msg = f"Label metadata must be a mapping, got {type(self.metadata)!r}"
            raise InvalidLabelSpec(msg)

    @property
    def id(self) -> Hashable:
        """Alias for ``identity``."""
        return self.identity

    @classmethod
    def coerce(cls, spec: Any) -> Label:
        """Build a Label from a Label, a string, or a mapping.

        Mapping form: ``{"name": ..., "id": ..., "meta": {...}}``; ``identity``
        and ``metadata`` are accepted as spellings of ``id`` and ``meta``.

        Raises:
            InvalidLabelSpec: For any other representation.
        """
        if isinstance(spec, Label):
            return spec
        if isinstance(spec, str):
            return cls(name=spec)
        if isinstance(spec, Mapping):
            options = dict(spec)
            name = options.pop("name", None)
            identity = options.pop("id", options.pop("identity", None))
            metadata = options.pop("meta", options.pop("metadata", None))
            if options:
                msg = f"Unknown label options: {sorted(options)!r}"
                raise InvalidLabelSpec(msg)
            return cls(name=name, identity=identity, metadata=metadata)
        msg = f"Unsupported label type: {type(spec)!r}"
        raise InvalidLabelSpec(msg)

    def deep_dup(self) -> Label:
        """Return a copy whose identity, name and metadata are independently owned."""
        return Label(
            name=copy.deepcopy(self.name),
            identity=copy.deepcopy(self.identity),
            metadata=copy.deepcopy(self.metadata),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Label):
            return NotImplemented
        return bool(self.identity == other.identity)

    def __hash__(self) -> int:
        return hash(self.identity)

    def __repr__(self) -> str:
        if self.identity == self.name:
            return f"Label({self.name!r})"
        return f"Label({self.name!r}, identity={self.identity!r})"


def identities_ordered(a: Label, b: Label) -> int | None:
    """Compare two label identities.

    Returns -1, 0 or 1 when the identities are mutually orderable, and None
    when they are not (e.g. a string against an integer).
    """
    try:
        if a.identity == b.identity:
            return 0
        if a.identity < b.identity:  # type: ignore[operator]
            return -1
        if a.identity > b.identity:  # type: ignore[operator]
            return 1
    except TypeError:
        return None
    return None
