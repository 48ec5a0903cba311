"""aggtree - labeled trees for hierarchical numeric aggregation."""

from __future__ import annotations

# The tree package has to be initialised before the algorithm package.
from aggtree.tree import Label, Node, PayloadKind, TreeBuilder
from aggtree.algorithm.config import (
    Decision,
    FilterConfig,
    NullPolicy,
    OrphanStrategy,
    default_null_policy,
)
from aggtree.api import (
    build,
    combine,
    combine_all,
    compact_onelings,
    filter_tree,
    merge,
)
from aggtree.errors import (
    InvalidLabelSpec,
    InvalidOperation,
    NotALeaf,
    NotEnumerable,
    ShapeConflict,
    TreeError,
)
from aggtree.ids import SequentialIdSource, UUIDSource, use_id_source
from aggtree.protocols import IdSource
from aggtree.result import ChildSum

__version__: str = "0.1.0"
__all__: list[str] = [
    "ChildSum",
    "Decision",
    "FilterConfig",
    "IdSource",
    "InvalidLabelSpec",
    "InvalidOperation",
    "Label",
    "Node",
    "NotALeaf",
    "NotEnumerable",
    "NullPolicy",
    "OrphanStrategy",
    "PayloadKind",
    "SequentialIdSource",
    "ShapeConflict",
    "TreeBuilder",
    "TreeError",
    "UUIDSource",
    "build",
    "combine",
    "combine_all",
    "compact_onelings",
    "default_null_policy",
    "filter_tree",
    "merge",
    "use_id_source",
]
