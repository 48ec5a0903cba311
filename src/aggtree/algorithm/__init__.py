"""algorithm subpackage: the operations behind Node's tree methods.

- compare: structural equality, hashing, ordering and deep copy
- filter:  predicate-driven pruning with orphan adoption
- merge:   structural merge and null-safe arithmetic combine
- reduce:  folds, sums, averages and per-child aggregates

Example::

    import operator
    from aggtree.algorithm import combine_nodes, filter_node

    combined = combine_nodes(office_1, office_2, operator.add)
    january = filter_node(combined, identity="January")
"""

from __future__ import annotations

from aggtree.algorithm.config import (
    Decision,
    FilterConfig,
    NullPolicy,
    OrphanStrategy,
    default_null_policy,
)
from aggtree.algorithm.compare import (
    compare_nodes,
    deep_dup,
    node_hash,
    nodes_equal,
    sorted_children,
)
from aggtree.algorithm.filter import compact_onelings, filter_node
from aggtree.algorithm.merge import combine_nodes, merge_nodes, null_safe
from aggtree.algorithm.reduce import average, child_sums, fold, is_empty, total

__all__ = [
    "Decision",
    "FilterConfig",
    "NullPolicy",
    "OrphanStrategy",
    "average",
    "child_sums",
    "combine_nodes",
    "compact_onelings",
    "compare_nodes",
    "deep_dup",
    "default_null_policy",
    "filter_node",
    "fold",
    "is_empty",
    "merge_nodes",
    "node_hash",
    "nodes_equal",
    "null_safe",
    "sorted_children",
    "total",
]
