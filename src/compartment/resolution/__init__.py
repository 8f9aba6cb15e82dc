"""Pure chain resolution: expansion, ordering, category filtering and paths."""

from .categories import CategoryFilter, CategoryValue, filter_chain
from .chain import Chain
from .graph import ComponentSource, VisitState, direct_dependencies, expand_selection, normalize_selection
from .ordering import (
    SUPPORTED_ORDERINGS,
    ChainOrdering,
    dependency_sort_key,
    priority_sort_key,
    sort_chain,
)
from .paths import aggregate_paths
from .pipeline import resolve_chain

__all__ = [
    "CategoryFilter",
    "CategoryValue",
    "Chain",
    "ChainOrdering",
    "ComponentSource",
    "SUPPORTED_ORDERINGS",
    "VisitState",
    "aggregate_paths",
    "dependency_sort_key",
    "direct_dependencies",
    "expand_selection",
    "filter_chain",
    "normalize_selection",
    "priority_sort_key",
    "resolve_chain",
    "sort_chain",
]
