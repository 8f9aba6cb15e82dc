"""Selection -> expansion -> filter -> ordering, as one pure function."""

from __future__ import annotations

from collections.abc import Iterable

from compartment.resolution.categories import CategoryFilter, CategoryValue, filter_chain
from compartment.resolution.chain import Chain
from compartment.resolution.graph import ComponentSource, expand_selection
from compartment.resolution.ordering import ChainOrdering, sort_chain


def resolve_chain(
    selection: Iterable[str],
    manifest: ComponentSource,
    *,
    category: CategoryValue | CategoryFilter = None,
    ordering: ChainOrdering = "priority",
) -> Chain:
    """Resolve an already-normalized selection into a finished chain.

    The function holds no state between calls, so concurrent callers only
    share the manifest they pass in.

    Parameters
    ----------
    selection : Iterable[str]
        Keys to expand, in order.
    manifest : ComponentSource
        Component lookup.
    category : str | Iterable[str] | CategoryFilter | None, optional
        Category filter applied after expansion.
    ordering : {"priority", "dependency"}, optional
        Ordering strategy, see :func:`~compartment.resolution.ordering.sort_chain`.

    Returns
    -------
    Chain
        Expanded, sorted and filtered chain.
    """

    expanded = expand_selection(selection, manifest)
    ordered = sort_chain(expanded, ordering=ordering)
    return filter_chain(ordered, category)


__all__ = ["resolve_chain"]
