"""Category filtering of resolved chains."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from compartment.core.component import Component
from compartment.resolution.chain import Chain

CategoryValue = str | Iterable[str] | None


@dataclass(frozen=True, slots=True)
class CategoryFilter:
    """Normalized category filter.

    Parameters
    ----------
    categories : frozenset[str] | None
        Accepted categories, or ``None`` when no filtering applies.

    Notes
    -----
    A single category and a set of categories share one representation: a
    single string becomes a one-element set, so both match by equality.
    """

    categories: frozenset[str] | None = None

    @classmethod
    def from_value(cls, value: CategoryValue | CategoryFilter) -> CategoryFilter:
        """Build a filter from ``None``, one category or several categories.

        ``None``, the empty string and an empty collection all mean "no
        filter".
        """

        if isinstance(value, CategoryFilter):
            return value
        if value is None or value == "":
            return cls()
        if isinstance(value, str):
            return cls(frozenset((value,)))

        categories = frozenset(value)
        if not all(isinstance(item, str) for item in categories):
            raise TypeError(f"category filter must contain strings; got {sorted(map(repr, categories))}")
        categories = frozenset(item for item in categories if item)
        return cls(categories or None)

    @property
    def active(self) -> bool:
        return self.categories is not None

    def matches(self, component: Component) -> bool:
        """Return whether ``component`` survives this filter."""

        if self.categories is None:
            return True
        return bool(component.category) and component.category in self.categories


def filter_chain(chain: Chain, category: CategoryValue | CategoryFilter) -> Chain:
    """Return a new chain keeping only components accepted by ``category``.

    Components without a category are dropped whenever a filter is active.
    """

    category_filter = CategoryFilter.from_value(category)
    if not category_filter.active:
        return chain
    return Chain(component for component in chain.components if category_filter.matches(component))


__all__ = ["CategoryFilter", "CategoryValue", "filter_chain"]
