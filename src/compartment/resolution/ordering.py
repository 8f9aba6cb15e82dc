"""Deterministic ordering of resolved chains."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Literal

from compartment.core.component import Component
from compartment.resolution.chain import Chain

ChainOrdering = Literal["priority", "dependency"]
SUPPORTED_ORDERINGS: tuple[ChainOrdering, ...] = ("priority", "dependency")


def priority_sort_key(component: Component) -> tuple[int | float, str]:
    """Total order ``(priority or default, key)``."""

    return (component.effective_priority, component.key)


def dependency_sort_key(component: Component) -> int | float:
    """Priority only; the stable sort keeps resolution order for ties."""

    return component.effective_priority


_SORT_KEYS: dict[str, Callable[[Component], Any]] = {
    "priority": priority_sort_key,
    "dependency": dependency_sort_key,
}


def sort_chain(
    chain: Chain,
    *,
    ordering: ChainOrdering = "priority",
    sort_key: Callable[[Component], Any] | None = None,
) -> Chain:
    """Return a new chain sorted by priority.

    Parameters
    ----------
    chain : Chain
        Resolved chain.
    ordering : {"priority", "dependency"}, optional
        ``"priority"`` sorts by ``(priority, key)`` ascending and is a total
        order for any input. ``"dependency"`` sorts by priority alone and keeps
        the resolution order of equal-priority components, so requirements stay
        ahead of their dependents unless priorities say otherwise.
    sort_key : Callable[[Component], Any] | None, optional
        Custom key overriding ``ordering``. It must be monotonic in whatever
        it projects; ``sorted`` is stable.

    Returns
    -------
    Chain
        Sorted chain.

    Raises
    ------
    ValueError
        If ``ordering`` is not supported.
    """

    if sort_key is None:
        try:
            sort_key = _SORT_KEYS[ordering]
        except KeyError:
            supported = ", ".join(SUPPORTED_ORDERINGS)
            raise ValueError(f"unsupported ordering {ordering!r}; expected one of {supported}") from None
    return Chain(sorted(chain.components, key=sort_key))


__all__ = [
    "ChainOrdering",
    "SUPPORTED_ORDERINGS",
    "dependency_sort_key",
    "priority_sort_key",
    "sort_chain",
]
