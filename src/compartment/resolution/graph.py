"""Dependency-graph expansion of a component selection.

Expansion is a depth-first walk with pre/post insertion:

1. every key in a component's ``requires`` is expanded before the component
   is appended to the chain;
2. the component is appended;
3. every key in its ``provides`` is expanded after it.

Each key is appended at most once. The walk keeps an explicit frame stack
instead of recursing, and a state marker per key. Reaching a key whose
requirements are still being placed raises :class:`CyclicDependency`, as does
providing a key that is still open. A ``requires`` edge back to a key that is
already appended is satisfied.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from compartment.core.component import Component
from compartment.core.errors import ComponentNotFound, CyclicDependency
from compartment.log import get_logger
from compartment.resolution.chain import Chain

logger = get_logger(__name__)


class ComponentSource(Protocol):
    """Anything that can look up components by key (e.g. ``ManifestStore``)."""

    def get(self, key: str) -> Component:
        """Return a component or raise :class:`ComponentNotFound`."""


class VisitState(Enum):
    """Per-key expansion state. Keys never seen are implicitly unvisited."""

    IN_PROGRESS = "in_progress"
    INSERTED = "inserted"
    DONE = "done"


@dataclass(slots=True)
class _Frame:
    component: Component
    pending: Iterator[str]
    inserted: bool = False


def normalize_selection(selection: str | Iterable[str] | None, available: Iterable[str]) -> tuple[str, ...]:
    """Turn a user selection into an ordered tuple of keys.

    Parameters
    ----------
    selection : str | Iterable[str] | None
        ``None`` or an empty collection selects every key of ``available``.
        A string is split on commas; blank fragments are dropped.
    available : Iterable[str]
        Keys in manifest order, used when nothing is selected.

    Returns
    -------
    tuple[str, ...]
        Selected keys in request order.
    """

    if selection is None:
        return tuple(available)
    if isinstance(selection, str):
        keys = tuple(part.strip() for part in selection.split(",") if part.strip())
    else:
        keys = tuple(selection)
        if not all(isinstance(key, str) for key in keys):
            raise TypeError(f"selection must contain component keys; got {list(keys)!r}")
    return keys if keys else tuple(available)


def expand_selection(selection: Iterable[str], manifest: ComponentSource) -> Chain:
    """Expand selected keys into their ``requires``/``provides`` closure.

    Parameters
    ----------
    selection : Iterable[str]
        Keys to expand, in order.
    manifest : ComponentSource
        Component lookup.

    Returns
    -------
    Chain
        Every reachable component exactly once, in expansion order.

    Raises
    ------
    ComponentNotFound
        If the selection or any reachable edge names an unknown key.
    CyclicDependency
        If a key is reached again while its own expansion is open.
    """

    entries: list[Component] = []
    states: dict[str, VisitState] = {}
    path: list[str] = []

    for root in selection:
        _expand(root, manifest, entries=entries, states=states, path=path)

    logger.debug("expanded selection into %d components", len(entries))
    return Chain(entries)


def _expand(
    root: str,
    manifest: ComponentSource,
    *,
    entries: list[Component],
    states: dict[str, VisitState],
    path: list[str],
) -> None:
    frames: list[_Frame] = []

    def enter(key: str, referenced_by: str | None, *, via_provides: bool = False) -> None:
        state = states.get(key)
        if state is VisitState.DONE:
            return
        if state is VisitState.INSERTED and not via_provides:
            # Already appended, so a back-requirement is satisfied.
            return
        if state is not None:
            start = path.index(key)
            raise CyclicDependency([*path[start:], key])
        try:
            component = manifest.get(key)
        except ComponentNotFound:
            raise ComponentNotFound(key, referenced_by=referenced_by) from None
        states[key] = VisitState.IN_PROGRESS
        path.append(key)
        frames.append(_Frame(component=component, pending=iter(component.requires)))

    enter(root, None)
    while frames:
        frame = frames[-1]
        key = frame.component.key
        next_key = next(frame.pending, None)
        if next_key is not None:
            enter(next_key, key, via_provides=frame.inserted)
            continue

        if not frame.inserted:
            # Requirements are all placed; append, then walk what it provides.
            entries.append(frame.component)
            frame.inserted = True
            states[key] = VisitState.INSERTED
            frame.pending = iter(frame.component.provides)
            continue

        states[key] = VisitState.DONE
        path.pop()
        frames.pop()


def direct_dependencies(key: str, manifest: ComponentSource, *, edge: str) -> dict[str, Component]:
    """Return the immediate ``requires`` or ``provides`` records of a component.

    Parameters
    ----------
    key : str
        Component to inspect.
    manifest : ComponentSource
        Component lookup.
    edge : {"requires", "provides"}
        Which list to follow.

    Returns
    -------
    dict[str, Component]
        Referenced components in declared order (not transitive).

    Raises
    ------
    ComponentNotFound
        If ``key`` or one of the referenced keys is unknown.
    """

    if edge not in {"requires", "provides"}:
        raise ValueError(f"edge must be 'requires' or 'provides'; got {edge!r}")

    component = manifest.get(key)
    referenced: dict[str, Component] = {}
    for target in getattr(component, edge):
        try:
            referenced[target] = manifest.get(target)
        except ComponentNotFound:
            raise ComponentNotFound(target, referenced_by=key) from None
    return referenced


__all__ = [
    "ComponentSource",
    "VisitState",
    "direct_dependencies",
    "expand_selection",
    "normalize_selection",
]
