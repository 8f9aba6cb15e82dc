"""Resolved chain value type."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from compartment.core.component import Component


class Chain(Mapping[str, Component]):
    """Ordered, key-unique, read-only mapping of component key to record.

    A chain is produced wholesale by one resolution and never mutated
    afterwards; sorting and filtering return new chains.

    Parameters
    ----------
    components : Iterable[Component], optional
        Components in chain order. Later duplicates of a key are ignored.
    """

    __slots__ = ("_entries",)

    def __init__(self, components: Iterable[Component] = ()) -> None:
        entries: dict[str, Component] = {}
        for component in components:
            entries.setdefault(component.key, component)
        self._entries = entries

    def __getitem__(self, key: str) -> Component:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"Chain({list(self._entries)!r})"

    @property
    def components(self) -> tuple[Component, ...]:
        """Records in chain order."""

        return tuple(self._entries.values())

    def to_records(self) -> list[dict[str, Any]]:
        """Return JSON-serializable records in chain order, keyed by ``key``."""

        return [{"key": key, **component.to_mapping()} for key, component in self._entries.items()]


__all__ = ["Chain"]
