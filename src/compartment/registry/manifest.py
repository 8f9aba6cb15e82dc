"""Manifest store: the complete mapping of component keys to records.

The store performs no cross-reference validation when components are added.
Dangling ``requires``/``provides`` keys are reported by resolution, which is
the only place that walks the graph.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Any

from compartment.core.component import Component, component_from_mapping, components_from_mapping
from compartment.core.config_loading import load_config_mapping
from compartment.core.errors import ComponentNotFound
from compartment.log import get_logger

logger = get_logger(__name__)


class ManifestStore:
    """Ordered registry of :class:`Component` records keyed by component key.

    Iteration follows insertion order, which is also the order used when a
    resolution is requested without an explicit selection.
    """

    def __init__(self, components: Mapping[str, Any] | None = None) -> None:
        self._components: dict[str, Component] = {}
        if components is not None:
            self.set_manifest(components)

    def set_manifest(self, components: Mapping[str, Any]) -> None:
        """Replace the whole manifest.

        Every record is parsed before anything is replaced, so a malformed
        record leaves the previous manifest untouched.

        Parameters
        ----------
        components : Mapping[str, Any]
            Mapping of key to raw record or :class:`Component`.

        Raises
        ------
        ManifestLoadError
            If any record is malformed.
        """

        parsed = components_from_mapping(components)
        self._components = parsed
        logger.debug("manifest replaced with %d components", len(parsed))

    def load(self, path: str | Path) -> None:
        """Replace the manifest with the contents of a JSON/YAML file."""

        self.set_manifest(load_config_mapping(path))

    def clear(self) -> None:
        """Remove every component."""

        self._components = {}

    def add(self, key: str, record: Mapping[str, Any] | Component) -> Component:
        """Add or replace one component and return the stored record."""

        component = component_from_mapping(key, record)
        self._components[key] = component
        return component

    def add_many(self, components: Mapping[str, Any]) -> tuple[Component, ...]:
        """Add or replace several components, all-or-nothing."""

        parsed = components_from_mapping(components)
        self._components.update(parsed)
        return tuple(parsed.values())

    def remove(self, key: str) -> None:
        """Remove one component; removing an absent key is a no-op.

        Chains resolved earlier keep referring to the removed record until
        they are rebuilt.
        """

        self._components.pop(key, None)

    def get(self, key: str) -> Component:
        """Return a component by key.

        Raises
        ------
        ComponentNotFound
            If ``key`` is not registered.
        """

        try:
            return self._components[key]
        except KeyError:
            raise ComponentNotFound(key) from None

    def keys(self) -> tuple[str, ...]:
        """Return every key in store order."""

        return tuple(self._components)

    def to_mapping(self) -> dict[str, dict[str, Any]]:
        """Return a JSON-serializable copy of the manifest."""

        return {key: component.to_mapping() for key, component in self._components.items()}

    def __contains__(self, key: object) -> bool:
        return key in self._components

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._components))

    def __len__(self) -> int:
        return len(self._components)


__all__ = ["ManifestStore"]
