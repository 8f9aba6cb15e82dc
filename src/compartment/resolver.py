"""Stateful resolver facade.

:class:`Compartment` bundles a manifest store, a type registry, a notification
hub and the most recently resolved chain behind the public operation surface.
Resolution itself is delegated to the pure functions in
:mod:`compartment.resolution`; the instance only swaps in the finished chain
once a resolution has fully succeeded, so a failing call never leaves a
partially built chain behind.

Notes
-----
Instances are not meant to be shared between threads. Two overlapping
``resolve`` calls each build their own chain, but which one ends up cached is
unspecified; use one instance per thread or guard calls with a lock.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from compartment.core.component import Component
from compartment.core.errors import ChainNotBuilt
from compartment.core.events import BuildPhase, Listener, NotificationHub, Subscription
from compartment.log import get_logger
from compartment.registry import ManifestStore, TypeRegistry
from compartment.resolution import (
    CategoryFilter,
    CategoryValue,
    Chain,
    ChainOrdering,
    aggregate_paths,
    direct_dependencies,
    normalize_selection,
    resolve_chain,
)

logger = get_logger(__name__)


class Compartment:
    """Resolve named components into ordered, de-duplicated build chains.

    Parameters
    ----------
    manifest : Mapping[str, Any] | None, optional
        Initial manifest mapping.
    types : Mapping[str, str] | None, optional
        Initial type roots.

    Notes
    -----
    Mutating methods return ``self`` so calls can be chained, e.g.
    ``Compartment().register_type("css", "/css/").resolve("h").get_paths("css")``.
    """

    def __init__(self, manifest: Mapping[str, Any] | None = None, types: Mapping[str, str] | None = None) -> None:
        self._manifest = ManifestStore(manifest)
        self._types = TypeRegistry()
        self._hub = NotificationHub()
        self._chain: Chain | None = None
        if types is not None:
            self._types.register_many(types)

    # Types

    def register_type(self, name: str, root: str | None = "") -> Compartment:
        """Register a file type and the root path prefixed to its sources."""

        self._types.register(name, root)
        return self

    def register_types(self, types: Mapping[str, str | None]) -> Compartment:
        """Register several file types at once."""

        self._types.register_many(types)
        return self

    # Manifest

    def load_manifest(self, path: str | Path) -> Compartment:
        """Replace the manifest with a JSON/YAML manifest file.

        Raises
        ------
        ManifestLoadError
            If the file is missing or malformed.
        """

        self._manifest.load(path)
        logger.info("loaded manifest %s (%d components)", path, len(self._manifest))
        return self

    def set_manifest(self, components: Mapping[str, Any]) -> Compartment:
        """Replace the whole manifest atomically."""

        self._manifest.set_manifest(components)
        return self

    def clear_manifest(self) -> Compartment:
        """Empty the manifest."""

        self._manifest.clear()
        return self

    def add_component(
        self,
        key: str,
        category: str | None = None,
        *,
        source: Mapping[str, Iterable[str]] | None = None,
        requires: Iterable[str] = (),
        provides: Iterable[str] = (),
        priority: int | float | None = None,
    ) -> Compartment:
        """Add (or replace) one component from keyword fields."""

        self._manifest.add(
            key,
            {
                "category": category,
                "requires": list(requires),
                "provides": list(provides),
                "priority": priority,
                "source": {name: list(paths) for name, paths in (source or {}).items()},
            },
        )
        return self

    def add_components(self, components: Mapping[str, Any]) -> Compartment:
        """Add (or replace) several components from raw manifest records."""

        self._manifest.add_many(components)
        return self

    def remove_component(self, key: str) -> Compartment:
        """Remove one component. Chains resolved earlier are not rebuilt."""

        self._manifest.remove(key)
        return self

    # Resolution

    def resolve(
        self,
        selection: str | Iterable[str] | None = None,
        category: CategoryValue | CategoryFilter = None,
        *,
        ordering: ChainOrdering = "priority",
    ) -> Compartment:
        """Resolve a selection into a chain and cache it on the instance.

        Parameters
        ----------
        selection : str | Iterable[str] | None, optional
            Keys to resolve. ``None`` or empty resolves the whole manifest; a
            string may hold several comma-separated keys.
        category : str | Iterable[str] | CategoryFilter | None, optional
            Keep only components in these categories.
        ordering : {"priority", "dependency"}, optional
            Chain ordering strategy.

        Returns
        -------
        Compartment
            ``self``; the result is available as :attr:`chain`.

        Raises
        ------
        ComponentNotFound
            If any selected or referenced key is missing.
        CyclicDependency
            If the reachable graph contains a cycle.
        """

        keys = normalize_selection(selection, self._manifest.keys())
        category_filter = CategoryFilter.from_value(category)
        self._hub.emit(BuildPhase.PRE_BUILD, keys)

        chain = resolve_chain(keys, self._manifest, category=category_filter, ordering=ordering)

        self._hub.emit(BuildPhase.POST_BUILD, chain)
        self._chain = chain
        logger.info("resolved %d selected keys into %d components", len(keys), len(chain))
        return self

    def build(self, *args: Any, **kwargs: Any) -> Chain:
        """Resolve like :meth:`resolve` and return the chain directly."""

        return self.resolve(*args, **kwargs).chain

    def get_paths(self, type_name: str, chain: Chain | None = None) -> list[str]:
        """Return the prefixed, de-duplicated source paths of one type.

        Parameters
        ----------
        type_name : str
            Registered type name.
        chain : Chain | None, optional
            Chain to aggregate; defaults to the last resolved chain.

        Raises
        ------
        ChainNotBuilt
            If no chain was given and none has been resolved yet.
        UnknownType
            If ``type_name`` is not registered.
        """

        if chain is None:
            chain = self.chain
        root = self._types.lookup(type_name)
        paths = aggregate_paths(chain, type_name, root=root)
        self._hub.emit(BuildPhase.PATHS, paths, type_name=type_name)
        return paths

    # Introspection

    def direct_requires(self, key: str) -> dict[str, Component]:
        """Return the components ``key`` requires directly."""

        return direct_dependencies(key, self._manifest, edge="requires")

    def direct_provides(self, key: str) -> dict[str, Component]:
        """Return the components ``key`` provides directly."""

        return direct_dependencies(key, self._manifest, edge="provides")

    @property
    def chain(self) -> Chain:
        """Most recently resolved chain.

        Raises
        ------
        ChainNotBuilt
            If nothing has been resolved yet.
        """

        if self._chain is None:
            raise ChainNotBuilt()
        return self._chain

    @property
    def is_built(self) -> bool:
        return self._chain is not None

    @property
    def manifest(self) -> ManifestStore:
        return self._manifest

    @property
    def types(self) -> dict[str, str]:
        """Copy of the registered type roots."""

        return self._types.to_mapping()

    # Notifications

    def subscribe(self, listener: Listener, phases: Iterable[BuildPhase | str] | None = None) -> Subscription:
        """Register a build listener; see :class:`~compartment.core.events.NotificationHub`."""

        return self._hub.subscribe(listener, phases)

    def unsubscribe(self, subscription: Subscription) -> None:
        self._hub.unsubscribe(subscription)


__all__ = ["Compartment"]
