"""Top-level package for ``compartment``.

The package resolves a manifest of named, inter-dependent components into an
ordered, de-duplicated build chain:

1. a :class:`~compartment.registry.ManifestStore` holds component records,
2. :func:`~compartment.resolution.expand_selection` walks ``requires`` and
   ``provides`` edges from a selection,
3. the chain is sorted by priority and optionally filtered by category,
4. :func:`~compartment.resolution.aggregate_paths` merges per-type source
   paths, prefixed by the roots in a :class:`~compartment.registry.TypeRegistry`.

:class:`~compartment.resolver.Compartment` ties these steps together behind a
single stateful facade.
"""

from .config import BuildResult, build_from_config, build_from_config_file, build_summary
from .core import (
    DEFAULT_PRIORITY,
    BuildEvent,
    BuildPhase,
    ChainNotBuilt,
    Component,
    ComponentNotFound,
    CompartmentError,
    CyclicDependency,
    EventRecorder,
    ManifestLoadError,
    UnknownType,
)
from .registry import ManifestStore, TypeRegistry
from .resolution import CategoryFilter, Chain, aggregate_paths, expand_selection, resolve_chain, sort_chain
from .resolver import Compartment

__all__ = [
    "BuildEvent",
    "BuildPhase",
    "BuildResult",
    "CategoryFilter",
    "Chain",
    "ChainNotBuilt",
    "Compartment",
    "CompartmentError",
    "Component",
    "ComponentNotFound",
    "CyclicDependency",
    "DEFAULT_PRIORITY",
    "EventRecorder",
    "ManifestLoadError",
    "ManifestStore",
    "TypeRegistry",
    "UnknownType",
    "aggregate_paths",
    "build_from_config",
    "build_from_config_file",
    "build_summary",
    "expand_selection",
    "resolve_chain",
    "sort_chain",
]
