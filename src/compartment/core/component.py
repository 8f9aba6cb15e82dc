"""Immutable component records and manifest-record parsing.

A manifest maps component keys to loosely-typed records (usually straight out
of ``json.load``). :func:`component_from_mapping` normalizes one record into a
frozen :class:`Component`, resolving field aliases and rejecting malformed
values up front so resolution never has to second-guess its input.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from compartment.core.config_validation import validate_allowed_keys, validate_exclusive_keys
from compartment.core.errors import ManifestLoadError

DEFAULT_PRIORITY = 100
"""Priority used for ordering whenever a component leaves it unset."""

COMPONENT_FIELDS: tuple[str, ...] = (
    "category",
    "require",
    "requires",
    "provide",
    "provides",
    "priority",
    "order",
    "source",
    "name",
    "key",
)


@dataclass(frozen=True, slots=True)
class Component:
    """One named unit of the manifest.

    Parameters
    ----------
    key : str
        Unique component key.
    category : str | None, optional
        Classification label used by category filtering.
    requires : tuple[str, ...], optional
        Keys that must appear in the chain before this component.
    provides : tuple[str, ...], optional
        Keys pulled into the chain after this component.
    priority : int | float | None, optional
        Ordering weight. ``None`` means :data:`DEFAULT_PRIORITY`.
    source : Mapping[str, tuple[str, ...]], optional
        Relative source paths per type name. Types a component does not ship
        are absent rather than empty.
    """

    key: str
    category: str | None = None
    requires: tuple[str, ...] = ()
    provides: tuple[str, ...] = ()
    priority: int | float | None = None
    source: Mapping[str, tuple[str, ...]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Read-only view over a private copy; records are shared between chains.
        object.__setattr__(self, "source", MappingProxyType(dict(self.source)))

    @property
    def effective_priority(self) -> int | float:
        """Priority used for ordering, with the default applied."""

        return DEFAULT_PRIORITY if self.priority is None else self.priority

    def paths_for(self, type_name: str) -> tuple[str, ...]:
        """Return declared relative paths for one type (empty if none)."""

        return self.source.get(type_name, ())

    def to_mapping(self) -> dict[str, Any]:
        """Return a JSON-serializable manifest record for this component."""

        record: dict[str, Any] = {}
        if self.category is not None:
            record["category"] = self.category
        if self.requires:
            record["requires"] = list(self.requires)
        if self.provides:
            record["provides"] = list(self.provides)
        if self.priority is not None:
            record["priority"] = self.priority
        if self.source:
            record["source"] = {name: list(paths) for name, paths in self.source.items()}
        return record


def component_from_mapping(key: str, record: Mapping[str, Any] | Component) -> Component:
    """Parse one manifest record into a :class:`Component`.

    Parameters
    ----------
    key : str
        Component key the record is registered under.
    record : Mapping[str, Any] | Component
        Raw record, or an existing component (re-keyed when needed).

    Returns
    -------
    Component
        Normalized immutable component.

    Raises
    ------
    ManifestLoadError
        If the record has unknown fields, conflicting aliases or values of the
        wrong shape.
    """

    if not isinstance(key, str) or not key:
        raise ManifestLoadError(f"component keys must be non-empty strings; got {key!r}")

    if isinstance(record, Component):
        if record.key == key:
            return record
        return Component(
            key=key,
            category=record.category,
            requires=record.requires,
            provides=record.provides,
            priority=record.priority,
            source=record.source,
        )

    field_name = f"component {key!r}"
    if record is None:
        record = {}
    if not isinstance(record, Mapping):
        raise ManifestLoadError(f"{field_name} must be an object; got {type(record).__name__}")

    validate_allowed_keys(
        record,
        field_name=field_name,
        allowed_keys=COMPONENT_FIELDS,
        error_type=ManifestLoadError,
    )
    for aliases in (("require", "requires"), ("provide", "provides"), ("priority", "order")):
        validate_exclusive_keys(
            record,
            field_name=field_name,
            aliases=aliases,
            error_type=ManifestLoadError,
        )

    category = record.get("category")
    if category is not None and not isinstance(category, str):
        raise ManifestLoadError(f"{field_name} category must be a string")

    return Component(
        key=key,
        category=category or None,
        requires=_coerce_keys(_first_present(record, "requires", "require"), field_name=f"{field_name} requires"),
        provides=_coerce_keys(_first_present(record, "provides", "provide"), field_name=f"{field_name} provides"),
        priority=_coerce_priority(_first_present(record, "priority", "order"), field_name=field_name),
        source=_coerce_source(record.get("source"), field_name=f"{field_name} source"),
    )


def components_from_mapping(manifest: Mapping[str, Any]) -> dict[str, Component]:
    """Parse a whole manifest mapping, preserving its key order."""

    if not isinstance(manifest, Mapping):
        raise ManifestLoadError(f"manifest must be an object; got {type(manifest).__name__}")
    return {str(key): component_from_mapping(str(key), record) for key, record in manifest.items()}


def _first_present(record: Mapping[str, Any], *names: str) -> Any:
    for name in names:
        if name in record:
            return record[name]
    return None


def _coerce_keys(raw: Any, *, field_name: str) -> tuple[str, ...]:
    """Normalize a key list; a bare string means a one-element list."""

    if raw is None:
        return ()
    if isinstance(raw, str):
        return (raw,)
    if not isinstance(raw, Iterable) or isinstance(raw, Mapping):
        raise ManifestLoadError(f"{field_name} must be a list of component keys")

    keys = tuple(raw)
    if not all(isinstance(item, str) and item for item in keys):
        raise ManifestLoadError(f"{field_name} must contain non-empty strings; got {list(keys)!r}")
    return keys


def _coerce_priority(raw: Any, *, field_name: str) -> int | float | None:
    if raw is None:
        return None
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise ManifestLoadError(f"{field_name} priority must be a number; got {raw!r}")
    return raw


def _coerce_source(raw: Any, *, field_name: str) -> dict[str, tuple[str, ...]]:
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise ManifestLoadError(f"{field_name} must map type names to path lists")

    source: dict[str, tuple[str, ...]] = {}
    for type_name, paths in raw.items():
        if isinstance(paths, str):
            paths = [paths]
        if not isinstance(paths, Iterable) or isinstance(paths, Mapping):
            raise ManifestLoadError(f"{field_name}.{type_name} must be a list of paths")
        paths = tuple(paths)
        if not all(isinstance(path, str) for path in paths):
            raise ManifestLoadError(f"{field_name}.{type_name} must contain strings")
        source[str(type_name)] = paths
    return source


__all__ = [
    "COMPONENT_FIELDS",
    "Component",
    "DEFAULT_PRIORITY",
    "component_from_mapping",
    "components_from_mapping",
]
