"""Error kinds raised by manifest handling and chain resolution.

Every error derives from :class:`CompartmentError` and from the builtin
exception that best describes it, so callers may catch either the package
hierarchy or the usual ``KeyError``/``ValueError``/``RuntimeError``.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path


class CompartmentError(Exception):
    """Base class for all package errors."""


class ComponentNotFound(CompartmentError, KeyError):
    """A selection, dependency or lookup names a key absent from the manifest.

    Parameters
    ----------
    key : str
        Missing component key.
    referenced_by : str | None, optional
        Component whose ``requires``/``provides`` list referenced ``key``.
        ``None`` when the key came from a selection or a direct lookup.
    """

    def __init__(self, key: str, *, referenced_by: str | None = None) -> None:
        self.key = key
        self.referenced_by = referenced_by
        if referenced_by is None:
            message = f"invalid component {key!r}"
        else:
            message = f"invalid component {key!r} referenced by {referenced_by!r}"
        super().__init__(message)

    def __str__(self) -> str:
        return str(self.args[0])


class UnknownType(CompartmentError, KeyError):
    """A path lookup names a type that was never registered."""

    def __init__(self, type_name: str) -> None:
        self.type_name = type_name
        super().__init__(f"invalid type {type_name!r}")

    def __str__(self) -> str:
        return str(self.args[0])


class CyclicDependency(CompartmentError, ValueError):
    """A component was reached again while its own expansion was in progress.

    Parameters
    ----------
    cycle : Sequence[str]
        Key path closing the loop; the first and last entries are equal.
    """

    def __init__(self, cycle: Sequence[str]) -> None:
        self.cycle = tuple(cycle)
        super().__init__("cyclic dependency: " + " -> ".join(self.cycle))


class ChainNotBuilt(CompartmentError, RuntimeError):
    """Paths were requested before any chain was resolved."""

    def __init__(self, message: str = "chain must be resolved before paths can be collected") -> None:
        super().__init__(message)


class ManifestLoadError(CompartmentError, ValueError):
    """A manifest source is missing, unreadable or malformed.

    Parameters
    ----------
    message : str
        Human-readable description of the problem.
    path : str | pathlib.Path | None, optional
        Source file, when the manifest came from disk.
    """

    def __init__(self, message: str, *, path: str | Path | None = None) -> None:
        self.path = Path(path) if path is not None else None
        if self.path is not None:
            message = f"{self.path}: {message}"
        super().__init__(message)


__all__ = [
    "ChainNotBuilt",
    "ComponentNotFound",
    "CompartmentError",
    "CyclicDependency",
    "ManifestLoadError",
    "UnknownType",
]
