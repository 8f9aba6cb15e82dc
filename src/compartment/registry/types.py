"""Type registry: file types and the root path prefixed to their sources."""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from compartment.core.errors import UnknownType


class TypeRegistry:
    """Mapping from type name to root path; the last registration wins."""

    def __init__(self) -> None:
        self._roots: dict[str, str] = {}

    def register(self, name: str, root: str | None = "") -> None:
        """Register one type.

        Parameters
        ----------
        name : str
            Type name, e.g. ``"css"``.
        root : str | None, optional
            Prefix prepended verbatim to every aggregated path. ``None`` is
            treated as the empty string.
        """

        if not isinstance(name, str) or not name:
            raise ValueError(f"type names must be non-empty strings; got {name!r}")
        if root is not None and not isinstance(root, str):
            raise ValueError(f"type {name!r} root must be a string; got {root!r}")
        self._roots[name] = root or ""

    def register_many(self, types: Mapping[str, str | None]) -> None:
        """Register several types, applying :meth:`register` per entry."""

        for name, root in types.items():
            self.register(name, root)

    def lookup(self, name: str) -> str:
        """Return the root path of a registered type.

        Raises
        ------
        UnknownType
            If ``name`` was never registered.
        """

        try:
            return self._roots[name]
        except KeyError:
            raise UnknownType(name) from None

    def to_mapping(self) -> dict[str, str]:
        """Return a copy of the registered roots."""

        return dict(self._roots)

    def __contains__(self, name: object) -> bool:
        return name in self._roots

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._roots))

    def __len__(self) -> int:
        return len(self._roots)


__all__ = ["TypeRegistry"]
