"""Manifest store and type registry."""

from .manifest import ManifestStore
from .types import TypeRegistry

__all__ = ["ManifestStore", "TypeRegistry"]
