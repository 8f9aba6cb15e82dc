"""Shared helpers for strict declarative mapping validation."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any


def validate_allowed_keys(
    mapping: Mapping[str, Any],
    *,
    field_name: str,
    allowed_keys: Iterable[str],
    error_type: type[Exception] = ValueError,
) -> None:
    """Validate that a mapping only contains allowed keys.

    Parameters
    ----------
    mapping : Mapping[str, Any]
        Mapping to validate.
    field_name : str
        Human-readable path used in error messages.
    allowed_keys : Iterable[str]
        Allowed key names for ``mapping``.
    error_type : type[Exception], optional
        Exception class raised on failure. Defaults to ``ValueError``.

    Raises
    ------
    Exception
        ``error_type`` if unknown keys are present.
    """

    allowed = set(str(key) for key in allowed_keys)
    unknown = sorted(str(key) for key in mapping if str(key) not in allowed)
    if unknown:
        raise error_type(f"{field_name} has unknown keys: {unknown}")


def validate_required_keys(
    mapping: Mapping[str, Any],
    *,
    field_name: str,
    required_keys: Iterable[str],
    error_type: type[Exception] = ValueError,
) -> None:
    """Validate that required keys are present in a mapping.

    Parameters
    ----------
    mapping : Mapping[str, Any]
        Mapping to validate.
    field_name : str
        Human-readable path used in error messages.
    required_keys : Iterable[str]
        Keys that must be present in ``mapping``.
    error_type : type[Exception], optional
        Exception class raised on failure. Defaults to ``ValueError``.

    Raises
    ------
    Exception
        ``error_type`` if required keys are missing.
    """

    required = set(str(key) for key in required_keys)
    missing = sorted(key for key in required if key not in mapping)
    if missing:
        raise error_type(f"{field_name} is missing required keys: {missing}")


def validate_exclusive_keys(
    mapping: Mapping[str, Any],
    *,
    field_name: str,
    aliases: Iterable[str],
    error_type: type[Exception] = ValueError,
) -> None:
    """Validate that at most one spelling of an aliased field is present."""

    present = [str(key) for key in aliases if key in mapping]
    if len(present) > 1:
        raise error_type(f"{field_name} sets aliased keys together: {present}")


__all__ = ["validate_allowed_keys", "validate_exclusive_keys", "validate_required_keys"]
