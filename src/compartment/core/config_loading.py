"""Load declarative manifest and build-config files.

The loader supports JSON and YAML mappings with strict root-type validation.
Every failure is reported as :class:`~compartment.core.errors.ManifestLoadError`.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from compartment.core.errors import ManifestLoadError
from compartment.log import get_logger

SUPPORTED_CONFIG_SUFFIXES: tuple[str, ...] = (".json", ".yaml", ".yml")

logger = get_logger(__name__)


def load_config_mapping(path: str | Path) -> dict[str, Any]:
    """Load one JSON/YAML file whose root is an object mapping.

    Parameters
    ----------
    path : str | pathlib.Path
        File path. Supported suffixes are `.json`, `.yaml`, and `.yml`.

    Returns
    -------
    dict[str, Any]
        Parsed mapping.

    Raises
    ------
    ManifestLoadError
        If the file is missing, the suffix is unsupported, the content cannot
        be parsed, or the root is not an object mapping.
    """

    config_path = Path(path)
    suffix = config_path.suffix.lower()

    if suffix not in SUPPORTED_CONFIG_SUFFIXES:
        supported = ", ".join(SUPPORTED_CONFIG_SUFFIXES)
        raise ManifestLoadError(
            f"unsupported file extension {suffix!r}; expected one of {supported}",
            path=config_path,
        )
    if not config_path.is_file():
        raise ManifestLoadError("file does not exist", path=config_path)

    try:
        with config_path.open("r", encoding="utf-8") as handle:
            if suffix == ".json":
                raw = json.load(handle)
            else:
                raw = yaml.safe_load(handle)
    except (json.JSONDecodeError, yaml.YAMLError, UnicodeDecodeError) as exc:
        raise ManifestLoadError(f"cannot parse file: {exc}", path=config_path) from exc
    except OSError as exc:
        raise ManifestLoadError(f"cannot read file: {exc}", path=config_path) from exc

    if not isinstance(raw, dict):
        raise ManifestLoadError("root must be a JSON/YAML object", path=config_path)

    logger.debug("loaded %d top-level entries from %s", len(raw), config_path)
    return raw


__all__ = ["SUPPORTED_CONFIG_SUFFIXES", "load_config_mapping"]
