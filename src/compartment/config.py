"""Config-driven chain builds.

This module turns declarative mapping/JSON/YAML configs into a resolved chain
and the per-type path lists a packaging step consumes.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from compartment.core.config_loading import load_config_mapping
from compartment.core.config_validation import validate_allowed_keys, validate_required_keys
from compartment.resolution import SUPPORTED_ORDERINGS, Chain
from compartment.resolver import Compartment

BUILD_CONFIG_KEYS: tuple[str, ...] = ("manifest", "types", "components", "category", "ordering", "outputs")


@dataclass(frozen=True, slots=True)
class BuildResult:
    """Outcome of one config-driven build.

    Parameters
    ----------
    chain : Chain
        Resolved chain.
    paths : dict[str, tuple[str, ...]]
        Aggregated paths per requested type, in request order.
    ordering : str
        Ordering strategy used.
    """

    chain: Chain
    paths: dict[str, tuple[str, ...]]
    ordering: str = "priority"


def load_build_config(path: str | Path) -> dict[str, Any]:
    """Load a build config file (`.json`, `.yaml`, or `.yml`) as a dictionary."""

    return load_config_mapping(path)


def build_from_config(config: Mapping[str, Any], *, base_dir: str | Path | None = None) -> BuildResult:
    """Run one build from declarative configuration.

    Parameters
    ----------
    config : Mapping[str, Any]
        Build configuration mapping. ``manifest`` is required and is either a
        manifest file path or an inline manifest mapping.
    base_dir : str | pathlib.Path | None, optional
        Directory relative manifest paths are resolved against. Defaults to
        the current working directory.

    Returns
    -------
    BuildResult
        Resolved chain and aggregated paths.

    Raises
    ------
    ValueError
        If the config has unknown/missing keys or values of the wrong shape.
    """

    validate_allowed_keys(config, field_name="config", allowed_keys=BUILD_CONFIG_KEYS)
    validate_required_keys(config, field_name="config", required_keys=("manifest",))

    builder = Compartment()
    manifest = config["manifest"]
    if isinstance(manifest, Mapping):
        builder.set_manifest(manifest)
    elif isinstance(manifest, (str, Path)):
        manifest_path = Path(manifest)
        if not manifest_path.is_absolute() and base_dir is not None:
            manifest_path = Path(base_dir) / manifest_path
        builder.load_manifest(manifest_path)
    else:
        raise ValueError("config.manifest must be a file path or a manifest mapping")

    types = config.get("types", {})
    if not isinstance(types, Mapping):
        raise ValueError("config.types must be a mapping of type name to root path")
    builder.register_types(types)

    ordering = str(config.get("ordering", "priority"))
    if ordering not in SUPPORTED_ORDERINGS:
        raise ValueError(f"config.ordering must be one of {list(SUPPORTED_ORDERINGS)}; got {ordering!r}")

    components = _parse_key_list(config.get("components"), field_name="config.components")
    category = _parse_key_list(config.get("category"), field_name="config.category")
    chain = builder.resolve(components, category, ordering=ordering).chain

    outputs = config.get("outputs")
    if outputs is None:
        outputs = list(builder.types)
    elif isinstance(outputs, str) or not isinstance(outputs, list):
        raise ValueError("config.outputs must be a list of type names")

    paths = {str(type_name): tuple(builder.get_paths(str(type_name))) for type_name in outputs}
    return BuildResult(chain=chain, paths=paths, ordering=ordering)


def _parse_key_list(raw: Any, *, field_name: str) -> str | list[str] | None:
    if raw is None or isinstance(raw, str):
        return raw
    if not isinstance(raw, list) or not all(isinstance(item, str) for item in raw):
        raise ValueError(f"{field_name} must be a string or a list of strings; got {raw!r}")
    return raw


def build_from_config_file(path: str | Path) -> BuildResult:
    """Load a build config file and run it; manifest paths are file-relative."""

    config_path = Path(path)
    return build_from_config(load_build_config(config_path), base_dir=config_path.parent)


def build_summary(result: BuildResult) -> dict[str, Any]:
    """Build a compact JSON-serializable summary of a build."""

    return {
        "ordering": result.ordering,
        "chain": list(result.chain),
        "components": result.chain.to_records(),
        "paths": {type_name: list(paths) for type_name, paths in result.paths.items()},
    }


__all__ = [
    "BUILD_CONFIG_KEYS",
    "BuildResult",
    "build_from_config",
    "build_from_config_file",
    "build_summary",
    "load_build_config",
]
