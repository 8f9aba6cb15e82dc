"""Aggregation of per-type source paths over a resolved chain."""

from __future__ import annotations

from compartment.log import get_logger
from compartment.resolution.chain import Chain

logger = get_logger(__name__)


def aggregate_paths(chain: Chain, type_name: str, *, root: str = "") -> list[str]:
    """Merge the source paths every chain component declares for one type.

    Parameters
    ----------
    chain : Chain
        Resolved chain, walked in order.
    type_name : str
        Type whose paths are collected.
    root : str, optional
        Prefix prepended verbatim to every surviving path.

    Returns
    -------
    list[str]
        Prefixed paths. A relative path declared by several components is kept
        once, at its first occurrence.
    """

    merged: dict[str, None] = {}
    for component in chain.components:
        for path in component.paths_for(type_name):
            merged.setdefault(path, None)

    logger.debug("collected %d %s paths from %d components", len(merged), type_name, len(chain))
    return [root + path for path in merged]


__all__ = ["aggregate_paths"]
