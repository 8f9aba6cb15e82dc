"""Logging configuration for the ``compartment`` package.

Usage in library modules:
    from compartment.log import get_logger
    logger = get_logger(__name__)

The root logger name is "compartment". Library code only emits records;
handlers are attached by :func:`configure_logging`, normally from the CLI.
"""

from __future__ import annotations

import logging
import sys

_LOGGER_NAME = "compartment"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a child logger under the ``compartment`` hierarchy.

    Parameters
    ----------
    name : str | None, optional
        Module ``__name__``, or ``None`` for the root ``compartment`` logger.

    Returns
    -------
    logging.Logger
        Logger instance.
    """

    if name is None or name == _LOGGER_NAME:
        return logging.getLogger(_LOGGER_NAME)
    # "compartment.resolution.graph" -> "compartment.graph"
    short = name.rsplit(".", 1)[-1]
    return logging.getLogger(f"{_LOGGER_NAME}.{short}")


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Configure the ``compartment`` logger hierarchy.

    Levels:
        --verbose / -v  -> DEBUG   (expansion and aggregation detail)
        (default)       -> INFO    (one line per build phase)
        --quiet / -q    -> WARNING (warnings and errors only)

    Parameters
    ----------
    verbose : bool, optional
        Enable DEBUG-level output.
    quiet : bool, optional
        Suppress INFO output (WARNING+ only).
    """

    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    root_logger = logging.getLogger(_LOGGER_NAME)
    root_logger.setLevel(level)

    # Replace rather than re-point: the old stream may already be closed.
    for stale in list(root_logger.handlers):
        root_logger.removeHandler(stale)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(_CompartmentFormatter())
    root_logger.addHandler(handler)
    root_logger.propagate = False


class _CompartmentFormatter(logging.Formatter):
    """Minimal formatter: level tag followed by the message."""

    def format(self, record: logging.LogRecord) -> str:
        return f"[{record.levelname.lower()}] {record.getMessage()}"


__all__ = ["configure_logging", "get_logger"]
