"""Shared manifest fixtures for the test suite."""

from __future__ import annotations

import json
import logging
from typing import Any

import pytest


def sample_manifest() -> dict[str, Any]:
    """Return the eight-component manifest used across resolution tests."""

    return {
        "a": {"category": "lib", "source": {"css": ["a.css"]}},
        "b": {"category": "lib", "require": ["a"], "source": {"css": ["b.css"]}},
        "c": {"category": "lib", "source": {"css": ["c.css"]}},
        "d": {"category": "lib", "require": ["c"], "source": {"css": ["d.css"]}},
        "e": {"category": "lib", "provide": ["f"], "source": {"css": ["e.css"]}},
        "f": {"category": "lib", "source": {"css": ["f.css"]}},
        "g": {"category": "tmp", "source": {"js": ["g.js"]}},
        "h": {"category": "tmp", "require": ["b", "e"], "source": {"css": ["h.css"], "js": ["g.js"]}},
    }


@pytest.fixture
def manifest() -> dict[str, Any]:
    """Fresh copy of the sample manifest."""

    return sample_manifest()


@pytest.fixture
def manifest_path(tmp_path, manifest):
    """Sample manifest written to a JSON file."""

    path = tmp_path / "manifest.json"
    path.write_text(json.dumps(manifest), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def reset_compartment_logging():
    """Detach handlers attached by the CLI so streams never outlive a test."""

    yield
    root = logging.getLogger("compartment")
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.setLevel(logging.NOTSET)
    root.propagate = True
