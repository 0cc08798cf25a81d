"""
Pytest configuration and fixtures for Aurawatch tests.
"""

import logging
import os
import time
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from aurawatch.auras import AuraCatalog


@pytest.fixture
def log_dir(tmp_path: Path) -> Path:
    """Directory standing in for VRChat's log folder."""
    directory = tmp_path / "VRChat"
    directory.mkdir()
    return directory


@pytest.fixture
def write_log() -> Callable[..., Path]:
    """
    Write (or append to) a log file, optionally pinning its mtime.

    Content is written as bytes so tests control line terminators exactly.
    """
    def _write(path: Path, content: str, append: bool = False, age: float | None = None) -> Path:
        mode = "ab" if append else "wb"
        with path.open(mode) as f:
            f.write(content.encode("utf-8"))
        if age is not None:
            stamp = time.time() - age
            os.utime(path, (stamp, stamp))
        return path

    return _write


@pytest.fixture
def catalog() -> AuraCatalog:
    """Small in-memory aura catalog."""
    return AuraCatalog.from_json("""
{
  "Version": "2025-01-01T00:00:00",
  "Auras": [
    {"Id": 60, "Name": "Celebration", "Rarity": 0, "Tier": 4, "Category": 7},
    {"Id": 41, "Name": "Event Horizon", "Rarity": 1000000, "Tier": 4, "Category": 4},
    {"Id": 55, "Name": "Oblivion", "Rarity": 25000000, "Tier": 5, "Category": 5},
    {"Id": 70, "Name": "Cupid", "Rarity": 14000, "Tier": 2, "Category": 8,
     "SubText": "VALENTINE'S EXCLUSIVE"}
  ]
}
""")


@pytest.fixture(autouse=True)
def reset_package_logger() -> Iterator[None]:
    """Undo setup_logging() so caplog keeps seeing package records."""
    yield
    package_logger = logging.getLogger("aurawatch")
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True
