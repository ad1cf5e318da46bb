"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import os
import time
from collections.abc import Callable
from pathlib import Path

import pytest

DAY = 86400


@pytest.fixture(autouse=True)
def isolated_config(
    tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
) -> Path:
    """Point XDG_CONFIG_HOME at an empty directory so no user config leaks in."""
    config_home = tmp_path_factory.mktemp("xdg-config")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """Create a small tree with duplicate content.

    Layout:
        a/f1.txt        "X"
        a/b/f2.txt      "X"
        a/b/f3.txt      "Y"
    """
    root = tmp_path / "a"
    (root / "b").mkdir(parents=True)
    (root / "f1.txt").write_text("X")
    (root / "b" / "f2.txt").write_text("X")
    (root / "b" / "f3.txt").write_text("Y")
    return root


@pytest.fixture
def deep_tree(tmp_path: Path) -> Path:
    """Create a tree with one file per level, four levels deep.

    Layout:
        root/l0.txt
        root/d1/l1.txt
        root/d1/d2/l2.txt
        root/d1/d2/d3/l3.txt
    """
    root = tmp_path / "root"
    current = root
    for level in range(4):
        if level:
            current = current / f"d{level}"
        current.mkdir(parents=True, exist_ok=True)
        (current / f"l{level}.txt").write_text(f"level {level}")
    return root


@pytest.fixture
def set_age() -> Callable[[Path, float], None]:
    """Return a helper that backdates a file's mtime by a number of days."""

    def _set_age(path: Path, days: float) -> None:
        stamp = time.time() - days * DAY
        os.utime(path, (stamp, stamp))

    return _set_age
