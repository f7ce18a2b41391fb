"""The pytest configuration for ordinal tree testing.

Fixtures build real directory trees under pytest's ``tmp_path`` so that the
operations run against an actual filesystem.
"""

import os
from pathlib import Path

import pytest

from ordinal_tree.config import reset_settings


@pytest.fixture(autouse=True)
def isolated_settings():
    """Drop the cached settings instance around every test."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def tree_root(tmp_path) -> Path:
    """Provide an empty root directory for tree operations."""
    root = tmp_path / "root"
    root.mkdir()
    return root


def _build(base: Path, spec: dict) -> None:
    for name, value in spec.items():
        path = base / name
        if isinstance(value, dict):
            path.mkdir()
            _build(path, value)
        else:
            path.write_text(value, encoding="utf-8")


@pytest.fixture
def tree_factory(tree_root):
    """Factory for creating test trees.

    Nested dicts become folders, strings become file contents:

        tree_factory({"docs": {"0001_a.md": "A", "0002_sub": {}}})
    """

    def _create_tree(spec: dict) -> Path:
        _build(tree_root, spec)
        return tree_root

    return _create_tree


@pytest.fixture
def listing():
    """Return the sorted entry names of a directory."""

    def _listing(path: Path) -> list[str]:
        return sorted(os.listdir(path))

    return _listing
