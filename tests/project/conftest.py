"""Fixtures for project generation tests."""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def write_tree(tmp_path: Path):
    """Create files under a project root from a {relative path: text} mapping."""

    def write(files: dict[str, str], root: Path | None = None) -> Path:
        base = root or tmp_path / "project"
        base.mkdir(parents=True, exist_ok=True)
        for rel, text in files.items():
            path = base / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text)
        return base

    return write
