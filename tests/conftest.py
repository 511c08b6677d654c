"""Shared fixtures for ContentFinder tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest


@pytest.fixture
def content_root(tmp_path: Path) -> Path:
    """A checked-out content repository with an empty ``content`` directory."""
    root = tmp_path / "repo"
    (root / "content").mkdir(parents=True)
    return root


@pytest.fixture
def write_post(content_root: Path) -> Callable[..., Path]:
    """Write a front-matter post below ``content_root/content``."""

    def _write(
        name: str,
        title: str = "Untitled",
        date: str = "2024-01-15",
        body: str = "Some body text.",
        listed: bool = True,
    ) -> Path:
        path = content_root / "content" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            "---\n"
            f'title: "{title}"\n'
            f"date: {date}\n"
            f"listed: {'true' if listed else 'false'}\n"
            "---\n"
            f"{body}\n",
            encoding="utf-8",
        )
        return path

    return _write
