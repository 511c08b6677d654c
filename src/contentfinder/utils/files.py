"""Utility helpers for working with the content tree."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator

LOGGER = logging.getLogger(__name__)


def iter_content_files(root: Path) -> Iterator[Path]:
    """Yield every regular file under ``root`` exactly once, in sorted order.

    Symlinks are followed; files that resolve outside ``root`` are skipped.
    """
    base = root.resolve()
    seen = set()
    for child in root.rglob("*"):
        if not child.is_file():
            continue
        resolved = child.resolve()
        if not resolved.is_relative_to(base):
            LOGGER.warning("Skipping %s: it points outside %s", child, base)
            continue
        seen.add(resolved)
    yield from sorted(seen)


def is_eligible(path: Path, extensions: Iterable[str]) -> bool:
    """Return True when the lowercase file name contains a recognised token."""
    name = path.name.lower()
    return any(ext in name for ext in extensions)


def compute_content_path(
    path: Path,
    content_dir: Path,
    *,
    source_extension: str = ".md",
    served_extension: str = ".html",
) -> str:
    """Map a file to its served path, e.g. ``Posts/Hello.MD`` -> ``/posts/hello.html``."""
    relative = path.resolve().relative_to(content_dir.resolve()).as_posix()
    served = ("/" + relative).lower()
    source_extension = source_extension.lower()
    if source_extension and served.endswith(source_extension):
        served = served[: -len(source_extension)] + served_extension
    return served


def has_entries(directory: Path) -> bool:
    return directory.is_dir() and any(directory.iterdir())
