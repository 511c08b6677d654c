"""Holder for the live, read-only content index."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from contentfinder.models import ContentItem


class IndexSnapshot:
    """Owns the current ``path -> ContentItem`` mapping.

    The mapping is never mutated in place. :meth:`replace` swaps the whole
    reference, so readers that call :meth:`current` once per operation see
    either the old or the new index.
    """

    def __init__(self) -> None:
        self._current: Mapping[str, ContentItem] = MappingProxyType({})

    def current(self) -> Mapping[str, ContentItem]:
        return self._current

    def replace(self, items: Mapping[str, ContentItem]) -> Mapping[str, ContentItem]:
        snapshot = MappingProxyType(dict(items))
        self._current = snapshot
        return snapshot

    def __len__(self) -> int:
        return len(self._current)
