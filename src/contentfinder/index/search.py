"""Full-text search over the live content index."""

from __future__ import annotations

import logging
from typing import List

from contentfinder.index.snapshot import IndexSnapshot
from contentfinder.index.storage import SQLiteFullTextStore
from contentfinder.models import ContentItem, SearchResultsPage

LOGGER = logging.getLogger(__name__)


class Searcher:
    """High-level API to query the full-text store.

    Engine hits are resolved against the in-memory index and re-ranked by
    publication date, newest first.
    """

    def __init__(self, store: SQLiteFullTextStore, snapshot: IndexSnapshot) -> None:
        self.store = store
        self.snapshot = snapshot

    def search(
        self,
        query: str,
        offset: int = 0,
        page_size: int = 10,
        listed_only: bool = True,
    ) -> SearchResultsPage:
        if offset < 0:
            raise ValueError(f"offset must be >= 0, got {offset}")
        if page_size <= 0:
            raise ValueError(f"page_size must be > 0, got {page_size}")

        index = self.snapshot.current()
        if not index:
            return SearchResultsPage(total=0, offset=offset, page_size=page_size, items=[])

        paths = self.store.search_paths(query, len(index))
        LOGGER.debug("The engine returned %s paths for %r", len(paths), query)

        results: List[ContentItem] = [index[path] for path in dict.fromkeys(paths) if path in index]
        results.sort(key=lambda item: item.date, reverse=True)
        if listed_only:
            results = [item for item in results if item.listed]

        page = results[offset : min(len(results), offset + page_size)]
        LOGGER.info("search(%r, %s, %s, %s)", query, offset, page_size, listed_only)
        return SearchResultsPage(total=len(results), offset=offset, page_size=page_size, items=page)
