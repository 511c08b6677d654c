"""Service facade wiring the index components together."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Mapping

from contentfinder.config import AppConfig
from contentfinder.errors import RebuildError
from contentfinder.events import EventPublisher
from contentfinder.index.indexer import ContentSource, Indexer
from contentfinder.index.search import Searcher
from contentfinder.index.snapshot import IndexSnapshot
from contentfinder.index.storage import SQLiteFullTextStore
from contentfinder.ingestion.post_loader import DocumentBuilder, MarkdownPostBuilder
from contentfinder.models import ContentItem, RebuildStatus, SearchResultsPage
from contentfinder.source.git_source import GitContentSource

LOGGER = logging.getLogger(__name__)


class IndexService:
    """Owns the live index and exposes rebuild and search entry points."""

    def __init__(
        self,
        config: AppConfig,
        *,
        base_dir: Path | None = None,
        source: ContentSource | None = None,
        builder: DocumentBuilder | None = None,
        store: SQLiteFullTextStore | None = None,
        publisher: EventPublisher | None = None,
    ) -> None:
        self.config = config
        self.publisher = publisher or EventPublisher()
        self.snapshot = IndexSnapshot()
        if store is None:
            db_path = config.resolve_db_path(base_dir)
            db_path.parent.mkdir(parents=True, exist_ok=True)
            store = SQLiteFullTextStore(db_path)
        self.store = store
        self.source = source or GitContentSource(
            config.resolve_content_root(base_dir),
            config.git_repository,
            reset_on_rebuild=config.reset_on_rebuild,
        )
        self.indexer = Indexer(
            self.source,
            builder or MarkdownPostBuilder(),
            self.store,
            self.snapshot,
            self.publisher,
            content_subdirectory=config.content_subdirectory,
            extensions=config.extensions,
            source_extension=config.source_extension,
            served_extension=config.served_extension,
            date_format=config.date_format,
        )
        self.searcher = Searcher(self.store, self.snapshot)
        self._state_lock = threading.Lock()
        self._running = False
        self._pending = False

    @property
    def index(self) -> Mapping[str, ContentItem]:
        return self.snapshot.current()

    def rebuild_index(self) -> RebuildStatus:
        return self.indexer.rebuild()

    def search(
        self,
        query: str,
        offset: int = 0,
        page_size: int = 10,
        listed_only: bool = True,
    ) -> SearchResultsPage:
        return self.searcher.search(query, offset, page_size, listed_only)

    def trigger(self, reason: str = "manual") -> RebuildStatus | None:
        """Run a rebuild unless one is already in flight.

        A trigger that arrives during a rebuild is folded into a single
        follow-up rebuild run by the caller that owns the current one.
        Failures are logged and the previous index keeps serving.
        Returns the status of the last successful rebuild run by this call.
        """
        with self._state_lock:
            if self._running:
                self._pending = True
                LOGGER.info("Rebuild already running, queued one more (%s)", reason)
                return None
            self._running = True

        status: RebuildStatus | None = None
        try:
            while True:
                LOGGER.info("Rebuilding index (%s)", reason)
                try:
                    status = self.indexer.rebuild()
                except RebuildError:
                    LOGGER.exception("Index rebuild failed; serving the previous index")
                with self._state_lock:
                    if not self._pending:
                        self._running = False
                        return status
                    self._pending = False
                    reason = "queued"
        except BaseException:
            with self._state_lock:
                self._running = False
                self._pending = False
            raise

    def on_startup(self) -> RebuildStatus | None:
        return self.trigger("startup")

    def on_content_updated(self) -> RebuildStatus | None:
        return self.trigger("content updated")

    def close(self) -> None:
        self.store.close()
