"""Index rebuild pipeline."""

from __future__ import annotations

import logging
import sqlite3
import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Protocol, Sequence, Tuple

from contentfinder.config import DEFAULT_EXTENSIONS
from contentfinder.errors import (
    BuildFailureError,
    EmptyResultError,
    IndexWriteFailureError,
    NoContentError,
    SourceError,
    SourceFailureError,
)
from contentfinder.events import EventPublisher
from contentfinder.index.hashing import DEFAULT_DATE_FORMAT
from contentfinder.index.snapshot import IndexSnapshot
from contentfinder.index.storage import SQLiteFullTextStore, to_search_document
from contentfinder.ingestion.post_loader import DocumentBuilder
from contentfinder.models import (
    ContentItem,
    IndexingFinishedEvent,
    IndexingStartedEvent,
    RebuildStatus,
)
from contentfinder.utils.files import compute_content_path, is_eligible, iter_content_files

LOGGER = logging.getLogger(__name__)


class ContentSource(Protocol):
    root: Path

    def ensure_ready(self) -> None: ...

    def has_content(self) -> bool: ...


def find_content(content_dir: Path, extensions: Sequence[str]) -> list[Path]:
    """Find all eligible content files under the content directory."""
    eligible = []
    for path in iter_content_files(content_dir):
        if is_eligible(path, extensions):
            eligible.append(path)
        else:
            LOGGER.debug("Skipping %s", path)
    return eligible


class Indexer:
    """Rebuilds the content index and the full-text engine behind it.

    Only one rebuild runs at a time. The new index is assembled off to the
    side and swapped in only after the engine write succeeded, so a failed
    rebuild leaves the previous snapshot in place.
    """

    def __init__(
        self,
        source: ContentSource,
        builder: DocumentBuilder,
        store: SQLiteFullTextStore,
        snapshot: IndexSnapshot,
        publisher: EventPublisher,
        *,
        content_subdirectory: str = "content",
        extensions: Sequence[str] = DEFAULT_EXTENSIONS,
        source_extension: str = ".md",
        served_extension: str = ".html",
        date_format: str = DEFAULT_DATE_FORMAT,
    ) -> None:
        self.source = source
        self.builder = builder
        self.store = store
        self.snapshot = snapshot
        self.publisher = publisher
        self.content_subdirectory = content_subdirectory
        self.extensions = tuple(ext.lower() for ext in extensions)
        self.source_extension = source_extension
        self.served_extension = served_extension
        self.date_format = date_format
        self._rebuild_lock = threading.Lock()

    @property
    def content_dir(self) -> Path:
        return Path(self.source.root) / self.content_subdirectory

    def rebuild(self) -> RebuildStatus:
        """Rebuild the index from the content source.

        Raises:
            RebuildError: One of its subclasses, describing which phase failed.
        """
        with self._rebuild_lock:
            return self._rebuild()

    def _rebuild(self) -> RebuildStatus:
        LOGGER.info("Refreshing content index from %s", self.source.root)
        self.publisher.publish(IndexingStartedEvent(datetime.now()))

        try:
            self.source.ensure_ready()
        except SourceError as exc:
            raise SourceFailureError(f"Content source is unavailable: {exc}") from exc

        if not self.source.has_content():
            raise NoContentError(f"There's no cloned repository under the root {Path(self.source.root).resolve()}.")

        items = self._build_items()
        if not items:
            raise EmptyResultError(
                "There are no entries in the content index. Something's wrong! "
                "Ensure you have content registered."
            )

        self._write(items)
        current = self.snapshot.replace(items)
        now = datetime.now()
        self.publisher.publish(IndexingFinishedEvent(current, now))
        LOGGER.info("Index rebuilt with %s entries", len(current))
        return RebuildStatus(count=len(current), completed_at=now)

    def _build_items(self) -> Dict[str, ContentItem]:
        content_dir = self.content_dir
        if not content_dir.is_dir():
            raise NoContentError(f"Content directory {content_dir} does not exist.")

        LOGGER.debug("Building index @ %s", datetime.now())
        files = find_content(content_dir, self.extensions)
        if not files:
            return {}

        tasks: List[Tuple[str, Path, Future[ContentItem]]] = []
        with ThreadPoolExecutor(max_workers=len(files), thread_name_prefix="content-build") as executor:
            for file in files:
                path = compute_content_path(
                    file,
                    content_dir,
                    source_extension=self.source_extension,
                    served_extension=self.served_extension,
                )
                tasks.append((path, file, executor.submit(self.builder.build, path, file)))
            wait([future for _, _, future in tasks])

        for path, file, future in sorted(tasks, key=lambda task: (task[0], task[1])):
            exc = future.exception()
            if exc is not None:
                raise BuildFailureError(path, exc) from exc

        # Files sharing a served path: the last one in walk order wins.
        items: Dict[str, ContentItem] = {}
        for _, file, future in tasks:
            item = future.result()
            if item.path in items:
                LOGGER.warning("%s replaces an earlier file served at %s", file, item.path)
            items[item.path] = item

        LOGGER.info("Ran the index for all the files, %s items", len(items))
        return items

    def _write(self, items: Dict[str, ContentItem]) -> None:
        try:
            documents = [to_search_document(item, date_format=self.date_format) for item in items.values()]
            self.store.write(documents)
        except (sqlite3.Error, ValueError) as exc:
            raise IndexWriteFailureError(f"Failed to write {len(items)} documents: {exc}") from exc
