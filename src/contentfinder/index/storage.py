"""SQLite FTS5 full-text store."""

from __future__ import annotations

import logging
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator, List

from contentfinder.errors import SearchQueryError
from contentfinder.index.hashing import DEFAULT_DATE_FORMAT, identity_key
from contentfinder.models import ContentItem, SearchDocument
from contentfinder.utils.text import html_to_text

LOGGER = logging.getLogger(__name__)


def to_search_document(item: ContentItem, *, date_format: str = DEFAULT_DATE_FORMAT) -> SearchDocument:
    """Project a content item onto the fields stored by the engine."""
    return SearchDocument(
        title=item.title,
        path=item.path,
        original_content=item.original_content,
        content=html_to_text(item.processed_content),
        time=int(item.date.timestamp() * 1000),
        key=identity_key(item, date_format),
    )


class SQLiteFullTextStore:
    """Persistence layer for search documents.

    Writes go through the owning connection inside :meth:`transaction`.
    Reads use one connection per thread so a search sees the last committed
    state instead of waiting for an in-flight write batch (WAL mode).
    """

    def __init__(self, db_path: Path) -> None:
        self.db_path = Path(db_path)
        self._conn = self._connect()
        self._conn.execute("PRAGMA journal_mode=WAL;")
        self._conn.execute("PRAGMA synchronous=NORMAL;")
        self._local = threading.local()
        self._readers: list[sqlite3.Connection] = []
        self._readers_lock = threading.Lock()
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        return conn

    @property
    def connection(self) -> sqlite3.Connection:
        return self._conn

    def close(self) -> None:
        with self._readers_lock:
            for reader in self._readers:
                reader.close()
            self._readers.clear()
        self._conn.close()

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        try:
            yield self._conn
            self._conn.commit()
        except Exception:
            self._conn.rollback()
            raise

    def _reader(self) -> sqlite3.Connection:
        reader = getattr(self._local, "conn", None)
        if reader is None:
            reader = self._connect()
            self._local.conn = reader
            with self._readers_lock:
                self._readers.append(reader)
        return reader

    def _ensure_schema(self) -> None:
        with self.transaction() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS documents (
                    id INTEGER PRIMARY KEY,
                    key TEXT NOT NULL,
                    path TEXT NOT NULL,
                    title TEXT NOT NULL,
                    original_content TEXT NOT NULL,
                    content TEXT NOT NULL,
                    time INTEGER NOT NULL
                )
                """
            )
            conn.execute("CREATE INDEX IF NOT EXISTS idx_documents_key ON documents(key)")
            conn.execute("CREATE INDEX IF NOT EXISTS idx_documents_time ON documents(time)")
            conn.execute(
                """
                CREATE VIRTUAL TABLE IF NOT EXISTS documents_fts USING fts5(
                    title, path, original_content, content,
                    content='documents', content_rowid='id'
                )
                """
            )
            conn.execute(
                """
                CREATE TRIGGER IF NOT EXISTS documents_ai AFTER INSERT ON documents
                BEGIN
                    INSERT INTO documents_fts(rowid, title, path, original_content, content)
                    VALUES (new.id, new.title, new.path, new.original_content, new.content);
                END;
                """
            )
            conn.execute(
                """
                CREATE TRIGGER IF NOT EXISTS documents_ad AFTER DELETE ON documents
                BEGIN
                    INSERT INTO documents_fts(documents_fts, rowid, title, path, original_content, content)
                    VALUES ('delete', old.id, old.title, old.path, old.original_content, old.content);
                END;
                """
            )

    def upsert(self, document: SearchDocument) -> None:
        """Replace any document sharing ``document.key``.

        Must be called within a transaction.
        """
        conn = self._conn
        conn.execute("DELETE FROM documents WHERE key = ?", (document.key,))
        conn.execute(
            """
            INSERT INTO documents(key, path, title, original_content, content, time)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                document.key,
                document.path,
                document.title,
                document.original_content,
                document.content,
                document.time,
            ),
        )

    def write(self, documents: Iterable[SearchDocument]) -> int:
        """Upsert a batch of documents atomically; nothing is kept on failure.

        Rows left at a document's path under an older key (a renamed post)
        are removed in the same transaction.
        """
        written = 0
        with self.transaction() as conn:
            for document in documents:
                conn.execute(
                    "DELETE FROM documents WHERE path = ? AND key != ?",
                    (document.path, document.key),
                )
                self.upsert(document)
                written += 1
        LOGGER.debug("Wrote %s documents to %s", written, self.db_path)
        return written

    def search_paths(
        self,
        query: str,
        limit: int,
        *,
        since: int | None = None,
        until: int | None = None,
    ) -> List[str]:
        """Return matching paths in relevance order.

        ``since`` and ``until`` are inclusive bounds on the epoch-millisecond
        ``time`` field.
        """
        if limit <= 0:
            return []
        sql = [
            "SELECT d.path AS path",
            "FROM documents_fts",
            "JOIN documents d ON d.id = documents_fts.rowid",
            "WHERE documents_fts MATCH ?",
        ]
        params: list[object] = [query]
        if since is not None:
            sql.append("AND d.time >= ?")
            params.append(since)
        if until is not None:
            sql.append("AND d.time <= ?")
            params.append(until)
        sql.append("ORDER BY bm25(documents_fts) LIMIT ?")
        params.append(limit)
        try:
            rows = self._reader().execute("\n".join(sql), params).fetchall()
        except sqlite3.OperationalError as exc:
            raise SearchQueryError(f"Invalid search query {query!r}: {exc}") from exc
        return [row["path"] for row in rows]

    def count(self) -> int:
        row = self._reader().execute("SELECT COUNT(*) FROM documents").fetchone()
        return int(row[0])

    def keys(self) -> List[str]:
        rows = self._reader().execute("SELECT key FROM documents ORDER BY key").fetchall()
        return [row["key"] for row in rows]
