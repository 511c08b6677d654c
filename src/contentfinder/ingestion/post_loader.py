"""Content file loading.

Turns a markdown or HTML file with YAML front matter into a
:class:`~contentfinder.models.ContentItem`. Markdown bodies are rendered with
``markdown``; HTML bodies are used verbatim.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Protocol

import frontmatter
import markdown

from contentfinder.errors import ContentBuildError
from contentfinder.models import ContentItem

LOGGER = logging.getLogger(__name__)

MARKDOWN_EXTENSIONS = ["extra", "sane_lists"]


class DocumentBuilder(Protocol):
    def build(self, path: str, file: Path) -> ContentItem: ...


def _naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def parse_date(value: Any) -> datetime:
    """Coerce a front matter date into a naive datetime.

    Offset-aware values are converted to UTC so every date stays comparable.
    """
    if isinstance(value, datetime):
        return _naive_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str):
        try:
            return _naive_utc(datetime.fromisoformat(value.strip()))
        except ValueError as exc:
            raise ContentBuildError(f"Unparseable date {value!r}") from exc
    raise ContentBuildError(f"Unsupported date value {value!r}")


def parse_listed(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip().lower() not in {"false", "no", "0", "off"}
    return bool(value)


class MarkdownPostBuilder:
    """Default document builder for front-matter posts."""

    def __init__(self, *, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def build(self, path: str, file: Path) -> ContentItem:
        try:
            raw = Path(file).read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as exc:
            raise ContentBuildError(f"Unable to read {file}: {exc}") from exc

        post = frontmatter.loads(raw)
        title = post.metadata.get("title")
        if not title:
            raise ContentBuildError(f"{file} has no title")
        if post.metadata.get("date") is None:
            raise ContentBuildError(f"{file} has no date")

        if Path(file).suffix.lower() in {".md", ".markdown"}:
            processed = markdown.markdown(post.content, extensions=MARKDOWN_EXTENSIONS)
        else:
            processed = post.content

        LOGGER.debug("Built %s from %s", path, file)
        return ContentItem(
            path=path,
            title=str(title),
            date=parse_date(post.metadata["date"]),
            listed=parse_listed(post.metadata.get("listed")),
            original_content=raw,
            processed_content=processed,
        )
