"""Core ContentFinder data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Mapping


@dataclass(frozen=True, slots=True)
class ContentItem:
    """One indexed unit of content, built once per rebuild and never mutated."""

    path: str
    title: str
    date: datetime
    listed: bool
    original_content: str
    processed_content: str


@dataclass(frozen=True, slots=True)
class SearchDocument:
    """Engine-facing projection of a content item."""

    title: str
    path: str
    original_content: str
    content: str
    time: int
    key: str


@dataclass(slots=True)
class SearchResultsPage:
    total: int
    offset: int
    page_size: int
    items: List[ContentItem] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class RebuildStatus:
    count: int
    completed_at: datetime


@dataclass(frozen=True, slots=True)
class IndexingStartedEvent:
    started_at: datetime


@dataclass(frozen=True, slots=True)
class IndexingFinishedEvent:
    index: Mapping[str, ContentItem]
    finished_at: datetime
