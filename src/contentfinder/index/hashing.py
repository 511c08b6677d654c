"""Identity keys used to upsert documents into the full-text engine."""

from __future__ import annotations

from contentfinder.models import ContentItem
from contentfinder.utils.text import alphabetic_only

DEFAULT_DATE_FORMAT = "%Y-%m-%d"


def identity_key(item: ContentItem, date_format: str = DEFAULT_DATE_FORMAT) -> str:
    """Return the title letters followed by the formatted publication date.

    Items sharing both collide on purpose: the engine treats them as the same
    logical post and replaces the older document.
    """
    if item is None:
        raise ValueError("the content item must not be None")
    if item.date is None:
        raise ValueError("the content item date must not be None")
    if item.title is None:
        raise ValueError("the content item title must not be None")
    return alphabetic_only(item.title) + item.date.strftime(date_format)
