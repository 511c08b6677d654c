"""Text helpers for turning rendered content into indexable plain text."""

from __future__ import annotations

from bs4 import BeautifulSoup


def html_to_text(markup: str) -> str:
    """Extract the visible text of an HTML fragment."""
    if not markup:
        return ""
    text = BeautifulSoup(markup, "html.parser").get_text(" ")
    return " ".join(text.split())


def alphabetic_only(text: str) -> str:
    """Keep alphabetic characters only, preserving case and order."""
    return "".join(char for char in text if char.isalpha())
