"""
Hyperlink extraction from HTML documents.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Union

from bs4 import BeautifulSoup, SoupStrainer

# SoupStrainer to parse only <a> tags (faster link extraction)
LINK_STRAINER = SoupStrainer("a")


@dataclass(frozen=True, slots=True)
class Link:
    """A hyperlink target and its visible text."""
    href: str
    text: str = ""


def normalize_text(text: str) -> str:
    """Collapse runs of whitespace into single spaces."""
    return " ".join(text.split())


def parse_links(html: Union[bytes, str]) -> List[Link]:
    """
    Extract every <a> element from an HTML document.

    Commented-out markup is ignored. Anchors without an href attribute
    are returned with an empty href so callers can skip them.
    """
    if not html:
        return []

    soup = BeautifulSoup(html, "lxml", parse_only=LINK_STRAINER)
    return [
        Link(
            href=anchor.get("href") or "",
            text=normalize_text(anchor.get_text(separator=" ")),
        )
        for anchor in soup.find_all("a")
    ]
