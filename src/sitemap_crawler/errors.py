"""
Exception hierarchy for the sitemap crawler.
"""
from __future__ import annotations

from typing import Optional


class CrawlError(Exception):
    """Base class for every error raised by the crawler."""


class InvalidInputError(CrawlError, ValueError):
    """Start URL or crawl configuration cannot be used."""


class FetchError(CrawlError):
    """A page could not be fetched (network error, timeout, non-2xx status)."""

    def __init__(self, url: str, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(f"{message} for {url}")
        self.url = url
        self.status_code = status_code


class UnsupportedContentError(FetchError):
    """The fetched document is not HTML."""

    def __init__(self, url: str, content_type: str) -> None:
        super().__init__(url, f"content type is not HTML ({content_type or 'unknown'})")
        self.content_type = content_type


class DispatcherClosedError(CrawlError, RuntimeError):
    """Work was submitted or completed after the dispatcher shut down."""
