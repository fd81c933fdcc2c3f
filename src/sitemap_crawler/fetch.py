"""
HTTP fetching of crawl pages.
"""
from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import List

import requests

from sitemap_crawler.errors import FetchError, UnsupportedContentError
from sitemap_crawler.links import Link, parse_links

DEFAULT_TIMEOUT_S = 15.0
DEFAULT_USER_AGENT = "SitemapCrawler/1.0"


@dataclass(frozen=True, slots=True)
class FetchResult:
    """Raw response data for a single fetched URL."""
    url: str
    status_code: int
    content_type: str
    body: bytes

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def is_html(self) -> bool:
        return self.content_type.lower().startswith("text/html")


class PageFetcher:
    """
    Fetches pages with one requests.Session per worker thread.

    Sessions are not shared between threads; each thread lazily creates
    its own on first use.
    """

    def __init__(
        self,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self.timeout_s = timeout_s
        self.user_agent = user_agent
        self._local = threading.local()
        self._sessions: List[requests.Session] = []
        self._sessions_lock = threading.Lock()

    @property
    def session(self) -> requests.Session:
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            session.headers["User-Agent"] = self.user_agent
            self._local.session = session
            with self._sessions_lock:
                self._sessions.append(session)
        return session

    def fetch(self, url: str) -> FetchResult:
        """GET ``url``. Raises FetchError on network errors and timeouts."""
        try:
            with self.session.get(url, timeout=self.timeout_s, allow_redirects=True) as resp:
                return FetchResult(
                    url=url,
                    status_code=resp.status_code,
                    content_type=resp.headers.get("content-type") or "",
                    body=resp.content,
                )
        except requests.RequestException as e:
            raise FetchError(url, f"failed to GET URL: {e}") from e

    def get_links(self, url: str) -> List[Link]:
        """Fetch an HTML page and return its links."""
        result = self.fetch(url)
        if not result.ok:
            raise FetchError(
                url,
                f"received non-2xx status code {result.status_code}",
                status_code=result.status_code,
            )
        if not result.is_html:
            raise UnsupportedContentError(url, result.content_type)
        return parse_links(result.body)

    def close(self) -> None:
        """Close every session opened by worker threads."""
        with self._sessions_lock:
            sessions, self._sessions = self._sessions, []
        for session in sessions:
            session.close()

    def __enter__(self) -> "PageFetcher":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
