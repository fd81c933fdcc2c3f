"""
URL resolution and same-host filtering for crawl candidates.
"""
from __future__ import annotations

import posixpath
from typing import Optional
from urllib.parse import urldefrag, urljoin, urlparse

# Linked resources that are never sitemap pages (frozen set for O(1) lookup)
IGNORED_EXTENSIONS: frozenset[str] = frozenset((
    ".txt", ".pdf", ".doc", ".docx", ".xls", ".xlsx",
    ".ppt", ".pptx", ".zip", ".rar", ".tar", ".gz",
    ".jpg", ".jpeg", ".png", ".gif", ".bmp", ".svg",
    ".ico", ".webp", ".mp3", ".mp4", ".avi", ".mov",
    ".wmv", ".flv", ".css", ".js", ".json", ".xml",
    ".rss", ".atom", ".webmanifest", ".map",
))

REJECTED_PREFIXES: tuple[str, ...] = ("#", "mailto:", "javascript:", "tel:", "data:")

CRAWLABLE_SCHEMES: frozenset[str] = frozenset(("http", "https"))


def _has_foreign_scheme(href: str) -> bool:
    """True if ``href`` names a scheme other than http(s) before its first '/'."""
    head = href.split("/", 1)[0]
    if ":" not in head:
        return False
    return not (href.startswith("http:") or href.startswith("https:"))


def resolve_reference(base: str, href: str) -> Optional[str]:
    """
    Resolve a raw hyperlink against the page it was found on.

    - Protocol-relative links (//host/path) inherit the base scheme
    - Fragment-only, mailto:, javascript:, tel: and data: links are dropped
    - Any other non-http(s) scheme is dropped
    - The fragment is always stripped

    Returns None when the link is not a crawl candidate.
    """
    if not href:
        return None

    lower_href = href.lower()
    if lower_href.startswith("//"):
        try:
            scheme = urlparse(base).scheme
        except ValueError:
            return None
        href = f"{scheme}:{href}"
    elif lower_href.startswith(REJECTED_PREFIXES) or _has_foreign_scheme(lower_href):
        return None

    try:
        joined, _ = urldefrag(urljoin(base, href))
        parsed = urlparse(joined)
        # Accessing port validates the authority component
        parsed.port
    except ValueError:
        return None

    if parsed.scheme not in CRAWLABLE_SCHEMES or not parsed.netloc:
        return None

    return parsed.geturl()


def has_ignored_extension(url: str) -> bool:
    """Check the URL path extension against IGNORED_EXTENSIONS (case-insensitive)."""
    try:
        path = urlparse(url).path
    except ValueError:
        return False
    ext = posixpath.splitext(path)[1].lower()
    return bool(ext) and ext in IGNORED_EXTENSIONS


def resolve_url(base: str, href: str) -> Optional[str]:
    """Resolve ``href`` to a canonical page URL, or None if it is not a candidate."""
    resolved = resolve_reference(base, href)
    if resolved is None or has_ignored_extension(resolved):
        return None
    return resolved


def _host(url: str) -> str:
    # netloc without userinfo, port kept as written
    return urlparse(url).netloc.rpartition("@")[2].lower()


def same_host(start_url: str, candidate_url: str) -> bool:
    """Check whether both URLs share the same host (case-insensitive)."""
    try:
        start_host = _host(start_url)
        candidate_host = _host(candidate_url)
    except ValueError:
        return False
    if not start_host or not candidate_host:
        return False
    return start_host == candidate_host
