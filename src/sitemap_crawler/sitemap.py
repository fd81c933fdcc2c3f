"""
Sitemap XML and JSON output for crawl results.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable, List
from urllib.parse import urlparse

from lxml import etree

from sitemap_crawler.urls import CRAWLABLE_SCHEMES

logger = logging.getLogger(__name__)

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"


def _is_valid_loc(url: str) -> bool:
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return parsed.scheme in CRAWLABLE_SCHEMES and bool(parsed.netloc)


def unique_locations(urls: Iterable[str]) -> List[str]:
    """Drop duplicates and URLs that are not absolute http(s), keeping order."""
    seen = set()
    locations = []
    for url in urls:
        if not _is_valid_loc(url):
            logger.warning("Skipping invalid URL for XML sitemap: %s", url)
            continue
        if url in seen:
            continue
        seen.add(url)
        locations.append(url)
    return locations


def build_sitemap(urls: Iterable[str]) -> bytes:
    """Render a <urlset> document with one <url><loc> entry per unique URL."""
    urlset = etree.Element(f"{{{SITEMAP_NS}}}urlset", nsmap={None: SITEMAP_NS})
    for location in unique_locations(urls):
        url_el = etree.SubElement(urlset, f"{{{SITEMAP_NS}}}url")
        loc_el = etree.SubElement(url_el, f"{{{SITEMAP_NS}}}loc")
        loc_el.text = location

    return etree.tostring(
        urlset,
        xml_declaration=True,
        encoding="UTF-8",
        pretty_print=True,
    )


def build_json(urls: Iterable[str], pretty: bool = False) -> str:
    """Render unique URLs as a JSON array."""
    return json.dumps(unique_locations(urls), ensure_ascii=False, indent=2 if pretty else None)


def write_output(payload: bytes, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(payload)
    return path
