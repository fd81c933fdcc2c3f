"""
Concurrent same-host crawler that collects pages for sitemap generation.
"""
from sitemap_crawler.core import crawl, CrawlConfig, Crawler
from sitemap_crawler.errors import InvalidInputError
from sitemap_crawler.urls import resolve_url, same_host

__version__ = "1.0.0"
__all__ = ["crawl", "CrawlConfig", "Crawler", "InvalidInputError", "resolve_url", "same_host"]
