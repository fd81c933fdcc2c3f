"""
Concurrent crawl engine: worker pool, admission and expansion of links.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence
from urllib.parse import urlparse

from sitemap_crawler.dispatch import CrawlJob, JobDispatcher
from sitemap_crawler.errors import FetchError, InvalidInputError, UnsupportedContentError
from sitemap_crawler.fetch import DEFAULT_TIMEOUT_S, DEFAULT_USER_AGENT, PageFetcher
from sitemap_crawler.links import Link
from sitemap_crawler.stats import CrawlStats, StatsReporter
from sitemap_crawler.urls import CRAWLABLE_SCHEMES, has_ignored_extension, resolve_reference, same_host
from sitemap_crawler.visited import VisitedSet

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 3
DEFAULT_WORKERS = 10

FetchLinks = Callable[[str], Sequence[Link]]


def validate_start_url(start_url: str) -> str:
    """
    Check that ``start_url`` is an absolute http(s) URL.

    Returns the URL in the same canonical form as discovered links (scheme
    lowercased, fragment stripped). Raises InvalidInputError otherwise.
    """
    if not start_url or not start_url.strip():
        raise InvalidInputError("Start URL is empty")
    start_url = start_url.strip()
    try:
        parsed = urlparse(start_url)
        parsed.port  # raises ValueError on a malformed port
    except ValueError as e:
        raise InvalidInputError(f"Invalid start URL: {start_url} ({e})") from e

    if parsed.scheme not in CRAWLABLE_SCHEMES or not parsed.hostname:
        raise InvalidInputError(f"Invalid start URL: {start_url} (expected an absolute http(s) URL)")

    canonical = resolve_reference(start_url, start_url)
    if canonical is None:
        raise InvalidInputError(f"Invalid start URL: {start_url}")
    return canonical


@dataclass(frozen=True, slots=True)
class CrawlConfig:
    """Immutable settings for one crawl."""
    start_url: str
    max_depth: int = DEFAULT_MAX_DEPTH
    worker_count: int = DEFAULT_WORKERS
    timeout_s: float = DEFAULT_TIMEOUT_S
    user_agent: str = DEFAULT_USER_AGENT
    show_stats: bool = False

    def __post_init__(self) -> None:
        if self.max_depth < 0:
            raise InvalidInputError(f"max_depth must be >= 0, got {self.max_depth}")
        if self.worker_count < 1:
            raise InvalidInputError(f"worker_count must be >= 1, got {self.worker_count}")
        if self.timeout_s <= 0:
            raise InvalidInputError(f"timeout must be > 0, got {self.timeout_s}")


class Crawler:
    """
    Runs one bounded, same-host crawl with a fixed pool of threads.

    ``fetch_links`` turns a URL into its links and raises FetchError when
    the page cannot be used; by default pages are fetched over HTTP.
    """

    def __init__(
        self,
        config: CrawlConfig,
        fetch_links: Optional[FetchLinks] = None,
        stats: Optional[CrawlStats] = None,
    ) -> None:
        self.config = config
        self.start_url = validate_start_url(config.start_url)
        self.stats = stats if stats is not None else CrawlStats()
        self._fetch_links = fetch_links
        self.visited = VisitedSet()

    def run(self) -> List[str]:
        """Crawl to completion and return admitted URLs in admission order."""
        if self._fetch_links is not None:
            return self._run(self._fetch_links)

        with PageFetcher(self.config.timeout_s, self.config.user_agent) as fetcher:
            return self._run(fetcher.get_links)

    def _run(self, fetch_links: FetchLinks) -> List[str]:
        self.visited.admit(self.start_url)
        self.stats.record_submitted()
        dispatcher = JobDispatcher(
            CrawlJob(self.start_url, depth=0), self.config.worker_count
        )

        reporter = StatsReporter(self.stats).start() if self.config.show_stats else None
        try:
            self._run_workers(dispatcher, fetch_links)
        finally:
            if reporter is not None:
                reporter.stop()
        logger.debug("All workers finished")

        return self.visited.urls()

    def _run_workers(self, dispatcher: JobDispatcher, fetch_links: FetchLinks) -> None:
        workers = [
            threading.Thread(
                target=self._work,
                args=(dispatcher, fetch_links),
                name=f"crawl-worker-{i}",
                daemon=True,
            )
            for i in range(self.config.worker_count)
        ]
        for worker in workers:
            worker.start()
        for worker in workers:
            worker.join()

    def _work(self, dispatcher: JobDispatcher, fetch_links: FetchLinks) -> None:
        while True:
            job = dispatcher.next_job()
            if job is None:
                return
            self.stats.record_dequeued()
            try:
                self._process(job, dispatcher, fetch_links)
            except Exception:
                logger.exception("Unexpected error while processing %s", job.url)
            finally:
                # Every follow-on submit for this job has happened by now
                dispatcher.complete()

    def _process(self, job: CrawlJob, dispatcher: JobDispatcher, fetch_links: FetchLinks) -> None:
        try:
            links = fetch_links(job.url)
        except UnsupportedContentError as e:
            logger.debug("Skipping %s: %s", job.url, e)
            return
        except FetchError as e:
            logger.warning("Warning (URL: %s): %s", job.url, e)
            return

        if job.depth >= self.config.max_depth:
            return
        expand = job.depth + 1 < self.config.max_depth

        for link in links:
            target = resolve_reference(job.url, link.href)
            if target is None:
                continue
            if has_ignored_extension(target):
                self.stats.record_skipped_ext()
                continue
            if not same_host(self.start_url, target):
                continue
            if not self.visited.admit(target):
                continue

            self.stats.record_added()
            if expand:
                self.stats.record_submitted()
                dispatcher.submit(CrawlJob(target, depth=job.depth + 1))


def crawl(
    start_url: str,
    max_depth: int = DEFAULT_MAX_DEPTH,
    worker_count: int = DEFAULT_WORKERS,
    timeout_s: float = DEFAULT_TIMEOUT_S,
    user_agent: str = DEFAULT_USER_AGENT,
    show_stats: bool = False,
    fetch_links: Optional[FetchLinks] = None,
) -> List[str]:
    """
    Crawl same-host pages reachable from ``start_url``.

    Args:
        start_url: Absolute http(s) URL to start from.
        max_depth: Pages up to this many hops from the start are listed;
            pages fewer hops away are also expanded.
        worker_count: Number of concurrent worker threads.
        timeout_s: HTTP request timeout in seconds.
        user_agent: User-Agent header to use for requests.
        show_stats: Print periodic progress counters to stderr.
        fetch_links: Optional replacement for the HTTP fetch + parse step.

    Returns:
        Unique URLs in admission order, start URL first.

    Raises:
        InvalidInputError: If the start URL or settings are unusable.
    """
    config = CrawlConfig(
        start_url=start_url,
        max_depth=max_depth,
        worker_count=worker_count,
        timeout_s=timeout_s,
        user_agent=user_agent,
        show_stats=show_stats,
    )
    return Crawler(config, fetch_links=fetch_links).run()
