"""
Job queue and termination detection for the worker pool.
"""
from __future__ import annotations

import logging
import queue
import threading
from dataclasses import dataclass
from typing import Optional

from sitemap_crawler.errors import DispatcherClosedError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CrawlJob:
    """A page to fetch and the number of hops it sits from the start URL."""
    url: str
    depth: int = 0


class JobDispatcher:
    """
    Unbounded job queue that closes itself once no work is outstanding.

    The outstanding counter starts at 1 for the seed job. Every
    ``submit`` increments it and every ``complete`` decrements it; when
    it hits zero one stop marker per worker is queued and no further
    submissions are accepted.

    A worker must make all ``submit`` calls for a job before calling
    ``complete`` for that job. Completing first can let the counter reach
    zero while follow-on work is still about to be submitted.

    The queue never blocks producers, so workers can feed jobs back into
    the same pool that drains them.
    """

    def __init__(self, seed: CrawlJob, worker_count: int) -> None:
        if worker_count < 1:
            raise ValueError(f"worker_count must be at least 1, got {worker_count}")
        self.worker_count = worker_count
        self._jobs: "queue.SimpleQueue[Optional[CrawlJob]]" = queue.SimpleQueue()
        self._lock = threading.Lock()
        self._outstanding = 1
        self._closed = False
        self._jobs.put(seed)

    @property
    def outstanding(self) -> int:
        with self._lock:
            return self._outstanding

    @property
    def closed(self) -> bool:
        with self._lock:
            return self._closed

    def submit(self, job: CrawlJob) -> None:
        """Register ``job`` as outstanding work and hand it to the workers."""
        with self._lock:
            if self._closed:
                raise DispatcherClosedError(f"cannot submit {job.url}: dispatcher is closed")
            self._outstanding += 1
        self._jobs.put(job)

    def complete(self) -> None:
        """Mark one job as fully processed; closes the queue on the last one."""
        with self._lock:
            if self._closed:
                raise DispatcherClosedError("complete() called with no outstanding work")
            self._outstanding -= 1
            if self._outstanding > 0:
                return
            self._closed = True

        logger.debug("No outstanding work left, releasing %d workers", self.worker_count)
        for _ in range(self.worker_count):
            self._jobs.put(None)

    def next_job(self) -> Optional[CrawlJob]:
        """Block until a job is available; None means the crawl is finished."""
        return self._jobs.get()
