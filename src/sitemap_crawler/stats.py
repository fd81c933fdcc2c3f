"""
Crawl counters and the periodic progress reporter.
"""
from __future__ import annotations

import sys
import threading
import time
from dataclasses import dataclass, field
from typing import Dict, Optional, TextIO


@dataclass(slots=True)
class CrawlStats:
    """
    Counters updated by workers while crawling.

    Purely diagnostic; nothing here decides when the crawl stops.
    """
    scanned: int = 0
    added: int = 0
    queued: int = 0
    skipped_ext: int = 0
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def record_dequeued(self) -> None:
        with self._lock:
            self.scanned += 1
            self.queued -= 1

    def record_submitted(self) -> None:
        with self._lock:
            self.queued += 1

    def record_added(self) -> None:
        with self._lock:
            self.added += 1

    def record_skipped_ext(self) -> None:
        with self._lock:
            self.skipped_ext += 1

    def snapshot(self) -> Dict[str, int]:
        """Return a consistent copy of all counters."""
        with self._lock:
            return {
                "scanned": self.scanned,
                "added": self.added,
                "queued": self.queued,
                "skipped_ext": self.skipped_ext,
            }


def format_elapsed(seconds: float) -> str:
    """Format elapsed seconds as e.g. 1m05s."""
    minutes, secs = divmod(int(round(seconds)), 60)
    return f"{minutes}m{secs:02d}s" if minutes else f"{secs}s"


def format_progress(stats: CrawlStats, elapsed: float) -> str:
    snap = stats.snapshot()
    return (
        f"Elapsed: {format_elapsed(elapsed)} | Scanned: {snap['scanned']} | "
        f"Added: {snap['added']} | Queued: {snap['queued']} | "
        f"Skipped (Ext): {snap['skipped_ext']}"
    )


class StatsReporter:
    """Background thread that prints a progress line every ``interval_s``."""

    def __init__(
        self,
        stats: CrawlStats,
        interval_s: float = 2.0,
        stream: Optional[TextIO] = None,
    ) -> None:
        self.stats = stats
        self.interval_s = interval_s
        self.stream = stream or sys.stderr
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._started_at = 0.0

    def start(self) -> "StatsReporter":
        self._started_at = time.monotonic()
        self._thread = threading.Thread(target=self._run, name="stats-reporter", daemon=True)
        self._thread.start()
        return self

    def stop(self) -> None:
        """Stop the reporter and print the final counters."""
        self._stop.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None
        self._write_line()
        self.stream.write("\n")
        self.stream.flush()

    def _run(self) -> None:
        while not self._stop.wait(self.interval_s):
            self._write_line()

    def _write_line(self) -> None:
        # Clear line and print progress
        elapsed = time.monotonic() - self._started_at
        self.stream.write(f"\r\033[K{format_progress(self.stats, elapsed)}")
        self.stream.flush()

    def __enter__(self) -> "StatsReporter":
        return self.start()

    def __exit__(self, *exc_info) -> None:
        self.stop()
