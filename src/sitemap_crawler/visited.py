"""
Thread-safe record of every URL admitted to a crawl.
"""
from __future__ import annotations

import threading
from typing import Iterable, List, Set


class VisitedSet:
    """
    Exactly-once admission of URLs, shared by all workers.

    ``admit`` is a single check-and-set under one lock, so two workers
    racing on the same URL can never both be told it is new. Admitted
    URLs are also kept in admission order for the final output.
    """

    def __init__(self, urls: Iterable[str] = ()) -> None:
        self._lock = threading.Lock()
        self._seen: Set[str] = set()
        self._ordered: List[str] = []
        for url in urls:
            self.admit(url)

    def admit(self, url: str) -> bool:
        """Record ``url`` and return True if this call was the first to do so."""
        with self._lock:
            if url in self._seen:
                return False
            self._seen.add(url)
            self._ordered.append(url)
            return True

    def urls(self) -> List[str]:
        """Snapshot of admitted URLs in admission order."""
        with self._lock:
            return list(self._ordered)

    def __contains__(self, url: object) -> bool:
        with self._lock:
            return url in self._seen

    def __len__(self) -> int:
        with self._lock:
            return len(self._ordered)
