"""
Frontier: registry of every URL admitted into one crawl run, plus the page cap.
"""
from __future__ import annotations

import threading
from typing import Dict

from site_crawler.crawler.models import URLState
from site_crawler.logger import logger

__all__ = ("Frontier",)


class Frontier:
    """Thread-safe set of known URLs with a hard admission cap.

    ``try_admit`` is the only way a URL becomes known, and the membership test,
    the cap check and the insert all happen under one lock. History is never
    dropped: a finished URL stays in the map so it cannot be admitted again.
    """

    def __init__(self, max_pages: int) -> None:
        if max_pages < 0:
            raise ValueError("max_pages must be >= 0")
        self._max_pages = max_pages
        self._states: Dict[str, URLState] = {}
        self._failures: Dict[str, str] = {}
        self._lock = threading.Lock()

    @property
    def max_pages(self) -> int:
        return self._max_pages

    def try_admit(self, url: str) -> bool:
        """Claim *url* for fetching. False means duplicate or cap reached."""
        with self._lock:
            if url in self._states or len(self._states) >= self._max_pages:
                return False
            self._states[url] = URLState.PENDING
        logger.debug("Admitted %s", url)
        return True

    def mark_done(self, url: str) -> None:
        self._set_state(url, URLState.DONE)

    def mark_failed(self, url: str, reason: str) -> None:
        with self._lock:
            self._require_known(url)
            self._states[url] = URLState.FAILED
            self._failures[url] = reason

    def state(self, url: str) -> URLState | None:
        with self._lock:
            return self._states.get(url)

    @property
    def is_full(self) -> bool:
        with self._lock:
            return len(self._states) >= self._max_pages

    @property
    def failures(self) -> Dict[str, str]:
        with self._lock:
            return dict(self._failures)

    def counts(self) -> Dict[URLState, int]:
        """Number of URLs in each state."""
        result = {state: 0 for state in URLState}
        with self._lock:
            for state in self._states.values():
                result[state] += 1
        return result

    def _set_state(self, url: str, state: URLState) -> None:
        with self._lock:
            self._require_known(url)
            self._states[url] = state

    def _require_known(self, url: str) -> None:
        if url not in self._states:
            raise KeyError(f"{url} was never admitted")

    def __contains__(self, url: object) -> bool:
        with self._lock:
            return url in self._states

    def __len__(self) -> int:
        with self._lock:
            return len(self._states)
