"""
Data models for the SiteCrawler crawler.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Dict, Optional, Set


class URLState(str, enum.Enum):
    """Visitation state of an admitted URL."""

    PENDING = "pending"
    DONE = "done"
    FAILED = "failed"


@dataclass(slots=True)
class CrawlResult:
    """Outcome of one fetch-and-discover task."""

    url: str
    content: Optional[bytes] = None
    children: Set[str] = field(default_factory=set)
    error: Optional[str] = None
    attempts: int = 0
    saved_as: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(slots=True)
class CrawlSummary:
    """Counters of one finished crawl run."""

    seed: str
    root: str
    max_pages: int
    admitted: int = 0
    fetched: int = 0
    failed: int = 0
    failures: Dict[str, str] = field(default_factory=dict)
    elapsed: float = 0.0
