# File: tests/conftest.py
import asyncio
from collections import Counter
from typing import Dict, Optional, Union

import pytest

from site_crawler.config import CrawlerConfig
from site_crawler.errors import PersistenceError, TransientFetchError

#: failure count meaning "fail on every attempt"
ALWAYS = -1


class FakeTransport:
    """In-memory transport: serves *pages*, counts calls, can fail on demand."""

    def __init__(
        self,
        pages: Dict[str, Union[str, bytes]],
        failures: Optional[Dict[str, int]] = None,
        delay: float = 0.0,
    ) -> None:
        self.pages = pages
        self.failures = dict(failures or {})
        self.delay = delay
        self.calls: Counter = Counter()
        self.active = 0
        self.max_active = 0

    async def fetch(self, url: str) -> bytes:
        self.calls[url] += 1
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            remaining = self.failures.get(url, 0)
            if remaining == ALWAYS:
                raise TransientFetchError(url, "connection refused")
            if remaining > 0:
                self.failures[url] = remaining - 1
                raise TransientFetchError(url, "connection reset")
            if url not in self.pages:
                raise TransientFetchError(url, "HTTP 404")
            content = self.pages[url]
            return content.encode("utf-8") if isinstance(content, str) else content
        finally:
            self.active -= 1


class MemoryStorage:
    """Storage collaborator keeping saved pages in a dict."""

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.prepared = False
        self.saved: Dict[str, bytes] = {}

    def prepare(self) -> None:
        self.prepared = True

    def save(self, name: str, content: bytes) -> None:
        if self.fail:
            raise PersistenceError(name, "disk full")
        self.saved[name] = content


def links(*hrefs: str) -> str:
    """Build a tiny HTML page linking to *hrefs*."""
    body = "".join(f'<a href="{h}">{h}</a>' for h in hrefs)
    return f"<html><body>{body}</body></html>"


@pytest.fixture()
def fast_config(tmp_path) -> CrawlerConfig:
    """
    Config without retry pauses, writing pages to a temporary directory.
    """
    return CrawlerConfig(
        concurrency=3,
        retry_attempts=3,
        retry_delay=0.0,
        timeout=2.0,
        user_agent="TestAgent/1.0",
        output_dir=tmp_path / "pages",
    )


@pytest.fixture()
def storage() -> MemoryStorage:
    return MemoryStorage()
