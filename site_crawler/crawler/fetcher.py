# site_crawler/crawler/fetcher.py
"""
Fetcher module: fetch one page with bounded retries, persist it and list its links.
"""
from __future__ import annotations

import asyncio
from typing import Callable, Set, Union

from site_crawler.crawler.models import CrawlResult
from site_crawler.crawler.transport import Transport
from site_crawler.errors import PersistenceError, TerminalFetchError, TransientFetchError
from site_crawler.logger import logger
from site_crawler.storage import PageStorage, url_to_filename

LinkExtractor = Callable[[Union[str, bytes], str], Set[str]]


class Fetcher:
    """Stateless fetch-and-discover step executed by the scheduler's workers.

    Performs no deduplication and no capacity checks; the same URL may be
    fetched by several Fetchers without any shared state. Saving and link
    extraction run in worker threads so they never stall the event loop.
    """

    def __init__(
        self,
        transport: Transport,
        storage: PageStorage,
        extractor: LinkExtractor,
        *,
        retry_attempts: int = 3,
        retry_delay: float = 5.0,
    ) -> None:
        if retry_attempts < 1:
            raise ValueError("retry_attempts must be >= 1")
        self.transport = transport
        self.storage = storage
        self.extractor = extractor
        self.retry_attempts = retry_attempts
        self.retry_delay = retry_delay

    async def fetch(self, url: str) -> CrawlResult:
        """
        Fetch *url*, save it and extract its outgoing links.

        Returns a CrawlResult with ``error`` set once every attempt has
        failed; such a result has no children and nothing was written.
        """
        try:
            content, attempts = await self._download(url)
        except TerminalFetchError as exc:
            logger.error("Failed %s", exc)
            return CrawlResult(url, error=str(exc), attempts=exc.attempts)

        result = CrawlResult(url, content=content, attempts=attempts)
        name = url_to_filename(url)
        try:
            await asyncio.to_thread(self.storage.save, name, content)
            result.saved_as = name
            logger.info("Saved %s -> %s", url, name)
        except PersistenceError as exc:
            logger.warning("Could not persist %s: %s", url, exc)

        result.children = await asyncio.to_thread(self.extractor, content, url)
        return result

    async def _download(self, url: str) -> tuple[bytes, int]:
        last_reason = ""
        for attempt in range(1, self.retry_attempts + 1):
            try:
                return await self.transport.fetch(url), attempt
            except TransientFetchError as exc:
                last_reason = exc.reason
                logger.warning("Attempt %d/%d for %s failed: %s", attempt, self.retry_attempts, url, exc.reason)
            if attempt < self.retry_attempts:
                await asyncio.sleep(self.retry_delay)
        raise TerminalFetchError(url, self.retry_attempts, last_reason)
