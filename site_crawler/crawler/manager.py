"""
CrawlManager: one crawl run for one seed URL and one page cap.
"""
from __future__ import annotations

import time
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from site_crawler.config import CrawlerConfig
from site_crawler.crawler.fetcher import Fetcher, LinkExtractor
from site_crawler.crawler.frontier import Frontier
from site_crawler.crawler.link_extractor import extract_links, is_crawlable, normalize_url, site_root
from site_crawler.crawler.models import CrawlSummary, URLState
from site_crawler.crawler.scheduler import CrawlScheduler
from site_crawler.crawler.transport import HttpTransport, Transport
from site_crawler.errors import MalformedInput
from site_crawler.logger import logger
from site_crawler.storage import FileStorage, PageStorage

__all__ = ("CrawlManager",)


class CrawlManager:
    """Wires Frontier, Fetcher and CrawlScheduler together for a single run.

    Every call to :meth:`run` builds its own Frontier, scheduler and HTTP
    session, so one manager can be reused for consecutive jobs without any
    state leaking between them. A ``transport`` passed in is used as is and
    is not closed by the manager.
    """

    def __init__(
        self,
        config: CrawlerConfig,
        *,
        transport: Optional[Transport] = None,
        storage: Optional[PageStorage] = None,
        extractor: LinkExtractor = extract_links,
    ) -> None:
        self.config = config
        self._transport = transport
        self.storage = storage if storage is not None else FileStorage(config.output_dir)
        self.extractor = extractor

    async def run(self, seed: str, max_pages: int) -> CrawlSummary:
        seed = seed.strip()
        if not is_crawlable(seed):
            raise MalformedInput(f"malformed seed URL: {seed!r}")
        if max_pages < 0:
            raise MalformedInput(f"max_pages must be >= 0, got {max_pages}")
        try:
            root = normalize_url(site_root(seed))
        except ValueError as exc:
            raise MalformedInput(f"malformed seed URL: {seed!r} ({exc})") from exc

        logger.info("Crawl of %s started (root %s, max %d pages)", seed, root, max_pages)
        start = time.monotonic()
        self.storage.prepare()
        frontier = Frontier(max_pages)

        async with self._open_transport() as transport:
            fetcher = Fetcher(
                transport,
                self.storage,
                self.extractor,
                retry_attempts=self.config.retry_attempts,
                retry_delay=self.config.retry_delay,
            )
            scheduler = CrawlScheduler(frontier, fetcher, self.config.concurrency)
            scheduler.start()
            try:
                scheduler.submit(root)
                await scheduler.wait_idle()
            finally:
                await scheduler.shutdown()

        counts = frontier.counts()
        summary = CrawlSummary(
            seed=seed,
            root=root,
            max_pages=max_pages,
            admitted=len(frontier),
            fetched=counts[URLState.DONE],
            failed=counts[URLState.FAILED],
            failures=frontier.failures,
            elapsed=time.monotonic() - start,
        )
        logger.info(
            "Crawl of %s finished: %d fetched, %d failed in %.2f s",
            seed, summary.fetched, summary.failed, summary.elapsed,
        )
        return summary

    @asynccontextmanager
    async def _open_transport(self) -> AsyncIterator[Transport]:
        if self._transport is not None:
            yield self._transport
            return
        async with HttpTransport(self.config) as transport:
            yield transport
