"""
CrawlScheduler: bounded worker pool fed through the Frontier gate.
"""
from __future__ import annotations

import asyncio
from typing import List, Optional

from site_crawler.crawler.fetcher import Fetcher
from site_crawler.crawler.frontier import Frontier
from site_crawler.crawler.models import CrawlResult
from site_crawler.logger import logger

__all__ = ("CrawlScheduler",)


class CrawlScheduler:
    """Runs fetch tasks on ``concurrency`` workers and knows when the crawl is over.

    Admission is enqueuing: there is no separate "to visit" list, a URL enters
    the queue only when the Frontier accepts it. ``outstanding`` counts tasks
    submitted but not yet completed; ``wait_idle`` wakes up exactly when it
    drops to zero.
    """

    def __init__(self, frontier: Frontier, fetcher: Fetcher, concurrency: int = 2) -> None:
        if concurrency < 1:
            raise ValueError("concurrency must be >= 1")
        self.frontier = frontier
        self.fetcher = fetcher
        self.concurrency = concurrency
        self.results: List[CrawlResult] = []
        self._queue: asyncio.Queue[str] = asyncio.Queue()
        self._outstanding = 0
        self._idle = asyncio.Condition()
        self._workers: List[asyncio.Task[None]] = []

    @property
    def outstanding(self) -> int:
        return self._outstanding

    def start(self) -> None:
        if self._workers:
            return
        self._workers = [asyncio.create_task(self._worker(i)) for i in range(self.concurrency)]

    def submit(self, url: str) -> bool:
        """Enqueue a task for *url* if the Frontier admits it."""
        if not self.frontier.try_admit(url):
            return False
        self._outstanding += 1
        self._queue.put_nowait(url)
        return True

    async def wait_idle(self) -> None:
        """Suspend until no task is queued or running."""
        async with self._idle:
            await self._idle.wait_for(lambda: self._outstanding == 0)

    async def shutdown(self) -> None:
        for w in self._workers:
            w.cancel()
        await asyncio.gather(*self._workers, return_exceptions=True)
        self._workers = []

    async def _worker(self, idx: int) -> None:
        while True:
            url = await self._queue.get()
            try:
                result = await self._run_task(url)
                if result is not None:
                    for child in result.children:
                        self.submit(child)
            finally:
                self._queue.task_done()
                await self._complete()

    async def _run_task(self, url: str) -> Optional[CrawlResult]:
        try:
            result = await self.fetcher.fetch(url)
        except Exception as exc:
            logger.exception("Worker failed on %s", url)
            self.frontier.mark_failed(url, f"{type(exc).__name__}: {exc}")
            return None
        if result.ok:
            self.frontier.mark_done(url)
        else:
            self.frontier.mark_failed(url, result.error or "unknown error")
        result.content = None
        self.results.append(result)
        return result

    async def _complete(self) -> None:
        self._outstanding -= 1
        if self._outstanding == 0:
            async with self._idle:
                self._idle.notify_all()
