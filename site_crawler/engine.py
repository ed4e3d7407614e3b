# File: site_crawler/engine.py
"""site_crawler.engine: runs a batch of crawl jobs concurrently and aggregates the results."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Callable, List, Sequence, Tuple, Union

from site_crawler.aggregator import BatchReport, SkippedJob, aggregate_results
from site_crawler.batch import CrawlJob, JobPlan, read_jobs
from site_crawler.config import CrawlerConfig
from site_crawler.crawler.manager import CrawlManager
from site_crawler.crawler.models import CrawlSummary
from site_crawler.errors import MalformedInput
from site_crawler.logger import logger

__all__ = ["Engine", "run_jobs", "run_plan", "start_crawl"]

ManagerFactory = Callable[[CrawlerConfig], CrawlManager]


async def _run_job(
    job: CrawlJob,
    config: CrawlerConfig,
    factory: ManagerFactory,
    slots: asyncio.Semaphore,
) -> Union[CrawlSummary, SkippedJob]:
    async with slots:
        try:
            return await factory(config).run(job.seed, job.max_pages)
        except MalformedInput as exc:
            logger.error("Skipping job %s (line %d): %s", job.seed, job.line_no, exc)
            return {"line_no": job.line_no, "seed": job.seed, "reason": str(exc)}
        except Exception as exc:
            logger.exception("Crawl of %s aborted", job.seed)
            return {"line_no": job.line_no, "seed": job.seed, "reason": f"{type(exc).__name__}: {exc}"}


async def run_jobs(
    jobs: Sequence[CrawlJob],
    config: CrawlerConfig,
    factory: ManagerFactory = CrawlManager,
) -> Tuple[List[CrawlSummary], List[SkippedJob]]:
    """Run every job, at most ``config.runners`` at the same time.

    A job that fails to start is logged and skipped; the others carry on.
    """
    slots = asyncio.Semaphore(config.runners)
    outcomes = await asyncio.gather(*(_run_job(job, config, factory, slots) for job in jobs))
    summaries = [o for o in outcomes if isinstance(o, CrawlSummary)]
    skipped = [o for o in outcomes if not isinstance(o, CrawlSummary)]
    return summaries, skipped


async def run_plan(
    plan: JobPlan,
    config: CrawlerConfig,
    factory: ManagerFactory = CrawlManager,
) -> BatchReport:
    logger.info("Starting batch of %d jobs (%d malformed lines skipped)", len(plan.jobs), len(plan.errors))
    summaries, skipped = await run_jobs(plan.jobs, config, factory)
    report = aggregate_results(summaries, skipped, plan.errors)
    logger.info(
        "Batch finished: %d runs, %d skipped, %d pages fetched, %d failed",
        len(report.runs), len(report.skipped), report.fetched, report.failed,
    )
    return report


async def start_crawl(
    seed: str,
    max_pages: int,
    config: CrawlerConfig,
    factory: ManagerFactory = CrawlManager,
) -> CrawlSummary:
    """Crawl a single seed; MalformedInput propagates to the caller."""
    return await factory(config).run(seed, max_pages)


class Engine:
    """Synchronous facade running a whole job file with one config."""

    def __init__(self, config: CrawlerConfig, factory: ManagerFactory = CrawlManager) -> None:
        self.config = config
        self.factory = factory

    def start_batch(self, jobs_file: Union[str, Path]) -> BatchReport:
        """Read the job file and run the whole batch."""
        plan = read_jobs(jobs_file)
        return asyncio.run(run_plan(plan, self.config, self.factory))
