# File: site_crawler/aggregator.py
"""site_crawler.aggregator: collects the outcome of a batch of crawl runs into one report."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterable, List, TypedDict

from site_crawler.crawler.models import CrawlSummary


class RunInfo(TypedDict):
    """Outcome of one finished crawl run."""

    seed: str
    root: str
    max_pages: int
    admitted: int
    fetched: int
    failed: int
    failures: Dict[str, str]
    elapsed: float


class SkippedJob(TypedDict):
    """A job that could not be started or crashed."""

    line_no: int
    seed: str
    reason: str


@dataclass(slots=True)
class BatchReport:
    """Results of a batch: finished runs, skipped jobs and malformed job lines."""

    runs: List[RunInfo] = field(default_factory=list)
    skipped: List[SkippedJob] = field(default_factory=list)
    format_errors: List[str] = field(default_factory=list)

    @property
    def fetched(self) -> int:
        return sum(r["fetched"] for r in self.runs)

    @property
    def failed(self) -> int:
        return sum(r["failed"] for r in self.runs)

    def as_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["totals"] = {
            "runs": len(self.runs),
            "skipped": len(self.skipped),
            "format_errors": len(self.format_errors),
            "fetched": self.fetched,
            "failed": self.failed,
        }
        return data

    def json(self, *, pretty: bool = False) -> str:
        return json.dumps(self.as_dict(), ensure_ascii=False, indent=2 if pretty else None)


def _run_info(summary: CrawlSummary) -> RunInfo:
    return {
        "seed": summary.seed,
        "root": summary.root,
        "max_pages": summary.max_pages,
        "admitted": summary.admitted,
        "fetched": summary.fetched,
        "failed": summary.failed,
        "failures": dict(summary.failures),
        "elapsed": round(summary.elapsed, 3),
    }


def aggregate_results(
    summaries: Iterable[CrawlSummary],
    skipped: Iterable[SkippedJob] = (),
    format_errors: Iterable[Any] = (),
) -> BatchReport:
    """Build a BatchReport; format errors are stored as their messages."""
    return BatchReport(
        runs=[_run_info(s) for s in summaries],
        skipped=list(skipped),
        format_errors=[str(e) for e in format_errors],
    )
