# File: site_crawler/batch.py
"""site_crawler.batch: parsing of the ``seed,max_pages`` job list."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Sequence, Union

from site_crawler.errors import MalformedInput
from site_crawler.logger import logger

__all__: Sequence[str] = ("CrawlJob", "JobPlan", "parse_job_line", "parse_jobs", "read_jobs")

_WHITESPACE = re.compile(r"\s+")


@dataclass(slots=True, frozen=True)
class CrawlJob:
    """One line of the job list."""

    seed: str
    max_pages: int
    line_no: int = 0


@dataclass(slots=True)
class JobPlan:
    """Valid jobs plus the format errors of the lines that were skipped."""

    jobs: List[CrawlJob] = field(default_factory=list)
    errors: List[MalformedInput] = field(default_factory=list)


def parse_job_line(line: str, line_no: int = 0) -> CrawlJob:
    """Parse ``seedUrl,maxPages`` after removing all whitespace."""
    clean = _WHITESPACE.sub("", line)
    fields = clean.split(",")
    if len(fields) != 2:
        raise MalformedInput(f"expected 'seedUrl,maxPages', got {line.strip()!r}", line_no=line_no)
    seed, raw_max = fields
    if not seed:
        raise MalformedInput("empty seed URL", line_no=line_no)
    try:
        max_pages = int(raw_max)
    except ValueError:
        raise MalformedInput(f"max_pages is not a number: {raw_max!r}", line_no=line_no) from None
    if max_pages < 0:
        raise MalformedInput(f"max_pages must be >= 0, got {max_pages}", line_no=line_no)
    return CrawlJob(seed=seed, max_pages=max_pages, line_no=line_no)


def parse_jobs(lines: Iterable[str]) -> JobPlan:
    """Parse every line, collecting format errors instead of stopping at the first one.

    Blank lines and lines starting with ``#`` are ignored.
    """
    plan = JobPlan()
    for line_no, line in enumerate(lines, start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        try:
            plan.jobs.append(parse_job_line(line, line_no))
        except MalformedInput as exc:
            logger.error("Wrong job format, %s", exc)
            plan.errors.append(exc)
    logger.debug("Parsed %d jobs, %d malformed lines", len(plan.jobs), len(plan.errors))
    return plan


def read_jobs(path: Union[str, Path]) -> JobPlan:
    """Read and parse a job file."""
    p = Path(path).expanduser()
    if not p.is_file():
        logger.error("Job file not found: %s", p)
        raise FileNotFoundError(f"Job file not found: {p}")
    with p.open(encoding="utf-8") as f:
        return parse_jobs(f)
