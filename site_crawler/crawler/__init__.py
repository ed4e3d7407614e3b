"""site_crawler.crawler: the concurrent crawl orchestrator and its collaborators."""

from site_crawler.crawler.fetcher import Fetcher
from site_crawler.crawler.frontier import Frontier
from site_crawler.crawler.manager import CrawlManager
from site_crawler.crawler.models import CrawlResult, CrawlSummary, URLState
from site_crawler.crawler.scheduler import CrawlScheduler

__all__ = [
    "CrawlManager",
    "CrawlResult",
    "CrawlScheduler",
    "CrawlSummary",
    "Fetcher",
    "Frontier",
    "URLState",
]
