"""site_crawler.errors: exception hierarchy shared by the crawler, the batch driver and the CLI."""

from __future__ import annotations

__all__ = [
    "CrawlerError",
    "MalformedInput",
    "TransientFetchError",
    "TerminalFetchError",
    "PersistenceError",
]


class CrawlerError(Exception):
    """Base class for every error raised by SiteCrawler."""


class MalformedInput(CrawlerError):
    """A job line or a seed URL cannot be used; the job is skipped."""

    def __init__(self, message: str, *, line_no: int | None = None) -> None:
        super().__init__(message)
        self.line_no = line_no

    def __str__(self) -> str:
        msg = super().__str__()
        return f"line {self.line_no}: {msg}" if self.line_no is not None else msg


class TransientFetchError(CrawlerError):
    """A single fetch attempt failed (network error, timeout, HTTP error status)."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


class TerminalFetchError(CrawlerError):
    """All fetch attempts for a URL failed."""

    def __init__(self, url: str, attempts: int, last_reason: str) -> None:
        super().__init__(f"{url}: gave up after {attempts} attempts ({last_reason})")
        self.url = url
        self.attempts = attempts
        self.last_reason = last_reason


class PersistenceError(CrawlerError):
    """Writing a fetched page to storage failed."""

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f"cannot save {name}: {reason}")
        self.name = name
        self.reason = reason
