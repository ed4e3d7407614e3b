# site_crawler/crawler/transport.py
"""
HTTP transport: one aiohttp session per crawl run, one GET per call.
"""
from __future__ import annotations

import asyncio
from typing import Optional, Protocol

from aiohttp import ClientError, ClientSession, ClientTimeout

from site_crawler.config import CrawlerConfig
from site_crawler.errors import TransientFetchError


class Transport(Protocol):
    async def fetch(self, url: str) -> bytes: ...


class HttpTransport:
    """Fetches raw page bytes; every failure surfaces as TransientFetchError."""

    def __init__(self, config: CrawlerConfig) -> None:
        self.config = config
        self.session: Optional[ClientSession] = None

    async def __aenter__(self) -> HttpTransport:
        self.session = ClientSession(
            timeout=ClientTimeout(total=self.config.timeout),
            headers={"User-Agent": self.config.user_agent},
            raise_for_status=False,
        )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    async def fetch(self, url: str) -> bytes:
        if not self.session:
            raise RuntimeError("Session not initialized")
        try:
            async with self.session.get(url) as resp:
                if resp.status >= 400:
                    raise TransientFetchError(url, f"HTTP {resp.status}")
                return await resp.read()
        except asyncio.TimeoutError as exc:
            raise TransientFetchError(url, "timeout") from exc
        except (ClientError, ValueError) as exc:
            raise TransientFetchError(url, str(exc) or type(exc).__name__) from exc
