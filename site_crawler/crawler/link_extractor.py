"""
Link extraction and URL normalization utilities for SiteCrawler.
"""
from __future__ import annotations

from typing import Set, Union
from urllib.parse import urldefrag, urljoin, urlsplit, urlunsplit

from bs4 import BeautifulSoup
from bs4.element import Tag

_SCHEMES = ("http", "https")
_DEFAULT_PORTS = {"http": 80, "https": 443}


def extract_links(content: Union[str, bytes], base_url: str) -> Set[str]:
    """
    Extract absolute HTTP(S) links from page content.

    Relative hrefs are resolved against *base_url* (the page's own URL).
    Empty and ``#``-only hrefs, ``mailto:``, ``javascript:`` and any other
    non-http scheme are ignored. Every link is returned normalized.
    """
    soup = BeautifulSoup(content, "html.parser")
    links: Set[str] = set()
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href_val = tag.get("href")
        if not isinstance(href_val, str):
            continue
        raw = href_val.strip()
        if not raw or raw.startswith("#"):
            continue
        try:
            absolute = urljoin(base_url, raw)
            if is_crawlable(absolute):
                links.add(normalize_url(absolute))
        except ValueError:
            # invalid port, broken IPv6 literal
            continue
    return links


def normalize_url(url: str) -> str:
    """
    Normalize URL for use as a dedup key: lowercase scheme and host,
    drop the default port and the fragment. Path and query stay as they are.
    """
    url, _ = urldefrag(url.strip())
    parsed = urlsplit(url)
    scheme = parsed.scheme.lower()
    netloc = (parsed.hostname or "").lower()
    if ":" in netloc:
        netloc = f"[{netloc}]"
    if parsed.port is not None and parsed.port != _DEFAULT_PORTS.get(scheme):
        netloc = f"{netloc}:{parsed.port}"
    if parsed.username:
        userinfo = parsed.username if parsed.password is None else f"{parsed.username}:{parsed.password}"
        netloc = f"{userinfo}@{netloc}"
    path = parsed.path or "/"
    return urlunsplit((scheme, netloc, path, parsed.query, ""))


def is_crawlable(url: str) -> bool:
    """True for absolute http(s) URLs with a host."""
    try:
        parsed = urlsplit(url)
        return parsed.scheme.lower() in _SCHEMES and bool(parsed.hostname)
    except ValueError:
        return False


def site_root(url: str) -> str:
    """
    Cut the URL after the last ``/`` of its path:
    ``http://h/docs/page.html?x=1`` -> ``http://h/docs/``. A URL without a
    path (``http://h``) is returned unchanged.
    """
    parsed = urlsplit(url)
    if not parsed.path:
        return url
    directory = parsed.path[: parsed.path.rfind("/") + 1]
    return urlunsplit((parsed.scheme, parsed.netloc, directory, "", ""))
