import pytest

from site_crawler.crawler.fetcher import Fetcher
from site_crawler.crawler.link_extractor import extract_links
from site_crawler.storage import url_to_filename
from tests.conftest import ALWAYS, FakeTransport, MemoryStorage, links

PAGE = "http://example.com/page"


def make_fetcher(transport, storage, **kwargs) -> Fetcher:
    kwargs.setdefault("retry_delay", 0.0)
    return Fetcher(transport, storage, extract_links, **kwargs)


@pytest.mark.asyncio()
async def test_success_saves_page_and_returns_children(storage):
    transport = FakeTransport({PAGE: links("/a", "b", "#top")})
    result = await make_fetcher(transport, storage).fetch(PAGE)

    assert result.ok
    assert result.attempts == 1
    assert result.children == {"http://example.com/a", "http://example.com/b"}
    assert result.saved_as == url_to_filename(PAGE)
    assert storage.saved[url_to_filename(PAGE)] == links("/a", "b", "#top").encode()


@pytest.mark.asyncio()
async def test_recovers_after_transient_failures(storage):
    transport = FakeTransport({PAGE: links("/a")}, failures={PAGE: 2})
    result = await make_fetcher(transport, storage).fetch(PAGE)

    assert result.ok
    assert result.attempts == 3
    assert transport.calls[PAGE] == 3
    assert result.children == {"http://example.com/a"}


@pytest.mark.asyncio()
async def test_gives_up_after_three_attempts(storage):
    transport = FakeTransport({PAGE: links("/a")}, failures={PAGE: ALWAYS})
    result = await make_fetcher(transport, storage).fetch(PAGE)

    assert not result.ok
    assert result.attempts == 3
    assert transport.calls[PAGE] == 3
    assert result.children == set()
    assert "connection refused" in result.error
    assert storage.saved == {}


@pytest.mark.asyncio()
async def test_waits_fixed_delay_between_attempts(storage, monkeypatch):
    sleeps = []

    async def fake_sleep(delay):
        sleeps.append(delay)

    monkeypatch.setattr("site_crawler.crawler.fetcher.asyncio.sleep", fake_sleep)
    transport = FakeTransport({}, failures={PAGE: ALWAYS})
    await make_fetcher(transport, storage, retry_delay=5.0).fetch(PAGE)

    assert sleeps == [5.0, 5.0]


@pytest.mark.asyncio()
async def test_persistence_error_does_not_block_link_discovery():
    storage = MemoryStorage(fail=True)
    transport = FakeTransport({PAGE: links("/a")})
    result = await make_fetcher(transport, storage).fetch(PAGE)

    assert result.ok
    assert result.saved_as is None
    assert result.children == {"http://example.com/a"}


def test_rejects_zero_attempts(storage):
    with pytest.raises(ValueError):
        Fetcher(FakeTransport({}), storage, extract_links, retry_attempts=0)
