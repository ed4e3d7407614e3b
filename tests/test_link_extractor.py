import pytest

from site_crawler.crawler.link_extractor import extract_links, is_crawlable, normalize_url, site_root
from site_crawler.storage import url_to_filename


def test_links_resolved_against_page_url():
    html = '<a href="b.html">B</a><a href="/top">Top</a><a href="../up">Up</a>'
    found = extract_links(html, "http://example.com/dir/page.html")
    assert found == {
        "http://example.com/dir/b.html",
        "http://example.com/top",
        "http://example.com/up",
    }


def test_skips_empty_fragment_and_non_http_links():
    html = (
        '<a href="">empty</a><a href="   ">blank</a><a href="#top">frag</a>'
        '<a href="mailto:me@example.com">mail</a><a href="javascript:void(0)">js</a>'
        '<a href="ftp://example.com/file">ftp</a><a>no href</a>'
    )
    assert extract_links(html, "http://example.com/") == set()


def test_duplicates_collapse_and_other_hosts_are_kept():
    html = '<a href="/a">1</a><a href="/a">2</a><a href="/a#x">3</a><a href="https://other.org/x">4</a>'
    assert extract_links(html, "http://example.com/") == {"http://example.com/a", "https://other.org/x"}


def test_accepts_bytes_content():
    assert extract_links(b'<a href="/x">x</a>', "http://example.com/") == {"http://example.com/x"}


def test_invalid_port_is_ignored():
    assert extract_links('<a href="http://example.com:99999/">x</a>', "http://example.com/") == set()


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("HTTP://Example.COM", "http://example.com/"),
        ("http://example.com:80/a?b=1#frag", "http://example.com/a?b=1"),
        ("https://example.com:8443/A/B", "https://example.com:8443/A/B"),
        ("https://example.com:443/", "https://example.com/"),
    ],
)
def test_normalize_url(raw, expected):
    assert normalize_url(raw) == expected


@pytest.mark.parametrize(
    "seed,root",
    [
        ("http://example.com/docs/page.html", "http://example.com/docs/"),
        ("http://example.com/docs/", "http://example.com/docs/"),
        ("http://example.com/index.html?x=/y", "http://example.com/"),
        ("http://example.com", "http://example.com"),
    ],
)
def test_site_root(seed, root):
    assert site_root(seed) == root


@pytest.mark.parametrize(
    "url,ok",
    [
        ("http://example.com", True),
        ("https://example.com/a", True),
        ("example.com", False),
        ("ftp://example.com", False),
        ("http://", False),
        ("", False),
    ],
)
def test_is_crawlable(url, ok):
    assert is_crawlable(url) is ok


def test_url_to_filename_strips_unsafe_characters():
    assert url_to_filename("http://example.com/a-b/c.html?x=1") == "httpexample.coma-bc.htmlx1.html"


def test_url_to_filename_collision_is_possible():
    assert url_to_filename("http://example.com/a/b") == url_to_filename("http://example.com/ab")
