import json

from site_crawler.aggregator import aggregate_results
from site_crawler.crawler.models import CrawlSummary
from site_crawler.errors import MalformedInput
from site_crawler.report import render_html, render_json


def sample_report():
    summary = CrawlSummary(
        seed="http://example.com",
        root="http://example.com/",
        max_pages=5,
        admitted=3,
        fetched=2,
        failed=1,
        failures={"http://example.com/dead": "gave up after 3 attempts (<HTTP 500>)"},
        elapsed=1.23456,
    )
    skipped = [{"line_no": 2, "seed": "nope", "reason": "malformed seed URL: 'nope'"}]
    return aggregate_results([summary], skipped, [MalformedInput("bad line", line_no=3)])


def test_aggregate_totals():
    data = sample_report().as_dict()
    assert data["totals"] == {"runs": 1, "skipped": 1, "format_errors": 1, "fetched": 2, "failed": 1}
    assert data["runs"][0]["elapsed"] == 1.235
    assert data["format_errors"] == ["line 3: bad line"]


def test_render_json(tmp_path):
    path = render_json(sample_report(), tmp_path / "nested" / "report.json")
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["runs"][0]["failures"] == {"http://example.com/dead": "gave up after 3 attempts (<HTTP 500>)"}


def test_render_html_escapes_content(tmp_path):
    path = render_html(sample_report(), None, tmp_path / "report.html")
    html = path.read_text(encoding="utf-8")
    assert "http://example.com/dead" in html
    assert "&lt;HTTP 500&gt;" in html
    assert "line 3: bad line" in html
