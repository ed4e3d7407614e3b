# site_crawler/report/json_report.py

"""
JSON report for SiteCrawler.

Serializes a BatchReport to a file.
"""
from pathlib import Path

from site_crawler.aggregator import BatchReport


def render_json(report: BatchReport, output_path: Path | str, *, pretty: bool = True) -> Path:
    """
    Save *report* as JSON at the given path.

    :param report: BatchReport of a finished batch
    :param output_path: path of the JSON file
    :return: Path of the saved file

    Example:
    ```python
    from site_crawler.report.json_report import render_json
    report_path = render_json(report, 'reports/report.json')
    print(f"JSON report saved to: {report_path}")
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(report.json(pretty=pretty), encoding="utf-8")
    return output
