#!/usr/bin/env python3
"""
Command line entry point of SiteCrawler.

Commands:
  crawl     Run every job of a ``seedUrl,maxPages`` job file and report the results
  run       Crawl a single seed URL
  config    Show the effective configuration

Common options:
  --config PATH        YAML/JSON config (default: configs/default.yaml if present)
  --concurrency INT    Concurrent fetches per crawl run (overrides the config)
  --output-dir DIR     Directory the fetched pages are written to (overrides the config)
  --log-level LEVEL    Logging level (DEBUG, INFO, ...)
  --log-file PATH      Log file (stderr only when omitted)
  --log-format FORMAT  Logging format string

crawl options:
  --json PATH          Save the JSON report to a file
  --html PATH          Save the HTML report to a file
  --template DIR       Directory with the Jinja2 report template
  --pretty             Indent the JSON output

Example:
  site-crawler --output-dir pages crawl jobs.csv --json report.json
"""
import asyncio
import json
import sys
from pathlib import Path

import click

from site_crawler import __version__
from site_crawler.batch import read_jobs
from site_crawler.config import load_config
from site_crawler.engine import run_plan, start_crawl
from site_crawler.errors import MalformedInput
from site_crawler.logger import init_logging, logger
from site_crawler.report.html_report import render_html
from site_crawler.report.json_report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SiteCrawler, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Path to a YAML or JSON config file.'
)
@click.option(
    '--concurrency', '-n', 'concurrency',
    type=click.IntRange(min=1, max=64),
    default=None,
    help='Concurrent fetches per crawl run (overrides concurrency)'
)
@click.option(
    '--output-dir', '-o', 'output_dir',
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help='Directory for the fetched pages (overrides output_dir)'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Logging level'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Log file (stderr only when omitted)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Logging format string'
)
@click.pass_context
def cli(ctx, config_path, concurrency, output_dir, log_level, log_file, log_format):
    """SiteCrawler command group."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Failed to load configuration: {e}')
    overrides = {}
    if concurrency is not None:
        overrides['concurrency'] = concurrency
    if output_dir is not None:
        overrides['output_dir'] = output_dir
    if overrides:
        cfg = cfg.model_copy(update=overrides)
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.argument('jobs_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save the JSON report to a file'
)
@click.option(
    '--html', '-h', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save the HTML report to a file'
)
@click.option(
    '--template', '-t', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Directory with the Jinja2 template (report.html.j2)'
)
@click.option(
    '--pretty', is_flag=True,
    help='Indent the JSON output (2 spaces)'
)
@click.pass_context
def crawl(ctx, jobs_file, json_output, html_output, template_dir, pretty):
    """Crawl every job of JOBS_FILE (one 'seedUrl,maxPages' per line)."""
    cfg = ctx.obj['config']
    try:
        plan = read_jobs(jobs_file)
    except OSError as e:
        print_error(f'Failed to read job file: {e}')
    logger.info('Starting %d crawl jobs from %s', len(plan.jobs), jobs_file)
    try:
        report = asyncio.run(run_plan(plan, cfg))
    except Exception as e:
        print_error(f'Batch failed: {e}')

    if not json_output and not html_output:
        click.echo(report.json(pretty=pretty))
        return

    if json_output:
        try:
            saved_json = render_json(report, json_output, pretty=pretty)
            click.echo(f'JSON report: {saved_json}')
        except Exception as e:
            print_error(f'Failed to save JSON report: {e}')

    if html_output:
        try:
            saved_html = render_html(report, template_dir, html_output)
            click.echo(f'HTML report: {saved_html}')
        except Exception as e:
            print_error(f'Failed to save HTML report: {e}')


@cli.command('run', context_settings=CONTEXT_SETTINGS)
@click.argument('seed')
@click.argument('max_pages', type=click.IntRange(min=0))
@click.option('--pretty', is_flag=True, help='Indent the JSON output (2 spaces)')
@click.pass_context
def run(ctx, seed, max_pages, pretty):
    """Crawl SEED, fetching at most MAX_PAGES pages."""
    cfg = ctx.obj['config']
    try:
        summary = asyncio.run(start_crawl(seed, max_pages, cfg))
    except MalformedInput as e:
        print_error(f'Malformed input: {e}')
    except Exception as e:
        print_error(f'Crawl failed: {e}')
    data = {
        'seed': summary.seed,
        'root': summary.root,
        'max_pages': summary.max_pages,
        'fetched': summary.fetched,
        'failed': summary.failed,
        'failures': summary.failures,
    }
    click.echo(json.dumps(data, ensure_ascii=False, indent=2 if pretty else None))


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Show the effective configuration as JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
