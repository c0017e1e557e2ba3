# === FILE: roastmap/cli.py ===
#!/usr/bin/env python3
"""
Command line entry point of Roastmap, the sitemap-driven cache warmer.

Commands:
  start URI   Warm up every URL listed in the site's sitemaps and print a report
  config      Show the effective run configuration

Common options:
  --config PATH       YAML/JSON file with defaults for parallel/times/delay
  --log-level LEVEL   Logging level (DEBUG, INFO, ...); default from $DEBUG
  --log-file PATH     Also write logs to this file
  --log-format FORMAT Logging format string

start options:
  --times, -t N       Repeat counts (default 1)
  --parallel, -p N    Maximum parallel requests for one time (default 3)
  --delay, -d MS      Delay before each request in ms (default 3000)
  --json PATH         Save a JSON report to a file
  --html PATH         Save an HTML report to a file
  --template DIR      Folder with the Jinja2 report template

Also:
  --version, -v       Show the Roastmap version

Example:
  roastmap start https://example.com --times 2 --parallel 5 --delay 500
"""
import asyncio
import sys
from pathlib import Path

import click
from jinja2 import TemplateError
from pydantic import ValidationError
from rich.console import Console

from roastmap import __version__
from roastmap.config import load_config
from roastmap.engine import start_warmup
from roastmap.errors import DiscoveryError
from roastmap.logger import configure
from roastmap.report import render_html, render_json, render_table
from roastmap.utils import is_valid_uri

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='Roastmap, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='YAML/JSON file with run defaults.'
)
@click.option(
    '--log-level', 'log_level',
    default=None,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Logging level [default: DEBUG if $DEBUG is 1/true, else INFO]'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Log file path (stdout only if omitted)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Format string for log records'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Roastmap: warm up a website's cache from its sitemaps."""
    configure(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except (OSError, ValueError, TypeError) as e:
        print_error(f'Failed to load configuration: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('start', context_settings=CONTEXT_SETTINGS)
@click.argument('uri')
@click.option('--times', '-t', type=click.IntRange(min=1), default=None, help='Repeat counts.')
@click.option(
    '--parallel', '-p', type=click.IntRange(min=1), default=None,
    help='Maximum parallel requests for one time.'
)
@click.option(
    '--delay', '-d', type=click.IntRange(min=0), default=None,
    help='Delay before each request in ms.'
)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save a JSON report to a file'
)
@click.option(
    '--html', '-h', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save an HTML report to a file'
)
@click.option(
    '--template', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Folder with the Jinja2 report template (bundled one if omitted)'
)
@click.pass_context
def start(ctx, uri, times, parallel, delay, json_output, html_output, template_dir):
    """Warm up the cache of URI. Example: roastmap start https://google.com"""
    if not is_valid_uri(uri):
        print_error(f'Invalid URI: {uri} (expected http(s)://host)')
    try:
        cfg = ctx.obj['config'].with_overrides(concurrency=parallel, sweeps=times, delay_ms=delay)
    except ValidationError as e:
        print_error(f'Invalid options: {e}')

    try:
        results = asyncio.run(start_warmup(uri, cfg))
    except DiscoveryError as e:
        print_error(f'Sitemap discovery failed: {e}')

    render_table(results, Console())

    if json_output:
        try:
            saved_json = render_json(results, json_output)
            click.echo(f'JSON report: {saved_json}')
        except OSError as e:
            print_error(f'Failed to save JSON report: {e}')

    if html_output:
        try:
            saved_html = render_html(results, template_dir, html_output)
            click.echo(f'HTML report: {saved_html}')
        except (OSError, TemplateError) as e:
            print_error(f'Failed to save HTML report: {e}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Show the effective run configuration as JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2, by_alias=True))


if __name__ == "__main__":
    cli()
