"""
Main CLI interface for Lyric-Finder

Entry point of the `lyric-finder` console script. The CLI is built using
Click and provides:
- serve: run the web application
- search: one-off lyrics lookup from the terminal
- parse: show how a query is interpreted (artist/title readings)
- config show: print the effective configuration
"""

import asyncio
import functools
import json
import sys

import click

from . import __version__
from .config.settings import get_settings, reload_settings
from .exceptions import ConfigError
from .lyrics.processor import EMPTY_QUERY_MESSAGE, LyricsProcessor, is_blank_query, not_found_message
from .lyrics.query import parse_query
from .utils.logger import configure_from_settings, get_current_log_file, get_logger

logger = get_logger(__name__)


def print_banner():
    """Print application banner to console"""
    banner = """
╔═══════════════════════════════════════════════╗
║                 Lyric-Finder                  ║
║                                               ║
║   Song lyrics from LRCLIB, with Genius as     ║
║   the fallback                                ║
╚═══════════════════════════════════════════════╝
    """
    click.echo(click.style(banner, fg='green', bold=True))


def handle_error(func):
    """
    Decorator to handle common CLI errors gracefully

    Wraps CLI command functions so every command reports failures the same
    way: a red one-line message, the error logged, and a non-zero exit code.

    Args:
        func: The CLI command function to wrap

    Returns:
        Wrapped function with error handling
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except KeyboardInterrupt:
            click.echo(click.style("\n\nOperation cancelled by user", fg='yellow'))
            sys.exit(130)  # Standard exit code for SIGINT
        except ConfigError as e:
            logger.error(f"Configuration error: {e}")
            click.echo(click.style(f"Configuration error: {e.message}", fg='red'), err=True)
            sys.exit(1)
        except Exception as e:
            logger.error(f"Command failed: {e}")
            click.echo(click.style(f"Error: {e}", fg='red'), err=True)
            sys.exit(1)
    return wrapper


@click.group(invoke_without_command=True)
@click.option('--version', is_flag=True, help='Show version information')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
@click.option('--config', type=click.Path(), help='Path to config file')
@click.pass_context
@handle_error
def cli(ctx, version, verbose, config):
    """
    Lyric-Finder - find song lyrics from a freeform query

    Type a song the way you would say it ("Hey Jude by The Beatles",
    "The Beatles - Hey Jude", "hey jude") and get cleaned-up lyrics back.
    """
    ctx.ensure_object(dict)

    if version:
        click.echo(f"Lyric-Finder v{__version__}")
        return

    settings = reload_settings(config) if config else get_settings()

    if verbose:
        settings.logging.level = "DEBUG"
        ctx.obj['verbose'] = True

    configure_from_settings()

    if config:
        logger.info(f"Loaded config: {settings.loaded_from}")
    if verbose:
        logger.debug("Verbose mode enabled")

    if ctx.invoked_subcommand is None:
        print_banner()
        click.echo(ctx.get_help())


@cli.command()
@click.option('--host', help='Bind address (overrides config)')
@click.option('--port', '-p', type=int, help='Port (overrides config)')
@handle_error
def serve(host, port):
    """
    Run the web application

    Serves the search form and lyrics pages until interrupted with Ctrl+C.
    """
    # Imported here so the other commands don't pay for aiohttp.web and jinja2
    from .web.app import run_server

    settings = get_settings()
    if host:
        settings.server.host = host
    if port:
        settings.server.port = port
    settings.require_valid()

    log_file = get_current_log_file()
    if log_file:
        click.echo(f"Logging to {log_file}")

    run_server(settings)


async def _lookup(query: str):
    async with LyricsProcessor() as processor:
        return await processor.find_lyrics(query)


@cli.command()
@click.argument('query')
@click.option('--json', 'as_json', is_flag=True, help='Print the result as JSON')
@handle_error
def search(query, as_json):
    """
    Look up lyrics for QUERY and print them

    Exits with code 1 when no lyrics are found.
    """
    if is_blank_query(query):
        click.echo(click.style(EMPTY_QUERY_MESSAGE, fg='yellow'), err=True)
        sys.exit(1)

    result = asyncio.run(_lookup(query.strip()))

    if as_json:
        click.echo(json.dumps({
            'query': result.query,
            'found': result.found,
            'provenance': result.provenance.value if result.provenance else None,
            'lyrics': result.text,
            'error': result.error,
            'elapsed': round(result.elapsed, 3),
        }, indent=2, ensure_ascii=False))
        if not result.found:
            sys.exit(1)
        return

    if result.error:
        click.echo(click.style(result.error, fg='red'), err=True)
        sys.exit(1)

    if not result.found:
        click.echo(click.style(not_found_message(result.query), fg='yellow'), err=True)
        sys.exit(1)

    click.echo(click.style(f"Source: {result.provider_label}", fg='cyan'))
    click.echo()
    click.echo(result.text)


@cli.command()
@click.argument('query')
@handle_error
def parse(query):
    """Show how QUERY is split into title and artist"""
    parsed = parse_query(query)

    click.echo(f"Title:  {parsed.title}")
    click.echo(f"Artist: {parsed.artist if parsed.artist else '(none, freeform lookup)'}")

    if parsed.alternate:
        click.echo("\nAlternate reading:")
        click.echo(f"   Title:  {parsed.alternate.title}")
        click.echo(f"   Artist: {parsed.alternate.artist}")


@cli.group()
def config():
    """Configuration management"""
    pass


@config.command()
@handle_error
def show():
    """
    Show current configuration

    Prints every section of the effective configuration (file, environment
    and defaults merged). API keys are masked.
    """
    settings = get_settings()

    click.echo("Current Configuration:")
    click.echo(f"   Loaded from: {settings.loaded_from or 'defaults'}\n")

    for section, values in settings.to_dict(mask_secrets=True).items():
        click.echo(f"{section.capitalize()}:")
        for key, value in values.items():
            click.echo(f"   {key}: {value}")
        click.echo()

    problems = settings.validate()
    if problems:
        click.echo(click.style("Problems:", fg='yellow'))
        for problem in problems:
            click.echo(click.style(f"   - {problem}", fg='yellow'))


if __name__ == '__main__':
    cli()
