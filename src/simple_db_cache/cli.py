"""Click CLI for simple-db-cache — inspect and maintain a cache directory."""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any, TextIO

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from simple_db_cache.cache.manager import CacheManager, modified_at
from simple_db_cache.config.hierarchy import load_config_hierarchy
from simple_db_cache.config.schema import CacheOptions
from simple_db_cache.errors.exceptions import SimpleDbCacheError

console = Console()
error_console = Console(stderr=True)


def _setup_logging(verbosity: int, default_level: str | None = None) -> None:
    """Configure logging based on verbosity level, falling back to the configured level."""
    level = logging.getLevelName((default_level or "WARNING").upper())
    if not isinstance(level, int):
        level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=error_console, show_time=False, show_path=False)],
    )


@contextmanager
def _reporting_errors() -> Iterator[None]:
    """Print cache errors and exit 1 instead of showing a traceback."""
    try:
        yield
    except SimpleDbCacheError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)


def _open_cache(ctx: click.Context) -> CacheManager:
    config: dict[str, Any] = ctx.obj["config"]
    with _reporting_errors():
        return CacheManager(CacheOptions.from_config(config))


@click.group()
@click.version_option(package_name="simple-db-cache")
@click.option(
    "--cache-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Directory holding the cache database.",
)
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug).")
@click.pass_context
def cli(ctx: click.Context, cache_dir: str | None, verbose: int) -> None:
    """sdb-cache — two-tier file artifact cache."""
    config = load_config_hierarchy(cache_dir=cache_dir)
    _setup_logging(verbose, config.get("log_level"))
    ctx.obj = {"config": config}


@cli.command("stats")
@click.pass_context
def cache_stats(ctx: click.Context) -> None:
    """Show cache statistics."""
    with _open_cache(ctx) as mgr, _reporting_errors():
        stats = mgr.stats()
        cache_dir = mgr.options.cache_dir

    table = Table(title="Cache Statistics", show_header=True)
    table.add_column("Metric", style="cyan")
    table.add_column("Value")

    table.add_row("Cache dir", str(cache_dir))
    table.add_row("Entries", str(stats.disk_entries))
    table.add_row("Size (MB)", f"{stats.size_mb:.3f}")
    table.add_row("Hydrated in memory", str(stats.memory_entries))
    table.add_row("Memory size (MB)", f"{stats.memory_size_mb:.3f}")

    console.print(table)


@cli.command("ls")
@click.pass_context
def list_entries(ctx: click.Context) -> None:
    """List cached paths and whether their entries are still fresh."""
    with _open_cache(ctx) as mgr, _reporting_errors():
        entries = mgr.entries()

    table = Table(title="Cached Files", show_header=True)
    table.add_column("Path", style="cyan", overflow="fold")
    table.add_column("Added", no_wrap=True)
    table.add_column("Status", no_wrap=True)

    for path, entry in sorted(entries, key=lambda item: item[0]):
        try:
            fresh = entry.is_fresh(modified_at(path))
        except OSError:
            status = "[red]missing[/red]"
        else:
            status = "[green]fresh[/green]" if fresh else "[yellow]stale[/yellow]"
        table.add_row(path, entry.inserted_at.isoformat(timespec="seconds"), status)

    console.print(table)


@cli.command("get")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def get_entry(ctx: click.Context, path: str) -> None:
    """Print the cached content for PATH, exit 1 on a miss."""
    key = str(Path(path).resolve())
    with _open_cache(ctx) as mgr, _reporting_errors():
        content = mgr.get(key)

    if content is None:
        error_console.print(f"[yellow]Not cached:[/yellow] {key}")
        sys.exit(1)
    click.echo(content, nl=False)


@cli.command("add")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--content-file",
    type=click.File("r"),
    default="-",
    help="File holding the content to cache (default: stdin).",
)
@click.pass_context
def add_entry(ctx: click.Context, path: str, content_file: TextIO) -> None:
    """Cache content for PATH."""
    key = str(Path(path).resolve())
    content = content_file.read()
    with _open_cache(ctx) as mgr, _reporting_errors():
        mgr.add(key, content)
    console.print(f"[green]Cached {key}[/green]")


@cli.command("clear")
@click.confirmation_option(prompt="Are you sure you want to clear the cache?")
@click.pass_context
def cache_clear(ctx: click.Context) -> None:
    """Clear all cached data."""
    with _open_cache(ctx) as mgr, _reporting_errors():
        mgr.clear()
    console.print("[green]Cache cleared.[/green]")


def main() -> None:
    """Entry point for the CLI."""
    cli()
