"""Command-line interface for xarchive."""

import asyncio
import json
import random
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from xarchive import ArchiveConfig, ArchiveService, __version__
from xarchive.config import CacheBackend, LogFormat
from xarchive.exceptions import XarchiveError

app = typer.Typer(
    name="xarchive",
    help="Twitter/X export archive reader and MCP server",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)

ArchiveArgument = typer.Argument(
    ...,
    exists=True,
    dir_okay=False,
    readable=True,
    help="Path to the Twitter/X export zip",
)


def version_callback(value: bool):
    if value:
        console.print(f"xarchive version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
):
    """xarchive - Twitter/X export archive reader and MCP server."""
    pass


def _run(config: ArchiveConfig, action, rng: random.Random | None = None):
    """Run an async action against a service, reporting archive errors."""

    async def run():
        async with ArchiveService(config, rng=rng) as service:
            return await action(service)

    try:
        return asyncio.run(run())
    except XarchiveError as e:
        err_console.print(f"[red]✗[/red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def serve(
    archive: Path = ArchiveArgument,
    cache: bool = typer.Option(
        False, "--cache/--no-cache", help="Keep decoded tweets in memory between requests"
    ),
    json_logs: bool = typer.Option(False, "--json-logs", help="Log as JSON to stderr"),
):
    """Serve the archive over MCP on stdio."""
    from xarchive.server import serve as serve_stdio

    config = ArchiveConfig(
        archive_path=archive,
        cache_backend=CacheBackend.MEMORY if cache else CacheBackend.NONE,
        log_format=LogFormat.JSON if json_logs else LogFormat.CONSOLE,
    )
    _run(config, serve_stdio)


@app.command("list")
def list_tweets(
    archive: Path = ArchiveArgument,
    limit: int = typer.Option(20, "--limit", "-n", help="Number of tweets to show"),
):
    """Show the most recent tweets."""
    config = ArchiveConfig(archive_path=archive, log_level="WARNING")
    payload = _run(config, lambda service: service.catalog.list_recent())
    _print_tweet_table(payload["contents"][:limit], total=len(payload["contents"]))


@app.command()
def show(
    archive: Path = ArchiveArgument,
    tweet_id: str = typer.Argument(..., help="Tweet id"),
):
    """Print one tweet as JSON, links expanded."""
    config = ArchiveConfig(archive_path=archive, log_level="WARNING")
    payload = _run(config, lambda service: service.catalog.get_tweet(tweet_id))
    console.print_json(json.dumps(payload["contents"][0], ensure_ascii=False))


@app.command()
def text(
    archive: Path = ArchiveArgument,
    tweet_id: str = typer.Argument(..., help="Tweet id"),
):
    """Print the original text of one tweet."""
    config = ArchiveConfig(archive_path=archive, log_level="WARNING")
    payload = _run(config, lambda service: service.catalog.get_tweet_text(tweet_id))
    console.print(payload["contents"][0]["text"], markup=False, highlight=False)


@app.command()
def sample(
    archive: Path = ArchiveArgument,
    size: Optional[int] = typer.Option(
        None, "--size", "-s", help="Number of tweets to sample (default: configured sample size)"
    ),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed for a repeatable sample"),
):
    """Print a sanitized random sample of original tweets."""
    config = ArchiveConfig(archive_path=archive, log_level="WARNING")
    rng = random.Random(seed) if seed is not None else None
    texts = _run(
        config,
        lambda service: service.sampler.sample(service.sampler.parse_request({"sampleSize": size})),
        rng=rng,
    )
    for line in texts:
        console.print(f"[dim]•[/dim] {escape(line)}", highlight=False)


def _print_tweet_table(contents: list[dict], total: int):
    """Print tweets as a table."""
    table = Table(title=f"Recent tweets ({len(contents)} of {total})")
    table.add_column("Id", style="dim")
    table.add_column("Created")
    table.add_column("Text")

    for item in contents:
        text = item["text"][:80] + "..." if len(item["text"]) > 80 else item["text"]
        table.add_row(item["id"], item.get("createdAt") or "-", escape(text))

    console.print(table)


if __name__ == "__main__":
    app()
