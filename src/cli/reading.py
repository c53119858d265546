"""CLI commands for the reading queue."""

import json
import logging
import sys
import uuid
import zoneinfo
from collections.abc import Callable, Generator
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from functools import wraps
from pathlib import Path
from typing import Any

import click
import structlog

from src.config.error_hints import format_validation_error
from src.config.loader import ConfigValidationError, EngineConfigLoader
from src.config.schemas.engine import EngineConfig
from src.library.errors import (
    ArticleNotFoundError,
    InvalidArticleUrlError,
    StatusTransitionError,
)
from src.library.models import Article, ArticleStatus
from src.library.service import ReadingLibrary
from src.metadata.client import MetadataFetcher
from src.observability.logging import (
    bind_run_context,
    clear_run_context,
    configure_logging,
)
from src.prioritizer.time_fit import time_slot_for_hour
from src.settings.app import get_settings
from src.store.errors import ArticleStoreError
from src.store.store import ArticleStore


logger = structlog.get_logger()

TITLE_WIDTH = 60


@dataclass
class CliOptions:
    """Options shared by every command."""

    db_path: Path
    owner_id: str
    timezone: str
    config_path: Path | None
    json_logs: bool
    verbose: bool
    fetch_timeout_seconds: float
    user_agent: str
    run_id: str


def _fail(message: str) -> None:
    """Print an error and exit with status 1."""
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _print_config_errors(loader: EngineConfigLoader) -> None:
    """Print collected config errors with hints."""
    click.echo("Configuration validation failed:", err=True)
    for error in loader.validation_errors:
        formatted = format_validation_error(
            location=error["loc"],
            message=error["msg"],
            error_type=error.get("type", "unknown"),
            include_hint=True,
        )
        click.echo(f"  - {formatted}", err=True)


def _load_engine_config(options: CliOptions) -> EngineConfig:
    """Load engine.yaml, exit on validation failure."""
    loader = EngineConfigLoader(run_id=options.run_id)
    try:
        return loader.load(options.config_path)
    except ConfigValidationError:
        _print_config_errors(loader)
        sys.exit(1)


@contextmanager
def _open_library(options: CliOptions) -> Generator[ReadingLibrary]:
    """Open the store and yield a refreshed library."""
    config = _load_engine_config(options)
    tz = zoneinfo.ZoneInfo(options.timezone)
    fetcher = MetadataFetcher(
        timeout=options.fetch_timeout_seconds,
        user_agent=options.user_agent,
    )

    with ArticleStore(db_path=options.db_path, run_id=options.run_id) as store:
        library = ReadingLibrary(
            store=store,
            owner_id=options.owner_id,
            fetcher=fetcher,
            config=config,
            clock=lambda: datetime.now(tz),
        )
        library.refresh()
        yield library


def _handle_errors(func: Callable[..., None]) -> Callable[..., None]:
    """Turn library errors into a message and exit status 1."""

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> None:
        try:
            func(*args, **kwargs)
        except ArticleNotFoundError as e:
            _fail(f"no article with id '{e.article_id}'")
        except (InvalidArticleUrlError, StatusTransitionError) as e:
            _fail(str(e))
        except ArticleStoreError as e:
            _fail(f"store failure: {e}")

    return wrapper


def _short_title(title: str) -> str:
    """Truncate a title for one-line display."""
    if len(title) <= TITLE_WIDTH:
        return title
    return title[: TITLE_WIDTH - 3] + "..."


def _format_article(article: Article) -> str:
    """One display line for an article."""
    return (
        f"{article.id}  {article.status.value:<8}  "
        f"p={article.priority:.2f}  f={article.freshness_score:.2f}  "
        f"{article.reading_time_minutes:>3}min  {_short_title(article.title)}"
    )


@click.group()
@click.version_option(version="0.1.0")
@click.option(
    "--db",
    "db_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Path to SQLite database (default: READQ_DB_PATH).",
)
@click.option(
    "--owner",
    "owner_id",
    type=str,
    default=None,
    help="Owner id of the collection (default: READQ_OWNER_ID).",
)
@click.option(
    "--tz",
    "timezone",
    type=str,
    default=None,
    help="Reader's timezone, e.g. Asia/Tokyo (default: READQ_TIMEZONE).",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Path to engine.yaml (default: READQ_ENGINE_CONFIG or built-in).",
)
@click.option(
    "--json-logs/--no-json-logs",
    default=True,
    help="Use JSON format for logs (default: true).",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose logging.",
)
@click.pass_context
def cli(  # noqa: PLR0913
    ctx: click.Context,
    db_path: Path | None,
    owner_id: str | None,
    timezone: str | None,
    config_path: Path | None,
    json_logs: bool,
    verbose: bool,
) -> None:
    """Reading queue: save articles and decide what to read next."""
    settings = get_settings()
    timezone = timezone or settings.timezone
    try:
        zoneinfo.ZoneInfo(timezone)
    except (ValueError, zoneinfo.ZoneInfoNotFoundError):
        _fail(f"Invalid timezone '{timezone}'")

    run_id = str(uuid.uuid4())
    options = CliOptions(
        db_path=db_path or settings.db_path,
        owner_id=owner_id or settings.owner_id,
        timezone=timezone,
        config_path=config_path or settings.engine_config,
        json_logs=json_logs,
        verbose=verbose,
        fetch_timeout_seconds=settings.fetch_timeout_seconds,
        user_agent=settings.user_agent,
        run_id=run_id,
    )

    configure_logging(
        level=logging.DEBUG if verbose else logging.INFO,
        output=sys.stderr,
        json_format=json_logs,
    )
    bind_run_context(run_id, owner_id=options.owner_id)
    ctx.call_on_close(clear_run_context)
    logger.debug(
        "cli_invoked",
        component="cli",
        command=ctx.invoked_subcommand,
        db_path=str(options.db_path),
        timezone=options.timezone,
    )

    ctx.obj = options


@cli.command()
@click.argument("url")
@click.pass_obj
@_handle_errors
def save(options: CliOptions, url: str) -> None:
    """Save an article URL as unread."""
    with _open_library(options) as library:
        article = library.save(url)
    click.echo(f"Saved {article.id}: {article.title}")


@cli.command("list")
@click.option(
    "--status",
    type=click.Choice([s.value for s in ArticleStatus]),
    default=None,
    help="Only show articles with this status.",
)
@click.pass_obj
@_handle_errors
def list_articles(options: CliOptions, status: str | None) -> None:
    """List saved articles, newest first."""
    with _open_library(options) as library:
        articles = library.articles

    if status is not None:
        articles = [a for a in articles if a.status.value == status]
    if not articles:
        click.echo("No articles.")
        return
    for article in articles:
        click.echo(_format_article(article))


@cli.command()
@click.pass_obj
@_handle_errors
def queue(options: CliOptions) -> None:
    """Show what to read next."""
    with _open_library(options) as library:
        entries = library.queue
        slot = time_slot_for_hour(library.views.now.hour)

    if not entries:
        click.echo("Queue is empty.")
        return
    click.echo(f"Read next this {slot}:")
    for position, article in enumerate(entries, start=1):
        click.echo(f"{position}. {_format_article(article)}")


@cli.command("archive-suggestions")
@click.pass_obj
@_handle_errors
def archive_suggestions(options: CliOptions) -> None:
    """Show unread articles that have gone stale."""
    with _open_library(options) as library:
        suggestions = library.archive_suggestions

    if not suggestions:
        click.echo("No archive suggestions.")
        return
    for suggestion in suggestions:
        click.echo(
            f"{suggestion.archive_reason.value:<15}  "
            f"{_format_article(suggestion.article)}"
        )


@cli.command()
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    help="Output as JSON.",
)
@click.pass_obj
@_handle_errors
def stats(options: CliOptions, json_output: bool) -> None:
    """Display reading statistics."""
    with _open_library(options) as library:
        snapshot = library.stats

    if json_output:
        click.echo(json.dumps(snapshot.model_dump(), indent=2, ensure_ascii=False))
        return

    click.echo("Reading Statistics")
    click.echo("=" * 40)
    click.echo(f"  Read: {snapshot.total_read} / {snapshot.total_saved}")
    click.echo(f"  Unread: {snapshot.unread_count}")
    click.echo(f"  Streak: {snapshot.streak} (best {snapshot.best_streak})")
    click.echo(f"  Weekly growth: {snapshot.weekly_growth_percent:+d}%")
    click.echo(f"  Average reading time: {snapshot.average_reading_time}min")
    click.echo(
        "  This week (Mon-Sun): " + " ".join(str(n) for n in snapshot.weekly_read)
    )
    click.echo("")
    click.echo("Top hashtags:")
    for tag in snapshot.top_hashtags:
        click.echo(f"  {tag.name}: {tag.count}")
    click.echo("Top creators:")
    for creator in snapshot.top_creators:
        click.echo(f"  {creator.name} ({creator.urlname}): {creator.count}")


@cli.command()
@click.argument("article_id")
@click.pass_obj
@_handle_errors
def read(options: CliOptions, article_id: str) -> None:
    """Mark an article as read."""
    with _open_library(options) as library:
        article = library.mark_read(article_id)
    click.echo(f"Marked read: {article.title}")


@cli.command()
@click.argument("article_id")
@click.pass_obj
@_handle_errors
def unread(options: CliOptions, article_id: str) -> None:
    """Mark an article as unread again."""
    with _open_library(options) as library:
        article = library.mark_unread(article_id)
    click.echo(f"Marked unread: {article.title}")


@cli.command()
@click.argument("article_id")
@click.argument("value", type=click.FloatRange(0.0, 1.0))
@click.pass_obj
@_handle_errors
def progress(options: CliOptions, article_id: str, value: float) -> None:
    """Record reading progress between 0 and 1."""
    with _open_library(options) as library:
        article = library.update_progress(article_id, value)
    click.echo(f"{article.status.value} ({article.progress:.0%}): {article.title}")


@cli.command()
@click.argument("article_id")
@click.argument("text")
@click.pass_obj
@_handle_errors
def memo(options: CliOptions, article_id: str, text: str) -> None:
    """Attach a memo to an article (empty text clears it)."""
    with _open_library(options) as library:
        article = library.update_memo(article_id, text)
    click.echo(f"Memo {'saved' if article.memo else 'cleared'}: {article.title}")


@cli.command()
@click.argument("article_ids", nargs=-1, required=True)
@click.pass_obj
@_handle_errors
def archive(options: CliOptions, article_ids: tuple[str, ...]) -> None:
    """Archive one or more articles."""
    with _open_library(options) as library:
        count = library.archive(article_ids)
    click.echo(f"Archived {count} article(s).")


@cli.command()
@click.argument("article_id")
@click.pass_obj
@_handle_errors
def delete(options: CliOptions, article_id: str) -> None:
    """Delete one article."""
    with _open_library(options) as library:
        library.delete(article_id)
    click.echo(f"Deleted {article_id}.")


@cli.command()
@click.option(
    "--yes",
    is_flag=True,
    help="Confirm deleting every article of the owner.",
)
@click.pass_obj
@_handle_errors
def purge(options: CliOptions, yes: bool) -> None:
    """Delete the whole collection of the owner."""
    if not yes:
        _fail("purge deletes every article; pass --yes to confirm")
    with _open_library(options) as library:
        count = library.delete_all()
    click.echo(f"Deleted {count} article(s).")


@cli.command("validate-config")
@click.argument("path", type=click.Path(path_type=Path))
@click.pass_obj
def validate_config(options: CliOptions, path: Path) -> None:
    """Validate an engine.yaml file without touching the database."""
    loader = EngineConfigLoader(run_id=options.run_id)
    try:
        config = loader.load(path)
    except ConfigValidationError:
        _print_config_errors(loader)
        sys.exit(1)

    click.echo("Configuration is valid!")
    click.echo(f"  Version: {config.version}")
    click.echo(f"  Queue size: {config.queue.queue_size}")
    click.echo(f"  Freshness decay: {config.scoring.freshness_decay_days} days")
    click.echo(f"  Checksum: {loader.checksum}")


if __name__ == "__main__":
    cli()
