# ABOUTME: Main CLI application entry point using asyncclick for native async support
# ABOUTME: Provides commands for scraping the listing page, browsing, saving and annotating articles

import json as jsonlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import NoReturn

import asyncclick as click
from rich.console import Console
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from webdev_scraper.config import get_config
from webdev_scraper.core.curation import CurationService
from webdev_scraper.core.errors import FetchError, NoteLinkError, ScraperError
from webdev_scraper.core.ingestion import IngestionCoordinator, IngestionReport
from webdev_scraper.extraction import HttpSourceFetcher, ListingExtractor
from webdev_scraper.persistence import RecordStore
from webdev_scraper.utils.logging import (
    LoggingMode,
    configure_logging,
    get_logging_status,
    with_article_context,
    with_pipeline_context,
)
from webdev_scraper.utils.rich_tables import (
    create_articles_table,
    create_ingestion_report_table,
    create_key_value_table,
    create_logging_status_table,
    print_rich_table,
)

console = Console()

EMPTY_LISTING_MESSAGE = 'There\'s nothing scraped yet. Please run "webdev-scraper scrape"!'
EMPTY_SAVED_MESSAGE = "You haven't saved any articles yet! Save one with \"webdev-scraper save ID\"!"


@asynccontextmanager
async def _open_store(database_url: str) -> AsyncGenerator[RecordStore, None]:
    """Open a record store for the lifetime of one command."""
    store = RecordStore(database_url)
    try:
        await store.create_tables()
        yield store
    finally:
        await store.close()


def _fail(error: ScraperError, json_output: bool) -> NoReturn:
    """Report an error to the user and exit non-zero."""
    if json_output:
        payload = {"error": type(error).__name__, "message": str(error)}
        if isinstance(error, NoteLinkError):
            payload["note_id"] = error.note_id
        click.echo(jsonlib.dumps(payload))
    else:
        console.print(f"[red]❌ {error}[/red]")
    raise SystemExit(1)


def _echo_json(data) -> None:
    click.echo(jsonlib.dumps(data, indent=2))


def _parse_note_fields(fields: tuple[str, ...]) -> dict[str, str]:
    """Turn key=value arguments into a note body."""
    body: dict[str, str] = {}
    for item in fields:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected key=value, got {item!r}", param_hint="FIELDS")
        body[key] = value
    return body


async def _ingest_with_retries(coordinator: IngestionCoordinator, retries: int) -> IngestionReport:
    """Run ingestion, re-triggering on FetchError up to ``retries`` extra times.

    A failed fetch writes nothing, so a retry starts from a clean slate.
    """
    retrying = AsyncRetrying(
        stop=stop_after_attempt(retries + 1),
        retry=retry_if_exception_type(FetchError),
        wait=wait_exponential(multiplier=0.5, max=10),
        reraise=True,
    )
    return await retrying(coordinator.ingest)


@click.command()
@click.option(
    "--retries", default=0, show_default=True, type=click.IntRange(min=0), help="Retry a failed fetch N times"
)
@click.option("--url", "source_url", default=None, help="Listing page to scrape (defaults to configured source)")
@click.pass_context
async def scrape(ctx, retries: int, source_url: str | None):
    """
    🕷️ Scrape the listing page and store new articles.

    Articles already in the store (same title and link) are skipped, so
    scraping an unchanged page twice adds nothing.
    """
    json_output = ctx.obj["json_output"]
    config = get_config()
    url = source_url or config.source_url

    with with_pipeline_context("ingestion", source_url=url) as logger:
        fetcher = HttpSourceFetcher()
        try:
            async with _open_store(ctx.obj["database_url"]) as store:
                coordinator = IngestionCoordinator(store, fetcher, ListingExtractor(), source_url=url)
                if json_output:
                    report = await _ingest_with_retries(coordinator, retries)
                else:
                    with console.status(f"🕸️ Scraping {url}..."):
                        report = await _ingest_with_retries(coordinator, retries)
        except ScraperError as e:
            logger.warning("Scrape failed", error=str(e), error_type=type(e).__name__)
            _fail(e, json_output)
        finally:
            await fetcher.close()

        logger.info("Scrape finished", created=report.created, skipped=report.skipped)

    if json_output:
        _echo_json({"created": report.created, "skipped": report.skipped, "created_ids": report.created_ids})
    else:
        print_rich_table(console, create_ingestion_report_table(report, url))


@click.command()
@click.option("--saved", is_flag=True, help="Only show saved articles")
@click.pass_context
async def articles(ctx, saved: bool):
    """
    📰 List stored articles, newest first.
    """
    json_output = ctx.obj["json_output"]
    try:
        async with _open_store(ctx.obj["database_url"]) as store:
            service = CurationService(store)
            rows = await (service.list_saved() if saved else service.list_all())
    except ScraperError as e:
        _fail(e, json_output)

    if json_output:
        _echo_json([row.to_dict() for row in rows])
        return

    if not rows:
        console.print(f"[yellow]{EMPTY_SAVED_MESSAGE if saved else EMPTY_LISTING_MESSAGE}[/yellow]")
        return

    title = "⭐ Saved Articles" if saved else "📰 Articles"
    print_rich_table(console, create_articles_table(rows, title=title))


@click.command()
@click.argument("article_id", type=int)
@click.pass_context
async def show(ctx, article_id: int):
    """
    🔎 Show one article together with its note.
    """
    json_output = ctx.obj["json_output"]
    try:
        async with _open_store(ctx.obj["database_url"]) as store:
            record = await CurationService(store).get_article(article_id)
    except ScraperError as e:
        _fail(e, json_output)

    if json_output:
        _echo_json(record)
        return

    data = {key: str(value) for key, value in record.items() if key != "note"}
    note_record = record.get("note")
    if note_record:
        data.update({f"note.{key}": str(value) for key, value in note_record.items()})
    print_rich_table(console, create_key_value_table(title=f"📄 Article {article_id}", data=data))


@click.command()
@click.argument("article_id", type=int)
@click.pass_context
async def save(ctx, article_id: int):
    """
    ⭐ Toggle the saved state of an article.
    """
    json_output = ctx.obj["json_output"]
    with with_article_context(article_id) as logger:
        try:
            async with _open_store(ctx.obj["database_url"]) as store:
                article = await CurationService(store).toggle_save(article_id)
        except ScraperError as e:
            logger.warning("Toggle save failed", error=str(e))
            _fail(e, json_output)

    if json_output:
        _echo_json(article.to_dict())
    else:
        console.print(f"✅ Article {article.id}: [bold green]{article.status}[/bold green]")


@click.command()
@click.argument("article_id", type=int)
@click.argument("fields", nargs=-1, required=True)
@click.pass_context
async def note(ctx, article_id: int, fields: tuple[str, ...]):
    """
    📝 Attach a note to an article, replacing any previous note.

    FIELDS are key=value pairs, e.g. title="Read later" body="Good intro".
    """
    json_output = ctx.obj["json_output"]
    body = _parse_note_fields(fields)
    with with_article_context(article_id) as logger:
        try:
            async with _open_store(ctx.obj["database_url"]) as store:
                service = CurationService(store)
                await service.attach_note(article_id, body)
                record = await service.get_article(article_id)
        except ScraperError as e:
            logger.warning("Attach note failed", error=str(e))
            _fail(e, json_output)

    if json_output:
        _echo_json(record)
    else:
        console.print(f"📝 Note {record['note']['id']} attached to article {article_id}")


def _initialize_logging(json_output: bool, log_level: str | None = None, log_file: str | None = None) -> None:
    """Initialize logging configuration."""
    config = get_config()
    mode = LoggingMode.PRODUCTION if json_output else LoggingMode.INTERACTIVE

    # Use config defaults when CLI parameters are not provided
    final_log_level = log_level or config.log_level
    final_log_file = log_file or (str(config.log_file) if config.log_file else None)

    configure_logging(mode=mode, log_level=final_log_level, log_file=final_log_file)


@click.command(name="logging-status")
def logging_status():
    """
    📊 Show current logging configuration and status.
    """
    status = get_logging_status()
    logging_table = create_logging_status_table(status)
    print_rich_table(console, logging_table)


@click.group(invoke_without_command=True)
@click.option("--json", is_flag=True, help="Output JSON instead of rich tables")
@click.option("--log-level", default=None, help="Logging level (DEBUG, INFO, WARNING, ERROR)")
@click.option("--log-file", help="Custom log file path")
@click.option("--database-url", default=None, help="Database URL (defaults to configured database)")
@click.pass_context
def app(ctx, json: bool, log_level: str | None, log_file: str | None, database_url: str | None):
    """
    🕸️ Webdev Scraper - collect, save and annotate articles from a listing page.
    """
    # Store global options in context for commands to access
    ctx.ensure_object(dict)
    ctx.obj["json_output"] = json
    ctx.obj["database_url"] = database_url or get_config().database_url

    # Initialize logging once here instead of in each command
    _initialize_logging(json, log_level, log_file)

    # Show help if no command provided
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# Add commands to the main group
app.add_command(scrape)
app.add_command(articles)
app.add_command(show)
app.add_command(save)
app.add_command(note)
app.add_command(logging_status)


if __name__ == "__main__":
    app()
