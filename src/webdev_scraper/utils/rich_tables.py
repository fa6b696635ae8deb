# ABOUTME: Rich table utilities for styled, colorful CLI displays
# ABOUTME: Provides pre-configured tables for article listings, ingestion reports and logging status

from typing import Any

from rich.box import ROUNDED, SIMPLE
from rich.console import Console
from rich.table import Table


def create_key_value_table(
    title: str,
    data: dict[str, str],
    title_style: str = "bold cyan",
    key_style: str = "bold blue",
    value_style: str = "green",
    box_style=ROUNDED,
) -> Table:
    """Create a key-value table.

    Args:
        title: Table title with emoji/styling
        data: Dictionary of key-value pairs to display
        title_style: Style for the table title
        key_style: Style for the key column
        value_style: Style for the value column
        box_style: Border style for the table

    Returns:
        Formatted Rich table ready for printing
    """
    table = Table(
        title=f"[{title_style}]{title}[/{title_style}]",
        box=box_style,
        show_header=True,
        header_style="bold magenta",
        border_style="cyan",
        title_justify="left",
        expand=False,
    )

    table.add_column("Field", style=key_style, width=None, no_wrap=False)
    table.add_column("Value", style=value_style, width=None, no_wrap=False)

    for key, value in data.items():
        table.add_row(key, str(value))

    return table


def create_articles_table(articles: list[Any], title: str = "📰 Articles") -> Table:
    """Create a listing table for stored articles, in the order given.

    Args:
        articles: Article rows, already sorted newest first
        title: Table title

    Returns:
        Article listing table
    """
    table = Table(
        title=f"[bold cyan]{title}[/bold cyan]",
        box=ROUNDED,
        show_header=True,
        header_style="bold magenta",
        border_style="cyan",
        title_justify="left",
    )

    table.add_column("ID", style="bold blue", justify="right")
    table.add_column("Title", style="white", no_wrap=False)
    table.add_column("Link", style="dim")
    table.add_column("Status", style="green")
    table.add_column("Note", style="yellow", justify="center")
    table.add_column("Created", style="dim")

    for article in articles:
        table.add_row(
            str(article.id),
            article.title or "[dim](untitled)[/dim]",
            article.link or "—",
            article.status,
            "📝" if article.note_id is not None else "",
            article.created_at.strftime("%Y-%m-%d %H:%M"),
        )

    return table


def create_ingestion_report_table(report: Any, source_url: str) -> Table:
    """Create a summary table for one ingestion run.

    Args:
        report: IngestionReport with created/skipped counts
        source_url: The listing page that was scraped

    Returns:
        Ingestion summary table
    """
    return create_key_value_table(
        title="🕷️ Scrape Summary",
        data={
            "🌐 Source": source_url,
            "✨ Created": str(report.created),
            "♻️ Skipped (duplicates)": str(report.skipped),
        },
        title_style="bold green",
        key_style="cyan",
        value_style="white",
        box_style=SIMPLE,
    )


def create_logging_status_table(status: dict[str, Any]) -> Table:
    """Create a table describing the current logging configuration.

    Args:
        status: Output of get_logging_status()

    Returns:
        Logging status table
    """
    logging_data = {
        "🔧 Mode": status["mode"].title(),
        "📁 Log Directory": status["log_directory"] or "N/A (production mode)",
        "🔇 Suppressed Libraries": ", ".join(status["third_party_suppressed"]),
    }

    if status["log_files"]["main"]:
        logging_data["📝 Main Log"] = status["log_files"]["main"]
    if status["log_files"]["errors"]:
        logging_data["🚨 Error Log"] = status["log_files"]["errors"]

    return create_key_value_table(
        title="🔍 Logging Configuration",
        data=logging_data,
        title_style="bold green",
        key_style="blue",
        value_style="white",
    )


def print_rich_table(console: Console, table: Table) -> None:
    """Print a rich table with consistent spacing and style.

    Args:
        console: Rich console instance
        table: Configured table to print
    """
    console.print()  # Add spacing before
    console.print(table)
    console.print()  # Add spacing after
