# ABOUTME: Rich table utilities for styled CLI summaries
# ABOUTME: Provides table generators for logging status, country records and run summaries

from collections.abc import Sequence
from typing import Any

from rich.box import ROUNDED
from rich.console import Console
from rich.table import Table

from country_cards.cards.render import CountryRecord


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


def create_logging_status_table(status: dict[str, Any]) -> Table:
    """Create a logging configuration status table.

    Args:
        status: Logging status dictionary

    Returns:
        Styled logging configuration table
    """
    logging_data = {
        "🔧 Mode": status["mode"].title(),
        "📁 Log Directory": status["log_directory"] or "N/A (production mode)",
        "🔇 Suppressed Libraries": ", ".join(status["third_party_suppressed"]),
    }

    if status["log_files"]["main"]:
        logging_data["📝 Main Log"] = status["log_files"]["main"]
    if status["log_files"]["json"]:
        logging_data["📊 JSON Log"] = status["log_files"]["json"]
    if status["log_files"]["errors"]:
        logging_data["🚨 Error Log"] = status["log_files"]["errors"]

    return create_key_value_table(
        title="🔍 Logging Configuration",
        data=logging_data,
        title_style="bold green",
        key_style="blue",
        value_style="white",
    )


def create_country_table(record: CountryRecord) -> Table:
    """Show the extracted facts for a single country."""
    return create_key_value_table(
        title=f"🌍 {record.name}",
        data={
            "🗺️ Map": record.map_image_url,
            "🏳️ Flag": record.flag_image_url,
            "🏛️ Capital": record.capital,
        },
    )


def create_run_summary_table(records: Sequence[CountryRecord]) -> Table:
    """Summarize every country rendered during a run."""
    table = Table(
        title=f"[bold green]✅ Rendered {len(records)} countries[/bold green]",
        box=ROUNDED,
        header_style="bold magenta",
        border_style="cyan",
        title_justify="left",
    )
    table.add_column("Country", style="bold blue")
    table.add_column("Capital", style="green")
    table.add_column("Map", style="white")
    table.add_column("Flag", style="white")

    for record in records:
        table.add_row(record.name, record.capital, record.map_image_url, record.flag_image_url)

    return table


def print_rich_table(console: Console, table: Table) -> None:
    """Print a table with a blank line before it."""
    console.print()
    console.print(table)
