# ABOUTME: Main CLI application entry point using asyncclick for native async support
# ABOUTME: Provides commands for rendering country flashcards, locating media files and logging status

import asyncclick as click
from rich.console import Console
from rich.panel import Panel

from country_cards.config import get_config
from country_cards.core.pipeline import build_pipeline
from country_cards.errors import CountryCardsError
from country_cards.utils.logging import (
    LoggingMode,
    configure_logging,
    create_smart_progress,
    get_logging_status,
    with_pipeline_context,
)
from country_cards.utils.rich_tables import (
    create_country_table,
    create_logging_status_table,
    create_run_summary_table,
    print_rich_table,
)
from country_cards.wiki.media import media_url

console = Console()


@click.command()
@click.option("--country", default=None, help="Render a single country instead of the whole list")
@click.option(
    "--position", type=click.IntRange(min=0), default=0, help="Start at this index of the sorted country list"
)
@click.pass_context
async def run(ctx, country: str | None, position: int):
    """
    🌍 Render map, flag and capital flashcards for every country.

    Articles and media are cached under the configured directories, so an
    interrupted run can be repeated (or resumed with --position) for free.
    """
    json_output = ctx.obj["json_output"]
    config = get_config()

    with with_pipeline_context("country_cards", country=country, position=position) as logger:
        logger.info("Starting run")

        async with build_pipeline(config) as pipeline:
            try:
                if json_output:
                    records = await pipeline.run(only=country, position=position)
                else:
                    _, _, tracker = create_smart_progress(console)
                    with tracker:
                        records = await pipeline.run(
                            only=country,
                            position=position,
                            on_country=lambda index, name: tracker.update(f"🗺️ [{index}] {name}"),
                        )
            except CountryCardsError as e:
                logger.error("Run aborted", error=str(e), error_type=type(e).__name__)
                if not json_output:
                    console.print(f"[red]❌ {e}[/red]")
                ctx.exit(1)

        logger.info("Run complete", rendered=len(records))

    if not json_output:
        if len(records) == 1:
            print_rich_table(console, create_country_table(records[0]))
        else:
            print_rich_table(console, create_run_summary_table(records))


@click.command()
@click.argument("file_name")
def locate(file_name: str):
    """
    🔎 Print the storage URL for a media file name.
    """
    click.echo(media_url(file_name, get_config().media_base_url))


@click.command(name="logging-status")
def logging_status():
    """
    📊 Show current logging configuration and status.
    """
    status = get_logging_status()
    logging_table = create_logging_status_table(status)
    print_rich_table(console, logging_table)


def _initialize_logging(json_output: bool, log_level: str | None = None, log_file: str | None = None) -> None:
    """Initialize logging configuration."""
    config = get_config()
    mode = LoggingMode.PRODUCTION if json_output else config.log_mode

    # Use config defaults when CLI parameters are not provided
    final_log_level = log_level or config.log_level
    final_log_file = log_file or (str(config.log_file) if config.log_file else None)

    configure_logging(mode=mode, log_level=final_log_level, log_file=final_log_file)


@click.group(invoke_without_command=True)
@click.option("--json", is_flag=True, help="Output structured JSON logs instead of rich interface")
@click.option("--log-level", default=None, help="Logging level (DEBUG, INFO, WARNING, ERROR)")
@click.option("--log-file", help="Custom log file path")
@click.pass_context
def app(ctx, json: bool, log_level: str | None, log_file: str | None):
    """
    🗺️ Country Cards - flashcards from Wikipedia country articles

    Extracts location maps, flags and capitals from article markup and renders
    them as Markdown flashcards.
    """
    ctx.ensure_object(dict)
    ctx.obj["json_output"] = json

    _initialize_logging(json, log_level, log_file)

    if ctx.invoked_subcommand is None:
        if not json:
            console.print(Panel.fit("🗺️ [bold cyan]Country Cards[/bold cyan]", border_style="magenta"))
        click.echo(ctx.get_help())


app.add_command(run)
app.add_command(locate)
app.add_command(logging_status)


if __name__ == "__main__":
    app()
