# ABOUTME: Main CLI application entry point using asyncclick for native async support
# ABOUTME: Provides commands to build the site database inventory and inspect single site folders

import asyncclick as click
from rich.console import Console
from rich.panel import Panel

from db_inventory.config import get_config
from db_inventory.core.service import InventoryService
from db_inventory.errors import DirectoryListError, FetchError
from db_inventory.extraction.connection import ConnectionExtractor
from db_inventory.utils.logging import (
    LoggingMode,
    configure_logging,
    create_smart_progress,
    get_logging_status,
    with_pipeline_context,
)
from db_inventory.utils.rich_tables import (
    create_connection_table,
    create_connections_table,
    create_logging_status_table,
    create_stats_table,
    print_rich_table,
)

console = Console()


@click.command()
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Inventory file to write (default: output.json)")
@click.pass_context
async def run(ctx, output: str | None):
    """
    🗂️ Build the site database inventory.

    Fetches the site manifest, scans each site's folder for database and
    table names, and writes the sites where both were found.
    """
    json_output = ctx.obj["json_output"]

    with with_pipeline_context("inventory") as logger:
        logger.info("Starting inventory run")

        if not json_output:
            console.print(Panel.fit("🗂️ [bold cyan]Site Database Inventory[/bold cyan]", border_style="magenta"))

        service = InventoryService(output_file=output)
        try:
            if json_output:
                result = await service.run()
            else:
                _, _, tracker = create_smart_progress(console, "🌐 Fetching manifest and scanning site folders...")
                with tracker:
                    result = await service.run()
        except FetchError as e:
            logger.error("Manifest fetch failed", error=str(e))
            if not json_output:
                console.print(f"[red]❌ {e}[/red]")
            ctx.exit(1)
        finally:
            await service.close()

        logger.info("Inventory run complete", output=str(result.output_path), found=len(result.report.records))

        if not json_output:
            print_rich_table(console, create_stats_table(result.report.stats))
            console.print(result.report.stats.summary())
            if result.report.records:
                print_rich_table(console, create_connections_table(result.report.records))
            console.print(f"💾 File written to: [bold green]{result.output_path}[/bold green]")


@click.command()
@click.argument("directory", type=click.Path(file_okay=False))
@click.pass_context
async def scan(ctx, directory: str):
    """
    🔎 Scan one site folder for database and table names.
    """
    extractor = ConnectionExtractor()
    try:
        connection = extractor.scan_directory(directory)
    except DirectoryListError as e:
        console.print(f"[red]❌ {e}[/red]")
        ctx.exit(1)

    if ctx.obj["json_output"]:
        click.echo(connection.model_dump_json(indent=4, exclude_none=True))
        return

    print_rich_table(console, create_connection_table(directory, connection))


def _initialize_logging(json_output: bool, log_level: str | None = None, log_file: str | None = None) -> None:
    """Initialize logging configuration."""
    try:
        config = get_config()
        mode = LoggingMode.PRODUCTION if json_output else LoggingMode.INTERACTIVE

        # Use config defaults when CLI parameters are not provided
        final_log_level = log_level or config.log_level
        final_log_file = log_file or (str(config.log_file) if config.log_file else None)

        configure_logging(mode=mode, log_level=final_log_level, log_file=final_log_file)
    except OSError:
        # Fall back to minimal logging configuration
        mode = LoggingMode.PRODUCTION if json_output else LoggingMode.INTERACTIVE
        configure_logging(mode=mode, log_level=log_level or "INFO", log_file=log_file)


@click.command(name="logging-status")
def logging_status():
    """
    📊 Show current logging configuration and status.
    """
    status = get_logging_status()
    logging_table = create_logging_status_table(status)
    print_rich_table(console, logging_table)


@click.group(invoke_without_command=True)
@click.option("--json", is_flag=True, help="Output structured JSON logs instead of rich interface")
@click.option("--log-level", default=None, help="Logging level (DEBUG, INFO, WARNING, ERROR)")
@click.option("--log-file", help="Custom log file path")
@click.pass_context
def app(ctx, json: bool, log_level: str | None, log_file: str | None):
    """
    🗂️ DB Inventory - database connections for every site in the manifest

    Combines the remote site manifest with each site's local config files to
    find the database and table every site uses.
    """
    # Store global options in context for commands to access
    ctx.ensure_object(dict)
    ctx.obj["json_output"] = json

    # Initialize logging once here instead of in each command
    _initialize_logging(json, log_level, log_file)

    # Show help if no command provided
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# Add commands to the main group
app.add_command(run)
app.add_command(scan)
app.add_command(logging_status)


if __name__ == "__main__":
    app()
