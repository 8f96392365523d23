# ABOUTME: Rich table utilities for styled run summaries in the terminal
# ABOUTME: Provides pre-configured tables for extraction stats, found connections and logging status

from typing import Any

from rich.box import ROUNDED, SIMPLE
from rich.console import Console
from rich.table import Table

from db_inventory.core.models import Connection, ExtractionStats, Record


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


def create_multi_column_table(
    title: str,
    columns: list[tuple[str, str]],
    rows: list[list[str]],
    title_style: str = "bold cyan",
    header_style: str = "bold magenta",
    alternate_row_styles: list[str] | None = None,
    box_style=ROUNDED,
) -> Table:
    """Create a multi-column table.

    Args:
        title: Table title with emoji/styling
        columns: List of (column_name, column_style) tuples
        rows: List of row data
        title_style: Style for the table title
        header_style: Style for column headers
        alternate_row_styles: Alternating row styles for zebra striping
        box_style: Border style for the table

    Returns:
        Formatted Rich table ready for printing
    """
    table = Table(
        title=f"[{title_style}]{title}[/{title_style}]",
        box=box_style,
        show_header=True,
        header_style=header_style,
        border_style="cyan",
        title_justify="left",
        row_styles=alternate_row_styles or ["", "dim"],
        expand=True,
    )

    for name, style in columns:
        table.add_column(name, style=style)

    for row in rows:
        table.add_row(*row)

    return table


def create_stats_table(stats: ExtractionStats) -> Table:
    """Create the end-of-run extraction summary table."""
    stats_data = {
        "📋 Records": str(stats.total_records),
        "🗄️ Database Names": f"{stats.database_names} ({stats.database_percentage:.1f}%)",
        "📑 Table Names": f"{stats.table_names} ({stats.table_percentage:.1f}%)",
    }

    return create_key_value_table(
        title="📊 Extraction Summary",
        data=stats_data,
        title_style="bold green",
        key_style="cyan",
        value_style="white",
        box_style=SIMPLE,
    )


def create_connections_table(records: list[Record]) -> Table:
    """Create a table listing every site with a complete connection."""
    rows = []
    for record in records:
        connection = record.connection or Connection()
        rows.append([record.path or "", connection.db_name or "", connection.table or ""])

    return create_multi_column_table(
        title=f"🔌 Connections Found ({len(records)})",
        columns=[("Path", "blue"), ("Database", "green"), ("Table", "yellow")],
        rows=rows,
    )


def create_connection_table(directory: str, connection: Connection) -> Table:
    """Create a table for the identifiers found in a single directory."""
    connection_data = {
        "📁 Directory": directory,
        "🗄️ Database": connection.db_name or "❌ Not found",
        "📑 Table": connection.table or "❌ Not found",
        "✅ Complete": "Yes" if connection.is_complete else "No",
    }

    return create_key_value_table(title="🔎 Directory Scan", data=connection_data)


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

    # Add log files if they exist
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


def print_rich_table(console: Console, table: Table) -> None:
    """Print a rich table with consistent spacing and style.

    Args:
        console: Rich console instance
        table: Configured table to print
    """
    console.print()  # Add spacing before
    console.print(table)
    console.print()  # Add spacing after
