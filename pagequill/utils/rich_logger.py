"""
Rich console logging for the command line.

Provides colorful log output and result tables using the rich library.
"""

import logging
from typing import Any, Dict, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table


def setup_logging(level: str = "INFO", console: Optional[Console] = None) -> Console:
    """
    Route the root logger through a RichHandler.

    Args:
        level: Log level
        console: Console to write to (stderr console by default)

    Returns:
        The console used by the handler
    """
    console = console or Console(stderr=True)
    rich_handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    rich_handler.setFormatter(logging.Formatter(fmt="%(message)s", datefmt="[%X]"))
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    rich_handler.setLevel(numeric_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()
    root_logger.addHandler(rich_handler)
    return console


def print_table(console: Console, title: str, columns: Dict[str, str], rows: list) -> None:
    """
    Print rows as a rich table.

    Args:
        console: Target console
        title: Table title
        columns: Column name -> rich style
        rows: Iterable of row tuples
    """
    table = Table(title=title)
    for name, style in columns.items():
        table.add_column(name, style=style)
    for row in rows:
        table.add_row(*(str(value) for value in row))
    console.print(table)


def print_summary(console: Console, title: str, data: Dict[str, Any]) -> None:
    """Display key/value data in a two-column table."""
    print_table(
        console,
        title,
        {"Property": "cyan", "Value": "magenta"},
        [(key, value) for key, value in data.items()],
    )
