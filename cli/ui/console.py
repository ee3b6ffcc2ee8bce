"""
cli/ui/console.py - Rich console utilities

Status messages and logs go to stderr so that reports written to stdout stay
machine readable.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

# limit botocore noise
logging.getLogger("botocore.httpchecksum").setLevel(logging.WARNING)
logging.getLogger("botocore.credentials").setLevel(logging.WARNING)
logging.getLogger("botocore.loaders").setLevel(logging.WARNING)
logging.getLogger("botocore.session").setLevel(logging.WARNING)

# status symbols
SYMBOL_SUCCESS = "✓"
SYMBOL_ERROR = "✗"

# tables
console = Console(soft_wrap=True)
# messages and logs
err_console = Console(stderr=True, soft_wrap=True)

LOG_LEVELS = [logging.WARNING, logging.INFO, logging.DEBUG]


def setup_logging(verbosity: int = 0) -> None:
    """Configure root logging with a Rich handler on stderr

    Args:
        verbosity: 0 = WARNING, 1 = INFO, 2+ = DEBUG
    """
    level = LOG_LEVELS[min(verbosity, len(LOG_LEVELS) - 1)]
    handler = RichHandler(console=err_console, rich_tracebacks=True, show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logging.basicConfig(level=level, handlers=[handler], force=True)


def print_success(message: str) -> None:
    """Green check mark message"""
    err_console.print(f"[green]{SYMBOL_SUCCESS} {message}[/green]")


def print_error(message: str) -> None:
    """Red cross message"""
    err_console.print(f"[red]{SYMBOL_ERROR} {escape(message)}[/red]", highlight=False)


def print_table(
    title: str,
    columns: list[str],
    rows: list[list],
) -> None:
    """Print rows as a table

    Args:
        title: table title
        columns: column headers
        rows: row data
    """
    table = Table(title=title, show_header=True, header_style="bold magenta")

    for column in columns:
        table.add_column(column)

    for row in rows:
        table.add_row(*[str(cell) for cell in row])

    console.print(table)
