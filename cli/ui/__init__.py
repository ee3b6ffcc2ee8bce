"""
cli/ui - Console output helpers
"""

from .console import console, err_console, print_error, print_success, print_table, setup_logging

__all__: list[str] = [
    "console",
    "err_console",
    "print_error",
    "print_success",
    "print_table",
    "setup_logging",
]
