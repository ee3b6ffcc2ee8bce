"""
core/io - Report output
"""

from .rowset import RowSet, render_csv, write_csv, write_excel

__all__: list[str] = [
    "RowSet",
    "render_csv",
    "write_csv",
    "write_excel",
]
