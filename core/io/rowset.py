"""
core/io/rowset.py - Sortable report rows and their writers

A RowSet is a header plus string rows with one sort column. It is sorted in
place before being handed to a writer and is never modified by one.

Usage:
    data = RowSet(headers=["ZoneID", "Name"], rows=rows, sort_column=0)
    data.sort()
    write_csv(sys.stdout, data)
"""

from __future__ import annotations

import csv
import io
import logging
from dataclasses import dataclass, field
from operator import itemgetter
from pathlib import Path
from typing import IO, Any

from core.exceptions import WriteError

logger = logging.getLogger(__name__)

DEFAULT_SHEET_NAME = "Report"
# Excel limits sheet names to 31 characters
MAX_SHEET_NAME_LEN = 31


@dataclass
class RowSet:
    """Rows of strings with headers and a sort column

    Attributes:
        headers: column names
        rows: data rows, each as long as ``headers``
        sort_column: index of the column used by ``sort()``
    """

    headers: list[str]
    rows: list[list[str]] = field(default_factory=list)
    sort_column: int = 0

    def __post_init__(self) -> None:
        width = len(self.headers)
        if not 0 <= self.sort_column < width:
            raise ValueError(f"sort column {self.sort_column} out of range for {width} columns")
        for index, row in enumerate(self.rows):
            if len(row) != width:
                raise ValueError(f"row {index} has {len(row)} cells, expected {width}")

    def __len__(self) -> int:
        return len(self.rows)

    def sort(self) -> None:
        """Sort rows by the sort column; ties keep their original order"""
        self.rows.sort(key=itemgetter(self.sort_column))


def _has_carriage_return(row: list[str]) -> bool:
    return any("\r" in cell for cell in row)


def render_csv(data: RowSet) -> str:
    """Header and rows as CSV text (minimal quoting, ``\\n`` line endings)

    The csv module only quotes characters of the line terminator, so rows
    holding a bare ``\\r`` are written fully quoted.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    quoted_writer = csv.writer(buffer, lineterminator="\n", quoting=csv.QUOTE_ALL)

    for row in [data.headers, *data.rows]:
        if _has_carriage_return(row):
            quoted_writer.writerow(row)
        else:
            writer.writerow(row)
    return buffer.getvalue()


def _describe(destination: Any) -> str:
    return str(getattr(destination, "name", type(destination).__name__))


def write_csv(destination: IO[Any], data: RowSet) -> None:
    """Write a RowSet as CSV to a text or binary stream

    The whole document is rendered in memory first and written with a single
    call, then the stream is flushed.

    Args:
        destination: writable stream (file, stdout, socket file, ...)
        data: rows to write

    Raises:
        WriteError: the stream rejected the write or the flush
    """
    text = render_csv(data)
    payload: str | bytes = text
    if isinstance(destination, (io.RawIOBase, io.BufferedIOBase)):
        payload = text.encode("utf-8")

    try:
        destination.write(payload)
        destination.flush()
    except (OSError, ValueError) as e:
        # ValueError: write to a closed file
        raise WriteError(_describe(destination), "could not write CSV", e) from e

    logger.info("Wrote %d rows to %s", len(data), _describe(destination))


def write_excel(path: str | Path, data: RowSet, sheet_name: str = DEFAULT_SHEET_NAME) -> None:
    """Write a RowSet to an .xlsx workbook

    Args:
        path: output file path
        data: rows to write
        sheet_name: worksheet title

    Raises:
        WriteError: the workbook could not be saved
    """
    from openpyxl import Workbook
    from openpyxl.styles import Font

    wb = Workbook()
    ws = wb.active
    ws.title = sheet_name[:MAX_SHEET_NAME_LEN]

    ws.append(data.headers)
    for cell in ws[1]:
        cell.font = Font(bold=True)
    for row in data.rows:
        ws.append(row)
    ws.freeze_panes = "A2"

    try:
        wb.save(path)
    except OSError as e:
        raise WriteError(str(path), "could not save workbook", e) from e

    logger.info("Wrote %d rows to %s", len(data), path)
