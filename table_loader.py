"""Locate the office-holder table in cached markup and pull raw biography cells."""

from __future__ import annotations

import logging
import os
import re

from bs4 import BeautifulSoup, Tag

from errors import ExtractionError, ExtractionErrorKind
from models import RawRow
from patterns import looks_biographical

_DEFAULT_TABLE_CLASS = "wikitable"
_DEFAULT_BIO_COLUMN_LABEL = "Name"

# Header text as it appears when the header row is read like a data row.
# The live page uses an en dash; the ASCII variant shows up in older copies.
HEADER_LITERALS: frozenset[str] = frozenset({
    "Name(Birth\u2013Death)Constituency",
    "Name(Birth-Death)Constituency",
})

_NEWLINE_RUN_RE = re.compile(r"\s*\n\s*")
_SPACE_RUN_RE = re.compile(r"[ \t\u00a0]+")

LOGGER = logging.getLogger(__name__)


def load(
    markup: str,
    table_class: str | None = None,
    column_label: str | None = None,
    skip_first_row: bool = True,
) -> list[RawRow]:
    """Return the de-duplicated biography cells of the marked table.

    Raises:
        ExtractionError: NO_TABLE_FOUND if no table carries table_class,
            COLUMN_NOT_FOUND if no header cell starts with column_label.
    """
    table_class = table_class or os.getenv("TABLE_CLASS", _DEFAULT_TABLE_CLASS)
    column_label = column_label or os.getenv("BIO_COLUMN_LABEL", _DEFAULT_BIO_COLUMN_LABEL)

    soup = BeautifulSoup(markup, "html.parser")
    table = soup.find("table", class_=table_class)
    if table is None:
        raise ExtractionError(
            ExtractionErrorKind.NO_TABLE_FOUND,
            f"No <table class={table_class!r}> found in markup",
        )
    for tag in table.find_all(["style", "script", "noscript"]):
        tag.decompose()

    grid = _expand_grid(table)
    header_row, column, header_text = _locate_column(grid, column_label)

    rows = [
        RawRow(text=cells[column][0], row_index=index)
        for index, cells in enumerate(grid)
        if index > header_row and column < len(cells)
    ]
    extracted = len(rows)

    rows = drop_header_rows(rows, HEADER_LITERALS | {header_text})
    after_header = len(rows)
    if skip_first_row:
        rows = skip_leading_artifact(rows)
    after_artifact = len(rows)
    rows = drop_duplicate_rows(rows)

    LOGGER.info(
        "table loader: extracted=%s after_header_filter=%s after_artifact_skip=%s unique=%s",
        extracted,
        after_header,
        after_artifact,
        len(rows),
    )
    return rows


def drop_header_rows(rows: list[RawRow], header_literals: frozenset[str] | set[str] = HEADER_LITERALS) -> list[RawRow]:
    """Remove repeated header rows and empty cells."""
    return [row for row in rows if row.text and row.text not in header_literals]


def skip_leading_artifact(rows: list[RawRow]) -> list[RawRow]:
    """Drop the first data row if it is not an office-holder.

    The source table opens with a placeholder row that carries no life span
    or birth marker. A first row that does look like a person is kept.
    """
    if not rows:
        return rows
    if looks_biographical(rows[0].text):
        LOGGER.warning(
            "table loader: first row %s looks like a person, keeping it: %r",
            rows[0].row_index,
            rows[0].text,
        )
        return rows
    LOGGER.info("table loader: skipping leading artifact row %s: %r", rows[0].row_index, rows[0].text)
    return rows[1:]


def drop_duplicate_rows(rows: list[RawRow]) -> list[RawRow]:
    """Keep the first occurrence of each distinct text, preserving order."""
    seen: set[str] = set()
    unique: list[RawRow] = []
    for row in rows:
        if row.text in seen:
            continue
        seen.add(row.text)
        unique.append(row)
    return unique


def cell_text(cell: Tag) -> str:
    """Flatten a cell to one line: line breaks vanish, space runs collapse."""
    text = _NEWLINE_RUN_RE.sub("", cell.get_text())
    return _SPACE_RUN_RE.sub(" ", text).strip()


def _locate_column(grid: list[list[tuple[str, bool]]], column_label: str) -> tuple[int, int, str]:
    """Return (row index, column index, header text) of the biography header cell."""
    for row_index, cells in enumerate(grid):
        if not cells or not all(is_header for _, is_header in cells):
            continue
        for column, (text, _) in enumerate(cells):
            if text.startswith(column_label):
                return row_index, column, text

    raise ExtractionError(
        ExtractionErrorKind.COLUMN_NOT_FOUND,
        f"No header cell starting with {column_label!r} in table",
    )


def _expand_grid(table: Tag) -> list[list[tuple[str, bool]]]:
    """Lay the table out as a rectangular grid of (text, is_header) cells.

    Cells with rowspan/colspan are repeated into every position they cover,
    the same way a spreadsheet import would flatten them.
    """
    grid: list[list[tuple[str, bool]]] = []
    # column -> (rows still covered, text, is_header)
    carried: dict[int, tuple[int, str, bool]] = {}

    for tr in table.find_all("tr"):
        if tr.find_parent("table") is not table:
            continue  # row of a nested table

        queue = tr.find_all(["th", "td"], recursive=False)
        row: list[tuple[str, bool]] = []
        column = 0

        while queue or any(c >= column for c in carried):
            if column in carried:
                remaining, text, is_header = carried[column]
                row.append((text, is_header))
                if remaining > 1:
                    carried[column] = (remaining - 1, text, is_header)
                else:
                    del carried[column]
                column += 1
                continue

            if not queue:
                row.append(("", False))
                column += 1
                continue

            cell = queue.pop(0)
            text = cell_text(cell)
            is_header = cell.name == "th"
            rowspan = _span(cell, "rowspan")
            for _ in range(_span(cell, "colspan")):
                row.append((text, is_header))
                if rowspan > 1:
                    carried[column] = (rowspan - 1, text, is_header)
                column += 1

        grid.append(row)

    return grid


def _span(cell: Tag, attr: str) -> int:
    raw = cell.get(attr)
    if not raw:
        return 1
    match = re.match(r"\d+", str(raw).strip())
    return max(1, int(match.group())) if match else 1
