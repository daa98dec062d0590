"""CSV file sink and plain-text table for the final record list."""

from __future__ import annotations

import csv
import logging
import os
from pathlib import Path
from typing import Any

from models import Record, SkippedRow

_DEFAULT_CSV_OUTPUT_PATH = "officeholder_lifespans.csv"
_DEFAULT_SKIPPED_OUTPUT_PATH = "officeholder_skipped_rows.csv"

LOGGER = logging.getLogger(__name__)

CSV_COLUMNS = [
    "name",
    "birth_year",
    "death_year",     # empty for living people
    "age_at_death",   # empty for living people
    "is_alive",
]

SKIPPED_COLUMNS = [
    "row_index",
    "reason",         # error kind, e.g. unrecognized_format
    "raw_text",
    "message",
]


def record_to_row(record: Record) -> dict[str, Any]:
    return {
        "name": record.name,
        "birth_year": record.birth_year,
        "death_year": "" if record.death_year is None else record.death_year,
        "age_at_death": "" if record.age_at_death is None else record.age_at_death,
        "is_alive": record.is_alive,
    }


def write_records(records: list[Record], csv_path: str | None = None) -> Path:
    """Write the full record list, replacing any previous file."""
    path = Path(csv_path or os.getenv("CSV_OUTPUT_PATH", _DEFAULT_CSV_OUTPUT_PATH))
    _write_csv(path, CSV_COLUMNS, [record_to_row(r) for r in records])
    LOGGER.info("Wrote %s records to %s", len(records), path)
    return path


def write_skipped(skipped: list[SkippedRow], csv_path: str | None = None) -> Path:
    """Write the rows excluded from the dataset so data loss can be audited."""
    path = Path(csv_path or os.getenv("SKIPPED_OUTPUT_PATH", _DEFAULT_SKIPPED_OUTPUT_PATH))
    rows = [
        {
            "row_index": s.row.row_index,
            "reason": s.reason,
            "raw_text": s.row.text,
            "message": _as_text(s.message, max_len=400),
        }
        for s in skipped
    ]
    _write_csv(path, SKIPPED_COLUMNS, rows)
    LOGGER.info("Wrote %s skipped rows to %s", len(skipped), path)
    return path


def format_records_table(records: list[Record]) -> str:
    """Render records as a fixed-width text table with a totals footer."""
    width = max([len("NAME"), *(len(r.name) for r in records)])
    rule = "─" * (width + 26)

    lines = [
        f"{'NAME':<{width}} {'BORN':>6} {'DIED':>6} {'AGE':>5} {'ALIVE':>6}",
        rule,
    ]
    for r in records:
        died = "" if r.death_year is None else str(r.death_year)
        age = "" if r.age_at_death is None else str(r.age_at_death)
        alive = "yes" if r.is_alive else ""
        lines.append(f"{r.name:<{width}} {r.birth_year:>6} {died:>6} {age:>5} {alive:>6}")

    alive_count = sum(1 for r in records if r.is_alive)
    lines.append(rule)
    lines.append(f"{'TOTAL':<{width}} {len(records):>6}  alive={alive_count}")
    return "\n".join(lines)


def _write_csv(path: Path, columns: list[str], rows: list[dict[str, Any]]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(fh, fieldnames=columns, extrasaction="ignore")
        writer.writeheader()
        writer.writerows(rows)


def _as_text(value: Any, max_len: int = 500) -> str:
    """Convert value to a stripped string, truncated to max_len chars."""
    s = value.strip() if isinstance(value, str) else ""
    if len(s) > max_len:
        return s[: max_len - 1] + "…"
    return s
