"""Type and validate parsed biographies into Records."""

from __future__ import annotations

import logging
import os
from datetime import UTC, datetime

from errors import NormalizeError, NormalizeErrorKind
from models import ParsedBiography, RawRow, Record, SkippedRow
from patterns import LIFE_SPAN_DASH

_DEFAULT_MIN_PLAUSIBLE_YEAR = 1000

LOGGER = logging.getLogger(__name__)


def normalize(parsed: ParsedBiography, max_year: int | None = None) -> Record:
    """Convert a ParsedBiography into a validated Record.

    Args:
        parsed: Output of biography_parser.parse.
        max_year: Latest plausible year; defaults to the current UTC year.

    Raises:
        NormalizeError: NON_INTEGER_YEAR, INVALID_ORDERING or YEAR_OUT_OF_RANGE.
    """
    raw_text = parsed.source.text if parsed.source else None

    if parsed.life_span_text:
        birth_str, _, death_str = parsed.life_span_text.partition(LIFE_SPAN_DASH)
        birth_year = _to_year(birth_str, parsed, raw_text)
        death_year: int | None = _to_year(death_str, parsed, raw_text)
    elif parsed.born_text:
        digits = parsed.born_text.strip().removeprefix("b.").strip()
        birth_year = _to_year(digits, parsed, raw_text)
        death_year = None
    else:
        raise NormalizeError(
            NormalizeErrorKind.NON_INTEGER_YEAR,
            f"No year text for {parsed.name!r}",
            raw_text=raw_text,
        )

    if death_year is not None and death_year <= birth_year:
        raise NormalizeError(
            NormalizeErrorKind.INVALID_ORDERING,
            f"Death year {death_year} is not after birth year {birth_year} for {parsed.name!r}",
            raw_text=raw_text,
        )

    lower = int(os.getenv("MIN_PLAUSIBLE_YEAR", _DEFAULT_MIN_PLAUSIBLE_YEAR))
    upper = max_year if max_year is not None else datetime.now(UTC).year
    for year in (birth_year, death_year):
        if year is not None and not lower <= year <= upper:
            raise NormalizeError(
                NormalizeErrorKind.YEAR_OUT_OF_RANGE,
                f"Year {year} outside {lower}-{upper} for {parsed.name!r}",
                raw_text=raw_text,
            )

    return Record(name=parsed.name, birth_year=birth_year, death_year=death_year)


def normalize_all(
    parsed: list[ParsedBiography], max_year: int | None = None
) -> tuple[list[Record], list[SkippedRow]]:
    """Normalize every biography, collecting failures instead of raising."""
    records: list[Record] = []
    skipped: list[SkippedRow] = []
    for item in parsed:
        try:
            records.append(normalize(item, max_year=max_year))
        except NormalizeError as exc:
            row = item.source or RawRow(text=item.name, row_index=-1)
            LOGGER.warning("normalizer: skipping row %s (%s): %s", row.row_index, exc.kind.value, exc)
            skipped.append(SkippedRow(row=row, reason=exc.kind.value, message=str(exc)))

    LOGGER.info("normalizer: records=%s skipped=%s", len(records), len(skipped))
    return records, skipped


def dedupe(records: list[Record]) -> list[Record]:
    """Collapse exact (name, birth_year, death_year) duplicates, keeping the first.

    A person who held office in non-consecutive terms appears once per term
    in the source table but must be counted once.
    """
    seen: set[Record] = set()
    unique: list[Record] = []
    for record in records:
        if record in seen:
            continue
        seen.add(record)
        unique.append(record)

    if len(unique) != len(records):
        LOGGER.info("normalizer: dedupe collapsed %s duplicate records", len(records) - len(unique))
    return unique


def _to_year(text: str, parsed: ParsedBiography, raw_text: str | None) -> int:
    try:
        return int(text.strip())
    except ValueError as exc:
        raise NormalizeError(
            NormalizeErrorKind.NON_INTEGER_YEAR,
            f"Year {text.strip()!r} is not an integer for {parsed.name!r}",
            raw_text=raw_text,
        ) from exc
