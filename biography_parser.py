"""Split raw biography cells into a name and a birth/death text fragment.

Two shapes occur in the source table:

    "Jane Doe(1900–1980)Some District"   deceased: life span in parentheses
    "John Smith(b. 1950)Some District"   living: "b." marker and birth year

The life span separator is the en dash (U+2013) the source actually uses.
An ASCII hyphen between the years is not accepted.
"""

from __future__ import annotations

import logging
import re

from errors import ParseError, ParseErrorKind
from models import ParsedBiography, RawRow, SkippedRow
from patterns import BORN_RE, LIFE_SPAN_RE

# Citation markers such as "[a]" or "[12]" left over from the page.
_FOOTNOTE_RE = re.compile(r"\[[^\]]*\]")

LOGGER = logging.getLogger(__name__)


def parse(row: RawRow) -> ParsedBiography:
    """Extract the name and life fragment from one raw row.

    Raises:
        ParseError: UNRECOGNIZED_FORMAT when neither shape is present,
            MISSING_NAME when nothing precedes the opening parenthesis.
    """
    name, _, rest = row.text.partition("(")
    name = _FOOTNOTE_RE.sub("", name).strip()

    life_span = LIFE_SPAN_RE.search(rest)
    born = BORN_RE.search(rest)

    if life_span is None and born is None:
        raise ParseError(
            ParseErrorKind.UNRECOGNIZED_FORMAT,
            f"No life span or birth marker in row {row.row_index}: {row.text!r}",
            raw_text=row.text,
        )
    if not name:
        raise ParseError(
            ParseErrorKind.MISSING_NAME,
            f"Empty name in row {row.row_index}: {row.text!r}",
            raw_text=row.text,
        )

    if life_span is not None and born is not None:
        LOGGER.warning(
            "parser: row %s has both a life span and a birth marker, using life span: %r",
            row.row_index,
            row.text,
        )

    if life_span is not None:
        return ParsedBiography(name=name, life_span_text=life_span.group(), source=row)
    return ParsedBiography(name=name, born_text=born.group(), source=row)


def parse_all(rows: list[RawRow]) -> tuple[list[ParsedBiography], list[SkippedRow]]:
    """Parse every row, collecting failures instead of raising."""
    parsed: list[ParsedBiography] = []
    skipped: list[SkippedRow] = []
    for row in rows:
        try:
            parsed.append(parse(row))
        except ParseError as exc:
            LOGGER.warning("parser: skipping row %s (%s): %s", row.row_index, exc.kind.value, exc)
            skipped.append(SkippedRow(row=row, reason=exc.kind.value, message=str(exc)))

    LOGGER.info("parser: parsed=%s skipped=%s", len(parsed), len(skipped))
    return parsed, skipped
