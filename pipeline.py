"""Run Loader -> Parser -> Normalizer -> Assembler over one markup document."""

from __future__ import annotations

import logging

import table_loader
from assembler import assemble
from biography_parser import parse_all
from models import PipelineResult
from normalizer import dedupe, normalize_all

LOGGER = logging.getLogger(__name__)


def run_pipeline(
    markup: str,
    skip_first_row: bool = True,
    table_class: str | None = None,
    column_label: str | None = None,
    max_year: int | None = None,
) -> PipelineResult:
    """Turn source markup into the ordered, de-duplicated record list.

    ExtractionError from the loader propagates: the source structure has
    changed and nothing downstream is meaningful. Row-level parse and
    normalize failures are collected in PipelineResult.skipped.
    """
    rows = table_loader.load(
        markup,
        table_class=table_class,
        column_label=column_label,
        skip_first_row=skip_first_row,
    )

    parsed, parse_skipped = parse_all(rows)
    records, normalize_skipped = normalize_all(parsed, max_year=max_year)
    records = assemble(dedupe(records))

    result = PipelineResult(records=records, skipped=parse_skipped + normalize_skipped)
    LOGGER.info(
        "Pipeline complete. raw_rows=%s records=%s skipped=%s",
        len(rows),
        len(result.records),
        result.skipped_count,
    )
    return result
