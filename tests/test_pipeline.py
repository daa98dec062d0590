"""End-to-end tests for pipeline.run_pipeline over a small synthetic page."""

from __future__ import annotations

import pytest

from errors import ExtractionError, ExtractionErrorKind
from models import Record
from pipeline import run_pipeline

_HEADER = (
    '<tr><th rowspan="2">No.</th><th rowspan="2">Name<br/>(Birth–Death)<br/>Constituency</th>'
    '<th colspan="2">Term of office</th></tr>'
    "<tr><th>From</th><th>To</th></tr>"
)


def _page(*bios: str) -> str:
    rows = "".join(
        f"<tr><td>{i}</td><td>{bio}</td><td>19{i:02d}</td><td>19{i + 1:02d}</td></tr>"
        for i, bio in enumerate(bios)
    )
    return f'<html><body><table class="wikitable">{_HEADER}{rows}</table></body></html>'


SAMPLE_PAGE = _page(
    "Interim Government",                                    # leading artifact row
    "<a>Jane Doe</a><br/>(1900–1980)<br/>Some District",
    "<a>John Smith</a><br/>(b. 1950)<br/>Some District",
    "Broken Entry no years here",
    "<a>Old Timer</a><br/>(1880–1950)<br/>North",
    "Name(Birth-Death)Constituency",
    "<a>Jane Doe</a><br/>(1900–1980)<br/>Some District",    # second, non-consecutive term
    "<a>Jane Doe</a><br/>(1900–1980)<br/>Other District",   # same person, new seat
    "<a>Bad Order</a><br/>(1980–1900)<br/>X",
)


def test_run_pipeline_produces_ordered_unique_records() -> None:
    result = run_pipeline(SAMPLE_PAGE, max_year=2025)

    assert result.records == [
        Record("Old Timer", 1880, 1950),
        Record("Jane Doe", 1900, 1980),
        Record("John Smith", 1950, None),
    ]


def test_run_pipeline_reports_skipped_rows() -> None:
    result = run_pipeline(SAMPLE_PAGE, max_year=2025)

    assert result.skipped_count == 2
    reasons = {s.row.text: s.reason for s in result.skipped}
    assert reasons == {
        "Broken Entry no years here": "unrecognized_format",
        "Bad Order(1980–1900)X": "invalid_ordering",
    }


def test_run_pipeline_round_trip_examples() -> None:
    result = run_pipeline(SAMPLE_PAGE, max_year=2025)
    by_name = {r.name: r for r in result.records}

    jane = by_name["Jane Doe"]
    assert (jane.birth_year, jane.death_year, jane.age_at_death) == (1900, 1980, 80)

    john = by_name["John Smith"]
    assert (john.birth_year, john.death_year, john.age_at_death) == (1950, None, None)


def test_run_pipeline_malformed_row_increments_skip_count_by_one() -> None:
    clean = run_pipeline(_page("Artifact", "Jane Doe(1900–1980)X"), max_year=2025)
    dirty = run_pipeline(
        _page("Artifact", "Jane Doe(1900–1980)X", "Broken Entry no years here"), max_year=2025
    )

    assert dirty.records == clean.records
    assert dirty.skipped_count == clean.skipped_count + 1


def test_run_pipeline_header_literal_never_reaches_parser() -> None:
    result = run_pipeline(_page("Artifact", "Name(Birth-Death)Constituency"), max_year=2025)

    assert result.records == []
    assert result.skipped_count == 0


def test_run_pipeline_keep_first_row() -> None:
    result = run_pipeline(_page("Jane Doe(1900–1980)X"), skip_first_row=False, max_year=2025)
    assert result.records == [Record("Jane Doe", 1900, 1980)]


def test_run_pipeline_keeps_real_person_in_first_row() -> None:
    result = run_pipeline(_page("Jane Doe(1900–1980)X", "John Smith(b. 1950)Y"), max_year=2025)

    assert result.records == [Record("Jane Doe", 1900, 1980), Record("John Smith", 1950)]
    assert result.skipped_count == 0


def test_run_pipeline_structural_failure_is_fatal() -> None:
    with pytest.raises(ExtractionError) as excinfo:
        run_pipeline("<html><body><p>No tables today</p></body></html>")

    assert excinfo.value.kind is ExtractionErrorKind.NO_TABLE_FOUND
