"""Order the final dataset and derive render-ready views and statistics."""

from __future__ import annotations

import logging
import os
import statistics
from datetime import UTC, datetime

from models import LifespanStats, Record, TimelineEntry

LOGGER = logging.getLogger(__name__)


def assemble(records: list[Record]) -> list[Record]:
    """Return records sorted by birth year; ties keep encounter order."""
    return sorted(records, key=lambda r: r.birth_year)


def default_as_of_year() -> int:
    """AS_OF_YEAR from the environment, else the current UTC year."""
    raw = os.getenv("AS_OF_YEAR")
    if raw:
        return int(raw)
    return datetime.now(UTC).year


def timeline_view(records: list[Record], as_of_year: int | None = None) -> list[TimelineEntry]:
    """Build one TimelineEntry per record.

    Living people get plot_death_year = as_of_year so the chart can draw a
    bounded segment ending at "now". Records are not modified.
    """
    if as_of_year is None:
        as_of_year = default_as_of_year()

    return [
        TimelineEntry(
            name=r.name,
            birth_year=r.birth_year,
            plot_death_year=r.death_year if r.death_year is not None else as_of_year,
            is_alive=r.is_alive,
        )
        for r in records
    ]


def lifespan_stats(records: list[Record]) -> LifespanStats:
    """Summarize ages at death over the deceased records."""
    deceased = [r for r in records if r.age_at_death is not None]
    ages = [r.age_at_death for r in deceased]

    if not deceased:
        return LifespanStats(
            total=len(records),
            alive=len(records),
            deceased=0,
            mean_age_at_death=None,
            median_age_at_death=None,
            min_age_at_death=None,
            max_age_at_death=None,
            longest_lived=None,
            shortest_lived=None,
        )

    # max/min return the first of equal ages, i.e. the earliest in order.
    oldest = max(deceased, key=lambda r: r.age_at_death)
    youngest = min(deceased, key=lambda r: r.age_at_death)

    stats = LifespanStats(
        total=len(records),
        alive=len(records) - len(deceased),
        deceased=len(deceased),
        mean_age_at_death=round(statistics.fmean(ages), 2),
        median_age_at_death=float(statistics.median(ages)),
        min_age_at_death=youngest.age_at_death,
        max_age_at_death=oldest.age_at_death,
        longest_lived=oldest.name,
        shortest_lived=youngest.name,
    )
    LOGGER.debug("assembler: stats=%s", stats)
    return stats
