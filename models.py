"""Shared typed models for the pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class RawRow:
    """One unprocessed biographical cell as extracted from the source table."""

    text: str
    row_index: int


@dataclass(frozen=True, slots=True)
class ParsedBiography:
    """Name plus the un-typed life fragment found in a raw row.

    Exactly one of life_span_text ("1900–1980") and born_text ("b. 1950")
    is set after a successful parse.
    """

    name: str
    life_span_text: str | None = None
    born_text: str | None = None
    source: RawRow | None = field(default=None, compare=False)


@dataclass(frozen=True, slots=True)
class Record:
    """Validated birth/death data for one person."""

    name: str
    birth_year: int
    death_year: int | None = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Record name must not be empty")
        if self.death_year is not None and self.death_year <= self.birth_year:
            raise ValueError(
                f"Death year {self.death_year} is not after birth year {self.birth_year} for {self.name!r}"
            )

    @property
    def age_at_death(self) -> int | None:
        if self.death_year is None:
            return None
        return self.death_year - self.birth_year

    @property
    def is_alive(self) -> bool:
        return self.death_year is None


@dataclass(frozen=True, slots=True)
class TimelineEntry:
    """Render-ready view of a Record; the death year is bounded by the as-of year."""

    name: str
    birth_year: int
    plot_death_year: int
    is_alive: bool


@dataclass(frozen=True, slots=True)
class SkippedRow:
    """A row excluded from the dataset, kept for data-quality auditing."""

    row: RawRow
    reason: str
    message: str


@dataclass(frozen=True, slots=True)
class LifespanStats:
    total: int
    alive: int
    deceased: int
    mean_age_at_death: float | None
    median_age_at_death: float | None
    min_age_at_death: int | None
    max_age_at_death: int | None
    longest_lived: str | None
    shortest_lived: str | None


@dataclass(frozen=True, slots=True)
class PipelineResult:
    """Final ordered dataset plus every row that was dropped on the way."""

    records: list[Record]
    skipped: list[SkippedRow]

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)
