"""Error types raised by the extraction pipeline.

ExtractionError and FetchError are fatal for a run. ParseError and
NormalizeError are per-row: the pipeline records the row as skipped and
carries on with the rest of the table.
"""

from __future__ import annotations

from enum import Enum


class ExtractionErrorKind(str, Enum):
    NO_TABLE_FOUND = "no_table_found"
    COLUMN_NOT_FOUND = "column_not_found"


class ParseErrorKind(str, Enum):
    UNRECOGNIZED_FORMAT = "unrecognized_format"
    MISSING_NAME = "missing_name"


class NormalizeErrorKind(str, Enum):
    NON_INTEGER_YEAR = "non_integer_year"
    INVALID_ORDERING = "invalid_ordering"
    YEAR_OUT_OF_RANGE = "year_out_of_range"


class PipelineError(RuntimeError):
    """Base class; carries a machine-readable kind and the offending text."""

    def __init__(self, kind: Enum, message: str, raw_text: str | None = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.raw_text = raw_text


class ExtractionError(PipelineError):
    """The source markup no longer has the expected structure."""


class ParseError(PipelineError):
    """A raw row does not match any known biographical text shape."""


class NormalizeError(PipelineError):
    """Extracted year fragments failed typing or validation."""


class FetchError(RuntimeError):
    """The source page could not be downloaded.

    Raised on a cache miss and on a forced refresh alike; a stale cached copy
    is never served in place of a failed download.
    """
