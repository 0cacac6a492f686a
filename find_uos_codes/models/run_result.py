from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

"""Resolution and run result models for the UOS code finder.

A Resolution is the final value derived for one record number. RunResult
aggregates the counts reported on the SUMMARY line at the end of a run.
"""

__all__ = [
    "ResolutionKind",
    "Resolution",
    "RunResult",
]


class ResolutionKind(Enum):
    """Which tier of the fallback policy produced a Resolution.

    - CODES: one or more UOS codes were found in the course fields
    - COURSE_TEXT: course fields exist but none holds a UOS code
    - NOT_FOUND: no course field exists for the record number
    """
    CODES = "codes"
    COURSE_TEXT = "course_text"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class Resolution:
    """Result for a single record number.

    ``values`` holds the sorted, deduplicated codes for CODES, or exactly one
    fallback string (first course field, or the record number itself).
    """
    record_number: str
    kind: ResolutionKind
    values: tuple[str, ...]

    @staticmethod
    def codes(record_number: str, codes: list[str]) -> Resolution:
        if not codes:
            raise ValueError("codes resolution needs at least one code")
        return Resolution(record_number, ResolutionKind.CODES, tuple(codes))

    @staticmethod
    def course_text(record_number: str, text: str) -> Resolution:
        return Resolution(record_number, ResolutionKind.COURSE_TEXT, (text,))

    @staticmethod
    def not_found(record_number: str) -> Resolution:
        return Resolution(record_number, ResolutionKind.NOT_FOUND, (record_number,))


@dataclass(frozen=True)
class RunResult:
    """Aggregated counts for one run (SUMMARY line)."""
    total_rows: int  # All rows read, skipped rows included
    processed_rows: int  # Rows that received results
    record_numbers: int  # Distinct record numbers looked up
    codes: int  # Resolutions with UOS codes
    course_text: int  # Resolutions falling back to the first course field
    not_found: int  # Resolutions with no course field at all
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
