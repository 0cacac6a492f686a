from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable

from ..models.row import Row
from ..models.run_result import Resolution
from .progress import LookupProgress

"""Lookup resolver: record number -> Resolution.

For each distinct record number the COURSE fields are fetched once, in sorted
record number order, one query at a time. A UOS code is four uppercase letters,
optional whitespace, four digits. Codes are normalized (whitespace removed),
sorted and deduplicated.

Fallback policy, in order:
    1. one or more codes found      -> the codes
    2. COURSE fields but no code    -> the first field verbatim
    3. no COURSE field at all       -> the record number itself

Any error raised by ``fetch`` propagates unchanged; no partial mapping is
returned.
"""

__all__ = [
    "UOS_CODE_RE",
    "distinct_record_numbers",
    "extract_uos_codes",
    "resolve_fields",
    "resolve_all",
]

logger = logging.getLogger(__name__)

UOS_CODE_RE = re.compile(r"[A-Z]{4}\s*[0-9]{4}")
_WHITESPACE_RE = re.compile(r"\s+")

FetchFields = Callable[[str], list[str]]


def distinct_record_numbers(rows: Iterable[Row]) -> list[str]:
    """Flatten every row's record numbers, deduplicate and sort."""
    numbers: set[str] = set()
    for row in rows:
        if row.record_numbers:
            numbers.update(row.record_numbers)
    return sorted(numbers)


def extract_uos_codes(fields: Iterable[str]) -> list[str]:
    """Find the UOS codes in ``fields``, normalized, sorted and deduplicated."""
    codes: list[str] = []
    for text in fields:
        for match in UOS_CODE_RE.findall(text):
            codes.append(_WHITESPACE_RE.sub("", match))
    codes.sort()
    # sorted, so duplicates are adjacent
    return [c for i, c in enumerate(codes) if i == 0 or c != codes[i - 1]]


def resolve_fields(record_number: str, fields: list[str]) -> Resolution:
    """Apply the fallback policy to the COURSE fields of one record number."""
    codes = extract_uos_codes(fields)
    if codes:
        return Resolution.codes(record_number, codes)
    if fields:
        return Resolution.course_text(record_number, fields[0])
    return Resolution.not_found(record_number)


def resolve_all(
    record_numbers: list[str],
    fetch: FetchFields,
    progress: LookupProgress | None = None,
) -> dict[str, Resolution]:
    """Resolve each record number with exactly one ``fetch`` call.

    Args:
        record_numbers: distinct record numbers, in query order
        fetch: returns the COURSE field texts for one record number
        progress: optional progress display, advanced once per lookup

    Returns:
        Mapping of record number to Resolution
    """
    mapping: dict[str, Resolution] = {}
    for record_number in record_numbers:
        if record_number in mapping:
            continue
        fields = fetch(record_number)
        resolution = resolve_fields(record_number, fields)
        logger.debug(
            f"{record_number}: fields={len(fields)} kind={resolution.kind.value} "
            f"values={list(resolution.values)}"
        )
        mapping[record_number] = resolution
        if progress is not None:
            progress.advance(record_number)
    return mapping
