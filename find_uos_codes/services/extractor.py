from __future__ import annotations

import re

from ..models.row import Row

"""Record number extraction.

A course record number is a lowercase ``r`` followed by exactly seven digits
(no check digit). Quotes, semicolons and other characters around it are simply
not part of the match.
"""

__all__ = [
    "RECORD_NUMBER_RE",
    "extract_record_numbers",
    "assign_record_numbers",
]

RECORD_NUMBER_RE = re.compile(r"r[0-9]{7}")


def extract_record_numbers(text: str) -> list[str]:
    """Return every record number in ``text``, left to right, duplicates kept."""
    return RECORD_NUMBER_RE.findall(text)


def assign_record_numbers(rows: list[Row], column: int) -> int:
    """Set ``record_numbers`` on each row from the cell at ``column``.

    Rows without any match keep ``record_numbers`` as None.

    Returns:
        Number of rows that received record numbers
    """
    found = 0
    for row in rows:
        numbers = extract_record_numbers(row.cell(column))
        if numbers:
            row.record_numbers = numbers
            found += 1
    return found
