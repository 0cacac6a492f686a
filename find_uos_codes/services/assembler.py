from __future__ import annotations

from collections.abc import Iterable, Mapping

from ..models.row import Row
from ..models.run_result import Resolution

"""Row result assembly.

Each processed row's record numbers are mapped through the resolutions and the
values flattened one level. Duplicates are removed keeping the first
occurrence: the order of record numbers in a cell is meaningful to the reader,
so unlike the resolver no sorting happens here.
"""

__all__ = [
    "assemble_results",
    "row_results",
]


def row_results(record_numbers: Iterable[str], mapping: Mapping[str, Resolution]) -> list[str]:
    results: list[str] = []
    seen: set[str] = set()
    for record_number in record_numbers:
        for value in mapping[record_number].values:
            if value not in seen:
                seen.add(value)
                results.append(value)
    return results


def assemble_results(rows: Iterable[Row], mapping: Mapping[str, Resolution]) -> int:
    """Set ``results`` on every row that has record numbers.

    Returns:
        Number of rows that received results
    """
    assembled = 0
    for row in rows:
        if not row.record_numbers:
            continue
        row.results = row_results(row.record_numbers, mapping)
        assembled += 1
    return assembled
