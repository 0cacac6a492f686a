from __future__ import annotations

from collections.abc import Iterator

from ..models.row import Row, Table, TableOptions

"""Output projection.

Insert mode: every row gains a new leading cell holding the joined results
(blank for skipped rows and rows without results).

In-place mode: the result column of each processed row is overwritten; every
other row is emitted exactly as read.

``legacy_header_padding`` reproduces the header output of the earlier
version of this tool: skipped rows gained a leading blank cell in in-place
mode and did not gain one in insert mode.

Rows are never dropped, added or reordered.
"""

__all__ = [
    "project_rows",
]


def _project_header(row: Row, options: TableOptions) -> list[str]:
    # legacy output has the padding the other way round
    pad = options.insert_mode != options.legacy_header_padding
    if pad:
        return ["", *row.cells]
    return list(row.cells)


def _project_insert(row: Row) -> list[str]:
    return [row.result_text, *row.cells]


def _project_in_place(row: Row, result_column: int) -> list[str]:
    cells = list(row.cells)
    if row.results is None:
        return cells
    if len(cells) <= result_column:
        cells.extend([""] * (result_column + 1 - len(cells)))
    cells[result_column] = row.result_text
    return cells


def project_rows(table: Table) -> Iterator[list[str]]:
    """Yield the output cells for each row of ``table``, in input order."""
    options = table.options
    for row in table.header_rows:
        yield _project_header(row, options)
    for row in table.body_rows:
        if options.result_column is None:
            yield _project_insert(row)
        else:
            yield _project_in_place(row, options.result_column)
