from __future__ import annotations

from dataclasses import dataclass, field

"""Row model for the UOS code finder.

A Row holds the cells exactly as read from the CSV input. The derived fields
``record_numbers`` and ``results`` are filled in by the extractor and the
assembler and stay ``None`` for rows that are not processed.
"""

__all__ = [
    "Row",
    "Table",
    "TableOptions",
]


@dataclass
class Row:
    """One row of the input table plus the values derived from it."""
    cells: tuple[str, ...]  # Source of truth, never modified
    record_numbers: list[str] | None = None  # r + 7 digits, duplicates kept
    results: list[str] | None = None  # Deduplicated, in display order

    def cell(self, index: int) -> str:
        """Return the cell at ``index``, or an empty string past the end of the row."""
        if index < len(self.cells):
            return self.cells[index]
        return ""

    def is_blank(self, index: int) -> bool:
        return self.cell(index) == ""

    @property
    def result_text(self) -> str:
        """Results joined for display; blank when the row has none."""
        if not self.results:
            return ""
        return ", ".join(self.results)


@dataclass(frozen=True)
class TableOptions:
    """Processing-mode parameters shared by every stage.

    ``result_column`` of ``None`` selects insert mode (results go into a new
    leading column). Any other value selects in-place mode.
    """
    skip: int = 1
    record_number_column: int = 0
    result_column: int | None = None
    legacy_header_padding: bool = False

    @property
    def insert_mode(self) -> bool:
        return self.result_column is None

    @staticmethod
    def from_cli(
        skip: int, column: int, result_column: int, legacy_header_padding: bool = False
    ) -> TableOptions:
        """Build options from the 1-based command line values.

        ``column`` is clamped to the first column; a ``result_column`` of 0 (or
        less) means insert mode.
        """
        if skip < 0:
            raise ValueError(f"skip must be non-negative: {skip}")
        record_number_column = max(column - 1, 0)
        result_index = max(result_column - 1, -1)
        return TableOptions(
            skip=skip,
            record_number_column=record_number_column,
            result_column=None if result_index == -1 else result_index,
            legacy_header_padding=legacy_header_padding,
        )


@dataclass
class Table:
    """Parsed input rows and the options they are processed with."""
    rows: list[Row]
    options: TableOptions = field(default_factory=TableOptions)

    @property
    def header_rows(self) -> list[Row]:
        return self.rows[: self.options.skip]

    @property
    def body_rows(self) -> list[Row]:
        return self.rows[self.options.skip :]

    def rows_to_process(self) -> list[Row]:
        """Body rows eligible for record number extraction.

        In in-place mode rows that already have a value in the result column are
        left alone, so a repeated run only fills in the gaps.
        """
        rows = self.body_rows
        if not self.options.insert_mode:
            col = self.options.result_column
            assert col is not None
            rows = [r for r in rows if r.is_blank(col)]
        return rows
