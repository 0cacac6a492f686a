from __future__ import annotations

import csv
import io
import sys
from collections.abc import Iterable
from pathlib import Path

from ..models.row import Row

"""CSV input reader.

Every cell is kept as the exact string from the file and every row keeps its
own length, so rows that are not processed can be written back unchanged.
Blank lines are kept as empty rows. A leading byte-order mark is dropped.
"""

__all__ = [
    "InputError",
    "STDIN_SENTINEL",
    "read_rows",
]

STDIN_SENTINEL = "-"
ENCODING = "utf-8-sig"


class InputError(Exception):
    """Raised when the input cannot be opened, decoded or parsed."""


def _parse(lines: Iterable[str], source: str) -> list[Row]:
    rows: list[Row] = []
    reader = csv.reader(lines, strict=True)
    try:
        for cells in reader:
            # blank lines become empty rows so they are written back as read
            rows.append(Row(cells=tuple(cells)))
    except csv.Error as e:
        raise InputError(f"malformed csv in {source} line {reader.line_num}: {e}") from e
    except UnicodeDecodeError as e:
        raise InputError(f"{source} is not valid utf-8: {e}") from e
    return rows


def read_rows(source: str = STDIN_SENTINEL) -> list[Row]:
    """Read all rows from ``source`` (a path, or ``-`` for standard input).

    Raises:
        InputError: file missing or unreadable, invalid utf-8, malformed csv
    """
    if source == STDIN_SENTINEL:
        try:
            text = sys.stdin.buffer.read().decode(ENCODING)
        except UnicodeDecodeError as e:
            raise InputError(f"<stdin> is not valid utf-8: {e}") from e
        return _parse(io.StringIO(text, newline=""), "<stdin>")

    path = Path(source)
    try:
        with path.open("r", encoding=ENCODING, newline="") as fh:
            return _parse(fh, str(path))
    except OSError as e:
        raise InputError(f"cannot read input file {path}: {e}") from e
