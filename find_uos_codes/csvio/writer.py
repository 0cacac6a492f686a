from __future__ import annotations

import csv
import sys
from collections.abc import Iterable, Sequence
from typing import TextIO

"""CSV output writer.

Rows are written one by one as they are produced, each with its own length
(no padding to a common width), ``\\n`` line endings and minimal quoting.
"""

__all__ = [
    "OutputError",
    "write_rows",
]


class OutputError(Exception):
    """Raised when writing to the output stream fails."""


def write_rows(rows: Iterable[Sequence[str]], stream: TextIO | None = None) -> int:
    """Write ``rows`` as CSV to ``stream`` (stdout by default).

    Returns:
        Number of rows written

    Raises:
        OutputError: on any write failure. Rows already written stay written.
    """
    out = stream if stream is not None else sys.stdout
    writer = csv.writer(out, lineterminator="\n")
    count = 0
    try:
        for row in rows:
            writer.writerow(row)
            count += 1
        out.flush()
    except (OSError, csv.Error) as e:
        raise OutputError(f"failed writing output after {count} rows: {e}") from e
    return count
