from __future__ import annotations

import logging
from collections.abc import Callable
from contextlib import AbstractContextManager
from datetime import UTC, datetime
from typing import TextIO

from ..csvio.reader import read_rows
from ..csvio.writer import write_rows
from ..models.row import Table, TableOptions
from ..models.run_result import Resolution, ResolutionKind, RunResult
from .assembler import assemble_results
from .extractor import assign_record_numbers
from .progress import LookupProgress
from .projector import project_rows
from .resolver import FetchFields, distinct_record_numbers, resolve_all

"""Pipeline orchestration.

Stages run strictly in order, each to completion before the next:
read -> extract record numbers -> resolve -> assemble -> project/write.
Nothing is written before every lookup has succeeded, so a lookup failure
leaves the output empty.
"""

__all__ = [
    "process_table",
    "run",
]

logger = logging.getLogger(__name__)


OpenLookup = Callable[[], AbstractContextManager[FetchFields]]


def process_table(table: Table, open_lookup: OpenLookup) -> dict[str, Resolution]:
    """Run extraction, resolution and assembly on ``table`` in place.

    ``open_lookup`` is only entered when there is at least one record number,
    so a table without any needs no database connection.

    Returns:
        The resolution mapping, one entry per distinct record number
    """
    options = table.options
    rows = table.rows_to_process()
    found = assign_record_numbers(rows, options.record_number_column)
    logger.debug(f"rows to process={len(rows)} with record numbers={found}")

    record_numbers = distinct_record_numbers(rows)
    mapping: dict[str, Resolution] = {}
    if record_numbers:
        logger.info(f"looking up {len(record_numbers)} distinct record numbers")
        with open_lookup() as fetch, LookupProgress(len(record_numbers)) as progress:
            mapping = resolve_all(record_numbers, fetch, progress=progress)

    assemble_results(rows, mapping)
    return mapping


def run(
    source: str,
    options: TableOptions,
    open_lookup: OpenLookup,
    out: TextIO | None = None,
) -> RunResult:
    """Read ``source``, resolve every row and write the projected CSV to ``out``.

    Errors from any stage (InputError, lookup errors, OutputError) propagate
    unchanged.
    """
    start_time = datetime.now(UTC)

    rows = read_rows(source)
    table = Table(rows=rows, options=options)
    logger.info(f"read {len(rows)} rows from {'<stdin>' if source == '-' else source}")

    mapping = process_table(table, open_lookup)
    write_rows(project_rows(table), out)

    kinds = [r.kind for r in mapping.values()]
    end_time = datetime.now(UTC)
    return RunResult(
        total_rows=len(rows),
        processed_rows=sum(1 for r in table.body_rows if r.results is not None),
        record_numbers=len(mapping),
        codes=kinds.count(ResolutionKind.CODES),
        course_text=kinds.count(ResolutionKind.COURSE_TEXT),
        not_found=kinds.count(ResolutionKind.NOT_FOUND),
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
    )
