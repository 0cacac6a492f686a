"""Domain models for the UOS code finder.

Rows and tables as read from the CSV input, plus the per record number
resolutions and the aggregated run result.
"""

from .row import Row, Table, TableOptions
from .run_result import Resolution, ResolutionKind, RunResult

__all__ = [
    # Input models
    "Row",
    "Table",
    "TableOptions",
    # Lookup models
    "Resolution",
    "ResolutionKind",
    "RunResult",
]
