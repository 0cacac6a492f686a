from __future__ import annotations

import sys
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

"""Progress display for the record number lookups (TTY only).

A single tqdm bar counts distinct record numbers as they are looked up. It is
drawn on stderr, since stdout carries the CSV output, and only when stderr is a
terminal so redirected runs stay free of control sequences.
"""

__all__ = [
    "LookupProgress",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    """Return True if stderr is a TTY and progress should be displayed."""
    return sys.stderr.isatty()


class LookupProgress:
    """Progress bar over the distinct record numbers of a run."""

    def __init__(self, total: int, *, description: str = "Looking up") -> None:
        self.total = total
        self.description = description
        self.done = 0

        self.enabled = is_tty_enabled() and total > 0
        self.pbar: TqdmType[Any] | None
        if self.enabled:
            self.pbar = tqdm(
                total=total,
                desc=description,
                unit="record",
                file=sys.stderr,
                leave=False,
                ncols=80,
                ascii=True,
            )
        else:
            self.pbar = None

    def advance(self, record_number: str) -> None:
        self.done += 1
        if self.pbar is not None:
            self.pbar.set_postfix(record=record_number, refresh=False)
            self.pbar.update(1)

    def close(self) -> None:
        if self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> LookupProgress:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
