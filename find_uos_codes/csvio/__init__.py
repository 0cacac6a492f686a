from .reader import STDIN_SENTINEL, InputError, read_rows
from .writer import OutputError, write_rows

__all__ = [
    "InputError",
    "OutputError",
    "STDIN_SENTINEL",
    "read_rows",
    "write_rows",
]
