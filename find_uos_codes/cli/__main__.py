from __future__ import annotations

import argparse
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from functools import partial
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import ConfigError, DatabaseConfig, load_config
from ..csvio.reader import STDIN_SENTINEL, InputError
from ..csvio.writer import OutputError
from ..db.connection import DatabaseConnectionError, db_cursor
from ..db.course_fields import CourseFieldLookupError, fetch_course_fields
from ..logging.init import log_summary, set_debug, setup_logging
from ..models.row import TableOptions
from ..services.pipeline import run
from ..services.resolver import FetchFields
from ..services.summary import render_summary_line

"""CLI entrypoint.

Reads a CSV of course record numbers, looks up their COURSE fields in Sierra
and writes the CSV back out with the unit of study codes filled in.
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_HELP = 255  # exit(-1) of the earlier version of this tool

DESCRIPTION = """\
Find the unit of study codes for a list of course record numbers.

<file>, if given, should be the path to a utf-8 csv file with course record
numbers in the first column. If <file> is not given, standard input is used
instead. If the course record numbers are not in the first column, use the
-c/--column option to specify which column has them.
"""

EPILOG = """\
unit of study codes:
  For each course record number, the COURSE fields (field tag r) are searched.
  A unit of study code is four uppercase letters, followed possibly by some
  whitespace, followed by four digits. All the COURSE fields are searched and
  the results deduplicated. Multiple codes are separated by commas. If no code
  is found, the first COURSE field is output instead. If there are no COURSE
  fields, the course record number itself is output.

course record numbers:
  Course record numbers must not have the check digit, e.g. r1006349, r1006370.
  Extraneous characters like semicolons or quotes are ignored. A cell may hold
  several course record numbers; the results are then separated by ", ".

database connection:
  Set DATABASE_URL, or PGHOST / PGPORT / PGUSER / PGPASSWORD / PGDATABASE,
  in the environment or in a .env file in the current directory.
"""


def _non_negative_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}") from e
    if n < 0:
        raise argparse.ArgumentTypeError(f"must not be negative: {n}")
    return n


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="find-uos-codes",
        description=DESCRIPTION,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
    )
    p.add_argument(
        "-h", "--help", action="store_true",
        help="Print the synopsis and usage, and then exit without doing anything.",
    )
    p.add_argument(
        "--skip", type=_non_negative_int, default=None,
        help="The number of lines in the input file before the actual data starts. Defaults to 1.",
    )
    p.add_argument(
        "-c", "--column", type=_non_negative_int, default=None,
        help="Which column of the input file contains the course record numbers. "
        "The first column is column number 1. Defaults to 1.",
    )
    p.add_argument(
        "-r", "--result-column", type=_non_negative_int, default=None,
        help="Which column to put the UOS codes into. Defaults to 0. If 0, the UOS codes are "
        "inserted into a new column at the start of each row. If not 0, only rows with a "
        "blank cell in this column are processed; rows with a non-blank cell are left as is.",
    )
    p.add_argument(
        "--legacy-header-padding", action="store_true",
        help="Pad skipped rows the way earlier versions did (extra leading cell in "
        "in-place mode, none in insert mode).",
    )
    p.add_argument("--config", type=Path, default=None, help="YAML config file")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument(
        "input_file", nargs="?", default=STDIN_SENTINEL, metavar="<file>",
        help='The path to a utf-8 csv file with the course record numbers. "-" means '
        'standard input. Defaults to "-".',
    )
    return p


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env with python-dotenv so its values win over the environment."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


@contextmanager
def _course_field_lookup(db_cfg: DatabaseConfig) -> Iterator[FetchFields]:  # pragma: no cover (thin wrapper)
    with db_cursor(db_cfg) as cur:
        yield partial(fetch_course_fields, cur, schema=db_cfg.schema)


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # Only read sys.argv when no list is given; [] means "no arguments".
    if argv is None:
        argv = sys.argv[1:]
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.help:
        parser.print_help(sys.stdout)
        return EXIT_HELP

    if args.debug:
        set_debug(True)
        logger.debug("debug mode enabled")

    _load_env_file(Path(".env"), override=True)

    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    defaults = cfg.defaults
    options = TableOptions.from_cli(
        skip=args.skip if args.skip is not None else defaults.skip,
        column=args.column if args.column is not None else defaults.column,
        result_column=args.result_column if args.result_column is not None else defaults.result_column,
        legacy_header_padding=args.legacy_header_padding,
    )
    logger.debug(f"options: {options}")

    try:
        result = run(
            args.input_file,
            options,
            open_lookup=partial(_course_field_lookup, cfg.database),
        )
    except InputError as e:
        logger.error(f"input: {e}")
        return EXIT_FATAL
    except DatabaseConnectionError as e:
        logger.error(f"database: {e}")
        return EXIT_FATAL
    except CourseFieldLookupError as e:
        logger.error(f"lookup: {e}")
        return EXIT_FATAL
    except OutputError as e:
        logger.error(f"output: {e}")
        return EXIT_FATAL

    # render_summary_line includes the label; log_summary adds it again
    log_summary(render_summary_line(result).removeprefix("SUMMARY "))
    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
