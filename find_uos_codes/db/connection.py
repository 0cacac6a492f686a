from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import psycopg2
import psycopg2.extras
from psycopg2.extensions import make_dsn

from ..config.loader import DatabaseConfig

"""Sierra database connection handling.

Connection parameters are resolved in this order:
    1. DATABASE_URL / PGDSN (full DSN), then the config ``dsn``
    2. PGHOST / PGPORT / PGUSER / PGPASSWORD / PGDATABASE / PGSSLMODE
    3. the ``database`` section of the config file
    4. Sierra defaults (port 1032, database iii, sslmode require)

The caller loads ``.env`` beforehand so its values count as environment.
"""

__all__ = [
    "DatabaseConnectionError",
    "build_dsn",
    "db_cursor",
]

logger = logging.getLogger(__name__)

SIERRA_PORT = 1032
SIERRA_DATABASE = "iii"
SIERRA_SSLMODE = "require"


class DatabaseConnectionError(Exception):
    pass


def build_dsn(db_cfg: DatabaseConfig) -> str:
    dsn = os.getenv("DATABASE_URL") or os.getenv("PGDSN") or db_cfg.dsn
    if dsn:
        return dsn

    params = {
        "host": os.getenv("PGHOST", db_cfg.host or "localhost"),
        "port": os.getenv("PGPORT", str(db_cfg.port) if db_cfg.port else str(SIERRA_PORT)),
        "dbname": os.getenv("PGDATABASE", db_cfg.database or SIERRA_DATABASE),
        "sslmode": os.getenv("PGSSLMODE", db_cfg.sslmode or SIERRA_SSLMODE),
        "user": os.getenv("PGUSER", db_cfg.user or ""),
        "password": os.getenv("PGPASSWORD", db_cfg.password or ""),
    }
    # make_dsn quotes values containing spaces, quotes or backslashes
    return make_dsn(**{k: v for k, v in params.items() if v})


@contextmanager
def db_cursor(db_cfg: DatabaseConfig) -> Iterator[Any]:
    """Yield a DictCursor inside one read-only transaction.

    The connection and cursor are closed on every exit path. Nothing is ever
    written, so the transaction is rolled back rather than committed.
    """
    try:
        conn = psycopg2.connect(build_dsn(db_cfg))
    except psycopg2.Error as e:
        raise DatabaseConnectionError(f"cannot connect to database: {e}") from e

    try:
        conn.set_session(readonly=True)
    except psycopg2.Error as e:
        conn.close()
        raise DatabaseConnectionError(f"cannot start read-only session: {e}") from e

    try:
        with conn.cursor(cursor_factory=psycopg2.extras.DictCursor) as cur:
            logger.debug(f"connected: {conn.dsn}")
            yield cur
    finally:
        try:
            if not conn.closed:
                conn.rollback()
        except psycopg2.Error as e:
            # must not replace an error already propagating from the lookups
            logger.warning(f"rollback failed: {e}")
        finally:
            conn.close()
