from __future__ import annotations

from typing import Any

from psycopg2 import sql

"""Course field lookup against the Sierra database.

A course record is a ``record_metadata`` row with record_type_code 'r'; its
COURSE fields are the ``varfield`` rows with varfield_type_code 'r'. The query
keeps the order in which the database returns the fields, since the first one
is used as a fallback result.
"""

__all__ = [
    "CourseFieldLookupError",
    "COURSE_RECORD_TYPE",
    "COURSE_FIELD_TYPE",
    "fetch_course_fields",
]

COURSE_RECORD_TYPE = "r"
COURSE_FIELD_TYPE = "r"

_QUERY = sql.SQL(
    """
    SELECT v.field_content
      FROM {schema}.varfield AS v
           JOIN {schema}.record_metadata AS md ON md.id = v.record_id
     WHERE v.varfield_type_code = %s
           AND md.record_type_code = %s
           AND md.record_num = %s
    """
)


class CourseFieldLookupError(Exception):
    """Raised when the course field query fails for a record number."""

    def __init__(self, record_number: str, message: str) -> None:
        super().__init__(f"lookup failed for {record_number}: {message}")
        self.record_number = record_number


def fetch_course_fields(cursor: Any, record_number: str, schema: str = "sierra_view") -> list[str]:
    """Return the COURSE field contents of course record ``record_number``.

    Parameters
    ----------
    cursor: psycopg2 cursor (DictCursor or plain)
    record_number: ``r`` + 7 digits, no check digit
    schema: schema holding the Sierra views

    Raises:
        CourseFieldLookupError: malformed record number or any database error
    """
    digits = record_number[1:]
    if not record_number.startswith("r") or not (digits.isascii() and digits.isdigit()):
        raise CourseFieldLookupError(record_number, "not a course record number")
    record_num = int(digits)

    query = _QUERY.format(schema=sql.Identifier(schema))
    try:
        cursor.execute(query, (COURSE_FIELD_TYPE, COURSE_RECORD_TYPE, record_num))
        rows = cursor.fetchall()
    except Exception as e:
        raise CourseFieldLookupError(record_number, str(e)) from e
    return [row[0] if row[0] is not None else "" for row in rows]
