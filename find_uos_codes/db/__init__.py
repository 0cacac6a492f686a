from .connection import DatabaseConnectionError, build_dsn, db_cursor
from .course_fields import CourseFieldLookupError, fetch_course_fields

__all__ = [
    "CourseFieldLookupError",
    "DatabaseConnectionError",
    "build_dsn",
    "db_cursor",
    "fetch_course_fields",
]
