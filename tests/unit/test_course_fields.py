from __future__ import annotations

import pytest

from find_uos_codes.db.course_fields import CourseFieldLookupError, fetch_course_fields


class DummyCursor:
    def __init__(self, rows=None, error: Exception | None = None) -> None:
        self.rows = rows if rows is not None else []
        self.error = error
        self.executed: list[tuple] = []

    def execute(self, query, params):
        if self.error is not None:
            raise self.error
        self.executed.append((query, params))

    def fetchall(self):
        return self.rows


def test_fetch_course_fields_strips_r_and_passes_integer():
    cur = DummyCursor(rows=[("ABCD 1234",), ("second",)])
    fields = fetch_course_fields(cur, "r1006349")
    assert fields == ["ABCD 1234", "second"]
    (_, params), = cur.executed
    assert params == ("r", "r", 1006349)


def test_fetch_course_fields_keeps_store_order():
    cur = DummyCursor(rows=[("zzz",), ("aaa",), ("mmm",)])
    assert fetch_course_fields(cur, "r1000000") == ["zzz", "aaa", "mmm"]


def test_fetch_course_fields_none_content_becomes_empty_text():
    cur = DummyCursor(rows=[(None,)])
    assert fetch_course_fields(cur, "r1000000") == [""]


def test_fetch_course_fields_no_rows():
    assert fetch_course_fields(DummyCursor(), "r1006370") == []


def test_fetch_course_fields_wraps_database_error():
    cur = DummyCursor(error=RuntimeError("connection reset"))
    with pytest.raises(CourseFieldLookupError) as e:
        fetch_course_fields(cur, "r1006349")
    assert e.value.record_number == "r1006349"
    assert "connection reset" in str(e.value)


@pytest.mark.parametrize("bad", ["1006349", "rABCDEFG", "x1006349", "r"])
def test_fetch_course_fields_rejects_malformed_record_number(bad):
    cur = DummyCursor()
    with pytest.raises(CourseFieldLookupError):
        fetch_course_fields(cur, bad)
    assert cur.executed == []
