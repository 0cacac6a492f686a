# Shared pytest fixtures
from __future__ import annotations

import tempfile
from contextlib import nullcontext
from pathlib import Path

import pytest

from find_uos_codes.logging.init import reset_logging


class FakeCourseStore:
    """In-memory stand-in for the Sierra COURSE field lookup.

    ``fields`` maps record number -> list of COURSE field texts. Record numbers
    not in the mapping have no COURSE fields. Every call is recorded.
    """

    def __init__(self, fields: dict[str, list[str]] | None = None) -> None:
        self.fields = fields or {}
        self.calls: list[str] = []
        self.fail_on: str | None = None

    def __call__(self, record_number: str) -> list[str]:
        self.calls.append(record_number)
        if record_number == self.fail_on:
            from find_uos_codes.db.course_fields import CourseFieldLookupError
            raise CourseFieldLookupError(record_number, "simulated query failure")
        return list(self.fields.get(record_number, []))

    def open(self):
        return nullcontext(self)


@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        monkeypatch.chdir(p)
        # keep the developer's own connection settings out of the tests
        for var in ("DATABASE_URL", "PGDSN", "PGHOST", "PGPORT", "PGUSER",
                    "PGPASSWORD", "PGDATABASE", "PGSSLMODE"):
            monkeypatch.delenv(var, raising=False)
        yield p


@pytest.fixture()
def store() -> FakeCourseStore:
    return FakeCourseStore({
        "r1006349": ["ABCD 1234 Introduction to Things", "Also listed as ABCD1234"],
        "r1006350": ["Reading list for EFGH5678 and ABCD1234"],
        "r1006351": ["Semester 2 readings (no code)", "second field"],
    })


@pytest.fixture()
def write_csv(temp_workdir: Path):
    def _write(text: str, name: str = "input.csv") -> Path:
        path = temp_workdir / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write


@pytest.fixture()
def sample_config_yaml() -> str:
    return """database:
  host: sierra.example.edu
  port: 1032
  user: reader
  password: secret
  database: iii
  sslmode: require
defaults:
  skip: 2
  column: 3
  result_column: 0
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "find_uos.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def make_store():
    return FakeCourseStore
