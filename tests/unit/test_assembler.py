from __future__ import annotations

from find_uos_codes.models.row import Row
from find_uos_codes.models.run_result import Resolution
from find_uos_codes.services.assembler import assemble_results, row_results


def _mapping():
    return {
        "r1006349": Resolution.codes("r1006349", ["ABCD1234"]),
        "r1006350": Resolution.codes("r1006350", ["ABCD1234", "EFGH5678"]),
        "r1006351": Resolution.course_text("r1006351", "Semester 2 readings"),
        "r1006370": Resolution.not_found("r1006370"),
    }


def test_row_results_flattens_and_keeps_first_occurrence_order():
    results = row_results(["r1006370", "r1006350", "r1006349"], _mapping())
    # not sorted: r1006370 came first in the cell
    assert results == ["r1006370", "ABCD1234", "EFGH5678"]


def test_row_results_duplicate_record_numbers():
    assert row_results(["r1006349", "r1006349"], _mapping()) == ["ABCD1234"]


def test_row_results_fallback_text_kept_whole():
    assert row_results(["r1006351"], _mapping()) == ["Semester 2 readings"]


def test_assemble_results_only_rows_with_record_numbers():
    rows = [
        Row(cells=("r1006349 r1006370",), record_numbers=["r1006349", "r1006370"]),
        Row(cells=("nothing",)),
    ]
    assert assemble_results(rows, _mapping()) == 1
    assert rows[0].results == ["ABCD1234", "r1006370"]
    assert rows[0].result_text == "ABCD1234, r1006370"
    assert rows[1].results is None
    assert rows[1].result_text == ""


def test_same_record_number_gives_identical_text_across_rows():
    rows = [
        Row(cells=("r1006350",), record_numbers=["r1006350"]),
        Row(cells=("see r1006350",), record_numbers=["r1006350"]),
    ]
    assemble_results(rows, _mapping())
    assert rows[0].result_text == rows[1].result_text == "ABCD1234, EFGH5678"
