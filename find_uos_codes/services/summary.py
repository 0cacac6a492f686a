from __future__ import annotations

from ..models.run_result import RunResult

"""SUMMARY line rendering."""


def _format_seconds(seconds: float) -> str:
    if seconds == 0:
        return "0"
    if seconds == int(seconds):
        return str(int(seconds))
    if seconds < 0.01:
        # avoid scientific notation
        return f"{seconds:.6f}".rstrip("0").rstrip(".")
    return f"{seconds:.3f}".rstrip("0").rstrip(".")


def render_summary_line(result: RunResult) -> str:
    """Render the SUMMARY line for a finished run.

    Format:
    SUMMARY rows={total} processed={rows} record_numbers={distinct} codes={n}
    course_text={n} not_found={n} elapsed_sec={elapsed}

    Examples:
        >>> from datetime import datetime, timezone
        >>> t = datetime(2024, 1, 1, tzinfo=timezone.utc)
        >>> result = RunResult(
        ...     total_rows=4, processed_rows=3, record_numbers=2, codes=1,
        ...     course_text=0, not_found=1, start_time=t, end_time=t,
        ...     elapsed_seconds=1.5,
        ... )
        >>> render_summary_line(result)
        'SUMMARY rows=4 processed=3 record_numbers=2 codes=1 course_text=0 not_found=1 elapsed_sec=1.5'
    """
    return (
        f"SUMMARY rows={result.total_rows} "
        f"processed={result.processed_rows} "
        f"record_numbers={result.record_numbers} "
        f"codes={result.codes} "
        f"course_text={result.course_text} "
        f"not_found={result.not_found} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )
