from __future__ import annotations

from ..models.report_run import ReportOutcome, RunResult

"""SUMMARY line rendering.

The labeled logger adds the ``SUMMARY`` prefix, so these functions return only the
content after it:

    file=<name> date=<date> window=[<start>,<end>) total=<total>
    files=<n> success=<s> failed=<f> total=<sum>
"""

__all__ = [
    "format_amount",
    "render_file_line",
    "render_run_line",
]


def format_amount(value: float) -> str:
    """Plain number text: integral values without decimals, no grouping.

    >>> format_amount(50000.0)
    '50000'
    >>> format_amount(1234.5)
    '1234.5'
    """
    if value == int(value):
        return str(int(value))
    return repr(value)


def render_file_line(outcome: ReportOutcome) -> str:
    return (
        f"file={outcome.name} "
        f"date={outcome.date} "
        f"window=[{outcome.start_time},{outcome.end_time}) "
        f"total={format_amount(outcome.total)}"
    )


def render_run_line(result: RunResult) -> str:
    return (
        f"files={result.total_files} "
        f"success={result.success_files} "
        f"failed={result.failed_files} "
        f"total={format_amount(result.total)}"
    )
