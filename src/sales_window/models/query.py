from __future__ import annotations

from dataclasses import dataclass

from ..errors import ReportError

"""Time window query models.

TimeQuery carries the user's form input (start/end time from a time picker and an
optional date selection) as explicit values instead of ambient UI state.
"""

__all__ = [
    "QueryValidationError",
    "TimeQuery",
    "QueryOutcome",
]


class QueryValidationError(ReportError):
    """Raised when start or end time is missing from the query."""

    kind = "MISSING_TIME"


@dataclass(frozen=True)
class TimeQuery:
    start_time: str  # "HH:MM"
    end_time: str  # "HH:MM"
    date: str | None = None  # 複数日付のファイルでのみ必須

    @staticmethod
    def create(start_time: str | None, end_time: str | None, date: str | None = None) -> TimeQuery:
        """Build a query, trimming input and rejecting blank times."""
        start = (start_time or "").strip()
        end = (end_time or "").strip()
        if not start:
            raise QueryValidationError("start time is required")
        if not end:
            raise QueryValidationError("end time is required")
        selected = (date or "").strip() or None
        return TimeQuery(start_time=start, end_time=end, date=selected)


@dataclass(frozen=True)
class QueryOutcome:
    """Total for one resolved date and window."""
    date: str
    start_time: str
    end_time: str
    total: float
