from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

import pandas as pd

from ..errors import ReportError
from ..models.config_models import DEFAULT_QUERY_FORMATS, DEFAULT_TRANSACTION_FORMATS
from ..models.transaction import Transaction

logger = logging.getLogger(__name__)

"""Aggregator: sum transaction amounts inside a half-open time window.

The window is ``[target_date start_time, target_date end_time)``: a transaction
exactly at the start counts, one exactly at the end does not.

Transaction timestamps are parsed with each configured format in order (12-hour
with AM/PM first, then 24-hour); the first format that parses wins. Parsing is
exact, so "08:00:00" without an AM/PM marker only matches the 24-hour format.
Transactions matching no format are left out of the sum without error.
"""

__all__ = [
    "NoDateSelectedError",
    "InvalidTimeRangeError",
    "resolve_target_date",
    "parse_window",
    "transaction_times",
    "aggregate",
]


class NoDateSelectedError(ReportError):
    """Raised when several dates exist and none (or an unknown one) was chosen."""

    kind = "NO_DATE_SELECTED"


class InvalidTimeRangeError(ReportError):
    """Raised when start or end time cannot be combined with the date."""

    kind = "INVALID_TIME_RANGE"


def resolve_target_date(dates: Sequence[str], selected: str | None = None) -> str:
    """Pick the date to aggregate against.

    - exactly one date: it is used (auto-selected), ``selected`` is ignored
    - several dates: ``selected`` must be one of them
    - no dates: nothing can be selected
    """
    if len(dates) == 1:
        if selected and selected != dates[0]:
            logger.warning(f"file only contains {dates[0]}; ignoring selected date {selected}")
        return dates[0]
    if not selected:
        if dates:
            raise NoDateSelectedError(f"select a date: {', '.join(dates)}")
        raise NoDateSelectedError("no dated transactions to select from")
    if selected not in dates:
        raise NoDateSelectedError(f"date {selected} not found in file (available: {', '.join(dates) or '-'})")
    return selected


def _parse_first(text: str, formats: Iterable[str]) -> pd.Timestamp | None:
    for fmt in formats:
        try:
            return pd.to_datetime(text, format=fmt)
        except (ValueError, TypeError):
            continue
    return None


def parse_window(
    target_date: str,
    start_time: str,
    end_time: str,
    formats: Sequence[str] = DEFAULT_QUERY_FORMATS,
) -> tuple[pd.Timestamp, pd.Timestamp]:
    """Combine date and times into the window bounds."""
    start = _parse_first(f"{target_date} {start_time}", formats)
    end = _parse_first(f"{target_date} {end_time}", formats)
    if start is None or end is None:
        raise InvalidTimeRangeError(
            f"invalid time range: date={target_date!r} start={start_time!r} end={end_time!r}"
        )
    return start, end


def transaction_times(
    transactions: Sequence[Transaction],
    formats: Sequence[str] = DEFAULT_TRANSACTION_FORMATS,
) -> pd.Series:
    """Parse ``"{date} {time}"`` of each transaction; NaT where no format matches."""
    stamps = pd.Series([f"{t.date} {t.time}" for t in transactions], dtype="object")
    parsed = pd.Series(pd.NaT, index=stamps.index, dtype="datetime64[ns]")
    for fmt in formats:
        pending = parsed.isna()
        if not pending.any():
            break
        parsed[pending] = pd.to_datetime(stamps[pending], format=fmt, errors="coerce")
    return parsed


def aggregate(
    transactions: Sequence[Transaction],
    target_date: str | None,
    start_time: str,
    end_time: str,
    *,
    query_formats: Sequence[str] = DEFAULT_QUERY_FORMATS,
    transaction_formats: Sequence[str] = DEFAULT_TRANSACTION_FORMATS,
) -> float:
    """Sum amounts of transactions with ``start <= timestamp < end``.

    Raises:
        NoDateSelectedError: target_date is empty
        InvalidTimeRangeError: start/end do not parse with ``query_formats``
    """
    if not target_date:
        raise NoDateSelectedError("no date selected")
    start, end = parse_window(target_date, start_time, end_time, query_formats)
    if not transactions:
        return 0.0

    times = transaction_times(transactions, transaction_formats)
    amounts = pd.Series([t.amount for t in transactions], index=times.index, dtype="float64")
    # NaT との比較は常に False -> 解析不能な行は自動的に除外
    in_window = (times >= start) & (times < end)
    total = float(amounts[in_window].sum())
    logger.debug(
        f"aggregate: window=[{start},{end}) matched={int(in_window.sum())}/{len(transactions)} "
        f"unparsed={int(times.isna().sum())} total={total}"
    )
    return total
