from __future__ import annotations

import pandas as pd
import pytest

from sales_window.models.transaction import Transaction
from sales_window.services.aggregator import (
    InvalidTimeRangeError,
    NoDateSelectedError,
    aggregate,
    parse_window,
    resolve_target_date,
    transaction_times,
)

DAY = "01/05/2024"
OTHER_DAY = "02/05/2024"


def _txn(time: str, amount: float, date: str = DAY) -> Transaction:
    return Transaction(date=date, time=time, amount=amount)


def test_half_open_interval_start_inclusive_end_exclusive():
    txns = [_txn("09:00:00", 100), _txn("10:00:00", 200)]
    assert aggregate(txns, DAY, "09:00", "10:00") == 100


def test_transaction_exactly_at_end_excluded():
    txns = [_txn("10:00:00", 200)]
    assert aggregate(txns, DAY, "09:00", "10:00") == 0


def test_transactions_inside_window_summed():
    txns = [_txn("09:15:00", 1), _txn("09:59:59", 2), _txn("08:59:59", 4), _txn("10:00:01", 8)]
    assert aggregate(txns, DAY, "09:00", "10:00") == 3


def test_zero_total_is_valid_result():
    txns = [_txn("09:00:00", 100)]
    total = aggregate(txns, DAY, "12:00", "14:00")
    assert total == 0.0
    assert isinstance(total, float)


def test_no_transactions_returns_zero():
    assert aggregate([], DAY, "00:00", "23:59") == 0.0


def test_other_dates_excluded_even_with_matching_time():
    txns = [_txn("09:30:00", 10, DAY), _txn("09:30:00", 20, OTHER_DAY)]
    assert aggregate(txns, DAY, "09:00", "10:00") == 10
    assert aggregate(txns, OTHER_DAY, "09:00", "10:00") == 20


def test_twelve_hour_transaction_times():
    txns = [_txn("01:30:00 PM", 5), _txn("01:30:00 AM", 7)]
    assert aggregate(txns, DAY, "13:00", "14:00") == 5
    assert aggregate(txns, DAY, "01:00", "02:00") == 7


def test_ambiguous_time_without_marker_is_24_hour():
    txns = [_txn("08:00:00", 1), _txn("20:00:00", 2)]
    assert aggregate(txns, DAY, "20:00", "21:00") == 2
    assert aggregate(txns, DAY, "08:00", "09:00") == 1


def test_unparseable_transaction_excluded():
    txns = [_txn("12:00", 1), _txn("noon", 2), _txn("12:30:00", 4), Transaction("2024-05-01", "12:10:00", 8)]
    assert aggregate(txns, DAY, "12:00", "13:00") == 4


def test_transaction_times_first_format_wins():
    txns = [_txn("01:00:00 PM", 1), _txn("13:00:00", 1), _txn("bad", 1)]
    times = transaction_times(txns)
    assert times.iloc[0] == pd.Timestamp(2024, 5, 1, 13, 0, 0)
    assert times.iloc[1] == pd.Timestamp(2024, 5, 1, 13, 0, 0)
    assert pd.isna(times.iloc[2])


def test_inverted_window_sums_to_zero():
    txns = [_txn("09:30:00", 10)]
    assert aggregate(txns, DAY, "10:00", "09:00") == 0


@pytest.mark.parametrize(
    "start, end",
    [("25:00", "26:00"), ("abc", "10:00"), ("09:00", ""), ("09:00", "10")],
)
def test_invalid_time_range(start, end):
    with pytest.raises(InvalidTimeRangeError) as e:
        aggregate([_txn("09:30:00", 1)], DAY, start, end)
    assert e.value.kind == "INVALID_TIME_RANGE"


def test_invalid_target_date_format():
    with pytest.raises(InvalidTimeRangeError):
        parse_window("2024-05-01", "09:00", "10:00")


def test_parse_window_bounds():
    start, end = parse_window(DAY, "12:00", "14:00")
    assert start == pd.Timestamp(2024, 5, 1, 12, 0)
    assert end == pd.Timestamp(2024, 5, 1, 14, 0)


@pytest.mark.parametrize("target", [None, ""])
def test_aggregate_without_date(target):
    with pytest.raises(NoDateSelectedError) as e:
        aggregate([_txn("09:30:00", 1)], target, "09:00", "10:00")
    assert e.value.kind == "NO_DATE_SELECTED"


def test_custom_query_formats():
    txns = [_txn("09:30:00", 1)]
    total = aggregate(txns, DAY, "09:00:00", "10:00:00", query_formats=("%d/%m/%Y %H:%M:%S",))
    assert total == 1


def test_resolve_single_date_auto_selected():
    assert resolve_target_date([DAY]) == DAY
    assert resolve_target_date([DAY], OTHER_DAY) == DAY


def test_resolve_multiple_dates_requires_selection():
    with pytest.raises(NoDateSelectedError):
        resolve_target_date([DAY, OTHER_DAY])
    assert resolve_target_date([DAY, OTHER_DAY], OTHER_DAY) == OTHER_DAY


def test_resolve_unknown_selection_rejected():
    with pytest.raises(NoDateSelectedError):
        resolve_target_date([DAY, OTHER_DAY], "03/05/2024")


def test_resolve_no_dates():
    with pytest.raises(NoDateSelectedError):
        resolve_target_date([])
    with pytest.raises(NoDateSelectedError):
        resolve_target_date([], DAY)
