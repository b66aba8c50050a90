from __future__ import annotations

import logging
import math
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from ..errors import ReportError
from ..models.cell import EMPTY_CELL, Cell
from ..models.config_models import DEFAULT_LABELS, HeaderLabels
from ..models.transaction import ExtractionResult, Transaction

logger = logging.getLogger(__name__)

"""Extractor: untyped grid -> normalized transactions + ordered date set.

Steps:
1. Find the first row containing all three header labels (exact match)
2. Resolve the date / time / amount column positions from that row
3. Normalize every following row independently, in order
4. Rows that cannot be normalized (missing date, missing time or non-numeric
   amount) are dropped silently; trailing blank / summary rows are expected
5. Collect the distinct dates in order of first appearance

The function is pure: the same grid always yields an equal ExtractionResult.
"""

__all__ = [
    "HeaderNotFoundError",
    "ColumnIndex",
    "find_header_row",
    "resolve_columns",
    "normalize_row",
    "excel_fraction_to_time",
    "parse_amount_text",
    "unique_dates",
    "extract",
]

SECONDS_PER_DAY = 86400

# JavaScript parseFloat 相当: 先頭の数値部分のみ採用 ("100000 đ" -> 100000)
_NUMERIC_PREFIX = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


class HeaderNotFoundError(ReportError):
    """Raised when no row contains all required header labels."""

    kind = "HEADER_NOT_FOUND"


@dataclass(frozen=True)
class ColumnIndex:
    date: int
    time: int
    amount: int


def find_header_row(grid: Sequence[Sequence[Any]], labels: HeaderLabels = DEFAULT_LABELS) -> int:
    """Return the index of the first row holding every label in ``labels``."""
    required = labels.as_tuple()
    for index, row in enumerate(grid):
        cells = list(row)
        if all(label in cells for label in required):
            return index
    raise HeaderNotFoundError(
        f"header row with columns {list(required)} not found; check the file layout"
    )


def resolve_columns(header: Sequence[Any], labels: HeaderLabels = DEFAULT_LABELS) -> ColumnIndex:
    cells = list(header)
    try:
        return ColumnIndex(
            date=cells.index(labels.date),
            time=cells.index(labels.time),
            amount=cells.index(labels.amount),
        )
    except ValueError as e:
        raise HeaderNotFoundError(f"header row is missing a required column: {e}") from e


def _cell_at(row: Sequence[Any], index: int) -> Cell:
    if index >= len(row):
        return EMPTY_CELL
    return Cell.from_raw(row[index])


def excel_fraction_to_time(value: float) -> str:
    """Format an Excel day fraction as ``HH:MM:SS``.

    0.5 -> "12:00:00", 0.75 -> "18:00:00". Only the fractional part is used, so a
    full date-time serial yields its time of day. Returns "" for NaN/inf.
    """
    if not math.isfinite(value):
        return ""
    total_minutes = (value % 1) * 24 * 60
    hours = math.floor(total_minutes / 60)
    minutes = math.floor(total_minutes % 60)
    seconds = math.floor((total_minutes * 60) % 60 + 0.5)
    # 丸めで 60 秒になった場合は繰り上げ (12:59:60 -> 13:00:00)
    total_seconds = (hours * 3600 + minutes * 60 + seconds) % SECONDS_PER_DAY
    hours, rest = divmod(total_seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def parse_amount_text(text: str) -> float:
    """Parse an amount written as text; NaN when no number can be read.

    Every comma is removed first ("1,234,567" -> 1234567.0), then the leading
    numeric prefix is parsed.
    """
    match = _NUMERIC_PREFIX.match(text.replace(",", "").strip())
    if match is None:
        return math.nan
    return float(match.group())


def _normalize_time(cell: Cell) -> str:
    if cell.is_number:
        return excel_fraction_to_time(cell.value)
    if cell.is_text:
        return cell.value.strip()
    return ""


def _normalize_amount(cell: Cell) -> float:
    if cell.is_number:
        return cell.value
    if cell.is_text:
        return parse_amount_text(cell.value)
    # 空セル・bool・日付など数値でも文字列でもないものは 0
    return 0.0


def normalize_row(row: Sequence[Any], columns: ColumnIndex) -> Transaction | None:
    """Normalize one data row, returning None when the row must be dropped."""
    date_cell = _cell_at(row, columns.date)
    date = date_cell.value.strip() if date_cell.is_text else ""
    time = _normalize_time(_cell_at(row, columns.time))
    amount = _normalize_amount(_cell_at(row, columns.amount))
    if date and time and math.isfinite(amount):
        return Transaction(date=date, time=time, amount=amount)
    return None


def unique_dates(transactions: Iterable[Transaction]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(t.date for t in transactions))


def extract(grid: Iterable[Sequence[Any]], labels: HeaderLabels = DEFAULT_LABELS) -> ExtractionResult:
    """Extract transactions and the ordered date set from a grid.

    Raises:
        HeaderNotFoundError: no row contains all of ``labels``
    """
    rows = list(grid)
    header_index = find_header_row(rows, labels)
    columns = resolve_columns(rows[header_index], labels)

    transactions: list[Transaction] = []
    for row in rows[header_index + 1:]:
        txn = normalize_row(row, columns)
        if txn is not None:
            transactions.append(txn)

    dates = unique_dates(transactions)
    logger.debug(
        f"extract: header_row={header_index} columns={columns} "
        f"transactions={len(transactions)} dates={list(dates)}"
    )
    return ExtractionResult(transactions=tuple(transactions), dates=dates, header_row=header_index)
