from __future__ import annotations

import datetime as dt
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

from ..errors import ReportError
from ..models.cell import is_missing
from ..models.config_models import DEFAULT_EXTENSIONS

"""Excel reader: decode the first sheet of a workbook into a plain grid.

The grid is a list of rows, each a list of str / number / "" values, the same
shape a browser-side sheet_to_json(header=1, defval="") produces:

- blank cells are "" (keep_default_na=False keeps text such as "N/A" intact)
- time cells become their fraction of a 24-hour day
- date / datetime cells become Excel serial numbers (epoch 1899-12-30)

Only the first sheet is read; other sheets are ignored.
"""

__all__ = [
    "UnsupportedFileTypeError",
    "DecodeFailureError",
    "read_grid",
    "grid_from_frame",
]

EXCEL_EPOCH = dt.datetime(1899, 12, 30)
SECONDS_PER_DAY = 86400


class UnsupportedFileTypeError(ReportError):
    """Raised when the file extension is not an accepted workbook type."""

    kind = "UNSUPPORTED_FILE_TYPE"


class DecodeFailureError(ReportError):
    """Raised when the workbook cannot be opened or parsed."""

    kind = "DECODE_FAILURE"


def _sheet_value(value: Any) -> Any:
    """Convert one decoded cell to the grid contract (str, number or "")."""
    if isinstance(value, np.generic):
        value = value.item()
    if value is None or (not isinstance(value, str) and is_missing(value)):
        return ""
    if isinstance(value, dt.datetime):  # pd.Timestamp を含む
        naive = value.replace(tzinfo=None)
        return (naive - EXCEL_EPOCH).total_seconds() / SECONDS_PER_DAY
    if isinstance(value, dt.date):
        return (dt.datetime.combine(value, dt.time()) - EXCEL_EPOCH).total_seconds() / SECONDS_PER_DAY
    if isinstance(value, dt.time):
        seconds = value.hour * 3600 + value.minute * 60 + value.second + value.microsecond / 1_000_000
        return seconds / SECONDS_PER_DAY
    return value


def grid_from_frame(df: pd.DataFrame) -> list[list[Any]]:
    """Convert a raw (header=None) DataFrame into a grid."""
    return [[_sheet_value(v) for v in row] for row in df.itertuples(index=False, name=None)]


def read_grid(path: Path, *, allowed_extensions: Iterable[str] = DEFAULT_EXTENSIONS) -> list[list[Any]]:
    """Read the first sheet of an Excel file into a grid.

    Parameters
    ----------
    path: workbook path
    allowed_extensions: accepted suffixes, compared case-insensitively

    Raises
    ------
    UnsupportedFileTypeError: suffix not in allowed_extensions
    DecodeFailureError: workbook missing, corrupt or without sheets
    """
    path = Path(path)
    allowed = {ext.lower() for ext in allowed_extensions}
    if path.suffix.lower() not in allowed:
        raise UnsupportedFileTypeError(
            f"'{path.name}' is not a supported file type (expected {', '.join(sorted(allowed))})"
        )

    try:
        with pd.ExcelFile(path) as xls:
            sheet_names = list(xls.sheet_names)
            df = xls.parse(sheet_names[0], header=None, keep_default_na=False) if sheet_names else None
    except Exception as e:
        # openpyxl / zipfile / OSError など原因は様々 -> すべて DECODE_FAILURE
        raise DecodeFailureError(f"cannot read '{path.name}': {e}") from e

    if df is None:
        raise DecodeFailureError(f"'{path.name}' has no sheets")
    return grid_from_frame(df)
