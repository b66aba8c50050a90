from __future__ import annotations

import numbers
from dataclasses import dataclass
from enum import Enum
from typing import Any

import numpy as np
import pandas as pd

"""Cell tagged union for untyped spreadsheet grids.

A decoded sheet only promises strings, numbers or blanks, but pandas/openpyxl may
also hand over booleans, numpy scalars or NaN. ``Cell.from_raw`` classifies a raw
value once so the extractor never has to duck-type it again.
"""

__all__ = [
    "Cell",
    "CellKind",
    "EMPTY_CELL",
    "is_missing",
]


class CellKind(Enum):
    """Kind of a grid cell.

    - EMPTY: None, NaN/NaT or a position past the end of the row
    - TEXT: any ``str`` (including ``""`` written by the decoder for blanks)
    - NUMBER: int/float/numpy number, booleans excluded
    - OTHER: everything else (booleans, date objects ...)
    """
    EMPTY = "empty"
    TEXT = "text"
    NUMBER = "number"
    OTHER = "other"


def is_missing(value: Any) -> bool:
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        # list-like values: pd.isna returns an array
        return False


@dataclass(frozen=True)
class Cell:
    kind: CellKind
    value: Any = None

    @staticmethod
    def from_raw(value: Any) -> Cell:
        """Classify a raw grid value."""
        if isinstance(value, str):
            return Cell(CellKind.TEXT, value)
        if value is None or is_missing(value):
            return EMPTY_CELL
        if isinstance(value, (bool, np.bool_)):
            return Cell(CellKind.OTHER, value)
        if isinstance(value, numbers.Real):
            return Cell(CellKind.NUMBER, float(value))
        return Cell(CellKind.OTHER, value)

    @property
    def is_empty(self) -> bool:
        return self.kind is CellKind.EMPTY

    @property
    def is_text(self) -> bool:
        return self.kind is CellKind.TEXT

    @property
    def is_number(self) -> bool:
        return self.kind is CellKind.NUMBER


EMPTY_CELL = Cell(CellKind.EMPTY)
