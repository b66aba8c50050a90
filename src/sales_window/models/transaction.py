from __future__ import annotations

from dataclasses import dataclass

"""Transaction and extraction snapshot models.

ExtractionResult is the immutable snapshot produced by the extractor and read by
the aggregator, the session and the CLI. Tuples are used so that no consumer can
mutate the snapshot after creation.
"""

__all__ = [
    "Transaction",
    "ExtractionResult",
]


@dataclass(frozen=True)
class Transaction:
    """One normalized sales row.

    date is free-form text as written in the sheet (e.g. ``01/05/2024``), time is
    ``HH:MM:SS`` when derived from an Excel day fraction, otherwise the trimmed text.
    """
    date: str
    time: str
    amount: float


@dataclass(frozen=True)
class ExtractionResult:
    transactions: tuple[Transaction, ...]
    dates: tuple[str, ...]  # 出現順・重複なし
    header_row: int  # 0-based grid index of the header row
