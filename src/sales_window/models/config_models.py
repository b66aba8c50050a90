from __future__ import annotations

from dataclasses import dataclass

"""Config dataclasses for the sales window report.

These are the typed result of ``config.loader.load_config``; the YAML keys map
one-to-one onto the fields below and every key is optional.
"""

__all__ = [
    "HeaderLabels",
    "ReportConfig",
    "DEFAULT_LABELS",
    "DEFAULT_EXTENSIONS",
    "DEFAULT_QUERY_FORMATS",
    "DEFAULT_TRANSACTION_FORMATS",
    "default_config",
]


@dataclass(frozen=True)
class HeaderLabels:
    """Exact header texts identifying the date, time and amount columns.

    Matching is case- and whitespace-sensitive, so the labels must be written
    exactly as they appear in the export.
    """
    date: str
    time: str
    amount: str

    def as_tuple(self) -> tuple[str, str, str]:
        return (self.date, self.time, self.amount)


DEFAULT_LABELS = HeaderLabels(date="Ngày", time="Giờ", amount="Thành tiền (VNĐ)")
DEFAULT_EXTENSIONS: tuple[str, ...] = (".xlsx",)
# 日付 + 24時間表記 (time picker の "HH:mm")
DEFAULT_QUERY_FORMATS: tuple[str, ...] = ("%d/%m/%Y %H:%M",)
# 12時間表記 (AM/PM) を先に試す
DEFAULT_TRANSACTION_FORMATS: tuple[str, ...] = (
    "%d/%m/%Y %I:%M:%S %p",
    "%d/%m/%Y %H:%M:%S",
)


@dataclass(frozen=True)
class ReportConfig:
    """Root configuration object."""
    headers: HeaderLabels = DEFAULT_LABELS
    allowed_extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    query_formats: tuple[str, ...] = DEFAULT_QUERY_FORMATS
    transaction_formats: tuple[str, ...] = DEFAULT_TRANSACTION_FORMATS


def default_config() -> ReportConfig:
    return ReportConfig()
