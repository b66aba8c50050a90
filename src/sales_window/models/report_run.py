from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path

"""Run result models for querying one or more report files.

ReportOutcome is the per-file result (successful total or classified failure);
RunResult aggregates the outcomes of one CLI invocation.
"""

__all__ = [
    "FileStatus",
    "ReportOutcome",
    "RunResult",
]


class FileStatus(Enum):
    """Status of one report file after processing."""
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class ReportOutcome:
    path: Path
    name: str
    status: FileStatus
    date: str | None = None  # 集計に使った日付
    start_time: str | None = None
    end_time: str | None = None
    total: float = 0.0
    transactions: int = 0  # extracted (not only matched) transactions
    error_kind: str | None = None  # ReportError.kind on failure
    error: str | None = None
    elapsed_seconds: float = 0.0


@dataclass(frozen=True)
class RunResult:
    """Aggregated outcome of a run."""
    success_files: int
    failed_files: int
    total: float  # sum of per-file totals (successful files only)
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    outcomes: list[ReportOutcome] = field(default_factory=list)

    @property
    def total_files(self) -> int:
        return self.success_files + self.failed_files
