from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..excel.reader import read_grid
from ..models.config_models import ReportConfig, default_config
from ..models.query import QueryOutcome, TimeQuery
from ..models.transaction import ExtractionResult
from .aggregator import NoDateSelectedError, aggregate, resolve_target_date
from .extractor import extract

log = logging.getLogger(__name__)


@dataclass
class ReportSession:
    """
    Holds the most recently extracted report and the user's date selection.

    Responsibilities:
    • Replace the snapshot only when a new extraction succeeds; a failed load
      leaves the previous snapshot and selection untouched.
    • Reset the date selection whenever a new snapshot is loaded.
    • Run time-window queries against the current snapshot.

    Not thread-safe; overlapping loads resolve as last-write-wins.
    """

    config: ReportConfig = field(default_factory=default_config)
    source: str | None = None
    snapshot: ExtractionResult | None = None
    selected_date: str | None = None

    @property
    def dates(self) -> tuple[str, ...]:
        return self.snapshot.dates if self.snapshot is not None else ()

    def load_grid(self, grid: Iterable[Sequence[Any]], source: str | None = None) -> ExtractionResult:
        result = extract(grid, self.config.headers)
        self.snapshot = result
        self.source = source
        self.selected_date = None
        log.info(
            f"loaded {source or '<grid>'}: {len(result.transactions)} transactions, "
            f"dates={', '.join(result.dates) or '-'}"
        )
        return result

    def load_file(self, path: Path) -> ExtractionResult:
        path = Path(path)
        log.debug(f"reading {path}")
        grid = read_grid(path, allowed_extensions=self.config.allowed_extensions)
        return self.load_grid(grid, source=path.name)

    def select_date(self, date: str | None) -> None:
        self.selected_date = date

    def query(self, start_time: str | None, end_time: str | None, date: str | None = None) -> QueryOutcome:
        """Total of the current snapshot for ``[start_time, end_time)``.

        ``date`` overrides the stored selection for this call only.
        """
        q = TimeQuery.create(start_time, end_time, date if date is not None else self.selected_date)
        if self.snapshot is None:
            raise NoDateSelectedError("no report loaded")
        target = resolve_target_date(self.snapshot.dates, q.date)
        total = aggregate(
            self.snapshot.transactions,
            target,
            q.start_time,
            q.end_time,
            query_formats=self.config.query_formats,
            transaction_formats=self.config.transaction_formats,
        )
        return QueryOutcome(date=target, start_time=q.start_time, end_time=q.end_time, total=total)
