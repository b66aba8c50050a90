from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import replace
from datetime import UTC, datetime
from pathlib import Path

from ..errors import ReportError
from ..logging.error_log import ErrorLogBuffer, ErrorRecord
from ..models.config_models import ReportConfig
from ..models.query import TimeQuery
from ..models.report_run import FileStatus, ReportOutcome, RunResult
from .progress import ProgressTracker
from .session import ReportSession

logger = logging.getLogger(__name__)

"""Run one time-window query over several report files.

Each file gets its own ReportSession, so files never share state: a failure in one
file (bad layout, unreadable workbook, date not present ...) is logged, recorded in
the error log and the run continues with the next file.
"""


def process_file(path: Path, query: TimeQuery, config: ReportConfig) -> ReportOutcome:
    """Read, extract and aggregate a single file.

    Raises:
        ReportError: any classified failure for this file
    """
    session = ReportSession(config=config)
    snapshot = session.load_file(path)
    outcome = session.query(query.start_time, query.end_time, query.date)
    return ReportOutcome(
        path=path,
        name=path.name,
        status=FileStatus.SUCCESS,
        date=outcome.date,
        start_time=outcome.start_time,
        end_time=outcome.end_time,
        total=outcome.total,
        transactions=len(snapshot.transactions),
    )


def process_files(
    paths: Sequence[Path],
    query: TimeQuery,
    config: ReportConfig,
    error_log: ErrorLogBuffer | None = None,
) -> RunResult:
    """Process every file in order and aggregate the outcomes.

    Args:
        paths: report files to query
        query: validated time window (and optional date)
        config: report configuration
        error_log: buffer receiving one ErrorRecord per failed file

    Returns:
        RunResult with per-file outcomes and the grand total
    """
    start_time = datetime.now(UTC)
    if error_log is None:
        error_log = ErrorLogBuffer()

    outcomes: list[ReportOutcome] = []
    success_count = 0
    failed_count = 0
    grand_total = 0.0

    with ProgressTracker(len(paths)) as progress:
        for raw_path in paths:
            path = Path(raw_path)
            progress.start_file(path)
            file_start = datetime.now(UTC)
            try:
                outcome = process_file(path, query, config)
            except ReportError as e:
                logger.error(f"{path.name}: [{e.kind}] {e}")
                error_log.append(ErrorRecord.create(file=path.name, error_type=e.kind, message=str(e)))
                outcome = ReportOutcome(
                    path=path,
                    name=path.name,
                    status=FileStatus.FAILED,
                    error_kind=e.kind,
                    error=str(e),
                )
            elapsed = (datetime.now(UTC) - file_start).total_seconds()
            outcome = replace(outcome, elapsed_seconds=elapsed)

            if outcome.status is FileStatus.SUCCESS:
                success_count += 1
                grand_total += outcome.total
            else:
                failed_count += 1
            outcomes.append(outcome)
            progress.finish_file(success=success_count, failed=failed_count)

    log_path = error_log.flush()
    if log_path is not None:
        logger.info(f"error log written: {log_path}")

    end_time = datetime.now(UTC)
    return RunResult(
        success_files=success_count,
        failed_files=failed_count,
        total=grand_total,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        outcomes=outcomes,
    )