"""Domain models for the sales window report.

Grid cells, normalized transactions, time queries, configuration and run results.
"""

from .cell import EMPTY_CELL, Cell, CellKind
from .config_models import DEFAULT_LABELS, HeaderLabels, ReportConfig, default_config
from .error_record import ErrorRecord
from .query import QueryOutcome, QueryValidationError, TimeQuery
from .report_run import FileStatus, ReportOutcome, RunResult
from .transaction import ExtractionResult, Transaction

__all__ = [
    # Grid models
    "Cell",
    "CellKind",
    "EMPTY_CELL",
    # Extraction models
    "Transaction",
    "ExtractionResult",
    # Query models
    "TimeQuery",
    "QueryOutcome",
    "QueryValidationError",
    # Configuration models
    "HeaderLabels",
    "ReportConfig",
    "DEFAULT_LABELS",
    "default_config",
    # Run models
    "FileStatus",
    "ReportOutcome",
    "RunResult",
    "ErrorRecord",
]
