from __future__ import annotations

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

from sales_window.config.loader import ConfigError, load_config, resolve_config_path
from sales_window.errors import ReportError
from sales_window.logging.init import log_summary, set_debug, setup_logging
from sales_window.models.config_models import ReportConfig, default_config
from sales_window.models.query import QueryValidationError, TimeQuery
from sales_window.models.report_run import FileStatus
from sales_window.services.orchestrator import process_files
from sales_window.services.summary import render_file_line, render_run_line

"""CLI entrypoint.

Flow:
- Load .env (may point SALES_WINDOW_CONFIG at a config file)
- Load config (built-in defaults when no config file exists)
- Validate the time window (--start / --end both required)
- Query every file, print one SUMMARY line per successful file and one for the run
"""

EXIT_SUCCESS_ALL = 0
EXIT_FATAL = 1
EXIT_PARTIAL_FAILURE = 2


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env using python-dotenv; values override the current environment."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="sales-window",
        description="Sum sales amounts inside a time window of an Excel sales report",
    )
    p.add_argument("files", nargs="+", help="Excel report file(s) (.xlsx)")
    p.add_argument("--start", help="Window start time, HH:MM (inclusive)")
    p.add_argument("--end", help="Window end time, HH:MM (exclusive)")
    p.add_argument("--date", help="Report date, required when a file contains several dates")
    p.add_argument("--config", help="YAML config path (default: config/report.yml)")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument(
        "--inspect-data", action="store_true", help="Print header row, dates & first rows then exit"
    )
    return p.parse_args(argv)


def _load_report_config(explicit: str | None) -> ReportConfig:
    path, required = resolve_config_path(explicit)
    if not required and not path.exists():
        return default_config()
    return load_config(path)


def _inspect_data(files: list[str], cfg: ReportConfig) -> int:
    from sales_window.excel.reader import read_grid
    from sales_window.services.extractor import extract

    for name in files:
        path = Path(name)
        print(f"FILE: {path.name}")
        try:
            grid = read_grid(path, allowed_extensions=cfg.allowed_extensions)
            result = extract(grid, cfg.headers)
        except ReportError as e:
            print(f"  error=[{e.kind}] {e}")
            continue
        print(f"  header_row={result.header_row} cols={list(grid[result.header_row])}")
        print(f"  dates={list(result.dates)} transactions={len(result.transactions)}")
        for txn in result.transactions[:3]:
            print(f"    {txn.date} {txn.time} {txn.amount}")
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None のときのみシステム引数を読む (テストから main([...]) で呼ぶため)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    if args.debug:
        set_debug(True)
        logger.debug("debug mode enabled")

    try:
        cfg = _load_report_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.inspect_data:
        return _inspect_data(args.files, cfg)

    try:
        query = TimeQuery.create(args.start, args.end, args.date)
    except QueryValidationError as e:
        logger.error(f"query: {e}")
        return EXIT_FATAL

    logger.info(f"Querying {len(args.files)} file(s) window=[{query.start_time},{query.end_time})")
    result = process_files([Path(f) for f in args.files], query, cfg)

    for outcome in result.outcomes:
        if outcome.status is FileStatus.SUCCESS:
            log_summary(render_file_line(outcome))
    log_summary(render_run_line(result))

    if result.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
