from __future__ import annotations

import json
from pathlib import Path

from sales_window.cli.__main__ import main as cli_main

"""Partial failure: one bad file never stops the others from being queried."""


def test_partial_failure_run(make_report, sample_grid, temp_workdir: Path, capsys):
    good = make_report("good.xlsx", sample_grid)
    no_header = make_report("no_header.xlsx", [["Mã", "Số lượng"], ["A1", 3]])
    legacy = temp_workdir / "data" / "legacy.xls"
    legacy.write_bytes(b"\xd0\xcf\x11\xe0")

    code = cli_main([str(no_header), str(good), str(legacy), "--start", "12:00", "--end", "14:00"])
    out = capsys.readouterr().out

    assert code == 2
    assert "ERROR no_header.xlsx: [HEADER_NOT_FOUND]" in out
    assert "ERROR legacy.xls: [UNSUPPORTED_FILE_TYPE]" in out
    assert "SUMMARY file=good.xlsx date=01/05/2024 window=[12:00,14:00) total=150000" in out
    assert "SUMMARY files=3 success=1 failed=2 total=150000" in out

    log_file = next((temp_workdir / "logs").glob("errors-*.log"))
    records = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
    assert [(r["file"], r["error_type"]) for r in records] == [
        ("no_header.xlsx", "HEADER_NOT_FOUND"),
        ("legacy.xls", "UNSUPPORTED_FILE_TYPE"),
    ]
