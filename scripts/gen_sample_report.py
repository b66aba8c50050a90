#!/usr/bin/env python3
"""Sample sales report generator.

Writes a synthetic point-of-sale export in the layout the report tool reads:
- Row 1-2: store title rows (ignored)
- Row 3: header row (Ngày / Giờ / Thành tiền (VNĐ))
- Row 4+: one transaction per row, times mixing Excel day fractions,
  24-hour text and 12-hour text; amounts mixing numbers and "1,234,000" text
- Last row: a total row without a time (dropped by the extractor)
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

HEADER = ["Ngày", "Giờ", "Thành tiền (VNĐ)"]


def _format_time(seconds: int, style: int) -> Any:
    if style == 0:
        return seconds / 86_400
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    if style == 1:
        return f"{hours:02d}:{minutes:02d}:{secs:02d}"
    suffix = "PM" if hours >= 12 else "AM"
    return f"{(hours % 12) or 12:02d}:{minutes:02d}:{secs:02d} {suffix}"


def generate_rows(rows: int, dates: list[str], seed: int = 42) -> list[list[Any]]:
    """Generate transaction rows with mixed time/amount representations."""
    rng = np.random.default_rng(seed)
    # 営業時間 07:00-22:00
    seconds = np.sort(rng.integers(7 * 3600, 22 * 3600, rows))
    amounts = rng.integers(1, 500, rows) * 1000
    styles = rng.integers(0, 3, rows)
    out: list[list[Any]] = []
    for i in range(rows):
        date = dates[i * len(dates) // rows]
        amount: Any = int(amounts[i])
        if i % 2:
            amount = f"{amount:,}"
        out.append([date, _format_time(int(seconds[i]), int(styles[i])), amount])
    return out


def create_report(output_path: Path, rows: int, dates: list[str], store: str, seed: int = 42) -> int:
    """Write the report and return the sum of all amounts."""
    data = generate_rows(rows, dates, seed)
    total = sum(int(str(r[2]).replace(",", "")) for r in data)
    sheet: list[list[Any]] = [
        ["BÁO CÁO DOANH SỐ", "", ""],
        [store, "", ""],
        list(HEADER),
        *data,
        ["Tổng cộng", "", f"{total:,}"],
    ]
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
        pd.DataFrame(sheet).to_excel(writer, sheet_name="Sheet1", header=False, index=False)
    print(f"Created report: {output_path}")
    print(f"  Transactions: {rows:,}")
    print(f"  Dates: {', '.join(dates)}")
    print(f"  Total amount: {total:,}")
    return total


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Generate a synthetic sales report (.xlsx)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s data/sales.xlsx
  %(prog)s data/week.xlsx --rows 5000 --dates 01/05/2024 02/05/2024
""",
    )
    parser.add_argument("output", type=Path, help="Output .xlsx path")
    parser.add_argument("--rows", type=int, default=500, help="Number of transactions (default: 500)")
    parser.add_argument(
        "--dates", nargs="+", default=["01/05/2024"], help="Report dates, DD/MM/YYYY (default: 01/05/2024)"
    )
    parser.add_argument("--store", default="Cửa hàng 01", help="Store title row")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    args = parser.parse_args()

    if args.rows <= 0:
        print("Error: --rows must be positive", file=sys.stderr)
        return 1
    if args.output.suffix.lower() != ".xlsx":
        print("Error: output must be an .xlsx file", file=sys.stderr)
        return 1

    try:
        create_report(args.output, args.rows, args.dates, args.store, args.seed)
    except OSError as e:
        print(f"Error writing report: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
