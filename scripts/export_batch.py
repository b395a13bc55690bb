"""Export one batch's attendance to Excel (or CSV by extension).

Usage:
    python scripts/export_batch.py --batchId SQL-MCT-2027
    python scripts/export_batch.py --batchId SQL-MCT-2027 --startDate 2025-01-01 --endDate 2025-12-31
    python scripts/export_batch.py --batchId SQL-MCT-2027 --out exports/sql.csv
"""

from __future__ import annotations

import argparse
import importlib
import re
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.batch_attendance.batch_attendance.container import build_container
from src.batch_attendance.batch_attendance.core.exceptions import DomainError


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--batchId", required=True)
    parser.add_argument("--startDate")
    parser.add_argument("--endDate")
    parser.add_argument("--out", help="output path (.xlsx or .csv)")
    args = parser.parse_args(argv)

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=dict(settings.DB_CONFIG), store_backend="mysql")

    try:
        report = container.report_service.export_batch(batch_id=args.batchId, start=args.startDate, end=args.endDate)
    except DomainError as e:
        raise SystemExit(f"Export failed: {e}")

    if args.out:
        out_path = Path(args.out).resolve()
    else:
        safe_name = re.sub(r"[^A-Za-z0-9_.-]+", "_", args.batchId.strip().upper())
        out_path = REPO_ROOT / "exports" / f"{safe_name}_attendance.xlsx"
    out_path.parent.mkdir(parents=True, exist_ok=True)

    body = report.to_csv() if out_path.suffix.lower() == ".csv" else report.to_xlsx()
    out_path.write_bytes(body)

    print(f"OK: Exported {len(report.rows)} students x {len(report.dates)} dates -> {out_path}")


if __name__ == "__main__":
    main()
