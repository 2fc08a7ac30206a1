"""
Print row counts and the first rows of each table in a built database.

Usage: python scripts/preview_db.py [data/gamelog.db] [--rows 5]
"""

from __future__ import annotations

from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import argparse

import pandas as pd

from gamelog_db.store import open_store, row_count, table_names


def main() -> int:
    ap = argparse.ArgumentParser(description="Preview a normalized game log database")
    ap.add_argument("db", nargs="?", default=str(ROOT / "data" / "gamelog.db"))
    ap.add_argument("--rows", type=int, default=5)
    args = ap.parse_args()

    if not Path(args.db).exists():
        print(f"Database not found: {args.db}")
        return 1

    with pd.option_context("display.max_columns", 12, "display.width", 160):
        with open_store(args.db) as conn:
            for table in table_names(conn):
                print(f"== {table} ({row_count(conn, table)} rows)")
                print(pd.read_sql_query(f"SELECT * FROM {table} LIMIT ?", conn, params=(args.rows,)))
                print()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
