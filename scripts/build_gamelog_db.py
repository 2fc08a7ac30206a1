"""
Build the normalized game log database.

Reads the game log and reference files named in the settings YAML (default
config/settings.example.yaml), normalizes them into person, park, league,
team, appearance_type, game, team_appearance and person_appearance, and
writes a single SQLite file. Any input path can be overridden on the command
line. Exit code 1 on a fatal error; data-quality warnings do not fail the run.
"""

from __future__ import annotations

from pathlib import Path
import sys

# Ensure 'src' is importable when running as a script
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import argparse
import logging

from gamelog_db.config import DEFAULT_SETTINGS_PATH, load_settings
from gamelog_db.errors import GamelogDbError
from gamelog_db.pipeline import run_pipeline


def main() -> int:
    ap = argparse.ArgumentParser(description="Normalize a wide game log into a SQLite database")
    ap.add_argument("--config", default=str(ROOT / DEFAULT_SETTINGS_PATH))
    ap.add_argument("--game-log")
    ap.add_argument("--park-codes")
    ap.add_argument("--person-codes")
    ap.add_argument("--team-codes")
    ap.add_argument("--appearance-types", help="Defaults to the packaged appearance_type.csv")
    ap.add_argument("--db", help="Output SQLite path")
    ap.add_argument("--keep-raw", action="store_true", help="Do not drop the raw staging tables")
    args = ap.parse_args()

    settings = load_settings(args.config)
    overrides = {
        "game_log_path": args.game_log,
        "park_codes_path": args.park_codes,
        "person_codes_path": args.person_codes,
        "team_codes_path": args.team_codes,
        "appearance_type_path": args.appearance_types,
        "db_path": args.db,
    }
    settings = settings.model_copy(update={k: v for k, v in overrides.items() if v})
    if args.keep_raw:
        settings = settings.model_copy(update={"keep_raw_tables": True})

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        report = run_pipeline(settings)
    except GamelogDbError as e:
        print(f"[FAIL] {e}")
        print(f"Output not written; partial database left at {settings.partial_db_path}")
        return 1

    print(f"Wrote: {report.db_path}")
    for table, n in sorted(report.table_counts.items()):
        print(f"  {table:18s}: {n:>9d}")
    issues = report.issues
    if issues:
        print(f"Data-quality warnings: {len(issues)}")
        for issue in issues:
            ex = f" (e.g. {', '.join(issue.examples[:3])})" if issue.examples else ""
            print(f"  [{issue.kind}] {issue.table}: {issue.message}{ex}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
