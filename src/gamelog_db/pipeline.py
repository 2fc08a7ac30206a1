"""
Run-once normalization pipeline.

Stages run strictly in order against one explicitly passed connection:

    load sources -> stage raw tables -> create schema -> reference tables
    -> team/game split -> home/visitor pivot -> role explode -> finalize

The database is built at <db_path>.partial and moved over <db_path> only
after the finalizer has verified it, so an aborted run never leaves a
half-populated file under the final name.
"""

from __future__ import annotations

import logging
import os
import sqlite3
from pathlib import Path
from typing import Callable, Dict, List

import pandas as pd

from .config import Settings
from .data.gamelog_schema import OUTPUT_TABLES, RAW_TABLES
from .errors import VerificationError
from .io.sources import Sources, load_sources
from .normalize.explode import build_person_appearance
from .normalize.games import add_game_id, build_game, build_team, ensure_unique_game_ids
from .normalize.pivot import build_team_appearance
from .normalize.reference import build_appearance_type, build_league, build_park, build_person, drop_repeated_keys
from .quality import check_foreign_keys, check_team_appearance_pairs
from .schemas import PipelineReport, StageResult
from .store import create_schema, drop_tables, insert_rows, open_store, read_table, row_count, table_names, write_raw

logger = logging.getLogger(__name__)


def _result(name: str, rows: Dict[str, int], issues=None) -> StageResult:
    empty = [t for t, n in rows.items() if n == 0]
    if empty:
        logger.error("Stage %s wrote no rows to: %s", name, ", ".join(empty))
    return StageResult(name=name, ok=not empty, rows=rows, issues=list(issues or []))


def stage_raw(conn: sqlite3.Connection, sources: Sources) -> StageResult:
    """Key the game log by game_id and stage the four raw inputs."""
    game_log = add_game_id(sources.game_log)
    ensure_unique_game_ids(game_log)
    rows = {
        "game_log": write_raw(conn, "game_log", game_log),
        "park_codes": write_raw(conn, "park_codes", sources.park_codes),
        "person_codes": write_raw(conn, "person_codes", sources.person_codes),
        "team_codes": write_raw(conn, "team_codes", sources.team_codes),
    }
    return _result("raw", rows)


def stage_schema(conn: sqlite3.Connection) -> StageResult:
    create_schema(conn)
    return StageResult(name="schema")


def stage_reference(conn: sqlite3.Connection, appearance_types: pd.DataFrame) -> StageResult:
    league, issues = build_league(read_table(conn, "team_codes"))
    person, person_issues = drop_repeated_keys(build_person(read_table(conn, "person_codes")), "person_id", "person")
    park, park_issues = drop_repeated_keys(build_park(read_table(conn, "park_codes")), "park_id", "park")
    types, type_issues = drop_repeated_keys(
        build_appearance_type(appearance_types), "appearance_type_id", "appearance_type"
    )
    rows = {
        "person": insert_rows(conn, "person", person),
        "park": insert_rows(conn, "park", park),
        "league": insert_rows(conn, "league", league),
        "appearance_type": insert_rows(conn, "appearance_type", types),
    }
    issues += person_issues + park_issues + type_issues
    return _result("reference", rows, issues)


def stage_team_game(conn: sqlite3.Connection) -> StageResult:
    team, issues = build_team(read_table(conn, "team_codes"))
    rows = {
        "team": insert_rows(conn, "team", team),
        "game": insert_rows(conn, "game", build_game(read_table(conn, "game_log"))),
    }
    return _result("team_game", rows, issues)


def stage_team_appearance(conn: sqlite3.Connection) -> StageResult:
    frame = build_team_appearance(read_table(conn, "game_log"))
    return _result("team_appearance", {"team_appearance": insert_rows(conn, "team_appearance", frame)})


def stage_person_appearance(conn: sqlite3.Connection) -> StageResult:
    frame, issues = build_person_appearance(read_table(conn, "game_log"))
    inserted = insert_rows(conn, "person_appearance", frame, or_ignore=True)
    if inserted != len(frame):
        logger.warning("Ignored %d person_appearance rows already present", len(frame) - inserted)
    return _result("person_appearance", {"person_appearance": inserted}, issues)


def finalize(conn: sqlite3.Connection, keep_raw_tables: bool = False) -> StageResult:
    """Verify the normalized tables, then drop the raw staging tables."""
    present = set(table_names(conn))
    missing = [t for t in OUTPUT_TABLES if t not in present]
    if missing:
        raise VerificationError(f"Output tables missing: {', '.join(missing)}")
    counts = {t: row_count(conn, t) for t in OUTPUT_TABLES}
    empty = [t for t, n in counts.items() if n == 0]
    if empty:
        raise VerificationError(f"Output tables are empty: {', '.join(empty)}")

    issues = check_foreign_keys(conn) + check_team_appearance_pairs(conn)
    if keep_raw_tables:
        logger.info("Keeping raw tables: %s", ", ".join(RAW_TABLES))
    else:
        drop_tables(conn, RAW_TABLES)
        conn.execute("VACUUM")
    return StageResult(name="finalize", rows=counts, issues=issues)


def run_pipeline(settings: Settings) -> PipelineReport:
    """Build the normalized database; raises GamelogDbError on fatal errors."""
    report = PipelineReport(db_path=settings.db_path)
    sources = load_sources(settings)

    partial = Path(settings.partial_db_path)
    if partial.exists():
        partial.unlink()

    stages: List[Callable[[sqlite3.Connection], StageResult]] = [
        lambda c: stage_raw(c, sources),
        stage_schema,
        lambda c: stage_reference(c, sources.appearance_types),
        stage_team_game,
        stage_team_appearance,
        stage_person_appearance,
        lambda c: finalize(c, settings.keep_raw_tables),
    ]
    with open_store(partial) as conn:
        for stage in stages:
            result = stage(conn)
            report.stages.append(result)
            logger.info("Stage %s done: %s", result.name, result.rows)
            if not result.ok:
                raise VerificationError(f"Stage {result.name} produced no rows")
        report.table_counts = {t: row_count(conn, t) for t in table_names(conn)}

    os.replace(partial, settings.db_path)
    report.completed = True
    logger.info("Wrote %s", settings.db_path)
    return report
