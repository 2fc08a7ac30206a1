"""
SQLite store for the normalized game log schema.

One connection is opened per run and handed to every stage. Foreign keys are
declared but not enforced while loading; referential gaps are reported by
quality.check_foreign_keys instead of failing the insert.
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

import pandas as pd

from .data.gamelog_schema import TEAM_STAT_FIELDS

logger = logging.getLogger(__name__)


_TEAM_STATS_DDL = ",\n    ".join(f"{f} INTEGER" for f in TEAM_STAT_FIELDS)

DDL: Dict[str, str] = {
    "person": """
CREATE TABLE person (
    person_id TEXT PRIMARY KEY,
    first_name TEXT,
    last_name TEXT
)""",
    "park": """
CREATE TABLE park (
    park_id TEXT PRIMARY KEY,
    name TEXT,
    nickname TEXT,
    city TEXT,
    state TEXT,
    notes TEXT
)""",
    "league": """
CREATE TABLE league (
    league_id TEXT PRIMARY KEY,
    name TEXT
)""",
    "appearance_type": """
CREATE TABLE appearance_type (
    appearance_type_id TEXT PRIMARY KEY,
    name TEXT,
    category TEXT
)""",
    "team": """
CREATE TABLE team (
    team_id TEXT PRIMARY KEY,
    league_id TEXT REFERENCES league(league_id),
    city TEXT,
    nickname TEXT,
    franchise_id TEXT
)""",
    "game": """
CREATE TABLE game (
    game_id TEXT PRIMARY KEY,
    date TEXT,
    number_of_game INTEGER,
    park_id TEXT REFERENCES park(park_id),
    length_outs INTEGER,
    day BOOLEAN,
    completion TEXT,
    forfeit TEXT,
    protest TEXT,
    attendance INTEGER,
    length_minutes INTEGER,
    additional_info TEXT,
    acquisition_info TEXT
)""",
    "team_appearance": f"""
CREATE TABLE team_appearance (
    team_id TEXT REFERENCES team(team_id),
    game_id TEXT REFERENCES game(game_id),
    home BOOLEAN,
    league_id TEXT REFERENCES league(league_id),
    score INTEGER,
    line_score TEXT,
    {_TEAM_STATS_DDL},
    PRIMARY KEY (team_id, game_id)
)""",
    "person_appearance": """
CREATE TABLE person_appearance (
    appearance_id INTEGER PRIMARY KEY,
    person_id TEXT REFERENCES person(person_id),
    team_id TEXT REFERENCES team(team_id),
    game_id TEXT REFERENCES game(game_id),
    appearance_type_id TEXT REFERENCES appearance_type(appearance_type_id),
    UNIQUE (game_id, person_id, appearance_type_id)
)""",
}


@contextmanager
def open_store(path: str | Path) -> Iterator[sqlite3.Connection]:
    """Open the SQLite file at path; the connection is always closed on exit."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(p))
    try:
        conn.execute("PRAGMA foreign_keys = OFF")
        yield conn
        conn.commit()
    except BaseException:
        conn.rollback()
        raise
    finally:
        conn.close()


def create_schema(conn: sqlite3.Connection, tables: Optional[Iterable[str]] = None) -> None:
    for name in tables or DDL.keys():
        conn.execute(f"DROP TABLE IF EXISTS {name}")
        conn.execute(DDL[name])
    conn.commit()


def write_raw(conn: sqlite3.Connection, name: str, frame: pd.DataFrame) -> int:
    """Stage a raw input frame as a text-typed table, replacing any previous copy."""
    frame.to_sql(name, conn, if_exists="replace", index=False)
    logger.info("Staged raw table %s (%d rows)", name, len(frame))
    return len(frame)


def read_table(conn: sqlite3.Connection, name: str) -> pd.DataFrame:
    return pd.read_sql_query(f"SELECT * FROM {name}", conn)


def _py(val: object) -> object:
    if val is None:
        return None
    try:
        if pd.isna(val):
            return None
    except (TypeError, ValueError):
        pass
    # numpy scalars -> python scalars for sqlite3 binding
    return val.item() if hasattr(val, "item") else val


def insert_rows(conn: sqlite3.Connection, table: str, frame: pd.DataFrame, or_ignore: bool = False) -> int:
    """Insert frame into table by column name; returns rows actually inserted."""
    if frame.empty:
        return 0
    cols = list(frame.columns)
    verb = "INSERT OR IGNORE" if or_ignore else "INSERT"
    sql = f"{verb} INTO {table} ({', '.join(cols)}) VALUES ({', '.join('?' for _ in cols)})"
    before = conn.total_changes
    conn.executemany(sql, ([_py(v) for v in row] for row in frame.itertuples(index=False, name=None)))
    conn.commit()
    return conn.total_changes - before


def table_names(conn: sqlite3.Connection) -> List[str]:
    rows = conn.execute("SELECT name FROM sqlite_master WHERE type = 'table' ORDER BY name").fetchall()
    return [r[0] for r in rows]


def row_count(conn: sqlite3.Connection, table: str) -> int:
    return int(conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0])


def drop_tables(conn: sqlite3.Connection, tables: Iterable[str]) -> List[str]:
    dropped: List[str] = []
    for name in tables:
        conn.execute(f"DROP TABLE IF EXISTS {name}")
        dropped.append(name)
    conn.commit()
    return dropped


def foreign_key_violations(conn: sqlite3.Connection) -> List[Tuple[str, int, str, str, object]]:
    """Return (table, rowid, parent, column, value) for every unresolved reference."""
    out: List[Tuple[str, int, str, str, object]] = []
    fk_cols: Dict[Tuple[str, int], str] = {}
    for table, rowid, parent, fkid in conn.execute("PRAGMA foreign_key_check").fetchall():
        key = (table, fkid)
        if key not in fk_cols:
            for fk in conn.execute(f"PRAGMA foreign_key_list({table})").fetchall():
                # (id, seq, table, from, to, on_update, on_delete, match)
                fk_cols[(table, fk[0])] = fk[3]
        col = fk_cols.get(key, "?")
        value = conn.execute(f"SELECT {col} FROM {table} WHERE rowid = ?", (rowid,)).fetchone() if col != "?" else None
        out.append((table, rowid, parent, col, value[0] if value else None))
    return out
