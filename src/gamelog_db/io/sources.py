"""
Read the game log and the reference inputs into string-typed DataFrames.

Every value is read as text; empty strings become missing values. The game
log may be the CSV export with a header row, a headerless Retrosheet GL*.TXT
file, or a .zip holding either. Missing optional game log columns become NA;
missing required columns are fatal.
"""

from __future__ import annotations

import io
import logging
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional

import pandas as pd

from ..data.gamelog_schema import (
    APPEARANCE_TYPE_COLS,
    GAME_LOG_ALIASES,
    GAME_LOG_COLS,
    PARK_CODE_COLS,
    PERSON_CODE_COLS,
    TEAM_CODE_COLS,
)
from ..errors import SourceFileError

logger = logging.getLogger(__name__)

DEFAULT_APPEARANCE_TYPE_PATH = Path(__file__).resolve().parents[1] / "data" / "appearance_type.csv"

GAME_LOG_REQUIRED: List[str] = [
    "date",
    "number_of_game",
    "v_name",
    "h_name",
    "v_score",
    "h_score",
    "park_id",
]

_NA_VALUES = [""]
# Raw Retrosheet files spell an absent umpire or player as "(none)"
_RAW_NA_VALUES = ["", "(none)"]


@dataclass
class Sources:
    game_log: pd.DataFrame
    park_codes: pd.DataFrame
    person_codes: pd.DataFrame
    team_codes: pd.DataFrame
    appearance_types: pd.DataFrame


def _existing(path: str | Path) -> Path:
    p = Path(path)
    if not p.is_file():
        raise SourceFileError(f"Input file not found: {p}", path=str(p))
    return p


def _first_fields(raw: bytes) -> List[str]:
    line = raw.split(b"\n", 1)[0].decode("utf-8-sig", errors="replace")
    return [f.strip().strip('"').strip().lower() for f in line.split(",")]


def _read_csv_bytes(raw: bytes, names: Optional[List[str]], na_values: List[str]) -> pd.DataFrame:
    return pd.read_csv(
        io.BytesIO(raw),
        dtype=str,
        keep_default_na=False,
        na_values=na_values,
        header=None if names else "infer",
        names=names,
        encoding="utf-8-sig",
        encoding_errors="replace",
    )


def _iter_payloads(path: Path) -> Iterator[bytes]:
    if path.suffix.lower() == ".zip":
        with zipfile.ZipFile(path) as zf:
            for name in sorted(zf.namelist()):
                if name.lower().endswith((".csv", ".txt")):
                    yield zf.read(name)
    else:
        yield path.read_bytes()


def _normalize_header(df: pd.DataFrame) -> pd.DataFrame:
    return df.rename(columns=lambda c: str(c).strip())


def _require(df: pd.DataFrame, cols: List[str], path: Path) -> None:
    missing = [c for c in cols if c not in df.columns]
    if missing:
        raise SourceFileError(f"{path.name} is missing required columns: {', '.join(missing)}", path=str(path))


def _read_reference(path: str | Path, required: List[str]) -> pd.DataFrame:
    p = _existing(path)
    try:
        df = _read_csv_bytes(p.read_bytes(), None, _NA_VALUES)
    except (OSError, ValueError, pd.errors.ParserError) as e:
        raise SourceFileError(f"Could not read {p}: {e}", path=str(p)) from e
    df = _normalize_header(df)
    _require(df, required, p)
    logger.info("Loaded %s: %d rows", p.name, len(df))
    return df


def load_game_log(path: str | Path) -> pd.DataFrame:
    """Load the wide game log, labelling headerless Retrosheet files."""
    p = _existing(path)
    frames: List[pd.DataFrame] = []
    try:
        for raw in _iter_payloads(p):
            if not raw.strip():
                continue
            if "date" in _first_fields(raw):
                df = _normalize_header(_read_csv_bytes(raw, None, _NA_VALUES))
            else:
                df = _read_csv_bytes(raw, GAME_LOG_COLS, _RAW_NA_VALUES)
            frames.append(df)
    except (OSError, ValueError, zipfile.BadZipFile, pd.errors.ParserError) as e:
        raise SourceFileError(f"Could not read game log {p}: {e}", path=str(p)) from e
    if not frames:
        raise SourceFileError(f"Game log {p} contains no rows", path=str(p))

    df = pd.concat(frames, ignore_index=True)
    for canon, variants in GAME_LOG_ALIASES.items():
        if canon in df.columns:
            continue
        for v in variants:
            if v in df.columns:
                df = df.rename(columns={v: canon})
                break
    _require(df, GAME_LOG_REQUIRED, p)
    for c in GAME_LOG_COLS:
        if c not in df.columns:
            df[c] = pd.Series([pd.NA] * len(df), dtype="object")
    logger.info("Loaded game log %s: %d games", p.name, len(df))
    return df[GAME_LOG_COLS]


def load_park_codes(path: str | Path) -> pd.DataFrame:
    return _read_reference(path, PARK_CODE_COLS)


def load_person_codes(path: str | Path) -> pd.DataFrame:
    return _read_reference(path, PERSON_CODE_COLS)


def load_team_codes(path: str | Path) -> pd.DataFrame:
    return _read_reference(path, TEAM_CODE_COLS)


def load_appearance_types(path: str | Path | None = None) -> pd.DataFrame:
    return _read_reference(path or DEFAULT_APPEARANCE_TYPE_PATH, APPEARANCE_TYPE_COLS)


def load_sources(settings) -> Sources:
    """Load every input named by settings; any failure raises SourceFileError."""
    return Sources(
        game_log=load_game_log(settings.game_log_path),
        park_codes=load_park_codes(settings.park_codes_path),
        person_codes=load_person_codes(settings.person_codes_path),
        team_codes=load_team_codes(settings.team_codes_path),
        appearance_types=load_appearance_types(settings.appearance_type_path),
    )
