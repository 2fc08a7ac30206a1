"""
Split the game log into the game fact table, and team_codes into team.

game_id is the concatenation home team + date + number_of_game and must be
unique across the whole log; it is the only key the raw data has.
"""

from __future__ import annotations

from typing import List, Tuple

import pandas as pd

from ..data.gamelog_schema import GAME_COLS
from ..errors import DuplicateGameIdError
from ..schemas import DataQualityIssue
from .reference import drop_repeated_keys
from .transforms import coerce_int, text


def add_game_id(game_log: pd.DataFrame) -> pd.DataFrame:
    """Return a copy of game_log with a leading game_id column."""
    out = game_log.copy()
    # "0" and "0.0" must both give the same key
    n = coerce_int(out["number_of_game"]).astype("string").fillna("")
    out.insert(0, "game_id", (text(out["h_name"]) + text(out["date"]) + n).astype(object))
    return out


def ensure_unique_game_ids(game_log: pd.DataFrame) -> None:
    dup = game_log["game_id"][game_log["game_id"].duplicated(keep=False)]
    if not dup.empty:
        raise DuplicateGameIdError(sorted(dup.unique().tolist()))


def build_team(team_codes: pd.DataFrame) -> Tuple[pd.DataFrame, List[DataQualityIssue]]:
    out = team_codes.rename(columns={"league": "league_id", "franch_id": "franchise_id"})
    out = out[["team_id", "league_id", "city", "nickname", "franchise_id"]]
    return drop_repeated_keys(out.reset_index(drop=True), "team_id", "team")


def day_flag(day_night: pd.Series) -> pd.Series:
    """True for "D", False for any other value, None when missing."""
    s = day_night.astype("string").str.strip().str.upper()
    return pd.Series([None if pd.isna(v) else v == "D" for v in s], index=day_night.index, dtype="object")


def build_game(game_log: pd.DataFrame) -> pd.DataFrame:
    """Game-scoped columns of a game log that already carries game_id."""
    out = pd.DataFrame(index=game_log.index)
    out["game_id"] = game_log["game_id"]
    out["date"] = game_log["date"]
    out["number_of_game"] = coerce_int(game_log["number_of_game"])
    out["park_id"] = game_log["park_id"]
    out["length_outs"] = coerce_int(game_log["length_outs"])
    out["day"] = day_flag(game_log["day_night"])
    out["completion"] = game_log["completion"]
    out["forfeit"] = game_log["forefeit"]
    out["protest"] = game_log["protest"]
    out["attendance"] = coerce_int(game_log["attendance"])
    out["length_minutes"] = coerce_int(game_log["length_minutes"])
    out["additional_info"] = game_log["additional_info"]
    out["acquisition_info"] = game_log["acquisition_info"]
    return out[GAME_COLS].reset_index(drop=True)
