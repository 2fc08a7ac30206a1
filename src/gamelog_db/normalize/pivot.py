"""
Home/visitor pivot: one wide game log row becomes two team_appearance rows.

Both rows share the same column layout; the side prefix (h_/v_) is dropped
and recorded in the boolean home column instead.
"""

from __future__ import annotations

import logging
from typing import List

import pandas as pd

from ..data.gamelog_schema import SIDES, TEAM_APPEARANCE_COLS, TEAM_STAT_FIELDS
from .transforms import coerce_int

logger = logging.getLogger(__name__)


def side_frame(game_log: pd.DataFrame, side: str) -> pd.DataFrame:
    """Rename one side's columns onto the shared team_appearance layout."""
    out = pd.DataFrame(index=game_log.index)
    out["team_id"] = game_log[f"{side}_name"]
    out["game_id"] = game_log["game_id"]
    out["home"] = side == "h"
    out["league_id"] = game_log[f"{side}_league"]
    out["score"] = coerce_int(game_log[f"{side}_score"])
    out["line_score"] = game_log[f"{side}_line_score"]
    for f in TEAM_STAT_FIELDS:
        out[f] = coerce_int(game_log[f"{side}_{f}"])
    return out[TEAM_APPEARANCE_COLS]


def build_team_appearance(game_log: pd.DataFrame) -> pd.DataFrame:
    parts: List[pd.DataFrame] = [side_frame(game_log, side) for side in SIDES]
    out = pd.concat(parts, ignore_index=True)
    n = len(out)
    out = out.drop_duplicates(subset=["team_id", "game_id"], keep="first")
    if len(out) != n:
        logger.warning("Dropped %d repeated (team_id, game_id) team_appearance rows", n - len(out))
    return out.sort_values(["game_id", "home"], ascending=[True, False], kind="mergesort").reset_index(drop=True)
