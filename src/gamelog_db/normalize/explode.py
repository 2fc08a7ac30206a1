"""
Role explode: one game log row becomes many person_appearance rows.

Roles are declared as static tables below and walked in a loop; each role
emits (team_id, person_id, game_id, appearance_type_id) for the games where
its person column is filled. The union of all emissions is treated as a set
keyed by (game_id, person_id, appearance_type_id).

Team attribution:
- umpires carry no team
- managers and starting pitchers carry their own side's team
- winning pitcher, saving pitcher and winning RBI batter carry the side with
  the strictly higher score; losing pitcher the side with the strictly lower
  score. Games with a tied or missing score emit none of these four roles.
- each lineup slot emits O<slot> and D<def_pos> for the same player
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np
import pandas as pd

from ..data.gamelog_schema import BATTING_ORDER, PERSON_APPEARANCE_COLS, SIDES, UMPIRE_POSITIONS
from ..schemas import DataQualityIssue
from .transforms import coerce_int

logger = logging.getLogger(__name__)

DEDUP_KEY = ["game_id", "person_id", "appearance_type_id"]


@dataclass(frozen=True)
class FixedRole:
    person_col: str
    appearance_type_id: str
    side: Optional[str]  # None -> no team


@dataclass(frozen=True)
class AwardRole:
    person_col: str
    appearance_type_id: str
    winning_side: bool


@dataclass(frozen=True)
class LineupSlot:
    side: str
    slot: int

    @property
    def person_col(self) -> str:
        return f"{self.side}_player_{self.slot}_id"

    @property
    def def_pos_col(self) -> str:
        return f"{self.side}_player_{self.slot}_def_pos"

    @property
    def order_type(self) -> str:
        return f"O{self.slot}"


UMPIRE_ROLES: List[FixedRole] = [FixedRole(f"{p}_umpire_id", code, None) for p, code in UMPIRE_POSITIONS]

MANAGER_ROLES: List[FixedRole] = [
    FixedRole("v_manager_id", "MM", "v"),
    FixedRole("h_manager_id", "MM", "h"),
]

STARTING_PITCHER_ROLES: List[FixedRole] = [
    FixedRole("v_starting_pitcher_id", "PSP", "v"),
    FixedRole("h_starting_pitcher_id", "PSP", "h"),
]

AWARD_ROLES: List[AwardRole] = [
    AwardRole("winning_pitcher_id", "AWP", True),
    AwardRole("losing_pitcher_id", "ALP", False),
    AwardRole("saving_pitcher_id", "ASP", True),
    AwardRole("winning_rbi_batter_id", "AWB", True),
]

LINEUP_SLOTS: List[LineupSlot] = [LineupSlot(side, n) for side in SIDES for n in BATTING_ORDER]


def _emit(game_log: pd.DataFrame, person_col: str, type_ids, team_ids, mask: Optional[pd.Series] = None) -> pd.DataFrame:
    """Rows for one role; type_ids/team_ids may be scalars or aligned Series."""
    out = pd.DataFrame(index=game_log.index)
    out["team_id"] = team_ids
    out["person_id"] = game_log[person_col]
    out["game_id"] = game_log["game_id"]
    out["appearance_type_id"] = type_ids
    keep = out["person_id"].notna()
    if mask is not None:
        keep &= mask
    return out.loc[keep, PERSON_APPEARANCE_COLS]


def _side_team(game_log: pd.DataFrame, side: Optional[str]):
    if side is None:
        return None
    return game_log[f"{side}_name"]


def decided_sides(game_log: pd.DataFrame) -> Tuple[pd.Series, pd.Series, pd.Series]:
    """Return (decided mask, winning team, losing team) per game.

    A game is decided when both scores are present and differ.
    """
    h = coerce_int(game_log["h_score"])
    v = coerce_int(game_log["v_score"])
    decided = (h.notna() & v.notna() & (h != v)).fillna(False).astype(bool)
    home_won = (h > v).fillna(False).astype(bool).to_numpy()
    winner = pd.Series(np.where(home_won, game_log["h_name"], game_log["v_name"]), index=game_log.index, dtype="object")
    loser = pd.Series(np.where(home_won, game_log["v_name"], game_log["h_name"]), index=game_log.index, dtype="object")
    return decided, winner, loser


def _award_frames(game_log: pd.DataFrame) -> Tuple[List[pd.DataFrame], List[DataQualityIssue]]:
    decided, winner, loser = decided_sides(game_log)
    frames = [
        _emit(game_log, r.person_col, r.appearance_type_id, winner if r.winning_side else loser, mask=decided)
        for r in AWARD_ROLES
    ]

    has_award = pd.concat([game_log[r.person_col].notna() for r in AWARD_ROLES], axis=1).any(axis=1)
    skipped = game_log.loc[has_award & ~decided, "game_id"]
    issues: List[DataQualityIssue] = []
    if not skipped.empty:
        issues.append(
            DataQualityIssue(
                kind="undecided_score",
                table="person_appearance",
                message=f"{len(skipped)} game(s) with tied or missing score; award roles omitted",
                count=len(skipped),
                examples=[str(g) for g in skipped.head(10)],
            )
        )
        logger.warning("Omitted award roles for %d game(s) with tied or missing score", len(skipped))
    return frames, issues


def _lineup_frames(game_log: pd.DataFrame) -> Tuple[List[pd.DataFrame], List[DataQualityIssue]]:
    frames: List[pd.DataFrame] = []
    missing_pos: List[str] = []
    for slot in LINEUP_SLOTS:
        team = _side_team(game_log, slot.side)
        frames.append(_emit(game_log, slot.person_col, slot.order_type, team))

        pos = coerce_int(game_log[slot.def_pos_col])
        has_pos = pos.notna()
        codes = "D" + pos.astype("string")
        frames.append(_emit(game_log, slot.person_col, codes, team, mask=has_pos))

        gap = game_log[slot.person_col].notna() & ~has_pos
        if gap.any():
            missing_pos += [f"{g}:{slot.person_col}" for g in game_log.loc[gap, "game_id"]]

    issues: List[DataQualityIssue] = []
    if missing_pos:
        issues.append(
            DataQualityIssue(
                kind="def_pos",
                table="person_appearance",
                message=f"{len(missing_pos)} lineup slot(s) without a usable defensive position",
                count=len(missing_pos),
                examples=missing_pos[:10],
            )
        )
        logger.warning("Omitted %d defensive-position rows with missing position", len(missing_pos))
    return frames, issues


def build_person_appearance(game_log: pd.DataFrame) -> Tuple[pd.DataFrame, List[DataQualityIssue]]:
    """Explode every role column of a game log carrying game_id."""
    frames: List[pd.DataFrame] = []
    for role in UMPIRE_ROLES + MANAGER_ROLES + STARTING_PITCHER_ROLES:
        frames.append(_emit(game_log, role.person_col, role.appearance_type_id, _side_team(game_log, role.side)))

    award, award_issues = _award_frames(game_log)
    lineup, lineup_issues = _lineup_frames(game_log)
    frames += award + lineup

    out = pd.concat(frames, ignore_index=True)
    out = out.astype({c: "object" for c in PERSON_APPEARANCE_COLS})
    n = len(out)
    out = dedupe_appearances(out)
    if len(out) != n:
        logger.info("Removed %d duplicate person_appearance rows", n - len(out))
    return out, award_issues + lineup_issues


def dedupe_appearances(frame: pd.DataFrame) -> pd.DataFrame:
    """Keep the first row for each (game_id, person_id, appearance_type_id)."""
    out = frame.drop_duplicates(subset=DEDUP_KEY, keep="first")
    return out.sort_values(DEDUP_KEY, kind="mergesort").reset_index(drop=True)
