"""Lookup tables derived from the reference inputs: person, park, league, appearance_type."""

from __future__ import annotations

import logging
from typing import List, Tuple

import pandas as pd

from ..data.gamelog_schema import LEAGUE_NAMES
from ..schemas import DataQualityIssue

logger = logging.getLogger(__name__)


def build_person(person_codes: pd.DataFrame) -> pd.DataFrame:
    out = person_codes.rename(columns={"id": "person_id", "first": "first_name", "last": "last_name"})
    return out[["person_id", "first_name", "last_name"]].reset_index(drop=True)


def build_park(park_codes: pd.DataFrame) -> pd.DataFrame:
    # start/end/league are derivable from game and are not carried over
    out = park_codes.rename(columns={"aka": "nickname"})
    return out[["park_id", "name", "nickname", "city", "state", "notes"]].reset_index(drop=True)


def build_league(team_codes: pd.DataFrame) -> Tuple[pd.DataFrame, List[DataQualityIssue]]:
    """Distinct league codes from team_codes mapped to their full names.

    Codes outside LEAGUE_NAMES keep their row with a null name and are
    reported as a warning.
    """
    raw = team_codes["league"].dropna().astype(str).str.strip()
    codes = sorted(c for c in raw.unique() if c)
    out = pd.DataFrame({"league_id": codes})
    out["name"] = out["league_id"].map(LEAGUE_NAMES)

    issues: List[DataQualityIssue] = []
    unknown = out.loc[out["name"].isna(), "league_id"].tolist()
    if unknown:
        issues.append(
            DataQualityIssue(
                kind="unknown_league",
                table="league",
                message=f"{len(unknown)} league code(s) without a known name",
                count=len(unknown),
                examples=unknown[:10],
            )
        )
        logger.warning("Unknown league codes kept with null name: %s", ", ".join(unknown))
    out["name"] = out["name"].astype("object").where(out["name"].notna(), None)
    return out, issues


def build_appearance_type(appearance_types: pd.DataFrame) -> pd.DataFrame:
    return appearance_types[["appearance_type_id", "name", "category"]].reset_index(drop=True)


def drop_repeated_keys(frame: pd.DataFrame, key: str, table: str) -> Tuple[pd.DataFrame, List[DataQualityIssue]]:
    """Keep the first row per key value; repeats are reported, not fatal."""
    dup = frame[key].duplicated(keep="first")
    if not dup.any():
        return frame, []
    ids = sorted(frame.loc[dup, key].astype(str).unique().tolist())
    issue = DataQualityIssue(
        kind=f"duplicate_{table}",
        table=table,
        message=f"{int(dup.sum())} repeated {key} row(s) in {table} reference; first kept",
        count=int(dup.sum()),
        examples=ids[:10],
    )
    logger.warning("Repeated %s in %s reference, keeping first: %s", key, table, ", ".join(ids))
    return frame.loc[~dup].reset_index(drop=True), [issue]
