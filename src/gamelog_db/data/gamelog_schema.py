"""
Canonical game log schema used by the loader and the normalizers.

Column order follows the Retrosheet game log layout, so a headerless raw
GL*.TXT file can be labelled with GAME_LOG_COLS directly.
"""

from __future__ import annotations

from typing import Dict, List, Tuple


SIDES: Tuple[str, str] = ("h", "v")

# Per-side statistics, shared by both team_appearance rows of a game
TEAM_STAT_FIELDS: List[str] = [
    "at_bats",
    "hits",
    "doubles",
    "triples",
    "homeruns",
    "rbi",
    "sacrifice_hits",
    "sacrifice_flies",
    "hit_by_pitch",
    "walks",
    "intentional_walks",
    "strikeouts",
    "stolen_bases",
    "caught_stealing",
    "grounded_into_double",
    "first_catcher_interference",
    "left_on_base",
    "pitchers_used",
    "individual_earned_runs",
    "team_earned_runs",
    "wild_pitches",
    "balks",
    "putouts",
    "assists",
    "errors",
    "passed_balls",
    "double_plays",
    "triple_plays",
]

BATTING_ORDER: Tuple[int, ...] = tuple(range(1, 10))

UMPIRE_POSITIONS: List[Tuple[str, str]] = [
    # (source column prefix, appearance_type_id)
    ("hp", "UHP"),
    ("1b", "U1B"),
    ("2b", "U2B"),
    ("3b", "U3B"),
    ("lf", "ULF"),
    ("rf", "URF"),
]

LEAGUE_NAMES: Dict[str, str] = {
    "NL": "National League",
    "AL": "American League",
    "UA": "Union Association",
    "AA": "American Association",
    "PL": "Player's League",
    "FL": "Federal League",
}


def _side_cols(side: str) -> List[str]:
    return [f"{side}_{f}" for f in TEAM_STAT_FIELDS]


def _lineup_cols(side: str) -> List[str]:
    cols: List[str] = []
    for n in BATTING_ORDER:
        cols += [f"{side}_player_{n}_id", f"{side}_player_{n}_name", f"{side}_player_{n}_def_pos"]
    return cols


GAME_LOG_COLS: List[str] = (
    [
        "date",
        "number_of_game",
        "day_of_week",
        "v_name",
        "v_league",
        "v_game_number",
        "h_name",
        "h_league",
        "h_game_number",
        "v_score",
        "h_score",
        "length_outs",
        "day_night",
        "completion",
        "forefeit",
        "protest",
        "park_id",
        "attendance",
        "length_minutes",
        "v_line_score",
        "h_line_score",
    ]
    + _side_cols("v")
    + _side_cols("h")
    + [c for prefix, _ in UMPIRE_POSITIONS for c in (f"{prefix}_umpire_id", f"{prefix}_umpire_name")]
    + [
        "v_manager_id",
        "v_manager_name",
        "h_manager_id",
        "h_manager_name",
        "winning_pitcher_id",
        "winning_pitcher_name",
        "losing_pitcher_id",
        "losing_pitcher_name",
        "saving_pitcher_id",
        "saving_pitcher_name",
        "winning_rbi_batter_id",
        "winning_rbi_batter_id_name",
        "v_starting_pitcher_id",
        "v_starting_pitcher_name",
        "h_starting_pitcher_id",
        "h_starting_pitcher_name",
    ]
    + _lineup_cols("v")
    + _lineup_cols("h")
    + ["additional_info", "acquisition_info"]
)

# Accepted spellings for game log columns; first entry is canonical
GAME_LOG_ALIASES: Dict[str, List[str]] = {
    "forefeit": ["forefeit", "forfeit"],
    "winning_rbi_batter_id_name": ["winning_rbi_batter_id_name", "winning_rbi_batter_name"],
}

# Minimum columns each reference input must carry
PARK_CODE_COLS: List[str] = ["park_id", "name", "aka", "city", "state", "notes"]
PERSON_CODE_COLS: List[str] = ["id", "first", "last"]
TEAM_CODE_COLS: List[str] = ["team_id", "league", "city", "nickname", "franch_id"]
APPEARANCE_TYPE_COLS: List[str] = ["appearance_type_id", "name", "category"]

# Game-scoped columns after the split, in output order
GAME_COLS: List[str] = [
    "game_id",
    "date",
    "number_of_game",
    "park_id",
    "length_outs",
    "day",
    "completion",
    "forfeit",
    "protest",
    "attendance",
    "length_minutes",
    "additional_info",
    "acquisition_info",
]

TEAM_APPEARANCE_COLS: List[str] = [
    "team_id",
    "game_id",
    "home",
    "league_id",
    "score",
    "line_score",
] + TEAM_STAT_FIELDS

PERSON_APPEARANCE_COLS: List[str] = [
    "team_id",
    "person_id",
    "game_id",
    "appearance_type_id",
]

# Raw staging tables, dropped by the finalizer
RAW_TABLES: List[str] = ["game_log", "park_codes", "person_codes", "team_codes"]

OUTPUT_TABLES: List[str] = [
    "person",
    "park",
    "league",
    "appearance_type",
    "team",
    "game",
    "team_appearance",
    "person_appearance",
]
