from typing import Dict, Optional

import pandas as pd

from gamelog_db.data.gamelog_schema import GAME_LOG_COLS
from gamelog_db.normalize.games import add_game_id


def game_row(**kw) -> Dict[str, Optional[str]]:
    row: Dict[str, Optional[str]] = {c: None for c in GAME_LOG_COLS}
    row.update(
        {
            "date": "20160401",
            "number_of_game": "0",
            "day_of_week": "Fri",
            "v_name": "NYA",
            "v_league": "AL",
            "h_name": "BOS",
            "h_league": "AL",
            "v_score": "2",
            "h_score": "5",
            "length_outs": "54",
            "day_night": "D",
            "park_id": "BOS07",
        }
    )
    row.update(kw)
    return row


def game_log(*rows) -> pd.DataFrame:
    return pd.DataFrame(list(rows), columns=GAME_LOG_COLS)


def keyed(*rows) -> pd.DataFrame:
    return add_game_id(game_log(*rows))


PARK_CODES = """park_id,name,aka,city,state,start,end,league,notes
BOS07,Fenway Park II,,Boston,MA,04/20/1912,,AL,
NYC21,Yankee Stadium III,,New York,NY,04/16/2009,,AL,
"""

TEAM_CODES = """team_id,league,start,end,city,nickname,franch_id,seq
BOS,AL,1901,,Boston,Red Sox,BOS,1
NYA,AL,1903,,New York,Yankees,NYA,1
CHN,NL,1876,,Chicago,Cubs,CHN,1
XXX,ZZ,1999,1999,Nowhere,Nobodies,XXX,1
"""


def lineup(side: str, prefix: str) -> Dict[str, str]:
    kw: Dict[str, str] = {}
    for n in range(1, 10):
        kw[f"{side}_player_{n}_id"] = f"{prefix}{n}"
        kw[f"{side}_player_{n}_def_pos"] = str(n)
    return kw


def sample_rows():
    g1 = game_row(
        hp_umpire_id="UMP1",
        v_manager_id="MGRV",
        h_manager_id="MGRH",
        winning_pitcher_id="BOS1",
        losing_pitcher_id="NYA1",
        h_starting_pitcher_id="BOS1",
        v_starting_pitcher_id="NYA1",
        **lineup("h", "BOS"),
        **lineup("v", "NYA"),
    )
    g2 = game_row(
        date="20160402",
        h_name="NYA",
        v_name="BOS",
        park_id="NYC21",
        h_score="3",
        v_score="3",
        day_night="N",
        winning_pitcher_id="NYA1",
        **lineup("h", "NYA"),
        **lineup("v", "BOS"),
    )
    # not listed in person codes
    g2["h_player_9_id"] = "ZZZ"
    return [g1, g2]


def person_codes_csv() -> str:
    ids = ["UMP1", "MGRV", "MGRH"] + [f"{t}{n}" for t in ("BOS", "NYA") for n in range(1, 10)]
    lines = ["id,last,first,player_debut,mgr_debut,coach_debut,ump_debut"]
    lines += [f"{pid},Last{pid},First{pid},,,," for pid in ids]
    return "\n".join(lines) + "\n"


def write_inputs(root, rows=None):
    """Write game log + reference CSVs under root; returns dict of paths."""
    paths = {
        "game_log": root / "game_log.csv",
        "park_codes": root / "park_codes.csv",
        "person_codes": root / "person_codes.csv",
        "team_codes": root / "team_codes.csv",
    }
    game_log(*(rows if rows is not None else sample_rows())).to_csv(paths["game_log"], index=False)
    paths["park_codes"].write_text(PARK_CODES, encoding="utf-8")
    paths["person_codes"].write_text(person_codes_csv(), encoding="utf-8")
    paths["team_codes"].write_text(TEAM_CODES, encoding="utf-8")
    return paths
