import pandas as pd

from gamelog_db.io.sources import load_appearance_types
from gamelog_db.normalize.reference import build_appearance_type, build_league, build_park, build_person


def test_league_names_from_distinct_team_league_codes():
    codes = pd.DataFrame({"league": ["NL", "AL", "NL", "FL", None, "PL"]})
    league, issues = build_league(codes)
    assert dict(zip(league["league_id"], league["name"])) == {
        "AL": "American League",
        "FL": "Federal League",
        "NL": "National League",
        "PL": "Player's League",
    }
    assert issues == []


def test_unknown_league_code_kept_with_null_name():
    league, issues = build_league(pd.DataFrame({"league": ["AL", "XL"]}))
    assert list(league["league_id"]) == ["AL", "XL"]
    assert league.loc[league["league_id"] == "XL", "name"].iloc[0] is None
    assert issues[0].kind == "unknown_league"
    assert issues[0].examples == ["XL"]


def test_person_projection():
    codes = pd.DataFrame({"id": ["aaroh101"], "last": ["Aaron"], "first": ["Hank"], "player_debut": ["04/13/1954"]})
    person = build_person(codes)
    assert person.to_dict("records") == [{"person_id": "aaroh101", "first_name": "Hank", "last_name": "Aaron"}]


def test_park_projection_drops_start_end():
    codes = pd.DataFrame(
        {
            "park_id": ["BOS07"],
            "name": ["Fenway Park I"],
            "aka": [None],
            "city": ["Boston"],
            "state": ["MA"],
            "start": ["04/20/1912"],
            "end": [None],
            "league": ["AL"],
            "notes": [None],
        }
    )
    park = build_park(codes)
    assert list(park.columns) == ["park_id", "name", "nickname", "city", "state", "notes"]


def test_appearance_type_enumeration_covers_all_roles():
    at = build_appearance_type(load_appearance_types())
    ids = set(at["appearance_type_id"])
    expected = {"UHP", "U1B", "U2B", "U3B", "ULF", "URF", "MM", "AWP", "ALP", "ASP", "AWB", "PSP"}
    expected |= {f"O{n}" for n in range(1, 10)} | {f"D{n}" for n in range(1, 10)}
    assert expected <= ids
    assert at["appearance_type_id"].is_unique
