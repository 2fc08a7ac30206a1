import pandas as pd
import pytest
from _gamelog import game_log, game_row, keyed

from gamelog_db.data.gamelog_schema import GAME_COLS
from gamelog_db.errors import DuplicateGameIdError
from gamelog_db.normalize.games import add_game_id, build_game, build_team, day_flag, ensure_unique_game_ids


def test_game_id_is_home_team_date_and_game_number():
    log = add_game_id(game_log(game_row(), game_row(number_of_game="2", h_name="CHN")))
    assert list(log["game_id"]) == ["BOS201604010", "CHN201604012"]
    assert log.columns[0] == "game_id"


def test_duplicate_game_id_is_fatal():
    log = keyed(game_row(), game_row(), game_row(date="20160402"))
    with pytest.raises(DuplicateGameIdError) as exc:
        ensure_unique_game_ids(log)
    assert exc.value.game_ids == ["BOS201604010"]


def test_doubleheader_games_are_distinct():
    log = keyed(game_row(number_of_game="1"), game_row(number_of_game="2"))
    ensure_unique_game_ids(log)


def test_day_flag():
    flags = day_flag(pd.Series(["D", "N", None, "d"]))
    assert flags.tolist() == [True, False, None, True]


def test_build_game_keeps_game_scoped_columns():
    row = game_row(attendance="32000", length_minutes="181", forefeit="H", completion=None, day_night="N")
    game = build_game(keyed(row))
    assert list(game.columns) == GAME_COLS
    assert "day_of_week" not in game.columns
    g = game.iloc[0]
    assert g["game_id"] == "BOS201604010"
    assert game["day"].tolist() == [False]
    assert g["forfeit"] == "H"
    assert g["attendance"] == 32000
    assert g["number_of_game"] == 0
    assert g["park_id"] == "BOS07"


def test_build_team_projects_team_codes():
    codes = pd.DataFrame(
        {
            "team_id": ["BOS", "NYA", "BOS"],
            "league": ["AL", "AL", "AL"],
            "start": ["1901", "1903", "1901"],
            "end": [None, None, None],
            "city": ["Boston", "New York", "Boston"],
            "nickname": ["Red Sox", "Yankees", "Red Sox"],
            "franch_id": ["BOS", "NYA", "BOS"],
            "seq": ["1", "1", "2"],
        }
    )
    team, issues = build_team(codes)
    assert list(team.columns) == ["team_id", "league_id", "city", "nickname", "franchise_id"]
    assert list(team["team_id"]) == ["BOS", "NYA"]
    assert [i.kind for i in issues] == ["duplicate_team"]


def test_non_whole_numbers_become_missing():
    game = build_game(keyed(game_row(attendance="1234.5", length_minutes="181.0")))
    assert pd.isna(game.iloc[0]["attendance"])
    assert game.iloc[0]["length_minutes"] == 181
