from _gamelog import game_row, keyed

from gamelog_db.data.gamelog_schema import TEAM_APPEARANCE_COLS
from gamelog_db.normalize.pivot import build_team_appearance


def test_two_rows_per_game_home_and_visitor():
    log = keyed(game_row(), game_row(date="20160402", h_name="NYA", v_name="BOS"))
    ta = build_team_appearance(log)
    assert list(ta.columns) == TEAM_APPEARANCE_COLS
    for game_id, grp in ta.groupby("game_id"):
        assert len(grp) == 2
        assert sorted(grp["home"].tolist()) == [False, True]
        assert grp["team_id"].nunique() == 2


def test_side_columns_land_on_shared_layout():
    row = game_row(h_hits="10", v_hits="7", h_line_score="010200110", v_line_score="000020000", h_errors="1")
    ta = build_team_appearance(keyed(row))
    home = ta[ta["home"]].iloc[0]
    away = ta[~ta["home"]].iloc[0]
    assert (home["team_id"], home["hits"], home["line_score"], home["errors"]) == ("BOS", 10, "010200110", 1)
    assert (away["team_id"], away["hits"], away["line_score"]) == ("NYA", 7, "000020000")
    assert home["league_id"] == "AL"


def test_scores_round_trip():
    row = game_row(h_score="5", v_score="2")
    ta = build_team_appearance(keyed(row))
    by_side = dict(zip(ta["home"], ta["score"]))
    assert (by_side[True], by_side[False]) == (5, 2)
    assert int(ta["score"].sum()) == 7


def test_repeated_source_rows_are_deduplicated():
    ta = build_team_appearance(keyed(game_row(), game_row()))
    assert len(ta) == 2
