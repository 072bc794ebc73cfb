import pytest
from pydantic import ValidationError

from pydynasty.config import LeagueFormat
from pydynasty.models import PlayerInfo, RosteredPlayer
from pydynasty.valuation.players import build_rostered_players, coverage_pct, lookup_value


def test_rostered_player_is_frozen():
    record = RosteredPlayer(
        player_id="p1",
        full_name="Test Player",
        position="WR",
        age=24,
        value=40.0,
        has_value=True,
    )

    assert record.player_id == "p1"

    with pytest.raises((TypeError, ValidationError)):
        record.value = 10.0  # type: ignore[attr-defined]


def test_format_selects_value_column():
    qb = PlayerInfo(player_id="q", position="QB", trade_value_std=40, trade_value_sf=70)
    te = PlayerInfo(player_id="t", position="TE", trade_value_std=20, trade_value_tep=28)

    assert lookup_value(qb, LeagueFormat()).value == 40
    assert lookup_value(qb, LeagueFormat(superflex=True)).value == 70
    assert lookup_value(te, LeagueFormat(tep=True)).value == 28
    assert lookup_value(te, LeagueFormat(superflex=True)).value == 20


def test_missing_values_stay_rostered_at_zero():
    players = {
        "a": PlayerInfo(player_id="a", full_name="Has Value", position="RB", age=23, trade_value_std=30),
        "b": PlayerInfo(player_id="b", full_name="No Value", position="WR"),
    }

    rostered = build_rostered_players(["a", "b", "ghost", "a"], players, LeagueFormat())

    assert [p.player_id for p in rostered] == ["a", "b", "ghost"]
    assert rostered[1].value == 0 and not rostered[1].has_value
    assert rostered[2].position == "FLEX"
    assert coverage_pct(rostered) == pytest.approx(33.3)
    assert coverage_pct([]) is None
