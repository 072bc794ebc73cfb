import pytest

from pydynasty.valuation.lineup import build_lineup
from pydynasty.valuation.needs import compute_needs, depth_score, match_trades, slot_needs, weakest_slot

from .league_factory import player


SLOTS = ["QB", "RB", "RB", "WR", "WR", "TE", "FLEX", "BN", "BN"]


def _team_a():
    return (
        [player("a-qb1", "QB", 60)]
        + [player(f"a-rb{i}", "RB", v) for i, v in enumerate((80, 70, 60, 50, 40, 30, 20, 10), start=1)]
        + [player(f"a-wr{i}", "WR", v) for i, v in enumerate((50, 45, 40, 35, 30), start=1)]
        + [player(f"a-te{i}", "TE", v) for i, v in enumerate((20, 15, 10), start=1)]
    )


def _team_b():
    return (
        [player(f"b-qb{i}", "QB", v) for i, v in enumerate((70, 60, 50, 40, 30), start=1)]
        + [player(f"b-rb{i}", "RB", v) for i, v in enumerate((45, 35), start=1)]
        + [player(f"b-wr{i}", "WR", v) for i, v in enumerate((50, 40, 30, 20, 10), start=1)]
        + [player(f"b-te{i}", "TE", v) for i, v in enumerate((25, 20, 15, 10), start=1)]
    )


def _needs(roster_id, players):
    lineup = build_lineup(players, SLOTS)
    return compute_needs(roster_id, players, lineup, SLOTS)


def test_flex_slots_spread_fractional_need():
    needed = slot_needs(["QB", "RB", "FLEX", "SUPER_FLEX", "K"])

    assert needed["QB"] == pytest.approx(1.25)
    assert needed["RB"] == pytest.approx(1 + 1 / 3 + 0.25)
    assert needed["TE"] == pytest.approx(1 / 3 + 0.25)


def test_shallow_and_surplus_positions():
    needs_a = _needs(1, _team_a())
    needs_b = _needs(2, _team_b())

    assert needs_a.shallow == ("QB", "TE")
    assert needs_a.surplus == ("RB",)
    assert [p.player_id for p in needs_a.surplus_players] == ["a-rb4", "a-rb5", "a-rb6"]
    assert needs_b.shallow == ("RB",)
    assert needs_b.surplus == ("QB",)
    assert [p.player_id for p in needs_b.surplus_players] == ["b-qb2", "b-qb3", "b-qb4"]


def test_matches_pair_surplus_with_partner_need_and_reciprocal():
    matches = match_trades([_needs(1, _team_a()), _needs(2, _team_b())])

    from_a = matches[1]
    assert [m.player.player_id for m in from_a] == ["a-rb4", "a-rb5", "a-rb6"]
    assert all(m.to_roster_id == 2 for m in from_a)
    assert from_a[0].reciprocal.player_id == "b-qb2"
    assert matches[2][0].reciprocal.player_id == "a-rb4"


def test_matches_are_capped():
    matches = match_trades([_needs(1, _team_a()), _needs(2, _team_b())], limit=2)
    assert len(matches[1]) == 2
    assert len(matches[2]) == 2


def test_weakest_slot_is_lowest_best_eligible_value():
    needs_a = _needs(1, _team_a())

    assert needs_a.weakest_slot == "TE"
    assert weakest_slot([player("q", "QB", 50)], ["QB", "WR", "TE"]) == "WR"


def test_depth_score_counts_startable_bench():
    score = _needs(1, _team_a()).depth_score

    # starters 60/80/70/50/45/20/60: avg 55, min 20; all ten bench players clear 10
    assert score.startable_bench == 10
    assert score.starter_quality == pytest.approx(5.5)
    assert score.bench_depth == 100.0
    assert score.fragility == pytest.approx(31.8)
    assert score.overall == pytest.approx(55.8)


def test_depth_score_treats_unfilled_slot_as_zero():
    lineup = build_lineup([player("q", "QB", 50)], ["QB", "TE"])

    score = depth_score(lineup)

    assert (score.starter_quality, score.bench_depth, score.fragility) == (2.5, 0.0, 100.0)
    assert score.overall == pytest.approx(1.0)
