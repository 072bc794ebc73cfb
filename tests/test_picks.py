import pytest

from pydynasty.models import PickValueEntry
from pydynasty.valuation.draft_capital import PickSlot, resolve_pick_ownership
from pydynasty.valuation.picks import (
    PickValueTable,
    pick_tier,
    strength_ranks,
    value_owned_picks,
    value_pick,
)


def test_first_round_tiers_follow_original_owner_strength():
    assert pick_tier(1, 12, 1) == "1.07-1.12"
    assert pick_tier(6, 12, 1) == "1.04-1.06"
    assert pick_tier(12, 12, 1) == "1.01-1.03"
    assert pick_tier(1, 10, 2) == "late"
    assert pick_tier(10, 10, 3) == "early"
    assert pick_tier(1, 10, 4) == "all"


def test_first_round_thirds_in_a_ten_team_league():
    tiers = [pick_tier(rank, 10, 1) for rank in range(1, 11)]

    assert tiers[:3] == ["1.07-1.12"] * 3
    assert tiers[3:6] == ["1.04-1.06"] * 3
    assert tiers[6:] == ["1.01-1.03"] * 4


def test_fallback_values_by_round_and_format():
    slot = PickSlot(1, 2025, 1)
    assert value_pick(slot, 1, strength_rank=1, total_rosters=10, current_year=2025).value == 55
    sf = value_pick(slot, 1, strength_rank=1, total_rosters=10, current_year=2025, superflex=True)
    assert sf.value == 75
    assert sf.value_source == "fallback"


@pytest.mark.parametrize("rnd", [1, 2, 3, 4])
def test_value_strictly_decreases_with_years_out(rnd):
    values = [
        value_pick(PickSlot(3, 2025 + offset, rnd), 3, strength_rank=5, total_rosters=10, current_year=2025).value
        for offset in range(4)
    ]
    assert values == sorted(values, reverse=True)
    assert len(set(values)) == 4


def test_table_lookup_with_discount_and_half_up_rounding():
    table = PickValueTable.from_entries([
        PickValueEntry(year=2026, round=1, tier="1.01-1.03", value_1qb=70, value_sf=90),
    ])
    pick = value_pick(
        PickSlot(10, 2026, 1),
        4,
        strength_rank=10,
        total_rosters=10,
        current_year=2025,
        table=table,
    )
    assert pick.tier == "1.01-1.03"
    assert pick.value_source == "table"
    # 70 x 0.85 = 59.5
    assert pick.value == 60


def test_weaker_teams_firsts_are_worth_more_with_a_tiered_table():
    table = PickValueTable.from_entries([
        PickValueEntry(year=2025, round=1, tier="1.01-1.03", value_1qb=80, value_sf=100),
        PickValueEntry(year=2025, round=1, tier="1.04-1.06", value_1qb=55, value_sf=70),
        PickValueEntry(year=2025, round=1, tier="1.07-1.12", value_1qb=35, value_sf=45),
    ])
    ranks = strength_ranks([(1, 300.0), (2, 200.0), (3, 100.0)])
    ownership = resolve_pick_ownership([1, 2, 3], [], season=2025, lookahead=0, rounds=(1,))

    valued = value_owned_picks(ownership, ranks, current_year=2025, table=table)

    assert ranks == {1: 1, 2: 2, 3: 3}
    assert valued[1][0].value < valued[2][0].value < valued[3][0].value


def test_strength_rank_ties_keep_roster_order():
    assert strength_ranks([(7, 50.0), (3, 50.0), (5, 80.0)]) == {5: 1, 7: 2, 3: 3}
