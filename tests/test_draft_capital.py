from pydynasty.models import TradeRecord
from pydynasty.valuation.draft_capital import (
    PickSlot,
    canonical_trade_order,
    resolve_pick_ownership,
    summarize_draft_capital,
    tracked_years,
)


ROSTERS = list(range(1, 11))


def test_baseline_ownership_without_trades():
    ownership = resolve_pick_ownership(ROSTERS, [], season=2025)
    summaries = summarize_draft_capital(ownership, ROSTERS)

    assert ownership.years == (2025, 2026, 2027)
    assert ownership.baseline_picks_created == 10 * 3 * 4
    for roster_id, summary in summaries.items():
        assert summary.total == 12
        assert all(slot.original_roster_id == roster_id for slot in summary.owned)
        assert summary.draft_cap_score == 3 * (3 + 2 + 1 + 0.5)


def test_sequential_trades_resolve_to_later_owner_regardless_of_list_order():
    first = TradeRecord(roster_id=1, season=2026, round=1, owner_id=2, timestamp=100)
    second = TradeRecord(roster_id=1, season=2026, round=1, owner_id=3, previous_owner_id=2, timestamp=200)

    for trades in ([first, second], [second, first]):
        ownership = resolve_pick_ownership(ROSTERS, trades, season=2025)
        assert ownership.owners[PickSlot(1, 2026, 1)] == 3


def test_untimestamped_records_apply_after_timestamped_in_caller_order():
    dated = TradeRecord(roster_id=4, season=2025, round=2, owner_id=5, timestamp=50)
    state_a = TradeRecord(roster_id=4, season=2025, round=2, owner_id=6)
    state_b = TradeRecord(roster_id=4, season=2025, round=2, owner_id=7)

    ordered = canonical_trade_order([state_a, dated, state_b])

    assert ordered == [dated, state_a, state_b]
    ownership = resolve_pick_ownership(ROSTERS, [state_a, dated, state_b], season=2025)
    assert ownership.owners[PickSlot(4, 2025, 2)] == 7


def test_invalid_trades_are_ignored_and_counted():
    trades = [
        TradeRecord(roster_id=1, season=2024, round=1, owner_id=2),
        TradeRecord(roster_id=1, season=2025, round=5, owner_id=2),
        TradeRecord(roster_id=99, season=2025, round=1, owner_id=2),
        TradeRecord(roster_id=1, season=2025, round=1, owner_id=42),
        TradeRecord(roster_id=1, season=2025, round=3, owner_id=2),
    ]

    ownership = resolve_pick_ownership(ROSTERS, trades, season=2025)

    assert ownership.trades_ignored == 4
    assert ownership.trades_applied == 1
    assert ownership.owners[PickSlot(1, 2025, 1)] == 1


def test_far_future_trade_extends_tracked_years():
    trade = TradeRecord(roster_id=2, season=2029, round=1, owner_id=3)

    assert tracked_years(2025, [trade]) == (2025, 2026, 2027, 2029)
    ownership = resolve_pick_ownership(ROSTERS, [trade], season=2025)
    summaries = summarize_draft_capital(ownership, ROSTERS)
    assert summaries[3].acquired_count == 1
    assert summaries[2].traded_away_count == 1
    assert summaries[3].future_firsts == 5
