"""Resolve current draft pick ownership from traded pick records."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Sequence, Tuple

from pydynasty.models import TradeRecord


logger = logging.getLogger(__name__)

DEFAULT_LOOKAHEAD_YEARS = 2
TRACKED_ROUNDS: Tuple[int, ...] = (1, 2, 3, 4)

# r1 x 3 + r2 x 2 + r3 x 1 + r4 x 0.5
_ROUND_WEIGHTS: Mapping[int, float] = {1: 3.0, 2: 2.0, 3: 1.0, 4: 0.5}


@dataclass(frozen=True, order=True)
class PickSlot:
    """Logical pick identified by its original owner, season and round."""

    original_roster_id: int
    year: int
    round: int


@dataclass(frozen=True)
class PickOwnership:
    years: Tuple[int, ...]
    rounds: Tuple[int, ...]
    owners: Mapping[PickSlot, int]
    baseline_picks_created: int
    trades_applied: int
    trades_ignored: int

    def owned_by(self, roster_id: int) -> List[PickSlot]:
        return sorted(slot for slot, owner in self.owners.items() if owner == roster_id)


@dataclass(frozen=True)
class DraftCapitalSummary:
    roster_id: int
    picks_by_year: Dict[int, Dict[int, int]]
    totals: Dict[int, int]
    total: int
    draft_cap_score: float
    future_firsts: int
    acquired_count: int
    traded_away_count: int
    owned: Tuple[PickSlot, ...] = field(default_factory=tuple)


def tracked_years(
    season: int,
    trades: Iterable[TradeRecord] = (),
    lookahead: int = DEFAULT_LOOKAHEAD_YEARS,
) -> Tuple[int, ...]:
    """Current season through the lookahead horizon, plus any later traded year."""

    years = {season + offset for offset in range(max(0, lookahead) + 1)}
    years.update(trade.season for trade in trades if trade.season >= season)
    return tuple(sorted(years))


def canonical_trade_order(trades: Sequence[TradeRecord]) -> List[TradeRecord]:
    """Order trades for application.

    Timestamped records are applied chronologically. Records without a
    timestamp are current-state declarations and are applied after them, in
    caller order. Both sorts are stable, so duplicates resolve to the last
    record in caller order.
    """

    indexed = list(enumerate(trades))
    indexed.sort(
        key=lambda item: (
            item[1].timestamp is None,
            item[1].timestamp if item[1].timestamp is not None else 0,
            item[0],
        )
    )
    return [trade for _, trade in indexed]


def resolve_pick_ownership(
    roster_ids: Sequence[int],
    trades: Sequence[TradeRecord],
    *,
    season: int,
    lookahead: int = DEFAULT_LOOKAHEAD_YEARS,
    rounds: Sequence[int] = TRACKED_ROUNDS,
) -> PickOwnership:
    """Apply traded pick records over baseline ownership.

    Every (roster, year, round) slot starts owned by its original roster.
    Each trade overwrites the owner of the slot keyed by its original owner;
    the last applied record wins.
    """

    roster_set = set(roster_ids)
    years = tracked_years(season, trades, lookahead)
    year_set = set(years)
    round_set = set(rounds)

    owners: Dict[PickSlot, int] = {}
    for roster_id in roster_ids:
        for year in years:
            for rnd in rounds:
                owners[PickSlot(roster_id, year, rnd)] = roster_id
    baseline = len(owners)

    applied = 0
    ignored = 0
    for trade in canonical_trade_order(trades):
        if trade.season not in year_set or trade.round not in round_set:
            ignored += 1
            logger.debug(
                "Ignoring traded pick %s/%s round %s outside tracked window",
                trade.roster_id,
                trade.season,
                trade.round,
            )
            continue
        if trade.roster_id not in roster_set or trade.owner_id not in roster_set:
            ignored += 1
            logger.debug(
                "Dropping traded pick %s/%s round %s referencing unknown roster (owner %s)",
                trade.roster_id,
                trade.season,
                trade.round,
                trade.owner_id,
            )
            continue
        owners[PickSlot(trade.roster_id, trade.season, trade.round)] = trade.owner_id
        applied += 1

    return PickOwnership(
        years=years,
        rounds=tuple(rounds),
        owners=owners,
        baseline_picks_created=baseline,
        trades_applied=applied,
        trades_ignored=ignored,
    )


def summarize_draft_capital(ownership: PickOwnership, roster_ids: Sequence[int]) -> Dict[int, DraftCapitalSummary]:
    """Count owned picks per roster by year and round."""

    summaries: Dict[int, DraftCapitalSummary] = {}
    for roster_id in roster_ids:
        owned = ownership.owned_by(roster_id)
        picks_by_year = {year: {rnd: 0 for rnd in ownership.rounds} for year in ownership.years}
        for slot in owned:
            picks_by_year[slot.year][slot.round] += 1
        totals = {rnd: sum(picks_by_year[year][rnd] for year in ownership.years) for rnd in ownership.rounds}
        acquired = sum(1 for slot in owned if slot.original_roster_id != roster_id)
        traded_away = sum(
            1
            for slot, owner in ownership.owners.items()
            if slot.original_roster_id == roster_id and owner != roster_id
        )
        summaries[roster_id] = DraftCapitalSummary(
            roster_id=roster_id,
            picks_by_year=picks_by_year,
            totals=totals,
            total=len(owned),
            draft_cap_score=sum(_ROUND_WEIGHTS.get(rnd, 0.0) * count for rnd, count in totals.items()),
            future_firsts=totals.get(1, 0),
            acquired_count=acquired,
            traded_away_count=traded_away,
            owned=tuple(owned),
        )
    return summaries
