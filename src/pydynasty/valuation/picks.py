"""Tiered, time-discounted draft pick valuation."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Literal, Mapping, Optional, Sequence, Tuple

from pydynasty.models import PickValueEntry

from .draft_capital import PickOwnership, PickSlot


ValueSource = Literal["table", "fallback"]

# round -> (1QB, superflex)
FALLBACK_PICK_VALUES: Mapping[int, Tuple[float, float]] = {
    1: (55.0, 75.0),
    2: (30.0, 40.0),
    3: (15.0, 20.0),
    4: (7.0, 10.0),
}

YEAR_DISCOUNTS: Tuple[float, ...] = (1.00, 0.85, 0.72, 0.62)

TIER_EARLY_FIRST = "1.01-1.03"
TIER_MID_FIRST = "1.04-1.06"
TIER_LATE_FIRST = "1.07-1.12"
TIER_EARLY = "early"
TIER_LATE = "late"
TIER_ALL = "all"


@dataclass(frozen=True)
class PickValueTable:
    """Pick values keyed by (year, round, tier) with 1QB and SF columns."""

    entries: Mapping[Tuple[int, int, str], Tuple[float, float]]

    @classmethod
    def from_entries(cls, entries: Iterable[PickValueEntry] | None) -> "PickValueTable":
        table: Dict[Tuple[int, int, str], Tuple[float, float]] = {}
        for entry in entries or ():
            table[(entry.year, entry.round, entry.tier)] = (entry.value_1qb, entry.value_sf)
        return cls(entries=table)

    def lookup(self, year: int, rnd: int, tier: str, *, superflex: bool) -> Optional[float]:
        row = self.entries.get((year, rnd, tier))
        if row is None:
            return None
        return row[1] if superflex else row[0]

    def __len__(self) -> int:
        return len(self.entries)


EMPTY_TABLE = PickValueTable(entries={})


@dataclass(frozen=True)
class ValuedPick:
    slot: PickSlot
    owner_roster_id: int
    strength_rank: int
    tier: str
    value: int
    value_source: ValueSource
    years_out: int

    @property
    def year(self) -> int:
        return self.slot.year

    @property
    def round(self) -> int:
        return self.slot.round

    @property
    def original_roster_id(self) -> int:
        return self.slot.original_roster_id


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def pick_tier(strength_rank: int, total_rosters: int, rnd: int) -> str:
    """Tier a pick by its original owner's strength rank (1 = strongest).

    Strong teams pick late, so their firsts land in the late tier and weaker
    teams' firsts in the early (more valuable) tier.
    """

    if rnd >= 4:
        return TIER_ALL
    total = max(total_rosters, 1)
    if rnd == 1:
        if strength_rank * 3 <= total:
            return TIER_LATE_FIRST
        if strength_rank * 3 > 2 * total:
            return TIER_EARLY_FIRST
        return TIER_MID_FIRST
    half = math.ceil(total / 2)
    return TIER_LATE if strength_rank <= half else TIER_EARLY


def year_discount(years_out: int) -> float:
    index = min(max(years_out, 0), len(YEAR_DISCOUNTS) - 1)
    return YEAR_DISCOUNTS[index]


def fallback_value(rnd: int, *, superflex: bool) -> float:
    base = FALLBACK_PICK_VALUES.get(min(rnd, 4), FALLBACK_PICK_VALUES[4])
    return base[1] if superflex else base[0]


def value_pick(
    slot: PickSlot,
    owner_roster_id: int,
    *,
    strength_rank: int,
    total_rosters: int,
    current_year: int,
    table: PickValueTable = EMPTY_TABLE,
    superflex: bool = False,
) -> ValuedPick:
    """Value one owned pick; missing table rows fall back to per-round bases."""

    tier = pick_tier(strength_rank, total_rosters, slot.round)
    lookup_round = min(slot.round, 4)
    base = table.lookup(slot.year, lookup_round, tier, superflex=superflex)
    source: ValueSource = "table"
    if base is None:
        base = fallback_value(slot.round, superflex=superflex)
        source = "fallback"

    years_out = min(max(slot.year - current_year, 0), len(YEAR_DISCOUNTS) - 1)
    return ValuedPick(
        slot=slot,
        owner_roster_id=owner_roster_id,
        strength_rank=strength_rank,
        tier=tier,
        value=_round_half_up(base * year_discount(years_out)),
        value_source=source,
        years_out=years_out,
    )


def strength_ranks(values_by_roster: Sequence[Tuple[int, float]]) -> Dict[int, int]:
    """Rank rosters by value, 1 = strongest; ties keep the given order."""

    ordered = sorted(enumerate(values_by_roster), key=lambda item: (-item[1][1], item[0]))
    return {roster_id: rank for rank, (_, (roster_id, _value)) in enumerate(ordered, start=1)}


def value_owned_picks(
    ownership: PickOwnership,
    ranks: Mapping[int, int],
    *,
    current_year: int,
    table: PickValueTable = EMPTY_TABLE,
    superflex: bool = False,
) -> Dict[int, List[ValuedPick]]:
    """Value every owned slot, grouped by current owner."""

    total_rosters = len(ranks)
    default_rank = math.ceil(max(total_rosters, 1) / 2)
    by_owner: Dict[int, List[ValuedPick]] = {roster_id: [] for roster_id in ranks}
    for slot in sorted(ownership.owners):
        owner = ownership.owners[slot]
        valued = value_pick(
            slot,
            owner,
            strength_rank=ranks.get(slot.original_roster_id, default_rank),
            total_rosters=total_rosters,
            current_year=current_year,
            table=table,
            superflex=superflex,
        )
        by_owner.setdefault(owner, []).append(valued)
    return by_owner
