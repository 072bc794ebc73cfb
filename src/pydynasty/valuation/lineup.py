"""Greedy starting lineup construction under slot eligibility rules."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from pydynasty.config import eligible_positions, starter_slots
from pydynasty.models import RosteredPlayer


@dataclass(frozen=True)
class LineupAssignment:
    slot: str
    player: Optional[RosteredPlayer]

    @property
    def value(self) -> float:
        return self.player.value if self.player else 0.0


@dataclass(frozen=True)
class LineupResult:
    starters: Tuple[LineupAssignment, ...]
    starters_value: float
    bench: Tuple[RosteredPlayer, ...]
    bench_value: float

    @property
    def starter_ids(self) -> frozenset[str]:
        return frozenset(a.player.player_id for a in self.starters if a.player is not None)

    @property
    def total_value(self) -> float:
        return self.starters_value + self.bench_value

    @property
    def unfilled_slots(self) -> Tuple[str, ...]:
        return tuple(a.slot for a in self.starters if a.player is None)


def build_lineup(players: Sequence[RosteredPlayer], roster_positions: Sequence[str]) -> LineupResult:
    """Assign the best remaining eligible player to each starter slot.

    Slots are filled in the league's declared order, not by scarcity. This is
    a greedy approximation: when eligibility sets overlap, a flex slot listed
    before a dedicated slot can take the player the dedicated slot needed.
    Equal values keep roster order.
    """

    slots = starter_slots(roster_positions)
    pool: List[RosteredPlayer] = sorted(players, key=lambda p: p.value, reverse=True)

    assignments: List[LineupAssignment] = []
    for slot in slots:
        eligible = eligible_positions(slot)
        pick_index = None
        for idx, player in enumerate(pool):
            if player.position in eligible:
                pick_index = idx
                break
        if pick_index is None:
            assignments.append(LineupAssignment(slot=slot, player=None))
            continue
        assignments.append(LineupAssignment(slot=slot, player=pool.pop(pick_index)))

    starter_ids = {a.player.player_id for a in assignments if a.player is not None}
    bench = tuple(p for p in players if p.player_id not in starter_ids)
    return LineupResult(
        starters=tuple(assignments),
        starters_value=sum(a.value for a in assignments),
        bench=bench,
        bench_value=sum(p.value for p in bench),
    )
