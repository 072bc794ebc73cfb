"""Positional depth needs, surplus detection, and cross-team trade matching."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from pydynasty.config import SKILL_POSITIONS, eligible_positions, starter_slots
from pydynasty.models import RosteredPlayer

from .lineup import LineupResult
from .ranking import round_half_up


DEPTH_BUFFER: Mapping[str, int] = {"QB": 1, "RB": 2, "WR": 2, "TE": 2}
SURPLUS_MARGIN = 2
DEFAULT_MATCH_LIMIT = 10
STARTABLE_FRACTION = 0.5


@dataclass(frozen=True)
class PositionDepth:
    position: str
    count: int
    needed: float
    target: float
    shallow: bool
    surplus: bool


@dataclass(frozen=True)
class DepthScore:
    overall: float
    starter_quality: float
    bench_depth: float
    fragility: float
    startable_bench: int


@dataclass(frozen=True)
class TeamNeeds:
    roster_id: int
    depth: Tuple[PositionDepth, ...]
    surplus_players: Tuple[RosteredPlayer, ...]
    weakest_slot: Optional[str]
    depth_score: DepthScore

    @property
    def shallow(self) -> Tuple[str, ...]:
        return tuple(d.position for d in self.depth if d.shallow)

    @property
    def surplus(self) -> Tuple[str, ...]:
        return tuple(d.position for d in self.depth if d.surplus)


@dataclass(frozen=True)
class TradeMatch:
    from_roster_id: int
    to_roster_id: int
    player: RosteredPlayer
    reciprocal: Optional[RosteredPlayer] = None


def slot_needs(roster_positions: Sequence[str]) -> Dict[str, float]:
    """Starter demand per skill position; a slot spreads 1/k over its k positions."""

    needed = {position: 0.0 for position in SKILL_POSITIONS}
    for slot in starter_slots(roster_positions):
        accepted = [p for p in SKILL_POSITIONS if p in eligible_positions(slot)]
        if not accepted:
            continue
        share = 1.0 / len(accepted)
        for position in accepted:
            needed[position] += share
    return needed


def weakest_slot(players: Sequence[RosteredPlayer], roster_positions: Sequence[str]) -> Optional[str]:
    """Starter slot whose best eligible rostered player is worth the least.

    Ties go to the slot declared first.
    """

    weakest: Optional[str] = None
    lowest = math.inf
    for slot in starter_slots(roster_positions):
        eligible = eligible_positions(slot)
        best = max((p.value for p in players if p.position in eligible), default=0.0)
        if best < lowest:
            lowest = best
            weakest = slot
    return weakest


def _clamp(value: float) -> float:
    return min(100.0, max(0.0, value))


def depth_score(lineup: LineupResult) -> DepthScore:
    """Starter quality, startable bench depth and fragility on a 0-100 scale.

    Unfilled starter slots count as zero-value starters. A bench player is
    startable when worth at least half of the weakest starter.
    """

    starter_values = [assignment.value for assignment in lineup.starters]
    avg_starter = sum(starter_values) / len(starter_values) if starter_values else 0.0
    min_starter = min(starter_values) if starter_values else 0.0
    starter_quality = min(100.0, avg_starter / 10.0)

    threshold = min_starter * STARTABLE_FRACTION
    startable = sum(1 for p in lineup.bench if p.value > 0 and p.value >= threshold)
    bench_depth = min(100.0, startable * 15.0)

    spread = min_starter / avg_starter if avg_starter > 0 else 0.0
    fragility = 100.0 - (spread * 50.0 + bench_depth * 0.5)
    overall = starter_quality * 0.4 + bench_depth * 0.4 + (100.0 - fragility) * 0.2
    return DepthScore(
        overall=round_half_up(_clamp(overall)),
        starter_quality=round_half_up(_clamp(starter_quality)),
        bench_depth=round_half_up(_clamp(bench_depth)),
        fragility=round_half_up(_clamp(fragility)),
        startable_bench=startable,
    )


def compute_needs(
    roster_id: int,
    players: Sequence[RosteredPlayer],
    lineup: LineupResult,
    roster_positions: Sequence[str],
) -> TeamNeeds:
    needed = slot_needs(roster_positions)
    bench = lineup.bench
    depth: List[PositionDepth] = []
    surplus_players: List[RosteredPlayer] = []
    for position in SKILL_POSITIONS:
        count = sum(1 for p in players if p.position == position)
        target = needed[position] + DEPTH_BUFFER[position]
        is_surplus = count > target + SURPLUS_MARGIN
        depth.append(
            PositionDepth(
                position=position,
                count=count,
                needed=round(needed[position], 3),
                target=round(target, 3),
                shallow=count < target,
                surplus=is_surplus,
            )
        )
        if is_surplus:
            excess = count - math.ceil(target)
            candidates = sorted(
                (p for p in bench if p.position == position),
                key=lambda p: p.value,
                reverse=True,
            )
            surplus_players.extend(candidates[:excess])
    return TeamNeeds(
        roster_id=roster_id,
        depth=tuple(depth),
        surplus_players=tuple(surplus_players),
        weakest_slot=weakest_slot(players, roster_positions),
        depth_score=depth_score(lineup),
    )


def _reciprocal_asset(partner: TeamNeeds, wanted_positions: Sequence[str]) -> Optional[RosteredPlayer]:
    offers = [p for p in partner.surplus_players if p.position in wanted_positions]
    if not offers:
        return None
    return max(offers, key=lambda p: p.value)


def match_trades(
    needs: Sequence[TeamNeeds],
    *,
    limit: int = DEFAULT_MATCH_LIMIT,
) -> Dict[int, List[TradeMatch]]:
    """Suggest surplus-for-need swaps for every team, best player value first."""

    matches: Dict[int, List[TradeMatch]] = {}
    for team in needs:
        found: List[TradeMatch] = []
        wanted = team.shallow
        for player in team.surplus_players:
            for other in needs:
                if other.roster_id == team.roster_id:
                    continue
                if player.position not in other.shallow:
                    continue
                found.append(
                    TradeMatch(
                        from_roster_id=team.roster_id,
                        to_roster_id=other.roster_id,
                        player=player,
                        reciprocal=_reciprocal_asset(other, wanted),
                    )
                )
        found.sort(key=lambda match: match.player.value, reverse=True)
        matches[team.roster_id] = found[: max(limit, 0)]
    return matches
