"""Contention window scoring from value-weighted position ages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from pydynasty.config import SKILL_POSITIONS
from pydynasty.models import RosteredPlayer

from .age_curves import NEUTRAL_SCORE, age_curve_status, curve_for, team_age_score


@dataclass(frozen=True)
class PositionWindow:
    position: str
    avg_age: Optional[float]
    score: float
    in_prime: bool
    prime_years_left: float
    players: int


@dataclass(frozen=True)
class WindowResult:
    score: float
    by_position: Tuple[PositionWindow, ...]

    @property
    def avg_prime_years_left(self) -> float:
        if not self.by_position:
            return 0.0
        return sum(p.prime_years_left for p in self.by_position) / len(self.by_position)


@dataclass(frozen=True)
class CoreAsset:
    player_id: str
    full_name: str
    position: str
    value: float
    age: Optional[float]
    zone: str
    age_score: float
    age_label: str


def weighted_average_age(players: Sequence[RosteredPlayer]) -> Optional[float]:
    """Value-weighted mean age; uniform weights when every player is worthless.

    Players without an age are skipped.
    """

    aged = [p for p in players if p.age is not None]
    if not aged:
        return None
    total_value = sum(p.value for p in aged)
    if total_value > 0:
        return sum(p.age * p.value for p in aged) / total_value  # type: ignore[operator]
    return sum(p.age for p in aged) / len(aged)  # type: ignore[misc]


def score_position(players: Sequence[RosteredPlayer], position: str) -> PositionWindow:
    at_position = [p for p in players if p.position == position]
    avg_age = weighted_average_age(at_position)
    if avg_age is None:
        return PositionWindow(
            position=position,
            avg_age=None,
            score=NEUTRAL_SCORE,
            in_prime=False,
            prime_years_left=0.0,
            players=len(at_position),
        )
    curve = curve_for(position)
    return PositionWindow(
        position=position,
        avg_age=round(avg_age, 1),
        score=curve.score(avg_age),
        in_prime=curve.in_prime(avg_age),
        prime_years_left=round(curve.prime_years_left(avg_age), 1),
        players=len(at_position),
    )


def score_window(players: Sequence[RosteredPlayer]) -> WindowResult:
    """Score every rostered player, starters and bench alike."""

    by_position = tuple(score_position(players, position) for position in SKILL_POSITIONS)
    overall = sum(p.score for p in by_position) / len(by_position)
    return WindowResult(score=overall, by_position=by_position)


def score_team_age(players: Sequence[RosteredPlayer]) -> float:
    valued = [p for p in players if p.value > 0]
    return team_age_score(weighted_average_age(valued))


def _core_asset(player: RosteredPlayer) -> CoreAsset:
    status = age_curve_status(player.position, player.age)
    return CoreAsset(
        player_id=player.player_id,
        full_name=player.full_name,
        position=player.position,
        value=player.value,
        age=player.age,
        zone=status.zone,
        age_score=status.score,
        age_label=status.label,
    )


def select_core_assets(players: Sequence[RosteredPlayer], starters_count: int) -> Tuple[CoreAsset, ...]:
    core_n = min(12, starters_count + 3)
    ordered = sorted(players, key=lambda p: p.value, reverse=True)[:core_n]
    return tuple(_core_asset(p) for p in ordered)
