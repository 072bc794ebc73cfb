"""Per-position age curves used by the window and age scorers."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Literal, Mapping, Optional, Tuple


AgeZone = Literal["ascent", "prime", "decline", "cliff", "unknown"]

NEUTRAL_SCORE = 50.0
_PRE_PRIME_FLOOR = 70.0
_PRE_PRIME_SLOPE = 3.0
_PRIME_SCORE = 90.0
_POST_PRIME_SLOPE = 10.0
_POST_PRIME_FLOOR = 10.0


@dataclass(frozen=True)
class PositionCurve:
    position: str
    prime_start: int
    prime_end: int

    def in_prime(self, age: float) -> bool:
        return self.prime_start <= age <= self.prime_end

    def prime_years_left(self, age: float) -> float:
        return max(0.0, self.prime_end - age)

    def score(self, age: float) -> float:
        """Map an (average) age to a 0-100 window score.

        Before prime the score climbs toward the prime level as the age
        approaches ``prime_start``; inside the window it is flat; afterwards it
        decays to a floor.
        """

        if age < self.prime_start:
            score = max(_PRE_PRIME_FLOOR, _PRIME_SCORE - (self.prime_start - age) * _PRE_PRIME_SLOPE)
        elif age <= self.prime_end:
            score = _PRIME_SCORE
        else:
            score = max(_POST_PRIME_FLOOR, _PRIME_SCORE - (age - self.prime_end) * _POST_PRIME_SLOPE)
        return min(100.0, max(0.0, score))


POSITION_CURVES: Dict[str, PositionCurve] = {
    "QB": PositionCurve("QB", prime_start=27, prime_end=33),
    "RB": PositionCurve("RB", prime_start=23, prime_end=26),
    "WR": PositionCurve("WR", prime_start=24, prime_end=29),
    "TE": PositionCurve("TE", prime_start=25, prime_end=30),
}

_GENERIC_CURVE = PositionCurve("*", prime_start=24, prime_end=30)


def curve_for(position: str) -> PositionCurve:
    return POSITION_CURVES.get(position.upper(), _GENERIC_CURVE)


def team_age_score(weighted_age: Optional[float]) -> float:
    """Younger is better: 22 maps to 100, 30 maps to 0."""

    if weighted_age is None:
        return NEUTRAL_SCORE
    return max(0.0, min(100.0, (30.0 - weighted_age) * 12.5))


# Per-player dynasty age tables. Each position lists a score and zone per
# whole age; ages at or past the cliff age take the cliff score.


@dataclass(frozen=True)
class AgeTable:
    prime_start: int
    prime_end: int
    cliff_age: int
    cliff_score: float
    by_age: Mapping[int, Tuple[float, AgeZone]]

    @property
    def prime_label(self) -> str:
        return f"Prime ({self.prime_start}-{self.prime_end})"


def _table(
    prime: Tuple[int, int],
    cliff: Tuple[int, float],
    ascent: Mapping[int, float],
    decline: Mapping[int, float],
) -> AgeTable:
    by_age: Dict[int, Tuple[float, AgeZone]] = {age: (score, "ascent") for age, score in ascent.items()}
    by_age.update({age: (100.0, "prime") for age in range(prime[0], prime[1] + 1)})
    by_age.update({age: (score, "decline") for age, score in decline.items()})
    return AgeTable(
        prime_start=prime[0],
        prime_end=prime[1],
        cliff_age=cliff[0],
        cliff_score=cliff[1],
        by_age=by_age,
    )


AGE_TABLES: Dict[str, AgeTable] = {
    "RB": _table((23, 26), (29, 45.0), {20: 60, 21: 75, 22: 90}, {27: 85, 28: 70}),
    "WR": _table((24, 28), (32, 45.0), {21: 70, 22: 80, 23: 90}, {29: 85, 30: 85, 31: 70}),
    "TE": _table((25, 30), (33, 45.0), {21: 60, 22: 70, 23: 80, 24: 85}, {31: 80, 32: 80}),
    "QB": _table((26, 33), (37, 55.0), {21: 70, 22: 75, 23: 80, 24: 85, 25: 90}, {34: 85, 35: 85, 36: 85}),
}


@dataclass(frozen=True)
class AgeCurveStatus:
    position: str
    age: Optional[float]
    score: float
    zone: AgeZone
    label: str
    prime_start: Optional[int]
    prime_end: Optional[int]


def age_curve_status(position: str, age: Optional[float]) -> AgeCurveStatus:
    """Place one player on their position's dynasty age curve.

    Fractional ages use the whole year they are in. Unknown positions and
    missing ages score 0 in the ``unknown`` zone.
    """

    normalized = (position or "").upper()
    table = AGE_TABLES.get(normalized)
    if table is None or age is None or not math.isfinite(age):
        return AgeCurveStatus(normalized, age, 0.0, "unknown", "Unknown", None, None)

    year = int(math.floor(age))
    youngest = min(table.by_age)
    zone: AgeZone
    if year >= table.cliff_age:
        score, zone = table.cliff_score, "cliff"
    elif year in table.by_age:
        score, zone = table.by_age[year]
    elif year < youngest:
        score, zone = table.by_age[youngest][0], "ascent"
    else:
        score, zone = table.cliff_score, "cliff"

    label = table.prime_label if zone == "prime" else zone.capitalize()
    return AgeCurveStatus(normalized, age, score, zone, label, table.prime_start, table.prime_end)
