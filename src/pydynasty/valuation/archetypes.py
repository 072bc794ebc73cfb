"""Team archetype classification from rank positions and contention window."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Tuple

Archetype = Literal[
    "all-in-contender",
    "fragile-contender",
    "productive-struggle",
    "dead-zone",
    "rebuilder",
]

ARCHETYPES: Tuple[str, ...] = (
    "all-in-contender",
    "fragile-contender",
    "productive-struggle",
    "dead-zone",
    "rebuilder",
)

WINDOW_CONTENDER_THRESHOLD = 60.0
YOUTH_PRIME_YEARS = 2.0
PRODUCTIVE_PRIME_YEARS = 3.0


@dataclass(frozen=True)
class ArchetypeResult:
    label: Archetype
    reasons: Tuple[str, ...]


def _top_third(rank: int, total: int) -> bool:
    return rank * 3 <= total


def _bottom_quarter(rank: int, total: int) -> bool:
    return rank * 4 > total * 3


def _upper_half(rank: int, total: int) -> bool:
    return rank * 2 <= total


def classify_archetype(
    *,
    starters_rank: int,
    picks_rank: int,
    window_score: float,
    avg_prime_years_left: float,
    total_rosters: int,
) -> ArchetypeResult:
    """Label a team; ranks are 1-based with 1 holding the most value.

    Rules are checked in order and the first match wins.
    """

    total = max(total_rosters, 1)
    contender = _top_third(starters_rank, total) and window_score > WINDOW_CONTENDER_THRESHOLD
    picks_bottom_half = not _upper_half(picks_rank, total)
    youthful = avg_prime_years_left >= YOUTH_PRIME_YEARS

    if contender and youthful and picks_bottom_half:
        return ArchetypeResult(
            label="all-in-contender",
            reasons=(
                f"starters rank {starters_rank}/{total} in top third",
                f"window score {window_score:.1f} above {WINDOW_CONTENDER_THRESHOLD:.0f}",
                f"{avg_prime_years_left:.1f} prime years left with picks rank {picks_rank}/{total}",
            ),
        )
    if contender:
        return ArchetypeResult(
            label="fragile-contender",
            reasons=(
                f"starters rank {starters_rank}/{total} in top third",
                f"window score {window_score:.1f} above {WINDOW_CONTENDER_THRESHOLD:.0f}",
                "aging core or pick capital held back from the push",
            ),
        )
    if _bottom_quarter(starters_rank, total):
        return ArchetypeResult(
            label="rebuilder",
            reasons=(f"starters rank {starters_rank}/{total} in bottom quarter",),
        )
    if not youthful and picks_bottom_half:
        return ArchetypeResult(
            label="rebuilder",
            reasons=(
                f"only {avg_prime_years_left:.1f} prime years left",
                f"picks rank {picks_rank}/{total} in bottom half",
            ),
        )
    if _upper_half(starters_rank, total) and avg_prime_years_left >= PRODUCTIVE_PRIME_YEARS:
        return ArchetypeResult(
            label="productive-struggle",
            reasons=(
                f"starters rank {starters_rank}/{total} at or above median",
                f"{avg_prime_years_left:.1f} prime years left",
            ),
        )
    return ArchetypeResult(
        label="dead-zone",
        reasons=("no contention window and no clear rebuild path",),
    )
