"""Roster slot eligibility and league format rules."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, Mapping, Sequence, Tuple


SKILL_POSITIONS: Tuple[str, ...] = ("QB", "RB", "WR", "TE")

NON_STARTER_SLOTS: FrozenSet[str] = frozenset({"BN", "IR", "TAXI"})

_DEFAULT_ELIGIBILITY: FrozenSet[str] = frozenset(SKILL_POSITIONS)

_SLOT_POSITIONS: Dict[str, FrozenSet[str]] = {
    "QB": frozenset({"QB"}),
    "RB": frozenset({"RB"}),
    "WR": frozenset({"WR"}),
    "TE": frozenset({"TE"}),
    "K": frozenset({"K"}),
    "DEF": frozenset({"DEF"}),
    "DL": frozenset({"DL"}),
    "LB": frozenset({"LB"}),
    "DB": frozenset({"DB"}),
    "FLEX": frozenset({"RB", "WR", "TE"}),
    "SUPER_FLEX": frozenset({"QB", "RB", "WR", "TE"}),
    "REC_FLEX": frozenset({"WR", "TE"}),
    "WRRB_FLEX": frozenset({"WR", "RB"}),
    "IDP_FLEX": frozenset({"DL", "LB", "DB"}),
}


class ValuationError(Exception):
    """Base class for hard failures surfaced by the valuation engine."""


class EmptySlotTemplateError(ValuationError, ValueError):
    """Raised when a league has no starter slots to fill."""


@dataclass(frozen=True)
class LeagueFormat:
    superflex: bool = False
    tep: bool = False

    @property
    def value_column(self) -> str:
        return "sf" if self.superflex else "1qb"


@dataclass(frozen=True)
class RosterRules:
    starter_slots: Tuple[str, ...]
    league_format: LeagueFormat


def eligible_positions(slot: str) -> FrozenSet[str]:
    """Return the player positions accepted by a roster slot label."""

    return _SLOT_POSITIONS.get(slot.upper(), _DEFAULT_ELIGIBILITY)


def is_starter_slot(slot: str) -> bool:
    return slot.upper() not in NON_STARTER_SLOTS


def starter_slots(roster_positions: Iterable[str] | None) -> Tuple[str, ...]:
    """Starter slot labels in declared order, raising if none remain."""

    slots = tuple(slot.upper() for slot in (roster_positions or ()) if slot and is_starter_slot(slot))
    if not slots:
        raise EmptySlotTemplateError("League has no starter slots to optimize against")
    return slots


def is_superflex(roster_positions: Sequence[str]) -> bool:
    upper = [slot.upper() for slot in roster_positions]
    if "SUPER_FLEX" in upper:
        return True
    return upper.count("QB") >= 2


def is_tep(scoring_settings: Mapping[str, float] | None) -> bool:
    settings = scoring_settings or {}
    bonus_rec_te = float(settings.get("bonus_rec_te") or 0)
    rec_te = float(settings.get("rec_te") or 0)
    rec = float(settings.get("rec") or 0)
    return bonus_rec_te > 0 or rec_te > rec


def detect_format(
    roster_positions: Sequence[str],
    scoring_settings: Mapping[str, float] | None = None,
) -> LeagueFormat:
    return LeagueFormat(superflex=is_superflex(roster_positions), tep=is_tep(scoring_settings))


def build_rules(
    roster_positions: Sequence[str] | None,
    scoring_settings: Mapping[str, float] | None = None,
) -> RosterRules:
    """Resolve starter slot order and format flags for a league."""

    order = tuple(slot.upper() for slot in (roster_positions or ()) if slot)
    return RosterRules(
        starter_slots=starter_slots(order),
        league_format=detect_format(order, scoring_settings),
    )
