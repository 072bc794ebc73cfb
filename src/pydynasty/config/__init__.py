"""Configuration helpers for roster rules and composite weights."""

from .roster import (
    EmptySlotTemplateError,
    LeagueFormat,
    RosterRules,
    SKILL_POSITIONS,
    ValuationError,
    build_rules,
    detect_format,
    eligible_positions,
    is_starter_slot,
    starter_slots,
)
from .weights import COMPONENTS, DEFAULT_WEIGHTS, CompositeWeights

__all__ = [
    "COMPONENTS",
    "CompositeWeights",
    "DEFAULT_WEIGHTS",
    "EmptySlotTemplateError",
    "LeagueFormat",
    "RosterRules",
    "SKILL_POSITIONS",
    "ValuationError",
    "build_rules",
    "detect_format",
    "eligible_positions",
    "is_starter_slot",
    "starter_slots",
]
