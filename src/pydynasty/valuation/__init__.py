"""Valuation engine for fantasy league rosters and draft capital."""

from .archetypes import ARCHETYPES, ArchetypeResult, classify_archetype
from .draft_capital import (
    DraftCapitalSummary,
    PickOwnership,
    PickSlot,
    resolve_pick_ownership,
    summarize_draft_capital,
)
from .lineup import LineupAssignment, LineupResult, build_lineup
from .needs import DepthScore, TeamNeeds, TradeMatch, compute_needs, match_trades
from .picks import PickValueTable, ValuedPick, pick_tier, value_pick
from .ranking import ComponentValues, composite_score, percentile_rank
from .service import (
    EmptySlotTemplateError,
    LeagueValuation,
    TeamNotFoundError,
    TeamValuation,
    ValuationError,
    value_league,
    value_leagues,
    value_team,
)
from .window import PositionWindow, WindowResult, score_window

__all__ = [
    "ARCHETYPES",
    "ArchetypeResult",
    "ComponentValues",
    "DepthScore",
    "DraftCapitalSummary",
    "EmptySlotTemplateError",
    "LeagueValuation",
    "LineupAssignment",
    "LineupResult",
    "PickOwnership",
    "PickSlot",
    "PickValueTable",
    "PositionWindow",
    "TeamNeeds",
    "TeamNotFoundError",
    "TeamValuation",
    "TradeMatch",
    "ValuationError",
    "ValuedPick",
    "WindowResult",
    "build_lineup",
    "classify_archetype",
    "composite_score",
    "compute_needs",
    "match_trades",
    "percentile_rank",
    "pick_tier",
    "resolve_pick_ownership",
    "score_window",
    "summarize_draft_capital",
    "value_league",
    "value_leagues",
    "value_pick",
]
