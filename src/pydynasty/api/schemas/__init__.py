"""Pydantic models for API I/O."""

from .valuation import (
    LeagueValuationResponse,
    PlayerResponse,
    TeamValuationResponse,
    ValuationRequest,
    ValuationSummaryResponse,
)

__all__ = [
    "LeagueValuationResponse",
    "PlayerResponse",
    "TeamValuationResponse",
    "ValuationRequest",
    "ValuationSummaryResponse",
]
