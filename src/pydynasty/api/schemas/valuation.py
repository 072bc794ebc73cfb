from __future__ import annotations

from datetime import datetime
from typing import Dict, List

from pydantic import BaseModel, Field

from pydynasty.models import LeagueSnapshot


class ValuationRequest(BaseModel):
    snapshot: LeagueSnapshot
    weights: Dict[str, float] | None = None
    include_debug: bool = False


class PlayerResponse(BaseModel):
    player_id: str
    full_name: str
    position: str
    age: float | None = None
    value: float
    has_value: bool


class ComponentResponse(BaseModel):
    starters: float
    bench: float
    picks: float
    window: float
    age: float


class StarterSlotResponse(BaseModel):
    slot: str
    player: PlayerResponse | None = None
    value: float


class PositionWindowResponse(BaseModel):
    position: str
    avg_age: float | None = None
    score: float
    in_prime: bool
    prime_years_left: float
    players: int


class WindowResponse(BaseModel):
    score: float
    avg_prime_years_left: float
    positions: List[PositionWindowResponse]


class PickResponse(BaseModel):
    original_roster_id: int
    year: int
    round: int
    tier: str
    strength_rank: int
    value: int
    value_source: str
    years_out: int


class DraftCapitalResponse(BaseModel):
    picks_by_year: Dict[str, Dict[str, int]]
    totals: Dict[str, int]
    total: int
    draft_cap_score: float
    future_firsts: int
    acquired_count: int
    traded_away_count: int


class PositionDepthResponse(BaseModel):
    position: str
    count: int
    needed: float
    target: float
    shallow: bool
    surplus: bool


class DepthScoreResponse(BaseModel):
    overall: float
    starter_quality: float
    bench_depth: float
    fragility: float
    startable_bench: int


class NeedsResponse(BaseModel):
    shallow: List[str]
    surplus: List[str]
    depth: List[PositionDepthResponse]
    surplus_players: List[PlayerResponse]
    weakest_slot: str | None = None
    depth_score: DepthScoreResponse


class TradeMatchResponse(BaseModel):
    to_roster_id: int
    player: PlayerResponse
    reciprocal: PlayerResponse | None = None


class CoreAssetResponse(BaseModel):
    player_id: str
    full_name: str
    position: str
    value: float
    age: float | None = None
    zone: str
    age_score: float
    age_label: str


class TeamValuationResponse(BaseModel):
    rank: int
    roster_id: int
    owner_id: str | None = None
    display_name: str
    wins: int
    losses: int
    ties: int
    points_for: float
    values: ComponentResponse
    scores: ComponentResponse
    composite: float
    starters_rank: int
    picks_rank: int
    archetype: str
    archetype_reasons: List[str]
    starters: List[StarterSlotResponse]
    bench: List[PlayerResponse]
    window: WindowResponse
    picks: List[PickResponse]
    draft_capital: DraftCapitalResponse
    needs: NeedsResponse
    trade_matches: List[TradeMatchResponse]
    core_assets: List[CoreAssetResponse]
    coverage_pct: float | None = None
    max_pf: float
    efficiency: float | None = None
    luck: str | None = None


class LeagueValuationResponse(BaseModel):
    valuation_id: str
    created_at: datetime
    league_id: str
    season: int
    superflex: bool
    tep: bool
    value_column: str
    weights: Dict[str, float]
    years: List[int]
    teams: List[TeamValuationResponse]
    debug: dict | None = None


class ValuationSummaryResponse(BaseModel):
    valuation_id: str
    created_at: datetime
    league_id: str
    season: int
    teams: int = Field(ge=0)
    leader: str | None = None
