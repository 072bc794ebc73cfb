"""League snapshot models supplied by the data collaborator."""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from .player import PlayerInfo


class LeagueUser(BaseModel):
    user_id: str
    display_name: str

    model_config = ConfigDict(frozen=True)


class RosterSnapshot(BaseModel):
    roster_id: int
    owner_id: Optional[str] = None
    wins: int = 0
    losses: int = 0
    ties: int = 0
    points_for: float = 0.0
    player_ids: List[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class TradeRecord(BaseModel):
    """Current-state declaration of who owns a pick slot.

    ``roster_id`` is the original owner of the pick, ``owner_id`` the roster
    holding it after the trade.
    """

    roster_id: int
    season: int
    round: int = Field(..., ge=1)
    owner_id: int
    previous_owner_id: Optional[int] = None
    timestamp: Optional[int] = None

    model_config = ConfigDict(frozen=True)


class PickValueEntry(BaseModel):
    year: int
    round: int = Field(..., ge=1)
    tier: str
    value_1qb: float = Field(..., ge=0.0)
    value_sf: float = Field(..., ge=0.0)

    model_config = ConfigDict(frozen=True)


class LeagueSnapshot(BaseModel):
    """Everything the engine needs for one league computation."""

    league_id: str
    season: int
    roster_positions: List[str] = Field(default_factory=list)
    scoring_settings: Dict[str, float] = Field(default_factory=dict)
    rosters: List[RosterSnapshot] = Field(default_factory=list)
    users: List[LeagueUser] = Field(default_factory=list)
    players: Dict[str, PlayerInfo] = Field(default_factory=dict)
    traded_picks: List[TradeRecord] = Field(default_factory=list)
    pick_values: List[PickValueEntry] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class Team(BaseModel):
    """A roster materialized for one computation."""

    roster_id: int
    owner_id: Optional[str] = None
    display_name: str
    wins: int = 0
    losses: int = 0
    ties: int = 0
    points_for: float = 0.0

    model_config = ConfigDict(frozen=True)
