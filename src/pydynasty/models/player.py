"""Canonical player models shared across ingestion and valuation layers."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class PlayerInfo(BaseModel):
    """Identity and market value lookup for one player as of a given year."""

    player_id: str = Field(..., min_length=1)
    full_name: str = ""
    position: Optional[str] = None
    age: Optional[float] = Field(default=None, ge=0.0)
    trade_value_std: Optional[float] = None
    trade_value_sf: Optional[float] = None
    trade_value_tep: Optional[float] = None
    rank: Optional[int] = None
    as_of_year: Optional[int] = None

    model_config = ConfigDict(frozen=True)


class RosteredPlayer(BaseModel):
    """Player on a team with the value used by every valuation stage."""

    player_id: str = Field(..., min_length=1)
    full_name: str
    position: str
    age: Optional[float] = None
    value: float = Field(default=0.0, ge=0.0)
    has_value: bool = False

    model_config = ConfigDict(frozen=True)
