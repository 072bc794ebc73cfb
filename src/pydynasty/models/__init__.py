"""Pydantic models for league snapshots and rostered players."""

from .league import LeagueSnapshot, LeagueUser, PickValueEntry, RosterSnapshot, Team, TradeRecord
from .player import PlayerInfo, RosteredPlayer

__all__ = [
    "LeagueSnapshot",
    "LeagueUser",
    "PickValueEntry",
    "PlayerInfo",
    "RosterSnapshot",
    "RosteredPlayer",
    "Team",
    "TradeRecord",
]
