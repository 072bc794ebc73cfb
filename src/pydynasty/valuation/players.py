"""Resolve rostered players and their format-dependent trade values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Mapping, Optional, Sequence

from pydynasty.config import LeagueFormat
from pydynasty.models import PlayerInfo, RosteredPlayer


UNKNOWN_POSITION = "FLEX"


@dataclass(frozen=True)
class ValueLookup:
    """Outcome of a player value lookup; ``value`` is None when unavailable."""

    value: Optional[float]
    column: str


def lookup_value(info: Optional[PlayerInfo], league_format: LeagueFormat) -> ValueLookup:
    """Pick the trade value column for a player.

    Standard value is the base; superflex leagues use the SF column for
    quarterbacks and TE-premium leagues use the TEP column for tight ends,
    each only when that column is populated.
    """

    if info is None or info.trade_value_std is None:
        return ValueLookup(value=None, column="none")
    position = (info.position or "").upper()
    if league_format.superflex and position == "QB" and info.trade_value_sf is not None:
        return ValueLookup(value=info.trade_value_sf, column="sf")
    if league_format.tep and position == "TE" and info.trade_value_tep is not None:
        return ValueLookup(value=info.trade_value_tep, column="tep")
    return ValueLookup(value=info.trade_value_std, column="std")


def build_rostered_players(
    player_ids: Sequence[str],
    players: Mapping[str, PlayerInfo],
    league_format: LeagueFormat,
) -> List[RosteredPlayer]:
    """Materialize a roster; players without a value stay rostered at zero."""

    rostered: List[RosteredPlayer] = []
    seen: set[str] = set()
    for player_id in player_ids:
        if not player_id or player_id in seen:
            continue
        seen.add(player_id)
        info = players.get(player_id)
        lookup = lookup_value(info, league_format)
        rostered.append(
            RosteredPlayer(
                player_id=player_id,
                full_name=(info.full_name if info and info.full_name else player_id),
                position=((info.position or UNKNOWN_POSITION).upper() if info else UNKNOWN_POSITION),
                age=info.age if info else None,
                value=max(0.0, lookup.value) if lookup.value is not None else 0.0,
                has_value=lookup.value is not None,
            )
        )
    return rostered


def coverage_pct(players: Sequence[RosteredPlayer]) -> Optional[float]:
    """Share of rostered players with an external value, as a percentage."""

    if not players:
        return None
    valued = sum(1 for player in players if player.has_value)
    return round(valued / len(players) * 100.0, 1)
