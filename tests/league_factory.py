"""Builders for synthetic league snapshots used across the test suite."""

from __future__ import annotations

from typing import Dict, List, Sequence

from pydynasty.models import (
    LeagueSnapshot,
    LeagueUser,
    PickValueEntry,
    PlayerInfo,
    RosteredPlayer,
    RosterSnapshot,
    TradeRecord,
)


SEASON = 2025

STANDARD_SLOTS: List[str] = ["QB", "RB", "RB", "WR", "WR", "WR", "TE", "FLEX", "BN", "BN", "BN", "BN", "IR"]

# position, base value, age
_ROSTER_TEMPLATE = (
    ("QB", 60.0, 28),
    ("RB", 50.0, 24),
    ("RB", 40.0, 25),
    ("RB", 20.0, 26),
    ("WR", 55.0, 25),
    ("WR", 45.0, 26),
    ("WR", 35.0, 27),
    ("WR", 15.0, 24),
    ("TE", 30.0, 27),
    ("TE", 10.0, 28),
)


def player(
    player_id: str,
    position: str,
    value: float,
    age: float | None = 26,
    *,
    has_value: bool = True,
) -> RosteredPlayer:
    return RosteredPlayer(
        player_id=player_id,
        full_name=f"Player {player_id}",
        position=position,
        age=age,
        value=value,
        has_value=has_value,
    )


def make_league(
    teams: int = 10,
    *,
    trades: Sequence[TradeRecord] = (),
    roster_positions: Sequence[str] = STANDARD_SLOTS,
    pick_values: Sequence[PickValueEntry] = (),
    league_id: str = "league-1",
) -> LeagueSnapshot:
    """League where roster ``t`` carries every template value scaled by (teams + 1 - t) / teams."""

    players: Dict[str, PlayerInfo] = {}
    rosters: List[RosterSnapshot] = []
    users: List[LeagueUser] = []
    for roster_id in range(1, teams + 1):
        scale = (teams + 1 - roster_id) / teams
        ids: List[str] = []
        for idx, (position, base, age) in enumerate(_ROSTER_TEMPLATE):
            player_id = f"t{roster_id}-{position.lower()}{idx}"
            players[player_id] = PlayerInfo(
                player_id=player_id,
                full_name=f"Team {roster_id} {position} {idx}",
                position=position,
                age=age,
                trade_value_std=round(base * scale, 2),
                trade_value_sf=round(base * scale * (1.5 if position == "QB" else 1.0), 2),
                trade_value_tep=round(base * scale * (1.2 if position == "TE" else 1.0), 2),
            )
            ids.append(player_id)
        owner_id = f"user-{roster_id}"
        users.append(LeagueUser(user_id=owner_id, display_name=f"Manager {roster_id}"))
        rosters.append(
            RosterSnapshot(
                roster_id=roster_id,
                owner_id=owner_id,
                wins=7,
                losses=6,
                points_for=1500.0,
                player_ids=ids,
            )
        )
    return LeagueSnapshot(
        league_id=league_id,
        season=SEASON,
        roster_positions=list(roster_positions),
        scoring_settings={"rec": 1.0},
        rosters=rosters,
        users=users,
        players=players,
        traded_picks=list(trades),
        pick_values=list(pick_values),
    )
