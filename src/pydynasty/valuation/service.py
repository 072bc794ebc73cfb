"""League valuation pipeline: ownership, lineups, windows, ranking, needs."""

from __future__ import annotations

import logging
import multiprocessing as mp
import os
import time
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from pydynasty.config import (
    DEFAULT_WEIGHTS,
    CompositeWeights,
    EmptySlotTemplateError,
    LeagueFormat,
    ValuationError,
    build_rules,
)
from pydynasty.models import LeagueSnapshot, RosteredPlayer, RosterSnapshot, Team

from .archetypes import ArchetypeResult, classify_archetype
from .draft_capital import (
    DEFAULT_LOOKAHEAD_YEARS,
    DraftCapitalSummary,
    resolve_pick_ownership,
    summarize_draft_capital,
)
from .lineup import LineupResult, build_lineup
from .needs import DEFAULT_MATCH_LIMIT, TeamNeeds, TradeMatch, compute_needs, match_trades
from .picks import PickValueTable, ValuedPick, strength_ranks, value_owned_picks
from .players import build_rostered_players, coverage_pct
from .ranking import (
    ComponentValues,
    component_stats,
    composite_score,
    normalize_components,
    rank_order,
    value_rank,
)
from .window import CoreAsset, WindowResult, score_team_age, score_window, select_core_assets


logger = logging.getLogger("uvicorn.error")
logger.setLevel(logging.INFO)

_LOOKAHEAD_ENV = "PYDYNASTY_LOOKAHEAD_YEARS"
_MATCH_LIMIT_ENV = "PYDYNASTY_TRADE_MATCH_LIMIT"

MAX_PF_MULTIPLIER = 10.0
UNLUCKY_EFFICIENCY = 95.0
LUCKY_EFFICIENCY = 80.0

__all__ = [
    "EmptySlotTemplateError",
    "LeagueValuation",
    "TeamNotFoundError",
    "TeamValuation",
    "ValuationError",
    "value_league",
    "value_leagues",
    "value_team",
]


class TeamNotFoundError(ValuationError, KeyError):
    """Raised when a team-specific valuation names a roster outside the league."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else "Team not found"


def _env_int(name: str, default: int, *, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    return value


def _lookahead_years() -> int:
    return _env_int(_LOOKAHEAD_ENV, DEFAULT_LOOKAHEAD_YEARS, min_value=0)


def _trade_match_limit() -> int:
    return _env_int(_MATCH_LIMIT_ENV, DEFAULT_MATCH_LIMIT, min_value=0)


@dataclass(frozen=True)
class TeamValuation:
    rank: int
    team: Team
    values: ComponentValues
    scores: ComponentValues
    composite: float
    starters_rank: int
    picks_rank: int
    archetype: ArchetypeResult
    lineup: LineupResult
    window: WindowResult
    picks: Tuple[ValuedPick, ...]
    draft_capital: DraftCapitalSummary
    needs: TeamNeeds
    trade_matches: Tuple[TradeMatch, ...]
    core_assets: Tuple[CoreAsset, ...]
    coverage_pct: Optional[float]
    max_pf: float
    efficiency: Optional[float]
    luck: Optional[str]

    @property
    def roster_id(self) -> int:
        return self.team.roster_id

    @property
    def picks_value(self) -> float:
        return self.values.picks

    def to_payload(self) -> Dict[str, Any]:
        return {
            "rank": self.rank,
            "roster_id": self.team.roster_id,
            "owner_id": self.team.owner_id,
            "display_name": self.team.display_name,
            "wins": self.team.wins,
            "losses": self.team.losses,
            "ties": self.team.ties,
            "points_for": self.team.points_for,
            "values": asdict(self.values),
            "scores": asdict(self.scores),
            "composite": self.composite,
            "starters_rank": self.starters_rank,
            "picks_rank": self.picks_rank,
            "archetype": self.archetype.label,
            "archetype_reasons": list(self.archetype.reasons),
            "starters": [
                {"slot": a.slot, "player": a.player.model_dump() if a.player else None, "value": a.value}
                for a in self.lineup.starters
            ],
            "bench": [player.model_dump() for player in self.lineup.bench],
            "window": {
                "score": round(self.window.score, 1),
                "avg_prime_years_left": round(self.window.avg_prime_years_left, 2),
                "positions": [asdict(position) for position in self.window.by_position],
            },
            "picks": [
                {
                    "original_roster_id": pick.original_roster_id,
                    "year": pick.year,
                    "round": pick.round,
                    "tier": pick.tier,
                    "strength_rank": pick.strength_rank,
                    "value": pick.value,
                    "value_source": pick.value_source,
                    "years_out": pick.years_out,
                }
                for pick in self.picks
            ],
            "draft_capital": {
                "picks_by_year": {
                    str(year): {str(rnd): count for rnd, count in rounds.items()}
                    for year, rounds in self.draft_capital.picks_by_year.items()
                },
                "totals": {str(rnd): count for rnd, count in self.draft_capital.totals.items()},
                "total": self.draft_capital.total,
                "draft_cap_score": self.draft_capital.draft_cap_score,
                "future_firsts": self.draft_capital.future_firsts,
                "acquired_count": self.draft_capital.acquired_count,
                "traded_away_count": self.draft_capital.traded_away_count,
            },
            "needs": {
                "shallow": list(self.needs.shallow),
                "surplus": list(self.needs.surplus),
                "depth": [asdict(depth) for depth in self.needs.depth],
                "surplus_players": [player.model_dump() for player in self.needs.surplus_players],
                "weakest_slot": self.needs.weakest_slot,
                "depth_score": asdict(self.needs.depth_score),
            },
            "trade_matches": [
                {
                    "to_roster_id": match.to_roster_id,
                    "player": match.player.model_dump(),
                    "reciprocal": match.reciprocal.model_dump() if match.reciprocal else None,
                }
                for match in self.trade_matches
            ],
            "core_assets": [asdict(asset) for asset in self.core_assets],
            "coverage_pct": self.coverage_pct,
            "max_pf": self.max_pf,
            "efficiency": self.efficiency,
            "luck": self.luck,
        }


@dataclass(frozen=True)
class LeagueValuation:
    league_id: str
    season: int
    league_format: LeagueFormat
    weights: CompositeWeights
    years: Tuple[int, ...]
    teams: Tuple[TeamValuation, ...]
    debug: Optional[Dict[str, Any]] = None

    def team(self, roster_id: int) -> TeamValuation:
        for team in self.teams:
            if team.roster_id == roster_id:
                return team
        raise TeamNotFoundError(f"Roster {roster_id} not found in league {self.league_id}")

    def to_payload(self) -> Dict[str, Any]:
        return {
            "league_id": self.league_id,
            "season": self.season,
            "superflex": self.league_format.superflex,
            "tep": self.league_format.tep,
            "value_column": self.league_format.value_column,
            "weights": self.weights.as_dict(),
            "years": list(self.years),
            "teams": [team.to_payload() for team in self.teams],
            "debug": self.debug,
        }


def _display_names(snapshot: LeagueSnapshot) -> Dict[str, str]:
    return {user.user_id: user.display_name for user in snapshot.users if user.display_name}


def _materialize_team(roster: RosterSnapshot, names: Mapping[str, str]) -> Team:
    display = names.get(roster.owner_id or "") or f"Team {roster.roster_id}"
    return Team(
        roster_id=roster.roster_id,
        owner_id=roster.owner_id,
        display_name=display,
        wins=roster.wins,
        losses=roster.losses,
        ties=roster.ties,
        points_for=roster.points_for,
    )


def _claim_players(rosters: Sequence[RosterSnapshot]) -> Dict[int, List[str]]:
    """Assign each player id to the first roster listing it."""

    claimed: Dict[str, int] = {}
    by_roster: Dict[int, List[str]] = {}
    for roster in rosters:
        ids: List[str] = []
        for player_id in roster.player_ids:
            owner = claimed.get(player_id)
            if owner is None:
                claimed[player_id] = roster.roster_id
                ids.append(player_id)
            elif owner != roster.roster_id:
                logger.warning(
                    "Player %s listed on rosters %s and %s; keeping the first",
                    player_id,
                    owner,
                    roster.roster_id,
                )
        by_roster[roster.roster_id] = ids
    return by_roster


def _luck(points_for: float, max_pf: float) -> Tuple[Optional[float], Optional[str]]:
    if max_pf <= 0 or points_for <= 0:
        return None, None
    efficiency = round(points_for / max_pf * 100.0, 1)
    if efficiency >= UNLUCKY_EFFICIENCY:
        return efficiency, "unlucky"
    if efficiency <= LUCKY_EFFICIENCY:
        return efficiency, "lucky"
    return efficiency, "neutral"


def value_league(
    snapshot: LeagueSnapshot,
    weights: CompositeWeights | None = None,
    include_debug: bool = False,
) -> LeagueValuation:
    """Rank every team in a league snapshot.

    Raises ``EmptySlotTemplateError`` when the league declares no starter
    slots. A league without rosters yields an empty ranking.
    """

    start = time.perf_counter()
    weights = weights or DEFAULT_WEIGHTS
    rules = build_rules(snapshot.roster_positions, snapshot.scoring_settings)
    league_format = rules.league_format

    rosters = list(snapshot.rosters)
    roster_ids = [roster.roster_id for roster in rosters]
    ownership = resolve_pick_ownership(
        roster_ids,
        snapshot.traded_picks,
        season=snapshot.season,
        lookahead=_lookahead_years(),
    )
    if not rosters:
        logger.info("League %s has no rosters; returning empty ranking", snapshot.league_id)
        return LeagueValuation(
            league_id=snapshot.league_id,
            season=snapshot.season,
            league_format=league_format,
            weights=weights,
            years=ownership.years,
            teams=(),
            debug={} if include_debug else None,
        )

    names = _display_names(snapshot)
    teams = [_materialize_team(roster, names) for roster in rosters]
    claimed = _claim_players(rosters)

    rostered: List[List[RosteredPlayer]] = []
    lineups: List[LineupResult] = []
    for roster in rosters:
        players = build_rostered_players(claimed[roster.roster_id], snapshot.players, league_format)
        rostered.append(players)
        lineups.append(build_lineup(players, rules.starter_slots))

    ranks = strength_ranks([(roster_id, lineup.starters_value) for roster_id, lineup in zip(roster_ids, lineups)])
    capital = summarize_draft_capital(ownership, roster_ids)
    table = PickValueTable.from_entries(snapshot.pick_values)
    valued_picks = value_owned_picks(
        ownership,
        ranks,
        current_year=snapshot.season,
        table=table,
        superflex=league_format.superflex,
    )

    windows = [score_window(players) for players in rostered]
    raw = [
        ComponentValues(
            starters=lineup.starters_value,
            bench=lineup.bench_value,
            picks=float(sum(pick.value for pick in valued_picks.get(roster_id, []))),
            window=window.score,
            age=score_team_age(players),
        )
        for roster_id, lineup, window, players in zip(roster_ids, lineups, windows, rostered)
    ]
    scores = normalize_components(raw)
    composites = [composite_score(score, weights) for score in scores]
    starters_ranks = value_rank([entry.starters for entry in raw])
    picks_ranks = value_rank([entry.picks for entry in raw])

    needs = [
        compute_needs(roster_id, players, lineup, rules.starter_slots)
        for roster_id, players, lineup in zip(roster_ids, rostered, lineups)
    ]
    matches = match_trades(needs, limit=_trade_match_limit())

    total = len(rosters)
    results: List[TeamValuation] = []
    for position, idx in enumerate(rank_order(composites, [entry.starters for entry in raw]), start=1):
        roster_id = roster_ids[idx]
        lineup = lineups[idx]
        window = windows[idx]
        max_pf = lineup.starters_value * MAX_PF_MULTIPLIER
        efficiency, luck = _luck(teams[idx].points_for, max_pf)
        results.append(
            TeamValuation(
                rank=position,
                team=teams[idx],
                values=raw[idx],
                scores=scores[idx],
                composite=composites[idx],
                starters_rank=starters_ranks[idx],
                picks_rank=picks_ranks[idx],
                archetype=classify_archetype(
                    starters_rank=starters_ranks[idx],
                    picks_rank=picks_ranks[idx],
                    window_score=window.score,
                    avg_prime_years_left=window.avg_prime_years_left,
                    total_rosters=total,
                ),
                lineup=lineup,
                window=window,
                picks=tuple(valued_picks.get(roster_id, [])),
                draft_capital=capital[roster_id],
                needs=needs[idx],
                trade_matches=tuple(matches.get(roster_id, [])),
                core_assets=select_core_assets(rostered[idx], len(rules.starter_slots)),
                coverage_pct=coverage_pct(rostered[idx]),
                max_pf=max_pf,
                efficiency=efficiency,
                luck=luck,
            )
        )

    debug: Optional[Dict[str, Any]] = None
    if include_debug:
        debug = {
            "value_column": league_format.value_column,
            "superflex": league_format.superflex,
            "tep": league_format.tep,
            "strength_ranks": {str(roster_id): rank for roster_id, rank in ranks.items()},
            "tier_assignments": [
                {
                    "owner_roster_id": pick.owner_roster_id,
                    "original_roster_id": pick.original_roster_id,
                    "year": pick.year,
                    "round": pick.round,
                    "strength_rank": pick.strength_rank,
                    "tier": pick.tier,
                    "value": pick.value,
                    "value_source": pick.value_source,
                }
                for owner in roster_ids
                for pick in valued_picks.get(owner, [])
            ],
            "norm_stats": {name: asdict(stats) for name, stats in component_stats(raw).items()},
            "resolver": {
                "baseline_picks_created": ownership.baseline_picks_created,
                "trades_applied": ownership.trades_applied,
                "trades_ignored": ownership.trades_ignored,
            },
            "pick_table_entries": len(table),
        }

    elapsed = time.perf_counter() - start
    logger.info(
        "Valued league %s – teams=%s, format=%s%s, trades applied=%s ignored=%s (%.2fs)",
        snapshot.league_id,
        total,
        "SF" if league_format.superflex else "1QB",
        "/TEP" if league_format.tep else "",
        ownership.trades_applied,
        ownership.trades_ignored,
        elapsed,
    )
    return LeagueValuation(
        league_id=snapshot.league_id,
        season=snapshot.season,
        league_format=league_format,
        weights=weights,
        years=ownership.years,
        teams=tuple(results),
        debug=debug,
    )


def value_team(
    snapshot: LeagueSnapshot,
    roster_id: int,
    weights: CompositeWeights | None = None,
    include_debug: bool = False,
) -> TeamValuation:
    """Value one team in the context of its whole league."""

    if not any(roster.roster_id == roster_id for roster in snapshot.rosters):
        raise TeamNotFoundError(f"Roster {roster_id} not found in league {snapshot.league_id}")
    return value_league(snapshot, weights, include_debug).team(roster_id)


def _value_league_job(args: Tuple[LeagueSnapshot, CompositeWeights | None, bool]) -> LeagueValuation:
    snapshot, weights, include_debug = args
    return value_league(snapshot, weights, include_debug)


def value_leagues(
    snapshots: Sequence[LeagueSnapshot],
    weights: CompositeWeights | None = None,
    include_debug: bool = False,
    *,
    workers: int = 1,
) -> List[LeagueValuation]:
    """Value independent leagues, fanning out over processes when ``workers > 1``."""

    jobs = [(snapshot, weights, include_debug) for snapshot in snapshots]
    workers = max(1, min(workers, len(jobs) or 1))
    if workers == 1:
        return [_value_league_job(job) for job in jobs]

    logger.info("Valuing %s leagues across %s workers", len(jobs), workers)
    ctx = mp.get_context("spawn")
    with ctx.Pool(processes=workers) as pool:
        return pool.map(_value_league_job, jobs)
