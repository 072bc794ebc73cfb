"""Load league snapshots and apply optional value overlays."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Mapping, Optional, Tuple

from pydynasty.models import LeagueSnapshot

from .market_values import MergeReport, load_market_value_csv, merge_market_values
from .pick_values import load_pick_value_csv


logger = logging.getLogger(__name__)


def load_league_snapshot(path: Path) -> LeagueSnapshot:
    data = json.loads(path.read_text(encoding="utf-8"))
    return LeagueSnapshot.model_validate(data)


def apply_value_overlays(
    snapshot: LeagueSnapshot,
    *,
    player_values_path: Optional[Path] = None,
    pick_values_path: Optional[Path] = None,
    value_mapping: Mapping[str, str] | None = None,
) -> Tuple[LeagueSnapshot, Optional[MergeReport]]:
    """Return a snapshot with market and pick values merged in."""

    update: dict = {}
    report: Optional[MergeReport] = None
    if player_values_path is not None:
        rows = load_market_value_csv(player_values_path, mapping=value_mapping)
        players, report = merge_market_values(snapshot.players, rows, as_of_year=snapshot.season)
        update["players"] = players
        logger.info(
            "Market values matched %s/%s players (%s unmatched rows)",
            report.matched_players,
            report.total_players,
            len(report.unmatched_value_rows),
        )
    if pick_values_path is not None:
        imported = load_pick_value_csv(pick_values_path)
        update["pick_values"] = imported.entries
    if not update:
        return snapshot, report
    return snapshot.model_copy(update=update), report
