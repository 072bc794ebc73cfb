"""CSV export helpers for league rankings."""

from __future__ import annotations

import csv
from io import StringIO
from typing import Any, Mapping, Sequence


RANKING_HEADERS: tuple[str, ...] = (
    "rank",
    "roster_id",
    "display_name",
    "archetype",
    "composite",
    "starters_value",
    "bench_value",
    "picks_value",
    "window_score",
    "age_score",
    "starters_pct",
    "bench_pct",
    "picks_pct",
    "window_pct",
    "age_pct",
    "coverage_pct",
    "shallow",
    "surplus",
)


class RankingExportError(RuntimeError):
    """Raised when a stored valuation payload cannot be exported."""


def _fmt(value: Any, digits: int = 1) -> str:
    if value is None:
        return ""
    return f"{float(value):.{digits}f}"


def export_rankings_to_csv(teams: Sequence[Mapping[str, Any]]) -> str:
    """Render team payloads (as produced by ``TeamValuation.to_payload``) to CSV."""

    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow(RANKING_HEADERS)
    for team in teams:
        try:
            values = team["values"]
            scores = team["scores"]
            needs = team["needs"]
            writer.writerow([
                team["rank"],
                team["roster_id"],
                team["display_name"],
                team["archetype"],
                _fmt(team["composite"]),
                _fmt(values["starters"]),
                _fmt(values["bench"]),
                _fmt(values["picks"], 0),
                _fmt(values["window"]),
                _fmt(values["age"]),
                _fmt(scores["starters"]),
                _fmt(scores["bench"]),
                _fmt(scores["picks"]),
                _fmt(scores["window"]),
                _fmt(scores["age"]),
                _fmt(team.get("coverage_pct")),
                "/".join(needs["shallow"]),
                "/".join(needs["surplus"]),
            ])
        except KeyError as exc:
            raise RankingExportError(f"Team payload missing field {exc}") from exc
    return buffer.getvalue()
