"""Command-line interface for ranking the teams of a league snapshot."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from pydynasty.config import CompositeWeights
from pydynasty.config_loader import WeightProfile
from pydynasty.ingest import apply_value_overlays, load_league_snapshot
from pydynasty.reporting import export_rankings_to_csv
from pydynasty.valuation import value_league


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Rank dynasty league teams by roster and draft capital")
    parser.add_argument("snapshot", type=Path, help="Path to league snapshot JSON")
    parser.add_argument("--player-values", type=Path, default=None, help="Optional market value CSV")
    parser.add_argument("--pick-values", type=Path, default=None, help="Optional draft pick value CSV")
    parser.add_argument(
        "--value-column",
        action="append",
        default=[],
        help="Mapping for market value CSV columns (e.g., name=First Name|Last Name)",
    )
    parser.add_argument("--load-weights", type=Path, default=None, help="Load weight profile JSON")
    parser.add_argument("--save-weights", type=Path, default=None, help="Save weight profile JSON")
    parser.add_argument(
        "--weight",
        action="append",
        default=[],
        help="Override a composite weight (e.g., picks=30)",
    )
    parser.add_argument("--output", type=Path, default=Path("rankings.csv"), help="Output CSV path")
    parser.add_argument(
        "--report",
        type=Path,
        default=None,
        help="Optional path to write the full valuation JSON",
    )
    parser.add_argument("--debug", action="store_true", help="Include tiering and normalization diagnostics")
    return parser.parse_args()


def _parse_mapping(entries: list[str]) -> dict[str, str]:
    mapping: dict[str, str] = {}
    for entry in entries:
        if "=" not in entry:
            raise ValueError(f"Invalid mapping entry '{entry}', expected key=value")
        key, value = entry.split("=", 1)
        mapping[key.strip()] = value.strip()
    return mapping


def _parse_weights(entries: list[str]) -> dict[str, float]:
    weights: dict[str, float] = {}
    for key, value in _parse_mapping(entries).items():
        try:
            weights[key] = float(value)
        except ValueError:
            raise ValueError(f"Weight '{key}' must be numeric, got '{value}'") from None
    return weights


def main() -> None:
    args = _parse_args()
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    value_mapping = _parse_mapping(args.value_column)
    weight_overrides = _parse_weights(args.weight)

    if args.load_weights:
        profile = WeightProfile.load(args.load_weights)
        value_mapping = profile.value_mapping | value_mapping
        weight_overrides = profile.weights | weight_overrides

    weights = CompositeWeights.from_mapping(weight_overrides)
    if args.save_weights:
        WeightProfile(weights.as_dict(), value_mapping).save(args.save_weights)
        print(f"Saved weight profile to {args.save_weights}")

    snapshot = load_league_snapshot(args.snapshot)
    snapshot, report = apply_value_overlays(
        snapshot,
        player_values_path=args.player_values,
        pick_values_path=args.pick_values,
        value_mapping=value_mapping or None,
    )
    if report is not None:
        print(f"Matched {report.matched_players}/{report.total_players} players with market values")
        if report.unmatched_value_rows:
            preview = ", ".join(report.unmatched_value_rows[:5])
            more = len(report.unmatched_value_rows) - 5
            suffix = f", +{more} more" if more > 0 else ""
            print(f"Value rows without players: {preview}{suffix}")

    valuation = value_league(snapshot, weights, include_debug=args.debug)
    payload = valuation.to_payload()

    args.output.write_text(export_rankings_to_csv(payload["teams"]), encoding="utf-8")
    print(f"Wrote {len(valuation.teams)} team rankings to {args.output}")
    if args.report:
        args.report.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        print(f"Wrote valuation report to {args.report}")

    for team in valuation.teams:
        coverage = "-" if team.coverage_pct is None else f"{team.coverage_pct:.0f}%"
        print(
            f"{team.rank:>2}. {team.team.display_name:<24} {team.composite:>5.1f}  "
            f"{team.archetype.label:<20} coverage {coverage}"
        )


if __name__ == "__main__":
    main()
