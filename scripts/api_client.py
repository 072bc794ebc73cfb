"""Lightweight REST client for the pydynasty API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


def build_weights(raw: str) -> dict[str, float] | None:
    if not raw:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Invalid weights JSON: {exc}") from exc


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the pydynasty REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("snapshot", type=Path, nargs="?", help="League snapshot JSON")
    parser.add_argument("--weights", default="", help="JSON object of composite weight overrides")
    parser.add_argument("--team", type=int, metavar="ROSTER_ID", help="Value a single team instead of the league")
    parser.add_argument("--debug", action="store_true", help="Request the debug payload")
    parser.add_argument("--list", action="store_true", help="List recent valuations and exit")
    parser.add_argument("--league", help="Restrict --list to one league id")
    parser.add_argument("--get", metavar="VALUATION_ID", help="Fetch a stored valuation and exit")
    parser.add_argument("--export", metavar="VALUATION_ID", help="Download rankings CSV for a valuation")
    parser.add_argument("--export-path", type=Path, help="Destination path for exported CSV")
    args = parser.parse_args()

    if args.list or args.get or args.export:
        with httpx.Client(base_url=args.base_url) as client:
            if args.list:
                params = {"league_id": args.league} if args.league else None
                resp = client.get("/valuations", params=params)
                resp.raise_for_status()
                print(json.dumps(resp.json(), indent=2))
            if args.get:
                resp = client.get(f"/valuations/{args.get}")
                if resp.status_code == 404:
                    raise SystemExit(f"valuation {args.get} not found")
                resp.raise_for_status()
                print(json.dumps(resp.json(), indent=2))
            if args.export:
                resp = client.get(f"/valuations/{args.export}/export.csv")
                if resp.status_code == 404:
                    raise SystemExit(f"valuation {args.export} not found")
                resp.raise_for_status()
                if args.export_path:
                    args.export_path.write_text(resp.text)
                    print(f"CSV export saved to {args.export_path}")
                else:
                    print(resp.text)
        return

    if args.snapshot is None:
        raise SystemExit("a snapshot file is required unless using --list/--get/--export")

    snapshot = json.loads(args.snapshot.read_text(encoding="utf-8"))
    body = {
        "snapshot": snapshot,
        "weights": build_weights(args.weights),
        "include_debug": args.debug,
    }
    league_id = snapshot["league_id"]

    with httpx.Client(base_url=args.base_url, timeout=60.0) as client:
        if args.team is not None:
            resp = client.post(f"/leagues/{league_id}/teams/{args.team}/valuation", json=body)
            if resp.status_code == 404:
                raise SystemExit(f"roster {args.team} not found in league {league_id}")
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
            return

        resp = client.post(f"/leagues/{league_id}/valuations", json=body)
        resp.raise_for_status()
        payload = resp.json()
        print(f"Stored valuation {payload['valuation_id']} for league {league_id}")
        for team in payload["teams"]:
            print(f"{team['rank']:>2}. {team['display_name']:<24} {team['composite']:>5.1f}  {team['archetype']}")


if __name__ == "__main__":
    main()
