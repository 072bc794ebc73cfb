import csv
import io
import json
import sys
from pathlib import Path

import pytest

from pydynasty import cli
from pydynasty.config_loader import WeightProfile
from pydynasty.reporting import RANKING_HEADERS, RankingExportError, export_rankings_to_csv
from pydynasty.valuation import value_league

from .league_factory import make_league


def test_export_rankings_to_csv_has_one_row_per_team():
    payload = value_league(make_league(teams=5)).to_payload()

    text = export_rankings_to_csv(payload["teams"])

    rows = list(csv.reader(io.StringIO(text)))
    assert tuple(rows[0]) == RANKING_HEADERS
    assert len(rows) == 6


def test_export_rejects_incomplete_payload():
    with pytest.raises(RankingExportError):
        export_rankings_to_csv([{"rank": 1}])


def test_weight_profile_round_trip(tmp_path: Path):
    path = tmp_path / "weights.json"
    WeightProfile({"picks": 40.0}, {"name": "Player"}).save(path)

    profile = WeightProfile.load(path)

    assert profile.to_weights().picks == 40.0
    assert profile.value_mapping == {"name": "Player"}


def test_cli_writes_rankings_and_report(tmp_path: Path, monkeypatch, capsys):
    snapshot_path = tmp_path / "league.json"
    snapshot_path.write_text(make_league(teams=4).model_dump_json(), encoding="utf-8")
    output = tmp_path / "rankings.csv"
    report = tmp_path / "report.json"
    saved = tmp_path / "profile.json"

    monkeypatch.setattr(
        sys,
        "argv",
        [
            "pydynasty",
            str(snapshot_path),
            "--weight",
            "picks=10",
            "--output",
            str(output),
            "--report",
            str(report),
            "--save-weights",
            str(saved),
        ],
    )
    cli.main()

    rows = list(csv.DictReader(output.open(encoding="utf-8")))
    assert len(rows) == 4
    payload = json.loads(report.read_text(encoding="utf-8"))
    assert payload["weights"]["picks"] == 10.0
    assert WeightProfile.load(saved).weights["picks"] == 10.0
    assert "Manager 1" in capsys.readouterr().out


def test_parse_mapping_rejects_bad_entries():
    with pytest.raises(ValueError):
        cli._parse_mapping(["novalue"])
    with pytest.raises(ValueError):
        cli._parse_weights(["picks=lots"])
