"""REST API for the pydynasty valuation engine."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.responses import Response

from pydynasty.api.schemas import (
    LeagueValuationResponse,
    TeamValuationResponse,
    ValuationRequest,
    ValuationSummaryResponse,
)
from pydynasty.config import CompositeWeights, EmptySlotTemplateError
from pydynasty.persistence import ValuationRecord, ValuationStore
from pydynasty.reporting import export_rankings_to_csv
from pydynasty.valuation import TeamNotFoundError, value_league, value_team


def _weights_or_400(overrides: dict[str, float] | None) -> CompositeWeights:
    try:
        return CompositeWeights.from_mapping(overrides)
    except KeyError as exc:
        raise HTTPException(status_code=400, detail=str(exc.args[0])) from exc
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


def _check_league(league_id: str, request: ValuationRequest) -> None:
    if request.snapshot.league_id != league_id:
        raise HTTPException(
            status_code=400,
            detail=f"Snapshot league {request.snapshot.league_id} does not match {league_id}",
        )


def _record_to_response(record: ValuationRecord) -> LeagueValuationResponse:
    return LeagueValuationResponse.model_validate(
        {
            "valuation_id": record.valuation_id,
            "created_at": record.created_at,
            **record.payload,
        }
    )


def _record_to_summary(record: ValuationRecord) -> dict[str, Any]:
    teams = record.payload.get("teams", [])
    return ValuationSummaryResponse(
        valuation_id=record.valuation_id,
        created_at=record.created_at,
        league_id=record.league_id,
        season=record.season,
        teams=len(teams),
        leader=teams[0]["display_name"] if teams else None,
    ).model_dump(mode="json")


def create_app() -> FastAPI:
    app = FastAPI(title="pydynasty valuations")
    store = ValuationStore(Path(__file__).resolve().parent.parent / "pydynasty.sqlite")
    app.state.valuation_store = store

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/leagues/{league_id}/valuations", response_model=LeagueValuationResponse)
    async def create_valuation(league_id: str, request: ValuationRequest):
        _check_league(league_id, request)
        weights = _weights_or_400(request.weights)
        try:
            valuation = value_league(request.snapshot, weights, include_debug=request.include_debug)
        except EmptySlotTemplateError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        record = store.save_valuation(
            league_id=valuation.league_id,
            season=valuation.season,
            weights=weights.as_dict(),
            payload=valuation.to_payload(),
        )
        return _record_to_response(record)

    @app.post("/leagues/{league_id}/teams/{roster_id}/valuation", response_model=TeamValuationResponse)
    async def create_team_valuation(league_id: str, roster_id: int, request: ValuationRequest):
        _check_league(league_id, request)
        weights = _weights_or_400(request.weights)
        try:
            team = value_team(request.snapshot, roster_id, weights, include_debug=request.include_debug)
        except TeamNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except EmptySlotTemplateError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return TeamValuationResponse.model_validate(team.to_payload())

    @app.get("/valuations")
    async def list_valuations(league_id: str | None = None, limit: int = 50):
        return [_record_to_summary(record) for record in store.list_valuations(league_id=league_id, limit=limit)]

    def _fetch_valuation_or_404(valuation_id: str) -> ValuationRecord:
        record = store.get_valuation(valuation_id)
        if record is None:
            raise HTTPException(status_code=404, detail="Valuation not found")
        return record

    @app.get("/valuations/{valuation_id}", response_model=LeagueValuationResponse)
    async def get_valuation(valuation_id: str):
        return _record_to_response(_fetch_valuation_or_404(valuation_id))

    @app.get("/valuations/{valuation_id}/teams/{roster_id}", response_model=TeamValuationResponse)
    async def get_team_valuation(valuation_id: str, roster_id: int):
        record = _fetch_valuation_or_404(valuation_id)
        for team in record.payload.get("teams", []):
            if team["roster_id"] == roster_id:
                return TeamValuationResponse.model_validate(team)
        raise HTTPException(status_code=404, detail="Team not found")

    @app.get("/valuations/{valuation_id}/export.csv")
    async def export_csv(valuation_id: str):
        record = _fetch_valuation_or_404(valuation_id)
        csv_text = export_rankings_to_csv(record.payload.get("teams", []))
        return Response(
            content=csv_text,
            media_type="text/csv",
            headers={"Content-Disposition": f"attachment; filename={valuation_id}.csv"},
        )

    return app
