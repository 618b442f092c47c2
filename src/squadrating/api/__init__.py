"""REST API exposing roster context and player ratings."""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException

from squadrating.api.schemas import (
    ContextRequest,
    RatedPlayerResponse,
    RatingRequest,
    RosterRatingRequest,
    RosterRatingResponse,
    StandingsRequest,
)
from squadrating.models import RatingResult, RosterContext
from squadrating.rating import compute_context, compute_rating
from squadrating.standings import (
    StandingsCriteria,
    build_standings,
    filter_rows,
    rank_players,
    rate_roster,
)


logger = logging.getLogger(__name__)


def _to_response(rows) -> list[RatedPlayerResponse]:
    return [
        RatedPlayerResponse(
            rank=row.rank,
            rank_delta=row.rank_delta,
            player_id=row.player.player_id,
            name=row.player.name,
            stats=row.player.stats,
            raw_points=row.player.raw_points,
            rating=row.player.rating.value,
            breakdown=row.player.rating.breakdown,
            last5=list(row.player.last5),
        )
        for row in rows
    ]


def create_app() -> FastAPI:
    app = FastAPI(title="squadrating")

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/context", response_model=RosterContext)
    async def context(payload: ContextRequest) -> RosterContext:
        return compute_context(payload.players)

    @app.post("/rating", response_model=RatingResult)
    async def rating(payload: RatingRequest) -> RatingResult:
        return compute_rating(payload.stats, payload.context, raw_points=payload.raw_points)

    @app.post("/ratings", response_model=RosterRatingResponse)
    async def ratings(payload: RosterRatingRequest) -> RosterRatingResponse:
        stats_by_player = {}
        names = {}
        for player in payload.players:
            if player.player_id in stats_by_player:
                raise HTTPException(
                    status_code=400, detail=f"Duplicate player_id {player.player_id!r}"
                )
            stats_by_player[player.player_id] = player.stats
            if player.name:
                names[player.player_id] = player.name

        criteria = StandingsCriteria(
            min_matches=payload.min_matches,
            query=payload.query,
            sort_by=payload.sort_by,
            sort_direction=payload.sort_direction,
        )
        try:
            roster_context, rated = rate_roster(stats_by_player, names=names)
            rows = filter_rows(rank_players(rated, criteria), criteria)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

        logger.debug("Rated %d players via API", len(rated))
        return RosterRatingResponse(
            context=roster_context,
            regime=roster_context.regime.value,
            players=_to_response(rows),
        )

    @app.post("/standings", response_model=RosterRatingResponse)
    async def standings(payload: StandingsRequest) -> RosterRatingResponse:
        criteria = StandingsCriteria(
            min_matches=payload.min_matches,
            query=payload.query,
            sort_by=payload.sort_by,
            sort_direction=payload.sort_direction,
            tournament_id=payload.tournament_id,
        )
        try:
            table = build_standings(
                payload.roster, payload.matches, payload.attendance, payload.events, criteria
            )
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

        return RosterRatingResponse(
            context=table.context,
            regime=table.context.regime.value,
            players=_to_response(table.rows),
        )

    return app
