from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, Field

from squadrating.ingest import AttendanceRow, EventRow, FormItem, MatchRow, RosterRow
from squadrating.models import PlayerStats, RatingBreakdown, RosterContext


SortBy = Literal["rating", "points", "goals", "assists", "discipline", "matches", "name"]


class ContextRequest(BaseModel):
    players: List[PlayerStats] = Field(default_factory=list)


class RatingRequest(BaseModel):
    stats: PlayerStats
    context: RosterContext
    raw_points: int | None = Field(default=None, ge=0)


class RosterPlayer(BaseModel):
    player_id: str = Field(..., min_length=1)
    name: str | None = None
    stats: PlayerStats


class RosterRatingRequest(BaseModel):
    players: List[RosterPlayer] = Field(default_factory=list)
    sort_by: SortBy = "rating"
    sort_direction: Literal["asc", "desc"] = "desc"
    min_matches: int = Field(default=0, ge=0)
    query: str | None = None


class StandingsRequest(BaseModel):
    roster: List[RosterRow] = Field(default_factory=list)
    matches: List[MatchRow] = Field(default_factory=list)
    attendance: List[AttendanceRow] = Field(default_factory=list)
    events: List[EventRow] = Field(default_factory=list)
    sort_by: SortBy = "rating"
    sort_direction: Literal["asc", "desc"] = "desc"
    min_matches: int = Field(default=0, ge=0)
    query: str | None = None
    tournament_id: str | None = None


class RatedPlayerResponse(BaseModel):
    rank: int
    rank_delta: int = 0
    player_id: str
    name: str
    stats: PlayerStats
    raw_points: int
    rating: int
    breakdown: RatingBreakdown
    last5: List[FormItem] = Field(default_factory=list)


class RosterRatingResponse(BaseModel):
    context: RosterContext
    regime: str
    players: List[RatedPlayerResponse]
