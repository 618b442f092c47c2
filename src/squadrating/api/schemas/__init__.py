"""Pydantic models for API I/O."""

from .rating import (
    ContextRequest,
    RatedPlayerResponse,
    RatingRequest,
    RosterPlayer,
    RosterRatingRequest,
    RosterRatingResponse,
    StandingsRequest,
)

__all__ = [
    "ContextRequest",
    "RatedPlayerResponse",
    "RatingRequest",
    "RosterPlayer",
    "RosterRatingRequest",
    "RosterRatingResponse",
    "StandingsRequest",
]
