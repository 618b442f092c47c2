"""Roster-normalized player performance ratings."""

from squadrating.models import PlayerStats, RatingBreakdown, RatingResult, Role, RosterContext
from squadrating.rating import compute_context, compute_rating

__all__ = [
    "PlayerStats",
    "RatingBreakdown",
    "RatingResult",
    "Role",
    "RosterContext",
    "compute_context",
    "compute_rating",
]
