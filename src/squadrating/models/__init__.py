"""Player statistics and rating value types."""

from .player import PlayerStats, RatingBreakdown, RatingResult, Role, RosterContext

__all__ = [
    "PlayerStats",
    "RatingBreakdown",
    "RatingResult",
    "Role",
    "RosterContext",
]
