"""Roster-wide normalization context shared by every rating in a refresh."""

from __future__ import annotations

from typing import Iterable

from squadrating.config.regimes import (
    GOAL_POINTS,
    GOALKEEPER_ASSIST_POINTS,
    OUTFIELD_ASSIST_POINTS,
)
from squadrating.models import PlayerStats, Role, RosterContext


def raw_points(goals: int, assists: int, role: Role = Role.OUTFIELD) -> int:
    """Weighted goal/assist total; goalkeeper assists are worth as much as goals."""

    assist_points = GOALKEEPER_ASSIST_POINTS if role is Role.GOALKEEPER else OUTFIELD_ASSIST_POINTS
    return goals * GOAL_POINTS + assists * assist_points


def stats_raw_points(stats: PlayerStats) -> int:
    return raw_points(stats.goals, stats.assists, stats.role)


def compute_context(roster_stats: Iterable[PlayerStats]) -> RosterContext:
    """Return the maxima over a comparison pool, each floored at 1.

    An empty pool yields ``RosterContext(max_matches=1, max_raw_points=1)``.
    """

    max_matches = 1
    max_points = 1
    for stats in roster_stats:
        max_matches = max(max_matches, stats.matches)
        max_points = max(max_points, stats_raw_points(stats))
    return RosterContext(max_matches=max_matches, max_raw_points=max_points)
