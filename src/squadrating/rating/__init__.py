"""Roster context aggregation and the player rating formula."""

from .context import compute_context, raw_points, stats_raw_points
from .engine import (
    compress,
    compute_rating,
    discipline_penalty,
    experience_score,
    form_score,
    skill_score,
)

__all__ = [
    "compute_context",
    "compute_rating",
    "compress",
    "discipline_penalty",
    "experience_score",
    "form_score",
    "raw_points",
    "skill_score",
    "stats_raw_points",
]
