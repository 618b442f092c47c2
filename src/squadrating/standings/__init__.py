"""Roster standings built on top of the rating engine."""

from .table import (
    SORT_KEYS,
    RatedPlayer,
    StandingsCriteria,
    StandingsRow,
    StandingsTable,
    build_standings,
    filter_rows,
    rank_players,
    rate_roster,
    sort_players,
)

__all__ = [
    "SORT_KEYS",
    "RatedPlayer",
    "StandingsCriteria",
    "StandingsRow",
    "StandingsTable",
    "build_standings",
    "filter_rows",
    "rank_players",
    "rate_roster",
    "sort_players",
]
