"""Rate a whole roster against one context and build the sorted standings table."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Literal, Mapping, Optional

from squadrating.ingest import (
    AttendanceRow,
    EventRow,
    FormItem,
    MatchRow,
    RosterRow,
    match_dates,
    recent_form,
    select_matches,
    tally_roster,
)
from squadrating.models import PlayerStats, RatingResult, RosterContext
from squadrating.rating import compute_context, compute_rating, stats_raw_points


logger = logging.getLogger(__name__)

SortKey = Literal["rating", "points", "goals", "assists", "discipline", "matches", "name"]
SortDirection = Literal["asc", "desc"]

SORT_KEYS: tuple[str, ...] = ("rating", "points", "goals", "assists", "discipline", "matches", "name")


@dataclass(frozen=True)
class StandingsCriteria:
    """Sorting and filtering options for a standings table."""

    min_matches: int = 0
    query: str | None = None
    sort_by: SortKey = "rating"
    sort_direction: SortDirection = "desc"
    # Restricts the comparison pool, and with it the regime, to one tournament.
    tournament_id: str | None = None


@dataclass(frozen=True)
class RatedPlayer:
    player_id: str
    name: str
    stats: PlayerStats
    raw_points: int
    rating: RatingResult
    last5: tuple[FormItem, ...] = ()

    @property
    def points(self) -> int:
        return self.stats.goals + self.stats.assists

    @property
    def cards(self) -> int:
        return self.stats.red_cards * 2 + self.stats.yellow_cards


@dataclass(frozen=True)
class StandingsRow:
    rank: int
    rank_delta: int
    player: RatedPlayer


@dataclass(frozen=True)
class StandingsTable:
    context: RosterContext
    rows: List[StandingsRow]


def rate_roster(
    stats_by_player: Mapping[str, PlayerStats],
    *,
    names: Optional[Mapping[str, str]] = None,
    form: Optional[Mapping[str, Iterable[FormItem]]] = None,
) -> tuple[RosterContext, List[RatedPlayer]]:
    """Compute one context over the pool and rate every player against it."""

    names = names or {}
    form = form or {}
    context = compute_context(stats_by_player.values())
    rated = []
    for player_id, stats in stats_by_player.items():
        points = stats_raw_points(stats)
        rated.append(
            RatedPlayer(
                player_id=player_id,
                name=names.get(player_id) or player_id,
                stats=stats,
                raw_points=points,
                rating=compute_rating(stats, context, raw_points=points),
                last5=tuple(form.get(player_id, ())),
            )
        )
    return context, rated


def _primary_key(player: RatedPlayer, sort_by: str) -> tuple:
    stats = player.stats
    if sort_by == "points":
        return (player.points, stats.goals, -player.cards)
    if sort_by == "goals":
        return (stats.goals, stats.assists)
    if sort_by == "assists":
        return (stats.assists, stats.goals)
    if sort_by == "discipline":
        return (player.cards, -player.points)
    if sort_by == "matches":
        return (stats.matches, player.points)
    return (player.rating.value, player.points, stats.goals)


def sort_players(players: Iterable[RatedPlayer], criteria: StandingsCriteria) -> List[RatedPlayer]:
    if criteria.sort_by not in SORT_KEYS:
        raise ValueError(f"Unknown sort key {criteria.sort_by!r}")

    # Ties on the primary key fall back to rating descending, then name.
    ordered = sorted(players, key=lambda p: (-p.rating.value, p.name.casefold()))
    if criteria.sort_by == "name":
        return sorted(ordered, key=lambda p: p.name.casefold())
    return sorted(
        ordered,
        key=lambda p: _primary_key(p, criteria.sort_by),
        reverse=criteria.sort_direction == "desc",
    )


def filter_rows(rows: Iterable[StandingsRow], criteria: StandingsCriteria) -> List[StandingsRow]:
    query = (criteria.query or "").strip().casefold()
    selected = []
    for row in rows:
        if row.player.stats.matches < criteria.min_matches:
            continue
        if query and query not in row.player.name.casefold():
            continue
        selected.append(row)
    return selected


def rank_players(
    players: Iterable[RatedPlayer],
    criteria: StandingsCriteria,
    *,
    previous_ranks: Optional[Mapping[str, int]] = None,
) -> List[StandingsRow]:
    previous_ranks = previous_ranks or {}
    rows = []
    for index, player in enumerate(sort_players(players, criteria), start=1):
        old_rank = previous_ranks.get(player.player_id)
        delta = old_rank - index if old_rank else 0
        rows.append(StandingsRow(rank=index, rank_delta=delta, player=player))
    return rows


def build_standings(
    roster: Iterable[RosterRow],
    matches: Iterable[MatchRow],
    attendance: Iterable[AttendanceRow],
    events: Iterable[EventRow],
    criteria: StandingsCriteria | None = None,
) -> StandingsTable:
    """Rate the roster over all played matches (of one tournament, if selected) and rank it.

    ``rank_delta`` compares against the table as it stood before the latest
    matchday. Filters apply after ranking, so ranks do not shift when rows
    are hidden.
    """

    criteria = criteria or StandingsCriteria()
    roster = list(roster)
    matches = select_matches(matches, criteria.tournament_id)
    attendance = list(attendance)
    events = list(events)
    names: Dict[str, str] = {row.player_id: row.name for row in roster}

    previous_ranks: Dict[str, int] = {}
    dates = match_dates(matches)
    if len(dates) > 1:
        before = tally_roster(roster, matches, attendance, events, exclude_dates=[dates[-1]])
        _, previous = rate_roster(before, names=names)
        previous_ranks = {
            row.player.player_id: row.rank for row in rank_players(previous, criteria)
        }
        logger.debug("Ranked %d players before matchday %s", len(previous_ranks), dates[-1])

    current = tally_roster(roster, matches, attendance, events)
    form = recent_form(matches, attendance, events)
    context, rated = rate_roster(current, names=names, form=form)
    rows = rank_players(rated, criteria, previous_ranks=previous_ranks)
    logger.info(
        "Rated %d players (max_matches=%d, max_raw_points=%d, regime=%s)",
        len(rated),
        context.max_matches,
        context.max_raw_points,
        context.regime.value,
    )
    return StandingsTable(context=context, rows=filter_rows(rows, criteria))
