"""Load roster/match/event rows and tally them into per-player season stats."""

from __future__ import annotations

import csv
import logging
from collections import Counter
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic.config import ConfigDict

from squadrating.models import PlayerStats, Role


logger = logging.getLogger(__name__)


class IngestError(ValueError):
    """Raised when an input file cannot be turned into rows."""


class EventKind(Enum):
    GOAL = "goal"
    YELLOW_CARD = "yellow_card"
    RED_CARD = "red_card"
    OTHER = "other"


_EVENT_ALIASES: Mapping[str, EventKind] = {
    "goal": EventKind.GOAL,
    "penalty_scored": EventKind.GOAL,
    "yellow_card": EventKind.YELLOW_CARD,
    "red_card": EventKind.RED_CARD,
}


def classify_event(event_type: Optional[str]) -> EventKind:
    return _EVENT_ALIASES.get((event_type or "").strip().lower(), EventKind.OTHER)


def _extract(row: Mapping[str, Optional[str]], spec: str) -> Optional[str]:
    if "|" in spec:
        parts = [(row.get(col.strip()) or "").strip() for col in spec.split("|")]
        joined = " ".join(part for part in parts if part)
        return joined or None
    value = row.get(spec)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _columns(spec: str) -> List[str]:
    return [col.strip() for col in spec.split("|")]


class _MappedRow(BaseModel):
    @classmethod
    def from_mapping(cls, row: Mapping[str, Optional[str]], mapping: Mapping[str, str]):
        data = {}
        for key in cls.model_fields:
            spec = mapping.get(key)
            if not spec:
                continue
            value = _extract(row, spec)
            if value is not None:
                data[key] = value
        return cls(**data)


class RosterRow(_MappedRow):
    player_id: str
    name: str = ""
    position: Optional[str] = None

    @property
    def role(self) -> Role:
        return Role.from_position(self.position)


class MatchRow(_MappedRow):
    match_id: str
    match_date: date
    status: Optional[str] = None
    tournament_id: Optional[str] = None
    score_team: Optional[int] = Field(default=None, ge=0)
    score_opponent: Optional[int] = Field(default=None, ge=0)

    @field_validator("match_date", mode="before")
    @classmethod
    def date_part(cls, value):
        # Timestamps only matter by calendar day.
        if isinstance(value, str):
            return value.strip().replace(" ", "T").split("T", 1)[0]
        return value

    @property
    def is_played(self) -> bool:
        return not self.status or self.status.strip().lower() == "played"

    @property
    def result(self) -> Optional[str]:
        """Match outcome from our side (W/D/L), or None when the score is unknown."""

        if self.score_team is None or self.score_opponent is None:
            return None
        if self.score_team > self.score_opponent:
            return "W"
        if self.score_team < self.score_opponent:
            return "L"
        return "D"


class AttendanceRow(_MappedRow):
    match_id: str
    player_id: str


class EventRow(_MappedRow):
    match_id: str
    event_type: str
    player_id: Optional[str] = None
    assist_player_id: Optional[str] = None

    @property
    def kind(self) -> EventKind:
        return classify_event(self.event_type)


DEFAULT_ROSTER_MAPPING = {
    "player_id": "id",
    "name": "name",
    "position": "position",
}

DEFAULT_MATCHES_MAPPING = {
    "match_id": "id",
    "match_date": "match_date",
    "status": "status",
    "tournament_id": "tournament_id",
    "score_team": "score_team",
    "score_opponent": "score_opponent",
}

DEFAULT_ATTENDANCE_MAPPING = {
    "match_id": "match_id",
    "player_id": "player_id",
}

DEFAULT_EVENTS_MAPPING = {
    "match_id": "match_id",
    "player_id": "player_id",
    "assist_player_id": "assist_player_id",
    "event_type": "event_type",
}

RowT = TypeVar("RowT", bound=_MappedRow)


def _load_rows(
    path: Path,
    model: Type[RowT],
    defaults: Mapping[str, str],
    overrides: Optional[Mapping[str, str]],
    required: Sequence[str],
) -> List[RowT]:
    mapping = {**defaults, **(overrides or {})}
    with path.open(newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        header = {name.strip() for name in (reader.fieldnames or ())}
        missing = [
            key
            for key in required
            if any(col not in header for col in _columns(mapping[key]))
        ]
        if missing:
            raise IngestError(f"{path.name} is missing columns for: {', '.join(missing)}")

        rows: List[RowT] = []
        # Header is line 1.
        for line_no, raw in enumerate(reader, start=2):
            # Padded header names must resolve the same way the column check does.
            cleaned = {key.strip(): value for key, value in raw.items() if key is not None}
            try:
                rows.append(model.from_mapping(cleaned, mapping))
            except ValidationError as exc:
                raise IngestError(f"{path.name} line {line_no}: {exc}") from exc
    logger.debug("Loaded %d %s rows from %s", len(rows), model.__name__, path)
    return rows


def load_roster_csv(path: Path, *, mapping: Mapping[str, str] | None = None) -> List[RosterRow]:
    return _load_rows(path, RosterRow, DEFAULT_ROSTER_MAPPING, mapping, ("player_id",))


def load_matches_csv(path: Path, *, mapping: Mapping[str, str] | None = None) -> List[MatchRow]:
    return _load_rows(path, MatchRow, DEFAULT_MATCHES_MAPPING, mapping, ("match_id", "match_date"))


def load_attendance_csv(path: Path, *, mapping: Mapping[str, str] | None = None) -> List[AttendanceRow]:
    return _load_rows(
        path, AttendanceRow, DEFAULT_ATTENDANCE_MAPPING, mapping, ("match_id", "player_id")
    )


def load_events_csv(path: Path, *, mapping: Mapping[str, str] | None = None) -> List[EventRow]:
    return _load_rows(path, EventRow, DEFAULT_EVENTS_MAPPING, mapping, ("match_id", "event_type"))


def select_matches(matches: Iterable[MatchRow], tournament_id: Optional[str] = None) -> List[MatchRow]:
    """Matches of one tournament, or all of them when ``tournament_id`` is None."""

    if tournament_id is None:
        return list(matches)
    return [match for match in matches if match.tournament_id == tournament_id]


def match_dates(matches: Iterable[MatchRow]) -> List[date]:
    """Distinct dates of played matches, oldest first."""

    return sorted({match.match_date for match in matches if match.is_played})


def latest_match_date(matches: Iterable[MatchRow]) -> Optional[date]:
    dates = match_dates(matches)
    return dates[-1] if dates else None


def tally_roster(
    roster: Iterable[RosterRow],
    matches: Iterable[MatchRow],
    attendance: Iterable[AttendanceRow],
    events: Iterable[EventRow],
    *,
    exclude_dates: Iterable[date] = (),
    tournament_id: Optional[str] = None,
) -> Dict[str, PlayerStats]:
    """Aggregate attendance and events of played matches into ``PlayerStats`` per player.

    Every roster member appears in the result, with zero stats if inactive.
    Players referenced by attendance or events but missing from the roster are
    tallied as outfield players. With ``tournament_id`` only that tournament's
    matches count.
    """

    excluded = set(exclude_dates)
    counted = {
        match.match_id
        for match in select_matches(matches, tournament_id)
        if match.is_played and match.match_date not in excluded
    }
    roles = {row.player_id: row.role for row in roster}
    tallies: Dict[str, Counter] = {player_id: Counter() for player_id in roles}

    def ensure(player_id: str) -> Counter:
        if player_id not in tallies:
            logger.warning("Player %s is not on the roster; rating as outfield", player_id)
            tallies[player_id] = Counter()
        return tallies[player_id]

    seen: set[tuple[str, str]] = set()
    for row in attendance:
        if row.match_id not in counted:
            continue
        key = (row.match_id, row.player_id)
        if key in seen:
            continue
        seen.add(key)
        ensure(row.player_id)["matches"] += 1

    for event in events:
        if event.match_id not in counted:
            continue
        kind = event.kind
        if kind is EventKind.GOAL:
            if event.player_id:
                ensure(event.player_id)["goals"] += 1
            if event.assist_player_id:
                ensure(event.assist_player_id)["assists"] += 1
        elif kind is EventKind.YELLOW_CARD and event.player_id:
            ensure(event.player_id)["yellow_cards"] += 1
        elif kind is EventKind.RED_CARD and event.player_id:
            ensure(event.player_id)["red_cards"] += 1
        elif kind is EventKind.OTHER:
            logger.debug("Ignoring event %r in match %s", event.event_type, event.match_id)

    return {
        player_id: PlayerStats(role=roles.get(player_id, Role.OUTFIELD), **counts)
        for player_id, counts in tallies.items()
    }


class FormStatus(str, Enum):
    GOOD = "good"
    BAD = "bad"
    WIN_BONUS = "win_bonus"
    NEUTRAL = "neutral"


class FormItem(BaseModel):
    """One attended match in a player's recent-form strip."""

    match_id: str
    match_date: date
    status: FormStatus
    result: Optional[str] = None
    goals: int = 0
    assists: int = 0
    red_card: bool = False

    model_config = ConfigDict(frozen=True)


def _form_status(goals: int, assists: int, red_card: bool, result: Optional[str]) -> FormStatus:
    if red_card:
        return FormStatus.BAD
    if goals or assists:
        return FormStatus.GOOD
    if result == "W":
        return FormStatus.WIN_BONUS
    return FormStatus.NEUTRAL


def recent_form(
    matches: Iterable[MatchRow],
    attendance: Iterable[AttendanceRow],
    events: Iterable[EventRow],
    *,
    limit: int = 5,
    tournament_id: Optional[str] = None,
) -> Dict[str, List[FormItem]]:
    """Each player's ``limit`` most recent attended played matches, newest first.

    A red card marks the match ``bad``, otherwise a goal or assist marks it
    ``good``, otherwise a team win gives ``win_bonus``; the rest are ``neutral``.
    """

    played = sorted(
        (match for match in select_matches(matches, tournament_id) if match.is_played),
        key=lambda match: match.match_date,
        reverse=True,
    )
    by_id = {match.match_id: match for match in played}

    present: Dict[str, List[str]] = {}
    for row in attendance:
        if row.match_id in by_id:
            players = present.setdefault(row.match_id, [])
            if row.player_id not in players:
                players.append(row.player_id)

    contributions: Dict[tuple[str, str], Counter] = {}
    for event in events:
        if event.match_id not in by_id:
            continue
        kind = event.kind
        if kind is EventKind.GOAL:
            if event.player_id:
                contributions.setdefault((event.match_id, event.player_id), Counter())["goals"] += 1
            if event.assist_player_id:
                key = (event.match_id, event.assist_player_id)
                contributions.setdefault(key, Counter())["assists"] += 1
        elif kind is EventKind.RED_CARD and event.player_id:
            contributions.setdefault((event.match_id, event.player_id), Counter())["red_cards"] += 1

    form: Dict[str, List[FormItem]] = {}
    for match in played:
        for player_id in present.get(match.match_id, ()):
            items = form.setdefault(player_id, [])
            if len(items) >= limit:
                continue
            counts = contributions.get((match.match_id, player_id), Counter())
            red_card = counts["red_cards"] > 0
            items.append(
                FormItem(
                    match_id=match.match_id,
                    match_date=match.match_date,
                    status=_form_status(counts["goals"], counts["assists"], red_card, match.result),
                    result=match.result,
                    goals=counts["goals"],
                    assists=counts["assists"],
                    red_card=red_card,
                )
            )
    return form
