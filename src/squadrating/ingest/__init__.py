"""Input adapters that turn raw roster/match/event rows into player stats."""

from .events import (
    AttendanceRow,
    EventKind,
    EventRow,
    FormItem,
    FormStatus,
    IngestError,
    MatchRow,
    RosterRow,
    classify_event,
    latest_match_date,
    load_attendance_csv,
    load_events_csv,
    load_matches_csv,
    load_roster_csv,
    match_dates,
    recent_form,
    select_matches,
    tally_roster,
)

__all__ = [
    "AttendanceRow",
    "EventKind",
    "EventRow",
    "FormItem",
    "FormStatus",
    "IngestError",
    "MatchRow",
    "RosterRow",
    "classify_event",
    "latest_match_date",
    "load_attendance_csv",
    "load_events_csv",
    "load_matches_csv",
    "load_roster_csv",
    "match_dates",
    "recent_form",
    "select_matches",
    "tally_roster",
]
