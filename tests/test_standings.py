from datetime import date

import pytest

from squadrating.ingest import AttendanceRow, EventRow, FormStatus, MatchRow, RosterRow
from squadrating.models import PlayerStats, Role
from squadrating.standings import (
    StandingsCriteria,
    build_standings,
    filter_rows,
    rank_players,
    rate_roster,
    sort_players,
)


POOL = {
    "a": PlayerStats(matches=10, goals=5, assists=3, yellow_cards=1),
    "b": PlayerStats(matches=12, goals=10),
    "c": PlayerStats(matches=4, role=Role.GOALKEEPER),
    "d": PlayerStats(),
}
NAMES = {"a": "alpha", "b": "Bravo", "c": "Charlie", "d": "delta"}


def _order(criteria: StandingsCriteria) -> list[str]:
    _, rated = rate_roster(POOL, names=NAMES)
    return [player.player_id for player in sort_players(rated, criteria)]


def test_rate_roster_shares_one_context():
    context, rated = rate_roster(POOL, names=NAMES)

    assert context.max_matches == 12
    assert context.max_raw_points == 40
    ratings = {player.player_id: player.rating.value for player in rated}
    assert ratings == {"a": 90, "b": 94, "c": 55, "d": 50}
    assert {player.player_id: player.raw_points for player in rated}["a"] == 29


def test_rate_roster_falls_back_to_player_id_for_names():
    _, rated = rate_roster({"z": PlayerStats(matches=1)})
    assert rated[0].name == "z"


@pytest.mark.parametrize(
    "criteria, expected",
    [
        (StandingsCriteria(), ["b", "a", "c", "d"]),
        (StandingsCriteria(sort_direction="asc"), ["d", "c", "a", "b"]),
        (StandingsCriteria(sort_by="goals"), ["b", "a", "c", "d"]),
        (StandingsCriteria(sort_by="matches", sort_direction="asc"), ["d", "c", "a", "b"]),
        (StandingsCriteria(sort_by="discipline"), ["a", "c", "d", "b"]),
        (StandingsCriteria(sort_by="points"), ["b", "a", "c", "d"]),
        (StandingsCriteria(sort_by="name", sort_direction="desc"), ["a", "b", "c", "d"]),
    ],
)
def test_sort_players(criteria, expected):
    assert _order(criteria) == expected


def test_sort_players_rejects_unknown_key():
    _, rated = rate_roster(POOL)
    with pytest.raises(ValueError):
        sort_players(rated, StandingsCriteria(sort_by="height"))  # type: ignore[arg-type]


def test_filters_keep_original_ranks():
    _, rated = rate_roster(POOL, names=NAMES)
    rows = rank_players(rated, StandingsCriteria())

    busy = filter_rows(rows, StandingsCriteria(min_matches=5))
    assert [(row.player.player_id, row.rank) for row in busy] == [("b", 1), ("a", 2)]

    named = filter_rows(rows, StandingsCriteria(query="AR"))
    assert [(row.player.player_id, row.rank) for row in named] == [("c", 3)]


def _season(second_matchday: bool = True):
    roster = [
        RosterRow(player_id="p1", name="Ann", position="FW"),
        RosterRow(player_id="p2", name="Bob", position="FW"),
    ]
    matches = [MatchRow(match_id="m1", match_date="2024-04-01", status="played")]
    attendance = [
        AttendanceRow(match_id="m1", player_id="p1"),
        AttendanceRow(match_id="m1", player_id="p2"),
    ]
    events = [EventRow(match_id="m1", player_id="p1", event_type="goal")]
    if second_matchday:
        matches.append(MatchRow(match_id="m2", match_date="2024-04-08"))
        attendance.append(AttendanceRow(match_id="m2", player_id="p2"))
        events += [
            EventRow(match_id="m2", player_id="p2", event_type="goal"),
            EventRow(match_id="m2", player_id="p2", event_type="goal"),
        ]
    return roster, matches, attendance, events


def test_build_standings_tracks_rank_movement():
    table = build_standings(*_season())

    assert table.context.max_matches == 2
    assert table.context.max_raw_points == 8
    assert table.context.is_short_tournament
    summary = [
        (row.rank, row.player.name, row.player.rating.value, row.rank_delta) for row in table.rows
    ]
    assert summary == [(1, "Bob", 97, 1), (2, "Ann", 86, -1)]


def test_build_standings_single_matchday_has_no_movement():
    table = build_standings(*_season(second_matchday=False))

    assert [row.rank_delta for row in table.rows] == [0, 0]
    assert table.rows[0].player.name == "Ann"
    assert table.rows[0].player.rating.value == 97


def test_build_standings_applies_filters_after_ranking():
    table = build_standings(*_season(), StandingsCriteria(min_matches=2))
    assert [(row.rank, row.player.name) for row in table.rows] == [(1, "Bob")]

    table = build_standings(*_season(), StandingsCriteria(query="ann"))
    assert [(row.rank, row.player.name) for row in table.rows] == [(2, "Ann")]


def test_match_row_accepts_timestamps():
    row = MatchRow(match_id="m9", match_date="2024-04-08 19:30:00")
    assert row.match_date == date(2024, 4, 8)
    assert row.is_played


def _two_competitions():
    roster = [RosterRow(player_id="p1", name="Ann"), RosterRow(player_id="p2", name="Bob")]
    matches = [
        MatchRow(match_id=f"l{day}", match_date=f"2024-04-0{day}", tournament_id="league")
        for day in range(1, 7)
    ]
    matches.append(
        MatchRow(match_id="c1", match_date="2024-05-01", tournament_id="cup", score_team=3, score_opponent=1)
    )
    attendance = [AttendanceRow(match_id=match.match_id, player_id="p1") for match in matches]
    attendance.append(AttendanceRow(match_id="c1", player_id="p2"))
    events = [EventRow(match_id="c1", player_id="p2", event_type="goal")]
    return roster, matches, attendance, events


def test_build_standings_selects_one_tournament():
    season = build_standings(*_two_competitions())
    assert season.context.max_matches == 7
    assert not season.context.is_short_tournament

    cup = build_standings(*_two_competitions(), StandingsCriteria(tournament_id="cup"))
    assert cup.context.max_matches == 1
    assert cup.context.is_short_tournament
    stats = {row.player.player_id: row.player.stats for row in cup.rows}
    assert stats["p1"].matches == 1
    assert stats["p2"].goals == 1


def test_build_standings_carries_recent_form():
    table = build_standings(*_two_competitions())
    form = {row.player.player_id: row.player.last5 for row in table.rows}

    assert [item.match_id for item in form["p1"]] == ["c1", "l6", "l5", "l4", "l3"]
    assert form["p1"][0].status is FormStatus.WIN_BONUS
    assert form["p1"][1].status is FormStatus.NEUTRAL
    assert [item.status for item in form["p2"]] == [FormStatus.GOOD]
