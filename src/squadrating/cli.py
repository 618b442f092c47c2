"""Command-line interface for rating a roster from exported CSV files."""

from __future__ import annotations

import argparse
import csv
import json
import logging
from pathlib import Path

from squadrating.ingest import (
    IngestError,
    load_attendance_csv,
    load_events_csv,
    load_matches_csv,
    load_roster_csv,
)
from squadrating.standings import SORT_KEYS, StandingsCriteria, StandingsTable, build_standings


OUTPUT_HEADER = [
    "rank",
    "rank_delta",
    "player_id",
    "name",
    "role",
    "matches",
    "goals",
    "assists",
    "yellow_cards",
    "red_cards",
    "raw_points",
    "rating",
    "performance",
    "experience",
    "discipline",
]


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Rate roster players from match and event exports")
    parser.add_argument("--roster", type=Path, required=True, help="Path to roster CSV")
    parser.add_argument("--matches", type=Path, required=True, help="Path to matches CSV")
    parser.add_argument("--attendance", type=Path, required=True, help="Path to match attendance CSV")
    parser.add_argument("--events", type=Path, required=True, help="Path to match events CSV")
    for name in ("roster", "matches", "attendance", "events"):
        parser.add_argument(
            f"--{name}-column",
            action="append",
            default=[],
            help=f"Mapping for {name} CSV columns (e.g., player_id=id)",
        )
    parser.add_argument("--sort", choices=SORT_KEYS, default="rating", help="Sort key")
    parser.add_argument("--direction", choices=("asc", "desc"), default="desc", help="Sort direction")
    parser.add_argument("--min-matches", type=int, default=0, help="Hide players with fewer matches")
    parser.add_argument("--query", default=None, help="Only show players whose name contains this text")
    parser.add_argument("--tournament", default=None, help="Only rate matches of this tournament id")
    parser.add_argument("--output", type=Path, default=Path("standings.csv"), help="Output CSV path")
    parser.add_argument("--json", type=Path, default=None, help="Optional path to write standings JSON")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def _parse_mapping(entries: list[str]) -> dict[str, str]:
    mapping: dict[str, str] = {}
    for entry in entries:
        if "=" not in entry:
            raise ValueError(f"Invalid mapping entry '{entry}', expected key=value")
        key, value = entry.split("=", 1)
        mapping[key.strip()] = value.strip()
    return mapping


def write_standings_csv(table: StandingsTable, path: Path) -> None:
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(OUTPUT_HEADER)
        for row in table.rows:
            player = row.player
            stats = player.stats
            breakdown = player.rating.breakdown
            writer.writerow([
                row.rank,
                row.rank_delta,
                player.player_id,
                player.name,
                stats.role.value,
                stats.matches,
                stats.goals,
                stats.assists,
                stats.yellow_cards,
                stats.red_cards,
                player.raw_points,
                player.rating.value,
                breakdown.performance,
                breakdown.experience,
                f"{breakdown.discipline:.1f}",
            ])


def standings_to_dict(table: StandingsTable) -> dict:
    return {
        "context": table.context.model_dump(),
        "regime": table.context.regime.value,
        "players": [
            {
                "rank": row.rank,
                "rank_delta": row.rank_delta,
                "player_id": row.player.player_id,
                "name": row.player.name,
                "stats": row.player.stats.model_dump(mode="json"),
                "raw_points": row.player.raw_points,
                "rating": row.player.rating.model_dump(),
                "last5": [item.model_dump(mode="json") for item in row.player.last5],
            }
            for row in table.rows
        ],
    }


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)-5s [%(name)s] %(message)s",
    )

    try:
        roster = load_roster_csv(args.roster, mapping=_parse_mapping(args.roster_column) or None)
        matches = load_matches_csv(args.matches, mapping=_parse_mapping(args.matches_column) or None)
        attendance = load_attendance_csv(
            args.attendance, mapping=_parse_mapping(args.attendance_column) or None
        )
        events = load_events_csv(args.events, mapping=_parse_mapping(args.events_column) or None)
    except (IngestError, ValueError) as exc:
        print(f"Could not load input: {exc}")
        return 1

    criteria = StandingsCriteria(
        min_matches=max(0, args.min_matches),
        query=args.query,
        sort_by=args.sort,
        sort_direction=args.direction,
        tournament_id=args.tournament,
    )
    table = build_standings(roster, matches, attendance, events, criteria)

    write_standings_csv(table, args.output)
    print(
        f"Rated {len(table.rows)} players "
        f"({table.context.regime.value} regime, max matches {table.context.max_matches}) "
        f"-> {args.output}"
    )
    if args.json:
        args.json.write_text(json.dumps(standings_to_dict(table), indent=2), encoding="utf-8")
        print(f"Wrote standings JSON to {args.json}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
