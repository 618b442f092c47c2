"""Lightweight REST client for the squadrating API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


def load_players(path: Path) -> list[dict]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Invalid roster JSON: {exc}") from exc
    if isinstance(data, dict):
        data = data.get("players", [])
    if not isinstance(data, list):
        raise SystemExit("roster JSON must be a list of players or an object with a 'players' list")
    return data


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the squadrating REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("roster", type=Path, help="JSON file of {player_id, name, stats} entries")
    parser.add_argument("--sort", default="rating", help="Sort key for the standings")
    parser.add_argument("--direction", default="desc", choices=("asc", "desc"))
    parser.add_argument("--min-matches", type=int, default=0)
    parser.add_argument("--context-only", action="store_true", help="Only fetch the roster context")
    args = parser.parse_args()

    players = load_players(args.roster)

    with httpx.Client(base_url=args.base_url) as client:
        if args.context_only:
            resp = client.post("/context", json={"players": [p.get("stats", {}) for p in players]})
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
            return

        resp = client.post(
            "/ratings",
            json={
                "players": players,
                "sort_by": args.sort,
                "sort_direction": args.direction,
                "min_matches": args.min_matches,
            },
        )
        if resp.status_code == 422:
            raise SystemExit(f"Rejected roster: {resp.text}")
        resp.raise_for_status()
        payload = resp.json()

    context = payload["context"]
    print(
        f"Regime {payload['regime']}: max matches {context['max_matches']}, "
        f"max raw points {context['max_raw_points']}"
    )
    for player in payload["players"]:
        print(f"{player['rank']:>3} {player['name']:<24} {player['rating']:>3}")


if __name__ == "__main__":
    main()
