from __future__ import annotations

from pathlib import Path

import pytest


ROSTER_CSV = """id,name,position
p1,Ann Keeper,GK
p2,Bob Striker,FW
p3,Cal Back,
"""

MATCHES_CSV = """id,match_date,status
m1,2024-03-01,played
m2,2024-03-08T18:00:00,played
m3,2024-03-15,scheduled
"""

ATTENDANCE_CSV = """match_id,player_id
m1,p1
m1,p2
m2,p1
m2,p2
m2,p2
m2,p3
m3,p2
"""

EVENTS_CSV = """match_id,player_id,assist_player_id,event_type
m1,p2,p1,goal
m2,p2,,Penalty_Scored
m2,p3,,yellow_card
m2,p3,,substitution
m2,x9,,goal
m3,p2,,goal
"""


@pytest.fixture()
def season_files(tmp_path: Path) -> dict[str, Path]:
    files = {
        "roster": ROSTER_CSV,
        "matches": MATCHES_CSV,
        "attendance": ATTENDANCE_CSV,
        "events": EVENTS_CSV,
    }
    paths = {}
    for name, text in files.items():
        path = tmp_path / f"{name}.csv"
        path.write_text(text, encoding="utf-8")
        paths[name] = path
    return paths
