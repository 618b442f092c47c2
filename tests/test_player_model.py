import pytest
from pydantic import ValidationError

from squadrating.config import Regime
from squadrating.models import PlayerStats, Role, RosterContext


def test_player_stats_is_frozen():
    stats = PlayerStats(matches=3, goals=1, role=Role.GOALKEEPER)

    assert stats.is_goalkeeper
    assert stats.assists == 0

    with pytest.raises((TypeError, ValidationError)):
        stats.goals = 2  # type: ignore[misc]


def test_player_stats_rejects_negative_counts():
    with pytest.raises(ValidationError):
        PlayerStats(matches=-1)
    with pytest.raises(ValidationError):
        PlayerStats(yellow_cards=-2)


@pytest.mark.parametrize(
    "position, expected",
    [
        ("GK", Role.GOALKEEPER),
        (" gk ", Role.GOALKEEPER),
        ("Goalkeeper", Role.GOALKEEPER),
        ("FW", Role.OUTFIELD),
        ("", Role.OUTFIELD),
        (None, Role.OUTFIELD),
    ],
)
def test_role_from_position(position, expected):
    assert Role.from_position(position) is expected


def test_roster_context_requires_positive_matches():
    with pytest.raises(ValidationError):
        RosterContext(max_matches=0, max_raw_points=10)

    context = RosterContext(max_matches=5, max_raw_points=0)
    assert context.regime is Regime.SHORT
    assert context.is_short_tournament


def test_roster_context_long_regime():
    context = RosterContext(max_matches=6, max_raw_points=12)
    assert context.regime is Regime.LONG
    assert not context.is_short_tournament
