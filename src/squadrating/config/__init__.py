"""Rating constants and regime lookup helpers."""

from .regimes import (
    BASE_RATING,
    RATING_FLOOR,
    SHORT_TOURNAMENT_MAX_MATCHES,
    Regime,
    RegimeConstants,
    get_constants,
    get_regime,
    iter_constants,
)

__all__ = [
    "BASE_RATING",
    "RATING_FLOOR",
    "SHORT_TOURNAMENT_MAX_MATCHES",
    "Regime",
    "RegimeConstants",
    "get_constants",
    "get_regime",
    "iter_constants",
]
