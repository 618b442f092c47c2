"""Convert one player's season totals into a bounded rating with a breakdown.

Every term is a pure function of the player's stats, the roster context and
the regime constants selected from that context. The final value is squeezed
above the soft cap, clamped to the regime's hard cap and floored at the base
rating, so it always lands in [50, 97].
"""

from __future__ import annotations

import math
from typing import Optional

from squadrating.config import BASE_RATING, RATING_FLOOR, RegimeConstants, get_constants
from squadrating.config.regimes import (
    CONFIDENCE_EXPONENT,
    MAX_XP_BONUS,
    RED_CARD_PENALTY,
    YELLOW_CARD_PENALTY,
)
from squadrating.models import PlayerStats, RatingBreakdown, RatingResult, RosterContext
from squadrating.rating.context import stats_raw_points


def experience_score(matches: int, context: RosterContext, constants: RegimeConstants) -> float:
    threshold = constants.resolve_xp_threshold(context.max_matches)
    participation = min(1.0, matches / max(1, threshold))
    return participation * MAX_XP_BONUS


def discipline_penalty(yellow_cards: int, red_cards: int) -> float:
    return yellow_cards * YELLOW_CARD_PENALTY + red_cards * RED_CARD_PENALTY


def skill_score(points: int, context: RosterContext, constants: RegimeConstants) -> float:
    """Share of the roster's best raw points, scaled into the regime's skill pool.

    Short tournaments take the square root of the share so small samples are
    not crushed toward zero.
    """

    if context.max_raw_points <= 0:
        return 0.0
    relative = points / max(1, context.max_raw_points)
    adjusted = math.sqrt(relative) if constants.sqrt_strength else relative
    return adjusted * constants.skill_pool


def form_score(
    points: int,
    matches: int,
    is_goalkeeper: bool,
    context: RosterContext,
    constants: RegimeConstants,
) -> float:
    """Points-per-match bonus, damped for players with few matches and capped per regime."""

    per_match = points / matches if matches > 0 else 0.0
    reference = constants.resolve_confidence_reference(context.max_matches)
    confidence = min(1.0, (matches / max(1, reference)) ** CONFIDENCE_EXPONENT)
    return min(constants.form_cap, per_match * constants.form_factor(is_goalkeeper) * confidence)


def compress(total: float, constants: RegimeConstants) -> float:
    """Discount the excess above the soft cap, then clamp into [floor, hard cap]."""

    if total > constants.soft_cap:
        excess = total - constants.soft_cap
        total = constants.soft_cap + excess * constants.compression
    total = min(total, constants.hard_cap)
    return max(total, RATING_FLOOR)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compute_rating(
    stats: PlayerStats,
    context: RosterContext,
    *,
    raw_points: Optional[int] = None,
) -> RatingResult:
    """Rate one player against the shared roster context.

    ``raw_points`` may carry a precomputed value; ``0`` is honoured as a real
    zero and only ``None`` triggers the goals/assists calculation.
    """

    constants = get_constants(context.regime)
    points = stats_raw_points(stats) if raw_points is None else raw_points

    xp = experience_score(stats.matches, context, constants)
    discipline = discipline_penalty(stats.yellow_cards, stats.red_cards)
    skill = skill_score(points, context, constants)
    form = form_score(points, stats.matches, stats.is_goalkeeper, context, constants)

    total = BASE_RATING + xp + skill + form - discipline
    final = compress(total, constants)

    return RatingResult(
        value=_round_half_up(final),
        breakdown=RatingBreakdown(
            base=BASE_RATING,
            performance=round(skill + form, 1),
            experience=round(xp, 1),
            discipline=round(discipline, 1),
        ),
    )
