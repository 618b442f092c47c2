"""Canonical player and rating models shared by the engine, ingest and API layers."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from squadrating.config import BASE_RATING, Regime, get_regime


GOALKEEPER_POSITIONS = frozenset({"GK", "GOALKEEPER"})


class Role(str, Enum):
    GOALKEEPER = "goalkeeper"
    OUTFIELD = "outfield"

    @classmethod
    def from_position(cls, position: Optional[str]) -> "Role":
        """Map a free-text roster position onto a role; unknown positions are outfield."""

        if position and position.strip().upper() in GOALKEEPER_POSITIONS:
            return cls.GOALKEEPER
        return cls.OUTFIELD


class PlayerStats(BaseModel):
    """Season totals for one player. Callers clamp missing/negative counts to zero."""

    matches: int = Field(default=0, ge=0)
    goals: int = Field(default=0, ge=0)
    assists: int = Field(default=0, ge=0)
    yellow_cards: int = Field(default=0, ge=0)
    red_cards: int = Field(default=0, ge=0)
    role: Role = Role.OUTFIELD

    model_config = ConfigDict(frozen=True)

    @property
    def is_goalkeeper(self) -> bool:
        return self.role is Role.GOALKEEPER


class RosterContext(BaseModel):
    """Roster-wide maxima every rating in one refresh is normalized against."""

    max_matches: int = Field(default=1, ge=1)
    max_raw_points: int = Field(default=1, ge=0)

    model_config = ConfigDict(frozen=True)

    @property
    def regime(self) -> Regime:
        return get_regime(self.max_matches)

    @property
    def is_short_tournament(self) -> bool:
        return self.regime is Regime.SHORT


class RatingBreakdown(BaseModel):
    base: int = BASE_RATING
    performance: float
    experience: float
    discipline: float = Field(..., ge=0.0)

    model_config = ConfigDict(frozen=True)


class RatingResult(BaseModel):
    value: int = Field(..., ge=50, le=97)
    breakdown: RatingBreakdown

    model_config = ConfigDict(frozen=True)
