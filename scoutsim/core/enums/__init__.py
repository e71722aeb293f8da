"""Simulation enumerations."""

from scoutsim.core.enums.match import CardReason, CardType, TacticalIdentity, Weather
from scoutsim.core.enums.players import (
    DevelopmentProfile,
    FormTrend,
    InjurySeverity,
    InjuryType,
)
from scoutsim.core.enums.positions import (
    ATTACKING_POSITIONS,
    DEFENSIVE_POSITIONS,
    Position,
)
from scoutsim.core.enums.scouting import (
    ActivityType,
    InsightType,
    MessageType,
    QualityTier,
    ScoutAttribute,
    ScoutSkill,
    Specialization,
)

__all__ = [
    "ATTACKING_POSITIONS",
    "ActivityType",
    "CardReason",
    "CardType",
    "DEFENSIVE_POSITIONS",
    "DevelopmentProfile",
    "FormTrend",
    "InjurySeverity",
    "InjuryType",
    "InsightType",
    "MessageType",
    "Position",
    "QualityTier",
    "ScoutAttribute",
    "ScoutSkill",
    "Specialization",
    "TacticalIdentity",
    "Weather",
]
