"""Player-level enumerations: development, form and health."""

from enum import Enum


class DevelopmentProfile(Enum):
    """Shape of a player's age-based growth and decline curve."""

    EARLY_BLOOMER = "earlyBloomer"
    LATE_BLOOMER = "lateBloomer"
    STEADY_GROWER = "steadyGrower"
    VOLATILE = "volatile"


class FormTrend(Enum):
    """Direction of a player's current streak."""

    RISING = "rising"
    STABLE = "stable"
    FALLING = "falling"


class InjuryType(Enum):
    """Injury categories used by the weekly injury roll."""

    KNOCK = "knock"
    MUSCLE = "muscle"
    FATIGUE = "fatigue"
    LIGAMENT = "ligament"
    FRACTURE = "fracture"
    CONCUSSION = "concussion"


class InjurySeverity(Enum):
    """Severity band derived from recovery length."""

    MINOR = "minor"
    MODERATE = "moderate"
    SERIOUS = "serious"
    CAREER_THREATENING = "career-threatening"
