"""Match-day enumerations: weather, tactics and discipline."""

from enum import Enum


class Weather(Enum):
    """Conditions drawn for each simulated fixture."""

    CLEAR = "clear"
    CLOUDY = "cloudy"
    RAIN = "rain"
    HEAVY_RAIN = "heavyRain"
    WINDY = "windy"
    SNOW = "snow"


class TacticalIdentity(Enum):
    """A club's declared playing style."""

    HIGH_PRESS = "highPress"
    POSSESSION_BASED = "possessionBased"
    COUNTER_ATTACKING = "counterAttacking"
    DIRECT_PLAY = "directPlay"
    WING_PLAY = "wingPlay"
    BALANCED = "balanced"


class CardType(Enum):
    YELLOW = "yellow"
    RED = "red"


class CardReason(Enum):
    """Why a card was shown."""

    RECKLESS_TACKLE = "recklessTackle"
    PROFESSIONAL_FOUL = "professionalFoul"
    DISSENT = "dissent"
    TIMEWASTING = "timewasting"
    HANDBALL = "handball"
    VIOLENT_CONDUCT = "violentConduct"

    @property
    def description(self) -> str:
        return _REASON_DESCRIPTIONS[self]


_REASON_DESCRIPTIONS = {
    CardReason.RECKLESS_TACKLE: "a reckless tackle",
    CardReason.PROFESSIONAL_FOUL: "a professional foul",
    CardReason.DISSENT: "dissent towards the referee",
    CardReason.TIMEWASTING: "time-wasting",
    CardReason.HANDBALL: "a deliberate handball",
    CardReason.VIOLENT_CONDUCT: "violent conduct",
}
