"""Player model and the injury/form records that hang off it."""

from dataclasses import dataclass, field
from typing import List, Optional

from scoutsim.core.attributes import PlayerAttributes
from scoutsim.core.enums import (
    DevelopmentProfile,
    FormTrend,
    InjurySeverity,
    InjuryType,
    Position,
)


ABILITY_MIN = 1
ABILITY_MAX = 200

FORM_MIN = -3.0
FORM_MAX = 3.0

# Rolling window of match ratings used for form
RECENT_RATINGS_WINDOW = 6


def clamp_ability(value: int) -> int:
    return max(ABILITY_MIN, min(ABILITY_MAX, value))


# =============================================================================
# Health
# =============================================================================

@dataclass
class Injury:
    """An injury suffered by a player."""

    id: str
    player_id: str
    injury_type: InjuryType
    severity: InjurySeverity
    recovery_weeks: int
    weeks_remaining: int
    occurred_week: int = 1
    occurred_season: int = 1


@dataclass
class InjuryHistory:
    """
    Accumulated injury record for one player.

    ``proneness`` grows with every injury (capped) and raises future injury
    odds. ``reinjury_window_weeks_left`` is opened when an injury heals and
    doubles the injury odds while it is positive.
    """

    player_id: str
    injuries: List[Injury] = field(default_factory=list)
    total_weeks_missed: int = 0
    proneness: float = 0.0
    reinjury_window_weeks_left: int = 0


# =============================================================================
# Form
# =============================================================================

@dataclass
class MatchFormEntry:
    """One match rating kept in a player's rolling form window."""

    fixture_id: str
    week: int
    season: int
    rating: float


# =============================================================================
# Player
# =============================================================================

@dataclass
class Player:
    """
    A footballer in the simulated world.

    Attribute values are 1-20, abilities 1-200. ``injury_proneness`` is a
    hidden 1-20 trait and is not part of the developable attribute pool.
    """

    id: str
    first_name: str = ""
    last_name: str = ""
    age: int = 20
    position: Position = Position.CM
    club_id: str = ""
    nationality: str = ""

    current_ability: int = 100
    potential_ability: int = 120
    attributes: PlayerAttributes = field(default_factory=PlayerAttributes)
    injury_proneness: int = 10
    development_profile: DevelopmentProfile = DevelopmentProfile.STEADY_GROWER
    personality_traits: List[str] = field(default_factory=list)

    # Contract and market
    morale: int = 6  # 1-10
    contract_expiry: int = 3  # Season the contract runs out
    market_value: int = 1_000_000

    # Form and momentum
    form: float = 0.0
    form_momentum: int = 0
    form_trend: FormTrend = FormTrend.STABLE
    form_lock_weeks: int = 0
    form_streak: int = 0  # +n consecutive hot matches, -n consecutive cold
    recent_match_ratings: List[MatchFormEntry] = field(default_factory=list)

    # Health
    injured: bool = False
    injury_weeks_remaining: int = 0
    current_injury: Optional[Injury] = None
    injury_history: Optional[InjuryHistory] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def is_temperamental(self) -> bool:
        return "temperamental" in self.personality_traits


__all__ = [
    "ABILITY_MAX",
    "ABILITY_MIN",
    "FORM_MAX",
    "FORM_MIN",
    "Injury",
    "InjuryHistory",
    "MatchFormEntry",
    "Player",
    "RECENT_RATINGS_WINDOW",
    "clamp_ability",
]
