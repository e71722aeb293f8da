"""The scout (player character) and the scouting records they produce."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from scoutsim.core.enums import ScoutAttribute, ScoutSkill, Specialization


SCOUT_STAT_MAX = 20
FATIGUE_MAX = 100
REPUTATION_MAX = 100


def _default_skills() -> Dict[ScoutSkill, int]:
    return {skill: 8 for skill in ScoutSkill}


def _default_attributes() -> Dict[ScoutAttribute, int]:
    return {attr: 8 for attr in ScoutAttribute}


@dataclass
class CountryReputation:
    country_id: str
    familiarity: int = 0
    contact_count: int = 0


@dataclass
class TravelBooking:
    destination_country: str
    is_abroad: bool = True


@dataclass
class Scout:
    """
    The player-controlled scout.

    Skills and attributes are 1-20 and level up from XP; fatigue and
    reputation are 0-100.
    """

    id: str
    first_name: str = ""
    last_name: str = ""
    reputation: int = 10
    fatigue: int = 0
    skills: Dict[ScoutSkill, int] = field(default_factory=_default_skills)
    skill_xp: Dict[ScoutSkill, int] = field(default_factory=dict)
    attributes: Dict[ScoutAttribute, int] = field(default_factory=_default_attributes)
    attribute_xp: Dict[ScoutAttribute, int] = field(default_factory=dict)
    primary_specialization: Specialization = Specialization.FIRST_TEAM
    home_country: str = ""
    current_club_id: Optional[str] = None
    country_reputations: Dict[str, CountryReputation] = field(default_factory=dict)
    travel_booking: Optional[TravelBooking] = None
    familiarity_gain_bonus: int = 0  # From equipment


@dataclass
class ScoutReport:
    id: str
    player_id: str
    quality_score: int  # 0-100
    submitted_week: int
    submitted_season: int
    club_response: Optional[str] = None  # e.g. "signed"


@dataclass
class Observation:
    id: str
    player_id: str
    week: int
    season: int


@dataclass
class DiscoveryRecord:
    player_id: str
    discovered_week: int
    discovered_season: int


@dataclass
class UnsignedYouth:
    """A youth player not yet attached to a club."""

    id: str
    player_id: str
    country: str
    age: int
    buzz_level: int = 0
    placed: bool = False
    placed_club_id: Optional[str] = None
    retired: bool = False
    discovered_by: List[str] = field(default_factory=list)


__all__ = [
    "CountryReputation",
    "DiscoveryRecord",
    "FATIGUE_MAX",
    "Observation",
    "REPUTATION_MAX",
    "SCOUT_STAT_MAX",
    "Scout",
    "ScoutReport",
    "TravelBooking",
    "UnsignedYouth",
]
