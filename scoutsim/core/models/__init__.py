"""Core data models."""

from scoutsim.core.models.awards import Award, SeasonAwards, SeasonStats
from scoutsim.core.models.club import Club, League, TacticalStyle
from scoutsim.core.models.discipline import CardEvent, DisciplinaryRecord, Suspension
from scoutsim.core.models.fixture import (
    Fixture,
    MatchPlayerStats,
    PlayerMatchRating,
    Scorer,
)
from scoutsim.core.models.inbox import InboxMessage
from scoutsim.core.models.knowledge import CulturalInsight, RegionalKnowledge
from scoutsim.core.models.player import (
    Injury,
    InjuryHistory,
    MatchFormEntry,
    Player,
)
from scoutsim.core.models.schedule import WEEK_SLOTS, Activity, WeekSchedule
from scoutsim.core.models.scout import (
    CountryReputation,
    DiscoveryRecord,
    Observation,
    Scout,
    ScoutReport,
    TravelBooking,
    UnsignedYouth,
)
from scoutsim.core.models.state import GameState

__all__ = [
    "Activity",
    "Award",
    "CardEvent",
    "Club",
    "CountryReputation",
    "CulturalInsight",
    "DisciplinaryRecord",
    "DiscoveryRecord",
    "Fixture",
    "GameState",
    "InboxMessage",
    "Injury",
    "InjuryHistory",
    "League",
    "MatchFormEntry",
    "MatchPlayerStats",
    "Observation",
    "Player",
    "PlayerMatchRating",
    "RegionalKnowledge",
    "Scorer",
    "Scout",
    "ScoutReport",
    "SeasonAwards",
    "SeasonStats",
    "Suspension",
    "TacticalStyle",
    "TravelBooking",
    "UnsignedYouth",
    "WEEK_SLOTS",
    "WeekSchedule",
]
