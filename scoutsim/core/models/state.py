"""
The aggregate game state.

A GameState is treated as an immutable snapshot: the tick computes a
change-set from it and ``commit_tick`` builds a brand-new GameState. Nothing
in the kernel edits a GameState (or any entity reachable from it) in place.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from scoutsim.core.difficulty import Difficulty
from scoutsim.core.models.awards import SeasonAwards
from scoutsim.core.models.club import Club, League
from scoutsim.core.models.discipline import DisciplinaryRecord
from scoutsim.core.models.fixture import Fixture, PlayerMatchRating
from scoutsim.core.models.inbox import InboxMessage
from scoutsim.core.models.knowledge import RegionalKnowledge
from scoutsim.core.models.player import Player
from scoutsim.core.models.schedule import WeekSchedule
from scoutsim.core.models.scout import (
    DiscoveryRecord,
    Observation,
    Scout,
    ScoutReport,
    UnsignedYouth,
)


@dataclass
class GameState:
    scout: Scout
    current_week: int = 1
    current_season: int = 1
    players: Dict[str, Player] = field(default_factory=dict)
    clubs: Dict[str, Club] = field(default_factory=dict)
    leagues: Dict[str, League] = field(default_factory=dict)
    fixtures: Dict[str, Fixture] = field(default_factory=dict)
    countries: List[str] = field(default_factory=list)

    disciplinary_records: Dict[str, DisciplinaryRecord] = field(default_factory=dict)
    regional_knowledge: Dict[str, RegionalKnowledge] = field(default_factory=dict)
    unsigned_youth: Dict[str, UnsignedYouth] = field(default_factory=dict)
    inbox: List[InboxMessage] = field(default_factory=list)
    schedule: Optional[WeekSchedule] = None  # Empty schedule for the current week when omitted

    # Scouting records
    reports: Dict[str, ScoutReport] = field(default_factory=dict)
    observations: Dict[str, Observation] = field(default_factory=dict)
    discovery_records: List[DiscoveryRecord] = field(default_factory=list)

    # History
    match_ratings: Dict[str, Dict[str, PlayerMatchRating]] = field(default_factory=dict)
    season_awards: Dict[int, SeasonAwards] = field(default_factory=dict)
    retired_player_ids: List[str] = field(default_factory=list)
    total_weeks_played: int = 0

    difficulty: Difficulty = Difficulty.NORMAL

    def __post_init__(self) -> None:
        if self.schedule is None:
            self.schedule = WeekSchedule(week=self.current_week, season=self.current_season)

    @property
    def observed_player_ids(self) -> set[str]:
        return {obs.player_id for obs in self.observations.values()}


__all__ = ["GameState"]
