"""Fixture model and per-player match output."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from scoutsim.core.enums import Weather


@dataclass
class Scorer:
    player_id: str
    minute: int


@dataclass
class MatchPlayerStats:
    """Synthetic stat line for a simulated match. Unset counts stay None."""

    goals: Optional[int] = None
    assists: Optional[int] = None
    saves: Optional[int] = None
    goals_conceded: Optional[int] = None
    clean_sheet: Optional[bool] = None
    tackles: Optional[int] = None
    interceptions: Optional[int] = None
    aerial_duels_won: Optional[int] = None
    crosses: Optional[int] = None
    dribbles: Optional[int] = None
    key_passes: Optional[int] = None
    shots: Optional[int] = None


@dataclass
class PlayerMatchRating:
    player_id: str
    fixture_id: str
    rating: float
    stats: MatchPlayerStats = field(default_factory=MatchPlayerStats)
    source: str = "simulated"


@dataclass
class Fixture:
    """
    A league fixture.

    An unplayed fixture has ``played`` False and no result fields. Simulation
    returns a new, played copy and never edits the original.
    """

    id: str
    league_id: str
    home_club_id: str
    away_club_id: str
    week: int
    season: int = 1
    played: bool = False
    home_goals: Optional[int] = None
    away_goals: Optional[int] = None
    attendance: Optional[int] = None
    weather: Optional[Weather] = None
    scorers: List[Scorer] = field(default_factory=list)
    player_ratings: Dict[str, PlayerMatchRating] = field(default_factory=dict)

    def involves(self, club_id: str) -> bool:
        return club_id in (self.home_club_id, self.away_club_id)


__all__ = ["Fixture", "MatchPlayerStats", "PlayerMatchRating", "Scorer"]
