"""Season awards and end-of-season statistics."""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class SeasonStats:
    """The scout's output over one season."""

    reports_submitted: int = 0
    average_report_quality: float = 0.0
    discoveries: int = 0
    observations: int = 0
    reputation_end: int = 0


@dataclass
class Award:
    id: str
    name: str
    description: str
    related_player_id: Optional[str] = None
    stat: str = ""


@dataclass
class SeasonAwards:
    season: int
    club_name: str
    scout_awards: List[Award] = field(default_factory=list)
    league_awards: List[Award] = field(default_factory=list)
    stats: SeasonStats = field(default_factory=SeasonStats)


__all__ = ["Award", "SeasonAwards", "SeasonStats"]
