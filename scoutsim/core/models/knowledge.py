"""Regional knowledge models."""

from dataclasses import dataclass, field
from typing import List

from scoutsim.core.enums import InsightType


@dataclass(frozen=True)
class CulturalInsight:
    insight_type: InsightType
    description: str
    gameplay_effect: str


@dataclass
class RegionalKnowledge:
    """What the scout knows about one country's football."""

    country_id: str
    knowledge_level: float = 0.0  # 0-100
    scouting_efficiency: float = 1.0
    cultural_insights: List[CulturalInsight] = field(default_factory=list)
    local_contacts: List[str] = field(default_factory=list)
    discovered_leagues: List[str] = field(default_factory=list)


__all__ = ["CulturalInsight", "RegionalKnowledge"]
