"""Club and league models."""

from dataclasses import dataclass, field
from typing import List, Optional

from scoutsim.core.enums import TacticalIdentity


@dataclass
class TacticalStyle:
    """How a club sets up. Pressing intensity is 1-20."""

    identity: TacticalIdentity = TacticalIdentity.BALANCED
    pressing_intensity: int = 10


@dataclass
class Club:
    """A club with a squad, a budget, a reputation (0-100) and a youth academy rating (1-20)."""

    id: str
    name: str = ""
    league_id: str = ""
    country: str = ""
    reputation: int = 50
    budget: int = 10_000_000
    player_ids: List[str] = field(default_factory=list)
    tactical_style: Optional[TacticalStyle] = None
    youth_academy_rating: int = 10


@dataclass
class League:
    id: str
    name: str = ""
    country: str = ""
    season: int = 1
    tier: int = 1


__all__ = ["Club", "League", "TacticalStyle"]
