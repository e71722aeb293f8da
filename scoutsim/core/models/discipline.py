"""Disciplinary records and card events."""

from dataclasses import dataclass, field
from typing import List

from scoutsim.core.enums import CardReason, CardType


@dataclass
class CardEvent:
    card_type: CardType
    player_id: str
    fixture_id: str
    minute: int
    reason: CardReason


@dataclass
class DisciplinaryRecord:
    """
    A player's cards for one season.

    Created lazily on the first card. Counts and history are wiped at the
    season boundary; an active suspension survives the reset.
    """

    player_id: str
    season: int
    yellow_cards: int = 0
    red_cards: int = 0
    suspension_weeks_remaining: int = 0
    card_history: List[CardEvent] = field(default_factory=list)

    @property
    def is_suspended(self) -> bool:
        return self.suspension_weeks_remaining > 0


@dataclass
class Suspension:
    """Notice that a player picked up a ban this week."""

    player_id: str
    weeks: int
    reason: str


__all__ = ["CardEvent", "DisciplinaryRecord", "Suspension"]
