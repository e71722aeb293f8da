"""
Cards, accumulation and suspensions.

Two card generators live here:

- ``generate_simulated_cards`` rolls once per available player for fixtures
  that were simulated without match events.
- ``generate_card_events`` scans tackle and foul events from a match and
  rolls per event. A second yellow for the same player becomes a red.

Accumulation thresholds:
    5 yellows  -> 1 match ban
    10 yellows -> 2 match ban
    red card   -> 1 match, 3 for violent conduct

Suspensions count down at the start of every week, before fixtures, and an
active suspension survives the season reset while card counts do not.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, Iterable, List, Mapping, Set, Tuple

from scoutsim.core.enums import CardReason, CardType
from scoutsim.core.models.discipline import CardEvent, DisciplinaryRecord, Suspension
from scoutsim.core.models.player import Player
from scoutsim.core.rng import RNG


logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

# Simulated fixtures: ~3 yellows across ~22 players, ~1 red per 50 matches
SIM_YELLOW_PROBABILITY = 0.14
SIM_RED_PROBABILITY = 0.002
SIM_TEMPERAMENT_YELLOW_MULTIPLIER = 1.8
SIM_TEMPERAMENT_RED_MULTIPLIER = 2.0
DEFENSIVE_POSITION_YELLOW_MULTIPLIER = 1.3

# Event-driven cards, by tackle/foul quality band
EVENT_CARD_PROBABILITIES: List[Tuple[int, float, float]] = [
    # (max quality, yellow, red)
    (2, 0.40, 0.05),
    (4, 0.12, 0.01),
]
HIGH_QUALITY_EVENT_PROBABILITIES = (0.03, 0.0)
EVENT_TEMPERAMENT_MULTIPLIER = 2.0
CARD_EVENT_TYPES = frozenset({"tackle", "foul"})

LOW_AWARENESS_THRESHOLD = 8
AWARENESS_PENALTY_PER_POINT = 0.05

MAX_YELLOW_PROBABILITY = 0.85
MAX_RED_PROBABILITY = 0.15

YELLOW_REASON_WEIGHTS: List[Tuple[CardReason, int]] = [
    (CardReason.RECKLESS_TACKLE, 40),
    (CardReason.PROFESSIONAL_FOUL, 25),
    (CardReason.DISSENT, 15),
    (CardReason.TIMEWASTING, 10),
    (CardReason.HANDBALL, 10),
]

RED_REASON_WEIGHTS: List[Tuple[CardReason, int]] = [
    (CardReason.VIOLENT_CONDUCT, 30),
    (CardReason.RECKLESS_TACKLE, 30),
    (CardReason.PROFESSIONAL_FOUL, 25),
    (CardReason.HANDBALL, 10),
    (CardReason.DISSENT, 5),
]

RED_CARD_SUSPENSION: Dict[CardReason, int] = {
    CardReason.RECKLESS_TACKLE: 1,
    CardReason.PROFESSIONAL_FOUL: 1,
    CardReason.DISSENT: 1,
    CardReason.TIMEWASTING: 1,
    CardReason.HANDBALL: 1,
    CardReason.VIOLENT_CONDUCT: 3,
}

# Season yellow count -> added ban length
YELLOW_ACCUMULATION_BANS: Dict[int, int] = {5: 1, 10: 2}


class PlayerAvailability(Enum):
    AVAILABLE = "available"
    SUSPENDED = "suspended"
    INJURED = "injured"


@dataclass
class MatchEvent:
    """A single on-pitch event that may draw a card. Quality is 1-10."""

    event_type: str
    player_id: str
    minute: int
    quality: int


# =============================================================================
# Helpers
# =============================================================================

def _is_suspended(player_id: str, records: Mapping[str, DisciplinaryRecord]) -> bool:
    record = records.get(player_id)
    return record is not None and record.suspension_weeks_remaining > 0


def _awareness_penalty(player: Player) -> float:
    awareness = player.attributes.get("defensive_awareness")
    if awareness < LOW_AWARENESS_THRESHOLD:
        return 1 + (LOW_AWARENESS_THRESHOLD - awareness) * AWARENESS_PENALTY_PER_POINT
    return 1.0


def get_player_availability(
    player: Player,
    records: Mapping[str, DisciplinaryRecord],
) -> PlayerAvailability:
    """Injury takes precedence over suspension."""
    if player.injured:
        return PlayerAvailability.INJURED
    if _is_suspended(player.id, records):
        return PlayerAvailability.SUSPENDED
    return PlayerAvailability.AVAILABLE


# =============================================================================
# Card generation
# =============================================================================

def simulated_card_probabilities(player: Player) -> Tuple[float, float]:
    """
    Yellow and red probabilities for one player in a simulated fixture.

    Returns:
        (yellow, red), each already capped.
    """
    yellow = SIM_YELLOW_PROBABILITY
    red = SIM_RED_PROBABILITY

    if player.is_temperamental():
        yellow *= SIM_TEMPERAMENT_YELLOW_MULTIPLIER
        red *= SIM_TEMPERAMENT_RED_MULTIPLIER

    yellow *= _awareness_penalty(player)

    if player.position.is_defensive:
        yellow *= DEFENSIVE_POSITION_YELLOW_MULTIPLIER

    return min(yellow, MAX_YELLOW_PROBABILITY), min(red, MAX_RED_PROBABILITY)


def generate_simulated_cards(
    rng: RNG,
    fixture_id: str,
    home_players: Iterable[Player],
    away_players: Iterable[Player],
    records: Mapping[str, DisciplinaryRecord],
) -> List[CardEvent]:
    """
    Roll cards for every player who took part in a simulated fixture.

    Suspended and injured players are skipped. Each remaining player makes
    exactly one roll, home side first.
    """
    cards: List[CardEvent] = []

    for player in [*home_players, *away_players]:
        if _is_suspended(player.id, records) or player.injured:
            continue

        yellow_prob, red_prob = simulated_card_probabilities(player)
        roll = rng.next_float(0, 1)

        if roll < red_prob:
            card_type, weights = CardType.RED, RED_REASON_WEIGHTS
        elif roll < red_prob + yellow_prob:
            card_type, weights = CardType.YELLOW, YELLOW_REASON_WEIGHTS
        else:
            continue

        cards.append(
            CardEvent(
                card_type=card_type,
                player_id=player.id,
                fixture_id=fixture_id,
                minute=rng.next_int(1, 90),
                reason=rng.pick_weighted(weights),
            )
        )

    return cards


def _event_probabilities(event: MatchEvent, player: Player) -> Tuple[float, float]:
    yellow, red = HIGH_QUALITY_EVENT_PROBABILITIES
    for max_quality, band_yellow, band_red in EVENT_CARD_PROBABILITIES:
        if event.quality <= max_quality:
            yellow, red = band_yellow, band_red
            break

    if player.is_temperamental():
        yellow *= EVENT_TEMPERAMENT_MULTIPLIER
        red *= EVENT_TEMPERAMENT_MULTIPLIER

    penalty = _awareness_penalty(player)
    yellow *= penalty
    red *= penalty

    return min(yellow, MAX_YELLOW_PROBABILITY), min(red, MAX_RED_PROBABILITY)


def generate_card_events(
    rng: RNG,
    events: Iterable[MatchEvent],
    players: Mapping[str, Player],
    fixture_id: str,
) -> List[CardEvent]:
    """
    Generate cards from a match's tackle and foul events.

    Lower event quality means a rougher challenge and a likelier card. A
    player already sent off is never carded again; a second yellow is
    recorded as a red carrying the yellow's reason.

    Args:
        rng: Random source
        events: Match events in chronological order
        players: Player lookup; events for unknown players are skipped
        fixture_id: Fixture the events belong to

    Returns:
        Card events in event order
    """
    cards: List[CardEvent] = []
    booked: Set[str] = set()
    sent_off: Set[str] = set()

    for event in events:
        if event.event_type not in CARD_EVENT_TYPES:
            continue
        if event.player_id in sent_off:
            continue
        player = players.get(event.player_id)
        if player is None:
            continue

        yellow_prob, red_prob = _event_probabilities(event, player)
        roll = rng.next_float(0, 1)

        if roll < red_prob:
            cards.append(
                CardEvent(
                    card_type=CardType.RED,
                    player_id=event.player_id,
                    fixture_id=fixture_id,
                    minute=event.minute,
                    reason=rng.pick_weighted(RED_REASON_WEIGHTS),
                )
            )
            sent_off.add(event.player_id)
        elif roll < red_prob + yellow_prob:
            reason = rng.pick_weighted(YELLOW_REASON_WEIGHTS)
            if event.player_id in booked:
                card_type = CardType.RED
                sent_off.add(event.player_id)
            else:
                card_type = CardType.YELLOW
                booked.add(event.player_id)
            cards.append(
                CardEvent(
                    card_type=card_type,
                    player_id=event.player_id,
                    fixture_id=fixture_id,
                    minute=event.minute,
                    reason=reason,
                )
            )

    return cards


# =============================================================================
# Accumulation and suspensions
# =============================================================================

def process_card_accumulation(
    cards: Iterable[CardEvent],
    records: Mapping[str, DisciplinaryRecord],
    season: int,
) -> Tuple[Dict[str, DisciplinaryRecord], List[Suspension]]:
    """
    Fold card events into disciplinary records.

    Records are created lazily on a player's first card. The input mapping
    and its records are left untouched.

    Returns:
        (updated records, suspensions triggered by these cards)
    """
    updated: Dict[str, DisciplinaryRecord] = dict(records)
    suspensions: List[Suspension] = []

    for card in cards:
        record = updated.get(card.player_id) or DisciplinaryRecord(
            player_id=card.player_id, season=season
        )
        history = [*record.card_history, card]

        if card.card_type == CardType.YELLOW:
            yellows = record.yellow_cards + 1
            ban = YELLOW_ACCUMULATION_BANS.get(yellows, 0)
            record = replace(
                record,
                yellow_cards=yellows,
                suspension_weeks_remaining=record.suspension_weeks_remaining + ban,
                card_history=history,
            )
            if ban:
                suspensions.append(
                    Suspension(
                        player_id=card.player_id,
                        weeks=ban,
                        reason=f"{yellows} yellow card accumulation",
                    )
                )
        else:
            ban = RED_CARD_SUSPENSION.get(card.reason, 1)
            record = replace(
                record,
                red_cards=record.red_cards + 1,
                suspension_weeks_remaining=record.suspension_weeks_remaining + ban,
                card_history=history,
            )
            suspensions.append(
                Suspension(
                    player_id=card.player_id,
                    weeks=ban,
                    reason=f"red card ({card.reason.description})",
                )
            )

        updated[card.player_id] = record

    for suspension in suspensions:
        logger.debug(
            "%s suspended %d week(s): %s",
            suspension.player_id, suspension.weeks, suspension.reason,
        )

    return updated, suspensions


def decrement_suspensions(
    records: Mapping[str, DisciplinaryRecord],
) -> Dict[str, DisciplinaryRecord]:
    """Count every active suspension down by one week, never below zero."""
    return {
        player_id: (
            replace(record, suspension_weeks_remaining=record.suspension_weeks_remaining - 1)
            if record.suspension_weeks_remaining > 0
            else record
        )
        for player_id, record in records.items()
    }


def clear_season_cards(
    records: Mapping[str, DisciplinaryRecord],
    new_season: int,
) -> Dict[str, DisciplinaryRecord]:
    """
    Reset discipline for a new season.

    Records with an active suspension are kept with their counts and history
    cleared; every other record is dropped.
    """
    return {
        player_id: replace(
            record,
            season=new_season,
            yellow_cards=0,
            red_cards=0,
            card_history=[],
        )
        for player_id, record in records.items()
        if record.suspension_weeks_remaining > 0
    }


def cards_for_player(cards: Iterable[CardEvent], player_id: str) -> List[CardEvent]:
    return [card for card in cards if card.player_id == player_id]


def suspended_player_ids(records: Mapping[str, DisciplinaryRecord]) -> Set[str]:
    return {pid for pid, record in records.items() if record.suspension_weeks_remaining > 0}


__all__ = [
    "MatchEvent",
    "PlayerAvailability",
    "RED_CARD_SUSPENSION",
    "RED_REASON_WEIGHTS",
    "YELLOW_REASON_WEIGHTS",
    "cards_for_player",
    "clear_season_cards",
    "decrement_suspensions",
    "generate_card_events",
    "generate_simulated_cards",
    "get_player_availability",
    "process_card_accumulation",
    "simulated_card_probabilities",
    "suspended_player_ids",
]
