"""
Season-end retirements and the unsigned youth pool.

At rollover veterans may hang up their boots, and unsigned youth who have
aged out either leave football or are picked up by a club's academy.
Computation only decides who goes where; the commit phase uses the helpers
at the bottom to rebuild the player, club and youth tables.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Dict, List, Sequence

from scoutsim.core.models.club import Club
from scoutsim.core.models.player import Player
from scoutsim.core.models.scout import UnsignedYouth
from scoutsim.core.rng import RNG

if TYPE_CHECKING:
    from scoutsim.core.models.state import GameState


logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

MANDATORY_RETIREMENT_AGE = 38
LATE_CAREER_AGE = 36
LATE_CAREER_RETIREMENT_CHANCE = 0.8
VETERAN_AGE = 33
VETERAN_RETIREMENT_STEP = 0.1  # per year past 32

YOUTH_EXIT_AGE = 19
YOUTH_FINAL_YEAR_AGE = 18
YOUTH_FINAL_YEAR_SIGNING_CHANCE = 0.5
YOUTH_BUZZ_AGE = 17
YOUTH_BUZZ_THRESHOLD = 60
YOUTH_BUZZ_SIGNING_CHANCE = 0.3
MIN_ACADEMY_RATING = 10


# =============================================================================
# Results
# =============================================================================

@dataclass
class YouthSigning:
    youth_id: str
    player_id: str
    club_id: str


@dataclass
class YouthAgingResult:
    """Academy signings and departures from the unsigned youth pool."""

    signings: List[YouthSigning] = field(default_factory=list)
    retired: List[str] = field(default_factory=list)


# =============================================================================
# Player retirement
# =============================================================================

def retirement_probability(age: int) -> float:
    """Chance a player of ``age`` retires at season end."""
    if age >= MANDATORY_RETIREMENT_AGE:
        return 1.0
    if age >= LATE_CAREER_AGE:
        return LATE_CAREER_RETIREMENT_CHANCE
    if age >= VETERAN_AGE:
        return (age - (VETERAN_AGE - 1)) * VETERAN_RETIREMENT_STEP
    return 0.0


def process_player_retirement(state: "GameState", rng: RNG) -> List[str]:
    """
    Decide which players retire at the end of the season.

    Players at the mandatory age retire without a draw; under 33 nobody
    draws at all.
    """
    retired: List[str] = []

    for player in state.players.values():
        if player.age >= MANDATORY_RETIREMENT_AGE:
            retired.append(player.id)
            continue
        probability = retirement_probability(player.age)
        if probability > 0 and rng.chance(probability):
            retired.append(player.id)

    if retired:
        logger.debug("%d players retiring: %s", len(retired), ", ".join(retired))
    return retired


# =============================================================================
# Youth aging
# =============================================================================

def academy_clubs(clubs: Dict[str, Club]) -> List[Club]:
    """Clubs whose academies take on unsigned youth."""
    return [c for c in clubs.values() if c.youth_academy_rating >= MIN_ACADEMY_RATING]


def process_youth_aging(state: "GameState", rng: RNG) -> YouthAgingResult:
    """
    Resolve the unsigned youth pool at season end.

    - 19 and over leave football
    - 18: even odds of an academy signing, otherwise they leave
    - 17 with buzz of 60 or more: 30% chance of an academy signing

    With no academy to go to, an 18-year-old still draws and then leaves.
    """
    result = YouthAgingResult()
    academies = academy_clubs(state.clubs)

    for youth in state.unsigned_youth.values():
        if youth.placed or youth.retired:
            continue

        if youth.age >= YOUTH_EXIT_AGE:
            result.retired.append(youth.id)
            continue

        if youth.age >= YOUTH_FINAL_YEAR_AGE:
            if rng.chance(YOUTH_FINAL_YEAR_SIGNING_CHANCE) and academies:
                club = rng.pick(academies)
                result.signings.append(YouthSigning(youth.id, youth.player_id, club.id))
            else:
                result.retired.append(youth.id)
            continue

        if youth.age >= YOUTH_BUZZ_AGE and youth.buzz_level >= YOUTH_BUZZ_THRESHOLD and academies:
            if rng.chance(YOUTH_BUZZ_SIGNING_CHANCE):
                club = rng.pick(academies)
                result.signings.append(YouthSigning(youth.id, youth.player_id, club.id))

    for signing in result.signings:
        logger.debug("Youth %s signed by %s", signing.youth_id, signing.club_id)
    return result


# =============================================================================
# State helpers (commit phase)
# =============================================================================

def apply_youth_signings(
    players: Dict[str, Player],
    clubs: Dict[str, Club],
    youth: Dict[str, UnsignedYouth],
    signings: Sequence[YouthSigning],
) -> None:
    """Attach signed youth to their new clubs, updating the given tables."""
    for signing in signings:
        entry = youth.get(signing.youth_id)
        if entry is None:
            continue
        youth[entry.id] = replace(entry, placed=True, placed_club_id=signing.club_id)

        club = clubs.get(signing.club_id)
        player = players.get(signing.player_id)
        if club is None or player is None:
            logger.warning("Youth %s signing has a dangling reference", signing.youth_id)
            continue
        players[player.id] = replace(player, club_id=club.id)
        if player.id not in club.player_ids:
            clubs[club.id] = replace(club, player_ids=[*club.player_ids, player.id])


def apply_retirements(
    players: Dict[str, Player],
    clubs: Dict[str, Club],
    retired_ids: Sequence[str],
) -> None:
    """Drop retired players from the player table and from every squad."""
    retired = set(retired_ids)
    if not retired:
        return
    for pid in retired:
        players.pop(pid, None)
    for club_id, club in list(clubs.items()):
        if any(pid in retired for pid in club.player_ids):
            clubs[club_id] = replace(
                club, player_ids=[pid for pid in club.player_ids if pid not in retired]
            )


__all__ = [
    "YouthAgingResult",
    "YouthSigning",
    "academy_clubs",
    "apply_retirements",
    "apply_youth_signings",
    "process_player_retirement",
    "process_youth_aging",
    "retirement_probability",
]
