"""
AI transfer market.

Each week a few players whose contracts are running down, or who are
unhappy, move to a club of matching stature that can afford them.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, List, Optional

from scoutsim.core.models.club import Club
from scoutsim.core.models.player import Player
from scoutsim.core.rng import RNG
from scoutsim.core.util import round_half_up

if TYPE_CHECKING:
    from scoutsim.core.models.state import GameState


logger = logging.getLogger(__name__)


TRANSFER_CHANCE = 0.04
UNHAPPY_MORALE = 3
REPUTATION_WINDOW = 20
MIN_BUDGET_SHARE = 0.5
FEE_RANGE = (0.8, 1.2)


@dataclass
class Transfer:
    player_id: str
    from_club_id: str
    to_club_id: str
    fee: int
    week: int
    season: int


def is_transfer_eligible(player: Player, season: int) -> bool:
    """Fit players in the last year of their deal, or with morale at 3 or below."""
    if player.injured:
        return False
    return player.contract_expiry <= season + 1 or player.morale <= UNHAPPY_MORALE


def target_reputation(player: Player) -> int:
    return round_half_up(player.current_ability / 200 * 100)


def find_destination_club(
    rng: RNG,
    player: Player,
    clubs: Dict[str, Club],
) -> Optional[Club]:
    """
    Pick a club able to pay half the player's value and within 20 reputation
    of the player's level. Returns None without drawing when nobody fits.
    """
    target = target_reputation(player)
    candidates = [
        club for club in clubs.values()
        if club.id != player.club_id
        and club.budget >= player.market_value * MIN_BUDGET_SHARE
        and abs(club.reputation - target) <= REPUTATION_WINDOW
    ]
    if not candidates:
        return None
    return rng.pick(candidates)


def process_transfers(state: "GameState", rng: RNG) -> List[Transfer]:
    """
    Roll this week's AI transfers.

    Clubs' spending is tracked across the week so a club never commits more
    than its budget. Players at a missing club are skipped.
    """
    transfers: List[Transfer] = []
    spent: Dict[str, int] = {}

    for player in state.players.values():
        if not is_transfer_eligible(player, state.current_season):
            continue
        if not rng.chance(TRANSFER_CHANCE):
            continue

        if player.club_id not in state.clubs:
            logger.warning("Transfer candidate %s has unknown club %s", player.id, player.club_id)
            continue

        destination = find_destination_club(rng, player, state.clubs)
        if destination is None:
            continue

        fee = round_half_up(player.market_value * rng.next_float(*FEE_RANGE))
        if destination.budget - spent.get(destination.id, 0) < fee:
            continue

        spent[destination.id] = spent.get(destination.id, 0) + fee
        transfers.append(
            Transfer(
                player_id=player.id,
                from_club_id=player.club_id,
                to_club_id=destination.id,
                fee=fee,
                week=state.current_week,
                season=state.current_season,
            )
        )
        logger.debug("Transfer: %s %s -> %s for %d", player.id, player.club_id, destination.id, fee)

    return transfers


__all__ = [
    "Transfer",
    "find_destination_club",
    "is_transfer_eligible",
    "process_transfers",
    "target_reputation",
]
