"""
Player development engine.

Weekly attribute drift driven by age and development profile, rare
breakthrough weeks for young in-form players, and permanent physical
setbacks from serious injuries.

Every function here is pure: it reads a Player and returns a delta object.
The commit phase applies deltas with ``apply_attribute_deltas``, which clamps
to the attribute and ability bounds.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple

from scoutsim.core.attributes import ALL_ATTRIBUTES, PHYSICAL_ATTRIBUTES
from scoutsim.core.difficulty import get_difficulty_modifiers
from scoutsim.core.enums import DevelopmentProfile, FormTrend
from scoutsim.core.injuries import SERIOUS_INJURY_THRESHOLD
from scoutsim.core.models.club import Club
from scoutsim.core.models.player import Player, clamp_ability
from scoutsim.core.rng import RNG
from scoutsim.core.util import clamp, round_half_up

if TYPE_CHECKING:
    from scoutsim.core.models.state import GameState


logger = logging.getLogger(__name__)

AttributeDeltas = Dict[str, int]


# =============================================================================
# Constants
# =============================================================================

PEAK_AGES: Dict[DevelopmentProfile, int] = {
    DevelopmentProfile.EARLY_BLOOMER: 22,
    DevelopmentProfile.LATE_BLOOMER: 29,
    DevelopmentProfile.STEADY_GROWER: 26,
    DevelopmentProfile.VOLATILE: 25,
}

BASE_DEVELOPMENT_CHANCE = 0.15
FORM_CHANCE_PER_POINT = 0.017
MIN_DEVELOPMENT_CHANCE = 0.01

HIGH_REPUTATION_THRESHOLD = 70
COACHING_BONUS = 1.15

MAX_GROWTH_PROBABILITY = 0.4
MAX_DECLINE_PROBABILITY = 0.25

MAX_DEVELOPMENT_AGE = 35
MAX_INJURY_WEEKS_FOR_DEVELOPMENT = 6

BREAKTHROUGH_CHANCE = 0.015
BREAKTHROUGH_MIN_AGE = 17
BREAKTHROUGH_MAX_AGE = 25
BREAKTHROUGH_MIN_FORM = 1.0


@dataclass
class PlayerDevelopmentResult:
    player_id: str
    changes: AttributeDeltas = field(default_factory=dict)
    ability_change: int = 0

    @property
    def has_changes(self) -> bool:
        return bool(self.changes) or self.ability_change != 0


@dataclass
class BreakthroughResult:
    """A wonder week: large attribute and ability jumps, ceiling ignored."""

    player_id: str
    changes: AttributeDeltas
    ability_change: int
    improved_attributes: List[str] = field(default_factory=list)


@dataclass
class InjurySetbackResult:
    player_id: str
    changes: AttributeDeltas


# =============================================================================
# Growth curve
# =============================================================================

def development_multiplier(age: int, profile: DevelopmentProfile, rng: RNG) -> float:
    """
    Growth (positive) or decline (negative) strength for a player's age.

    Only volatile players consume randomness here.
    """
    peak = PEAK_AGES[profile]
    years_from_peak = age - peak

    if years_from_peak < 0:
        base = clamp(1 - abs(years_from_peak) * 0.08, 0.0, 1.0)
    else:
        base = -years_from_peak * 0.02

    if profile == DevelopmentProfile.VOLATILE:
        base += rng.gaussian(0, 0.4)
    elif profile == DevelopmentProfile.EARLY_BLOOMER:
        # Faster rise and faster fall
        base *= 1.3
    elif profile == DevelopmentProfile.LATE_BLOOMER:
        base *= 0.5 if age < peak else 0.8

    return base


def development_chance(player: Player, club: Optional[Club]) -> float:
    """Weekly probability that anything develops at all."""
    chance = clamp(BASE_DEVELOPMENT_CHANCE + player.form * FORM_CHANCE_PER_POINT, 0.05, 0.25)

    if club is not None and club.reputation > HIGH_REPUTATION_THRESHOLD:
        chance *= COACHING_BONUS

    momentum = player.form_momentum
    if momentum > 0:
        if player.form_trend == FormTrend.RISING:
            chance += min(0.15, momentum * 0.03)
        elif player.form_trend == FormTrend.FALLING:
            chance -= momentum * 0.02

    return max(MIN_DEVELOPMENT_CHANCE, chance)


def attribute_ceiling(player: Player) -> int:
    """Highest value routine development can reach, derived from potential."""
    return round_half_up(player.potential_ability / 200 * 20)


def is_development_eligible(player: Player) -> bool:
    return (
        player.age <= MAX_DEVELOPMENT_AGE
        and player.injury_weeks_remaining <= MAX_INJURY_WEEKS_FOR_DEVELOPMENT
    )


# =============================================================================
# Weekly development
# =============================================================================

def compute_player_development(
    player: Player,
    club: Optional[Club],
    rng: RNG,
    development_rate: float = 1.0,
) -> PlayerDevelopmentResult:
    """
    Compute one week of routine development for a player.

    Args:
        player: Player to develop
        club: The player's club, or None when unattached or dangling
        rng: Random source
        development_rate: Difficulty scaling, applied to growth only

    Returns:
        Attribute deltas of +/-1 and an ability nudge matching their net sign
    """
    base = development_multiplier(player.age, player.development_profile, rng)
    mult = base * development_rate if base > 0 else base

    if not rng.chance(development_chance(player, club)):
        return PlayerDevelopmentResult(player_id=player.id)

    changes: AttributeDeltas = {}
    considered = rng.shuffle(ALL_ATTRIBUTES)[: rng.next_int(1, 3)]
    ceiling = attribute_ceiling(player)

    for attr in considered:
        value = player.attributes[attr]
        room = ceiling - value

        if mult > 0 and room > 0:
            if rng.chance(min(MAX_GROWTH_PROBABILITY, room / 20 * abs(mult))):
                changes[attr] = 1
        elif mult < 0 and value > 1:
            if rng.chance(min(MAX_DECLINE_PROBABILITY, abs(mult) * 0.5)):
                changes[attr] = -1

    net = sum(changes.values())
    ability_change = 1 if net > 0 else -1 if net < 0 else 0

    return PlayerDevelopmentResult(
        player_id=player.id, changes=changes, ability_change=ability_change
    )


def compute_breakthrough(player: Player, rng: RNG) -> Optional[BreakthroughResult]:
    """
    Roll for a breakthrough week.

    Only players aged 17-25 with form of at least +1 are eligible, and the
    chance is only rolled for them.
    """
    if not BREAKTHROUGH_MIN_AGE <= player.age <= BREAKTHROUGH_MAX_AGE:
        return None
    if player.form < BREAKTHROUGH_MIN_FORM:
        return None
    if not rng.chance(BREAKTHROUGH_CHANCE):
        return None

    shuffled = rng.shuffle(ALL_ATTRIBUTES)
    selected = shuffled[: rng.next_int(2, 3)]
    changes = {attr: rng.next_int(2, 3) for attr in selected}

    return BreakthroughResult(
        player_id=player.id,
        changes=changes,
        ability_change=rng.next_int(3, 5),
        improved_attributes=list(selected),
    )


def compute_injury_setback(
    player: Player, weeks_out: int, rng: RNG
) -> Optional[InjurySetbackResult]:
    """
    Physical regression from a serious injury.

    Injuries of more than four weeks take a point off one or two of pace,
    stamina and agility. Attributes already at 1 are spared, and if nothing
    can drop no result is returned.
    """
    if weeks_out <= SERIOUS_INJURY_THRESHOLD:
        return None

    shuffled = rng.shuffle(PHYSICAL_ATTRIBUTES)
    selected = shuffled[: rng.next_int(1, 2)]
    changes = {attr: -1 for attr in selected if player.attributes[attr] > 1}

    if not changes:
        return None
    return InjurySetbackResult(player_id=player.id, changes=changes)


def process_player_development(
    state: "GameState", rng: RNG
) -> Tuple[List[PlayerDevelopmentResult], List[BreakthroughResult]]:
    """
    Run routine development and the breakthrough roll for every eligible player.

    Returns:
        (development results with changes, breakthroughs)
    """
    development: List[PlayerDevelopmentResult] = []
    breakthroughs: List[BreakthroughResult] = []
    rate = get_difficulty_modifiers(state.difficulty).development_rate

    for player in state.players.values():
        if not is_development_eligible(player):
            continue

        club = state.clubs.get(player.club_id)
        result = compute_player_development(player, club, rng, rate)
        if result.has_changes:
            development.append(result)

        breakthrough = compute_breakthrough(player, rng)
        if breakthrough is not None:
            logger.debug("Breakthrough for %s: %s", player.id, breakthrough.changes)
            breakthroughs.append(breakthrough)

    return development, breakthroughs


# =============================================================================
# Commit helpers
# =============================================================================

def apply_attribute_deltas(player: Player, changes: AttributeDeltas, ability_change: int = 0) -> Player:
    """Return a copy of ``player`` with deltas applied and clamped."""
    return replace(
        player,
        attributes=player.attributes.with_deltas(changes),
        current_ability=clamp_ability(player.current_ability + ability_change),
    )


__all__ = [
    "AttributeDeltas",
    "BREAKTHROUGH_CHANCE",
    "BreakthroughResult",
    "HIGH_REPUTATION_THRESHOLD",
    "InjurySetbackResult",
    "PEAK_AGES",
    "PlayerDevelopmentResult",
    "apply_attribute_deltas",
    "attribute_ceiling",
    "compute_breakthrough",
    "compute_injury_setback",
    "compute_player_development",
    "development_chance",
    "development_multiplier",
    "is_development_eligible",
    "process_player_development",
]
