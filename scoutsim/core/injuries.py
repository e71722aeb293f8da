"""
Injury incidence, recovery and proneness.

Each week every fit player rolls for an injury. The odds scale with the
player's hidden proneness trait, with the proneness accumulated from past
injuries, and double inside the reinjury window that opens when an injury
heals. Computation returns InjuryResult values; the state helpers at the
bottom build updated Player copies for the commit phase.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Dict, List, Tuple

from scoutsim.core.enums import InjurySeverity, InjuryType
from scoutsim.core.models.player import Injury, InjuryHistory, Player
from scoutsim.core.rng import RNG, generate_id

if TYPE_CHECKING:
    from scoutsim.core.models.state import GameState


logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

BASE_INJURY_PROBABILITY = 0.02

# Proneness added to the history on every injury, and its cap
PRONENESS_PER_INJURY = 0.03
MAX_HISTORY_PRONENESS = 0.5

REINJURY_WINDOW_WEEKS = 4
REINJURY_MULTIPLIER = 2.0

# Injuries longer than this leave a permanent physical setback
SERIOUS_INJURY_THRESHOLD = 4

INJURY_TYPE_WEIGHTS: List[Tuple[InjuryType, int]] = [
    (InjuryType.MUSCLE, 40),
    (InjuryType.KNOCK, 25),
    (InjuryType.LIGAMENT, 15),
    (InjuryType.FATIGUE, 10),
    (InjuryType.FRACTURE, 7),
    (InjuryType.CONCUSSION, 3),
]

# Recovery range in weeks, inclusive
RECOVERY_RANGES: Dict[InjuryType, Tuple[int, int]] = {
    InjuryType.KNOCK: (1, 2),
    InjuryType.MUSCLE: (2, 6),
    InjuryType.FATIGUE: (1, 3),
    InjuryType.LIGAMENT: (4, 12),
    InjuryType.FRACTURE: (6, 16),
    InjuryType.CONCUSSION: (2, 4),
}


@dataclass
class InjuryResult:
    """A new injury produced by this week's roll."""

    player_id: str
    weeks_out: int
    injury: Injury


# =============================================================================
# Probability and generation
# =============================================================================

def derive_severity(recovery_weeks: int) -> InjurySeverity:
    """Map recovery length to a severity band."""
    if recovery_weeks <= 2:
        return InjurySeverity.MINOR
    if recovery_weeks <= 5:
        return InjurySeverity.MODERATE
    if recovery_weeks <= 10:
        return InjurySeverity.SERIOUS
    return InjurySeverity.CAREER_THREATENING


def compute_injury_probability(player: Player) -> float:
    """
    Weekly injury probability for a player.

    Already-injured players return 0. Proneness 1 gives 0.5x the base rate,
    proneness 20 gives 2.5x.
    """
    if player.injured:
        return 0.0

    proneness_multiplier = 0.5 + (player.injury_proneness / 20) * 2

    history = player.injury_history
    history_multiplier = 1 + (history.proneness if history else 0.0)
    window = history.reinjury_window_weeks_left if history else 0
    reinjury_multiplier = REINJURY_MULTIPLIER if window > 0 else 1.0

    return (
        BASE_INJURY_PROBABILITY
        * proneness_multiplier
        * history_multiplier
        * reinjury_multiplier
    )


def generate_injury(rng: RNG, player: Player, week: int, season: int) -> Injury:
    """Draw an injury type, then a recovery length from that type's range."""
    injury_type = rng.pick_weighted(INJURY_TYPE_WEIGHTS)
    min_weeks, max_weeks = RECOVERY_RANGES[injury_type]
    recovery_weeks = rng.next_int(min_weeks, max_weeks)

    return Injury(
        id=generate_id("inj", rng),
        player_id=player.id,
        injury_type=injury_type,
        severity=derive_severity(recovery_weeks),
        recovery_weeks=recovery_weeks,
        weeks_remaining=recovery_weeks,
        occurred_week=week,
        occurred_season=season,
    )


def process_injuries(state: "GameState", rng: RNG) -> List[InjuryResult]:
    """Roll for new injuries across every player in the world."""
    results: List[InjuryResult] = []

    for player in state.players.values():
        probability = compute_injury_probability(player)
        if probability <= 0 or not rng.chance(min(1.0, probability)):
            continue
        injury = generate_injury(rng, player, state.current_week, state.current_season)
        logger.debug(
            "%s injured: %s (%s, %d weeks)",
            player.id, injury.injury_type.value, injury.severity.value, injury.recovery_weeks,
        )
        results.append(
            InjuryResult(player_id=player.id, weeks_out=injury.recovery_weeks, injury=injury)
        )

    return results


# =============================================================================
# State helpers (commit phase)
# =============================================================================

def add_to_injury_history(player: Player, injury: Injury) -> InjuryHistory:
    """
    Return the player's history extended by ``injury``.

    Proneness rises by a fixed step up to the cap and the reinjury window is
    closed; it reopens when this injury heals.
    """
    existing = player.injury_history or InjuryHistory(player_id=player.id)
    return InjuryHistory(
        player_id=existing.player_id,
        injuries=[*existing.injuries, injury],
        total_weeks_missed=existing.total_weeks_missed + injury.recovery_weeks,
        proneness=min(MAX_HISTORY_PRONENESS, existing.proneness + PRONENESS_PER_INJURY),
        reinjury_window_weeks_left=0,
    )


def advance_injury_clock(player: Player) -> Player:
    """
    Move a player's injury state on by one week.

    An injured player's countdown drops by one; reaching zero clears the
    injury and opens the reinjury window. A fit player's open window shrinks
    by one. Players with nothing to update are returned as-is.
    """
    if player.injured and player.injury_weeks_remaining > 0:
        remaining = player.injury_weeks_remaining - 1
        recovered = remaining == 0

        history = player.injury_history
        if recovered and history is not None:
            history = replace(history, reinjury_window_weeks_left=REINJURY_WINDOW_WEEKS)

        current = None
        if not recovered and player.current_injury is not None:
            current = replace(player.current_injury, weeks_remaining=remaining)

        return replace(
            player,
            injury_weeks_remaining=remaining,
            injured=not recovered,
            current_injury=current,
            injury_history=history,
        )

    history = player.injury_history
    if not player.injured and history is not None and history.reinjury_window_weeks_left > 0:
        return replace(
            player,
            injury_history=replace(
                history,
                reinjury_window_weeks_left=history.reinjury_window_weeks_left - 1,
            ),
        )

    return player


def apply_injury(player: Player, result: InjuryResult) -> Player:
    """Mark a player injured with the given result."""
    return replace(
        player,
        injured=True,
        injury_weeks_remaining=result.weeks_out,
        current_injury=result.injury,
        injury_history=add_to_injury_history(player, result.injury),
    )


__all__ = [
    "BASE_INJURY_PROBABILITY",
    "INJURY_TYPE_WEIGHTS",
    "InjuryResult",
    "MAX_HISTORY_PRONENESS",
    "PRONENESS_PER_INJURY",
    "RECOVERY_RANGES",
    "REINJURY_WINDOW_WEEKS",
    "SERIOUS_INJURY_THRESHOLD",
    "add_to_injury_history",
    "advance_injury_clock",
    "apply_injury",
    "compute_injury_probability",
    "derive_severity",
    "generate_injury",
    "process_injuries",
]
