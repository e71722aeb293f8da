"""
Form momentum: hot and cold streaks.

Each week a player whose club played draws a match rating. Ratings of 7 or
more are hot, below 5 cold. Four consecutive hot (or cold) matches put the
player on a rising (or falling) trend with momentum ``streak - 3``, capped at
10. Entering or switching a streak locks form for two weeks so a single
off-week cannot swing it.

Precedence, applied in order each week:

1. No club fixture, or injured: the streak resets, momentum and lock count
   down, the trend goes stable once momentum reaches 0, form is unchanged.
2. A qualifying streak (4+ in a row) sets momentum and trend. The lock is
   set to 2 when the trend changed this week, otherwise it counts down.
3. Otherwise an active lock holds momentum and trend and counts down.
4. Otherwise momentum decays by 1 and the trend becomes stable at 0.

Form is held when the player was locked at the start of the week or entered
a streak this week; otherwise it blends 40/60 toward the new match rating.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Iterable, List

from scoutsim.core.enums import FormTrend
from scoutsim.core.models.fixture import Fixture
from scoutsim.core.models.player import FORM_MAX, FORM_MIN, Player
from scoutsim.core.rng import RNG
from scoutsim.core.util import clamp, round1

if TYPE_CHECKING:
    from scoutsim.core.models.state import GameState


HOT_MATCH_RATING = 7.0
COLD_MATCH_RATING = 5.0
STREAK_LENGTH = 4
MAX_MOMENTUM = 10
STREAK_LOCK_WEEKS = 2


@dataclass
class FormMomentumUpdate:
    player_id: str
    form_momentum: int
    form_trend: FormTrend
    form_lock_weeks: int
    form_streak: int
    form: float


def _extend_streak(streak: int, hot: bool, cold: bool) -> int:
    if hot:
        return streak + 1 if streak > 0 else 1
    if cold:
        return streak - 1 if streak < 0 else -1
    return 0


def _club_played(player: Player, fixtures: Iterable[Fixture]) -> bool:
    if not player.club_id:
        return False
    return any(f.involves(player.club_id) for f in fixtures)


def compute_form_momentum(
    player: Player,
    week_fixtures: List[Fixture],
    rng: RNG,
) -> FormMomentumUpdate:
    """Compute one week of streak, momentum, lock and form for a player."""
    momentum = player.form_momentum
    trend = player.form_trend
    lock = player.form_lock_weeks

    if not _club_played(player, week_fixtures) or player.injured:
        decayed = max(0, momentum - 1)
        return FormMomentumUpdate(
            player_id=player.id,
            form_momentum=decayed,
            form_trend=FormTrend.STABLE if decayed == 0 else trend,
            form_lock_weeks=max(0, lock - 1),
            form_streak=0,
            form=player.form,
        )

    base_rating = 5.0 + (player.current_ability / 200) * 3.0
    rating = clamp(rng.gaussian(base_rating, 1.2), 1.0, 10.0)

    streak = _extend_streak(
        player.form_streak,
        hot=rating >= HOT_MATCH_RATING,
        cold=rating < COLD_MATCH_RATING,
    )

    entered_streak = False
    if abs(streak) >= STREAK_LENGTH:
        new_trend = FormTrend.RISING if streak > 0 else FormTrend.FALLING
        new_momentum = min(MAX_MOMENTUM, abs(streak) - (STREAK_LENGTH - 1))
        entered_streak = new_trend != trend
        new_lock = STREAK_LOCK_WEEKS if entered_streak else max(0, lock - 1)
    elif lock > 0:
        new_trend = trend
        new_momentum = momentum
        new_lock = lock - 1
    else:
        new_momentum = max(0, momentum - 1)
        new_trend = trend if new_momentum > 0 else FormTrend.STABLE
        new_lock = 0

    if lock > 0 or entered_streak:
        new_form = player.form
    else:
        raw = (rating - 5.5) / 4.5 * 3
        new_form = clamp(round1(player.form * 0.4 + raw * 0.6), FORM_MIN, FORM_MAX)

    return FormMomentumUpdate(
        player_id=player.id,
        form_momentum=new_momentum,
        form_trend=new_trend,
        form_lock_weeks=new_lock,
        form_streak=streak,
        form=new_form,
    )


def process_form_momentum(
    state: "GameState", week_fixtures: List[Fixture], rng: RNG
) -> List[FormMomentumUpdate]:
    """Form momentum for every player in the world, in player order."""
    return [
        compute_form_momentum(player, week_fixtures, rng)
        for player in state.players.values()
    ]


def apply_form_momentum(player: Player, update: FormMomentumUpdate) -> Player:
    return replace(
        player,
        form_momentum=update.form_momentum,
        form_trend=update.form_trend,
        form_lock_weeks=update.form_lock_weeks,
        form_streak=update.form_streak,
        form=update.form,
    )


__all__ = [
    "COLD_MATCH_RATING",
    "FormMomentumUpdate",
    "HOT_MATCH_RATING",
    "apply_form_momentum",
    "compute_form_momentum",
    "process_form_momentum",
]
