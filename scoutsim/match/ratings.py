"""
Player match ratings and the form they feed.

Simulated fixtures use a light model: a Gaussian around an ability baseline,
nudged by the team result, a scorer bonus, and position bonuses computed from
a synthetic stat line. Ratings are on a 1-10 scale with one decimal.
"""

from typing import Dict, Iterable, List, Sequence

from scoutsim.core.enums import CardType, Position
from scoutsim.core.models.discipline import CardEvent
from scoutsim.core.models.fixture import MatchPlayerStats, PlayerMatchRating, Scorer
from scoutsim.core.models.player import RECENT_RATINGS_WINDOW, MatchFormEntry, Player
from scoutsim.core.rng import RNG
from scoutsim.core.util import clamp, round1


# =============================================================================
# Constants
# =============================================================================

RATING_MIN = 1.0
RATING_MAX = 10.0

SCORER_BONUS = 0.8
HAT_TRICK_BONUS = 0.5

RED_CARD_RATING_CAP = 3.0
YELLOW_CARD_PENALTY = 0.3

# Most recent match first
FORM_WEIGHTS = (1.0, 0.85, 0.7, 0.55, 0.4, 0.3)

# (minimum weighted average, form)
FORM_BANDS = (
    (8.0, 3),
    (7.5, 2),
    (6.5, 1),
    (5.5, 0),
    (5.0, -1),
    (4.5, -2),
)


# =============================================================================
# Synthetic stat lines
# =============================================================================

def generate_synthetic_stats(
    rng: RNG,
    player: Player,
    scorer_ids: Iterable[str],
    goals_against: int,
) -> MatchPlayerStats:
    """Draw a plausible stat line for the player's position."""
    stats = MatchPlayerStats()
    if player.id in set(scorer_ids):
        stats.goals = 1

    position = player.position
    if position == Position.GK:
        stats.saves = rng.next_int(1, 6)
        stats.goals_conceded = goals_against
        stats.clean_sheet = goals_against == 0
    elif position == Position.CB:
        stats.tackles = rng.next_int(1, 5)
        stats.interceptions = rng.next_int(0, 4)
        stats.aerial_duels_won = rng.next_int(1, 6)
    elif position in (Position.LB, Position.RB):
        stats.tackles = rng.next_int(0, 3)
        stats.crosses = rng.next_int(0, 4)
        stats.dribbles = rng.next_int(0, 2)
    elif position == Position.CDM:
        stats.tackles = rng.next_int(1, 4)
        stats.interceptions = rng.next_int(1, 4)
        stats.key_passes = rng.next_int(0, 2)
    elif position == Position.CM:
        stats.key_passes = rng.next_int(0, 3)
        stats.tackles = rng.next_int(0, 2)
        stats.dribbles = rng.next_int(0, 2)
    elif position == Position.CAM:
        stats.key_passes = rng.next_int(0, 4)
        stats.dribbles = rng.next_int(0, 3)
        stats.shots = rng.next_int(0, 3)
    elif position in (Position.LW, Position.RW):
        stats.dribbles = rng.next_int(0, 4)
        stats.crosses = rng.next_int(0, 3)
        stats.shots = rng.next_int(0, 3)
    elif position == Position.ST:
        stats.shots = rng.next_int(1, 5)
        stats.aerial_duels_won = rng.next_int(0, 4)

    return stats


def position_bonuses(position: Position, stats: MatchPlayerStats) -> float:
    """Rating bonus earned from a stat line."""
    bonus = 0.0

    if position == Position.GK:
        if stats.clean_sheet:
            bonus += 0.5
        if (stats.goals_conceded or 0) >= 3:
            bonus -= 0.3
        bonus += (stats.saves or 0) * 0.15
    elif position in (Position.CB, Position.CDM):
        if (stats.tackles or 0) >= 3:
            bonus += 0.2
        if (stats.interceptions or 0) >= 3:
            bonus += 0.2
        if (stats.aerial_duels_won or 0) >= 3:
            bonus += 0.15
    elif position in (Position.LB, Position.RB):
        if (stats.crosses or 0) >= 2:
            bonus += 0.15
        if (stats.tackles or 0) >= 2:
            bonus += 0.15
    elif position == Position.CM:
        if (stats.key_passes or 0) >= 3:
            bonus += 0.2
        if (stats.goals or 0) >= 1:
            bonus += 0.3
    elif position in (Position.CAM, Position.LW, Position.RW):
        if (stats.dribbles or 0) >= 2:
            bonus += 0.15
        if (stats.key_passes or 0) >= 2:
            bonus += 0.15
    elif position == Position.ST:
        if (stats.goals or 0) >= 3:
            bonus += 0.5

    return bonus


# =============================================================================
# Simulated fixture ratings
# =============================================================================

def generate_simulated_match_ratings(
    rng: RNG,
    home_players: Sequence[Player],
    away_players: Sequence[Player],
    home_goals: int,
    away_goals: int,
    scorers: Sequence[Scorer],
    fixture_id: str,
) -> Dict[str, PlayerMatchRating]:
    """
    Rate every player in a simulated fixture, home side first.

    Each player draws the Gaussian rating before their stat line.
    """
    goals_per_player: Dict[str, int] = {}
    for scorer in scorers:
        goals_per_player[scorer.player_id] = goals_per_player.get(scorer.player_id, 0) + 1
    scorer_ids = set(goals_per_player)

    ratings: Dict[str, PlayerMatchRating] = {}

    def rate_team(players: Sequence[Player], scored: int, conceded: int) -> None:
        result_mod = clamp((scored - conceded) * 0.15, -0.5, 0.5)

        for player in players:
            baseline = 4.5 + (player.current_ability / 200) * 3.0
            rating = rng.gaussian(baseline, 0.6) + result_mod

            goals = goals_per_player.get(player.id, 0)
            if goals > 0:
                rating += SCORER_BONUS
                if goals >= 3:
                    rating += HAT_TRICK_BONUS

            stats = generate_synthetic_stats(rng, player, scorer_ids, conceded)
            if goals > 0:
                stats.goals = goals

            rating += position_bonuses(player.position, stats)

            ratings[player.id] = PlayerMatchRating(
                player_id=player.id,
                fixture_id=fixture_id,
                rating=round1(clamp(rating, RATING_MIN, RATING_MAX)),
                stats=stats,
            )

    rate_team(home_players, home_goals, away_goals)
    rate_team(away_players, away_goals, home_goals)

    return ratings


def apply_card_rating_penalty(
    base_rating: float, cards: Iterable[CardEvent], player_id: str
) -> float:
    """
    Adjust a rating for the player's cards in the match.

    A red caps the rating at 3.0; otherwise each yellow costs 0.3. Players
    without cards keep their rating untouched.
    """
    player_cards = [c for c in cards if c.player_id == player_id]
    if not player_cards:
        return base_rating

    if any(c.card_type == CardType.RED for c in player_cards):
        rating = min(base_rating, RED_CARD_RATING_CAP)
    else:
        yellows = sum(1 for c in player_cards if c.card_type == CardType.YELLOW)
        rating = base_rating - yellows * YELLOW_CARD_PENALTY

    return max(RATING_MIN, round1(rating))


# =============================================================================
# Form
# =============================================================================

def compute_form_from_ratings(recent: Iterable[MatchFormEntry]) -> int:
    """
    Map the last six ratings to form in [-3, 3].

    Entries are sorted most recent first regardless of input order; an empty
    history is neutral form.
    """
    ordered = sorted(recent, key=lambda e: (e.season, e.week), reverse=True)
    window = ordered[: len(FORM_WEIGHTS)]
    if not window:
        return 0

    weighted = sum(entry.rating * w for entry, w in zip(window, FORM_WEIGHTS))
    average = weighted / sum(FORM_WEIGHTS[: len(window)])

    for minimum, form in FORM_BANDS:
        if average >= minimum:
            return form
    return -3


def push_recent_rating(
    recent: List[MatchFormEntry], entry: MatchFormEntry
) -> List[MatchFormEntry]:
    """Append a rating and keep only the newest entries of the rolling window."""
    updated = sorted([*recent, entry], key=lambda e: (e.season, e.week))
    return updated[-RECENT_RATINGS_WINDOW:]


__all__ = [
    "FORM_WEIGHTS",
    "apply_card_rating_penalty",
    "compute_form_from_ratings",
    "generate_simulated_match_ratings",
    "generate_synthetic_stats",
    "position_bonuses",
    "push_recent_rating",
]
