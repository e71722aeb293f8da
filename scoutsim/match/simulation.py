"""
Fixture simulator.

Turns two squads into a scoreline with an expected-goals model: each side's
share of the combined average ability sets its expected goals (about 2.6 per
match, plus 0.3 home advantage), and goals are drawn from a Gaussian
approximation of a Poisson. Weather scales both sides' ability, and a
tactical matchup nudges expected goals when both clubs declare a style.

Simulation returns new, played Fixture objects and never edits its inputs.
"""

import logging
import math
from dataclasses import replace
from typing import TYPE_CHECKING, AbstractSet, Dict, List, Mapping, Optional, Sequence, Set, Tuple

from scoutsim.core.discipline import suspended_player_ids
from scoutsim.core.enums import Weather
from scoutsim.core.models.club import Club
from scoutsim.core.models.discipline import DisciplinaryRecord
from scoutsim.core.models.fixture import Fixture, Scorer
from scoutsim.core.models.player import Player
from scoutsim.core.rng import RNG
from scoutsim.core.util import clamp, round_half_up
from scoutsim.match.ratings import generate_simulated_match_ratings
from scoutsim.match.tactics import calculate_tactical_matchup

if TYPE_CHECKING:
    from scoutsim.core.models.state import GameState


logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

DEFAULT_ABILITY = 100.0
GOALS_PER_MATCH = 2.6
HOME_ADVANTAGE = 0.3

MIN_ATTENDANCE = 500
MAX_ATTENDANCE = 90000
ATTENDANCE_PER_REPUTATION = 400
MATCH_MINUTES = 90

WEATHER_WEIGHTS: List[Tuple[Weather, int]] = [
    (Weather.CLEAR, 35),
    (Weather.CLOUDY, 30),
    (Weather.RAIN, 15),
    (Weather.HEAVY_RAIN, 8),
    (Weather.WINDY, 8),
    (Weather.SNOW, 4),
]

WEATHER_MODIFIERS: Dict[Weather, float] = {
    Weather.CLEAR: 1.0,
    Weather.CLOUDY: 0.98,
    Weather.RAIN: 0.92,
    Weather.HEAVY_RAIN: 0.85,
    Weather.SNOW: 0.80,
    Weather.WINDY: 0.90,
}


# =============================================================================
# Squad strength
# =============================================================================

def club_average_ability(
    club: Club,
    players: Mapping[str, Player],
    records: Mapping[str, DisciplinaryRecord],
) -> float:
    """
    Average current ability of a club's available players.

    Missing, suspended and injured players are left out. A club with nobody
    available rates as an average professional (100).
    """
    suspended = suspended_player_ids(records)
    abilities = [
        players[pid].current_ability
        for pid in club.player_ids
        if pid in players and pid not in suspended and not players[pid].injured
    ]
    if not abilities:
        return DEFAULT_ABILITY
    return sum(abilities) / len(abilities)


def squad_players(
    club: Optional[Club],
    players: Mapping[str, Player],
    suspended: AbstractSet[str] = frozenset(),
) -> List[Player]:
    """Existing, fit, unsuspended players of a club in squad order."""
    if club is None:
        return []
    return [
        players[pid]
        for pid in club.player_ids
        if pid in players and pid not in suspended and not players[pid].injured
    ]


# =============================================================================
# Match conditions
# =============================================================================

def pick_weather(rng: RNG) -> Weather:
    return rng.pick_weighted(WEATHER_WEIGHTS)


def generate_attendance(home_club: Optional[Club], rng: RNG) -> int:
    """Crowd size around ``reputation * 400`` with 10% spread."""
    if home_club is None:
        return rng.next_int(5000, 30000)
    base = home_club.reputation * ATTENDANCE_PER_REPUTATION
    crowd = base + rng.gaussian(0, base * 0.1)
    return round_half_up(clamp(crowd, MIN_ATTENDANCE, MAX_ATTENDANCE))


def draw_goals(rng: RNG, expected: float) -> int:
    return max(0, round_half_up(rng.gaussian(expected, math.sqrt(expected))))


# =============================================================================
# Scorers
# =============================================================================

def scorer_weight(player: Player) -> float:
    weight = (
        player.attributes["shooting"] * 0.4
        + player.attributes["finishing"] * 0.6
        + (3 if player.position.is_attacking else 0)
    )
    return max(1.0, weight)


def _pick_team_scorers(rng: RNG, players: Sequence[Player], goals: int) -> List[Scorer]:
    if not players or goals == 0:
        return []

    weighted = [(p.id, scorer_weight(p)) for p in players]
    used_minutes: Set[int] = set()
    scorers: List[Scorer] = []

    # One goal per minute per side, so at most 90 scorers
    for _ in range(min(goals, MATCH_MINUTES)):
        player_id = rng.pick_weighted(weighted)
        minute = rng.next_int(1, MATCH_MINUTES)
        while minute in used_minutes:
            minute = rng.next_int(1, MATCH_MINUTES)
        used_minutes.add(minute)
        scorers.append(Scorer(player_id=player_id, minute=minute))

    return sorted(scorers, key=lambda s: s.minute)


def pick_scorers(
    rng: RNG,
    home_players: Sequence[Player],
    home_goals: int,
    away_players: Sequence[Player],
    away_goals: int,
) -> List[Scorer]:
    """Home scorers then away scorers, each side sorted by minute."""
    return [
        *_pick_team_scorers(rng, home_players, home_goals),
        *_pick_team_scorers(rng, away_players, away_goals),
    ]


# =============================================================================
# Simulation
# =============================================================================

def simulate_fixture(
    fixture: Fixture,
    clubs: Mapping[str, Club],
    players: Mapping[str, Player],
    rng: RNG,
    records: Optional[Mapping[str, DisciplinaryRecord]] = None,
) -> Fixture:
    """
    Simulate one fixture.

    Draw order: weather, home goals, away goals, attendance, scorers, then
    player ratings.

    Args:
        fixture: Unplayed fixture
        clubs: Club lookup; a missing club plays at ability 100
        players: Player lookup
        rng: Random source
        records: Disciplinary records used to exclude suspended players

    Returns:
        A new played Fixture
    """
    records = records or {}
    home_club = clubs.get(fixture.home_club_id)
    away_club = clubs.get(fixture.away_club_id)

    for club_id, club in ((fixture.home_club_id, home_club), (fixture.away_club_id, away_club)):
        if club is None:
            logger.warning("Fixture %s references missing club %s", fixture.id, club_id)

    weather = pick_weather(rng)
    weather_mod = WEATHER_MODIFIERS[weather]

    home_ability = (
        club_average_ability(home_club, players, records) * weather_mod
        if home_club else DEFAULT_ABILITY
    )
    away_ability = (
        club_average_ability(away_club, players, records) * weather_mod
        if away_club else DEFAULT_ABILITY
    )

    home_factor = away_factor = 1.0
    if home_club and away_club and home_club.tactical_style and away_club.tactical_style:
        matchup = calculate_tactical_matchup(home_club.tactical_style, away_club.tactical_style)
        home_factor = matchup.home_xg_factor
        away_factor = matchup.away_xg_factor

    total = home_ability + away_ability
    home_expected = home_ability / total * GOALS_PER_MATCH * home_factor + HOME_ADVANTAGE
    away_expected = away_ability / total * GOALS_PER_MATCH * away_factor

    home_goals = draw_goals(rng, home_expected)
    away_goals = draw_goals(rng, away_expected)

    attendance = generate_attendance(home_club, rng)

    suspended = suspended_player_ids(records)
    home_players = squad_players(home_club, players, suspended)
    away_players = squad_players(away_club, players, suspended)
    scorers = pick_scorers(rng, home_players, home_goals, away_players, away_goals)

    ratings = {}
    if home_players or away_players:
        ratings = generate_simulated_match_ratings(
            rng, home_players, away_players, home_goals, away_goals, scorers, fixture.id
        )

    logger.debug(
        "%s: %s %d-%d %s (%s)",
        fixture.id, fixture.home_club_id, home_goals, away_goals,
        fixture.away_club_id, weather.value,
    )

    return replace(
        fixture,
        played=True,
        home_goals=home_goals,
        away_goals=away_goals,
        attendance=attendance,
        weather=weather,
        scorers=scorers,
        player_ratings=ratings,
    )


def simulate_week_fixtures(
    state: "GameState",
    rng: RNG,
    records: Optional[Mapping[str, DisciplinaryRecord]] = None,
) -> List[Fixture]:
    """Simulate every unplayed fixture of the current week, in fixture-id order."""
    if records is None:
        records = state.disciplinary_records

    due = sorted(
        (f for f in state.fixtures.values() if f.week == state.current_week and not f.played),
        key=lambda f: f.id,
    )
    return [simulate_fixture(f, state.clubs, state.players, rng, records) for f in due]


__all__ = [
    "WEATHER_MODIFIERS",
    "WEATHER_WEIGHTS",
    "club_average_ability",
    "generate_attendance",
    "pick_scorers",
    "pick_weather",
    "scorer_weight",
    "simulate_fixture",
    "simulate_week_fixtures",
    "squad_players",
]
