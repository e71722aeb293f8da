"""
Weekly tick orchestrator.

The tick is split in two so a week can be previewed before it is applied:

- ``compute_tick(state, rng)`` works out everything that happens this week
  and returns a TickResult. It is the only phase that draws random numbers.
- ``commit_tick(state, result)`` folds a TickResult into a brand-new
  GameState. It never draws random numbers and never edits its inputs.

Random draws happen in this fixed order:

1. Suspensions count down (no draws)
2. Fixtures are simulated in fixture-id order
3. Simulated cards per played fixture, home players then away
4. Card accumulation and bans (no draws)
5. Player development and breakthroughs
6. AI transfers
7. New injuries
8. Setbacks for serious new injuries
9. Activity quality for each scheduled activity, then week processing
10. Inbox: assignment, news, breakthroughs, end of season
11. Reputation change (no draws)
12. Reputation summary message
13. Regional knowledge growth and its messages
14. Suspension notices for observed players
15. Form momentum
16. Season awards when the season ends (no draws)
17. Unsigned youth aging when the season ends
18. Player retirements when the season ends
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Dict, List, Mapping, Optional, Sequence

from scoutsim.core.development import (
    BreakthroughResult,
    InjurySetbackResult,
    PlayerDevelopmentResult,
    apply_attribute_deltas,
    compute_injury_setback,
    process_player_development,
)
from scoutsim.core.difficulty import get_difficulty_modifiers
from scoutsim.core.discipline import (
    clear_season_cards,
    decrement_suspensions,
    generate_simulated_cards,
    process_card_accumulation,
)
from scoutsim.core.enums import ScoutAttribute
from scoutsim.core.form import FormMomentumUpdate, apply_form_momentum, process_form_momentum
from scoutsim.core.injuries import (
    SERIOUS_INJURY_THRESHOLD,
    InjuryResult,
    advance_injury_clock,
    apply_injury,
    process_injuries,
)
from scoutsim.core.models.awards import SeasonAwards
from scoutsim.core.models.discipline import CardEvent, DisciplinaryRecord, Suspension
from scoutsim.core.models.fixture import Fixture, PlayerMatchRating
from scoutsim.core.models.inbox import InboxMessage
from scoutsim.core.models.player import MatchFormEntry, Player
from scoutsim.core.models.schedule import WeekSchedule
from scoutsim.core.models.scout import FATIGUE_MAX, REPUTATION_MAX, Scout, UnsignedYouth
from scoutsim.core.models.state import GameState
from scoutsim.core.rng import RNG
from scoutsim.core.util import clamp
from scoutsim.management.awards import generate_season_awards
from scoutsim.management.messages import (
    generate_breakthrough_messages,
    generate_end_of_season_message,
    generate_inbox_messages,
    generate_regional_messages,
    generate_reputation_summary_message,
    generate_suspension_messages,
)
from scoutsim.management.reputation import (
    ReputationDelta,
    compute_reputation_change,
    scale_reputation_change,
)
from scoutsim.management.retirement import (
    YouthAgingResult,
    apply_retirements,
    apply_youth_signings,
    process_player_retirement,
    process_youth_aging,
)
from scoutsim.management.transfers import Transfer, process_transfers
from scoutsim.match.ratings import (
    apply_card_rating_penalty,
    compute_form_from_ratings,
    push_recent_rating,
)
from scoutsim.match.simulation import simulate_week_fixtures
from scoutsim.scouting.activity_quality import ActivityQualityResult, roll_activity_quality
from scoutsim.scouting.calendar import (
    WeekProcessingResult,
    apply_week_results,
    iter_scheduled_activities,
    process_completed_week,
)
from scoutsim.scouting.regional_knowledge import (
    RegionalKnowledgeResult,
    process_regional_knowledge_growth,
)


logger = logging.getLogger(__name__)


MIN_SEASON_LENGTH_WEEKS = 38
BASE_WEEKLY_FATIGUE_RECOVERY = 10
TRANSFER_MORALE_BOOST = 2


# =============================================================================
# Tick result
# =============================================================================

@dataclass
class TickResult:
    """Everything that happened in one week, ready to be committed."""

    week: int
    season: int

    fixtures_played: List[Fixture] = field(default_factory=list)
    standings_updated: bool = False

    player_development: List[PlayerDevelopmentResult] = field(default_factory=list)
    breakthroughs: List[BreakthroughResult] = field(default_factory=list)
    injury_setbacks: List[InjurySetbackResult] = field(default_factory=list)
    transfers: List[Transfer] = field(default_factory=list)
    injuries: List[InjuryResult] = field(default_factory=list)

    card_events: List[CardEvent] = field(default_factory=list)
    updated_disciplinary_records: Dict[str, DisciplinaryRecord] = field(default_factory=dict)
    suspensions: List[Suspension] = field(default_factory=list)

    form_momentum_updates: List[FormMomentumUpdate] = field(default_factory=list)

    new_messages: List[InboxMessage] = field(default_factory=list)
    reputation_change: int = 0
    reputation_deltas: List[ReputationDelta] = field(default_factory=list)
    regional_knowledge_result: Optional[RegionalKnowledgeResult] = None

    week_result: WeekProcessingResult = field(default_factory=WeekProcessingResult)
    activity_qualities: Dict[int, ActivityQualityResult] = field(default_factory=dict)
    fatigue_recovery: int = 0

    end_of_season_triggered: bool = False
    season_awards: Optional[SeasonAwards] = None
    youth_aging: Optional[YouthAgingResult] = None
    retired_player_ids: List[str] = field(default_factory=list)


# =============================================================================
# Season helpers
# =============================================================================

def get_season_length(fixtures: Mapping[str, Fixture]) -> int:
    """Last fixture week of the season, never shorter than 38."""
    return max([MIN_SEASON_LENGTH_WEEKS, *(f.week for f in fixtures.values())])


def is_end_of_season(current_week: int, fixtures: Mapping[str, Fixture]) -> bool:
    return current_week >= get_season_length(fixtures)


def compute_fatigue_recovery(scout: Scout) -> int:
    """Weekly natural recovery: 10 plus a quarter of endurance."""
    return BASE_WEEKLY_FATIGUE_RECOVERY + scout.attributes.get(ScoutAttribute.ENDURANCE, 0) // 4


# =============================================================================
# Compute phase
# =============================================================================

def _club_squad(state: GameState, club_id: str) -> List[Player]:
    club = state.clubs.get(club_id)
    if club is None:
        return []
    return [state.players[pid] for pid in club.player_ids if pid in state.players]


def _apply_card_penalties(fixture: Fixture, cards: Sequence[CardEvent]) -> Fixture:
    fixture_cards = [c for c in cards if c.fixture_id == fixture.id]
    booked = {c.player_id for c in fixture_cards}
    if not booked or not fixture.player_ratings:
        return fixture

    ratings: Dict[str, PlayerMatchRating] = {}
    for player_id, rating in fixture.player_ratings.items():
        if player_id in booked:
            rating = replace(rating, rating=apply_card_rating_penalty(rating.rating, fixture_cards, player_id))
        ratings[player_id] = rating
    return replace(fixture, player_ratings=ratings)


def _process_schedule(state: GameState, rng: RNG):
    schedule = state.schedule
    if schedule is None or schedule.completed:
        return {}, WeekProcessingResult()

    qualities = {
        start: roll_activity_quality(rng, activity.activity_type, state.scout)
        for start, activity in iter_scheduled_activities(schedule)
    }
    multipliers = {start: q.multiplier for start, q in qualities.items()}
    return qualities, process_completed_week(schedule, state.scout, multipliers)


def compute_tick(state: GameState, rng: RNG) -> TickResult:
    """
    Work out one week of simulation without changing ``state``.

    Args:
        state: Current game state
        rng: The run's random source; the only thing this call mutates

    Returns:
        The week's change-set for ``commit_tick``
    """
    result = TickResult(week=state.current_week, season=state.current_season)

    # 1-2. Suspensions count down before anyone is picked
    records = decrement_suspensions(state.disciplinary_records)
    fixtures = simulate_week_fixtures(state, rng, records)
    result.standings_updated = bool(fixtures)

    # 3-4. Discipline
    cards: List[CardEvent] = []
    for fixture in fixtures:
        cards.extend(
            generate_simulated_cards(
                rng,
                fixture.id,
                _club_squad(state, fixture.home_club_id),
                _club_squad(state, fixture.away_club_id),
                records,
            )
        )
    result.card_events = cards
    result.fixtures_played = [_apply_card_penalties(f, cards) for f in fixtures]
    result.updated_disciplinary_records, result.suspensions = process_card_accumulation(
        cards, records, state.current_season
    )

    # 5-8. Players
    result.player_development, result.breakthroughs = process_player_development(state, rng)
    result.transfers = process_transfers(state, rng)
    result.injuries = process_injuries(state, rng)
    for injury in result.injuries:
        if injury.weeks_out <= SERIOUS_INJURY_THRESHOLD:
            continue
        player = state.players.get(injury.player_id)
        if player is None:
            continue
        setback = compute_injury_setback(player, injury.weeks_out, rng)
        if setback is not None:
            result.injury_setbacks.append(setback)

    # 9. The scout's week
    result.activity_qualities, result.week_result = _process_schedule(state, rng)
    result.fatigue_recovery = compute_fatigue_recovery(state.scout)

    # 10. Inbox
    result.end_of_season_triggered = is_end_of_season(state.current_week, state.fixtures)
    messages = generate_inbox_messages(state, result.transfers, result.injuries, rng)
    messages.extend(generate_breakthrough_messages(state, result.breakthroughs, rng))
    if result.end_of_season_triggered:
        messages.append(generate_end_of_season_message(state, rng))

    # 11-12. Reputation
    result.reputation_change, result.reputation_deltas = compute_reputation_change(state)
    summary = generate_reputation_summary_message(state, result.reputation_deltas, rng)
    if summary is not None:
        messages.append(summary)

    # 13. Regional knowledge
    if state.regional_knowledge:
        regional = process_regional_knowledge_growth(state, rng)
        result.regional_knowledge_result = regional
        messages.extend(generate_regional_messages(state, regional, rng))

    # 14. Suspension notices
    messages.extend(generate_suspension_messages(state, result.suspensions, rng))
    result.new_messages = messages

    # 15. Form momentum
    result.form_momentum_updates = process_form_momentum(state, fixtures, rng)

    # 16-18. Awards and rollover departures
    if result.end_of_season_triggered:
        result.season_awards = generate_season_awards(state, state.current_season)
        result.youth_aging = process_youth_aging(state, rng)
        result.retired_player_ids = process_player_retirement(state, rng)

    logger.info(
        "Computed week %d season %d: %d fixtures, %d transfers, %d injuries, %d messages",
        state.current_week, state.current_season, len(fixtures),
        len(result.transfers), len(result.injuries), len(messages),
    )
    return result


# =============================================================================
# Commit phase
# =============================================================================

def _apply_transfers(
    players: Dict[str, Player],
    clubs: Dict,
    transfers: Sequence[Transfer],
    newly_injured: set,
) -> None:
    moved = set()
    for transfer in transfers:
        if transfer.player_id in moved or transfer.player_id in newly_injured:
            continue
        moved.add(transfer.player_id)

        player = players.get(transfer.player_id)
        from_club = clubs.get(transfer.from_club_id)
        to_club = clubs.get(transfer.to_club_id)
        if player is None or from_club is None or to_club is None:
            logger.warning("Skipping transfer of %s: dangling reference", transfer.player_id)
            continue

        clubs[from_club.id] = replace(
            from_club,
            player_ids=[pid for pid in from_club.player_ids if pid != player.id],
            budget=from_club.budget + transfer.fee,
        )
        clubs[to_club.id] = replace(
            to_club,
            player_ids=[*to_club.player_ids, player.id],
            budget=max(0, to_club.budget - transfer.fee),
        )
        players[player.id] = replace(
            player,
            club_id=to_club.id,
            morale=clamp(player.morale + TRANSFER_MORALE_BOOST, 1, 10),
        )


def _apply_match_ratings(
    state: GameState,
    players: Dict[str, Player],
    fixtures: Sequence[Fixture],
) -> Dict[str, Dict[str, PlayerMatchRating]]:
    match_ratings = dict(state.match_ratings)
    for fixture in fixtures:
        if not fixture.player_ratings:
            continue
        match_ratings[fixture.id] = dict(fixture.player_ratings)
        for player_id, rating in fixture.player_ratings.items():
            player = players.get(player_id)
            if player is None:
                continue
            entry = MatchFormEntry(
                fixture_id=fixture.id,
                week=state.current_week,
                season=state.current_season,
                rating=rating.rating,
            )
            recent = push_recent_rating(player.recent_match_ratings, entry)
            players[player_id] = replace(
                player,
                recent_match_ratings=recent,
                form=float(compute_form_from_ratings(recent)),
            )
    return match_ratings


def _commit_scout(state: GameState, result: TickResult) -> Scout:
    modifiers = get_difficulty_modifiers(state.difficulty)
    change = scale_reputation_change(result.reputation_change, modifiers.reputation_multiplier)

    scout = apply_week_results(state.scout, result.week_result)
    return replace(
        scout,
        reputation=clamp(scout.reputation + change, 0, REPUTATION_MAX),
        fatigue=clamp(scout.fatigue - result.fatigue_recovery, 0, FATIGUE_MAX),
    )


def _commit_departures(
    players: Dict[str, Player],
    clubs: Dict,
    unsigned_youth: Mapping[str, UnsignedYouth],
    result: TickResult,
):
    """Academy signings, then retirements. Returns the tables and the departed player ids."""
    players = dict(players)
    clubs = dict(clubs)
    youth = dict(unsigned_youth)
    departed = list(result.retired_player_ids)

    if result.youth_aging is not None:
        apply_youth_signings(players, clubs, youth, result.youth_aging.signings)
        for youth_id in result.youth_aging.retired:
            entry = youth.pop(youth_id, None)
            if entry is not None:
                departed.append(entry.player_id)

    apply_retirements(players, clubs, departed)
    return players, clubs, youth, departed


def commit_tick(state: GameState, result: TickResult) -> GameState:
    """
    Apply a TickResult, returning a new GameState.

    Entries naming players or clubs that no longer exist are skipped. Values
    are clamped to their ranges as they are written.
    """
    fixtures = dict(state.fixtures)
    for fixture in result.fixtures_played:
        fixtures[fixture.id] = fixture

    players = dict(state.players)

    for delta in [*result.player_development, *result.breakthroughs]:
        player = players.get(delta.player_id)
        if player is not None:
            players[delta.player_id] = apply_attribute_deltas(player, delta.changes, delta.ability_change)

    for setback in result.injury_setbacks:
        player = players.get(setback.player_id)
        if player is not None:
            players[setback.player_id] = apply_attribute_deltas(player, setback.changes)

    for update in result.form_momentum_updates:
        player = players.get(update.player_id)
        if player is not None:
            players[update.player_id] = apply_form_momentum(player, update)

    # Existing injuries heal before this week's new ones land
    players = {pid: advance_injury_clock(p) for pid, p in players.items()}

    newly_injured = set()
    for injury in result.injuries:
        player = players.get(injury.player_id)
        if player is None:
            continue
        newly_injured.add(injury.player_id)
        players[injury.player_id] = apply_injury(player, injury)

    clubs = dict(state.clubs)
    _apply_transfers(players, clubs, result.transfers, newly_injured)

    match_ratings = _apply_match_ratings(state, players, result.fixtures_played)

    records = result.updated_disciplinary_records
    scout = _commit_scout(state, result)

    regional_knowledge = dict(state.regional_knowledge)
    if result.regional_knowledge_result is not None:
        regional_knowledge.update(result.regional_knowledge_result.updated)

    inbox = [*state.inbox, *result.new_messages]

    next_week = state.current_week + 1
    next_season = state.current_season
    leagues = state.leagues
    unsigned_youth = state.unsigned_youth
    season_awards = state.season_awards
    retired_player_ids = state.retired_player_ids

    if result.end_of_season_triggered:
        next_week = 1
        next_season = state.current_season + 1
        players, clubs, unsigned_youth, departed = _commit_departures(
            players, clubs, state.unsigned_youth, result
        )
        retired_player_ids = [*retired_player_ids, *departed]
        players = {pid: replace(p, age=p.age + 1) for pid, p in players.items()}
        unsigned_youth = {yid: replace(y, age=y.age + 1) for yid, y in unsigned_youth.items()}
        leagues = {lid: replace(league, season=next_season) for lid, league in leagues.items()}
        records = clear_season_cards(records, next_season)
        if result.season_awards is not None:
            season_awards = {**season_awards, result.season_awards.season: result.season_awards}
        logger.info("Season %d complete, starting season %d", state.current_season, next_season)

    logger.info("Committed week %d season %d", state.current_week, state.current_season)

    return replace(
        state,
        fixtures=fixtures,
        players=players,
        clubs=clubs,
        leagues=leagues,
        scout=scout,
        disciplinary_records=records,
        regional_knowledge=regional_knowledge,
        unsigned_youth=unsigned_youth,
        inbox=inbox,
        match_ratings=match_ratings,
        season_awards=season_awards,
        retired_player_ids=retired_player_ids,
        current_week=next_week,
        current_season=next_season,
        total_weeks_played=state.total_weeks_played + 1,
        schedule=WeekSchedule(week=next_week, season=next_season),
    )


def advance_week(state: GameState, rng: RNG) -> GameState:
    """Compute and commit one week."""
    return commit_tick(state, compute_tick(state, rng))


__all__ = [
    "TickResult",
    "advance_week",
    "commit_tick",
    "compute_fatigue_recovery",
    "compute_tick",
    "get_season_length",
    "is_end_of_season",
]
