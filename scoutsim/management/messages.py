"""
Inbox message generation.

Every message the weekly tick sends the scout is built here: club
assignments, transfer and injury news, breakthroughs, the end-of-season
notice, the weekly reputation summary, regional discoveries and suspension
notices. Each message id consumes random draws, so callers must keep the
order of calls fixed.
"""

from typing import TYPE_CHECKING, Iterable, List, Optional, Sequence

from scoutsim.core.development import BreakthroughResult
from scoutsim.core.enums import MessageType, Specialization
from scoutsim.core.injuries import InjuryResult
from scoutsim.core.models.discipline import Suspension
from scoutsim.core.models.inbox import InboxMessage
from scoutsim.core.models.player import Player
from scoutsim.core.rng import RNG, generate_id
from scoutsim.management.reputation import ReputationDelta
from scoutsim.management.transfers import Transfer
from scoutsim.scouting.regional_knowledge import RegionalKnowledgeResult

if TYPE_CHECKING:
    from scoutsim.core.models.state import GameState


ASSIGNMENT_CHANCE = 0.3
FIRST_TEAM_MIN_AGE = 20
NEWSWORTHY_ABILITY = 130
TRANSFER_NEWS_CHANCE = 0.5


def make_message_id(prefix: str, rng: RNG) -> str:
    return generate_id(f"msg_{prefix}", rng)


def _message(
    state: "GameState",
    message_id: str,
    message_type: MessageType,
    title: str,
    body: str,
    action_required: bool = False,
    related_id: Optional[str] = None,
) -> InboxMessage:
    return InboxMessage(
        id=message_id,
        week=state.current_week,
        season=state.current_season,
        message_type=message_type,
        title=title,
        body=body,
        action_required=action_required,
        related_id=related_id,
    )


def _label(value: str) -> str:
    """Turn ``first_touch`` or ``playingStyle`` into readable words."""
    words = []
    for ch in value.replace("_", " "):
        if ch.isupper():
            words.append(" ")
        words.append(ch.lower())
    return "".join(words).strip()


# =============================================================================
# Club and world news
# =============================================================================

def maybe_generate_assignment(state: "GameState", rng: RNG) -> Optional[InboxMessage]:
    """
    Occasionally ask an employed scout to report on an unreported player.

    Youth scouts never get assignments; first-team scouts only get players
    aged 20 or over.
    """
    scout = state.scout
    if not scout.current_club_id:
        return None
    if scout.primary_specialization == Specialization.YOUTH:
        return None
    if not rng.chance(ASSIGNMENT_CHANCE):
        return None
    if scout.current_club_id not in state.clubs:
        return None

    reported = {r.player_id for r in state.reports.values()}
    candidates = [pid for pid in state.players if pid not in reported]
    if scout.primary_specialization == Specialization.FIRST_TEAM:
        candidates = [pid for pid in candidates if state.players[pid].age >= FIRST_TEAM_MIN_AGE]
    if not candidates:
        return None

    target = state.players[rng.pick(candidates)]
    return _message(
        state,
        make_message_id("assignment", rng),
        MessageType.ASSIGNMENT,
        title=f"Scout {target.full_name}",
        body=(
            f"The club has asked you to compile a report on {target.full_name} "
            f"({target.position.value}, {target.age}). Please submit your findings "
            "as soon as possible."
        ),
        action_required=True,
        related_id=target.id,
    )


def generate_news_messages(
    state: "GameState",
    transfers: Sequence[Transfer],
    injuries: Sequence[InjuryResult],
    rng: RNG,
) -> List[InboxMessage]:
    """Transfer news for notable players, then injury news for observed players."""
    messages: List[InboxMessage] = []

    for transfer in transfers:
        player = state.players.get(transfer.player_id)
        if player is None or player.current_ability < NEWSWORTHY_ABILITY:
            continue
        if not rng.chance(TRANSFER_NEWS_CHANCE):
            continue
        from_club = state.clubs.get(transfer.from_club_id)
        to_club = state.clubs.get(transfer.to_club_id)
        messages.append(
            _message(
                state,
                make_message_id("news", rng),
                MessageType.NEWS,
                title=f"Transfer: {player.full_name} moves clubs",
                body=(
                    f"{player.full_name} has completed a transfer from "
                    f"{from_club.name if from_club else 'Unknown'} to "
                    f"{to_club.name if to_club else 'Unknown'} for an undisclosed fee."
                ),
                related_id=player.id,
            )
        )

    observed = state.observed_player_ids
    for result in injuries:
        if result.player_id not in observed:
            continue
        player = state.players.get(result.player_id)
        if player is None:
            continue
        injury_type = result.injury.injury_type.value
        severity = result.injury.severity.value
        messages.append(
            _message(
                state,
                make_message_id("injury", rng),
                MessageType.NEWS,
                title=f"Injury: {player.full_name} - {injury_type.capitalize()} ({severity})",
                body=(
                    f"{player.full_name} has suffered a {severity} {injury_type} injury and "
                    f"will be sidelined for approximately {result.weeks_out} weeks. Any "
                    "current reports on this player may need revising."
                ),
                related_id=player.id,
            )
        )

    return messages


def generate_inbox_messages(
    state: "GameState",
    transfers: Sequence[Transfer],
    injuries: Sequence[InjuryResult],
    rng: RNG,
) -> List[InboxMessage]:
    messages: List[InboxMessage] = []
    assignment = maybe_generate_assignment(state, rng)
    if assignment:
        messages.append(assignment)
    messages.extend(generate_news_messages(state, transfers, injuries, rng))
    return messages


def generate_breakthrough_message(
    state: "GameState",
    player: Player,
    breakthrough: BreakthroughResult,
    rng: RNG,
) -> InboxMessage:
    names = " and ".join(_label(a) for a in breakthrough.improved_attributes)
    verb = "have" if len(breakthrough.improved_attributes) > 1 else "has"
    return _message(
        state,
        make_message_id("breakthrough", rng),
        MessageType.NEWS,
        title=f"Development Breakthrough: {player.full_name}",
        body=(
            f"{player.full_name} has shown remarkable improvement! Their {names} "
            f"{verb} significantly improved."
        ),
        related_id=player.id,
    )


def generate_breakthrough_messages(
    state: "GameState",
    breakthroughs: Iterable[BreakthroughResult],
    rng: RNG,
) -> List[InboxMessage]:
    messages = []
    for breakthrough in breakthroughs:
        player = state.players.get(breakthrough.player_id)
        if player is None:
            continue
        messages.append(generate_breakthrough_message(state, player, breakthrough, rng))
    return messages


def generate_end_of_season_message(state: "GameState", rng: RNG) -> InboxMessage:
    season = state.current_season
    return _message(
        state,
        make_message_id("season_end", rng),
        MessageType.EVENT,
        title=f"Season {season} Complete",
        body=(
            f"The {season} season has concluded. Your performance review is now "
            "available. Review your achievements and prepare for the new season."
        ),
        action_required=True,
    )


# =============================================================================
# Scout feedback
# =============================================================================

def _signed(value: int) -> str:
    return f"+{value}" if value > 0 else str(value)


def generate_reputation_summary_message(
    state: "GameState",
    deltas: Sequence[ReputationDelta],
    rng: RNG,
) -> Optional[InboxMessage]:
    """Weekly breakdown of reputation changes; None when the net change is 0."""
    net = sum(d.delta for d in deltas)
    if net == 0:
        return None

    breakdown = ", ".join(f"{_signed(d.delta)} {d.reason}" for d in deltas)
    direction = "improved" if net > 0 else "declined"
    return _message(
        state,
        make_message_id("satisfaction", rng),
        MessageType.FEEDBACK,
        title=f"Board Satisfaction {direction} ({_signed(net)})",
        body=f"Your reputation this week: {_signed(net)} (net). {breakdown}.",
    )


def generate_regional_messages(
    state: "GameState",
    result: RegionalKnowledgeResult,
    rng: RNG,
) -> List[InboxMessage]:
    """Hidden league discoveries first, then cultural insights."""
    messages: List[InboxMessage] = []

    for league in result.discovered_leagues:
        messages.append(
            _message(
                state,
                generate_id("msg", rng),
                MessageType.NEWS,
                title=f"Hidden League Discovered: {league.name}",
                body=(
                    f"Your growing knowledge of the region has revealed the {league.name}. "
                    "This lower-tier league may hold talent that mainstream scouts overlook."
                ),
            )
        )

    for _country, insight in result.new_insights:
        messages.append(
            _message(
                state,
                generate_id("msg", rng),
                MessageType.NEWS,
                title=f"Cultural Insight: {_label(insight.insight_type.value).title()}",
                body=f"{insight.description} {insight.gameplay_effect}",
            )
        )

    return messages


def generate_suspension_messages(
    state: "GameState",
    suspensions: Sequence[Suspension],
    rng: RNG,
) -> List[InboxMessage]:
    """Suspension notices for players the scout has observed."""
    observed = state.observed_player_ids
    messages: List[InboxMessage] = []
    for suspension in suspensions:
        if suspension.player_id not in observed:
            continue
        player = state.players.get(suspension.player_id)
        if player is None:
            continue
        matches = "match" if suspension.weeks == 1 else "matches"
        messages.append(
            _message(
                state,
                make_message_id("suspension", rng),
                MessageType.NEWS,
                title=f"Suspension: {player.full_name}",
                body=(
                    f"{player.full_name} has been suspended for {suspension.weeks} "
                    f"{matches} due to {suspension.reason}."
                ),
                related_id=player.id,
            )
        )
    return messages


__all__ = [
    "generate_breakthrough_message",
    "generate_breakthrough_messages",
    "generate_end_of_season_message",
    "generate_inbox_messages",
    "generate_news_messages",
    "generate_regional_messages",
    "generate_reputation_summary_message",
    "generate_suspension_messages",
    "make_message_id",
    "maybe_generate_assignment",
]
