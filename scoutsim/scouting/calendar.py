"""
Weekly calendar for the scout.

A week has seven day-slots. Activities occupy one or more consecutive slots
and never overlap. Schedules are treated as values: ``add_activity`` and
``remove_activity`` return new schedules.

When the week ends, ``process_completed_week`` turns the plan into fatigue
and XP. Each multi-slot activity counts once. A schedule already marked
completed yields a zero result so effects are never applied twice.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from scoutsim.core.enums import ActivityType, ScoutAttribute, ScoutSkill, Specialization
from scoutsim.core.errors import ScheduleError
from scoutsim.core.models.fixture import Fixture
from scoutsim.core.models.schedule import WEEK_SLOTS, Activity, WeekSchedule
from scoutsim.core.models.scout import FATIGUE_MAX, SCOUT_STAT_MAX, Scout
from scoutsim.core.util import clamp, round_half_up


logger = logging.getLogger(__name__)


# =============================================================================
# Activity tables
# =============================================================================

_A = ActivityType
_S = ScoutSkill
_AT = ScoutAttribute

ACTIVITY_SLOT_COSTS: Dict[ActivityType, int] = {
    _A.ATTEND_MATCH: 2,
    _A.WATCH_VIDEO: 1,
    _A.WRITE_REPORT: 1,
    _A.NETWORK_MEETING: 1,
    _A.TRAINING_VISIT: 2,
    _A.TRAVEL: 1,
    _A.STUDY: 1,
    _A.REST: 1,
    _A.ACADEMY_VISIT: 2,
    _A.YOUTH_TOURNAMENT: 2,
    _A.INTERNATIONAL_TRAVEL: 2,
    _A.SCHOOL_MATCH: 2,
    _A.GRASSROOTS_TOURNAMENT: 3,
    _A.STREET_FOOTBALL: 2,
    _A.ACADEMY_TRIAL_DAY: 2,
    _A.YOUTH_FESTIVAL: 3,
    _A.FOLLOW_UP_SESSION: 1,
    _A.PARENT_COACH_MEETING: 1,
    _A.WRITE_PLACEMENT_REPORT: 1,
    _A.RESERVE_MATCH: 2,
    _A.SCOUTING_MISSION: 3,
    _A.OPPOSITION_ANALYSIS: 2,
    _A.AGENT_SHOWCASE: 2,
    _A.TRIAL_MATCH: 2,
    _A.CONTRACT_NEGOTIATION: 1,
    _A.DATABASE_QUERY: 1,
    _A.DEEP_VIDEO_ANALYSIS: 2,
    _A.STATS_BRIEFING: 1,
    _A.DATA_CONFERENCE: 3,
    _A.ALGORITHM_CALIBRATION: 1,
    _A.MARKET_INEFFICIENCY: 1,
    _A.ANALYTICS_TEAM_MEETING: 1,
}

# Negative cost recovers fatigue
ACTIVITY_FATIGUE_COSTS: Dict[ActivityType, int] = {
    _A.ATTEND_MATCH: 10,
    _A.WATCH_VIDEO: 5,
    _A.WRITE_REPORT: 5,
    _A.NETWORK_MEETING: 3,
    _A.TRAINING_VISIT: 8,
    _A.TRAVEL: 6,
    _A.STUDY: 3,
    _A.REST: -15,
    _A.ACADEMY_VISIT: 8,
    _A.YOUTH_TOURNAMENT: 12,
    _A.INTERNATIONAL_TRAVEL: 10,
    _A.SCHOOL_MATCH: 8,
    _A.GRASSROOTS_TOURNAMENT: 12,
    _A.STREET_FOOTBALL: 6,
    _A.ACADEMY_TRIAL_DAY: 10,
    _A.YOUTH_FESTIVAL: 14,
    _A.FOLLOW_UP_SESSION: 5,
    _A.PARENT_COACH_MEETING: 3,
    _A.WRITE_PLACEMENT_REPORT: 4,
    _A.RESERVE_MATCH: 8,
    _A.SCOUTING_MISSION: 12,
    _A.OPPOSITION_ANALYSIS: 6,
    _A.AGENT_SHOWCASE: 5,
    _A.TRIAL_MATCH: 10,
    _A.CONTRACT_NEGOTIATION: 4,
    _A.DATABASE_QUERY: 3,
    _A.DEEP_VIDEO_ANALYSIS: 6,
    _A.STATS_BRIEFING: 3,
    _A.DATA_CONFERENCE: 8,
    _A.ALGORITHM_CALIBRATION: 4,
    _A.MARKET_INEFFICIENCY: 3,
    _A.ANALYTICS_TEAM_MEETING: 3,
}

ACTIVITY_SKILL_XP: Dict[ActivityType, Dict[ScoutSkill, int]] = {
    _A.ATTEND_MATCH: {_S.TECHNICAL_EYE: 3, _S.PHYSICAL_ASSESSMENT: 2, _S.TACTICAL_UNDERSTANDING: 2, _S.PLAYER_JUDGMENT: 2},
    _A.WATCH_VIDEO: {_S.TECHNICAL_EYE: 2, _S.TACTICAL_UNDERSTANDING: 3, _S.DATA_LITERACY: 1, _S.PLAYER_JUDGMENT: 1},
    _A.WRITE_REPORT: {_S.DATA_LITERACY: 3, _S.PLAYER_JUDGMENT: 1, _S.POTENTIAL_ASSESSMENT: 1},
    _A.NETWORK_MEETING: {_S.PSYCHOLOGICAL_READ: 2},
    _A.TRAINING_VISIT: {_S.PHYSICAL_ASSESSMENT: 3, _S.PSYCHOLOGICAL_READ: 2, _S.PLAYER_JUDGMENT: 1},
    _A.TRAVEL: {},
    _A.STUDY: {_S.DATA_LITERACY: 4, _S.TACTICAL_UNDERSTANDING: 2, _S.POTENTIAL_ASSESSMENT: 1},
    _A.REST: {},
    _A.ACADEMY_VISIT: {_S.TECHNICAL_EYE: 2, _S.PHYSICAL_ASSESSMENT: 2, _S.DATA_LITERACY: 1, _S.POTENTIAL_ASSESSMENT: 2},
    _A.YOUTH_TOURNAMENT: {_S.TECHNICAL_EYE: 3, _S.PHYSICAL_ASSESSMENT: 2, _S.TACTICAL_UNDERSTANDING: 1, _S.POTENTIAL_ASSESSMENT: 3},
    _A.INTERNATIONAL_TRAVEL: {},
    _A.SCHOOL_MATCH: {_S.TECHNICAL_EYE: 2, _S.PHYSICAL_ASSESSMENT: 1},
    _A.GRASSROOTS_TOURNAMENT: {_S.TECHNICAL_EYE: 2, _S.PHYSICAL_ASSESSMENT: 2},
    _A.STREET_FOOTBALL: {_S.TECHNICAL_EYE: 3, _S.PSYCHOLOGICAL_READ: 1},
    _A.ACADEMY_TRIAL_DAY: {_S.TECHNICAL_EYE: 2, _S.PHYSICAL_ASSESSMENT: 2},
    _A.YOUTH_FESTIVAL: {_S.TECHNICAL_EYE: 3, _S.PHYSICAL_ASSESSMENT: 2},
    _A.FOLLOW_UP_SESSION: {_S.TECHNICAL_EYE: 3, _S.PSYCHOLOGICAL_READ: 2},
    _A.PARENT_COACH_MEETING: {_S.PSYCHOLOGICAL_READ: 3},
    _A.WRITE_PLACEMENT_REPORT: {_S.DATA_LITERACY: 3},
    _A.RESERVE_MATCH: {_S.TECHNICAL_EYE: 2, _S.PHYSICAL_ASSESSMENT: 2, _S.PLAYER_JUDGMENT: 3},
    _A.SCOUTING_MISSION: {_S.TECHNICAL_EYE: 2, _S.TACTICAL_UNDERSTANDING: 3, _S.PLAYER_JUDGMENT: 2, _S.PHYSICAL_ASSESSMENT: 1},
    _A.OPPOSITION_ANALYSIS: {_S.TACTICAL_UNDERSTANDING: 4, _S.PLAYER_JUDGMENT: 2},
    _A.AGENT_SHOWCASE: {_S.PLAYER_JUDGMENT: 3, _S.PSYCHOLOGICAL_READ: 2},
    _A.TRIAL_MATCH: {_S.TECHNICAL_EYE: 2, _S.PHYSICAL_ASSESSMENT: 2, _S.TACTICAL_UNDERSTANDING: 2, _S.PLAYER_JUDGMENT: 3},
    _A.CONTRACT_NEGOTIATION: {_S.PSYCHOLOGICAL_READ: 2},
    _A.DATABASE_QUERY: {_S.DATA_LITERACY: 4},
    _A.DEEP_VIDEO_ANALYSIS: {_S.TECHNICAL_EYE: 2, _S.TACTICAL_UNDERSTANDING: 2, _S.DATA_LITERACY: 3},
    _A.STATS_BRIEFING: {_S.DATA_LITERACY: 3, _S.PLAYER_JUDGMENT: 1},
    _A.DATA_CONFERENCE: {_S.DATA_LITERACY: 4, _S.TACTICAL_UNDERSTANDING: 2},
    _A.ALGORITHM_CALIBRATION: {_S.DATA_LITERACY: 5},
    _A.MARKET_INEFFICIENCY: {_S.DATA_LITERACY: 3, _S.PLAYER_JUDGMENT: 2},
    _A.ANALYTICS_TEAM_MEETING: {_S.DATA_LITERACY: 2, _S.PSYCHOLOGICAL_READ: 1},
}

ACTIVITY_ATTRIBUTE_XP: Dict[ActivityType, Dict[ScoutAttribute, int]] = {
    _A.ATTEND_MATCH: {_AT.MEMORY: 2, _AT.ENDURANCE: 1},
    _A.WATCH_VIDEO: {_AT.MEMORY: 3},
    _A.WRITE_REPORT: {_AT.MEMORY: 2, _AT.INTUITION: 1},
    _A.NETWORK_MEETING: {_AT.NETWORKING: 3, _AT.PERSUASION: 2},
    _A.TRAINING_VISIT: {_AT.MEMORY: 2, _AT.ENDURANCE: 1},
    _A.TRAVEL: {_AT.ADAPTABILITY: 2},
    _A.STUDY: {_AT.MEMORY: 3, _AT.INTUITION: 1},
    _A.REST: {},
    _A.ACADEMY_VISIT: {_AT.INTUITION: 2, _AT.MEMORY: 1},
    _A.YOUTH_TOURNAMENT: {_AT.INTUITION: 3, _AT.ENDURANCE: 2},
    _A.INTERNATIONAL_TRAVEL: {},
    _A.SCHOOL_MATCH: {_AT.INTUITION: 2, _AT.ADAPTABILITY: 1},
    _A.GRASSROOTS_TOURNAMENT: {_AT.INTUITION: 2, _AT.ENDURANCE: 1, _AT.NETWORKING: 1},
    _A.STREET_FOOTBALL: {_AT.INTUITION: 3, _AT.ADAPTABILITY: 2},
    _A.ACADEMY_TRIAL_DAY: {_AT.NETWORKING: 2, _AT.INTUITION: 1},
    _A.YOUTH_FESTIVAL: {_AT.INTUITION: 2, _AT.ENDURANCE: 2, _AT.NETWORKING: 1},
    _A.FOLLOW_UP_SESSION: {_AT.INTUITION: 3, _AT.MEMORY: 2},
    _A.PARENT_COACH_MEETING: {_AT.PERSUASION: 3, _AT.NETWORKING: 2},
    _A.WRITE_PLACEMENT_REPORT: {_AT.PERSUASION: 2, _AT.MEMORY: 1},
    _A.RESERVE_MATCH: {_AT.MEMORY: 2, _AT.ENDURANCE: 1},
    _A.SCOUTING_MISSION: {_AT.ENDURANCE: 3, _AT.ADAPTABILITY: 2, _AT.NETWORKING: 1},
    _A.OPPOSITION_ANALYSIS: {_AT.MEMORY: 3},
    _A.AGENT_SHOWCASE: {_AT.NETWORKING: 3, _AT.PERSUASION: 2},
    _A.TRIAL_MATCH: {_AT.MEMORY: 2, _AT.INTUITION: 2},
    _A.CONTRACT_NEGOTIATION: {_AT.PERSUASION: 4, _AT.NETWORKING: 2},
    _A.DATABASE_QUERY: {_AT.MEMORY: 2},
    _A.DEEP_VIDEO_ANALYSIS: {_AT.MEMORY: 3, _AT.INTUITION: 1},
    _A.STATS_BRIEFING: {_AT.MEMORY: 2},
    _A.DATA_CONFERENCE: {_AT.NETWORKING: 3, _AT.MEMORY: 2},
    _A.ALGORITHM_CALIBRATION: {_AT.MEMORY: 3, _AT.INTUITION: 2},
    _A.MARKET_INEFFICIENCY: {_AT.INTUITION: 3, _AT.MEMORY: 1},
    _A.ANALYTICS_TEAM_MEETING: {_AT.NETWORKING: 1, _AT.PERSUASION: 1},
}

# Specialization-exclusive activities offered by get_available_activities
SPECIALIZATION_ACTIVITIES: Dict[Specialization, Tuple[ActivityType, ...]] = {
    Specialization.YOUTH: (
        _A.ACADEMY_VISIT, _A.YOUTH_TOURNAMENT, _A.GRASSROOTS_TOURNAMENT,
        _A.STREET_FOOTBALL, _A.ACADEMY_TRIAL_DAY, _A.YOUTH_FESTIVAL,
        _A.FOLLOW_UP_SESSION, _A.PARENT_COACH_MEETING, _A.WRITE_PLACEMENT_REPORT,
    ),
    Specialization.FIRST_TEAM: (
        _A.RESERVE_MATCH, _A.SCOUTING_MISSION, _A.OPPOSITION_ANALYSIS,
        _A.AGENT_SHOWCASE, _A.TRIAL_MATCH, _A.CONTRACT_NEGOTIATION,
    ),
    Specialization.REGIONAL: (
        _A.INTERNATIONAL_TRAVEL,
    ),
    Specialization.DATA: (
        _A.DATABASE_QUERY, _A.DEEP_VIDEO_ANALYSIS, _A.STATS_BRIEFING,
        _A.DATA_CONFERENCE, _A.ALGORITHM_CALIBRATION, _A.MARKET_INEFFICIENCY,
        _A.ANALYTICS_TEAM_MEETING,
    ),
}

FORCED_REST_FATIGUE = 90
HIGH_FATIGUE_THRESHOLD = 70
HIGH_FATIGUE_XP_FACTOR = 0.7
MAX_ENDURANCE_DISCOUNT = 0.75
MAX_LISTED_FIXTURES = 5


# =============================================================================
# Results
# =============================================================================

@dataclass
class WeekProcessingResult:
    """Effects of one completed week."""

    fatigue_change: int = 0
    skill_xp_gained: Dict[ScoutSkill, int] = field(default_factory=dict)
    attribute_xp_gained: Dict[ScoutAttribute, int] = field(default_factory=dict)
    matches_attended: List[str] = field(default_factory=list)
    reports_written: List[str] = field(default_factory=list)
    meetings_held: List[str] = field(default_factory=list)
    activity_counts: Dict[ActivityType, int] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return (
            self.fatigue_change == 0
            and not self.skill_xp_gained
            and not self.attribute_xp_gained
            and not self.activity_counts
        )


# =============================================================================
# Building schedules
# =============================================================================

def make_activity(
    activity_type: ActivityType,
    target_id: Optional[str] = None,
    description: str = "",
) -> Activity:
    """Build an activity with its standard slot cost."""
    return Activity(
        activity_type=activity_type,
        slots=ACTIVITY_SLOT_COSTS[activity_type],
        target_id=target_id,
        description=description,
    )


def create_week_schedule(week: int, season: int) -> WeekSchedule:
    return WeekSchedule(week=week, season=season)


def can_add_activity(schedule: WeekSchedule, activity: Activity, day_index: int) -> bool:
    """
    Check whether ``activity`` fits at ``day_index``.

    The index must be 0-6, the schedule must not be completed, the activity
    must end on or before the last slot, and every slot it needs must be free.
    """
    if day_index < 0 or day_index >= WEEK_SLOTS:
        return False
    if schedule.completed:
        return False
    if day_index + activity.slots > WEEK_SLOTS:
        return False
    return all(
        schedule.activities[i] is None
        for i in range(day_index, day_index + activity.slots)
    )


def add_activity(schedule: WeekSchedule, activity: Activity, day_index: int) -> WeekSchedule:
    """
    Place an activity, returning a new schedule.

    Raises:
        ScheduleError: if ``can_add_activity`` is False
    """
    if not can_add_activity(schedule, activity, day_index):
        raise ScheduleError(
            f"Cannot add activity '{activity.activity_type.value}' at slot {day_index}: "
            "slot occupied or out of bounds"
        )

    activities = list(schedule.activities)
    for i in range(day_index, day_index + activity.slots):
        activities[i] = activity
    return replace(schedule, activities=activities)


def remove_activity(schedule: WeekSchedule, day_index: int) -> WeekSchedule:
    """
    Clear the activity at ``day_index`` from every slot it occupies.

    Slots are matched by logical equality, so equal activities rebuilt as
    separate objects are cleared too. An out-of-range index or an empty slot
    returns the schedule unchanged.
    """
    if day_index < 0 or day_index >= WEEK_SLOTS:
        return schedule

    target = schedule.activities[day_index]
    if target is None:
        return schedule

    activities = [None if target.same_as(a) else a for a in schedule.activities]
    return replace(schedule, activities=activities)


def iter_scheduled_activities(schedule: WeekSchedule) -> Iterator[Tuple[int, Activity]]:
    """
    Yield ``(start_slot, activity)`` once per placed activity.

    Consecutive slots holding the same logical activity count as one
    placement, up to the activity's slot cost; a longer run is a repeat.
    """
    slots = schedule.activities
    i = 0
    while i < WEEK_SLOTS:
        activity = slots[i]
        if activity is None:
            i += 1
            continue
        span = 1
        while span < activity.slots and i + span < WEEK_SLOTS and activity.same_as(slots[i + span]):
            span += 1
        yield i, activity
        i += span


def get_available_activities(
    scout: Scout,
    week: int,
    fixtures: Iterable[Fixture],
) -> List[Activity]:
    """
    Activities the scout may schedule this week.

    An exhausted scout (fatigue above 90) may only rest. Otherwise the list
    holds up to five of this week's unplayed fixtures, the general
    activities, and the exclusives of the scout's specialization.
    """
    if scout.fatigue > FORCED_REST_FATIGUE:
        return [make_activity(_A.REST, description="Rest and recover")]

    activities: List[Activity] = []

    upcoming = sorted(
        (f for f in fixtures if f.week == week and not f.played),
        key=lambda f: f.id,
    )
    for fixture in upcoming[:MAX_LISTED_FIXTURES]:
        activities.append(
            make_activity(
                _A.ATTEND_MATCH,
                target_id=fixture.id,
                description=f"Attend match: {fixture.home_club_id} vs {fixture.away_club_id}",
            )
        )

    for activity_type in (
        _A.WATCH_VIDEO, _A.WRITE_REPORT, _A.TRAINING_VISIT, _A.TRAVEL,
        _A.STUDY, _A.REST, _A.SCHOOL_MATCH,
    ):
        activities.append(make_activity(activity_type))

    if scout.country_reputations and any(
        rep.contact_count > 0 for rep in scout.country_reputations.values()
    ):
        activities.append(make_activity(_A.NETWORK_MEETING))

    for activity_type in SPECIALIZATION_ACTIVITIES[scout.primary_specialization]:
        activities.append(make_activity(activity_type))

    return activities


# =============================================================================
# Week processing
# =============================================================================

def process_completed_week(
    schedule: WeekSchedule,
    scout: Scout,
    quality_multipliers: Optional[Mapping[int, float]] = None,
) -> WeekProcessingResult:
    """
    Convert a finished week's plan into fatigue and XP.

    Args:
        schedule: The week's schedule
        scout: Scout at the start of the week
        quality_multipliers: Optional XP multiplier per activity, keyed by
            the activity's start slot

    Returns:
        The week's effects; an empty result for an already-completed schedule
    """
    if schedule.completed:
        return WeekProcessingResult()

    result = WeekProcessingResult()
    endurance = scout.attributes.get(ScoutAttribute.ENDURANCE, 8)
    endurance_factor = 1 - min(MAX_ENDURANCE_DISCOUNT, endurance / 40)

    for start, activity in iter_scheduled_activities(schedule):
        activity_type = activity.activity_type

        raw_cost = ACTIVITY_FATIGUE_COSTS[activity_type]
        result.fatigue_change += raw_cost if raw_cost < 0 else round_half_up(raw_cost * endurance_factor)

        multiplier = quality_multipliers.get(start, 1.0) if quality_multipliers else 1.0

        for skill, xp in ACTIVITY_SKILL_XP[activity_type].items():
            result.skill_xp_gained[skill] = result.skill_xp_gained.get(skill, 0) + round_half_up(xp * multiplier)
        for attr, xp in ACTIVITY_ATTRIBUTE_XP[activity_type].items():
            result.attribute_xp_gained[attr] = result.attribute_xp_gained.get(attr, 0) + round_half_up(xp * multiplier)

        result.activity_counts[activity_type] = result.activity_counts.get(activity_type, 0) + 1
        if activity.target_id:
            if activity_type == _A.ATTEND_MATCH:
                result.matches_attended.append(activity.target_id)
            elif activity_type == _A.WRITE_REPORT:
                result.reports_written.append(activity.target_id)
            elif activity_type == _A.NETWORK_MEETING:
                result.meetings_held.append(activity.target_id)

    # Starting fatigue, not the fatigue this week adds
    if scout.fatigue > HIGH_FATIGUE_THRESHOLD:
        result.skill_xp_gained = {
            k: round_half_up(v * HIGH_FATIGUE_XP_FACTOR) for k, v in result.skill_xp_gained.items()
        }
        result.attribute_xp_gained = {
            k: round_half_up(v * HIGH_FATIGUE_XP_FACTOR) for k, v in result.attribute_xp_gained.items()
        }

    return result


def _level_up(levels: Dict, xp_pool: Dict, gained: Mapping) -> None:
    for key, xp in gained.items():
        if not xp:
            continue
        current = levels.get(key, 1)
        if current >= SCOUT_STAT_MAX:
            continue
        accumulated = xp_pool.get(key, 0) + xp
        threshold = current * 10
        if accumulated >= threshold:
            levels[key] = min(SCOUT_STAT_MAX, current + 1)
            xp_pool[key] = accumulated - threshold
        else:
            xp_pool[key] = accumulated


def apply_week_results(scout: Scout, result: WeekProcessingResult) -> Scout:
    """
    Apply a week's XP and fatigue to the scout.

    A skill or attribute levels up once its XP reaches ``level * 10``; the
    remainder carries over and levels cap at 20.
    """
    skills = dict(scout.skills)
    skill_xp = dict(scout.skill_xp)
    attributes = dict(scout.attributes)
    attribute_xp = dict(scout.attribute_xp)

    _level_up(skills, skill_xp, result.skill_xp_gained)
    _level_up(attributes, attribute_xp, result.attribute_xp_gained)

    return replace(
        scout,
        skills=skills,
        skill_xp=skill_xp,
        attributes=attributes,
        attribute_xp=attribute_xp,
        fatigue=clamp(scout.fatigue + result.fatigue_change, 0, FATIGUE_MAX),
    )


__all__ = [
    "ACTIVITY_ATTRIBUTE_XP",
    "ACTIVITY_FATIGUE_COSTS",
    "ACTIVITY_SKILL_XP",
    "ACTIVITY_SLOT_COSTS",
    "WeekProcessingResult",
    "add_activity",
    "apply_week_results",
    "can_add_activity",
    "create_week_schedule",
    "get_available_activities",
    "iter_scheduled_activities",
    "make_activity",
    "process_completed_week",
    "remove_activity",
]
