"""
Activity quality resolver.

Every scheduled activity rolls a quality tier. The scout's relevant skill
pushes the odds toward the better tiers and fatigue pushes them back; the
tier then scales the activity's rewards and discovery odds.
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple

from scoutsim.core.enums import ActivityType, QualityTier, ScoutSkill
from scoutsim.core.models.scout import Scout
from scoutsim.core.rng import RNG


DEFAULT_SKILL_LEVEL = 10

_A = ActivityType
_S = ScoutSkill

# Activities without an entry resolve against DEFAULT_SKILL_LEVEL
ACTIVITY_SKILL_MAP: Dict[ActivityType, ScoutSkill] = {
    _A.ATTEND_MATCH: _S.TECHNICAL_EYE,
    _A.ACADEMY_VISIT: _S.TECHNICAL_EYE,
    _A.YOUTH_TOURNAMENT: _S.TECHNICAL_EYE,
    _A.SCHOOL_MATCH: _S.TECHNICAL_EYE,
    _A.GRASSROOTS_TOURNAMENT: _S.TECHNICAL_EYE,
    _A.STREET_FOOTBALL: _S.TECHNICAL_EYE,
    _A.ACADEMY_TRIAL_DAY: _S.TECHNICAL_EYE,
    _A.YOUTH_FESTIVAL: _S.TECHNICAL_EYE,
    _A.FOLLOW_UP_SESSION: _S.TECHNICAL_EYE,
    _A.WATCH_VIDEO: _S.TACTICAL_UNDERSTANDING,
    _A.SCOUTING_MISSION: _S.TACTICAL_UNDERSTANDING,
    _A.OPPOSITION_ANALYSIS: _S.TACTICAL_UNDERSTANDING,
    _A.WRITE_REPORT: _S.DATA_LITERACY,
    _A.STUDY: _S.DATA_LITERACY,
    _A.WRITE_PLACEMENT_REPORT: _S.DATA_LITERACY,
    _A.DATABASE_QUERY: _S.DATA_LITERACY,
    _A.DEEP_VIDEO_ANALYSIS: _S.DATA_LITERACY,
    _A.STATS_BRIEFING: _S.DATA_LITERACY,
    _A.DATA_CONFERENCE: _S.DATA_LITERACY,
    _A.ALGORITHM_CALIBRATION: _S.DATA_LITERACY,
    _A.MARKET_INEFFICIENCY: _S.DATA_LITERACY,
    _A.ANALYTICS_TEAM_MEETING: _S.DATA_LITERACY,
    _A.NETWORK_MEETING: _S.PSYCHOLOGICAL_READ,
    _A.PARENT_COACH_MEETING: _S.PSYCHOLOGICAL_READ,
    _A.CONTRACT_NEGOTIATION: _S.PSYCHOLOGICAL_READ,
    _A.TRAINING_VISIT: _S.PHYSICAL_ASSESSMENT,
    _A.RESERVE_MATCH: _S.PLAYER_JUDGMENT,
    _A.AGENT_SHOWCASE: _S.PLAYER_JUDGMENT,
    _A.TRIAL_MATCH: _S.PLAYER_JUDGMENT,
}

# tier -> (base weight, shift multiplier)
TIER_WEIGHTS: Dict[QualityTier, Tuple[int, int]] = {
    QualityTier.POOR: (10, -2),
    QualityTier.AVERAGE: (35, -1),
    QualityTier.GOOD: (30, 0),
    QualityTier.EXCELLENT: (20, 1),
    QualityTier.EXCEPTIONAL: (5, 2),
}

# tier -> (reward multiplier, discovery modifier)
TIER_OUTCOMES: Dict[QualityTier, Tuple[float, int]] = {
    QualityTier.POOR: (0.4, -1),
    QualityTier.AVERAGE: (0.8, 0),
    QualityTier.GOOD: (1.0, 0),
    QualityTier.EXCELLENT: (1.4, 1),
    QualityTier.EXCEPTIONAL: (2.0, 2),
}

NARRATIVES: Dict[ActivityType, Dict[QualityTier, List[str]]] = {
    _A.ATTEND_MATCH: {
        QualityTier.POOR: [
            "A poor view from the stand and a scrappy game. Little to take away.",
            "Rain, delays and a sending-off after ten minutes. Hard to judge anyone.",
        ],
        QualityTier.AVERAGE: [
            "A steady afternoon. You filled a page of notes without anything jumping out.",
        ],
        QualityTier.GOOD: [
            "A solid read on both sides. Your notes feel sharp.",
        ],
        QualityTier.EXCELLENT: [
            "You caught the small details most of the stand missed.",
        ],
        QualityTier.EXCEPTIONAL: [
            "One of those nights where every movement on the pitch made sense to you.",
        ],
    },
    _A.WATCH_VIDEO: {
        QualityTier.POOR: ["The footage was grainy and cut away at the key moments."],
        QualityTier.GOOD: ["Clean footage and a clear picture of the shape of both teams."],
        QualityTier.EXCEPTIONAL: ["Frame by frame, the patterns became obvious."],
    },
    _A.NETWORK_MEETING: {
        QualityTier.POOR: ["Your contact was distracted and left early."],
        QualityTier.EXCELLENT: ["A long lunch and a handful of useful names."],
    },
    _A.REST: {
        QualityTier.GOOD: ["A quiet week away from the game."],
    },
}


@dataclass
class ActivityQualityResult:
    activity_type: ActivityType
    tier: QualityTier
    multiplier: float
    discovery_modifier: int
    narrative: str


def skill_for_activity(activity_type: ActivityType, scout: Scout) -> int:
    skill = ACTIVITY_SKILL_MAP.get(activity_type)
    if skill is None:
        return DEFAULT_SKILL_LEVEL
    return scout.skills.get(skill, DEFAULT_SKILL_LEVEL)


def quality_shift(skill_level: int, fatigue: int) -> float:
    """Positive when skill outweighs fatigue; about -0.7 to +0.5 in practice."""
    return (skill_level - 8) / 24 - (fatigue / 100) * 0.4


def tier_weights(shift: float) -> List[Tuple[QualityTier, float]]:
    """Weighted tier table in tier order, each weight floored at 1."""
    return [
        (tier, max(1.0, base * (1 + shift * mult)))
        for tier, (base, mult) in TIER_WEIGHTS.items()
    ]


def pick_narrative(rng: RNG, activity_type: ActivityType, tier: QualityTier) -> str:
    bank = NARRATIVES.get(activity_type, {}).get(tier)
    if not bank:
        return f"Your {activity_type.value} session was {tier.value}."
    return rng.pick(bank)


def roll_activity_quality(
    rng: RNG, activity_type: ActivityType, scout: Scout
) -> ActivityQualityResult:
    """
    Roll the quality tier for one activity.

    Draws one weighted tier, then one narrative pick when the bank has lines
    for that activity and tier.
    """
    skill_level = skill_for_activity(activity_type, scout)
    shift = quality_shift(skill_level, scout.fatigue)
    tier = rng.pick_weighted(tier_weights(shift))
    multiplier, discovery_modifier = TIER_OUTCOMES[tier]

    return ActivityQualityResult(
        activity_type=activity_type,
        tier=tier,
        multiplier=multiplier,
        discovery_modifier=discovery_modifier,
        narrative=pick_narrative(rng, activity_type, tier),
    )


__all__ = [
    "ACTIVITY_SKILL_MAP",
    "ActivityQualityResult",
    "TIER_OUTCOMES",
    "TIER_WEIGHTS",
    "quality_shift",
    "roll_activity_quality",
    "skill_for_activity",
    "tier_weights",
]
