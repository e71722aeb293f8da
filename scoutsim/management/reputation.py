"""
Weekly reputation change for the scout.

Reputation moves a point or two a week based on report quality, idleness
and successful signings. Every change is itemised so it can be explained in
the inbox; the difficulty multiplier is applied later, at commit.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Tuple

from scoutsim.core.util import round_half_up

if TYPE_CHECKING:
    from scoutsim.core.models.state import GameState


QUALITY_REPORT_AVERAGE = 75
LOW_QUALITY_REPORT_AVERAGE = 50
SIGNING_LOOKBACK_WEEKS = 2

QUALITY_REPORTS_DELTA = 1
LOW_QUALITY_DELTA = -1
IDLE_WEEK_DELTA = -1
SIGNING_DELTA = 2


@dataclass
class ReputationDelta:
    reason: str
    delta: int
    week: int
    season: int


def compute_reputation_change(state: "GameState") -> Tuple[int, List[ReputationDelta]]:
    """
    Raw reputation change for the current week and the reasons behind it.

    Returns:
        (net change, itemised deltas)
    """
    deltas: List[ReputationDelta] = []
    week = state.current_week
    season = state.current_season

    recent_reports = [
        r for r in state.reports.values()
        if r.submitted_week == week - 1 and r.submitted_season == season
    ]
    if recent_reports:
        average = sum(r.quality_score for r in recent_reports) / len(recent_reports)
        count = len(recent_reports)
        if average >= QUALITY_REPORT_AVERAGE:
            label = "report" if count == 1 else "reports"
            deltas.append(
                ReputationDelta(f"{count} quality {label} submitted", QUALITY_REPORTS_DELTA, week, season)
            )
        elif average < LOW_QUALITY_REPORT_AVERAGE:
            deltas.append(ReputationDelta("Low quality reports", LOW_QUALITY_DELTA, week, season))

    if state.schedule.scheduled_count == 0:
        deltas.append(
            ReputationDelta("Idle week (no scouting activity)", IDLE_WEEK_DELTA, week, season)
        )

    signed = any(
        r.club_response == "signed"
        and r.submitted_week >= week - SIGNING_LOOKBACK_WEEKS
        and r.submitted_season == season
        for r in state.reports.values()
    )
    if signed:
        deltas.append(
            ReputationDelta("Successful signing recommendation", SIGNING_DELTA, week, season)
        )

    return sum(d.delta for d in deltas), deltas


def scale_reputation_change(raw_change: int, reputation_multiplier: float) -> int:
    return round_half_up(raw_change * reputation_multiplier)


__all__ = ["ReputationDelta", "compute_reputation_change", "scale_reputation_change"]
