"""Weekly schedule and activity models."""

from dataclasses import dataclass, field
from typing import List, Optional

from scoutsim.core.enums import ActivityType


WEEK_SLOTS = 7


@dataclass
class Activity:
    """
    A planned scout activity occupying ``slots`` consecutive day-slots.

    Two activities are the same logical activity when type, target and
    description match, even if they are distinct objects.
    """

    activity_type: ActivityType
    slots: int = 1
    target_id: Optional[str] = None
    description: str = ""

    def same_as(self, other: Optional["Activity"]) -> bool:
        if other is None:
            return False
        if other is self:
            return True
        return (
            self.activity_type == other.activity_type
            and self.target_id == other.target_id
            and self.description == other.description
        )


def _empty_slots() -> List[Optional[Activity]]:
    return [None] * WEEK_SLOTS


@dataclass
class WeekSchedule:
    week: int
    season: int
    activities: List[Optional[Activity]] = field(default_factory=_empty_slots)
    completed: bool = False

    @property
    def scheduled_count(self) -> int:
        return sum(1 for a in self.activities if a is not None)


__all__ = ["Activity", "WEEK_SLOTS", "WeekSchedule"]
