"""Exception types raised by the simulation kernel.

Only contract violations by the caller are raised. Inconsistent but survivable
world data (dangling ids, missing clubs) is skipped and logged instead.
"""


class ScoutSimError(Exception):
    """Base class for all kernel errors."""


class RandomSelectionError(ScoutSimError, ValueError):
    """Invalid input to a random draw (empty candidates, bad weights or probability)."""


class ScheduleError(ScoutSimError, ValueError):
    """An activity cannot be placed at the requested slot."""


__all__ = ["ScoutSimError", "RandomSelectionError", "ScheduleError"]
