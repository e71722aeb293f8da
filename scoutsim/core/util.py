"""Small numeric helpers shared across the kernel."""

import math


def clamp(value, low, high):
    """Clamp ``value`` into [low, high]."""
    return max(low, min(high, value))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards positive infinity (2.5 -> 3, -1.5 -> -1)."""
    return math.floor(value + 0.5)


def round1(value: float) -> float:
    """Round to one decimal place, halves up."""
    return round_half_up(value * 10) / 10


__all__ = ["clamp", "round1", "round_half_up"]
