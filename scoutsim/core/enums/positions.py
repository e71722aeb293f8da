"""Position definitions for football players."""

from enum import Enum


class Position(Enum):
    """On-pitch positions."""

    GK = "GK"  # Goalkeeper

    # Defence
    CB = "CB"  # Centre Back
    LB = "LB"  # Left Back
    RB = "RB"  # Right Back

    # Midfield
    CDM = "CDM"  # Defensive Midfielder
    CM = "CM"  # Central Midfielder
    CAM = "CAM"  # Attacking Midfielder

    # Attack
    LW = "LW"  # Left Winger
    RW = "RW"  # Right Winger
    ST = "ST"  # Striker

    @property
    def is_attacking(self) -> bool:
        return self in ATTACKING_POSITIONS

    @property
    def is_defensive(self) -> bool:
        return self in DEFENSIVE_POSITIONS


# Positions that get a weighting bump when picking goal scorers
ATTACKING_POSITIONS = frozenset({Position.ST, Position.LW, Position.RW, Position.CAM})

# Positions booked more often in simulated matches
DEFENSIVE_POSITIONS = frozenset({Position.CB, Position.LB, Position.RB, Position.CDM})
