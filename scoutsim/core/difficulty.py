"""Difficulty levels and the multipliers they apply to the simulation."""

from dataclasses import dataclass
from enum import Enum


class Difficulty(Enum):
    EASY = "easy"
    NORMAL = "normal"
    HARD = "hard"
    IRONMAN = "ironman"


@dataclass(frozen=True)
class DifficultyModifiers:
    reputation_multiplier: float  # Scales weekly reputation changes
    development_rate: float  # Scales player growth (never decline)


DIFFICULTY_MODIFIERS = {
    Difficulty.EASY: DifficultyModifiers(reputation_multiplier=1.5, development_rate=1.3),
    Difficulty.NORMAL: DifficultyModifiers(reputation_multiplier=1.0, development_rate=1.0),
    Difficulty.HARD: DifficultyModifiers(reputation_multiplier=0.7, development_rate=0.8),
    Difficulty.IRONMAN: DifficultyModifiers(reputation_multiplier=0.7, development_rate=0.8),
}


def get_difficulty_modifiers(difficulty: Difficulty) -> DifficultyModifiers:
    return DIFFICULTY_MODIFIERS[difficulty]


__all__ = ["DIFFICULTY_MODIFIERS", "Difficulty", "DifficultyModifiers", "get_difficulty_modifiers"]
