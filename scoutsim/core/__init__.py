"""Core simulation primitives: RNG, enums, models and player-level systems."""
