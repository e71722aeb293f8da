"""
Simulation configuration.

Controls the default seed, difficulty and logging for command-line runs.
All settings can be overridden via environment variables.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Optional

from rich.logging import RichHandler

from scoutsim.core.difficulty import Difficulty


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class SimConfig:
    """Runtime settings for a simulation run."""

    seed: str = field(default_factory=lambda: os.getenv("SCOUTSIM_SEED", "scoutsim"))
    log_level: str = field(
        default_factory=lambda: os.getenv("SCOUTSIM_LOG_LEVEL", "WARNING").upper()
    )
    demo_weeks: int = field(
        default_factory=lambda: int(os.getenv("SCOUTSIM_DEMO_WEEKS", "4"))
    )
    difficulty: str = field(
        default_factory=lambda: os.getenv("SCOUTSIM_DIFFICULTY", "normal").lower()
    )

    @classmethod
    def from_env(cls) -> "SimConfig":
        """Create config from environment variables."""
        return cls()

    def validate(self) -> list[str]:
        """Validate configuration, return list of errors."""
        errors = []
        if not self.seed:
            errors.append("SCOUTSIM_SEED must not be empty")
        if self.log_level not in LOG_LEVELS:
            errors.append(f"SCOUTSIM_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")
        if self.demo_weeks < 1:
            errors.append("SCOUTSIM_DEMO_WEEKS must be at least 1")
        if self.difficulty not in {d.value for d in Difficulty}:
            errors.append(f"Unknown difficulty: {self.difficulty}")
        return errors

    @property
    def difficulty_level(self) -> Difficulty:
        return Difficulty(self.difficulty)


# Singleton config instance
_config: Optional[SimConfig] = None


def get_config() -> SimConfig:
    """Get the global simulation configuration."""
    global _config
    if _config is None:
        _config = SimConfig.from_env()
    return _config


def set_config(config: Optional[SimConfig]) -> None:
    """Replace the global configuration; None resets it to the environment."""
    global _config
    _config = config


def configure_logging(level: Optional[str] = None) -> None:
    """Send log records to a rich console handler at the configured level."""
    logging.basicConfig(
        level=level or get_config().log_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )


__all__ = ["SimConfig", "configure_logging", "get_config", "set_config"]
