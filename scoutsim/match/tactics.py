"""
Tactical matchups between club playing styles.

Each identity counters two styles and is countered by two others. A favourable
matchup is worth +0.15 and an unfavourable one -0.15 before scaling by the
side's pressing intensity.
"""

from dataclasses import dataclass
from typing import Dict, FrozenSet, Tuple

from scoutsim.core.enums import TacticalIdentity
from scoutsim.core.models.club import TacticalStyle
from scoutsim.core.util import clamp


MATCHUP_EDGE = 0.15
MAX_MODIFIER = 0.3

_T = TacticalIdentity

# identity -> (strong against, weak against)
MATCHUP_MATRIX: Dict[TacticalIdentity, Tuple[FrozenSet[TacticalIdentity], FrozenSet[TacticalIdentity]]] = {
    _T.HIGH_PRESS: (
        frozenset({_T.POSSESSION_BASED, _T.BALANCED}),
        frozenset({_T.COUNTER_ATTACKING, _T.WING_PLAY}),
    ),
    _T.POSSESSION_BASED: (
        frozenset({_T.DIRECT_PLAY, _T.WING_PLAY}),
        frozenset({_T.HIGH_PRESS, _T.COUNTER_ATTACKING}),
    ),
    _T.COUNTER_ATTACKING: (
        frozenset({_T.HIGH_PRESS, _T.POSSESSION_BASED}),
        frozenset({_T.DIRECT_PLAY, _T.BALANCED}),
    ),
    _T.DIRECT_PLAY: (
        frozenset({_T.COUNTER_ATTACKING, _T.BALANCED}),
        frozenset({_T.POSSESSION_BASED, _T.WING_PLAY}),
    ),
    _T.WING_PLAY: (
        frozenset({_T.HIGH_PRESS, _T.DIRECT_PLAY}),
        frozenset({_T.POSSESSION_BASED, _T.BALANCED}),
    ),
    _T.BALANCED: (
        frozenset({_T.COUNTER_ATTACKING, _T.WING_PLAY}),
        frozenset({_T.HIGH_PRESS, _T.DIRECT_PLAY}),
    ),
}


@dataclass(frozen=True)
class TacticalMatchup:
    home_identity: TacticalIdentity
    away_identity: TacticalIdentity
    home_modifier: float
    away_modifier: float

    @property
    def home_xg_factor(self) -> float:
        return 1 + self.home_modifier * 0.5

    @property
    def away_xg_factor(self) -> float:
        return 1 + self.away_modifier * 0.5


def _edge(own: TacticalIdentity, opponent: TacticalIdentity) -> float:
    strong, weak = MATCHUP_MATRIX[own]
    edge = 0.0
    if opponent in strong:
        edge += MATCHUP_EDGE
    if opponent in weak:
        edge -= MATCHUP_EDGE
    return edge


def _intensity_factor(style: TacticalStyle) -> float:
    return 0.7 + (style.pressing_intensity / 20) * 0.6


def calculate_tactical_matchup(home: TacticalStyle, away: TacticalStyle) -> TacticalMatchup:
    """Directional modifiers for both sides, each clamped to +/-0.3."""
    home_mod = _edge(home.identity, away.identity) * _intensity_factor(home)
    away_mod = _edge(away.identity, home.identity) * _intensity_factor(away)

    return TacticalMatchup(
        home_identity=home.identity,
        away_identity=away.identity,
        home_modifier=clamp(home_mod, -MAX_MODIFIER, MAX_MODIFIER),
        away_modifier=clamp(away_mod, -MAX_MODIFIER, MAX_MODIFIER),
    )


__all__ = ["MATCHUP_MATRIX", "TacticalMatchup", "calculate_tactical_matchup"]
