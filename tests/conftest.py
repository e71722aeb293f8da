"""Shared pytest fixtures for scoutsim tests."""

from typing import Iterable, List

import pytest

from scoutsim.core.attributes import PlayerAttributes
from scoutsim.core.enums import Position, Specialization
from scoutsim.core.models.club import Club, League
from scoutsim.core.models.fixture import Fixture
from scoutsim.core.models.player import Player
from scoutsim.core.models.scout import Scout
from scoutsim.core.models.state import GameState
from scoutsim.core.rng import RNG


# =============================================================================
# Test doubles
# =============================================================================


class ScriptedRNG(RNG):
    """
    RNG whose uniform draws come from a fixed script.

    Once the script runs out every draw returns ``default``. ``calls`` counts
    draws so tests can check that a code path consumed no randomness.
    """

    def __init__(self, values: Iterable[float] = (), default: float = 0.5):
        super().__init__("scripted")
        self._values: List[float] = list(values)
        self.default = default
        self.calls = 0

    def next(self) -> float:
        self.calls += 1
        if self._values:
            return self._values.pop(0)
        return self.default


@pytest.fixture
def scripted_rng():
    """Factory for ScriptedRNG instances."""
    return ScriptedRNG


@pytest.fixture
def rng() -> RNG:
    """A seeded RNG."""
    return RNG("test-seed")


# =============================================================================
# Player Fixtures
# =============================================================================

SQUAD_POSITIONS = (
    Position.GK, Position.CB, Position.CB, Position.LB, Position.RB,
    Position.CDM, Position.CM, Position.CAM, Position.LW, Position.RW, Position.ST,
)


def make_player(player_id: str, club_id: str = "club_a", **overrides) -> Player:
    """Build a settled mid-career player; keyword overrides win."""
    values = dict(
        id=player_id,
        first_name="Test",
        last_name=player_id.replace("_", " ").title(),
        age=24,
        club_id=club_id,
        contract_expiry=5,
        morale=6,
    )
    values.update(overrides)
    return Player(**values)


@pytest.fixture
def player() -> Player:
    """A central midfielder with default attributes."""
    return make_player("player_1")


@pytest.fixture
def striker() -> Player:
    """A young striker with a sharp finish."""
    return make_player(
        "striker_1",
        position=Position.ST,
        age=20,
        current_ability=140,
        potential_ability=200,
        attributes=PlayerAttributes.from_values(finishing=14, shooting=15),
    )


# =============================================================================
# World Fixtures
# =============================================================================


def make_squad(club_id: str, ability: int = 100) -> List[Player]:
    return [
        make_player(f"{club_id}_{i}", club_id=club_id, position=pos, current_ability=ability)
        for i, pos in enumerate(SQUAD_POSITIONS)
    ]


def make_state(week: int = 1, **overrides) -> GameState:
    """Two clubs in one league with a single fixture this week."""
    players = {}
    clubs = {}
    for club_id, name, reputation in (("club_a", "Ashford", 70), ("club_b", "Brookvale", 50)):
        squad = make_squad(club_id)
        players.update({p.id: p for p in squad})
        clubs[club_id] = Club(
            id=club_id,
            name=name,
            league_id="league_1",
            country="england",
            reputation=reputation,
            player_ids=[p.id for p in squad],
        )

    fixture = Fixture(
        id="fx_1",
        league_id="league_1",
        home_club_id="club_a",
        away_club_id="club_b",
        week=week,
    )
    values = dict(
        scout=Scout(
            id="scout_1",
            first_name="Sam",
            last_name="Archer",
            primary_specialization=Specialization.FIRST_TEAM,
            home_country="england",
            current_club_id="club_a",
        ),
        current_week=week,
        players=players,
        clubs=clubs,
        leagues={"league_1": League(id="league_1", name="Test League", country="england")},
        fixtures={fixture.id: fixture},
        countries=["england"],
    )
    values.update(overrides)
    return GameState(**values)


@pytest.fixture
def two_club_state() -> GameState:
    """Two eleven-player clubs with one fixture in week 1."""
    return make_state()


@pytest.fixture
def player_factory():
    """Factory for players: ``player_factory("p1", position=Position.ST)``."""
    return make_player


@pytest.fixture
def state_factory():
    """Factory for two-club worlds: ``state_factory(week=38)``."""
    return make_state
