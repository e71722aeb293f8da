"""World generation for demos and tests: players, clubs, leagues and fixtures."""

from typing import Dict, List, Optional, Sequence

from scoutsim.core.attributes import ALL_ATTRIBUTES, PlayerAttributes
from scoutsim.core.difficulty import Difficulty
from scoutsim.core.enums import DevelopmentProfile, Position, Specialization, TacticalIdentity
from scoutsim.core.models.club import Club, League, TacticalStyle
from scoutsim.core.models.fixture import Fixture
from scoutsim.core.models.player import Player, clamp_ability
from scoutsim.core.models.scout import CountryReputation, Scout
from scoutsim.core.models.state import GameState
from scoutsim.core.rng import RNG
from scoutsim.core.util import clamp, round_half_up
from scoutsim.scouting.regional_knowledge import initialize_regional_knowledge

# Sample names for generation
FIRST_NAMES = [
    "Jack", "Harry", "Oliver", "Leo", "Mateo", "Hugo", "Lucas", "Pablo",
    "Luca", "Marco", "Jonas", "Felix", "Kai", "Theo", "Noah", "Rafael",
    "Diego", "Tomas", "Ibrahim", "Yusuf", "Samuel", "Kofi", "Emre", "Nico",
]

LAST_NAMES = [
    "Walker", "Hughes", "Garcia", "Moreno", "Rossi", "Bianchi", "Muller",
    "Schmidt", "Dubois", "Laurent", "Silva", "Costa", "Fernandes", "Kane",
    "Reid", "Novak", "Jansen", "Diallo", "Mensah", "Okafor", "Yilmaz", "Berg",
]

CLUB_NAMES = [
    "Ashford Rovers", "Brookvale United", "Castlegate Town", "Dunmore Athletic",
    "Elmstead City", "Fairhaven Wanderers", "Greystone Albion", "Highbury Vale",
]

# Eleven starters plus cover
SQUAD_TEMPLATE = (
    Position.GK, Position.CB, Position.CB, Position.LB, Position.RB,
    Position.CDM, Position.CM, Position.CAM, Position.LW, Position.RW,
    Position.ST, Position.GK, Position.CB, Position.CM, Position.ST,
)

POSITION_KEY_ATTRIBUTES: Dict[Position, Sequence[str]] = {
    Position.GK: ("positioning", "composure"),
    Position.CB: ("tackling", "heading", "defensive_awareness", "strength"),
    Position.LB: ("pace", "crossing", "tackling"),
    Position.RB: ("pace", "crossing", "tackling"),
    Position.CDM: ("tackling", "positioning", "work_rate"),
    Position.CM: ("passing", "vision", "stamina"),
    Position.CAM: ("vision", "dribbling", "first_touch"),
    Position.LW: ("pace", "dribbling", "crossing"),
    Position.RW: ("pace", "dribbling", "crossing"),
    Position.ST: ("finishing", "shooting", "composure"),
}


def generate_player(
    rng: RNG,
    player_id: str,
    club_id: str,
    position: Position,
    quality: int = 10,
    nationality: str = "",
    age: Optional[int] = None,
) -> Player:
    """
    Generate a player around a 1-20 quality level.

    Key attributes for the position sit a couple of points above the rest.
    """
    key_attrs = POSITION_KEY_ATTRIBUTES[position]
    values = {}
    for attr in ALL_ATTRIBUTES:
        bonus = 2 if attr in key_attrs else 0
        values[attr] = round_half_up(rng.gaussian(quality + bonus, 2))
    attributes = PlayerAttributes(values)

    current = clamp_ability(round_half_up(sum(v for _, v in attributes.items()) / len(ALL_ATTRIBUTES) * 10))
    player_age = age if age is not None else rng.next_int(17, 33)
    headroom = max(0, 27 - player_age) * rng.next_int(2, 6)

    traits = ["temperamental"] if rng.chance(0.1) else []

    return Player(
        id=player_id,
        first_name=rng.pick(FIRST_NAMES),
        last_name=rng.pick(LAST_NAMES),
        age=player_age,
        position=position,
        club_id=club_id,
        nationality=nationality,
        current_ability=current,
        potential_ability=clamp_ability(current + headroom),
        attributes=attributes,
        injury_proneness=rng.next_int(1, 20),
        development_profile=rng.pick(list(DevelopmentProfile)),
        personality_traits=traits,
        morale=rng.next_int(3, 9),
        contract_expiry=rng.next_int(1, 4),
        market_value=current * current * 100,
    )


def generate_club(
    rng: RNG,
    club_id: str,
    name: str,
    league_id: str,
    country: str,
    reputation: int,
) -> tuple:
    """Generate a club and its squad; returns (club, players)."""
    quality = 6 + reputation // 10
    players = [
        generate_player(rng, f"{club_id}_p{i:02d}", club_id, position, quality, country)
        for i, position in enumerate(SQUAD_TEMPLATE)
    ]
    club = Club(
        id=club_id,
        name=name,
        league_id=league_id,
        country=country,
        reputation=reputation,
        budget=reputation * 1_000_000,
        youth_academy_rating=clamp(reputation // 5, 1, 20),
        player_ids=[p.id for p in players],
        tactical_style=TacticalStyle(
            identity=rng.pick(list(TacticalIdentity)),
            pressing_intensity=rng.next_int(1, 20),
        ),
    )
    return club, players


def generate_round_robin(league_id: str, club_ids: Sequence[str], season: int = 1) -> List[Fixture]:
    """
    Double round robin using the circle method.

    Each club meets every other club home and away. An odd club count adds a
    bye that is dropped from the output.
    """
    teams: List[Optional[str]] = list(club_ids)
    if len(teams) % 2:
        teams.append(None)
    n = len(teams)
    rounds = n - 1

    fixtures: List[Fixture] = []
    for leg in range(2):
        rotation = list(teams)
        for rnd in range(rounds):
            week = leg * rounds + rnd + 1
            for i in range(n // 2):
                home, away = rotation[i], rotation[n - 1 - i]
                if home is None or away is None:
                    continue
                if leg == 1:
                    home, away = away, home
                fixtures.append(
                    Fixture(
                        id=f"{league_id}_s{season}_w{week:02d}_{i}",
                        league_id=league_id,
                        home_club_id=home,
                        away_club_id=away,
                        week=week,
                        season=season,
                    )
                )
            rotation = [rotation[0], rotation[-1], *rotation[1:-1]]
    return fixtures


def build_demo_world(
    seed: str = "scoutsim",
    club_count: int = 6,
    difficulty: Difficulty = Difficulty.NORMAL,
    country: str = "england",
) -> GameState:
    """A single-league world with a first-team scout employed at the top club."""
    rng = RNG(seed).derive("world")
    league = League(id="league_1", name="Premier Division", country=country)

    clubs: Dict[str, Club] = {}
    players: Dict[str, Player] = {}
    for i, name in enumerate(CLUB_NAMES[:club_count]):
        club, squad = generate_club(
            rng, f"club_{i + 1}", name, league.id, country, reputation=80 - i * 8
        )
        clubs[club.id] = club
        players.update({p.id: p for p in squad})

    fixtures = {f.id: f for f in generate_round_robin(league.id, list(clubs))}
    countries = [country, "spain", "germany"]

    scout = Scout(
        id="scout_1",
        first_name="Alex",
        last_name="Morgan",
        primary_specialization=Specialization.FIRST_TEAM,
        home_country=country,
        current_club_id=next(iter(clubs)),
        country_reputations={country: CountryReputation(country_id=country, contact_count=2)},
    )

    return GameState(
        scout=scout,
        players=players,
        clubs=clubs,
        leagues={league.id: league},
        fixtures=fixtures,
        countries=countries,
        regional_knowledge=initialize_regional_knowledge(countries, country),
        difficulty=difficulty,
    )


__all__ = [
    "build_demo_world",
    "generate_club",
    "generate_player",
    "generate_round_robin",
]
