"""
Regional knowledge engine.

The scout builds up knowledge of each country's football by being there,
through contacts, and through a regional specialization. Knowledge lowers
observation error (scouting efficiency) and, as it crosses fixed
thresholds, unlocks cultural insights, local contacts and hidden leagues.
Each threshold unlocks at most once per country.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Dict, List, Optional, Sequence, Tuple

from scoutsim.core.enums import InsightType, Specialization
from scoutsim.core.models.knowledge import CulturalInsight, RegionalKnowledge
from scoutsim.core.models.scout import Scout
from scoutsim.core.rng import RNG

if TYPE_CHECKING:
    from scoutsim.core.models.state import GameState


logger = logging.getLogger(__name__)


KNOWLEDGE_MAX = 100.0
HOME_COUNTRY_KNOWLEDGE = 25.0

PRESENCE_BONUS = 2.0
CONTACT_BONUS_PER_CONTACT = 0.5
MAX_CONTACT_BONUS = 2.0
SPECIALIZATION_BONUS = 1.0

INSIGHT_THRESHOLDS = (10, 25, 45, 70)
CONTACT_THRESHOLDS = (15, 30, 50, 70, 90)

HIDDEN_LEAGUE_BASE_CHANCE = 0.05
HIDDEN_LEAGUE_CHANCE_PER_POINT = 0.01
HIDDEN_LEAGUE_MAX_CHANCE = 0.30

# (knowledge lower bound, efficiency at lower bound, efficiency at upper bound)
EFFICIENCY_SEGMENTS = (
    (0.0, 1.00, 0.85),
    (25.0, 0.85, 0.70),
    (50.0, 0.70, 0.50),
    (75.0, 0.50, 0.30),
)
SEGMENT_WIDTH = 25.0


# =============================================================================
# Static data
# =============================================================================

@dataclass(frozen=True)
class HiddenLeague:
    id: str
    country: str
    knowledge_threshold: int
    name: str


HIDDEN_LEAGUES: Tuple[HiddenLeague, ...] = (
    HiddenLeague("hl_eng_national_league", "england", 20, "National League"),
    HiddenLeague("hl_eng_non_league", "england", 55, "Non-League Pyramid"),
    HiddenLeague("hl_spa_tercera", "spain", 25, "Tercera Federacion"),
    HiddenLeague("hl_fra_national3", "france", 30, "National 3"),
    HiddenLeague("hl_ger_regionalliga", "germany", 20, "Regionalliga"),
    HiddenLeague("hl_ita_serie_d", "italy", 30, "Serie D"),
    HiddenLeague("hl_por_campeonato", "portugal", 20, "Campeonato de Portugal"),
)

_I = InsightType

DEFAULT_INSIGHTS: Tuple[CulturalInsight, ...] = (
    CulturalInsight(
        _I.PLAYING_STYLE,
        "Local sides favour a compact shape and patient build-up.",
        "Slightly better reads on positional discipline.",
    ),
    CulturalInsight(
        _I.DEVELOPMENT_CULTURE,
        "Most clubs here promote from within rather than buy.",
        "Academy prospects are easier to spot early.",
    ),
    CulturalInsight(
        _I.MENTALITY_PATTERN,
        "Players are judged harshly by their own supporters.",
        "Better reads on composure under pressure.",
    ),
    CulturalInsight(
        _I.PHYSICAL_TRAIT,
        "Heavy pitches through winter reward strength over flair.",
        "Physical assessments here are more reliable.",
    ),
)

COUNTRY_INSIGHTS: Dict[str, Tuple[CulturalInsight, ...]] = {
    "england": (
        CulturalInsight(
            _I.PLAYING_STYLE,
            "Tempo is everything: the lower divisions play at a frantic pace.",
            "Better judgement of players' decision speed.",
        ),
        CulturalInsight(
            _I.DEVELOPMENT_CULTURE,
            "Loan spells in the lower leagues are a rite of passage.",
            "Loaned youngsters are easier to track.",
        ),
        CulturalInsight(
            _I.MENTALITY_PATTERN,
            "Crowds reward effort before skill.",
            "Work rate reads are more accurate.",
        ),
        CulturalInsight(
            _I.PHYSICAL_TRAIT,
            "Aerial duels decide a lot of games here.",
            "Heading and strength reads are sharper.",
        ),
    ),
    "spain": (
        CulturalInsight(
            _I.PLAYING_STYLE,
            "Even youth sides are coached to keep the ball under pressure.",
            "Better reads on first touch and passing range.",
        ),
        CulturalInsight(
            _I.DEVELOPMENT_CULTURE,
            "Reserve teams play competitive senior football.",
            "Reserve fixtures are worth attending.",
        ),
        CulturalInsight(
            _I.MENTALITY_PATTERN,
            "Technical players are trusted to take risks.",
            "Creativity is easier to separate from recklessness.",
        ),
        CulturalInsight(
            _I.PHYSICAL_TRAIT,
            "Smaller, agile players are common in every position.",
            "Agility reads are more reliable.",
        ),
    ),
    "germany": (
        CulturalInsight(
            _I.PLAYING_STYLE,
            "Counter-pressing is drilled from under-12 level.",
            "Better reads on work rate without the ball.",
        ),
        CulturalInsight(
            _I.DEVELOPMENT_CULTURE,
            "Every professional club runs a certified academy.",
            "Academy visits yield more information.",
        ),
        CulturalInsight(
            _I.MENTALITY_PATTERN,
            "Young players are given structured responsibility early.",
            "Leadership reads are sharper.",
        ),
        CulturalInsight(
            _I.PHYSICAL_TRAIT,
            "Conditioning standards are high throughout the pyramid.",
            "Stamina reads are more reliable.",
        ),
    ),
    "france": (
        CulturalInsight(
            _I.PLAYING_STYLE,
            "Wide players are encouraged to go one against one.",
            "Dribbling reads are sharper.",
        ),
        CulturalInsight(
            _I.DEVELOPMENT_CULTURE,
            "The suburbs around the big cities produce a steady stream of talent.",
            "Grassroots events are more productive.",
        ),
        CulturalInsight(
            _I.MENTALITY_PATTERN,
            "Many prospects move abroad before they turn twenty.",
            "Better sense of which players will leave soon.",
        ),
        CulturalInsight(
            _I.PHYSICAL_TRAIT,
            "Athleticism is prized in academy selection.",
            "Pace reads are more reliable.",
        ),
    ),
    "italy": (
        CulturalInsight(
            _I.PLAYING_STYLE,
            "Defensive organisation is taught before anything else.",
            "Positioning reads are sharper.",
        ),
        CulturalInsight(
            _I.DEVELOPMENT_CULTURE,
            "Youngsters often wait years for a first-team chance.",
            "Late developers are easier to spot.",
        ),
        CulturalInsight(
            _I.MENTALITY_PATTERN,
            "Game management is valued as highly as flair.",
            "Composure reads are more accurate.",
        ),
        CulturalInsight(
            _I.PHYSICAL_TRAIT,
            "Defenders tend to be tall and strong in the air.",
            "Aerial reads are more reliable.",
        ),
    ),
    "brazil": (
        CulturalInsight(
            _I.PLAYING_STYLE,
            "Futsal shapes how young players use the ball in tight spaces.",
            "Close control reads are sharper.",
        ),
        CulturalInsight(
            _I.DEVELOPMENT_CULTURE,
            "Talent is sold young, often before a senior debut.",
            "Better sense of when prospects will be sold.",
        ),
        CulturalInsight(
            _I.MENTALITY_PATTERN,
            "Street football breeds confidence on the ball.",
            "Better reads on flair under pressure.",
        ),
        CulturalInsight(
            _I.PHYSICAL_TRAIT,
            "Heat and humidity favour lighter, quicker players.",
            "Agility reads are more reliable.",
        ),
    ),
}


# =============================================================================
# Results
# =============================================================================

@dataclass
class KnowledgeUnlock:
    country_id: str
    previous_level: float
    new_level: float
    insights: List[CulturalInsight] = field(default_factory=list)
    contact_ids: List[str] = field(default_factory=list)
    hidden_league: Optional[HiddenLeague] = None


@dataclass
class RegionalKnowledgeResult:
    """Updated knowledge records plus anything unlocked this week."""

    updated: Dict[str, RegionalKnowledge] = field(default_factory=dict)
    unlocks: List[KnowledgeUnlock] = field(default_factory=list)

    @property
    def new_insights(self) -> List[Tuple[str, CulturalInsight]]:
        return [(u.country_id, i) for u in self.unlocks for i in u.insights]

    @property
    def new_contacts(self) -> List[Tuple[str, str]]:
        return [(u.country_id, c) for u in self.unlocks for c in u.contact_ids]

    @property
    def discovered_leagues(self) -> List[HiddenLeague]:
        return [u.hidden_league for u in self.unlocks if u.hidden_league]


# =============================================================================
# Curves and bonuses
# =============================================================================

def calculate_scouting_efficiency(knowledge_level: float) -> float:
    """
    Fraction of baseline observation error that remains at a knowledge level.

    Piecewise linear: 1.00 at 0 down to 0.85 at 25, 0.70 at 50, 0.50 at 75
    and 0.30 at 100. Continuous at every segment boundary.
    """
    level = max(0.0, min(KNOWLEDGE_MAX, knowledge_level))
    for start, high, low in reversed(EFFICIENCY_SEGMENTS):
        if level >= start:
            progress = (level - start) / SEGMENT_WIDTH
            return high - (high - low) * progress
    return 1.0


def get_graduated_regional_bonus(knowledge_level: float, specialization_level: int) -> float:
    """Accuracy bonus for a regional specialist, scaled by their level out of 20."""
    if knowledge_level >= 75:
        base = 0.70
    elif knowledge_level >= 50:
        base = 0.50
    elif knowledge_level >= 25:
        base = 0.30
    else:
        base = 0.15
    return base * (specialization_level / 20)


def initialize_regional_knowledge(
    countries: Sequence[str], home_country: str
) -> Dict[str, RegionalKnowledge]:
    """Fresh knowledge records; the home country starts at 25, others at 0."""
    records = {}
    for country in countries:
        level = HOME_COUNTRY_KNOWLEDGE if country == home_country else 0.0
        records[country] = RegionalKnowledge(
            country_id=country,
            knowledge_level=level,
            scouting_efficiency=calculate_scouting_efficiency(level),
        )
    return records


def current_country(scout: Scout, countries: Sequence[str]) -> Optional[str]:
    """Travel destination when abroad, else home, else the first known country."""
    booking = scout.travel_booking
    if booking and booking.is_abroad:
        return booking.destination_country
    if scout.home_country:
        return scout.home_country
    return countries[0] if countries else None


def weekly_knowledge_gain(scout: Scout, country: str, is_current: bool) -> float:
    gain = 0.0
    if is_current:
        gain += PRESENCE_BONUS

    reputation = scout.country_reputations.get(country)
    if reputation and reputation.contact_count > 0:
        gain += min(MAX_CONTACT_BONUS, reputation.contact_count * CONTACT_BONUS_PER_CONTACT)

    if is_current and scout.primary_specialization == Specialization.REGIONAL:
        gain += SPECIALIZATION_BONUS

    if is_current:
        gain += scout.familiarity_gain_bonus

    return gain


# =============================================================================
# Unlocks
# =============================================================================

def _crossed(thresholds: Sequence[int], old: float, new: float) -> List[int]:
    """Indexes of every threshold passed on the way from ``old`` to ``new``."""
    return [index for index, threshold in enumerate(thresholds) if old < threshold <= new]


def generate_cultural_insight(
    rng: RNG,
    country: str,
    knowledge: RegionalKnowledge,
    threshold_index: int,
) -> Optional[CulturalInsight]:
    """
    Pick an insight of a type the scout has not seen yet for this country.

    Uses the threshold index directly while the filtered pool is large
    enough, otherwise draws an index. Returns None when every type is known.
    """
    pool = COUNTRY_INSIGHTS.get(country, DEFAULT_INSIGHTS)
    seen = {i.insight_type for i in knowledge.cultural_insights}
    available = [i for i in pool if i.insight_type not in seen]
    if not available:
        return None

    if threshold_index < len(available):
        return available[threshold_index]
    return available[rng.next_int(0, len(available) - 1)]


def generate_local_contact(rng: RNG, country: str) -> str:
    return f"lc_{country}_{format(rng.next_int(100000, 999999), 'x')}"


def discover_hidden_league(
    rng: RNG, country: str, knowledge: RegionalKnowledge
) -> Optional[HiddenLeague]:
    """
    Roll for one undiscovered hidden league the scout now knows enough about.

    Candidates are checked lowest threshold first; each rolls
    ``min(0.30, 0.05 + 0.01 * excess knowledge)`` and the first hit wins.
    """
    candidates = sorted(
        (
            league for league in HIDDEN_LEAGUES
            if league.country == country
            and league.knowledge_threshold <= knowledge.knowledge_level
            and league.id not in knowledge.discovered_leagues
        ),
        key=lambda league: league.knowledge_threshold,
    )
    for league in candidates:
        excess = knowledge.knowledge_level - league.knowledge_threshold
        chance = min(
            HIDDEN_LEAGUE_MAX_CHANCE,
            HIDDEN_LEAGUE_BASE_CHANCE + excess * HIDDEN_LEAGUE_CHANCE_PER_POINT,
        )
        if rng.next() < chance:
            return league
    return None


# =============================================================================
# Weekly processing
# =============================================================================

def process_regional_knowledge_growth(state: "GameState", rng: RNG) -> RegionalKnowledgeResult:
    """
    Grow knowledge for every country in the world, in country order.

    Countries that gain nothing this week are skipped entirely and draw no
    random numbers. The returned records are new objects.
    """
    result = RegionalKnowledgeResult()
    countries = list(state.countries)
    here = current_country(state.scout, countries)

    for country in countries:
        gain = weekly_knowledge_gain(state.scout, country, country == here)
        if gain <= 0:
            continue

        existing = state.regional_knowledge.get(country) or RegionalKnowledge(country_id=country)
        old_level = existing.knowledge_level
        new_level = min(KNOWLEDGE_MAX, old_level + gain)
        knowledge = replace(
            existing,
            knowledge_level=new_level,
            scouting_efficiency=calculate_scouting_efficiency(new_level),
            cultural_insights=list(existing.cultural_insights),
            local_contacts=list(existing.local_contacts),
            discovered_leagues=list(existing.discovered_leagues),
        )
        unlock = KnowledgeUnlock(country_id=country, previous_level=old_level, new_level=new_level)

        # One unlock per threshold crossed, lowest first
        for insight_index in _crossed(INSIGHT_THRESHOLDS, old_level, new_level):
            insight = generate_cultural_insight(rng, country, knowledge, insight_index)
            if insight is not None:
                knowledge.cultural_insights.append(insight)
                unlock.insights.append(insight)

        for _ in _crossed(CONTACT_THRESHOLDS, old_level, new_level):
            contact_id = generate_local_contact(rng, country)
            knowledge.local_contacts.append(contact_id)
            unlock.contact_ids.append(contact_id)

        league = discover_hidden_league(rng, country, knowledge)
        if league is not None:
            knowledge.discovered_leagues.append(league.id)
            unlock.hidden_league = league
            logger.debug("Hidden league discovered in %s: %s", country, league.name)

        result.updated[country] = knowledge
        if unlock.insights or unlock.contact_ids or unlock.hidden_league:
            result.unlocks.append(unlock)

    return result


__all__ = [
    "CONTACT_THRESHOLDS",
    "HIDDEN_LEAGUES",
    "HiddenLeague",
    "INSIGHT_THRESHOLDS",
    "KnowledgeUnlock",
    "RegionalKnowledgeResult",
    "calculate_scouting_efficiency",
    "current_country",
    "discover_hidden_league",
    "generate_cultural_insight",
    "generate_local_contact",
    "get_graduated_regional_bonus",
    "initialize_regional_knowledge",
    "process_regional_knowledge_growth",
    "weekly_knowledge_gain",
]
