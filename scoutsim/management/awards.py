"""
End-of-season awards.

Built from the final state of the season with no randomness: the scout's
own awards come from their season statistics, league awards from the world.
"""

from typing import TYPE_CHECKING, List, Set

from scoutsim.core.enums import Position
from scoutsim.core.models.awards import Award, SeasonAwards, SeasonStats
from scoutsim.core.util import round_half_up

if TYPE_CHECKING:
    from scoutsim.core.models.state import GameState


YOUNG_PLAYER_MAX_AGE = 21

RELIABLE_MIN_REPORTS = 3
RELIABLE_MIN_QUALITY = 70
PROFESSOR_MIN_REPORTS = 15
IRON_SCOUT_MAX_FATIGUE = 20
GLOBE_TROTTER_MIN_COUNTRIES = 3


# =============================================================================
# Statistics
# =============================================================================

def countries_scouted(state: "GameState", season: int) -> Set[str]:
    """Countries of the leagues whose players the scout observed this season."""
    countries = set()
    for obs in state.observations.values():
        if obs.season != season:
            continue
        player = state.players.get(obs.player_id)
        club = state.clubs.get(player.club_id) if player else None
        league = state.leagues.get(club.league_id) if club else None
        if league and league.country:
            countries.add(league.country)
    return countries


def compute_season_stats(state: "GameState", season: int) -> SeasonStats:
    reports = [r for r in state.reports.values() if r.submitted_season == season]
    average = (
        round_half_up(sum(r.quality_score for r in reports) / len(reports)) if reports else 0
    )
    return SeasonStats(
        reports_submitted=len(reports),
        average_report_quality=average,
        discoveries=sum(1 for d in state.discovery_records if d.discovered_season == season),
        observations=sum(1 for o in state.observations.values() if o.season == season),
        reputation_end=round_half_up(state.scout.reputation),
    )


# =============================================================================
# Awards
# =============================================================================

def generate_scout_awards(state: "GameState", season: int, stats: SeasonStats) -> List[Award]:
    awards: List[Award] = []

    if stats.reports_submitted >= RELIABLE_MIN_REPORTS and stats.average_report_quality >= RELIABLE_MIN_QUALITY:
        awards.append(Award(
            id="mr-reliable",
            name="Mr. Reliable",
            description="Kept average report quality at 70 or above",
            stat=f"Average report quality: {stats.average_report_quality}",
        ))

    visited = countries_scouted(state, season)
    if len(visited) >= GLOBE_TROTTER_MIN_COUNTRIES:
        awards.append(Award(
            id="globe-trotter",
            name="Globe Trotter",
            description="Scouted players in 3 or more countries",
            stat=f"Scouted in {len(visited)} countries",
        ))

    if state.scout.fatigue < IRON_SCOUT_MAX_FATIGUE:
        awards.append(Award(
            id="iron-scout",
            name="Iron Scout",
            description="Finished the season fresh",
            stat=f"Fatigue: {state.scout.fatigue}%",
        ))

    if stats.reports_submitted >= PROFESSOR_MIN_REPORTS:
        awards.append(Award(
            id="the-professor",
            name="The Professor",
            description="Submitted 15 or more reports in a season",
            stat=f"{stats.reports_submitted} reports submitted",
        ))

    return awards


def format_fee(value: int) -> str:
    if value >= 1_000_000:
        return f"{value / 1_000_000:.1f}M"
    return f"{value / 1_000:.0f}K"


def generate_league_awards(state: "GameState", season: int) -> List[Award]:
    awards: List[Award] = []
    players = list(state.players.values())

    strikers = sorted(
        (p for p in players if p.position == Position.ST and not p.injured),
        key=lambda p: p.current_ability + p.attributes["shooting"] * 5 + p.form * 10,
        reverse=True,
    )
    if strikers:
        top = strikers[0]
        goals = round_half_up(10 + top.attributes["shooting"] / 20 * 20 + top.form * 2)
        awards.append(Award(
            id="golden-boot",
            name="Golden Boot",
            description=f"Top scorer of the season with {goals} goals",
            related_player_id=top.id,
            stat=f"{top.full_name} - {goals} goals",
        ))

    young = sorted(
        (p for p in players if p.age <= YOUNG_PLAYER_MAX_AGE),
        key=lambda p: p.current_ability,
        reverse=True,
    )
    if young:
        best = young[0]
        awards.append(Award(
            id="best-young-player",
            name="Best Young Player",
            description="Highest-rated player aged 21 or under",
            related_player_id=best.id,
            stat=f"{best.full_name} ({best.age}) - CA {best.current_ability}",
        ))

    by_value = sorted(players, key=lambda p: p.market_value, reverse=True)
    if by_value:
        priciest = by_value[0]
        club = state.clubs.get(priciest.club_id)
        awards.append(Award(
            id="biggest-transfer",
            name="Biggest Transfer",
            description="Most valuable player in the league",
            related_player_id=priciest.id,
            stat=f"{priciest.full_name} - {club.name if club else 'Unknown'} ({format_fee(priciest.market_value)})",
        ))

    discoveries = sorted(
        (
            state.players[d.player_id]
            for d in state.discovery_records
            if d.discovered_season == season and d.player_id in state.players
        ),
        key=lambda p: p.potential_ability,
        reverse=True,
    )
    if discoveries:
        best_find = discoveries[0]
        stars = min(5, round_half_up(best_find.potential_ability / 40))
        awards.append(Award(
            id="breakthrough-discovery",
            name="Breakthrough Discovery",
            description="Your highest-potential discovery this season",
            related_player_id=best_find.id,
            stat=f"{best_find.full_name} - {stars} star potential",
        ))

    return awards


def generate_season_awards(state: "GameState", season: int) -> SeasonAwards:
    """Full awards package for ``season``, computed from the end-of-season state."""
    stats = compute_season_stats(state, season)
    club = state.clubs.get(state.scout.current_club_id) if state.scout.current_club_id else None
    return SeasonAwards(
        season=season,
        club_name=club.name if club else "Freelance",
        scout_awards=generate_scout_awards(state, season, stats),
        league_awards=generate_league_awards(state, season),
        stats=stats,
    )


__all__ = [
    "compute_season_stats",
    "countries_scouted",
    "format_fee",
    "generate_league_awards",
    "generate_scout_awards",
    "generate_season_awards",
]
