"""League tables built from played fixtures."""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping

from scoutsim.core.models.club import Club
from scoutsim.core.models.fixture import Fixture


POINTS_FOR_WIN = 3
POINTS_FOR_DRAW = 1


@dataclass
class StandingEntry:
    club_id: str
    played: int = 0
    won: int = 0
    drawn: int = 0
    lost: int = 0
    goals_for: int = 0
    goals_against: int = 0
    points: int = 0

    @property
    def goal_difference(self) -> int:
        return self.goals_for - self.goals_against

    def record(self, scored: int, conceded: int) -> None:
        self.played += 1
        self.goals_for += scored
        self.goals_against += conceded
        if scored > conceded:
            self.won += 1
            self.points += POINTS_FOR_WIN
        elif scored == conceded:
            self.drawn += 1
            self.points += POINTS_FOR_DRAW
        else:
            self.lost += 1


def build_standings(
    league_id: str,
    fixtures: Mapping[str, Fixture],
    clubs: Mapping[str, Club],
) -> Dict[str, StandingEntry]:
    """
    Tally every played fixture of a league.

    Every club in the league gets an entry, even without a match. Fixtures
    naming a club outside the table are skipped.
    """
    table = {
        club.id: StandingEntry(club_id=club.id)
        for club in clubs.values()
        if club.league_id == league_id
    }

    for fixture in fixtures.values():
        if fixture.league_id != league_id or not fixture.played:
            continue
        if fixture.home_goals is None or fixture.away_goals is None:
            continue
        home = table.get(fixture.home_club_id)
        away = table.get(fixture.away_club_id)
        if home is None or away is None:
            continue
        home.record(fixture.home_goals, fixture.away_goals)
        away.record(fixture.away_goals, fixture.home_goals)

    return table


def sort_standings(entries: Iterable[StandingEntry]) -> List[StandingEntry]:
    """Points, then goal difference, then goals scored; club id breaks ties."""
    return sorted(
        entries,
        key=lambda e: (-e.points, -e.goal_difference, -e.goals_for, e.club_id),
    )


def build_all_standings(
    leagues: Iterable[str],
    fixtures: Mapping[str, Fixture],
    clubs: Mapping[str, Club],
) -> Dict[str, List[StandingEntry]]:
    return {
        league_id: sort_standings(build_standings(league_id, fixtures, clubs).values())
        for league_id in leagues
    }


__all__ = ["StandingEntry", "build_all_standings", "build_standings", "sort_standings"]
