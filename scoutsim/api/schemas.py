"""Pydantic schemas for JSON views of tick results, tables and awards."""

from typing import List, Optional

from pydantic import BaseModel


class FixtureResultSchema(BaseModel):
    """A played fixture's scoreline."""

    id: str
    home_club_id: str
    away_club_id: str
    home_goals: int
    away_goals: int
    weather: Optional[str] = None
    attendance: Optional[int] = None

    @classmethod
    def from_model(cls, fixture) -> "FixtureResultSchema":
        """Create from Fixture model."""
        return cls(
            id=fixture.id,
            home_club_id=fixture.home_club_id,
            away_club_id=fixture.away_club_id,
            home_goals=fixture.home_goals or 0,
            away_goals=fixture.away_goals or 0,
            weather=fixture.weather.value if fixture.weather else None,
            attendance=fixture.attendance,
        )


class MessageSchema(BaseModel):
    id: str
    message_type: str
    title: str
    body: str
    action_required: bool = False
    related_id: Optional[str] = None

    @classmethod
    def from_model(cls, message) -> "MessageSchema":
        """Create from InboxMessage model."""
        return cls(
            id=message.id,
            message_type=message.message_type.value,
            title=message.title,
            body=message.body,
            action_required=message.action_required,
            related_id=message.related_id,
        )


class TickSummary(BaseModel):
    """Condensed view of one week's TickResult."""

    week: int
    season: int
    fixtures: List[FixtureResultSchema] = []
    transfers: int = 0
    injuries: int = 0
    cards: int = 0
    suspensions: int = 0
    breakthroughs: int = 0
    reputation_change: int = 0
    fatigue_change: int = 0
    messages: List[MessageSchema] = []
    end_of_season: bool = False

    @classmethod
    def from_result(cls, result) -> "TickSummary":
        """Create from TickResult."""
        return cls(
            week=result.week,
            season=result.season,
            fixtures=[FixtureResultSchema.from_model(f) for f in result.fixtures_played],
            transfers=len(result.transfers),
            injuries=len(result.injuries),
            cards=len(result.card_events),
            suspensions=len(result.suspensions),
            breakthroughs=len(result.breakthroughs),
            reputation_change=result.reputation_change,
            fatigue_change=result.week_result.fatigue_change - result.fatigue_recovery,
            messages=[MessageSchema.from_model(m) for m in result.new_messages],
            end_of_season=result.end_of_season_triggered,
        )


class StandingRow(BaseModel):
    """One row of a league table."""

    position: int
    club_id: str
    club_name: str = ""
    played: int = 0
    won: int = 0
    drawn: int = 0
    lost: int = 0
    goals_for: int = 0
    goals_against: int = 0
    goal_difference: int = 0
    points: int = 0

    @classmethod
    def from_entry(cls, position: int, entry, club_name: str = "") -> "StandingRow":
        """Create from a StandingEntry."""
        return cls(
            position=position,
            club_id=entry.club_id,
            club_name=club_name,
            played=entry.played,
            won=entry.won,
            drawn=entry.drawn,
            lost=entry.lost,
            goals_for=entry.goals_for,
            goals_against=entry.goals_against,
            goal_difference=entry.goal_difference,
            points=entry.points,
        )


class AwardSchema(BaseModel):
    id: str
    name: str
    description: str
    related_player_id: Optional[str] = None
    stat: str = ""

    @classmethod
    def from_model(cls, award) -> "AwardSchema":
        return cls(
            id=award.id,
            name=award.name,
            description=award.description,
            related_player_id=award.related_player_id,
            stat=award.stat,
        )


class SeasonAwardsSchema(BaseModel):
    """End-of-season awards and the scout's season statistics."""

    season: int
    club_name: str
    scout_awards: List[AwardSchema] = []
    league_awards: List[AwardSchema] = []
    reports_submitted: int = 0
    average_report_quality: float = 0.0
    discoveries: int = 0
    observations: int = 0
    reputation_end: int = 0

    @classmethod
    def from_model(cls, awards) -> "SeasonAwardsSchema":
        """Create from SeasonAwards model."""
        return cls(
            season=awards.season,
            club_name=awards.club_name,
            scout_awards=[AwardSchema.from_model(a) for a in awards.scout_awards],
            league_awards=[AwardSchema.from_model(a) for a in awards.league_awards],
            reports_submitted=awards.stats.reports_submitted,
            average_report_quality=awards.stats.average_report_quality,
            discoveries=awards.stats.discoveries,
            observations=awards.stats.observations,
            reputation_end=awards.stats.reputation_end,
        )


__all__ = [
    "AwardSchema",
    "FixtureResultSchema",
    "MessageSchema",
    "SeasonAwardsSchema",
    "StandingRow",
    "TickSummary",
]
