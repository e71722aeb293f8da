"""Tests for the JSON schemas."""

from scoutsim.api.schemas import (
    FixtureResultSchema,
    MessageSchema,
    SeasonAwardsSchema,
    StandingRow,
    TickSummary,
)
from scoutsim.core.enums import MessageType, Weather
from scoutsim.core.models.awards import Award, SeasonAwards, SeasonStats
from scoutsim.core.models.fixture import Fixture
from scoutsim.core.models.inbox import InboxMessage
from scoutsim.core.rng import RNG
from scoutsim.management.standings import StandingEntry
from scoutsim.management.tick import compute_tick


class TestFixtureSchemas:
    def test_played_fixture(self):
        fixture = Fixture(
            "fx_1", "l", "a", "b", week=3, played=True,
            home_goals=2, away_goals=1, weather=Weather.RAIN, attendance=12000,
        )

        schema = FixtureResultSchema.from_model(fixture)

        assert schema.home_goals == 2
        assert schema.weather == Weather.RAIN.value
        assert schema.attendance == 12000

    def test_message(self):
        message = InboxMessage("m1", 1, 1, MessageType.NEWS, "Title", "Body", related_id="p1")
        schema = MessageSchema.from_model(message)
        assert schema.message_type == "news"
        assert schema.related_id == "p1"


class TestTickSummary:
    """Condensed weekly view."""

    def test_from_result(self, two_club_state):
        result = compute_tick(two_club_state, RNG("summary"))

        summary = TickSummary.from_result(result)

        assert summary.week == 1
        assert [f.id for f in summary.fixtures] == ["fx_1"]
        assert summary.cards == len(result.card_events)
        assert summary.reputation_change == -1
        assert summary.fatigue_change == -12
        assert len(summary.messages) == len(result.new_messages)
        assert summary.model_dump()["end_of_season"] is False


class TestStandingsAndAwards:
    def test_standing_row(self):
        entry = StandingEntry("a", played=3, won=2, drawn=1, goals_for=5, goals_against=1, points=7)

        row = StandingRow.from_entry(1, entry, "Ashford")

        assert row.goal_difference == 4
        assert row.club_name == "Ashford"
        assert row.points == 7

    def test_season_awards(self):
        awards = SeasonAwards(
            season=1,
            club_name="Freelance",
            scout_awards=[Award("iron-scout", "Iron Scout", "Fresh", stat="Fatigue: 5%")],
            stats=SeasonStats(reports_submitted=4, average_report_quality=72),
        )

        schema = SeasonAwardsSchema.from_model(awards)

        assert [a.id for a in schema.scout_awards] == ["iron-scout"]
        assert schema.league_awards == []
        assert schema.reports_submitted == 4
        assert schema.average_report_quality == 72
