"""Tests for the weekly tick: compute, commit and season rollover."""

import copy
import logging
from dataclasses import replace

import pytest

from scoutsim.core.difficulty import Difficulty
from scoutsim.core.enums import ActivityType, InjurySeverity, InjuryType
from scoutsim.core.injuries import InjuryResult
from scoutsim.core.models.discipline import DisciplinaryRecord
from scoutsim.core.models.fixture import Fixture, PlayerMatchRating
from scoutsim.core.models.knowledge import RegionalKnowledge
from scoutsim.core.models.player import Injury
from scoutsim.core.models.schedule import WeekSchedule
from scoutsim.core.models.scout import Scout, UnsignedYouth
from scoutsim.core.rng import RNG
from scoutsim.management.tick import (
    TickResult,
    advance_week,
    commit_tick,
    compute_fatigue_recovery,
    compute_tick,
    get_season_length,
    is_end_of_season,
)
from scoutsim.management.transfers import Transfer
from scoutsim.scouting.calendar import add_activity, make_activity


def injury_result(player_id: str, weeks: int = 3) -> InjuryResult:
    injury = Injury("inj_1", player_id, InjuryType.KNOCK, InjurySeverity.MINOR, weeks, weeks)
    return InjuryResult(player_id=player_id, weeks_out=weeks, injury=injury)


# =============================================================================
# Season helpers
# =============================================================================

class TestSeasonHelpers:
    """Season length and fatigue recovery."""

    def test_minimum_season_length(self):
        assert get_season_length({}) == 38
        assert is_end_of_season(38, {})
        assert not is_end_of_season(37, {})

    def test_late_fixtures_extend_season(self):
        fixtures = {"f": Fixture("f", "l", "a", "b", week=41)}
        assert get_season_length(fixtures) == 41
        assert not is_end_of_season(38, fixtures)

    def test_fatigue_recovery(self):
        assert compute_fatigue_recovery(Scout(id="s")) == 12


# =============================================================================
# Compute phase
# =============================================================================

class TestComputeTick:
    """A week worked out without touching the state."""

    def test_does_not_mutate_state(self, two_club_state):
        before = copy.deepcopy(two_club_state)
        compute_tick(two_club_state, RNG("week"))
        assert two_club_state == before

    def test_deterministic(self, state_factory):
        a = compute_tick(state_factory(), RNG(42))
        b = compute_tick(state_factory(), RNG(42))
        assert a == b

    def test_fixture_played(self, two_club_state):
        result = compute_tick(two_club_state, RNG("week"))

        assert [f.id for f in result.fixtures_played] == ["fx_1"]
        assert result.fixtures_played[0].played
        assert result.standings_updated
        assert not result.end_of_season_triggered
        assert result.season_awards is None
        assert len(result.form_momentum_updates) == len(two_club_state.players)

    def test_idle_week_costs_reputation(self, two_club_state):
        result = compute_tick(two_club_state, RNG("week"))
        assert result.reputation_change == -1
        assert any(m.title == "Board Satisfaction declined (-1)" for m in result.new_messages)

    def test_schedule_processed(self, state_factory):
        schedule = add_activity(
            WeekSchedule(1, 1), make_activity(ActivityType.ATTEND_MATCH, target_id="fx_1"), 0
        )
        state = state_factory(schedule=schedule)

        result = compute_tick(state, RNG("week"))

        assert list(result.activity_qualities) == [0]
        assert result.week_result.matches_attended == ["fx_1"]
        assert result.reputation_change == 0

    def test_suspended_player_sits_out(self, state_factory):
        records = {"club_a_3": DisciplinaryRecord("club_a_3", 1, suspension_weeks_remaining=2)}
        state = state_factory(disciplinary_records=records)

        result = compute_tick(state, RNG("week"))

        assert "club_a_3" not in result.fixtures_played[0].player_ratings
        assert all(c.player_id != "club_a_3" for c in result.card_events)
        assert result.updated_disciplinary_records["club_a_3"].suspension_weeks_remaining == 1
        assert records["club_a_3"].suspension_weeks_remaining == 2

    def test_regional_growth_needs_records(self, state_factory):
        assert compute_tick(state_factory(), RNG(1)).regional_knowledge_result is None

        state = state_factory(regional_knowledge={"england": RegionalKnowledge("england", 25)})
        result = compute_tick(state, RNG(1))

        assert result.regional_knowledge_result.updated["england"].knowledge_level == 27


# =============================================================================
# Commit phase
# =============================================================================

class TestCommitTick:
    """Folding a change-set into a new state."""

    def test_week_advances(self, two_club_state):
        committed = commit_tick(two_club_state, TickResult(week=1, season=1))

        assert committed.current_week == 2
        assert committed.current_season == 1
        assert committed.total_weeks_played == 1
        assert committed.schedule == WeekSchedule(2, 1)
        assert two_club_state.current_week == 1

    def test_transfer(self, two_club_state):
        result = TickResult(
            week=1, season=1,
            transfers=[Transfer("club_b_10", "club_b", "club_a", 800_000, 1, 1)],
        )

        committed = commit_tick(two_club_state, result)

        moved = committed.players["club_b_10"]
        assert moved.club_id == "club_a"
        assert moved.morale == 8
        assert "club_b_10" in committed.clubs["club_a"].player_ids
        assert "club_b_10" not in committed.clubs["club_b"].player_ids
        assert committed.clubs["club_a"].budget == 9_200_000
        assert committed.clubs["club_b"].budget == 10_800_000
        assert two_club_state.players["club_b_10"].club_id == "club_b"

    def test_newly_injured_player_stays(self, two_club_state):
        result = TickResult(
            week=1, season=1,
            injuries=[injury_result("club_b_10")],
            transfers=[Transfer("club_b_10", "club_b", "club_a", 800_000, 1, 1)],
        )

        committed = commit_tick(two_club_state, result)

        player = committed.players["club_b_10"]
        assert player.club_id == "club_b"
        assert player.injured
        assert player.injury_weeks_remaining == 3

    def test_dangling_transfer_skipped(self, two_club_state, caplog):
        result = TickResult(
            week=1, season=1,
            transfers=[Transfer("ghost", "club_b", "club_a", 800_000, 1, 1)],
        )

        with caplog.at_level(logging.WARNING, logger="scoutsim.management.tick"):
            committed = commit_tick(two_club_state, result)

        assert committed.clubs == two_club_state.clubs
        assert "ghost" in caplog.text

    def test_existing_injury_heals(self, state_factory):
        state = state_factory()
        state.players["club_a_2"] = replace(
            state.players["club_a_2"], injured=True, injury_weeks_remaining=1
        )

        committed = commit_tick(state, TickResult(week=1, season=1))

        assert not committed.players["club_a_2"].injured

    def test_match_ratings_update_form(self, two_club_state):
        fixture = replace(
            two_club_state.fixtures["fx_1"],
            played=True, home_goals=1, away_goals=0,
            player_ratings={"club_a_0": PlayerMatchRating("club_a_0", "fx_1", 8.5)},
        )

        committed = commit_tick(two_club_state, TickResult(week=1, season=1, fixtures_played=[fixture]))

        keeper = committed.players["club_a_0"]
        assert committed.fixtures["fx_1"].played
        assert committed.match_ratings["fx_1"]["club_a_0"].rating == 8.5
        assert [e.rating for e in keeper.recent_match_ratings] == [8.5]
        assert keeper.form == 3.0

    @pytest.mark.parametrize("difficulty,change,expected", [
        (Difficulty.NORMAL, 1, 11),
        (Difficulty.EASY, 1, 12),
        (Difficulty.EASY, -1, 9),
        (Difficulty.HARD, -1, 9),
        (Difficulty.IRONMAN, 3, 12),
    ])
    def test_reputation_scaled(self, state_factory, difficulty, change, expected):
        state = state_factory(difficulty=difficulty)
        committed = commit_tick(state, TickResult(week=1, season=1, reputation_change=change))
        assert committed.scout.reputation == expected

    def test_fatigue_recovers(self, state_factory):
        state = state_factory(scout=Scout(id="s", fatigue=50))
        committed = commit_tick(state, TickResult(week=1, season=1, fatigue_recovery=12))
        assert committed.scout.fatigue == 38

    def test_fatigue_floor(self, state_factory):
        state = state_factory(scout=Scout(id="s", fatigue=5))
        committed = commit_tick(state, TickResult(week=1, season=1, fatigue_recovery=12))
        assert committed.scout.fatigue == 0


# =============================================================================
# Full weeks
# =============================================================================

class TestFullWeeks:
    """compute then commit, over several weeks."""

    def test_values_stay_in_range(self, state_factory):
        state = state_factory()
        rng = RNG("season")
        for _ in range(6):
            state = advance_week(state, rng)

        assert state.current_week == 7
        assert 0 <= state.scout.fatigue <= 100
        assert 0 <= state.scout.reputation <= 100
        for player in state.players.values():
            assert -3.0 <= player.form <= 3.0
            assert 1 <= player.current_ability <= 200
            assert all(1 <= value <= 20 for _, value in player.attributes.items())

    def test_end_of_season(self, state_factory):
        state = state_factory(week=38)

        result = compute_tick(state, RNG("final"))
        committed = commit_tick(state, result)

        assert result.end_of_season_triggered
        assert result.season_awards.season == 1
        assert committed.current_week == 1
        assert committed.current_season == 2
        assert committed.season_awards[1] == result.season_awards
        assert committed.leagues["league_1"].season == 2
        assert all(p.age == 25 for p in committed.players.values())
        assert any(m.title == "Season 1 Complete" for m in committed.inbox)

    def test_active_suspension_survives_rollover(self, state_factory):
        records = {
            "club_a_3": DisciplinaryRecord("club_a_3", 1, yellow_cards=5, suspension_weeks_remaining=3),
            "club_a_4": DisciplinaryRecord("club_a_4", 1, yellow_cards=2),
        }
        state = state_factory(week=38, disciplinary_records=records)

        committed = commit_tick(state, compute_tick(state, RNG("final")))

        kept = committed.disciplinary_records["club_a_3"]
        assert kept.suspension_weeks_remaining == 2
        assert kept.yellow_cards == 0
        assert kept.season == 2

    def test_veterans_retire_at_rollover(self, state_factory):
        state = state_factory(
            week=38,
            unsigned_youth={"y1": UnsignedYouth("y1", "y1_p", "england", age=19)},
        )
        players = dict(state.players)
        players["club_a_1"] = replace(players["club_a_1"], age=40)
        state = replace(state, players=players)

        result = compute_tick(state, RNG("final"))
        committed = commit_tick(state, result)

        assert result.retired_player_ids == ["club_a_1"]
        assert result.youth_aging.retired == ["y1"]
        assert "club_a_1" not in committed.players
        assert "club_a_1" not in committed.clubs["club_a"].player_ids
        assert committed.retired_player_ids == ["club_a_1", "y1_p"]
        assert committed.unsigned_youth == {}
        assert "club_a_1" in state.players

    def test_no_departures_mid_season(self, two_club_state):
        result = compute_tick(two_club_state, RNG("week"))
        assert result.retired_player_ids == []
        assert result.youth_aging is None
