"""Tests for injury incidence, recovery and history."""

import pytest

from scoutsim.core.enums import InjurySeverity, InjuryType
from scoutsim.core.injuries import (
    INJURY_TYPE_WEIGHTS,
    MAX_HISTORY_PRONENESS,
    RECOVERY_RANGES,
    REINJURY_WINDOW_WEEKS,
    InjuryResult,
    add_to_injury_history,
    advance_injury_clock,
    apply_injury,
    compute_injury_probability,
    derive_severity,
    generate_injury,
    process_injuries,
)
from scoutsim.core.models.player import Injury, InjuryHistory


def make_injury(player_id: str, weeks: int = 3) -> Injury:
    return Injury(
        id="inj_test",
        player_id=player_id,
        injury_type=InjuryType.MUSCLE,
        severity=derive_severity(weeks),
        recovery_weeks=weeks,
        weeks_remaining=weeks,
    )


class TestInjuryProbability:
    """Weekly odds."""

    def test_injured_player_cannot_be_injured_again(self, player_factory):
        hurt = player_factory("p", injured=True, injury_weeks_remaining=2)
        assert compute_injury_probability(hurt) == 0.0

    @pytest.mark.parametrize("proneness,expected", [
        (1, 0.012),
        (10, 0.03),
        (20, 0.05),
    ])
    def test_proneness_scaling(self, player_factory, proneness, expected):
        p = player_factory("p", injury_proneness=proneness)
        assert compute_injury_probability(p) == pytest.approx(expected)

    def test_history_and_reinjury_window(self, player_factory):
        history = InjuryHistory(player_id="p", proneness=0.5, reinjury_window_weeks_left=2)
        p = player_factory("p", injury_proneness=10, injury_history=history)
        assert compute_injury_probability(p) == pytest.approx(0.03 * 1.5 * 2)


class TestSeverity:
    """Recovery length to severity band."""

    @pytest.mark.parametrize("weeks,severity", [
        (1, InjurySeverity.MINOR),
        (2, InjurySeverity.MINOR),
        (3, InjurySeverity.MODERATE),
        (5, InjurySeverity.MODERATE),
        (6, InjurySeverity.SERIOUS),
        (10, InjurySeverity.SERIOUS),
        (11, InjurySeverity.CAREER_THREATENING),
    ])
    def test_bands(self, weeks, severity):
        assert derive_severity(weeks) == severity

    def test_tables_cover_every_type(self):
        weighted = {t for t, _ in INJURY_TYPE_WEIGHTS}
        assert weighted == set(InjuryType)
        assert set(RECOVERY_RANGES) == set(InjuryType)


class TestGenerateInjury:
    """Type then recovery length."""

    def test_lowest_draws(self, scripted_rng, player):
        rng = scripted_rng(default=0.0)
        injury = generate_injury(rng, player, week=7, season=2)

        assert injury.injury_type == InjuryType.MUSCLE
        assert injury.recovery_weeks == 2
        assert injury.weeks_remaining == 2
        assert injury.severity == InjurySeverity.MINOR
        assert injury.occurred_week == 7
        assert injury.occurred_season == 2
        assert injury.id.startswith("inj_")

    def test_recovery_within_type_range(self, rng, player):
        for _ in range(50):
            injury = generate_injury(rng, player, 1, 1)
            low, high = RECOVERY_RANGES[injury.injury_type]
            assert low <= injury.recovery_weeks <= high

    def test_process_skips_injured_players(self, scripted_rng, two_club_state):
        hurt_id = "club_a_0"
        players = dict(two_club_state.players)
        players[hurt_id] = apply_injury(
            players[hurt_id], InjuryResult(hurt_id, 3, make_injury(hurt_id))
        )
        two_club_state.players = players

        results = process_injuries(two_club_state, scripted_rng(default=0.0))

        injured_ids = [r.player_id for r in results]
        assert hurt_id not in injured_ids
        assert len(injured_ids) == len(players) - 1
        assert all(r.weeks_out == r.injury.recovery_weeks for r in results)


class TestInjuryClock:
    """Weekly recovery."""

    def test_countdown(self, player):
        hurt = apply_injury(player, InjuryResult(player.id, 3, make_injury(player.id, 3)))

        after = advance_injury_clock(hurt)

        assert after.injured
        assert after.injury_weeks_remaining == 2
        assert after.current_injury.weeks_remaining == 2
        assert hurt.injury_weeks_remaining == 3

    def test_recovery_opens_reinjury_window(self, player):
        hurt = apply_injury(player, InjuryResult(player.id, 1, make_injury(player.id, 1)))

        healed = advance_injury_clock(hurt)

        assert not healed.injured
        assert healed.injury_weeks_remaining == 0
        assert healed.current_injury is None
        assert healed.injury_history.reinjury_window_weeks_left == REINJURY_WINDOW_WEEKS

    def test_window_closes_over_time(self, player_factory):
        history = InjuryHistory(player_id="p", reinjury_window_weeks_left=2)
        p = player_factory("p", injury_history=history)

        after = advance_injury_clock(p)

        assert after.injury_history.reinjury_window_weeks_left == 1

    def test_fit_player_unchanged(self, player):
        assert advance_injury_clock(player) is player


class TestInjuryHistory:
    """History accumulation."""

    def test_apply_injury_records_history(self, player):
        result = InjuryResult(player.id, 4, make_injury(player.id, 4))

        hurt = apply_injury(player, result)

        assert hurt.injured
        assert hurt.injury_weeks_remaining == 4
        assert hurt.current_injury is result.injury
        assert hurt.injury_history.injuries == [result.injury]
        assert hurt.injury_history.total_weeks_missed == 4
        assert hurt.injury_history.proneness == pytest.approx(0.03)
        assert not player.injured

    def test_proneness_capped(self, player_factory):
        history = InjuryHistory(player_id="p", proneness=0.49)
        p = player_factory("p", injury_history=history)

        updated = add_to_injury_history(p, make_injury("p"))

        assert updated.proneness == MAX_HISTORY_PRONENESS

    def test_new_injury_closes_window(self, player_factory):
        history = InjuryHistory(player_id="p", reinjury_window_weeks_left=3)
        p = player_factory("p", injury_history=history)

        updated = add_to_injury_history(p, make_injury("p"))

        assert updated.reinjury_window_weeks_left == 0
