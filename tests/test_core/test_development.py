"""Tests for the player development engine."""

import pytest

from scoutsim.core.attributes import ALL_ATTRIBUTES, PlayerAttributes
from scoutsim.core.development import (
    PEAK_AGES,
    apply_attribute_deltas,
    attribute_ceiling,
    compute_breakthrough,
    compute_injury_setback,
    compute_player_development,
    development_chance,
    development_multiplier,
    is_development_eligible,
    process_player_development,
)
from scoutsim.core.enums import DevelopmentProfile, FormTrend
from scoutsim.core.models.club import Club
from scoutsim.core.rng import RNG


def finishing_first_script():
    """
    Draws that make the next development roll pick finishing and grow it.

    Development chance, then a Fisher-Yates pass that only swaps finishing
    (index 5) to the front, then one attribute considered, then growth.
    """
    finishing = ALL_ATTRIBUTES.index("finishing")
    shuffle = []
    for i in range(len(ALL_ATTRIBUTES) - 1, 0, -1):
        shuffle.append(0.0 if i == finishing else 0.99)
    return [0.0, *shuffle, 0.0, 0.0]


# =============================================================================
# Growth curve
# =============================================================================

class TestDevelopmentMultiplier:
    """Age curve by profile."""

    def test_every_profile_has_a_peak(self):
        assert set(PEAK_AGES) == set(DevelopmentProfile)

    def test_young_steady_grower(self, scripted_rng):
        rng = scripted_rng()
        value = development_multiplier(20, DevelopmentProfile.STEADY_GROWER, rng)
        assert value == pytest.approx(0.52)
        assert rng.calls == 0

    def test_early_bloomer_faster(self, scripted_rng):
        value = development_multiplier(20, DevelopmentProfile.EARLY_BLOOMER, scripted_rng())
        assert value == pytest.approx((1 - 2 * 0.08) * 1.3)

    def test_late_bloomer_declines_slowly(self, scripted_rng):
        value = development_multiplier(30, DevelopmentProfile.LATE_BLOOMER, scripted_rng())
        assert value == pytest.approx(-0.02 * 0.8)

    def test_past_peak_declines(self, scripted_rng):
        value = development_multiplier(31, DevelopmentProfile.STEADY_GROWER, scripted_rng())
        assert value == pytest.approx(-0.10)

    def test_volatile_draws(self, scripted_rng):
        rng = scripted_rng()
        development_multiplier(22, DevelopmentProfile.VOLATILE, rng)
        assert rng.calls == 2


class TestDevelopmentChance:
    """Weekly odds of any development."""

    def test_baseline(self, player):
        assert development_chance(player, None) == pytest.approx(0.15)

    def test_good_form(self, player_factory):
        p = player_factory("p", form=3.0)
        assert development_chance(p, None) == pytest.approx(0.15 + 3 * 0.017)

    def test_coaching_bonus(self, player):
        club = Club(id="club_a", reputation=80)
        assert development_chance(player, club) == pytest.approx(0.15 * 1.15)

    def test_rising_momentum(self, player_factory):
        p = player_factory("p", form_momentum=2, form_trend=FormTrend.RISING)
        assert development_chance(p, None) == pytest.approx(0.15 + 0.06)

    def test_falling_momentum_floored(self, player_factory):
        p = player_factory("p", form=-3.0, form_momentum=10, form_trend=FormTrend.FALLING)
        assert development_chance(p, None) == pytest.approx(0.01)


class TestEligibility:
    """Who develops."""

    def test_ceiling_from_potential(self, player_factory):
        assert attribute_ceiling(player_factory("p", potential_ability=150)) == 15
        assert attribute_ceiling(player_factory("p", potential_ability=200)) == 20

    def test_ceiling_rounds_halves_up(self, player_factory):
        assert attribute_ceiling(player_factory("p", potential_ability=145)) == 15
        assert attribute_ceiling(player_factory("p", potential_ability=125)) == 13

    def test_too_old(self, player_factory):
        assert not is_development_eligible(player_factory("p", age=36))
        assert is_development_eligible(player_factory("p", age=35))

    def test_long_injury(self, player_factory):
        assert not is_development_eligible(player_factory("p", injury_weeks_remaining=7))
        assert is_development_eligible(player_factory("p", injury_weeks_remaining=6))


# =============================================================================
# Weekly development
# =============================================================================

class TestComputePlayerDevelopment:
    """Routine weekly drift."""

    def test_forced_growth(self, scripted_rng, striker):
        rng = scripted_rng(finishing_first_script())

        result = compute_player_development(striker, None, rng)

        assert result.changes == {"finishing": 1}
        assert result.ability_change == 1

        developed = apply_attribute_deltas(striker, result.changes, result.ability_change)
        assert developed.attributes["finishing"] == 15
        assert developed.current_ability == 141
        assert striker.attributes["finishing"] == 14
        assert striker.current_ability == 140

    def test_failed_chance_returns_empty(self, scripted_rng, striker):
        rng = scripted_rng([0.9])
        result = compute_player_development(striker, None, rng)

        assert not result.has_changes
        assert rng.calls == 1

    def test_no_growth_at_ceiling(self, scripted_rng, player_factory):
        capped = player_factory(
            "capped",
            age=20,
            potential_ability=140,
            attributes=PlayerAttributes.from_values(finishing=14),
        )
        result = compute_player_development(capped, None, scripted_rng(finishing_first_script()))
        assert result.changes == {}
        assert result.ability_change == 0

    def test_veteran_declines(self, scripted_rng, player_factory):
        veteran = player_factory("vet", age=34)
        result = compute_player_development(veteran, None, scripted_rng(finishing_first_script()))
        assert result.changes == {"finishing": -1}
        assert result.ability_change == -1

    def test_world_pass_skips_ineligible(self, scripted_rng, state_factory, player_factory):
        state = state_factory()
        state.players = {"old": player_factory("old", age=40)}

        rng = scripted_rng(default=0.0)
        development, breakthroughs = process_player_development(state, rng)

        assert development == []
        assert breakthroughs == []
        assert rng.calls == 0


# =============================================================================
# Breakthroughs and setbacks
# =============================================================================

class TestBreakthrough:
    """Wonder weeks."""

    def test_age_gate_draws_nothing(self, scripted_rng, player_factory):
        rng = scripted_rng(default=0.0)
        assert compute_breakthrough(player_factory("p", age=30, form=2.0), rng) is None
        assert rng.calls == 0

    def test_form_gate_draws_nothing(self, scripted_rng, player_factory):
        rng = scripted_rng(default=0.0)
        assert compute_breakthrough(player_factory("p", age=19, form=0.5), rng) is None
        assert rng.calls == 0

    def test_forced_breakthrough_ignores_ceiling(self, scripted_rng, player_factory):
        prospect = player_factory(
            "p",
            age=19,
            form=1.0,
            potential_ability=40,
            attributes=PlayerAttributes.from_values(stamina=19),
        )
        rng = scripted_rng(default=0.0)

        result = compute_breakthrough(prospect, rng)

        # An all-zero shuffle rotates the attribute list by one
        assert result.improved_attributes == ["stamina", "agility"]
        assert result.changes == {"stamina": 2, "agility": 2}
        assert result.ability_change == 3

        boosted = apply_attribute_deltas(prospect, result.changes, result.ability_change)
        assert boosted.attributes["stamina"] == 20
        assert boosted.attributes["agility"] == 12

    def test_breakthroughs_are_rare(self, player_factory):
        prospect = player_factory("p", age=19, form=2.0)
        rng = RNG("breakthroughs")
        hits = sum(1 for _ in range(2000) if compute_breakthrough(prospect, rng))
        assert hits < 100


class TestInjurySetback:
    """Permanent physical regression."""

    def test_short_injury_no_setback(self, scripted_rng, player):
        rng = scripted_rng(default=0.0)
        assert compute_injury_setback(player, 4, rng) is None
        assert rng.calls == 0

    def test_serious_injury(self, scripted_rng, player):
        result = compute_injury_setback(player, 8, scripted_rng(default=0.0))
        assert result.changes == {"stamina": -1}

    def test_attribute_at_floor_spared(self, scripted_rng, player_factory):
        frail = player_factory("p", attributes=PlayerAttributes.from_values(stamina=1))
        assert compute_injury_setback(frail, 8, scripted_rng(default=0.0)) is None


class TestApplyAttributeDeltas:
    """Commit helper clamps."""

    def test_clamps_attributes_and_ability(self, player_factory):
        p = player_factory(
            "p",
            current_ability=199,
            attributes=PlayerAttributes.from_values(pace=20, stamina=1),
        )

        updated = apply_attribute_deltas(p, {"pace": 3, "stamina": -2}, ability_change=5)

        assert updated.attributes["pace"] == 20
        assert updated.attributes["stamina"] == 1
        assert updated.current_ability == 200

    def test_ability_floor(self, player_factory):
        p = player_factory("p", current_ability=1)
        assert apply_attribute_deltas(p, {}, ability_change=-3).current_ability == 1
