"""Tests for activity quality rolls."""

import pytest

from scoutsim.core.enums import ActivityType, QualityTier, ScoutSkill
from scoutsim.core.models.scout import Scout
from scoutsim.core.rng import RNG
from scoutsim.scouting.activity_quality import (
    ACTIVITY_SKILL_MAP,
    TIER_OUTCOMES,
    TIER_WEIGHTS,
    quality_shift,
    roll_activity_quality,
    skill_for_activity,
    tier_weights,
)


class TestQualityShift:
    """Skill pushes quality up, fatigue pushes it down."""

    @pytest.mark.parametrize("skill,fatigue,expected", [
        (8, 0, 0.0),
        (20, 0, 0.5),
        (8, 100, -0.4),
        (1, 100, -7 / 24 - 0.4),
    ])
    def test_values(self, skill, fatigue, expected):
        assert quality_shift(skill, fatigue) == pytest.approx(expected)

    def test_skill_lookup(self):
        scout = Scout(id="s")
        scout.skills[ScoutSkill.TECHNICAL_EYE] = 17
        assert skill_for_activity(ActivityType.ATTEND_MATCH, scout) == 17

    def test_unmapped_activity_uses_default(self):
        assert ActivityType.REST not in ACTIVITY_SKILL_MAP
        assert skill_for_activity(ActivityType.REST, Scout(id="s")) == 10


class TestTierWeights:
    """Weighted tier table."""

    def test_neutral_shift_matches_base(self):
        weights = dict(tier_weights(0.0))
        assert weights == {tier: float(base) for tier, (base, _) in TIER_WEIGHTS.items()}

    def test_weights_floored(self):
        weights = dict(tier_weights(-10.0))
        assert weights[QualityTier.EXCEPTIONAL] == 1.0
        assert weights[QualityTier.EXCELLENT] == 1.0
        assert weights[QualityTier.POOR] == pytest.approx(210.0)

    def test_positive_shift_favours_top_tiers(self):
        weights = dict(tier_weights(0.5))
        assert weights[QualityTier.EXCEPTIONAL] == pytest.approx(10.0)
        assert weights[QualityTier.POOR] == 1.0

    def test_every_tier_has_outcome(self):
        assert set(TIER_OUTCOMES) == set(QualityTier)


class TestRollActivityQuality:
    """One tier draw plus an optional narrative draw."""

    def test_lowest_draw_is_poor(self, scripted_rng):
        rng = scripted_rng([0.0])

        result = roll_activity_quality(rng, ActivityType.ATTEND_MATCH, Scout(id="s"))

        assert result.tier == QualityTier.POOR
        assert result.multiplier == 0.4
        assert result.discovery_modifier == -1
        assert result.narrative.startswith("Rain")
        assert rng.calls == 2

    def test_highest_draw_is_exceptional(self, scripted_rng):
        result = roll_activity_quality(scripted_rng([0.999]), ActivityType.WATCH_VIDEO, Scout(id="s"))
        assert result.tier == QualityTier.EXCEPTIONAL
        assert result.multiplier == 2.0

    def test_fallback_narrative_skips_draw(self, scripted_rng):
        rng = scripted_rng([0.0])

        result = roll_activity_quality(rng, ActivityType.STUDY, Scout(id="s"))

        assert result.narrative == "Your study session was poor."
        assert rng.calls == 1

    def test_deterministic(self):
        scout = Scout(id="s")
        a = [roll_activity_quality(RNG(5), t, scout) for t in ActivityType]
        b = [roll_activity_quality(RNG(5), t, scout) for t in ActivityType]
        assert a == b
