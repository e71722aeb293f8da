"""Tests for cards, accumulation and suspensions."""

import pytest

from scoutsim.core.attributes import PlayerAttributes
from scoutsim.core.discipline import (
    RED_CARD_SUSPENSION,
    RED_REASON_WEIGHTS,
    YELLOW_REASON_WEIGHTS,
    MatchEvent,
    PlayerAvailability,
    clear_season_cards,
    decrement_suspensions,
    generate_card_events,
    generate_simulated_cards,
    get_player_availability,
    process_card_accumulation,
    simulated_card_probabilities,
    suspended_player_ids,
)
from scoutsim.core.enums import CardReason, CardType, Position
from scoutsim.core.models.discipline import CardEvent, DisciplinaryRecord


def yellow(player_id: str, reason: CardReason = CardReason.DISSENT) -> CardEvent:
    return CardEvent(CardType.YELLOW, player_id, "fx_1", 30, reason)


def red(player_id: str, reason: CardReason) -> CardEvent:
    return CardEvent(CardType.RED, player_id, "fx_1", 60, reason)


# =============================================================================
# Probabilities
# =============================================================================

class TestSimulatedCardProbabilities:
    """Per-player odds for simulated fixtures."""

    def test_baseline(self, player):
        yellow_prob, red_prob = simulated_card_probabilities(player)
        assert yellow_prob == pytest.approx(0.14)
        assert red_prob == pytest.approx(0.002)

    def test_defenders_booked_more(self, player_factory):
        defender = player_factory("cb", position=Position.CB)
        yellow_prob, _ = simulated_card_probabilities(defender)
        assert yellow_prob == pytest.approx(0.14 * 1.3)

    def test_temperamental(self, player_factory):
        hothead = player_factory("hot", personality_traits=["temperamental"])
        yellow_prob, red_prob = simulated_card_probabilities(hothead)
        assert yellow_prob == pytest.approx(0.14 * 1.8)
        assert red_prob == pytest.approx(0.004)

    def test_low_awareness_penalty(self, player_factory):
        careless = player_factory(
            "careless", attributes=PlayerAttributes.from_values(defensive_awareness=4)
        )
        yellow_prob, _ = simulated_card_probabilities(careless)
        assert yellow_prob == pytest.approx(0.14 * 1.2)

    def test_reason_tables_cover_every_red_reason(self):
        for reason, _ in RED_REASON_WEIGHTS:
            assert reason in RED_CARD_SUSPENSION
        for reason in CardReason:
            assert reason in RED_CARD_SUSPENSION


# =============================================================================
# Simulated cards
# =============================================================================

class TestGenerateSimulatedCards:
    """One roll per available player."""

    def test_one_roll_per_player_without_cards(self, scripted_rng, player_factory):
        rng = scripted_rng(default=0.9)
        home = [player_factory("h1"), player_factory("h2")]
        away = [player_factory("a1", club_id="club_b")]

        cards = generate_simulated_cards(rng, "fx_1", home, away, {})

        assert cards == []
        assert rng.calls == 3

    def test_red_card_roll(self, scripted_rng, player):
        # roll, minute, reason
        rng = scripted_rng([0.001, 0.5, 0.5])
        cards = generate_simulated_cards(rng, "fx_1", [player], [], {})

        assert len(cards) == 1
        card = cards[0]
        assert card.card_type == CardType.RED
        assert card.minute == 46
        assert card.reason == CardReason.RECKLESS_TACKLE
        assert card.fixture_id == "fx_1"

    def test_yellow_card_roll(self, scripted_rng, player):
        rng = scripted_rng([0.1, 0.0, 0.0])
        cards = generate_simulated_cards(rng, "fx_1", [player], [], {})

        assert [c.card_type for c in cards] == [CardType.YELLOW]
        assert cards[0].reason == YELLOW_REASON_WEIGHTS[0][0]

    def test_suspended_and_injured_players_skipped(self, scripted_rng, player_factory):
        rng = scripted_rng(default=0.0)
        banned = player_factory("banned")
        hurt = player_factory("hurt", injured=True, injury_weeks_remaining=2)
        records = {"banned": DisciplinaryRecord("banned", 1, suspension_weeks_remaining=1)}

        cards = generate_simulated_cards(rng, "fx_1", [banned], [hurt], records)

        assert cards == []
        assert rng.calls == 0

    def test_home_rolls_before_away(self, scripted_rng, player_factory):
        rng = scripted_rng([0.9, 0.1, 0.0, 0.0])
        home = [player_factory("h1")]
        away = [player_factory("a1", club_id="club_b")]

        cards = generate_simulated_cards(rng, "fx_1", home, away, {})

        assert [c.player_id for c in cards] == ["a1"]


# =============================================================================
# Event cards
# =============================================================================

class TestGenerateCardEvents:
    """Cards from tackle and foul events."""

    def test_second_yellow_becomes_red(self, scripted_rng, player):
        events = [
            MatchEvent("tackle", player.id, 10, quality=1),
            MatchEvent("foul", player.id, 50, quality=1),
            MatchEvent("tackle", player.id, 80, quality=1),
        ]
        rng = scripted_rng([0.2, 0.1, 0.2, 0.1])

        cards = generate_card_events(rng, events, {player.id: player}, "fx_1")

        assert [c.card_type for c in cards] == [CardType.YELLOW, CardType.RED]
        assert cards[1].reason == CardReason.RECKLESS_TACKLE
        assert cards[1].minute == 50
        # The player is off the pitch, so the third event draws nothing
        assert rng.calls == 4

    def test_other_events_ignored(self, scripted_rng, player):
        events = [MatchEvent("shot", player.id, 12, quality=1)]
        rng = scripted_rng(default=0.0)

        assert generate_card_events(rng, events, {player.id: player}, "fx_1") == []
        assert rng.calls == 0

    def test_unknown_player_skipped(self, scripted_rng):
        events = [MatchEvent("tackle", "ghost", 12, quality=1)]
        rng = scripted_rng(default=0.0)

        assert generate_card_events(rng, events, {}, "fx_1") == []

    def test_clean_high_quality_tackle(self, scripted_rng, player):
        events = [MatchEvent("tackle", player.id, 12, quality=9)]
        rng = scripted_rng([0.05])

        assert generate_card_events(rng, events, {player.id: player}, "fx_1") == []


# =============================================================================
# Accumulation
# =============================================================================

class TestCardAccumulation:
    """Season totals and bans."""

    def test_record_created_on_first_card(self):
        records, suspensions = process_card_accumulation([yellow("p1")], {}, season=3)

        record = records["p1"]
        assert record.season == 3
        assert record.yellow_cards == 1
        assert record.suspension_weeks_remaining == 0
        assert suspensions == []

    def test_fifth_yellow_bans_one_match(self):
        existing = {"p1": DisciplinaryRecord("p1", 1, yellow_cards=4)}

        records, suspensions = process_card_accumulation([yellow("p1")], existing, 1)

        assert records["p1"].yellow_cards == 5
        assert records["p1"].suspension_weeks_remaining == 1
        assert len(suspensions) == 1
        assert suspensions[0].weeks == 1
        assert "5 yellow" in suspensions[0].reason
        # Input untouched
        assert existing["p1"].yellow_cards == 4

    def test_tenth_yellow_bans_two_matches(self):
        existing = {"p1": DisciplinaryRecord("p1", 1, yellow_cards=9)}

        records, suspensions = process_card_accumulation([yellow("p1")], existing, 1)

        assert records["p1"].suspension_weeks_remaining == 2
        assert suspensions[0].weeks == 2

    def test_sixth_yellow_no_ban(self):
        existing = {"p1": DisciplinaryRecord("p1", 1, yellow_cards=5)}

        records, suspensions = process_card_accumulation([yellow("p1")], existing, 1)

        assert records["p1"].suspension_weeks_remaining == 0
        assert suspensions == []

    @pytest.mark.parametrize("reason,weeks", [
        (CardReason.VIOLENT_CONDUCT, 3),
        (CardReason.DISSENT, 1),
        (CardReason.PROFESSIONAL_FOUL, 1),
    ])
    def test_red_card_bans(self, reason, weeks):
        records, suspensions = process_card_accumulation([red("p1", reason)], {}, 1)

        assert records["p1"].red_cards == 1
        assert records["p1"].suspension_weeks_remaining == weeks
        assert suspensions[0].weeks == weeks
        assert reason.description in suspensions[0].reason

    def test_bans_stack(self):
        existing = {"p1": DisciplinaryRecord("p1", 1, suspension_weeks_remaining=2)}

        records, _ = process_card_accumulation(
            [red("p1", CardReason.VIOLENT_CONDUCT)], existing, 1
        )

        assert records["p1"].suspension_weeks_remaining == 5

    def test_history_recorded(self):
        cards = [yellow("p1"), yellow("p1")]
        records, _ = process_card_accumulation(cards, {}, 1)
        assert records["p1"].card_history == cards


# =============================================================================
# Suspensions and resets
# =============================================================================

class TestSuspensions:
    """Weekly countdown and the season reset."""

    def test_decrement(self):
        records = {
            "a": DisciplinaryRecord("a", 1, suspension_weeks_remaining=2),
            "b": DisciplinaryRecord("b", 1, yellow_cards=3),
        }

        updated = decrement_suspensions(records)

        assert updated["a"].suspension_weeks_remaining == 1
        assert updated["b"] is records["b"]
        assert records["a"].suspension_weeks_remaining == 2

    def test_decrement_never_negative(self):
        records = {"a": DisciplinaryRecord("a", 1, suspension_weeks_remaining=1)}
        once = decrement_suspensions(records)
        twice = decrement_suspensions(once)
        assert twice["a"].suspension_weeks_remaining == 0

    def test_clear_season_cards_keeps_active_bans(self):
        records = {
            "banned": DisciplinaryRecord(
                "banned", 1, yellow_cards=7, red_cards=1,
                suspension_weeks_remaining=2, card_history=[yellow("banned")],
            ),
            "clean": DisciplinaryRecord("clean", 1, yellow_cards=4),
        }

        cleared = clear_season_cards(records, new_season=2)

        assert set(cleared) == {"banned"}
        record = cleared["banned"]
        assert record.season == 2
        assert record.yellow_cards == 0
        assert record.red_cards == 0
        assert record.card_history == []
        assert record.suspension_weeks_remaining == 2

    def test_suspended_player_ids(self):
        records = {
            "a": DisciplinaryRecord("a", 1, suspension_weeks_remaining=1),
            "b": DisciplinaryRecord("b", 1),
        }
        assert suspended_player_ids(records) == {"a"}

    def test_availability_prefers_injury(self, player_factory):
        records = {"p": DisciplinaryRecord("p", 1, suspension_weeks_remaining=1)}
        hurt = player_factory("p", injured=True, injury_weeks_remaining=3)
        fit = player_factory("p")
        other = player_factory("q")

        assert get_player_availability(hurt, records) == PlayerAvailability.INJURED
        assert get_player_availability(fit, records) == PlayerAvailability.SUSPENDED
        assert get_player_availability(other, records) == PlayerAvailability.AVAILABLE
