"""
Tests for shuffling and dealing.

Tests:
- Shuffle is a non-mutating permutation
- Dealing sizes, reshuffle-on-exhaustion, shortfall warning
- Sub-phase reset after a deal
"""

import random
from collections import Counter

from ..engine_core.shuffle import shuffle
from ..engine_core.dealing import deal_next_hand, make_card_instances
from ..engine_core.state import DiscardPhase
from .conftest import build_state


class TestShuffle:
    """Tests for the Fisher-Yates shuffle."""

    def test_returns_permutation(self):
        cards = [f"c{i}" for i in range(20)]
        result = shuffle(cards)
        assert sorted(result) == sorted(cards)

    def test_does_not_mutate_input(self):
        cards = ["a", "b", "c", "d"]
        shuffle(cards, random.Random(7))
        assert cards == ["a", "b", "c", "d"]

    def test_empty_and_single(self):
        assert shuffle([]) == []
        assert shuffle(["only"]) == ["only"]

    def test_preserves_duplicates(self):
        cards = ["x", "x", "y", "y", "y"]
        assert Counter(shuffle(cards)) == Counter(cards)

    def test_seeded_is_reproducible(self):
        cards = list(range(30))
        assert shuffle(cards, random.Random(42)) == shuffle(cards, random.Random(42))

    def test_orders_vary(self):
        """Unseeded shuffles of a 26-card deck are practically never equal."""
        cards = list(range(26))
        orders = {tuple(shuffle(cards)) for _ in range(10)}
        assert len(orders) >= 8


class TestCardInstances:
    def test_unique_ids(self):
        instances = make_card_instances(["A", "A", "B"])
        assert len({c.instance_id for c in instances}) == 3
        assert [c.card for c in instances] == ["A", "A", "B"]


class TestDealNextHand:
    """Tests for dealing from the draw pile."""

    def test_deals_hand_size_from_head(self):
        state = build_state(
            draw_pile=list("ABCDEFGHIJ"), hand_size=5, discard_count=2,
        )
        dealt = deal_next_hand(state)

        assert dealt.hand == list("ABCDE")
        assert dealt.draw_pile == list("FGHIJ")
        assert [c.card for c in dealt.hand_cards] == dealt.hand
        assert dealt.discard_phase == DiscardPhase(active=True, remaining_discards=2)
        assert dealt.warning is None

    def test_reshuffles_discard_when_exhausted(self):
        state = build_state(
            draw_pile=["A", "B"], discard_pile=["C", "D", "E"], hand_size=4,
        )
        dealt = deal_next_hand(state, random.Random(3))

        assert dealt.hand[:2] == ["A", "B"]
        assert len(dealt.hand) == 4
        assert len(dealt.draw_pile) == 1
        assert dealt.discard_pile == []
        assert Counter(dealt.hand + dealt.draw_pile) == Counter("ABCDE")

    def test_shortfall_deals_everything_with_warning(self):
        state = build_state(draw_pile=["A", "B"], discard_pile=["C"], hand_size=5)
        dealt = deal_next_hand(state)

        assert sorted(dealt.hand) == ["A", "B", "C"]
        assert dealt.draw_pile == []
        assert dealt.discard_pile == []
        assert "insufficient cards" in dealt.warning.lower()
        assert "3 of 5" in dealt.warning
        assert dealt.error is None

    def test_empty_deal_skips_discard_phase(self):
        state = build_state(hand_size=3, discard_count=2)
        dealt = deal_next_hand(state)

        assert dealt.hand == []
        assert dealt.discard_phase == DiscardPhase(active=False, remaining_discards=0)
        assert dealt.warning is not None

    def test_remaining_discards_capped_at_hand_length(self):
        state = build_state(draw_pile=["A", "B"], hand_size=2, discard_count=5)
        dealt = deal_next_hand(state)

        assert dealt.discard_phase.active
        assert dealt.discard_phase.remaining_discards == 2

    def test_zero_discard_count_skips_discard_phase(self):
        state = build_state(draw_pile=list("ABCDE"), hand_size=3, discard_count=0)
        dealt = deal_next_hand(state)

        assert not dealt.discard_phase.active
        assert dealt.discard_phase.remaining_discards == 0

    def test_clears_sub_phases_and_diagnostics(self):
        state = build_state(
            draw_pile=list("ABCDE"),
            hand_size=2,
            discard_count=0,
            selected_card_ids=frozenset({"old"}),
            play_order_sequence=["old"],
            play_order_locked=True,
            is_dealing=True,
            warning="stale",
            error="stale",
        )
        dealt = deal_next_hand(state)

        assert dealt.selected_card_ids == frozenset()
        assert dealt.play_order_sequence == []
        assert not dealt.play_order_locked
        assert not dealt.planning_phase
        assert not dealt.is_dealing
        assert dealt.warning is None
        assert dealt.error is None

    def test_does_not_mutate_input_state(self):
        state = build_state(draw_pile=list("ABCDE"), hand_size=3)
        deal_next_hand(state)
        assert state.draw_pile == list("ABCDE")
        assert state.hand == []
