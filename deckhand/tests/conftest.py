"""
Pytest fixtures for Deckhand tests.
"""

import random

import pytest

from ..engine_core.state import SessionState, CardInstance, DiscardPhase
from ..engine_core.action import Action
from ..engine_core.reducer import Reducer
from ..persistence import MemoryStore, PersistenceGateway


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible shuffles."""
    return random.Random(1234)


@pytest.fixture
def reducer(rng) -> Reducer:
    return Reducer(rng=rng)


@pytest.fixture
def initial_state(reducer) -> SessionState:
    """A freshly initialized session (default deck and settings)."""
    return reducer.apply(None, Action.init()).new_state


@pytest.fixture
def gateway() -> PersistenceGateway:
    return PersistenceGateway(MemoryStore())


def build_state(
    hand: list[str] | None = None,
    draw_pile: list[str] | None = None,
    discard_pile: list[str] | None = None,
    **kwargs,
) -> SessionState:
    """
    Build a state whose hand cards get predictable ids: card-1, card-2, ...
    """
    hand = hand or []
    hand_cards = [
        CardInstance(instance_id=f"card-{i + 1}", card=card)
        for i, card in enumerate(hand)
    ]
    deck = kwargs.pop("deck", None) or (list(draw_pile or []) + list(discard_pile or []) + hand)
    return SessionState(
        draw_pile=list(draw_pile or []),
        discard_pile=list(discard_pile or []),
        hand=list(hand),
        hand_cards=hand_cards,
        deck=deck,
        **kwargs,
    )


@pytest.fixture
def discarding_state() -> SessionState:
    """Five cards in hand, two discards required."""
    return build_state(
        hand=["A", "B", "C", "D", "E"],
        draw_pile=["F", "G", "H", "I", "J"],
        hand_size=5,
        discard_count=2,
        discard_phase=DiscardPhase(active=True, remaining_discards=2),
    )


@pytest.fixture
def planning_state() -> SessionState:
    """Three cards in hand, planning the play order."""
    return build_state(
        hand=["A", "B", "C"],
        draw_pile=["D", "E", "F", "G"],
        hand_size=3,
        discard_count=0,
        planning_phase=True,
    )
