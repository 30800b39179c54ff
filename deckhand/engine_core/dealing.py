"""
Dealing - Moves cards from the draw pile into a fresh hand.

Handles:
- Card instance creation (deal-scoped identity)
- Reshuffle-on-exhaustion of the discard pile
- Shortfall warning when draw + discard cannot fill a hand
- Resetting the discard and play-order sub-phases
"""

from __future__ import annotations
import logging
import random
import uuid
from typing import Iterable

from .shuffle import shuffle
from .state import CardInstance, DiscardPhase, SessionState

logger = logging.getLogger(__name__)


def make_card_instances(cards: Iterable[str]) -> list[CardInstance]:
    """Wrap card values in fresh, unique instances."""
    return [CardInstance(instance_id=str(uuid.uuid4()), card=card) for card in cards]


def shortfall_warning(dealt: int, requested: int) -> str:
    return f"Insufficient cards: dealt {dealt} of {requested} requested cards"


def deal_next_hand(
    state: SessionState,
    rng: random.Random | None = None,
    preserve_warning: bool = False,
) -> SessionState:
    """
    Deal up to hand_size cards from the draw pile.

    The current hand is not part of the available pool; callers move it
    to the discard pile first when it should be recycled.
    """
    draw_pile = list(state.draw_pile)
    discard_pile = list(state.discard_pile)
    hand: list[str] = []

    for _ in range(state.hand_size):
        if not draw_pile and discard_pile:
            draw_pile = shuffle(discard_pile, rng)
            discard_pile = []
            logger.debug("Draw pile exhausted, reshuffled %d discards", len(draw_pile))
        if not draw_pile:
            break
        hand.append(draw_pile.pop(0))

    if len(hand) < state.hand_size:
        warning = shortfall_warning(len(hand), state.hand_size)
        logger.info(warning)
    else:
        warning = state.warning if preserve_warning else None

    hand_cards = make_card_instances(hand)
    remaining = min(state.discard_count, len(hand_cards))

    return state._copy_with(
        draw_pile=draw_pile,
        discard_pile=discard_pile,
        hand=hand,
        hand_cards=hand_cards,
        selected_card_ids=frozenset(),
        discard_phase=DiscardPhase(
            active=state.discard_count > 0 and len(hand_cards) > 0,
            remaining_discards=max(remaining, 0),
        ),
        play_order_sequence=[],
        play_order_locked=False,
        planning_phase=False,
        is_dealing=False,
        warning=warning,
        error=None,
    )
