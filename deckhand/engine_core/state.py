"""
Session State - The aggregate root of a card-hand session.

Design principles:
- Immutable-friendly: all mutations return new state
- Serializable: every non-transient field round-trips through storage
- Caller-owned: no hidden globals, the state value is threaded explicitly
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any
from copy import deepcopy
from enum import Enum

from ..deck_schema.defaults import DEFAULT_DECK, DEFAULT_HAND_SIZE, DEFAULT_DISCARD_COUNT


class SessionPhase(Enum):
    """Coarse phase label exposed to the UI."""
    IDLE = "idle"
    DISCARDING = "discarding"
    PLANNING = "planning"
    EXECUTING = "executing"


@dataclass(frozen=True)
class CardInstance:
    """
    A dealt occurrence of a card value.

    The instance_id is deal-scoped: a re-deal always produces new
    instances, even for a card of the same face value.
    """
    instance_id: str
    card: str


@dataclass(frozen=True)
class DiscardPhase:
    """Discard sub-phase state."""
    active: bool = False
    remaining_discards: int = 0


@dataclass
class SessionState:
    """
    Complete session state at a point in time.

    All state changes go through the reducer. The two transient fields
    (selected_card_ids, is_dealing) are never persisted.
    """
    # Piles
    draw_pile: list[str] = field(default_factory=list)
    discard_pile: list[str] = field(default_factory=list)
    hand: list[str] = field(default_factory=list)
    hand_cards: list[CardInstance] = field(default_factory=list)

    # Turn and parameters
    turn_number: int = 1
    hand_size: int = DEFAULT_HAND_SIZE
    discard_count: int = DEFAULT_DISCARD_COUNT

    # Diagnostics
    warning: str | None = None
    error: str | None = None

    # Transient
    selected_card_ids: frozenset[str] = frozenset()
    is_dealing: bool = False

    # Discard sub-phase
    discard_phase: DiscardPhase = field(default_factory=DiscardPhase)

    # Play order sub-phase
    play_order_sequence: list[str] = field(default_factory=list)
    play_order_locked: bool = False
    planning_phase: bool = False

    # Deck source
    deck: list[str] = field(default_factory=lambda: list(DEFAULT_DECK))
    active_preset_id: str | None = None

    # Unknown fields carried over from storage
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def total_cards(self) -> int:
        return len(self.draw_pile) + len(self.discard_pile) + len(self.hand)

    @property
    def instance_ids(self) -> list[str]:
        return [c.instance_id for c in self.hand_cards]

    @property
    def phase(self) -> SessionPhase:
        """Current coarse phase, derived from the sub-phase flags."""
        if self.discard_phase.active:
            return SessionPhase.DISCARDING
        if self.planning_phase:
            return SessionPhase.PLANNING
        if self.play_order_locked:
            return SessionPhase.EXECUTING
        return SessionPhase.IDLE

    @property
    def all_cards_ordered(self) -> bool:
        """True when every hand card has a position in the play order."""
        return len(self.hand_cards) > 0 and len(self.play_order_sequence) == len(self.hand_cards)

    def has_instance(self, instance_id: str) -> bool:
        return any(c.instance_id == instance_id for c in self.hand_cards)

    def position_of(self, instance_id: str) -> int | None:
        """1-based play order position of an instance, or None."""
        try:
            return self.play_order_sequence.index(instance_id) + 1
        except ValueError:
            return None

    def _copy_with(self, **kwargs) -> SessionState:
        """Create a copy with some fields replaced."""
        return SessionState(
            draw_pile=kwargs.get("draw_pile", self.draw_pile),
            discard_pile=kwargs.get("discard_pile", self.discard_pile),
            hand=kwargs.get("hand", self.hand),
            hand_cards=kwargs.get("hand_cards", self.hand_cards),
            turn_number=kwargs.get("turn_number", self.turn_number),
            hand_size=kwargs.get("hand_size", self.hand_size),
            discard_count=kwargs.get("discard_count", self.discard_count),
            warning=kwargs.get("warning", self.warning),
            error=kwargs.get("error", self.error),
            selected_card_ids=kwargs.get("selected_card_ids", self.selected_card_ids),
            is_dealing=kwargs.get("is_dealing", self.is_dealing),
            discard_phase=kwargs.get("discard_phase", self.discard_phase),
            play_order_sequence=kwargs.get("play_order_sequence", self.play_order_sequence),
            play_order_locked=kwargs.get("play_order_locked", self.play_order_locked),
            planning_phase=kwargs.get("planning_phase", self.planning_phase),
            deck=kwargs.get("deck", self.deck),
            active_preset_id=kwargs.get("active_preset_id", self.active_preset_id),
            extra=kwargs.get("extra", self.extra),
        )

    def clone(self) -> SessionState:
        """Deep copy the state."""
        return deepcopy(self)
