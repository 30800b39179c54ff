"""
Action System - Intents, payloads, and results.

Actions represent:
1. Session lifecycle intents (init, reset, deal, end turn)
2. Discard sub-phase intents (toggle selection, confirm)
3. Play-order intents (select, deselect, lock, clear)
4. Operator intents (parameter change, deck override, preset)

All state changes flow through actions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ActionType(Enum):
    """Types of intents the reducer consumes."""
    # Lifecycle
    INIT = "INIT"
    RESET = "RESET"
    DEAL_NEXT_HAND = "DEAL_NEXT_HAND"
    END_TURN = "END_TURN"

    # Discard sub-phase
    TOGGLE_CARD_SELECTION = "TOGGLE_CARD_SELECTION"
    CONFIRM_DISCARD = "CONFIRM_DISCARD"

    # Play order sub-phase
    SELECT_FOR_PLAY_ORDER = "SELECT_FOR_PLAY_ORDER"
    DESELECT_FROM_PLAY_ORDER = "DESELECT_FROM_PLAY_ORDER"
    LOCK_PLAY_ORDER = "LOCK_PLAY_ORDER"
    CLEAR_PLAY_ORDER = "CLEAR_PLAY_ORDER"

    # Operator
    CHANGE_PARAMETERS = "CHANGE_PARAMETERS"
    APPLY_DECK_OVERRIDE = "APPLY_DECK_OVERRIDE"
    APPLY_PRESET_DECK = "APPLY_PRESET_DECK"


@dataclass
class ActionPayload:
    """
    Payload for an action - contains the intent parameters.

    Different action types have different payload shapes.
    This is a generic container; validation happens in the reducer.
    """
    instance_id: str | None = None

    # For parameter changes
    hand_size: Any = None
    discard_count: Any = None
    immediate_reset: bool = False

    # For deck sources
    raw_text: str | None = None
    preset_id: str | None = None


@dataclass
class Action:
    """
    A complete intent to be applied to the session state.
    """
    action_type: ActionType
    payload: ActionPayload = field(default_factory=ActionPayload)

    @classmethod
    def init(cls) -> Action:
        return cls(action_type=ActionType.INIT)

    @classmethod
    def reset(cls) -> Action:
        return cls(action_type=ActionType.RESET)

    @classmethod
    def deal_next_hand(cls) -> Action:
        return cls(action_type=ActionType.DEAL_NEXT_HAND)

    @classmethod
    def end_turn(cls) -> Action:
        return cls(action_type=ActionType.END_TURN)

    @classmethod
    def toggle_selection(cls, instance_id: str) -> Action:
        """Factory for discard selection toggle."""
        return cls(
            action_type=ActionType.TOGGLE_CARD_SELECTION,
            payload=ActionPayload(instance_id=instance_id),
        )

    @classmethod
    def confirm_discard(cls) -> Action:
        return cls(action_type=ActionType.CONFIRM_DISCARD)

    @classmethod
    def select_for_play_order(cls, instance_id: str) -> Action:
        """Factory for appending a card to the play order."""
        return cls(
            action_type=ActionType.SELECT_FOR_PLAY_ORDER,
            payload=ActionPayload(instance_id=instance_id),
        )

    @classmethod
    def deselect_from_play_order(cls, instance_id: str) -> Action:
        """Factory for removing a card from the play order."""
        return cls(
            action_type=ActionType.DESELECT_FROM_PLAY_ORDER,
            payload=ActionPayload(instance_id=instance_id),
        )

    @classmethod
    def lock_play_order(cls) -> Action:
        return cls(action_type=ActionType.LOCK_PLAY_ORDER)

    @classmethod
    def clear_play_order(cls) -> Action:
        return cls(action_type=ActionType.CLEAR_PLAY_ORDER)

    @classmethod
    def change_parameters(
        cls, hand_size: Any, discard_count: Any, immediate_reset: bool = False
    ) -> Action:
        """Factory for a parameter change."""
        return cls(
            action_type=ActionType.CHANGE_PARAMETERS,
            payload=ActionPayload(
                hand_size=hand_size,
                discard_count=discard_count,
                immediate_reset=immediate_reset,
            ),
        )

    @classmethod
    def apply_deck_override(cls, raw_text: str) -> Action:
        """Factory for a JSON deck override."""
        return cls(
            action_type=ActionType.APPLY_DECK_OVERRIDE,
            payload=ActionPayload(raw_text=raw_text),
        )

    @classmethod
    def apply_preset_deck(cls, preset_id: str) -> Action:
        """Factory for switching to a catalog preset."""
        return cls(
            action_type=ActionType.APPLY_PRESET_DECK,
            payload=ActionPayload(preset_id=preset_id),
        )


@dataclass
class ActionResult:
    """
    Result of applying an action.

    new_state is always set: a rejected intent carries the unchanged
    input state, so callers can thread it without branching.
    """
    success: bool
    new_state: Any = None  # SessionState
    error: str | None = None
    error_code: str | None = None

    # Human-readable changes, for logging
    state_changes: list[str] = field(default_factory=list)

    @classmethod
    def rejected(cls, state: Any, reason: str, error_code: str = "REJECTED") -> ActionResult:
        """Create a result for an intent whose preconditions were not met."""
        return cls(success=False, new_state=state, error=reason, error_code=error_code)

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        changes: list[str] | None = None,
    ) -> ActionResult:
        """Create a success result with new state."""
        return cls(
            success=True,
            new_state=state,
            state_changes=changes or [],
        )
