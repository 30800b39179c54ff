"""
Reducer - Applies intents to session state.

The reducer is the single point of state mutation.
All state changes must go through apply_action().

Design principles:
- Pure function: (state, action) -> new_state
- Validates before applying; invalid intents return the state unchanged
- Returns ActionResult with success/failure, never raises
- Operator input errors are surfaced through state.error, piles untouched
"""

from __future__ import annotations
import logging
import math
import random
from dataclasses import dataclass
from typing import Any

from .state import SessionState, DiscardPhase
from .action import Action, ActionType, ActionResult
from .dealing import deal_next_hand
from .shuffle import shuffle
from ..deck_schema.defaults import (
    DEFAULT_DECK,
    DEFAULT_HAND_SIZE,
    DEFAULT_DISCARD_COUNT,
    MIN_HAND_SIZE,
    MAX_HAND_SIZE,
    MIN_DISCARD_COUNT,
    MAX_DISCARD_COUNT,
)
from ..deck_schema.validation import parse_deck_override, validate_preset_deck
from ..deck_schema.presets import PRESET_DECKS, PresetDeck

logger = logging.getLogger(__name__)

EMPTY_DECK_WARNING = "Empty deck provided, reverted to default deck"


def _as_int(value: Any) -> int | None:
    """Floor a finite number to int; None for anything else (bools included)."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value):
        return math.floor(value)
    return None


def _exact_int(value: Any) -> int | None:
    """The value as int only if it is already integral."""
    as_int = _as_int(value)
    return as_int if as_int is not None and as_int == value else None


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def _valid_deck(deck: Any) -> bool:
    return (
        isinstance(deck, list)
        and len(deck) > 0
        and all(isinstance(c, str) and c.strip() for c in deck)
    )


def resolve_reset_settings(hand_size: Any, discard_count: Any) -> tuple[int, int]:
    """
    Re-validate settings carried into a reset.

    Each value falls back to its default independently; discard_count
    must not exceed the (validated) hand size.
    """
    hs = _exact_int(hand_size)
    if hs is None or not MIN_HAND_SIZE <= hs <= MAX_HAND_SIZE:
        hs = DEFAULT_HAND_SIZE

    dc = _exact_int(discard_count)
    if dc is None or not MIN_DISCARD_COUNT <= dc <= hs:
        dc = DEFAULT_DISCARD_COUNT

    return hs, dc


@dataclass
class Reducer:
    """
    Reducer applies intents to session state.

    Stateless - all state is in SessionState.
    rng makes shuffles reproducible; presets is the catalog used by
    APPLY_PRESET_DECK.
    """
    rng: random.Random | None = None
    presets: tuple[PresetDeck, ...] = PRESET_DECKS

    def apply(self, state: SessionState | None, action: Action) -> ActionResult:
        """
        Apply an action to the session state.

        Returns ActionResult whose new_state is always usable.
        """
        handler = self._get_handler(action.action_type)
        if not handler:
            return ActionResult.rejected(
                state,
                f"No handler for action type: {action.action_type}",
                error_code="NO_HANDLER",
            )

        try:
            validation_error = self._validate_action(state, action)
            if validation_error:
                logger.debug("Rejected %s: %s", action.action_type.value, validation_error)
                return ActionResult.rejected(state, validation_error)
            result = handler(state, action)
        except Exception as e:
            logger.exception("Handler for %s failed", action.action_type.value)
            return ActionResult.rejected(state, str(e), error_code="HANDLER_ERROR")

        if result.state_changes:
            logger.debug("%s: %s", action.action_type.value, "; ".join(result.state_changes))
        return result

    def _validate_action(self, state: SessionState | None, action: Action) -> str | None:
        """
        Check the intent's preconditions against the current state.

        Returns a rejection reason, or None if the intent may proceed.
        """
        action_type = action.action_type
        if action_type == ActionType.INIT:
            return None

        if state is None:
            return "No session state - only INIT allowed"

        if action_type in {ActionType.DEAL_NEXT_HAND, ActionType.END_TURN} and state.is_dealing:
            return "A deal is already in progress"

        if action_type == ActionType.END_TURN:
            if state.discard_phase.active:
                return "Discard phase is still active"
            if state.planning_phase:
                return "Play order is still being planned"
            if state.play_order_sequence and not state.play_order_locked:
                return "Play order is not locked"

        if action_type in {ActionType.TOGGLE_CARD_SELECTION, ActionType.CONFIRM_DISCARD}:
            if not state.discard_phase.active:
                return "Discard phase is not active"

        if action_type == ActionType.TOGGLE_CARD_SELECTION:
            instance_id = action.payload.instance_id
            if not state.has_instance(instance_id):
                return f"Card {instance_id} not in hand"
            if (
                instance_id not in state.selected_card_ids
                and len(state.selected_card_ids) >= state.discard_phase.remaining_discards
            ):
                return "Discard selection limit reached"

        play_order_actions = {
            ActionType.SELECT_FOR_PLAY_ORDER,
            ActionType.DESELECT_FROM_PLAY_ORDER,
            ActionType.CLEAR_PLAY_ORDER,
            ActionType.LOCK_PLAY_ORDER,
        }
        if action_type in play_order_actions:
            if state.play_order_locked:
                return "Play order is locked"
            if not state.planning_phase:
                return "Not in planning phase"

        if action_type == ActionType.SELECT_FOR_PLAY_ORDER:
            instance_id = action.payload.instance_id
            if not state.has_instance(instance_id):
                return f"Card {instance_id} not in hand"
            if instance_id in state.play_order_sequence:
                return f"Card {instance_id} already ordered"

        if action_type == ActionType.DESELECT_FROM_PLAY_ORDER:
            if action.payload.instance_id not in state.play_order_sequence:
                return f"Card {action.payload.instance_id} is not in the play order"

        if action_type == ActionType.LOCK_PLAY_ORDER:
            if len(state.play_order_sequence) != len(state.hand_cards):
                return "Every card must be ordered before locking"

        if action_type == ActionType.CHANGE_PARAMETERS:
            if _as_int(action.payload.hand_size) is None:
                return f"Invalid hand size: {action.payload.hand_size!r}"
            if _as_int(action.payload.discard_count) is None:
                return f"Invalid discard count: {action.payload.discard_count!r}"

        return None

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.INIT: self._handle_init,
            ActionType.RESET: self._handle_reset,
            ActionType.DEAL_NEXT_HAND: self._handle_deal_next_hand,
            ActionType.END_TURN: self._handle_end_turn,
            ActionType.TOGGLE_CARD_SELECTION: self._handle_toggle_selection,
            ActionType.CONFIRM_DISCARD: self._handle_confirm_discard,
            ActionType.SELECT_FOR_PLAY_ORDER: self._handle_select_for_play_order,
            ActionType.DESELECT_FROM_PLAY_ORDER: self._handle_deselect_from_play_order,
            ActionType.LOCK_PLAY_ORDER: self._handle_lock_play_order,
            ActionType.CLEAR_PLAY_ORDER: self._handle_clear_play_order,
            ActionType.CHANGE_PARAMETERS: self._handle_change_parameters,
            ActionType.APPLY_DECK_OVERRIDE: self._handle_apply_deck_override,
            ActionType.APPLY_PRESET_DECK: self._handle_apply_preset_deck,
        }
        return handlers.get(action_type)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def _fresh_session(
        self,
        hand_size: int,
        discard_count: int,
        deck: list[str],
        **kwargs,
    ) -> SessionState:
        """Shuffle the deck into a brand new session and deal turn 1."""
        state = SessionState(
            draw_pile=shuffle(deck, self.rng),
            deck=list(deck),
            hand_size=hand_size,
            discard_count=discard_count,
            **kwargs,
        )
        return deal_next_hand(state, self.rng)

    def _handle_init(self, state: SessionState | None, action: Action) -> ActionResult:
        """Start a session from the default deck and settings."""
        new_state = self._fresh_session(
            DEFAULT_HAND_SIZE, DEFAULT_DISCARD_COUNT, list(DEFAULT_DECK)
        )
        return ActionResult.success_with_state(
            new_state,
            changes=[f"Session initialized, dealt {len(new_state.hand)} cards"],
        )

    def _handle_reset(self, state: SessionState, action: Action) -> ActionResult:
        """Restart the session, keeping valid settings and the current deck."""
        hand_size, discard_count = resolve_reset_settings(state.hand_size, state.discard_count)
        deck = state.deck if _valid_deck(state.deck) else list(DEFAULT_DECK)
        preset_id = state.active_preset_id if deck is state.deck else None

        new_state = self._fresh_session(
            hand_size,
            discard_count,
            deck,
            active_preset_id=preset_id,
            extra=dict(state.extra),
        )
        return ActionResult.success_with_state(
            new_state,
            changes=[f"Session reset (hand size {hand_size}, discard count {discard_count})"],
        )

    def _handle_deal_next_hand(self, state: SessionState, action: Action) -> ActionResult:
        """Deal a new hand; any cards still held go to the discard pile first."""
        recycled = state._copy_with(
            discard_pile=state.discard_pile + state.hand,
            hand=[],
            hand_cards=[],
        )
        new_state = deal_next_hand(recycled, self.rng)
        return ActionResult.success_with_state(
            new_state,
            changes=[f"Dealt {len(new_state.hand)} cards"],
        )

    def _handle_end_turn(self, state: SessionState, action: Action) -> ActionResult:
        """Discard the hand, advance the turn, deal the next hand."""
        ended = state._copy_with(
            discard_pile=state.discard_pile + state.hand,
            hand=[],
            hand_cards=[],
            turn_number=state.turn_number + 1,
        )
        new_state = deal_next_hand(ended, self.rng)
        return ActionResult.success_with_state(
            new_state,
            changes=[f"Turn {state.turn_number} ended, dealt {len(new_state.hand)} cards"],
        )

    # =========================================================================
    # Discard sub-phase
    # =========================================================================

    def _handle_toggle_selection(self, state: SessionState, action: Action) -> ActionResult:
        instance_id = action.payload.instance_id
        if instance_id in state.selected_card_ids:
            selected = state.selected_card_ids - {instance_id}
        else:
            selected = state.selected_card_ids | {instance_id}
        return ActionResult.success_with_state(state._copy_with(selected_card_ids=selected))

    def _handle_confirm_discard(self, state: SessionState, action: Action) -> ActionResult:
        """
        Move the selected cards to the discard pile.

        Newly discarded cards are appended in hand order. A non-empty
        remaining hand enters the planning phase.
        """
        selected = state.selected_card_ids
        kept = [c for c in state.hand_cards if c.instance_id not in selected]
        discarded = [c.card for c in state.hand_cards if c.instance_id in selected]

        new_state = state._copy_with(
            hand=[c.card for c in kept],
            hand_cards=kept,
            discard_pile=state.discard_pile + discarded,
            selected_card_ids=frozenset(),
            discard_phase=DiscardPhase(active=False, remaining_discards=0),
            planning_phase=len(kept) > 0,
            play_order_sequence=[],
            play_order_locked=False,
        )
        return ActionResult.success_with_state(
            new_state,
            changes=[f"Discarded {len(discarded)} cards, {len(kept)} remain"],
        )

    # =========================================================================
    # Play order sub-phase
    # =========================================================================

    def _handle_select_for_play_order(self, state: SessionState, action: Action) -> ActionResult:
        sequence = state.play_order_sequence + [action.payload.instance_id]
        return ActionResult.success_with_state(state._copy_with(play_order_sequence=sequence))

    def _handle_deselect_from_play_order(self, state: SessionState, action: Action) -> ActionResult:
        # Positions are index + 1, so removal renumbers the rest
        sequence = [i for i in state.play_order_sequence if i != action.payload.instance_id]
        return ActionResult.success_with_state(state._copy_with(play_order_sequence=sequence))

    def _handle_clear_play_order(self, state: SessionState, action: Action) -> ActionResult:
        return ActionResult.success_with_state(state._copy_with(play_order_sequence=[]))

    def _handle_lock_play_order(self, state: SessionState, action: Action) -> ActionResult:
        new_state = state._copy_with(play_order_locked=True, planning_phase=False)
        return ActionResult.success_with_state(new_state, changes=["Play order locked"])

    # =========================================================================
    # Operator intents
    # =========================================================================

    def _handle_change_parameters(self, state: SessionState, action: Action) -> ActionResult:
        """
        Store clamped parameters, optionally re-dealing immediately.

        discard_count is only capped against the hand at deal time.
        """
        payload = action.payload
        hand_size = _clamp(_as_int(payload.hand_size), MIN_HAND_SIZE, MAX_HAND_SIZE)
        discard_count = _clamp(
            _as_int(payload.discard_count), MIN_DISCARD_COUNT, MAX_DISCARD_COUNT
        )

        if not payload.immediate_reset:
            new_state = state._copy_with(hand_size=hand_size, discard_count=discard_count)
            return ActionResult.success_with_state(
                new_state,
                changes=[f"Parameters set for next deal: {hand_size}/{discard_count}"],
            )

        all_cards = state.draw_pile + state.discard_pile + state.hand
        reshuffled = state._copy_with(
            draw_pile=shuffle(all_cards, self.rng),
            discard_pile=[],
            hand=[],
            hand_cards=[],
            hand_size=hand_size,
            discard_count=discard_count,
            warning=None,
            error=None,
        )
        new_state = deal_next_hand(reshuffled, self.rng)
        return ActionResult.success_with_state(
            new_state,
            changes=[f"Parameters applied with re-deal: {hand_size}/{discard_count}"],
        )

    def _replace_deck(
        self,
        state: SessionState,
        cards: list[str],
        warning: str | None = None,
        preset_id: str | None = None,
    ) -> SessionState:
        """Make cards the canonical deck, shuffle it, and deal from it."""
        replaced = state._copy_with(
            deck=list(cards),
            draw_pile=shuffle(cards, self.rng),
            discard_pile=[],
            hand=[],
            hand_cards=[],
            warning=warning,
            error=None,
            active_preset_id=preset_id,
        )
        return deal_next_hand(replaced, self.rng, preserve_warning=warning is not None)

    def _handle_apply_deck_override(self, state: SessionState, action: Action) -> ActionResult:
        """Replace the deck from raw JSON; errors leave the piles untouched."""
        parsed = parse_deck_override(action.payload.raw_text)
        if not parsed.ok:
            logger.info("Deck override rejected: %s", parsed.error)
            return ActionResult(
                success=False,
                new_state=state._copy_with(error=parsed.error),
                error=parsed.error,
                error_code="INVALID_DECK",
            )

        if not parsed.cards:
            logger.info(EMPTY_DECK_WARNING)
            new_state = self._replace_deck(state, list(DEFAULT_DECK), warning=EMPTY_DECK_WARNING)
            return ActionResult.success_with_state(new_state, changes=[EMPTY_DECK_WARNING])

        new_state = self._replace_deck(state, parsed.cards)
        return ActionResult.success_with_state(
            new_state,
            changes=[f"Deck replaced with {len(parsed.cards)} cards"],
        )

    def _handle_apply_preset_deck(self, state: SessionState, action: Action) -> ActionResult:
        """Use a catalog preset as the deck, after validating it."""
        preset_id = action.payload.preset_id
        preset = next((p for p in self.presets if p.id == preset_id), None)
        if preset is None:
            message = f"Unknown preset deck: {preset_id}"
        else:
            result = validate_preset_deck(preset)
            message = None if result.valid else "Invalid preset deck: " + "; ".join(result.errors)

        if message:
            logger.info(message)
            return ActionResult(
                success=False,
                new_state=state._copy_with(error=message),
                error=message,
                error_code="INVALID_DECK",
            )

        new_state = self._replace_deck(state, list(preset.cards), preset_id=preset.id)
        return ActionResult.success_with_state(
            new_state,
            changes=[f"Switched to preset deck {preset.name}"],
        )


def apply_action(
    state: SessionState | None,
    action: Action,
    rng: random.Random | None = None,
) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action.
    """
    reducer = Reducer(rng=rng)
    return reducer.apply(state, action)


def reduce(
    state: SessionState | None,
    action: Action,
    rng: random.Random | None = None,
) -> SessionState:
    """The (state, intent) -> state transition."""
    return apply_action(state, action, rng).new_state
