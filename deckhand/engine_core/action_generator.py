"""
Action Generator - Enumerates the intents the reducer would accept.

Used by:
1. UI to enable or disable controls
2. Validation (is this action in legal_actions?)

Design: Generates Action objects, not just action types, and filters
them through the reducer's own precondition checks so the two never
disagree.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .state import SessionState
from .action import Action
from .reducer import Reducer


@dataclass
class ActionGenerator:
    """
    Generates legal intents for the current session state.

    Operator intents that take free-form input (parameter changes,
    deck overrides, presets) are always available and not listed.
    """
    reducer: Reducer = field(default_factory=Reducer)

    def generate(self, state: SessionState | None) -> list[Action]:
        """Return every fully-specified intent that would not be rejected."""
        if state is None:
            return [Action.init()]

        candidates = [
            Action.reset(),
            Action.deal_next_hand(),
            Action.end_turn(),
            Action.confirm_discard(),
            Action.lock_play_order(),
            Action.clear_play_order(),
        ]
        candidates.extend(self._generate_card_actions(state))
        return [a for a in candidates if self.is_legal(state, a)]

    def _generate_card_actions(self, state: SessionState) -> list[Action]:
        """One candidate per hand card for each per-card intent."""
        actions = []
        for card in state.hand_cards:
            actions.append(Action.toggle_selection(card.instance_id))
            actions.append(Action.select_for_play_order(card.instance_id))
            actions.append(Action.deselect_from_play_order(card.instance_id))
        return actions

    def is_legal(self, state: SessionState | None, action: Action) -> bool:
        return self.reducer._validate_action(state, action) is None


def legal_actions(state: SessionState | None) -> list[Action]:
    """
    Convenience function to get legal intents.

    Creates an ActionGenerator and generates actions.
    """
    return ActionGenerator().generate(state)


def is_legal(state: SessionState | None, action: Action) -> bool:
    """Check if a specific intent would be accepted."""
    return ActionGenerator().is_legal(state, action)
