"""
Engine Core - Deterministic session state management.

The engine is the runtime that:
1. Holds the SessionState value (owned by the caller)
2. Shuffles and deals
3. Applies intents via the reducer
4. Lists the intents legal in the current state
"""

from .state import SessionState, CardInstance, DiscardPhase, SessionPhase
from .action import Action, ActionType, ActionPayload, ActionResult
from .shuffle import shuffle
from .dealing import deal_next_hand, make_card_instances
from .reducer import Reducer, apply_action, reduce
from .action_generator import ActionGenerator, legal_actions, is_legal

__all__ = [
    "SessionState",
    "CardInstance",
    "DiscardPhase",
    "SessionPhase",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "shuffle",
    "deal_next_hand",
    "make_card_instances",
    "Reducer",
    "apply_action",
    "reduce",
    "ActionGenerator",
    "legal_actions",
    "is_legal",
]
