"""
Session Controller - Owns one session value and threads it through intents.

LIFECYCLE:
1. open() loads the persisted record, or INITs a fresh session
2. dispatch(action) reduces the current state with the intent
3. Every accepted or rejected dispatch saves the resulting state
   (fire-and-forget; write failures never reach the caller)

There is no hidden global: callers construct and hold the controller.
"""

from __future__ import annotations
import logging
import random
from dataclasses import dataclass, field

from ..engine_core.state import SessionState
from ..engine_core.action import Action, ActionResult
from ..engine_core.reducer import Reducer
from ..engine_core.action_generator import ActionGenerator
from ..persistence.gateway import PersistenceGateway

logger = logging.getLogger(__name__)


@dataclass
class DeckSession:
    """
    A persisted card-hand session.

    Usage:
        session = DeckSession.open(PersistenceGateway(FileStore(path)))
        session.dispatch(Action.confirm_discard())
        session.state.hand
    """
    gateway: PersistenceGateway
    state: SessionState
    reducer: Reducer = field(default_factory=Reducer)

    @classmethod
    def open(
        cls,
        gateway: PersistenceGateway,
        rng: random.Random | None = None,
    ) -> DeckSession:
        """Rehydrate from storage, falling back to a fresh session."""
        reducer = Reducer(rng=rng)
        state = gateway.load()
        if state is None:
            logger.debug("No usable persisted session, initializing")
            state = reducer.apply(None, Action.init()).new_state
            gateway.save(state)
        return cls(gateway=gateway, state=state, reducer=reducer)

    def dispatch(self, action: Action) -> ActionResult:
        """Apply an intent and persist the resulting state."""
        result = self.reducer.apply(self.state, action)
        if result.new_state is not None:
            self.state = result.new_state
            self.gateway.save(self.state)
        return result

    def legal_actions(self) -> list[Action]:
        return ActionGenerator(reducer=self.reducer).generate(self.state)
