"""
Persistence Gateway - Saves and loads the session record.

The gateway:
- Writes every field except the transient ones, plus schemaVersion
- Swallows write failures (quota, unavailable storage); the in-memory
  session continues unaffected
- Returns None from load() on any failure so the caller starts fresh

Outcomes are also available as Ok/Err results, which are meant for
logging and diagnostics only.
"""

from __future__ import annotations
import json
import logging
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

from ..engine_core.state import SessionState
from ..deck_schema.defaults import SCHEMA_VERSION
from .state_validator import validate_and_sanitize
from .store import KeyValueStore, MemoryStore

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "deckhand.session"

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    reason: str


Result = Union[Ok[T], Err]


def serialize_state(state: SessionState) -> dict[str, Any]:
    """Build the persisted record for a state (transient fields excluded)."""
    record: dict[str, Any] = dict(state.extra)
    record.update({
        "schemaVersion": SCHEMA_VERSION,
        "drawPile": list(state.draw_pile),
        "discardPile": list(state.discard_pile),
        "hand": list(state.hand),
        "handCards": [
            {"instanceId": c.instance_id, "value": c.card} for c in state.hand_cards
        ],
        "turnNumber": state.turn_number,
        "handSize": state.hand_size,
        "discardCount": state.discard_count,
        "warning": state.warning,
        "error": state.error,
        "discardPhase": {
            "active": state.discard_phase.active,
            "remainingDiscards": state.discard_phase.remaining_discards,
        },
        "playOrderSequence": list(state.play_order_sequence),
        "playOrderLocked": state.play_order_locked,
        "planningPhase": state.planning_phase,
        "deck": list(state.deck),
        "activePresetId": state.active_preset_id,
    })
    return record


class PersistenceGateway:
    """
    Save/load of the session record against a key-value store.

    Usage:
        gateway = PersistenceGateway(FileStore(path))
        state = gateway.load() or reduce(None, Action.init())
        gateway.save(state)
    """

    def __init__(self, store: KeyValueStore | None = None, key: str = DEFAULT_STORAGE_KEY):
        self.store = store if store is not None else MemoryStore()
        self.key = key

    def save_result(self, state: SessionState) -> Result[None]:
        try:
            payload = json.dumps(serialize_state(state))
            self.store.set_item(self.key, payload)
        except Exception as e:
            logger.debug("Failed to save session state: %s", e)
            return Err(f"save failed: {e}")
        return Ok(None)

    def save(self, state: SessionState) -> bool:
        """Persist state. Never raises; returns whether the write succeeded."""
        return isinstance(self.save_result(state), Ok)

    def load_result(self) -> Result[SessionState]:
        try:
            serialized = self.store.get_item(self.key)
        except Exception as e:
            logger.debug("Failed to read session state: %s", e)
            return Err(f"read failed: {e}")

        if serialized is None or not serialized.strip():
            return Err("no stored session")

        try:
            data = json.loads(serialized)
        except (ValueError, RecursionError, TypeError) as e:
            logger.debug("Stored session is not valid JSON: %s", e)
            return Err(f"decode failed: {e}")

        result = validate_and_sanitize(data)
        if not result.valid or result.state is None:
            logger.debug("Invalid persisted state, using defaults: %s", result.errors)
            return Err("; ".join(result.errors) or "invalid state")
        return Ok(result.state)

    def load(self) -> SessionState | None:
        """Load and sanitize the stored session, or None on any failure."""
        result = self.load_result()
        return result.value if isinstance(result, Ok) else None

    def clear(self) -> None:
        try:
            self.store.remove_item(self.key)
        except Exception as e:
            logger.debug("Failed to clear session state: %s", e)
