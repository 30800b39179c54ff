"""
State Validator - Repairs a persisted session record field by field.

Rules:
1. A non-object record is unsalvageable (valid=False)
2. A field with the wrong type or range gets its default and a note
3. Transient fields are always reset, whatever was stored
4. Unknown fields are kept for forward compatibility
5. Cross-field invariants are restored (hand matches hand_cards,
   play order only references hand cards, sub-phases are exclusive)

A record produced by the gateway from a valid state passes through
unchanged.
"""

from __future__ import annotations
import logging
import math
from dataclasses import dataclass, field
from typing import Any

from ..engine_core.state import SessionState, CardInstance, DiscardPhase
from ..deck_schema.defaults import (
    DEFAULT_DECK,
    DEFAULT_HAND_SIZE,
    DEFAULT_DISCARD_COUNT,
    MIN_HAND_SIZE,
    MAX_HAND_SIZE,
    MIN_DISCARD_COUNT,
    MAX_DISCARD_COUNT,
    SCHEMA_VERSION,
)

logger = logging.getLogger(__name__)

KNOWN_FIELDS = frozenset({
    "drawPile",
    "discardPile",
    "hand",
    "handCards",
    "turnNumber",
    "handSize",
    "discardCount",
    "warning",
    "error",
    "selectedCardIds",
    "isDealing",
    "discardPhase",
    "playOrderSequence",
    "playOrderLocked",
    "planningPhase",
    "deck",
    "activePresetId",
    "schemaVersion",
})


@dataclass
class SanitizeResult:
    """Outcome of validating a persisted record."""
    valid: bool
    state: SessionState | None = None
    errors: list[str] = field(default_factory=list)


def _string_list(value: Any, name: str, errors: list[str]) -> list[str]:
    if not isinstance(value, list):
        errors.append(f"{name} is not an array, using empty array")
        return []
    filtered = [item for item in value if isinstance(item, str)]
    if len(filtered) != len(value):
        errors.append(f"{name} had invalid elements removed")
    return filtered


def _card_instances(value: Any, errors: list[str]) -> list[CardInstance]:
    if not isinstance(value, list):
        errors.append("handCards is not an array, using empty array")
        return []

    cards: list[CardInstance] = []
    seen: set[str] = set()
    for item in value:
        if not isinstance(item, dict):
            continue
        instance_id = item.get("instanceId")
        card = item.get("value", item.get("card"))
        if not isinstance(instance_id, str) or not isinstance(card, str):
            continue
        if instance_id in seen:
            continue
        seen.add(instance_id)
        cards.append(CardInstance(instance_id=instance_id, card=card))

    if len(cards) != len(value):
        errors.append("handCards had invalid or duplicate elements removed")
    return cards


def _number(
    value: Any,
    low: int,
    high: float,
    default: int,
    name: str,
    errors: list[str],
) -> int:
    """Clamp a stored number into range; default when it is not a number."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        errors.append(f"{name} is not a valid number, using default {default}")
        return default
    if isinstance(value, float) and not math.isfinite(value):
        errors.append(f"{name} is not a valid number, using default {default}")
        return default

    clamped = int(max(low, min(high, math.floor(value))))
    if clamped != value:
        errors.append(f"{name} was clamped from {value} to {clamped}")
    return clamped


def _flag(value: Any, name: str, errors: list[str]) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        errors.append(f"{name} is not a boolean, coerced to {bool(value)}")
    return bool(value)


def _optional_text(value: Any, name: str, errors: list[str]) -> str | None:
    if value is None or isinstance(value, str):
        return value
    errors.append(f"{name} is not a string, using null")
    return None


def _discard_phase(value: Any, errors: list[str]) -> DiscardPhase:
    if not isinstance(value, dict):
        errors.append("discardPhase is invalid, using defaults")
        return DiscardPhase()
    active = value.get("active")
    if not isinstance(active, bool):
        errors.append("discardPhase.active is not a boolean, using false")
        active = False
    remaining = _number(
        value.get("remainingDiscards"), 0, MAX_DISCARD_COUNT, 0,
        "discardPhase.remainingDiscards", errors,
    )
    return DiscardPhase(active=active, remaining_discards=remaining)


def _deck(value: Any, errors: list[str]) -> list[str]:
    if value is None:
        return list(DEFAULT_DECK)
    if (
        not isinstance(value, list)
        or not value
        or not all(isinstance(c, str) and c.strip() for c in value)
    ):
        errors.append("deck is invalid, using default deck")
        return list(DEFAULT_DECK)
    return list(value)


def validate_and_sanitize(data: Any) -> SanitizeResult:
    """
    Validate and repair a decoded persisted record.

    Returns SanitizeResult with valid=False only when data is not an object.
    """
    errors: list[str] = []

    if not isinstance(data, dict):
        errors.append("State must be a non-null object")
        return SanitizeResult(valid=False, errors=errors)

    version = data.get("schemaVersion")
    if isinstance(version, int) and version > SCHEMA_VERSION:
        errors.append(f"schemaVersion {version} is newer than {SCHEMA_VERSION}, loading known fields")

    hand_cards = _card_instances(data.get("handCards"), errors)
    hand = _string_list(data.get("hand"), "hand", errors)
    if hand != [c.card for c in hand_cards]:
        errors.append("hand did not match handCards, rebuilt from handCards")
        hand = [c.card for c in hand_cards]

    instance_ids = {c.instance_id for c in hand_cards}
    sequence: list[str] = []
    for instance_id in _string_list(data.get("playOrderSequence"), "playOrderSequence", errors):
        if instance_id in instance_ids and instance_id not in sequence:
            sequence.append(instance_id)
        else:
            errors.append(f"playOrderSequence entry {instance_id} dropped")

    locked = _flag(data.get("playOrderLocked"), "playOrderLocked", errors)
    if locked and len(sequence) != len(hand_cards):
        errors.append("playOrderLocked without a complete sequence, unlocked")
        locked = False

    discard_phase = _discard_phase(data.get("discardPhase"), errors)
    planning = _flag(data.get("planningPhase"), "planningPhase", errors)
    if planning and (discard_phase.active or locked):
        errors.append("planningPhase conflicted with another phase, cleared")
        planning = False

    state = SessionState(
        draw_pile=_string_list(data.get("drawPile"), "drawPile", errors),
        discard_pile=_string_list(data.get("discardPile"), "discardPile", errors),
        hand=hand,
        hand_cards=hand_cards,
        turn_number=_number(data.get("turnNumber"), 1, math.inf, 1, "turnNumber", errors),
        hand_size=_number(
            data.get("handSize"), MIN_HAND_SIZE, MAX_HAND_SIZE, DEFAULT_HAND_SIZE,
            "handSize", errors,
        ),
        discard_count=_number(
            data.get("discardCount"), MIN_DISCARD_COUNT, MAX_DISCARD_COUNT,
            DEFAULT_DISCARD_COUNT, "discardCount", errors,
        ),
        warning=_optional_text(data.get("warning"), "warning", errors),
        error=_optional_text(data.get("error"), "error", errors),
        # Transient, never restored
        selected_card_ids=frozenset(),
        is_dealing=False,
        discard_phase=discard_phase,
        play_order_sequence=sequence,
        play_order_locked=locked,
        planning_phase=planning,
        deck=_deck(data.get("deck"), errors),
        active_preset_id=_optional_text(data.get("activePresetId"), "activePresetId", errors),
        extra={k: v for k, v in data.items() if k not in KNOWN_FIELDS},
    )

    for note in errors:
        logger.debug("Sanitized persisted state: %s", note)

    return SanitizeResult(valid=True, state=state, errors=errors)
