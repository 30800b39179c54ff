"""
Deck Validation - Structural checks for externally supplied decks.

Validates:
1. JSON deck overrides (array of non-empty strings)
2. Preset deck descriptors (id, name, description, cards)

Preset validation accumulates every violation rather than stopping
at the first one.
"""

from __future__ import annotations
import json
import re
from dataclasses import dataclass, field
from typing import Any

NAME_MAX_LENGTH = 50
DESCRIPTION_MAX_LENGTH = 200

_KEBAB_CASE = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


@dataclass
class ValidationResult:
    """Result of validation, with errors and warnings."""
    valid: bool
    errors: list[str]
    warnings: list[str] = field(default_factory=list)


@dataclass
class ParsedDeck:
    """Outcome of parsing a JSON deck override."""
    cards: list[str] | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.cards is not None


def _is_card_label(item: Any) -> bool:
    return isinstance(item, str) and item.strip() != ""


def parse_deck_override(raw_text: Any) -> ParsedDeck:
    """
    Parse raw override text into a card list.

    An empty list is a valid result; the caller decides what it means.
    """
    if not isinstance(raw_text, str):
        return ParsedDeck(error="Invalid JSON: override text must be a string")

    try:
        parsed = json.loads(raw_text)
    except json.JSONDecodeError as e:
        return ParsedDeck(error=f"Invalid JSON: {e.msg}")
    except (ValueError, RecursionError) as e:
        return ParsedDeck(error=f"Invalid JSON: {e}")

    if not isinstance(parsed, list):
        return ParsedDeck(error="Deck override must be a JSON array")

    if not all(_is_card_label(item) for item in parsed):
        return ParsedDeck(error="All deck items must be non-empty strings")

    return ParsedDeck(cards=list(parsed))


def _field(deck: Any, name: str) -> Any:
    if isinstance(deck, dict):
        return deck.get(name)
    return getattr(deck, name, None)


def validate_preset_deck(deck: Any) -> ValidationResult:
    """
    Validate a preset deck descriptor.

    Accepts a mapping or any object exposing id/name/description/cards.
    """
    errors: list[str] = []

    if deck is None or isinstance(deck, (str, int, float, bool, list, tuple)):
        return ValidationResult(valid=False, errors=["Preset deck must be an object"])

    deck_id = _field(deck, "id")
    if not isinstance(deck_id, str) or not deck_id.strip():
        errors.append('Preset deck must have a non-empty "id" field')
    elif not _KEBAB_CASE.match(deck_id):
        errors.append(f'Preset deck "id" must be kebab-case (got "{deck_id}")')

    name = _field(deck, "name")
    if not isinstance(name, str) or not name.strip():
        errors.append('Preset deck must have a non-empty "name" field')
    elif len(name) > NAME_MAX_LENGTH:
        errors.append(f'Preset deck "name" must be {NAME_MAX_LENGTH} characters or less')

    description = _field(deck, "description")
    if not isinstance(description, str) or not description.strip():
        errors.append('Preset deck must have a non-empty "description" field')
    elif len(description) > DESCRIPTION_MAX_LENGTH:
        errors.append(
            f'Preset deck "description" must be {DESCRIPTION_MAX_LENGTH} characters or less'
        )

    cards = _field(deck, "cards")
    if not isinstance(cards, (list, tuple)):
        errors.append('Preset deck must have a "cards" field that is an array')
    elif len(cards) == 0:
        errors.append('Preset deck "cards" array must contain at least 1 card')
    else:
        for index, card in enumerate(cards):
            if not _is_card_label(card):
                errors.append(f'Preset deck card at index {index} must be a non-empty string')

    return ValidationResult(valid=len(errors) == 0, errors=errors)
