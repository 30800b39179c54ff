"""Deck schema - default deck, validation, and the preset catalog."""

from .defaults import (
    DEFAULT_DECK,
    DEFAULT_HAND_SIZE,
    DEFAULT_DISCARD_COUNT,
    MIN_HAND_SIZE,
    MAX_HAND_SIZE,
    MIN_DISCARD_COUNT,
    MAX_DISCARD_COUNT,
    SCHEMA_VERSION,
)
from .validation import ValidationResult, ParsedDeck, parse_deck_override, validate_preset_deck
from .presets import PresetDeck, PRESET_DECKS, get_preset, validate_catalog

__all__ = [
    "DEFAULT_DECK",
    "DEFAULT_HAND_SIZE",
    "DEFAULT_DISCARD_COUNT",
    "MIN_HAND_SIZE",
    "MAX_HAND_SIZE",
    "MIN_DISCARD_COUNT",
    "MAX_DISCARD_COUNT",
    "SCHEMA_VERSION",
    "ValidationResult",
    "ParsedDeck",
    "parse_deck_override",
    "validate_preset_deck",
    "PresetDeck",
    "PRESET_DECKS",
    "get_preset",
    "validate_catalog",
]
