"""
Preset Decks - Read-only catalog of named decks.

Every preset is validated before it is used as a deck source.
To add a preset, append a PresetDeck with a unique kebab-case id,
a name of at most 50 characters, a description of at most 200
characters and at least one card.
"""

from __future__ import annotations
from dataclasses import dataclass

from .validation import ValidationResult, validate_preset_deck


@dataclass(frozen=True)
class PresetDeck:
    """A named deck available for selection."""
    id: str
    name: str
    description: str
    cards: tuple[str, ...]

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "cards": list(self.cards),
        }


PRESET_DECKS: tuple[PresetDeck, ...] = (
    PresetDeck(
        id="starter-deck",
        name="Starter Deck",
        description="A balanced deck for learning the game mechanics with 20 cards.",
        cards=(
            "Card 1", "Card 1", "Card 1",
            "Card 2", "Card 2", "Card 2",
            "Card 3", "Card 3", "Card 3",
            "Card 4", "Card 4",
            "Card 5", "Card 5",
            "Card 6", "Card 6",
            "Card 7", "Card 7",
            "Card 8",
            "Card 9",
            "Card 10",
        ),
    ),
    PresetDeck(
        id="face-cards",
        name="Face Cards",
        description="Only the royals: jacks, queens and kings of all four suits.",
        cards=tuple(
            f"{rank} of {suit}"
            for suit in ("Spades", "Hearts", "Diamonds", "Clubs")
            for rank in ("Jack", "Queen", "King")
        ),
    ),
)


def get_preset(preset_id: str) -> PresetDeck | None:
    """Look up a preset by id."""
    for preset in PRESET_DECKS:
        if preset.id == preset_id:
            return preset
    return None


def validate_catalog(
    presets: tuple[PresetDeck, ...] = PRESET_DECKS,
) -> dict[str, ValidationResult]:
    """Validate every preset; also flags duplicate ids."""
    results: dict[str, ValidationResult] = {}
    for preset in presets:
        result = validate_preset_deck(preset)
        if preset.id in results:
            result = ValidationResult(
                valid=False,
                errors=result.errors + [f'Duplicate preset id "{preset.id}"'],
            )
        results[preset.id] = result
    return results
