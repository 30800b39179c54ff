"""
Deck defaults - The canonical deck and session parameter bounds.
"""

# Default deck, two full suits
DEFAULT_DECK: tuple[str, ...] = tuple(
    f"{rank} of {suit}"
    for suit in ("Spades", "Hearts")
    for rank in (
        "Ace", "2", "3", "4", "5", "6", "7", "8", "9", "10",
        "Jack", "Queen", "King",
    )
)

DEFAULT_HAND_SIZE = 5
DEFAULT_DISCARD_COUNT = 5

MIN_HAND_SIZE = 1
MAX_HAND_SIZE = 10
MIN_DISCARD_COUNT = 0
MAX_DISCARD_COUNT = 10

# Persisted record format version
SCHEMA_VERSION = 1
