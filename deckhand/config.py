"""
Environment configuration.
"""

import os

DECKHAND_ENV = os.getenv("DECKHAND_ENV", "development")
DECKHAND_STATE_FILE = os.getenv(
    "DECKHAND_STATE_FILE", os.path.join("~", ".deckhand", "state.json")
)
DECKHAND_STORAGE_KEY = os.getenv("DECKHAND_STORAGE_KEY", "deckhand.session")
DECKHAND_LOG_LEVEL = os.getenv("DECKHAND_LOG_LEVEL", "WARNING")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")
