"""
Deckhand - Card Hand Rules Engine

A deterministic rules engine for a single-player card-hand prototype.
The engine owns deck composition and turn progression and provides:
- Session state management
- Shuffling and dealing with reshuffle-on-exhaustion
- Discard and play-order planning sub-phases
- Durable persistence of the session across reloads
"""

__version__ = "0.1.0"
