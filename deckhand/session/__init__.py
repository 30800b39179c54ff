"""Session - caller-owned session controller with auto-save."""

from .controller import DeckSession

__all__ = ["DeckSession"]
