"""
API Module - HTTP interface for a UI client.

The client:
1. Reads the session snapshot
2. Dispatches intents (deal, discard, order, lock, end turn, ...)
3. Lists and validates preset decks

The session is persisted between requests; rejected intents are
reported in the response body, not as HTTP errors.
"""

from .schemas import (
    ActionRequest,
    ActionResponse,
    SessionStateResponse,
    HandCardInfo,
    PresetInfo,
    PresetListResponse,
    PresetValidationResponse,
    ErrorResponse,
    ErrorCode,
    IntentType,
    PhaseLabel,
)
from .service import DeckService
from .app import create_app

__all__ = [
    "ActionRequest",
    "ActionResponse",
    "SessionStateResponse",
    "HandCardInfo",
    "PresetInfo",
    "PresetListResponse",
    "PresetValidationResponse",
    "ErrorResponse",
    "ErrorCode",
    "IntentType",
    "PhaseLabel",
    "DeckService",
    "create_app",
]
