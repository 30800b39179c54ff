"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between a UI client and the engine.
Position numbers are derived (index + 1), never stored.

Error Codes:
- REJECTED: Intent preconditions not met, state unchanged
- INVALID_DECK: Deck override or preset failed validation
- PRESET_NOT_FOUND: Preset id does not exist
- VALIDATION_ERROR: Request body is malformed
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class PhaseLabel(str, Enum):
    """Coarse session phase."""
    IDLE = "idle"
    DISCARDING = "discarding"
    PLANNING = "planning"
    EXECUTING = "executing"


class IntentType(str, Enum):
    """Intents a client may dispatch."""
    INIT = "INIT"
    RESET = "RESET"
    DEAL_NEXT_HAND = "DEAL_NEXT_HAND"
    END_TURN = "END_TURN"
    TOGGLE_CARD_SELECTION = "TOGGLE_CARD_SELECTION"
    CONFIRM_DISCARD = "CONFIRM_DISCARD"
    SELECT_FOR_PLAY_ORDER = "SELECT_FOR_PLAY_ORDER"
    DESELECT_FROM_PLAY_ORDER = "DESELECT_FROM_PLAY_ORDER"
    LOCK_PLAY_ORDER = "LOCK_PLAY_ORDER"
    CLEAR_PLAY_ORDER = "CLEAR_PLAY_ORDER"
    CHANGE_PARAMETERS = "CHANGE_PARAMETERS"
    APPLY_DECK_OVERRIDE = "APPLY_DECK_OVERRIDE"
    APPLY_PRESET_DECK = "APPLY_PRESET_DECK"


class ErrorCode(str, Enum):
    """Structured error codes."""
    REJECTED = "REJECTED"
    INVALID_DECK = "INVALID_DECK"
    PRESET_NOT_FOUND = "PRESET_NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class HandCardInfo(BaseModel):
    """A card in the hand, with its derived UI state."""
    instance_id: str
    card: str
    selected: bool = False
    play_order_position: Optional[int] = Field(
        None, description="1-based position in the play order, if ordered"
    )


class DiscardPhaseInfo(BaseModel):
    active: bool = False
    remaining_discards: int = 0


class PresetInfo(BaseModel):
    """A preset deck available for selection."""
    id: str
    name: str
    description: str
    card_count: int


# =============================================================================
# Request Models
# =============================================================================

class ActionRequest(BaseModel):
    """An intent dispatched by the client."""
    type: IntentType
    instance_id: Optional[str] = Field(None, description="For selection and play-order intents")
    hand_size: Optional[float] = Field(None, description="For CHANGE_PARAMETERS")
    discard_count: Optional[float] = Field(None, description="For CHANGE_PARAMETERS")
    immediate_reset: bool = False
    raw_text: Optional[str] = Field(None, description="JSON array text for APPLY_DECK_OVERRIDE")
    preset_id: Optional[str] = Field(None, description="For APPLY_PRESET_DECK")


# =============================================================================
# Response Models
# =============================================================================

class SessionStateResponse(BaseModel):
    """Full session snapshot plus derived read-only values."""
    draw_pile: list[str] = Field(default_factory=list)
    discard_pile: list[str] = Field(default_factory=list)
    hand: list[str] = Field(default_factory=list)
    hand_cards: list[HandCardInfo] = Field(default_factory=list)
    turn_number: int = 1
    hand_size: int
    discard_count: int
    selected_card_ids: list[str] = Field(default_factory=list)
    discard_phase: DiscardPhaseInfo = Field(default_factory=DiscardPhaseInfo)
    play_order_sequence: list[str] = Field(default_factory=list)
    play_order_locked: bool = False
    planning_phase: bool = False
    warning: Optional[str] = None
    error: Optional[str] = None
    active_preset_id: Optional[str] = None

    # Derived
    phase: PhaseLabel = PhaseLabel.IDLE
    all_cards_ordered: bool = False
    draw_pile_count: int = 0
    discard_pile_count: int = 0
    legal_actions: list[IntentType] = Field(default_factory=list)


class ActionResponse(BaseModel):
    """Result of dispatching an intent; state is always the current snapshot."""
    accepted: bool
    error_code: Optional[ErrorCode] = None
    reason: Optional[str] = None
    state: SessionStateResponse


class PresetListResponse(BaseModel):
    presets: list[PresetInfo] = Field(default_factory=list)


class PresetValidationResponse(BaseModel):
    preset_id: str
    valid: bool
    errors: list[str] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str
    error_code: ErrorCode
    details: Optional[dict] = None


class HealthResponse(BaseModel):
    status: str = "healthy"
    version: str
