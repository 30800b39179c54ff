"""
API Service - Business logic layer between the API and the engine.

The service:
1. Translates API requests into engine intents
2. Dispatches them through the caller-owned DeckSession
3. Formats session snapshots for the client

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass

from .schemas import (
    ActionRequest,
    ActionResponse,
    SessionStateResponse,
    HandCardInfo,
    DiscardPhaseInfo,
    PresetInfo,
    PresetListResponse,
    PresetValidationResponse,
    ErrorResponse,
    ErrorCode,
    IntentType,
    PhaseLabel,
)
from ..engine_core.action import Action, ActionPayload, ActionType
from ..engine_core.state import SessionState
from ..deck_schema.validation import validate_preset_deck
from ..session import DeckSession

_ERROR_CODES = {
    "REJECTED": ErrorCode.REJECTED,
    "INVALID_DECK": ErrorCode.INVALID_DECK,
}


def to_state_response(state: SessionState, legal: list[Action]) -> SessionStateResponse:
    """Build the client snapshot, including derived values."""
    return SessionStateResponse(
        draw_pile=state.draw_pile,
        discard_pile=state.discard_pile,
        hand=state.hand,
        hand_cards=[
            HandCardInfo(
                instance_id=c.instance_id,
                card=c.card,
                selected=c.instance_id in state.selected_card_ids,
                play_order_position=state.position_of(c.instance_id),
            )
            for c in state.hand_cards
        ],
        turn_number=state.turn_number,
        hand_size=state.hand_size,
        discard_count=state.discard_count,
        selected_card_ids=sorted(state.selected_card_ids),
        discard_phase=DiscardPhaseInfo(
            active=state.discard_phase.active,
            remaining_discards=state.discard_phase.remaining_discards,
        ),
        play_order_sequence=state.play_order_sequence,
        play_order_locked=state.play_order_locked,
        planning_phase=state.planning_phase,
        warning=state.warning,
        error=state.error,
        active_preset_id=state.active_preset_id,
        phase=PhaseLabel(state.phase.value),
        all_cards_ordered=state.all_cards_ordered,
        draw_pile_count=len(state.draw_pile),
        discard_pile_count=len(state.discard_pile),
        legal_actions=sorted({IntentType(a.action_type.value) for a in legal}, key=lambda t: t.value),
    )


def to_action(request: ActionRequest) -> Action:
    """Translate a request body into an engine intent."""
    return Action(
        action_type=ActionType(request.type.value),
        payload=ActionPayload(
            instance_id=request.instance_id,
            hand_size=request.hand_size,
            discard_count=request.discard_count,
            immediate_reset=request.immediate_reset,
            raw_text=request.raw_text,
            preset_id=request.preset_id,
        ),
    )


@dataclass
class DeckService:
    """
    API service for a single persisted session.

    Usage:
        service = DeckService(session=DeckSession.open(gateway))
        response = service.dispatch(ActionRequest(type=IntentType.END_TURN))
    """
    session: DeckSession

    def get_state(self) -> SessionStateResponse:
        return to_state_response(self.session.state, self.session.legal_actions())

    def dispatch(self, request: ActionRequest) -> ActionResponse:
        """Apply an intent; rejected intents still return the current state."""
        result = self.session.dispatch(to_action(request))
        error_code = None
        if not result.success:
            error_code = _ERROR_CODES.get(result.error_code, ErrorCode.INTERNAL_ERROR)
        return ActionResponse(
            accepted=result.success,
            error_code=error_code,
            reason=result.error,
            state=self.get_state(),
        )

    def reset(self) -> ActionResponse:
        return self.dispatch(ActionRequest(type=IntentType.RESET))

    def list_presets(self) -> PresetListResponse:
        return PresetListResponse(
            presets=[
                PresetInfo(
                    id=p.id,
                    name=p.name,
                    description=p.description,
                    card_count=len(p.cards),
                )
                for p in self.session.reducer.presets
            ]
        )

    def validate_preset(self, preset_id: str) -> PresetValidationResponse | ErrorResponse:
        preset = next((p for p in self.session.reducer.presets if p.id == preset_id), None)
        if preset is None:
            return ErrorResponse(
                error=f"Preset deck not found: {preset_id}",
                error_code=ErrorCode.PRESET_NOT_FOUND,
            )
        result = validate_preset_deck(preset)
        return PresetValidationResponse(
            preset_id=preset_id,
            valid=result.valid,
            errors=result.errors,
        )
