"""
Tests for API layer.

Tests:
- API service methods
- Request/response serialization
- HTTP endpoints via TestClient
"""

import random

import pytest
from fastapi.testclient import TestClient

from .. import __version__
from ..api import (
    ActionRequest,
    DeckService,
    ErrorCode,
    ErrorResponse,
    IntentType,
    PhaseLabel,
    create_app,
)
from ..persistence import MemoryStore, PersistenceGateway
from ..session import DeckSession


@pytest.fixture
def service():
    """A service over an in-memory session with a seeded shuffle."""
    gateway = PersistenceGateway(MemoryStore())
    return DeckService(session=DeckSession.open(gateway, rng=random.Random(99)))


@pytest.fixture
def client(service):
    return TestClient(create_app(service))


class TestDeckService:
    """Tests for DeckService."""

    def test_get_state(self, service):
        """Snapshot carries derived values."""
        state = service.get_state()

        assert state.phase == PhaseLabel.DISCARDING
        assert len(state.hand_cards) == 5
        assert state.draw_pile_count == 21
        assert state.discard_phase.active
        assert IntentType.CONFIRM_DISCARD in state.legal_actions
        assert IntentType.END_TURN not in state.legal_actions

    def test_selection_reflected(self, service):
        instance_id = service.get_state().hand_cards[0].instance_id
        response = service.dispatch(
            ActionRequest(type=IntentType.TOGGLE_CARD_SELECTION, instance_id=instance_id)
        )

        assert response.accepted
        assert response.state.selected_card_ids == [instance_id]
        assert response.state.hand_cards[0].selected

    def test_play_order_positions(self, service):
        service.dispatch(ActionRequest(type=IntentType.CONFIRM_DISCARD))
        cards = service.get_state().hand_cards
        service.dispatch(
            ActionRequest(type=IntentType.SELECT_FOR_PLAY_ORDER, instance_id=cards[2].instance_id)
        )

        state = service.get_state()
        assert state.phase == PhaseLabel.PLANNING
        assert state.hand_cards[2].play_order_position == 1
        assert state.hand_cards[0].play_order_position is None

    def test_rejected_intent(self, service):
        """Rejected intents report REJECTED and the unchanged state."""
        before = service.get_state()
        response = service.dispatch(ActionRequest(type=IntentType.END_TURN))

        assert not response.accepted
        assert response.error_code == ErrorCode.REJECTED
        assert response.state.hand == before.hand

    def test_invalid_deck(self, service):
        response = service.dispatch(
            ActionRequest(type=IntentType.APPLY_DECK_OVERRIDE, raw_text="{bad")
        )

        assert not response.accepted
        assert response.error_code == ErrorCode.INVALID_DECK
        assert response.state.error.startswith("Invalid JSON")

    def test_reset(self, service):
        service.dispatch(ActionRequest(type=IntentType.CHANGE_PARAMETERS, hand_size=3, discard_count=1))
        response = service.reset()

        assert response.accepted
        assert len(response.state.hand) == 3
        assert response.state.discard_phase.remaining_discards == 1

    def test_list_presets(self, service):
        presets = service.list_presets().presets
        assert {p.id for p in presets} == {"starter-deck", "face-cards"}
        assert next(p for p in presets if p.id == "face-cards").card_count == 12

    def test_validate_preset(self, service):
        response = service.validate_preset("starter-deck")
        assert response.valid
        assert response.errors == []

    def test_validate_missing_preset(self, service):
        response = service.validate_preset("nope")
        assert isinstance(response, ErrorResponse)
        assert response.error_code == ErrorCode.PRESET_NOT_FOUND


class TestHTTP:
    """Tests for the FastAPI routes."""

    def test_health(self, client):
        response = client.get("/api/v1/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "version": __version__}

    def test_get_session(self, client):
        response = client.get("/api/v1/session")
        body = response.json()

        assert response.status_code == 200
        assert body["phase"] == "discarding"
        assert len(body["hand"]) == 5
        assert "CONFIRM_DISCARD" in body["legal_actions"]

    def test_dispatch_flow(self, client):
        body = client.post("/api/v1/session/actions", json={"type": "CONFIRM_DISCARD"}).json()
        assert body["accepted"]
        assert body["state"]["planning_phase"]

        for card in body["state"]["hand_cards"]:
            client.post(
                "/api/v1/session/actions",
                json={"type": "SELECT_FOR_PLAY_ORDER", "instance_id": card["instance_id"]},
            )
        body = client.post("/api/v1/session/actions", json={"type": "LOCK_PLAY_ORDER"}).json()
        assert body["state"]["phase"] == "executing"
        assert body["state"]["all_cards_ordered"]

        body = client.post("/api/v1/session/actions", json={"type": "END_TURN"}).json()
        assert body["accepted"]
        assert body["state"]["turn_number"] == 2
        assert body["state"]["discard_pile_count"] == 5

    def test_rejected_is_not_http_error(self, client):
        response = client.post("/api/v1/session/actions", json={"type": "LOCK_PLAY_ORDER"})
        assert response.status_code == 200
        assert response.json()["accepted"] is False
        assert response.json()["error_code"] == "REJECTED"

    def test_unknown_intent_type(self, client):
        response = client.post("/api/v1/session/actions", json={"type": "SHUFFLE_EVERYTHING"})
        assert response.status_code == 422

    def test_preset_deck(self, client):
        body = client.post(
            "/api/v1/session/actions",
            json={"type": "APPLY_PRESET_DECK", "preset_id": "face-cards"},
        ).json()
        assert body["accepted"]
        assert body["state"]["active_preset_id"] == "face-cards"
        assert body["state"]["draw_pile_count"] == 7

    def test_reset_endpoint(self, client):
        response = client.post("/api/v1/session/reset")
        assert response.status_code == 200
        assert response.json()["state"]["turn_number"] == 1

    def test_presets(self, client):
        body = client.get("/api/v1/presets").json()
        assert len(body["presets"]) == 2

    def test_preset_validation(self, client):
        assert client.get("/api/v1/presets/face-cards/validation").json()["valid"]

        response = client.get("/api/v1/presets/missing/validation")
        assert response.status_code == 404
        assert response.json()["error_code"] == "PRESET_NOT_FOUND"
