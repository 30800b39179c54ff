"""
FastAPI Application - REST API for a UI client.

Endpoints:
    GET    /api/v1/health                        Liveness and version
    GET    /api/v1/session                       Current session snapshot
    POST   /api/v1/session/actions               Dispatch an intent
    POST   /api/v1/session/reset                 Reset the session
    GET    /api/v1/presets                       List preset decks
    GET    /api/v1/presets/{preset_id}/validation  Validate a preset deck

Rejected intents are not HTTP errors: the response reports
accepted=false and carries the unchanged state.
"""

from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import ALLOWED_ORIGINS, DECKHAND_STATE_FILE, DECKHAND_STORAGE_KEY
from ..persistence import FileStore, PersistenceGateway
from ..session import DeckSession
from .schemas import (
    ActionRequest,
    ActionResponse,
    SessionStateResponse,
    PresetListResponse,
    PresetValidationResponse,
    ErrorResponse,
    HealthResponse,
)
from .service import DeckService


def create_app(service: Optional[DeckService] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        service: Optional DeckService (opens the file-backed session if not provided)

    Returns:
        FastAPI application instance
    """
    if service is None:
        gateway = PersistenceGateway(FileStore(DECKHAND_STATE_FILE), key=DECKHAND_STORAGE_KEY)
        service = DeckService(session=DeckSession.open(gateway))

    app = FastAPI(
        title="Deckhand API",
        description="Card-hand rules engine: dealing, discard, and play-order planning.",
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/api/v1/health", response_model=HealthResponse, tags=["Health"])
    def health() -> HealthResponse:
        return HealthResponse(version=__version__)

    @app.get(
        "/api/v1/session",
        response_model=SessionStateResponse,
        tags=["Session"],
        summary="Get the current session snapshot",
    )
    def get_session() -> SessionStateResponse:
        return service.get_state()

    @app.post(
        "/api/v1/session/actions",
        response_model=ActionResponse,
        tags=["Session"],
        summary="Dispatch an intent to the session",
    )
    def dispatch_action(request: ActionRequest) -> ActionResponse:
        """
        Apply an intent.

        The response always contains the resulting snapshot; `accepted`
        is false when the intent's preconditions were not met or the
        deck input was invalid.
        """
        return service.dispatch(request)

    @app.post(
        "/api/v1/session/reset",
        response_model=ActionResponse,
        tags=["Session"],
        summary="Reset the session, keeping valid settings",
    )
    def reset_session() -> ActionResponse:
        return service.reset()

    @app.get(
        "/api/v1/presets",
        response_model=PresetListResponse,
        tags=["Presets"],
    )
    def list_presets() -> PresetListResponse:
        return service.list_presets()

    @app.get(
        "/api/v1/presets/{preset_id}/validation",
        response_model=PresetValidationResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Presets"],
    )
    def validate_preset(preset_id: str):
        result = service.validate_preset(preset_id)
        if isinstance(result, ErrorResponse):
            return JSONResponse(status_code=404, content=result.model_dump(mode="json"))
        return result

    return app
