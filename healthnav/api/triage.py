"""Triage API endpoints.

Thin HTTP layer over the session service: start a session, exchange
messages until the triage resolves, then fetch ranked providers and book
an appointment. Appointments are returned to the caller, not stored.
"""

from fastapi import APIRouter, Body, Depends, HTTPException, status
from typing import Optional
import logging

from healthnav.errors import (
    ConflictingOperation,
    InvalidSlot,
    InvalidStateTransition,
    SessionNotFound,
)
from healthnav.models.messages import (
    BookingRequest,
    MessageRequest,
    MessageResponse,
    ProviderRecommendationResponse,
    SessionDetailsResponse,
    StartSessionRequest,
    StartSessionResponse,
)
from healthnav.models.provider import Appointment
from healthnav.services.recommendation_service import format_provider_message
from healthnav.services.session_service import (
    SessionService,
    TriageSession,
    get_session_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/triage", tags=["Triage"])


def _load_session(service: SessionService, session_id: str) -> TriageSession:
    try:
        return service.get_session(session_id)
    except SessionNotFound:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Session not found"
        )


@router.post("/sessions", response_model=StartSessionResponse)
async def start_session(
    request: Optional[StartSessionRequest] = Body(default=None),
    service: SessionService = Depends(get_session_service),
):
    """
    Start a new triage session.

    Returns the session ID and the greeting message.
    """
    patient_context = request.patient_context if request else None
    session = service.create_session(patient_context=patient_context)
    return StartSessionResponse(
        session_id=session.session_id,
        message=session.controller.turns[-1].text,
        state=session.controller.state,
    )


@router.post("/sessions/{session_id}/messages", response_model=MessageResponse)
async def send_message(
    session_id: str,
    request: MessageRequest,
    service: SessionService = Depends(get_session_service),
):
    """
    Send a patient message.

    The reply asks the next question until enough turns have been
    collected; the turn that completes gathering triggers the triage and
    the response then carries the triage result.
    """
    session = _load_session(service, session_id)

    try:
        reply = await service.record_turn(session_id, request.message)
    except ConflictingOperation as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except InvalidStateTransition as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)
        )

    controller = session.controller
    return MessageResponse(
        session_id=session_id,
        reply=reply,
        state=controller.state,
        symptoms=list(controller.symptoms.tokens),
        triage_result=controller.triage_result,
    )


@router.get("/sessions/{session_id}", response_model=SessionDetailsResponse)
async def get_session_details(
    session_id: str, service: SessionService = Depends(get_session_service)
):
    """Get the session's turns, symptoms, current triage and triage history."""
    session = _load_session(service, session_id)
    controller = session.controller
    return SessionDetailsResponse(
        session_id=session.session_id,
        state=controller.state,
        created_at=session.created_at,
        updated_at=session.updated_at,
        turns=list(controller.turns),
        symptoms=list(controller.symptoms.tokens),
        triage_result=controller.triage_result,
        triage_history=session.triage_history,
    )


@router.post("/sessions/{session_id}/reset", response_model=StartSessionResponse)
async def reset_session(
    session_id: str, service: SessionService = Depends(get_session_service)
):
    """Start the conversation over in the same session."""
    _load_session(service, session_id)
    greeting = service.reset_session(session_id)
    return StartSessionResponse(
        session_id=session_id,
        message=greeting,
        state=service.get_session(session_id).controller.state,
    )


@router.get(
    "/sessions/{session_id}/providers", response_model=ProviderRecommendationResponse
)
async def get_recommended_providers(
    session_id: str, service: SessionService = Depends(get_session_service)
):
    """Ranked providers for the session's triage result."""
    session = _load_session(service, session_id)

    try:
        providers = service.recommend_providers(session_id)
    except InvalidStateTransition as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    return ProviderRecommendationResponse(
        session_id=session_id,
        suggested_action=session.current_triage.suggested_action.value,
        providers=providers,
        message=format_provider_message(providers),
    )


@router.post("/sessions/{session_id}/appointments", response_model=Appointment)
async def book_appointment(
    session_id: str,
    request: BookingRequest,
    service: SessionService = Depends(get_session_service),
):
    """Book one of a provider's available slots."""
    _load_session(service, session_id)

    try:
        return service.book_appointment(
            session_id, request.provider_id, request.slot, request.type
        )
    except InvalidStateTransition as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except LookupError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except InvalidSlot as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)
        )


@router.delete("/sessions/{session_id}")
async def end_session(
    session_id: str, service: SessionService = Depends(get_session_service)
):
    """Drop a session from memory."""
    if not service.end_session(session_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Session not found"
        )
    return {"session_id": session_id, "status": "ended"}
