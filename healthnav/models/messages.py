"""API request and response models."""

from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from healthnav.models.assessment import TriageResult
from healthnav.models.conversation import ConversationTurn, PatientContext
from healthnav.models.provider import Provider
from healthnav.models.triage import AppointmentType, ConversationState


class StartSessionRequest(BaseModel):
    """Optional patient data supplied when a session starts."""

    patient_context: Optional[PatientContext] = None


class StartSessionResponse(BaseModel):
    """Response when starting a new session."""

    session_id: str
    message: str
    state: ConversationState


class MessageRequest(BaseModel):
    """Patient message in a triage session."""

    message: str = Field(..., min_length=1, max_length=2000, description="Patient message")


class MessageResponse(BaseModel):
    """Assistant reply plus the session's progress."""

    session_id: str
    reply: str
    state: ConversationState
    symptoms: List[str] = Field(default_factory=list)
    triage_result: Optional[TriageResult] = None


class SessionDetailsResponse(BaseModel):
    """Full session details response."""

    session_id: str
    state: ConversationState
    created_at: datetime
    updated_at: datetime
    turns: List[ConversationTurn]
    symptoms: List[str]
    triage_result: Optional[TriageResult] = None
    triage_history: List[TriageResult] = Field(default_factory=list)


class ProviderRecommendationResponse(BaseModel):
    """Ranked provider shortlist for the current triage."""

    session_id: str
    suggested_action: str
    providers: List[Provider]
    message: str


class BookingRequest(BaseModel):
    """Provider slot selection."""

    provider_id: str
    slot: str
    type: Optional[AppointmentType] = None
