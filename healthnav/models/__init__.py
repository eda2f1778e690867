"""Data model for the triage core."""

from healthnav.models.triage import (
    AppointmentStatus,
    AppointmentType,
    ClassifierSource,
    ConversationState,
    RiskLevel,
    Speaker,
    SuggestedAction,
    UrgencyLevel,
)
from healthnav.models.conversation import ConversationTurn, PatientContext, SymptomSet
from healthnav.models.classification import (
    ClassificationResult,
    ClassifierFailure,
    ClassifierOutcome,
    ClassifierRequest,
    ClassifierResponse,
    ClassifierSuccess,
)
from healthnav.models.assessment import TriageResult
from healthnav.models.provider import Appointment, Provider

__all__ = [
    "Appointment",
    "AppointmentStatus",
    "AppointmentType",
    "ClassificationResult",
    "ClassifierFailure",
    "ClassifierOutcome",
    "ClassifierRequest",
    "ClassifierResponse",
    "ClassifierSource",
    "ClassifierSuccess",
    "ConversationState",
    "ConversationTurn",
    "PatientContext",
    "Provider",
    "RiskLevel",
    "Speaker",
    "SuggestedAction",
    "SymptomSet",
    "TriageResult",
    "UrgencyLevel",
]
