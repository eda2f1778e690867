"""Triage classification enums."""

from enum import Enum


class RiskLevel(str, Enum):
    """Risk level reported by the classifier."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class UrgencyLevel(str, Enum):
    """Urgency tier derived from the classifier score."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    EMERGENCY = "emergency"


class SuggestedAction(str, Enum):
    """Coarse care pathway driving provider filtering."""

    SELF_CARE = "self-care"  # Monitor at home, tele-consult if needed
    CLINIC = "clinic"  # Book a regular clinic visit
    URGENT_CARE = "urgent-care"  # Same-day urgent care
    EMERGENCY = "emergency"  # Emergency department now


class ClassifierSource(str, Enum):
    """Where a classification came from."""

    PRIMARY = "primary"
    MOCK = "mock"
    FALLBACK = "fallback"


class ConversationState(str, Enum):
    """Conversation controller states, in dialogue order."""

    GREETING = "greeting"
    COLLECTING_CHIEF_COMPLAINT = "collecting_chief_complaint"
    COLLECTING_DURATION = "collecting_duration"
    COLLECTING_SEVERITY = "collecting_severity"
    COLLECTING_ADDITIONAL = "collecting_additional"
    ANALYZING = "analyzing"
    RESOLVED = "resolved"


class Speaker(str, Enum):
    PATIENT = "patient"
    ASSISTANT = "assistant"


class AppointmentType(str, Enum):
    IN_PERSON = "in-person"
    TELE_CONSULT = "tele-consult"


class AppointmentStatus(str, Enum):
    """Appointment status. Transitions after booking belong to the history service."""

    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
