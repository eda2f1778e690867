"""LangGraph state definition for the triage pipeline."""

from typing import TypedDict, Optional
from healthnav.models.assessment import TriageResult
from healthnav.models.classification import ClassificationResult
from healthnav.models.conversation import PatientContext, SymptomSet


class TriagePipelineState(TypedDict):
    """State for one classify → (fallback) → map run."""

    # Inputs
    session_id: str
    symptoms: SymptomSet
    patient_context: Optional[PatientContext]

    # Classification
    classification: Optional[ClassificationResult]
    failure_reason: Optional[str]  # timeout, unavailable, invalid_response
    used_fallback: bool

    # Output
    triage_result: Optional[TriageResult]
