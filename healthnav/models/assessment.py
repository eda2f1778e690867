"""Triage result produced by the urgency mapper."""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime, timezone
from healthnav.models.conversation import SymptomSet
from healthnav.models.triage import SuggestedAction, UrgencyLevel
import uuid


class TriageResult(BaseModel):
    """Completed triage decision. Never mutated; a new triage makes a new result."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    urgency_level: UrgencyLevel
    primary_symptoms: SymptomSet
    recommendation: str
    suggested_action: SuggestedAction
    estimated_wait_time: Optional[str] = None
    ml_confidence: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    risk_score: Optional[float] = Field(default=None, ge=0.0, le=100.0)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "urgency_level": "high",
                "primary_symptoms": {"tokens": ["fever", "cough"]},
                "suggested_action": "urgent-care",
                "estimated_wait_time": "30-60 min",
                "ml_confidence": 0.82,
                "risk_score": 64.0,
            }
        }
