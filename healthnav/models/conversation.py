"""Conversation records: turns, symptom sets and patient context."""

from pydantic import BaseModel, Field
from typing import Iterable, List, Optional, Tuple
from datetime import datetime, timezone
from healthnav.models.triage import Speaker


class ConversationTurn(BaseModel):
    """A single recorded turn. Immutable once recorded."""

    speaker: Speaker
    text: str
    sequence_number: int = Field(..., ge=1)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    class Config:
        frozen = True


class SymptomSet(BaseModel):
    """Ordered, deduplicated symptom tokens extracted from patient turns.

    Sets are immutable; ``merge`` returns a new set so earlier snapshots
    (e.g. the one held by a TriageResult) never change.
    """

    tokens: Tuple[str, ...] = ()

    class Config:
        frozen = True

    def merge(self, new_tokens: Iterable[str]) -> "SymptomSet":
        """Return a new set with unseen tokens appended in order."""
        merged = list(self.tokens)
        for token in new_tokens:
            if token not in merged:
                merged.append(token)
        return SymptomSet(tokens=tuple(merged))

    def __contains__(self, token: object) -> bool:
        return token in self.tokens

    def __len__(self) -> int:
        return len(self.tokens)


class PatientContext(BaseModel):
    """Optional patient data sent alongside symptoms to the classifier."""

    age: Optional[int] = Field(default=None, ge=0, le=130)
    gender: Optional[str] = None
    medical_history: List[str] = Field(default_factory=list, alias="medicalHistory")
    current_medications: List[str] = Field(
        default_factory=list, alias="currentMedications"
    )

    class Config:
        populate_by_name = True

    def to_wire(self) -> dict:
        """Serialize as the classifier's ``patient_data`` object."""
        data = self.model_dump(by_alias=True, exclude_none=True)
        # Empty lists mean "unknown", so leave them off the request
        return {key: value for key, value in data.items() if value != []}
