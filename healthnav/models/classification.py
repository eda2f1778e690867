"""Classifier wire schema and classification results."""

from pydantic import BaseModel, Field, StrictStr
from typing import List, Literal, Optional, Tuple, Union
from healthnav.models.triage import ClassifierSource, RiskLevel


class ClassifierRequest(BaseModel):
    """Request body posted to the scoring endpoint."""

    symptoms: List[str]
    patient_data: dict = Field(default_factory=dict)


class ClassifierResponse(BaseModel):
    """Response body expected from the scoring endpoint.

    Anything that does not validate against this schema is treated as a
    classifier failure, never as a partial success. Numbers and strings are
    strict: "0.9" is not a score.
    """

    urgency_score: float = Field(..., ge=0.0, le=1.0, strict=True)
    risk_level: RiskLevel
    recommended_specialty: StrictStr = Field(..., min_length=1)
    confidence: float = Field(..., ge=0.0, le=1.0, strict=True)
    key_findings: List[StrictStr]

    class Config:
        extra = "ignore"


class ClassificationResult(BaseModel):
    """Common output of the remote scorer and the fallback rule classifier."""

    urgency_score: float = Field(..., ge=0.0, le=1.0)
    risk_level: RiskLevel
    recommended_specialty: str
    confidence: float = Field(..., ge=0.0, le=1.0)
    key_findings: Tuple[str, ...] = ()

    # Internal provenance, left out of serialized output
    source: ClassifierSource = Field(default=ClassifierSource.PRIMARY, exclude=True)

    class Config:
        frozen = True

    @property
    def is_fallback(self) -> bool:
        return self.source == ClassifierSource.FALLBACK

    @classmethod
    def from_response(
        cls,
        response: ClassifierResponse,
        source: ClassifierSource = ClassifierSource.PRIMARY,
    ) -> "ClassificationResult":
        return cls(
            urgency_score=response.urgency_score,
            risk_level=response.risk_level,
            recommended_specialty=response.recommended_specialty,
            confidence=response.confidence,
            key_findings=tuple(response.key_findings),
            source=source,
        )


class ClassifierSuccess(BaseModel):
    """Remote scoring attempt that produced a valid result."""

    kind: Literal["success"] = "success"
    result: ClassificationResult


class ClassifierFailure(BaseModel):
    """Remote scoring attempt that failed; the caller must fall back."""

    kind: Literal["failure"] = "failure"
    reason: Literal["timeout", "unavailable", "invalid_response"]
    detail: Optional[str] = None


ClassifierOutcome = Union[ClassifierSuccess, ClassifierFailure]
