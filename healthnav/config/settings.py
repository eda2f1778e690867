"""Application configuration and settings."""

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings
from typing import Optional, Tuple

DEFAULT_EMERGENCY_KEYWORDS = (
    "chest pain,difficulty breathing,severe bleeding,unconscious"
)

DEFAULT_SYMPTOM_VOCABULARY = (
    "headache,fever,cough,sore throat,fatigue,nausea,chest pain,"
    "shortness of breath,abdominal pain,dizziness,difficulty breathing,"
    "severe bleeding,unconscious,vomiting,diarrhea,rash,back pain,"
    "body aches,chills,congestion,runny nose,earache,toothache,"
    "palpitations,numbness,confusion,fainting,swelling"
)


def split_keywords(raw: str) -> Tuple[str, ...]:
    """Split a comma-separated keyword string into lowercase phrases.

    Blank entries and repeats are dropped; the first occurrence wins.
    """
    phrases = []
    for part in raw.split(","):
        phrase = part.strip().lower()
        if phrase and phrase not in phrases:
            phrases.append(phrase)
    return tuple(phrases)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Service Configuration
    service_name: str = "healthnav-triage"
    port: int = 8005
    environment: str = "development"

    # Remote Classifier
    classifier_endpoint_url: Optional[str] = None
    classifier_timeout_ms: int = 5000
    classifier_use_mock: bool = False  # Use the development scorer instead of HTTP

    # Safety Settings
    emergency_keywords: str = DEFAULT_EMERGENCY_KEYWORDS
    symptom_vocabulary: str = DEFAULT_SYMPTOM_VOCABULARY
    min_turns_before_analysis: int = 4
    annotate_fallback: bool = True

    # Booking
    booking_placeholder_date: str = "TBD"  # Date used for slots without a day

    # Logging
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = False


class TriageConfig(BaseModel):
    """Explicit configuration object handed to the triage core.

    Sessions receive one of these instead of reading ``settings`` directly,
    so callers can run isolated engines with their own keyword sets,
    turn thresholds and classifier endpoints.
    """

    classifier_endpoint_url: Optional[str] = None
    classifier_timeout_ms: int = Field(default=5000, gt=0)
    classifier_use_mock: bool = False
    emergency_keywords: Tuple[str, ...] = split_keywords(DEFAULT_EMERGENCY_KEYWORDS)
    symptom_vocabulary: Tuple[str, ...] = split_keywords(DEFAULT_SYMPTOM_VOCABULARY)
    min_turns_before_analysis: int = Field(default=4, ge=1)
    annotate_fallback: bool = True
    booking_placeholder_date: str = "TBD"

    class Config:
        frozen = True

    @property
    def classifier_timeout_s(self) -> float:
        return self.classifier_timeout_ms / 1000.0

    @classmethod
    def from_settings(cls, source: Optional[Settings] = None) -> "TriageConfig":
        """Build the triage configuration from environment-backed settings."""
        source = source or settings
        return cls(
            classifier_endpoint_url=source.classifier_endpoint_url,
            classifier_timeout_ms=source.classifier_timeout_ms,
            classifier_use_mock=source.classifier_use_mock,
            emergency_keywords=split_keywords(source.emergency_keywords),
            symptom_vocabulary=split_keywords(source.symptom_vocabulary),
            min_turns_before_analysis=source.min_turns_before_analysis,
            annotate_fallback=source.annotate_fallback,
            booking_placeholder_date=source.booking_placeholder_date,
        )


# Global settings instance
settings = Settings()
