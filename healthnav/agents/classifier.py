"""Urgency classifier with deterministic rule-based fallback."""

import asyncio
import logging
from typing import Optional, Tuple

from healthnav.config.settings import TriageConfig
from healthnav.errors import ClassifierError
from healthnav.models.classification import (
    ClassificationResult,
    ClassifierFailure,
    ClassifierOutcome,
    ClassifierSuccess,
)
from healthnav.models.conversation import PatientContext, SymptomSet
from healthnav.models.triage import ClassifierSource, RiskLevel
from healthnav.tools.classifier_client import RemoteClassifierClient, score_mock
from healthnav.utils.red_flags import find_emergency_keywords

logger = logging.getLogger(__name__)


def fallback_classify(
    symptoms: SymptomSet, emergency_keywords: Tuple[str, ...]
) -> ClassificationResult:
    """
    Rule-based classification used when the remote scorer fails.

    Pure and non-blocking: the same symptoms and keywords always give the
    same result, and no I/O is performed.

    Args:
        symptoms: Symptoms collected so far
        emergency_keywords: Phrases that escalate straight to critical

    Returns:
        ClassificationResult marked as fallback-sourced
    """
    matched = find_emergency_keywords(symptoms.tokens, emergency_keywords)
    if matched:
        return ClassificationResult(
            urgency_score=0.95,
            risk_level=RiskLevel.CRITICAL,
            recommended_specialty="Emergency Medicine",
            confidence=0.85,
            key_findings=(
                "Emergency symptoms detected",
                "Immediate medical attention required",
            ),
            source=ClassifierSource.FALLBACK,
        )

    return ClassificationResult(
        urgency_score=0.45,
        risk_level=RiskLevel.MEDIUM,
        recommended_specialty="General Practice",
        confidence=0.70,
        key_findings=tuple(symptoms.tokens[:3]),
        source=ClassifierSource.FALLBACK,
    )


class UrgencyClassifier:
    """Wraps the remote scorer and composes it with the fallback rules."""

    def __init__(
        self,
        config: TriageConfig,
        client: Optional[RemoteClassifierClient] = None,
    ):
        self.config = config
        self.client = client or RemoteClassifierClient(
            endpoint_url=config.classifier_endpoint_url,
            timeout=config.classifier_timeout_s,
        )

    async def score(
        self,
        symptoms: SymptomSet,
        patient_context: Optional[PatientContext] = None,
    ) -> ClassifierOutcome:
        """
        Ask the primary scorer for a classification, bounded by the timeout.

        Returns:
            ClassifierSuccess with the validated result, or ClassifierFailure
            carrying the failure reason. Never raises for classifier errors.
        """
        if self.config.classifier_use_mock:
            return ClassifierSuccess(result=score_mock(symptoms.tokens))

        timeout = self.config.classifier_timeout_s
        try:
            result = await asyncio.wait_for(
                self.client.score(symptoms.tokens, patient_context), timeout=timeout
            )
            return ClassifierSuccess(result=result)

        except asyncio.TimeoutError:
            logger.warning(f"⏱️ Classifier timed out after {timeout}s")
            return ClassifierFailure(reason="timeout", detail=f"no answer in {timeout}s")

        except ClassifierError as e:
            logger.warning(f"Classifier failed ({e.reason}): {e}")
            return ClassifierFailure(reason=e.reason, detail=str(e))

        except Exception as e:
            logger.exception(f"Unexpected classifier error: {e}")
            return ClassifierFailure(reason="unavailable", detail=str(e))

    def fallback(self, symptoms: SymptomSet) -> ClassificationResult:
        return fallback_classify(symptoms, self.config.emergency_keywords)

    async def classify(
        self,
        symptoms: SymptomSet,
        patient_context: Optional[PatientContext] = None,
    ) -> ClassificationResult:
        """Classify symptoms, falling back to the rule set on any failure."""
        outcome = await self.score(symptoms, patient_context)
        if isinstance(outcome, ClassifierSuccess):
            return outcome.result

        logger.info(f"Using fallback classifier (reason: {outcome.reason})")
        return self.fallback(symptoms)
