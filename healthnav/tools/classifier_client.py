"""Remote urgency classifier client.

Posts the patient's symptoms to the ML scoring endpoint and validates the
response against the classification schema. Failures are raised as typed
classifier errors so the urgency classifier can fall back to the rule set.

A development scorer (``score_mock``) mirrors the endpoint's behaviour for
local runs without network access, like the FHIR client's mock data.
"""

import asyncio
import httpx
import logging
from typing import Optional, Tuple
from pydantic import ValidationError

from healthnav.errors import (
    ClassifierInvalidResponse,
    ClassifierTimeout,
    ClassifierUnavailable,
)
from healthnav.models.classification import (
    ClassificationResult,
    ClassifierRequest,
    ClassifierResponse,
)
from healthnav.models.conversation import PatientContext
from healthnav.models.triage import ClassifierSource, RiskLevel

logger = logging.getLogger(__name__)


class RemoteClassifierClient:
    """HTTP client for the scoring endpoint."""

    def __init__(
        self,
        endpoint_url: Optional[str],
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.endpoint_url = endpoint_url
        self.timeout = timeout
        self._transport = transport

    async def score(
        self,
        symptoms: Tuple[str, ...],
        patient_context: Optional[PatientContext] = None,
    ) -> ClassificationResult:
        """Score symptoms with the remote classifier.

        Args:
            symptoms: Normalized symptom tokens
            patient_context: Optional patient data

        Returns:
            Validated ClassificationResult

        Raises:
            ClassifierUnavailable: No endpoint configured, transport error or non-2xx
            ClassifierTimeout: Request exceeded the timeout
            ClassifierInvalidResponse: Body is not JSON or fails schema validation
        """
        if not self.endpoint_url:
            raise ClassifierUnavailable("Classifier endpoint not configured")

        payload = ClassifierRequest(
            symptoms=list(symptoms),
            patient_data=patient_context.to_wire() if patient_context else {},
        )

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                resp = await client.post(self.endpoint_url, json=payload.model_dump())
                resp.raise_for_status()
                data = resp.json()
        except (httpx.TimeoutException, asyncio.TimeoutError) as e:
            raise ClassifierTimeout(f"Classifier timed out: {e}") from e
        except httpx.HTTPStatusError as e:
            raise ClassifierUnavailable(
                f"Classifier returned HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise ClassifierUnavailable(f"Classifier transport error: {e}") from e
        except ValueError as e:
            raise ClassifierInvalidResponse(f"Classifier returned non-JSON body: {e}") from e

        try:
            response = ClassifierResponse.model_validate(data)
        except ValidationError as e:
            raise ClassifierInvalidResponse(
                f"Classifier response failed validation: {e.error_count()} error(s)"
            ) from e

        logger.info(
            f"Classifier scored {len(symptoms)} symptom(s): "
            f"urgency_score={response.urgency_score}, risk_level={response.risk_level.value}"
        )
        return ClassificationResult.from_response(response)


def score_mock(symptoms: Tuple[str, ...]) -> ClassificationResult:
    """Development scorer standing in for the ML endpoint.

    Args:
        symptoms: Normalized symptom tokens

    Returns:
        ClassificationResult marked as mock-sourced
    """
    lowered = [s.lower() for s in symptoms]

    if any("chest pain" in s for s in lowered):
        return ClassificationResult(
            urgency_score=0.92,
            risk_level=RiskLevel.CRITICAL,
            recommended_specialty="Cardiology",
            confidence=0.94,
            key_findings=(
                "Chest pain detected - potential cardiac event",
                "Immediate evaluation recommended",
                "Consider ECG and cardiac biomarkers",
            ),
            source=ClassifierSource.MOCK,
        )

    if any("fever" in s for s in lowered):
        return ClassificationResult(
            urgency_score=0.58,
            risk_level=RiskLevel.MEDIUM,
            recommended_specialty="Internal Medicine",
            confidence=0.82,
            key_findings=(
                "Fever pattern suggests possible infection",
                "Monitor temperature trends",
                "Consider basic lab work",
            ),
            source=ClassifierSource.MOCK,
        )

    return ClassificationResult(
        urgency_score=0.35,
        risk_level=RiskLevel.LOW,
        recommended_specialty="General Practice",
        confidence=0.76,
        key_findings=(
            "Symptoms appear non-urgent",
            "Routine consultation recommended",
            "Self-care measures may be appropriate",
        ),
        source=ClassifierSource.MOCK,
    )
