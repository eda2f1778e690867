"""Urgency mapper: classifier score to urgency level and care pathway."""

from typing import NamedTuple, Optional, Tuple

from healthnav.agents.prompts import FALLBACK_NOTE, RECOMMENDATION_TEMPLATES
from healthnav.models.assessment import TriageResult
from healthnav.models.classification import ClassificationResult
from healthnav.models.conversation import SymptomSet
from healthnav.models.triage import SuggestedAction, UrgencyLevel


class UrgencyTier(NamedTuple):
    min_score: float
    urgency_level: UrgencyLevel
    suggested_action: SuggestedAction
    estimated_wait_time: Optional[str]


# Checked top-down; lower bounds are inclusive
URGENCY_TIERS: Tuple[UrgencyTier, ...] = (
    UrgencyTier(0.8, UrgencyLevel.EMERGENCY, SuggestedAction.EMERGENCY, None),
    UrgencyTier(0.6, UrgencyLevel.HIGH, SuggestedAction.URGENT_CARE, "30-60 min"),
    UrgencyTier(0.4, UrgencyLevel.MODERATE, SuggestedAction.CLINIC, None),
    UrgencyTier(0.0, UrgencyLevel.LOW, SuggestedAction.SELF_CARE, None),
)


def tier_for_score(urgency_score: float) -> UrgencyTier:
    """Return the single threshold row an urgency score falls into."""
    for tier in URGENCY_TIERS:
        if urgency_score >= tier.min_score:
            return tier
    return URGENCY_TIERS[-1]


def render_recommendation(
    urgency_level: UrgencyLevel,
    specialty: str,
    key_findings: Tuple[str, ...],
) -> str:
    """Render the patient-facing recommendation for an urgency level.

    Findings are embedded verbatim, one bullet each, in order.
    """
    findings_list = "\n".join(f"• {finding}" for finding in key_findings)
    return RECOMMENDATION_TEMPLATES[urgency_level].format(
        findings=findings_list, specialty=specialty
    )


def map_to_triage(
    classification: ClassificationResult,
    symptoms: SymptomSet,
    annotate_fallback: bool = True,
) -> TriageResult:
    """
    Convert one classification into a TriageResult.

    Args:
        classification: Result from the primary scorer or the fallback
        symptoms: Snapshot of the session's symptoms
        annotate_fallback: Append a note when the fallback produced the result

    Returns:
        New TriageResult whose urgency level and action come from one tier
    """
    tier = tier_for_score(classification.urgency_score)

    recommendation = render_recommendation(
        tier.urgency_level,
        classification.recommended_specialty,
        classification.key_findings,
    )
    if annotate_fallback and classification.is_fallback:
        recommendation = f"{recommendation}\n\n{FALLBACK_NOTE}"

    return TriageResult(
        urgency_level=tier.urgency_level,
        primary_symptoms=symptoms,
        recommendation=recommendation,
        suggested_action=tier.suggested_action,
        estimated_wait_time=tier.estimated_wait_time,
        ml_confidence=classification.confidence,
        risk_score=classification.urgency_score * 100,
    )
