"""Provider recommendation for a triage result.

Filters the provider directory by the triage's suggested action and ranks
what remains by distance, then rating.
"""

import math
import re
import logging
from typing import Dict, FrozenSet, List, Optional, Sequence

from healthnav.models.assessment import TriageResult
from healthnav.models.provider import Provider
from healthnav.models.triage import SuggestedAction

logger = logging.getLogger(__name__)

URGENT_SPECIALTIES = frozenset({"Urgent Care", "Emergency Medicine"})
TELE_CONSULT_SPECIALTIES = frozenset({"Tele-Consult"})

# None means every specialty is allowed
ALLOWED_SPECIALTIES: Dict[SuggestedAction, Optional[FrozenSet[str]]] = {
    SuggestedAction.EMERGENCY: URGENT_SPECIALTIES,
    SuggestedAction.URGENT_CARE: URGENT_SPECIALTIES,
    SuggestedAction.SELF_CARE: TELE_CONSULT_SPECIALTIES,
    SuggestedAction.CLINIC: None,
}

_LEADING_NUMBER = re.compile(r"^\s*(\d+(?:\.\d+)?)")


def parse_distance(distance_label: str) -> float:
    """Parse the leading number of a distance label.

    Args:
        distance_label: Label such as "0.8 mi" or "Virtual"

    Returns:
        Distance as a float, or infinity for labels with no leading number
    """
    match = _LEADING_NUMBER.match(distance_label or "")
    if not match:
        return math.inf
    return float(match.group(1))


def recommend(triage: TriageResult, directory: Sequence[Provider]) -> List[Provider]:
    """
    Shortlist providers for a triage result.

    Args:
        triage: Completed triage decision
        directory: Provider directory (not modified)

    Returns:
        Providers allowed for the suggested action, nearest first and
        higher rating first among equal distances. May be empty.
    """
    allowed = ALLOWED_SPECIALTIES[triage.suggested_action]
    candidates = [
        provider
        for provider in directory
        if allowed is None or provider.specialty in allowed
    ]

    candidates.sort(key=lambda p: (parse_distance(p.distance_label), -p.rating))

    logger.info(
        f"Recommended {len(candidates)} of {len(directory)} providers "
        f"for action {triage.suggested_action.value}"
    )
    return candidates


def format_provider_message(providers: Sequence[Provider]) -> str:
    """Format a provider shortlist into a user-friendly message.

    Args:
        providers: Ranked providers

    Returns:
        Formatted message string
    """
    if not providers:
        return (
            "No matching healthcare providers are available right now. "
            "If your symptoms get worse, call emergency services."
        )

    lines = []
    for i, p in enumerate(providers, 1):
        rating_str = f"⭐{p.rating:.1f}" if p.rating > 0 else "No rating"
        line = f"{i}. **{p.name}** ({p.specialty}) — {p.distance_label}\n   {rating_str}\n"
        if p.address:
            line += f"   📍 {p.address}\n"
        if p.phone:
            line += f"   📞 {p.phone}\n"
        if p.available_slots:
            line += f"   Next available: {', '.join(p.available_slots)}\n"
        lines.append(line)

    return "Here are the recommended providers for you:\n\n" + "\n".join(lines)
