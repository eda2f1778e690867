"""Red flag detection for urgent patient turns."""

import re
from typing import List, Tuple


# Urgent symptom patterns by category, checked in order
RED_FLAG_PATTERNS = {
    "cardiac_emergency": [
        r"chest pain",
        r"crushing.*chest",
        r"pressure.*chest",
        r"chest.*tight",
        r"heart",
    ],
    "respiratory_emergency": [
        r"breath",
        r"gasping for air",
        r"choking",
    ],
}


def detect_red_flags(text: str) -> Tuple[bool, List[str]]:
    """
    Detect urgent red flags in a patient turn.

    Args:
        text: Patient message text

    Returns:
        Tuple of (has_red_flags, list_of_detected_categories)
    """
    text_lower = text.lower()
    detected_flags = []

    for category, patterns in RED_FLAG_PATTERNS.items():
        for pattern in patterns:
            if re.search(pattern, text_lower):
                detected_flags.append(category)
                break  # Only add category once

    return len(detected_flags) > 0, detected_flags


def get_red_flag_description(category: str) -> str:
    """Get human-readable description of red flag category."""
    descriptions = {
        "cardiac_emergency": "Possible heart-related emergency (chest pain, pressure)",
        "respiratory_emergency": "Breathing difficulty",
    }
    return descriptions.get(category, category)


def find_emergency_keywords(tokens: Tuple[str, ...], keywords: Tuple[str, ...]) -> List[str]:
    """Return the emergency keywords contained in any symptom token.

    Matching is case-insensitive substring containment, so a token such as
    "severe chest pain" matches the keyword "chest pain".
    """
    lowered = [token.lower() for token in tokens]
    return [
        keyword
        for keyword in keywords
        if any(keyword.lower() in token for token in lowered)
    ]
