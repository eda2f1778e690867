"""Keyword-based symptom extraction from patient turns."""

from typing import Iterable, List, Sequence, Tuple
from healthnav.models.conversation import SymptomSet


def _match_positions(text: str, vocabulary: Sequence[str]) -> List[Tuple[int, int, str]]:
    lowered = text.lower()
    matches = []
    for rank, phrase in enumerate(vocabulary):
        position = lowered.find(phrase.lower())
        if position >= 0:
            matches.append((position, rank, phrase.lower()))
    return sorted(matches)


def extract_tokens(text: str, vocabulary: Sequence[str]) -> List[str]:
    """Symptom tokens found in one text, ordered by where they appear."""
    return [phrase for _, _, phrase in _match_positions(text, vocabulary)]


def extract_symptoms(texts: Iterable[str], vocabulary: Sequence[str]) -> SymptomSet:
    """
    Turn an ordered sequence of patient turn texts into a SymptomSet.

    Each vocabulary phrase is matched case-insensitively as a substring.
    Tokens keep the order of their first occurrence across the turns and
    duplicates collapse. Turns with no match contribute nothing.

    Args:
        texts: Patient turn texts in conversation order
        vocabulary: Known symptom phrases

    Returns:
        SymptomSet with normalized (lowercase) tokens
    """
    symptoms = SymptomSet()
    for text in texts:
        symptoms = symptoms.merge(extract_tokens(text, vocabulary))
    return symptoms
