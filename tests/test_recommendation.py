import math

import pytest

from healthnav.models.assessment import TriageResult
from healthnav.models.conversation import SymptomSet
from healthnav.models.provider import Provider
from healthnav.models.triage import SuggestedAction, UrgencyLevel
from healthnav.services.recommendation_service import (
    format_provider_message,
    parse_distance,
    recommend,
)
from healthnav.tools.provider_directory import MOCK_PROVIDERS

ACTION_LEVELS = {
    SuggestedAction.EMERGENCY: UrgencyLevel.EMERGENCY,
    SuggestedAction.URGENT_CARE: UrgencyLevel.HIGH,
    SuggestedAction.CLINIC: UrgencyLevel.MODERATE,
    SuggestedAction.SELF_CARE: UrgencyLevel.LOW,
}


def make_triage(action: SuggestedAction) -> TriageResult:
    return TriageResult(
        urgency_level=ACTION_LEVELS[action],
        primary_symptoms=SymptomSet(tokens=("headache",)),
        recommendation="test",
        suggested_action=action,
    )


def make_provider(id, specialty="General Practice", rating=4.0, distance="1.0 mi"):
    return Provider(
        id=id,
        name=f"Provider {id}",
        specialty=specialty,
        rating=rating,
        distance_label=distance,
    )


@pytest.mark.parametrize(
    "distance_label,expected",
    [
        ("0.8 mi", 0.8),
        ("12 mi", 12.0),
        (" 3.4 km", 3.4),
        ("Virtual", math.inf),
        ("", math.inf),
    ],
)
def test_parse_distance(distance_label, expected):
    assert parse_distance(distance_label) == expected


@pytest.mark.parametrize(
    "action,expected_ids",
    [
        (SuggestedAction.EMERGENCY, ["2", "5"]),
        (SuggestedAction.URGENT_CARE, ["2", "5"]),
        (SuggestedAction.SELF_CARE, ["4"]),
        (SuggestedAction.CLINIC, ["1", "2", "3", "5", "4"]),
    ],
)
def test_recommendation_per_action(action, expected_ids):
    providers = recommend(make_triage(action), MOCK_PROVIDERS)
    assert [p.id for p in providers] == expected_ids


def test_result_is_subset_of_directory():
    providers = recommend(make_triage(SuggestedAction.CLINIC), MOCK_PROVIDERS)
    assert all(p in MOCK_PROVIDERS for p in providers)


def test_equal_distance_prefers_higher_rating():
    directory = [
        make_provider("a", rating=4.1, distance="2 mi"),
        make_provider("b", rating=4.9, distance="2 mi"),
        make_provider("c", rating=3.0, distance="0.5 mi"),
    ]
    providers = recommend(make_triage(SuggestedAction.CLINIC), directory)
    assert [p.id for p in providers] == ["c", "b", "a"]


def test_directory_is_not_modified():
    directory = [
        make_provider("far", distance="9 mi"),
        make_provider("near", distance="1 mi"),
    ]
    recommend(make_triage(SuggestedAction.CLINIC), directory)
    assert [p.id for p in directory] == ["far", "near"]


def test_no_matching_providers_is_empty_not_an_error():
    directory = [make_provider("gp")]
    assert recommend(make_triage(SuggestedAction.EMERGENCY), directory) == []


def test_provider_message():
    providers = recommend(make_triage(SuggestedAction.SELF_CARE), MOCK_PROVIDERS)
    message = format_provider_message(providers)
    assert "TeleHealth Now" in message
    assert "Available Now" in message

    assert "No matching healthcare providers" in format_provider_message([])
