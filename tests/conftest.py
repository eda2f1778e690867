"""Shared fixtures for the triage tests."""

import pytest

from healthnav.config.settings import TriageConfig
from tests.helpers import CLASSIFIER_URL


@pytest.fixture
def config():
    """Config with no classifier endpoint: every triage uses the fallback."""
    return TriageConfig()


@pytest.fixture
def remote_config():
    return TriageConfig(classifier_endpoint_url=CLASSIFIER_URL, classifier_timeout_ms=500)
