"""Tools package: remote classifier client and provider directory."""

from healthnav.tools.classifier_client import RemoteClassifierClient, score_mock
from healthnav.tools.provider_directory import (
    MOCK_PROVIDERS,
    get_provider,
    get_provider_directory,
)

__all__ = [
    "RemoteClassifierClient",
    "score_mock",
    "MOCK_PROVIDERS",
    "get_provider",
    "get_provider_directory",
]
