"""Pytest configuration and shared fixtures for flotiq-client tests."""

import pytest

from flotiq_client.configuration import Configuration
from flotiq_client.testing import RequestRecorder, mock_fetch


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    """Auto-cleanup: Clear test-related environment variables before each test."""
    import os

    test_prefixes = ("TEST_", "API_", "FLOTIQ_")

    for key in list(os.environ.keys()):
        if any(key.startswith(prefix) for prefix in test_prefixes):
            monkeypatch.delenv(key, raising=False)

    yield


@pytest.fixture
def recorder():
    """Records dispatched requests and answers 200 with an empty listing."""
    return RequestRecorder(json={"total_count": 0, "count": 0, "total_pages": 0, "current_page": 1, "data": []})


@pytest.fixture
def configuration(recorder):
    return Configuration({"api_key": "test-key", "fetch_api": mock_fetch(recorder)})
