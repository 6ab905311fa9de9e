"""Pytest configuration and shared fixtures"""

import os

import pytest

from dashdl.core.http import HttpClient
from dashdl.testing.mock_http import MockSession, create_mock_client, install_sample_site


@pytest.fixture(autouse=True)
def reset_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Reset environment variables before each test"""
    # Clear any DASHDL_ prefixed environment variables
    for key in list(os.environ.keys()):
        if key.startswith("DASHDL_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def mock_session() -> MockSession:
    """Empty mock session; tests register the routes they need."""
    return MockSession()


@pytest.fixture
def http_client(mock_session: MockSession) -> HttpClient:
    """HttpClient backed by mock_session."""
    return create_mock_client(mock_session)


@pytest.fixture
def sample_site(mock_session: MockSession) -> MockSession:
    """mock_session serving the complete sample page, config, manifest and segments."""
    return install_sample_site(mock_session)
