"""E2E test configuration and fixtures.

These fixtures run the command line entry point with:
- The HTTP transport replaced by a MockSession serving the sample site
- The working directory set to a temporary directory (no stray dashdl.yaml)
- Logging at WARNING so stdout carries only the user-facing lines
"""

from pathlib import Path
from typing import Callable, List

import pytest

from dashdl.core.config import HttpConfig
from dashdl.core.http import HttpClient
from dashdl.testing.fixtures import PAGE_URL, REFERER
from dashdl.testing.mock_http import MockSession, create_mock_client, install_sample_site


@pytest.fixture
def e2e_site(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> MockSession:
    """Sample site wired in place of the network for HttpClient.from_config."""
    session = install_sample_site(MockSession())

    def from_config(config: HttpConfig) -> HttpClient:
        return create_mock_client(
            session,
            timeout=config.timeout,
            user_agent=config.user_agent,
            verify_tls=config.verify_tls,
        )

    monkeypatch.setattr(HttpClient, "from_config", from_config)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("DASHDL_LOGGING_LEVEL", "WARNING")
    return session


@pytest.fixture
def cli_args(tmp_path: Path) -> Callable[..., List[str]]:
    """Build an argv for the sample page, writing to tmp_path."""

    def build(*extra: str, filename: str = "video.mp4") -> List[str]:
        return ["-u", PAGE_URL, "-r", REFERER, "-f", str(tmp_path / filename), *extra]

    return build
