"""Testing support: canned documents and a mock HTTP session."""

from dashdl.testing.fixtures import SAMPLE_MANIFEST, SAMPLE_PAGE_HTML, SAMPLE_PLAYER_CONFIG
from dashdl.testing.mock_http import MockSession, create_mock_client, install_sample_site

__all__ = [
    "SAMPLE_MANIFEST",
    "SAMPLE_PAGE_HTML",
    "SAMPLE_PLAYER_CONFIG",
    "MockSession",
    "create_mock_client",
    "install_sample_site",
]
