"""Player config URL extraction from an embedding page."""

import html
import re
from typing import Optional

import structlog

from dashdl.core.logging import redact_url
from dashdl.exceptions import ConfigNotFoundError
from dashdl.resolvers.base import Resolver

logger = structlog.get_logger(__name__)


class PageConfigResolver(Resolver):
    """Finds the data-config-url attribute of an embedding page."""

    stage = "page"

    CONFIG_URL_PATTERN = re.compile(r'data-config-url="([^"]+)"')

    def resolve(self, page_url: str, referer: str) -> str:
        """
        Fetch the page and return its player config URL.

        Args:
            page_url: URL of the embedding page
            referer: Value sent in the Referer header; embeds commonly refuse without it

        Returns:
            HTML-entity decoded config URL

        Raises:
            TransportError: If the page cannot be fetched
            ConfigNotFoundError: If the page has no data-config-url marker
        """
        logger.info("Resolving player config", page_url=redact_url(page_url))

        body = self.http.get_text(page_url, headers={"Referer": referer}, stage=self.stage)
        config_url = self.extract_config_url(body)
        if config_url is None:
            raise ConfigNotFoundError(
                f"Did not find a video config url in {redact_url(page_url)}", stage=self.stage
            )

        logger.info("Player config found", config_url=redact_url(config_url))
        return config_url

    def extract_config_url(self, body: str) -> Optional[str]:
        """Return the first entity-decoded data-config-url value in body, or None."""
        match = self.CONFIG_URL_PATTERN.search(body)
        if not match:
            return None
        return html.unescape(match.group(1))
