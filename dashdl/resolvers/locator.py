"""Manifest URL lookup in the player config document."""

import structlog

from dashdl.core.logging import redact_url
from dashdl.models.documents import PlayerConfigDocument
from dashdl.resolvers.base import Resolver

logger = structlog.get_logger(__name__)


class ManifestLocator(Resolver):
    """Follows a player config to the manifest of its default DASH CDN."""

    stage = "config"

    def resolve(self, config_url: str) -> str:
        """
        Fetch the player config and return the default CDN's manifest URL.

        Only the "dash" delivery scheme is read; others are ignored.

        Args:
            config_url: Player config URL from the embedding page

        Returns:
            Manifest URL

        Raises:
            TransportError: If the config cannot be fetched
            InvalidFormatError: If the document lacks request.files.dash, its
                default_cdn or cdns, or default_cdn is not a key of cdns
        """
        payload = self.http.get_json(config_url, stage=self.stage)
        document = self._decode(PlayerConfigDocument, payload, config_url)

        manifest_url = document.manifest_url
        logger.info(
            "Manifest located",
            cdn=document.default_cdn,
            manifest_url=redact_url(manifest_url),
        )
        return manifest_url
