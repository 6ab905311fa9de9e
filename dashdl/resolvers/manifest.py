"""Manifest parsing into downloadable variants."""

from typing import List
from urllib.parse import urljoin

import structlog

from dashdl.core.logging import redact_url
from dashdl.models.documents import ManifestDocument, VariantEntry
from dashdl.models.video import Segment, Variant
from dashdl.resolvers.base import Resolver

logger = structlog.get_logger(__name__)


class ManifestParser(Resolver):
    """Decodes a segmented JSON manifest into Variant objects."""

    stage = "manifest"

    def parse(self, manifest_url: str) -> List[Variant]:
        """
        Fetch the manifest and build its video variants in manifest order.

        The manifest's base_url is resolved relative to manifest_url and
        shared by every variant.

        Args:
            manifest_url: Absolute manifest URL

        Returns:
            Variants as listed under "video"

        Raises:
            TransportError: If the manifest cannot be fetched
            InvalidFormatError: If a required field is missing, has the wrong
                type, or an init segment is not valid base64
        """
        payload = self.http.get_json(manifest_url, stage=self.stage)
        document = self._decode(ManifestDocument, payload, manifest_url)

        base_url = urljoin(manifest_url, document.base_url)
        variants = [self._build_variant(entry, base_url) for entry in document.video]

        logger.info(
            "Manifest parsed",
            manifest_url=redact_url(manifest_url),
            base_url=redact_url(base_url),
            variants=len(variants),
        )
        return variants

    def _build_variant(self, entry: VariantEntry, base_url: str) -> Variant:
        return Variant(
            id=entry.id,
            codecs=entry.codecs,
            bitrate=entry.bitrate,
            duration=entry.duration,
            width=entry.width,
            height=entry.height,
            init_segment=entry.init_segment,
            segments=tuple(Segment(url=s.url, size=s.size) for s in entry.segments),
            base_url=base_url,
        )
