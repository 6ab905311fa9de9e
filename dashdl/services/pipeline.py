"""End-to-end pipeline: page to config to manifest to output file."""

from pathlib import Path
from typing import List, Optional, Union

import structlog

from dashdl.core.http import HttpClient
from dashdl.core.logging import redact_url
from dashdl.models.video import DownloadResult, Variant
from dashdl.resolvers import ManifestLocator, ManifestParser, PageConfigResolver
from dashdl.services.downloader import DEFAULT_CHUNK_SIZE, ProgressReporter, SegmentedDownloader
from dashdl.services.selection import select_best_variant

logger = structlog.get_logger(__name__)


class DownloadPipeline:
    """Runs the resolution stages and the segmented download in order.

    Every stage shares the same HttpClient. Errors from any stage
    propagate unchanged; nothing is retried.
    """

    def __init__(self, http: HttpClient, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        self.http = http
        self.page_resolver = PageConfigResolver(http)
        self.locator = ManifestLocator(http)
        self.parser = ManifestParser(http)
        self.downloader = SegmentedDownloader(http, chunk_size=chunk_size)

    def resolve_variants(self, page_url: str, referer: str) -> List[Variant]:
        """
        Follow page, player config and manifest to the list of variants.

        Args:
            page_url: URL of the embedding page
            referer: Referer header for the page request

        Returns:
            Variants in manifest order
        """
        logger.debug("stage_started", stage="page", url=redact_url(page_url))
        config_url = self.page_resolver.resolve(page_url, referer)
        logger.debug("stage_completed", stage="page")

        logger.debug("stage_started", stage="config", url=redact_url(config_url))
        manifest_url = self.locator.resolve(config_url)
        logger.debug("stage_completed", stage="config")

        logger.debug("stage_started", stage="manifest", url=redact_url(manifest_url))
        variants = self.parser.parse(manifest_url)
        logger.debug("stage_completed", stage="manifest", variants=len(variants))

        return variants

    def select_variant(self, variants: List[Variant]) -> Variant:
        """Pick the widest variant; ties go to the one listed first."""
        variant = select_best_variant(variants)
        logger.info("Variant selected", variant=variant.describe())
        return variant

    def download(
        self,
        variant: Variant,
        output_path: Union[str, Path],
        progress: Optional[ProgressReporter] = None,
    ) -> DownloadResult:
        """Write variant's init block and segments to output_path."""
        logger.debug("stage_started", stage="download", variant_id=variant.id)
        result = self.downloader.download(output_path, variant, progress=progress)
        logger.debug("stage_completed", stage="download")
        return result
