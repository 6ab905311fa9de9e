"""Segmented download with per-segment size verification.

The output is the variant's init block followed by every segment, in
manifest order. Each segment's transferred byte count must equal the size
declared in the manifest; the manifest carries no checksums, so this is the
only truncation and corruption check available.
"""

import time
from pathlib import Path
from typing import BinaryIO, Optional, Protocol, Union
from urllib.parse import urljoin

import structlog

from dashdl.core.http import HttpClient
from dashdl.core.logging import redact_url
from dashdl.exceptions import (
    IntegrityError,
    InvalidFormatError,
    OutputError,
    SegmentDownloadError,
    TransportError,
)
from dashdl.models.video import DownloadResult, Variant

logger = structlog.get_logger(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024


class ProgressReporter(Protocol):
    """Receives byte progress from the download loop."""

    def set_total(self, total: int) -> None: ...

    def update(self, amount: int) -> None: ...

    def close(self) -> None: ...


class NullProgress:
    """Progress reporter that ignores everything."""

    def set_total(self, total: int) -> None:
        pass

    def update(self, amount: int) -> None:
        pass

    def close(self) -> None:
        pass


class CountingWriter:
    """Write-through wrapper that counts bytes written to a file object."""

    def __init__(self, fileobj: BinaryIO):
        self._fileobj = fileobj
        self.count = 0

    def write(self, data: bytes) -> int:
        try:
            self._fileobj.write(data)
        except OSError as e:
            raise OutputError(f"Writing output failed: {e}", stage="download") from e
        self.count += len(data)
        return len(data)


class SegmentedDownloader:
    """Downloads one variant into a single file, segment by segment."""

    def __init__(self, http: HttpClient, chunk_size: int = DEFAULT_CHUNK_SIZE):
        """
        Initialize the downloader.

        Args:
            http: Shared transport
            chunk_size: Bytes per streamed read
        """
        self.http = http
        self.chunk_size = chunk_size

    def download(
        self,
        output_path: Union[str, Path],
        variant: Variant,
        progress: Optional[ProgressReporter] = None,
    ) -> DownloadResult:
        """
        Write variant's init block and segments to output_path.

        Progress totals the declared segment sizes and advances after each
        segment passes its size check. On failure the partial file is left
        on disk as-is.

        Args:
            output_path: Destination file, created or truncated
            variant: Variant to download
            progress: Optional progress reporter

        Returns:
            Download result with file path and byte counts

        Raises:
            InvalidFormatError: If the variant has no segments
            OutputError: If the output cannot be created or written
            SegmentDownloadError: If a segment request fails
            IntegrityError: If a segment's byte count differs from its declared size
        """
        if not variant.segments:
            raise InvalidFormatError(f"Variant {variant.id} has no segments", stage="download")

        progress = progress or NullProgress()
        path = Path(output_path)
        total = variant.total_size
        start_time = time.monotonic()

        logger.info(
            "Starting download",
            variant_id=variant.id,
            resolution=variant.resolution,
            segments=len(variant.segments),
            total_bytes=total,
            output=str(path),
        )

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            output = open(path, "wb")
        except OSError as e:
            raise OutputError(f"Cannot create output file {path}: {e}", stage="download") from e

        progress.set_total(total)
        written = 0
        try:
            with output:
                CountingWriter(output).write(variant.init_segment)
                written += len(variant.init_segment)

                for index, segment in enumerate(variant.segments):
                    url = urljoin(variant.base_url, segment.url)
                    count = self._fetch_segment(index, url, output)
                    if count != segment.size:
                        logger.error(
                            "Segment size mismatch",
                            segment_index=index,
                            url=redact_url(url),
                            expected=segment.size,
                            observed=count,
                        )
                        raise IntegrityError(index, url, expected=segment.size, observed=count)

                    written += count
                    progress.update(count)
                    logger.debug(
                        "Segment verified", segment_index=index, url=redact_url(url), size=count
                    )
        except OSError as e:
            # Buffered data is flushed on close
            raise OutputError(f"Writing output file {path} failed: {e}", stage="download") from e

        progress.close()
        duration = time.monotonic() - start_time

        logger.info(
            "Download completed",
            variant_id=variant.id,
            file_path=str(path),
            file_size=written,
            duration=duration,
        )

        return DownloadResult(
            file_path=str(path),
            file_size=written,
            segment_count=len(variant.segments),
            variant_id=variant.id,
            duration=duration,
        )

    def _fetch_segment(self, index: int, url: str, output: BinaryIO) -> int:
        """Stream one segment onto the end of output and return the bytes transferred."""
        writer = CountingWriter(output)
        try:
            for chunk in self.http.iter_content(url, chunk_size=self.chunk_size, stage="download"):
                writer.write(chunk)
        except TransportError as e:
            logger.error(
                "Segment request failed",
                segment_index=index,
                url=redact_url(url),
                status_code=e.status_code,
                error=str(e),
            )
            raise SegmentDownloadError(
                f"Segment {index} ({redact_url(url)}) failed: {e}",
                segment_index=index,
                url=url,
                status_code=e.status_code,
            ) from e
        return writer.count
