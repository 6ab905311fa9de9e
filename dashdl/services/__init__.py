"""Service layer implementations."""

from dashdl.services.downloader import (
    CountingWriter,
    NullProgress,
    ProgressReporter,
    SegmentedDownloader,
)
from dashdl.services.pipeline import DownloadPipeline
from dashdl.services.selection import select_best_variant

__all__ = [
    # Downloader
    "CountingWriter",
    "NullProgress",
    "ProgressReporter",
    "SegmentedDownloader",
    # Pipeline
    "DownloadPipeline",
    # Selection
    "select_best_variant",
]
