"""Video data models for manifest variants and download results."""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Segment:
    """One addressable piece of a variant."""

    url: str  # relative to the variant base URL
    size: int  # declared bytes, checked after transfer


@dataclass(frozen=True)
class Variant:
    """One encoded rendition of the source video."""

    id: str
    codecs: str
    bitrate: int
    duration: float  # seconds
    width: int
    height: int
    init_segment: bytes
    segments: Tuple[Segment, ...]
    base_url: str  # absolute, shared by all variants of a manifest

    @property
    def resolution(self) -> str:
        return f"{self.width}x{self.height}"

    @property
    def total_size(self) -> int:
        """Sum of declared segment sizes; the init block is not included."""
        return sum(segment.size for segment in self.segments)

    def describe(self) -> str:
        return (
            f"{self.id}: {self.codecs}, {self.resolution}, "
            f"{self.duration} seconds, {self.bitrate} bitrate"
        )

    def __str__(self) -> str:
        return self.describe()


@dataclass
class DownloadResult:
    """Result of a download operation."""

    file_path: str
    file_size: int  # init block plus segment bytes
    segment_count: int
    variant_id: str
    duration: float  # seconds
