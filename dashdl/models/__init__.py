"""Data models for the application."""

from dashdl.models.documents import ManifestDocument, PlayerConfigDocument
from dashdl.models.video import DownloadResult, Segment, Variant

__all__ = [
    "Segment",
    "Variant",
    "DownloadResult",
    "PlayerConfigDocument",
    "ManifestDocument",
]
