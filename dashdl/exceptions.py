"""Exceptions raised by the resolution and download pipeline."""

from typing import Optional

from dashdl.core.logging import redact_url


class DashDLError(Exception):
    """Base exception for resolution and download errors."""

    def __init__(self, message: str, stage: Optional[str] = None):
        self.stage = stage
        super().__init__(message)


class TransportError(DashDLError):
    """Raised on connection failures, timeouts and non-success HTTP statuses."""

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        stage: Optional[str] = None,
    ):
        self.url = url
        self.status_code = status_code
        super().__init__(message, stage=stage)


class SegmentDownloadError(TransportError):
    """Raised when fetching a single segment fails at the transport level."""

    def __init__(
        self,
        message: str,
        segment_index: int,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        self.segment_index = segment_index
        super().__init__(message, url=url, status_code=status_code, stage="download")


class NotFoundError(DashDLError):
    """Raised when an expected structural marker is absent."""

    pass


class ConfigNotFoundError(NotFoundError):
    """Raised when the page carries no player config URL marker."""

    pass


class VariantNotFoundError(NotFoundError):
    """Raised when a manifest offers no variant to select."""

    pass


class InvalidFormatError(DashDLError):
    """Raised when a document lacks a required field or has one of the wrong type."""

    pass


class IntegrityError(DashDLError):
    """Raised when a segment's transferred byte count differs from its declared size."""

    def __init__(self, segment_index: int, url: str, expected: int, observed: int):
        self.segment_index = segment_index
        self.url = url
        self.expected = expected
        self.observed = observed
        super().__init__(
            f"Invalid byte count for segment {segment_index} ({redact_url(url)}): "
            f"read={observed}, expected={expected}",
            stage="download",
        )


class OutputError(DashDLError):
    """Raised when the output file cannot be created or written."""

    pass
