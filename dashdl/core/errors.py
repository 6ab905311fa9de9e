"""Centralized error reporting for the command line.

This module provides standardized error codes, exception-to-error mapping,
process exit codes and the one-line failure message shown to the user.
"""

from typing import Dict, Optional, Type

import structlog

from dashdl.exceptions import (
    DashDLError,
    IntegrityError,
    InvalidFormatError,
    NotFoundError,
    OutputError,
    TransportError,
)

logger = structlog.get_logger(__name__)


class ErrorCode:
    """Standardized error codes.

    These codes provide machine-readable identifiers for failure conditions
    that wrapper scripts can use without parsing messages.
    """

    TRANSPORT_FAILED = "TRANSPORT_FAILED"
    NOT_FOUND = "NOT_FOUND"
    INVALID_FORMAT = "INVALID_FORMAT"
    INTEGRITY_FAILED = "INTEGRITY_FAILED"
    OUTPUT_FAILED = "OUTPUT_FAILED"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# Error code to process exit status mapping
ERROR_CODE_TO_EXIT_STATUS: Dict[str, int] = {
    ErrorCode.INTERNAL_ERROR: 1,
    ErrorCode.TRANSPORT_FAILED: 3,
    ErrorCode.NOT_FOUND: 4,
    ErrorCode.INVALID_FORMAT: 5,
    ErrorCode.INTEGRITY_FAILED: 6,
    ErrorCode.OUTPUT_FAILED: 7,
}

EXIT_INTERRUPTED = 130


# User-friendly suggestions for error resolution
ERROR_SUGGESTIONS: Dict[str, str] = {
    ErrorCode.TRANSPORT_FAILED: (
        "Check the network connection and that the URL is reachable. "
        "Embeds often reject requests without the correct --referer"
    ),
    ErrorCode.NOT_FOUND: (
        "The page did not expose a player config or the manifest lists no video. "
        "Verify the page URL points at the embed and the referer is accepted"
    ),
    ErrorCode.INVALID_FORMAT: (
        "The player config or manifest had an unexpected shape. "
        "The site may have changed its format"
    ),
    ErrorCode.INTEGRITY_FAILED: (
        "A segment's size did not match the manifest. The partial output was kept; "
        "run again to start over"
    ),
    ErrorCode.OUTPUT_FAILED: "Check the output path is writable and the disk has free space",
    ErrorCode.INTERNAL_ERROR: "An unexpected error occurred. Re-run with --log-level DEBUG",
}


# Exception type to error code mapping
# Order matters: subclasses must come before their base classes
EXCEPTION_TO_ERROR_CODE: Dict[Type[Exception], str] = {
    IntegrityError: ErrorCode.INTEGRITY_FAILED,
    TransportError: ErrorCode.TRANSPORT_FAILED,
    NotFoundError: ErrorCode.NOT_FOUND,
    InvalidFormatError: ErrorCode.INVALID_FORMAT,
    OutputError: ErrorCode.OUTPUT_FAILED,
}


class CLIError(Exception):
    """Structured error ready to be reported to the user."""

    def __init__(
        self,
        error_code: str,
        message: str,
        stage: Optional[str] = None,
        suggestion: Optional[str] = None,
    ):
        """Initialize a CLI error.

        Args:
            error_code: Machine-readable error code from ErrorCode class.
            message: Human-readable error message.
            stage: Pipeline stage that failed, if known.
            suggestion: Optional suggestion for resolution. If not provided,
                        the default suggestion for the error code is used.
        """
        self.error_code = error_code
        self.message = message
        self.stage = stage
        self.suggestion = suggestion or ERROR_SUGGESTIONS.get(error_code)
        super().__init__(message)

    @property
    def exit_status(self) -> int:
        return ERROR_CODE_TO_EXIT_STATUS.get(self.error_code, 1)


def map_exception_to_cli_error(exc: Exception) -> CLIError:
    """Map pipeline exceptions to CLIError.

    Uses EXCEPTION_TO_ERROR_CODE dictionary for type-based dispatch.
    Dictionary order ensures subclasses are checked before their base classes.

    Args:
        exc: The exception to map.

    Returns:
        A CLIError with the appropriate error code, message and stage.
    """
    if isinstance(exc, CLIError):
        return exc
    stage = exc.stage if isinstance(exc, DashDLError) else None
    for exc_type, error_code in EXCEPTION_TO_ERROR_CODE.items():
        if isinstance(exc, exc_type):
            return CLIError(error_code, str(exc), stage=stage)
    return CLIError(ErrorCode.INTERNAL_ERROR, f"An unexpected error occurred: {exc}", stage=stage)


def format_error(error: CLIError) -> str:
    """Render the failure line shown to the user.

    Args:
        error: The error to render.

    Returns:
        "error [<stage>] <CODE>: <message>", with a suggestion line if any.
    """
    stage = error.stage or "run"
    text = f"error [{stage}] {error.error_code}: {error.message}"
    if error.suggestion:
        text += f"\nhint: {error.suggestion}"
    return text


def report_exception(exc: Exception) -> CLIError:
    """Log an exception and return its CLIError.

    Known pipeline errors are logged as warnings; anything else is logged
    with its traceback.
    """
    error = map_exception_to_cli_error(exc)
    if error.error_code == ErrorCode.INTERNAL_ERROR:
        logger.error(
            "unhandled_exception",
            error_type=type(exc).__name__,
            error=str(exc),
            exc_info=exc,
        )
    else:
        logger.warning(
            "pipeline_error",
            error_code=error.error_code,
            error_type=type(exc).__name__,
            stage=error.stage,
            message=error.message,
        )
    return error
