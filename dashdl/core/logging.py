"""Structured logging configuration with run_id propagation"""

import contextvars
import logging
import sys
from typing import Any, Dict, Optional
from urllib.parse import urlsplit, urlunsplit
from uuid import uuid4

import structlog


# Context variable for run_id propagation
run_id_var: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "run_id", default=None
)


def redact_url(url: str) -> str:
    """
    Strip query string and fragment from a URL for safe logging

    Player config and manifest URLs carry signed tokens in their query
    string; only scheme, host and path are kept.

    Args:
        url: The URL to redact

    Returns:
        URL without query and fragment
    """
    try:
        parts = urlsplit(url)
    except ValueError:
        return "[unparseable-url]"
    if not parts.query and not parts.fragment:
        return url
    return urlunsplit((parts.scheme, parts.netloc, parts.path, "", ""))


def add_run_id(
    logger: Any, method_name: str, event_dict: Dict[str, Any]
) -> Dict[str, Any]:
    """
    Add run_id to log entries from context variable

    Args:
        logger: The logger instance
        method_name: The logging method name
        event_dict: The event dictionary

    Returns:
        Updated event dictionary with run_id
    """
    run_id = get_run_id()
    if run_id:
        event_dict["run_id"] = run_id
    return event_dict


def configure_logging(log_level: str = "INFO", log_format: str = "console") -> None:
    """
    Configure structured logging with structlog

    Records go to stderr so stdout stays reserved for command output.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Output format ("json" or "console")
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=numeric_level,
    )

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_run_id,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if log_format == "json":
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a configured logger instance

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


def set_run_id(run_id: Optional[str] = None) -> str:
    """
    Set run_id in context variable

    Args:
        run_id: Optional run ID, generates one if not provided

    Returns:
        The run_id that was set
    """
    if run_id is None:
        run_id = f"run_{uuid4().hex[:12]}"
    run_id_var.set(run_id)
    return run_id


def get_run_id() -> Optional[str]:
    """
    Get current run_id from context variable

    Returns:
        Current run_id or None
    """
    return run_id_var.get()


def clear_run_id() -> None:
    """Clear run_id from context variable"""
    run_id_var.set(None)
