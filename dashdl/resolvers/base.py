"""Common base for the link-following resolution stages."""

from typing import Any, Type, TypeVar

import structlog
from pydantic import BaseModel, ValidationError

from dashdl.core.http import HttpClient
from dashdl.core.logging import redact_url
from dashdl.exceptions import InvalidFormatError

logger = structlog.get_logger(__name__)

DocumentT = TypeVar("DocumentT", bound=BaseModel)


def describe_validation_error(exc: ValidationError) -> str:
    """
    Summarize the first validation failure as "<field.path>: <message>".

    Args:
        exc: Error raised by a document model

    Returns:
        Short description naming the offending field
    """
    errors = exc.errors()
    if not errors:
        return str(exc)
    first = errors[0]
    path = ".".join(str(part) for part in first.get("loc", ())) or "<document>"
    summary = f"{path}: {first.get('msg', 'invalid value')}"
    if len(errors) > 1:
        summary += f" (and {len(errors) - 1} more)"
    return summary


class Resolver:
    """Base class for stages that fetch one document and derive the next reference."""

    stage: str = ""

    def __init__(self, http: HttpClient):
        """
        Initialize the resolver.

        Args:
            http: Shared transport used for every request of this stage
        """
        self.http = http

    def _decode(self, model: Type[DocumentT], payload: Any, url: str) -> DocumentT:
        """
        Validate a parsed JSON payload against a document model.

        Raises:
            InvalidFormatError: If the payload does not match the model
        """
        try:
            return model.model_validate(payload)
        except ValidationError as e:
            detail = describe_validation_error(e)
            logger.warning(
                "document_invalid",
                stage=self.stage,
                url=redact_url(url),
                document=model.__name__,
                error=detail,
            )
            raise InvalidFormatError(
                f"{model.__name__} from {redact_url(url)} is malformed: {detail}",
                stage=self.stage,
            ) from e
