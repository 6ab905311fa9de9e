"""Typed decode models for the player config and manifest JSON documents.

These models replace ad-hoc dictionary navigation: a document either
validates into a structured object or fails with a pydantic
ValidationError that names the offending field path.
"""

import base64
import binascii
import json
from typing import Annotated, Any, Dict, List

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    StrictStr,
    ValidationError,
    field_validator,
    model_validator,
)

NonNegativeStrictInt = Annotated[StrictInt, Field(ge=0)]


def decode_base64(value: str) -> bytes:
    """Decode standard-alphabet base64, with or without trailing padding.

    Raises:
        ValueError: If the value contains characters outside the alphabet
            or has an impossible length
    """
    padded = value + "=" * (-len(value) % 4)
    try:
        return base64.b64decode(padded, validate=True)
    except binascii.Error as e:
        raise ValueError(f"invalid base64 payload: {e}") from e


def stringify_scalar(value: Any) -> str:
    """Render a JSON scalar as text: strings verbatim, other scalars as their JSON form."""
    if isinstance(value, str):
        return value
    if isinstance(value, (bool, int, float)):
        return json.dumps(value)
    raise ValueError("must be a string, number or boolean")


class _Document(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


# ---------------------------------------------------------------------------
# Player config document
# ---------------------------------------------------------------------------


class CdnDescriptor(_Document):
    """One delivery endpoint."""

    url: StrictStr


class DashFiles(_Document):
    default_cdn: StrictStr
    # Only the default entry is read; the others may have any shape
    cdns: Dict[str, Any]

    @model_validator(mode="after")
    def default_cdn_must_be_usable(self) -> "DashFiles":
        if self.default_cdn not in self.cdns:
            raise ValueError(
                f"default_cdn {self.default_cdn!r} is not one of the listed cdns "
                f"{sorted(self.cdns)}"
            )
        try:
            CdnDescriptor.model_validate(self.cdns[self.default_cdn])
        except ValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(part) for part in first["loc"])
            path = f"cdns.{self.default_cdn}.{field}" if field else f"cdns.{self.default_cdn}"
            raise ValueError(f"{path}: {first['msg']}") from None
        return self

    @property
    def default_descriptor(self) -> CdnDescriptor:
        return CdnDescriptor.model_validate(self.cdns[self.default_cdn])


class PlayerFiles(_Document):
    dash: DashFiles


class PlayerRequest(_Document):
    files: PlayerFiles


class PlayerConfigDocument(_Document):
    """Player configuration JSON referenced from the embedding page."""

    request: PlayerRequest

    @property
    def default_cdn(self) -> str:
        return self.request.files.dash.default_cdn

    @property
    def manifest_url(self) -> str:
        return self.request.files.dash.default_descriptor.url


# ---------------------------------------------------------------------------
# Manifest document
# ---------------------------------------------------------------------------


class SegmentEntry(_Document):
    url: StrictStr
    size: NonNegativeStrictInt


class VariantEntry(_Document):
    """A video rendition as listed in the manifest."""

    id: str
    codecs: str
    bitrate: NonNegativeStrictInt
    duration: Annotated[float, Field(ge=0)]
    width: NonNegativeStrictInt
    height: NonNegativeStrictInt
    init_segment: bytes
    segments: List[SegmentEntry]

    @field_validator("id", "codecs", mode="before")
    @classmethod
    def stringify(cls, v: Any) -> str:
        return stringify_scalar(v)

    @field_validator("duration", mode="before")
    @classmethod
    def require_number(cls, v: Any) -> Any:
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise ValueError("must be a number")
        return v

    @field_validator("init_segment", mode="before")
    @classmethod
    def decode_init_segment(cls, v: Any) -> bytes:
        if not isinstance(v, str):
            raise ValueError("must be a base64 string")
        return decode_base64(v)


class ManifestDocument(_Document):
    """Segmented manifest JSON."""

    base_url: StrictStr
    video: List[VariantEntry]
