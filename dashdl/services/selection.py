"""Variant selection policy."""

from typing import Sequence

from dashdl.exceptions import VariantNotFoundError
from dashdl.models.video import Variant


def select_best_variant(variants: Sequence[Variant]) -> Variant:
    """
    Pick the widest variant; ties go to the one listed first.

    Width stands in for quality. Bitrate and codec are not considered.

    Raises:
        VariantNotFoundError: If variants is empty
    """
    if not variants:
        raise VariantNotFoundError("Manifest lists no video variants", stage="manifest")
    # max() keeps the first of equal keys
    return max(variants, key=lambda v: v.width)
