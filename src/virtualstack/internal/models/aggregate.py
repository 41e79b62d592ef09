"""Streaming sum and mean over an image iterator."""

import logging
from collections.abc import Iterable
from typing import Optional

import numpy as np

from ...common.exceptions import VirtualStackEmptyException
from .iterators import ImageIterator
from .validation import MaskValidation

logger = logging.getLogger(__name__)

ACCUMULATOR_DTYPE = np.float64


def sum_images(
    images: ImageIterator, mask: Optional[Iterable[int]] = None
) -> np.ndarray:
    """Sum the members of ``images`` selected by ``mask``.

    Every member is promoted to float64 before it is added, so integer
    members cannot overflow. Members outside the mask are still decoded
    to keep positions aligned with the iterator.

    Args:
        images: Fresh iterator over the stack
        mask: 1-based positions to include; all positions when omitted

    Returns:
        Elementwise float64 total with the shape of a single member

    Raises:
        VirtualStackEmptyException: If the iterator has no members
        VirtualStackValidationException: If the mask is not a set of positive integers
    """
    selected = MaskValidation(mask=mask).positions(images.length)

    if not images.more():
        raise VirtualStackEmptyException("Cannot aggregate an empty stack")

    logger.info(
        f"Summing {len(selected & set(range(1, images.length + 1)))} of "
        f"{images.length} members"
    )

    total: Optional[np.ndarray] = None
    position = 0
    while images.more():
        img = images.next().astype(ACCUMULATOR_DTYPE)
        position += 1
        if total is None:
            total = np.zeros_like(img)
        if position in selected:
            total += img

    return total


def mean_images(
    images: ImageIterator, length: int, mask: Optional[Iterable[int]] = None
) -> np.ndarray:
    """Sum the selected members and divide by the full stack ``length``.

    The divisor is the number of members in the stack, not the number of
    selected positions.
    """
    if length == 0:
        raise VirtualStackEmptyException("Cannot aggregate an empty stack")
    return sum_images(images, mask) / length
