"""
Region extraction around a located QR code.

The crop is the axis-aligned bounding box of the corner points, grown by a
padding margin to keep the code's quiet zone and clamped to the image.
"""

import logging

import numpy as np

from config import REGION_PADDING
from geometry import Corners, corners_to_rect, pad_and_clamp_rect

from .types import CroppedRegion

logger = logging.getLogger(__name__)

MIN_CORNERS = 4


def extract_region(
    image: np.ndarray,
    corners: Corners,
    padding: int = REGION_PADDING,
) -> CroppedRegion | None:
    """Copy out the padded bounding box of a located code.

    Args:
        image: Original image (grayscale or color).
        corners: Corner points in original-image coordinates.
        padding: Margin in pixels added on every side before clamping.

    Returns:
        CroppedRegion owning a copy of the pixels, or None if there are
        fewer than 4 corners or the box lies entirely outside the image.

    Raises:
        ValueError: If padding is negative.
    """
    if padding < 0:
        raise ValueError(f"padding must be non-negative, got {padding}")

    if len(corners) < MIN_CORNERS:
        return None

    img_height, img_width = image.shape[:2]
    x, y, w, h = pad_and_clamp_rect(
        corners_to_rect(corners), padding, img_width, img_height
    )

    if w <= 0 or h <= 0:
        logger.debug("Corners %s fall outside %sx%s image", corners, img_width, img_height)
        return None

    return CroppedRegion(image=image[y:y + h, x:x + w].copy(), bbox=(x, y, w, h))
