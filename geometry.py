"""Shared geometry utilities for corner sets and rectangles."""

from __future__ import annotations

import math

# Corner set: list of [x, y] points outlining a located code
Corners = list[list[float]]


def corners_to_rect(corners: Corners) -> tuple[int, int, int, int]:
    """Integer bounding rectangle (x, y, w, h) enclosing all corners.

    Follows OpenCV boundingRect semantics: coordinates are floored and the
    rectangle includes the pixel containing the maximum point.
    """
    x_coords = [math.floor(p[0]) for p in corners]
    y_coords = [math.floor(p[1]) for p in corners]
    x, y = min(x_coords), min(y_coords)
    return x, y, max(x_coords) - x + 1, max(y_coords) - y + 1


def pad_and_clamp_rect(
    rect: tuple[int, int, int, int],
    padding: int,
    image_width: int,
    image_height: int,
) -> tuple[int, int, int, int]:
    """Grow a rectangle by padding on every side, then clamp to the image.

    Width and height are clamped against the adjusted origin, so the result
    never extends past the right or bottom edge.
    """
    x, y, w, h = rect
    x_new = max(0, x - padding)
    y_new = max(0, y - padding)
    w_new = min(image_width - x_new, w + 2 * padding)
    h_new = min(image_height - y_new, h + 2 * padding)
    return x_new, y_new, w_new, h_new


def descale_corners(corners: Corners, scale_factor: float) -> Corners:
    """Map corners from a resized image back to original coordinates."""
    if scale_factor == 1.0:
        return [[float(p[0]), float(p[1])] for p in corners]
    return [[p[0] / scale_factor, p[1] / scale_factor] for p in corners]
