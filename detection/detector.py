"""
QR detector interface and the OpenCV implementation.

A detector is a single-shot primitive: it looks at one image once and
reports what it sees. Retrying with enhanced images is the cascade's job.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import cv2
import numpy as np

from geometry import Corners

from .types import DetectionAttempt


class Detector(Protocol):
    """Interface for single-shot QR detectors."""

    def locate(self, image: np.ndarray) -> Corners:
        """Return the corner points of a QR code, or an empty list."""

    def locate_and_decode(self, image: np.ndarray) -> DetectionAttempt:
        """Locate a QR code and try to decode its payload."""


def points_to_corners(points: np.ndarray | None) -> Corners:
    """Convert OpenCV point output (any shape ending in 2) to a corner list."""
    if points is None:
        return []
    flat = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    return [[float(x), float(y)] for x, y in flat]


@dataclass(frozen=True)
class OpenCVQRDetector:
    """Detector backed by cv2.QRCodeDetector.

    A fresh cv2.QRCodeDetector is created for every call, so instances hold
    no state and can be shared between threads.
    """

    def locate(self, image: np.ndarray) -> Corners:
        found, points = cv2.QRCodeDetector().detect(image)
        if not found:
            return []
        return points_to_corners(points)

    def locate_and_decode(self, image: np.ndarray) -> DetectionAttempt:
        payload, points, _ = cv2.QRCodeDetector().detectAndDecode(image)
        corners = points_to_corners(points)
        if not corners:
            return DetectionAttempt.not_found()
        return DetectionAttempt(found=True, corners=corners, payload=payload or None)
