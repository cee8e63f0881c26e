"""
Type definitions for the detection module.

This module defines the core data structures passed between the detector,
the cascade and region extraction.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from geometry import Corners, descale_corners


@dataclass
class DetectionAttempt:
    """Result of a single detector invocation.

    Attributes:
        found: Whether the detector located a code.
        corners: Corner points in the coordinate space of the image passed
                 to the detector (empty if not found).
        payload: Decoded text, or None if the code was located but could
                 not be decoded (or was not found at all).
    """

    found: bool
    corners: Corners = field(default_factory=list)
    payload: str | None = None

    @property
    def decoded(self) -> bool:
        return bool(self.payload)

    @classmethod
    def not_found(cls) -> DetectionAttempt:
        return cls(found=False)


@dataclass
class CascadeOutcome:
    """Terminal result of the detection cascade.

    Corners are always in original-image coordinates.

    Attributes:
        detected: True if any attempt located a code.
        payload: Decoded text, or None if the code was only located.
        corners: Corner points in original-image coordinates.
        variant: Name of the variant that produced the result
                 ("original" for the unprocessed image), None if undetected.
        attempts: Number of detector invocations made.
    """

    detected: bool
    payload: str | None = None
    corners: Corners = field(default_factory=list)
    variant: str | None = None
    attempts: int = 0

    @property
    def decoded(self) -> bool:
        return self.payload is not None

    @classmethod
    def undetected(cls, attempts: int = 0) -> CascadeOutcome:
        return cls(detected=False, attempts=attempts)

    @classmethod
    def from_attempt(
        cls,
        attempt: DetectionAttempt,
        variant: str,
        scale_factor: float,
        attempts: int,
    ) -> CascadeOutcome:
        """Build a detected outcome, descaling corners to original coordinates."""
        return cls(
            detected=True,
            payload=attempt.payload or None,
            corners=descale_corners(attempt.corners, scale_factor),
            variant=variant,
            attempts=attempts,
        )


@dataclass
class CroppedRegion:
    """A copied-out region of the original image around a located code.

    Attributes:
        image: Pixel data (owned copy, not a view of the source image).
        bbox: Region bounds as (x, y, w, h) in original-image coordinates.
    """

    image: np.ndarray
    bbox: tuple[int, int, int, int]

    @property
    def x(self) -> int:
        return self.bbox[0]

    @property
    def y(self) -> int:
        return self.bbox[1]

    @property
    def w(self) -> int:
        return self.bbox[2]

    @property
    def h(self) -> int:
        return self.bbox[3]
