"""
Detection fallback cascade.

The cascade first hands the unmodified image to the detector. If that does
not produce a decoded payload, it converts the image to grayscale and walks
the ordered variant list from `preprocessing.build_variants`, re-submitting
each enhanced image to the detector until one decodes.

If no variant decodes but some attempt located the code, the first located
corners are returned without a payload. Corners from resized variants are
divided by the variant's scale factor, so outcomes are always in original
image coordinates.

A variant that finds nothing is not an error. An exception raised by a
preprocessing primitive or the detector aborts the cascade as
InternalFailure.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

import numpy as np

from geometry import Corners
from preprocessing import CascadeConfig, GrayscaleStep, VariantSpec, build_variants, validate_image

from .detector import Detector
from .errors import InternalFailure, InvalidArgument, QRScanError
from .types import CascadeOutcome, DetectionAttempt

logger = logging.getLogger(__name__)

ORIGINAL_VARIANT = "original"


@contextmanager
def _primitive_guard(stage: str) -> Iterator[None]:
    """Re-raise unexpected exceptions from OpenCV or the detector as InternalFailure."""
    try:
        yield
    except QRScanError:
        raise
    except Exception as exc:
        raise InternalFailure(f"{stage} failed: {exc}") from exc


def _check_image(image: np.ndarray) -> None:
    try:
        validate_image(image)
    except (TypeError, ValueError) as exc:
        raise InvalidArgument(str(exc)) from exc


def _try_variant(
    detector: Detector,
    gray: np.ndarray,
    variant: VariantSpec,
    artifact_dir: str | None,
    index: int,
) -> DetectionAttempt:
    with _primitive_guard(f"preprocessing variant {variant.name}"):
        result = variant.pipeline.run(
            gray,
            artifact_dir=artifact_dir,
            artifact_prefix=f"{index:02d}_{variant.group}_",
        )
    logger.debug("Variant %s: %s", variant.name, variant.pipeline.name)
    if result.artifact_paths:
        logger.debug("Saved %s", ", ".join(result.artifact_paths.values()))
    with _primitive_guard(f"detector on variant {variant.name}"):
        return detector.locate_and_decode(result.final)


def run_cascade(
    image: np.ndarray,
    detector: Detector,
    config: CascadeConfig | None = None,
    artifact_dir: str | None = None,
) -> CascadeOutcome:
    """Locate and decode a QR code, retrying with enhanced images on failure.

    Args:
        image: Input image (grayscale, RGB or RGBA uint8 array). Never modified.
        detector: Single-shot detector to submit each variant to.
        config: Cascade tuning parameters. If None, uses default settings.
        artifact_dir: Optional directory to save every variant image for
                     debugging.

    Returns:
        CascadeOutcome in original-image coordinates.

    Raises:
        InvalidArgument: If image is not a valid image array.
        ValueError: If config is invalid.
        InternalFailure: If a preprocessing primitive or the detector raises.
    """
    if config is None:
        config = CascadeConfig()
    config.validate()
    _check_image(image)

    with _primitive_guard("detector on original image"):
        attempt = detector.locate_and_decode(image)
    attempts = 1

    if attempt.decoded:
        logger.debug("Decoded QR code on original image")
        return CascadeOutcome.from_attempt(attempt, ORIGINAL_VARIANT, 1.0, attempts)

    # First attempt that located corners, kept as (attempt, variant name, scale)
    located: tuple[DetectionAttempt, str, float] | None = None
    if attempt.corners:
        located = (attempt, ORIGINAL_VARIANT, 1.0)

    with _primitive_guard("grayscale conversion"):
        gray = GrayscaleStep().apply(image)

    variants = build_variants(config, gray.shape)
    logger.debug(
        "Original image not decoded (located=%s), trying %s variants",
        located is not None,
        len(variants),
    )

    for index, variant in enumerate(variants):
        attempt = _try_variant(detector, gray, variant, artifact_dir, index)
        attempts += 1

        if attempt.decoded:
            logger.info(
                "Decoded QR code with variant %s after %s attempts",
                variant.name,
                attempts,
            )
            return CascadeOutcome.from_attempt(
                attempt, variant.name, variant.scale_factor, attempts
            )

        logger.debug("Variant %s: found=%s, not decoded", variant.name, attempt.found)
        if located is None and attempt.corners:
            located = (attempt, variant.name, variant.scale_factor)

    if located is not None:
        first_attempt, name, scale_factor = located
        logger.info("QR code located by %s but not decoded", name)
        return CascadeOutcome.from_attempt(first_attempt, name, scale_factor, attempts)

    logger.debug("No QR code found after %s attempts", attempts)
    return CascadeOutcome.undetected(attempts)


def locate_only(image: np.ndarray, detector: Detector) -> Corners:
    """Locate a QR code with exactly one detector call and no preprocessing.

    Raises:
        InvalidArgument: If image is not a valid image array.
        InternalFailure: If the detector raises.
    """
    _check_image(image)
    with _primitive_guard("detector locate"):
        return detector.locate(image)
