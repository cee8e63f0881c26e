"""Caller-facing detection operations, shared by the CLI and the web API.

Every function takes an image path or encoded byte buffer, runs
independently of every other call, and returns a pydantic result model.
Errors from loading or detection propagate to the caller unchanged.
"""

from __future__ import annotations

import logging

import numpy as np

from config import REGION_PADDING
from detection import (
    CascadeOutcome,
    Detector,
    OpenCVQRDetector,
    encode_cropped_region,
    extract_region,
    locate_only,
    run_cascade,
    to_data_uri,
)
from preprocessing import CascadeConfig
from sources import ImageInput, load_image

from .schemas import (
    DetectMultipleResult,
    DetectResult,
    HasCodeResult,
    QRCodeOut,
    corners_out,
)

logger = logging.getLogger(__name__)

DEFAULT_DETECTOR = OpenCVQRDetector()


def crop_data_uri(
    image: np.ndarray,
    outcome: CascadeOutcome,
    padding: int = REGION_PADDING,
) -> str | None:
    """PNG data URI of the padded region around a detected code, if extractable."""
    if not outcome.detected:
        return None
    region = extract_region(image, outcome.corners, padding)
    if region is None:
        return None
    return to_data_uri(encode_cropped_region(region))


def _decode_outcome(
    source: ImageInput,
    detector: Detector | None,
    config: CascadeConfig | None,
    artifact_dir: str | None,
) -> tuple[np.ndarray, CascadeOutcome]:
    image = load_image(source)
    outcome = run_cascade(
        image,
        detector or DEFAULT_DETECTOR,
        config=config,
        artifact_dir=artifact_dir,
    )
    return image, outcome


def detect_and_decode(
    source: ImageInput,
    detector: Detector | None = None,
    config: CascadeConfig | None = None,
    padding: int = REGION_PADDING,
    include_image: bool = True,
    artifact_dir: str | None = None,
) -> DetectResult:
    """Detect and decode a single QR code, running the full fallback cascade.

    Args:
        source: Image file path or encoded image bytes.
        detector: Detector to use. Defaults to OpenCVQRDetector.
        config: Cascade tuning parameters.
        padding: Crop padding in pixels for qr_code_image.
        include_image: Whether to include the cropped PNG data URI.
        artifact_dir: Optional directory to save every variant image.

    Raises:
        InvalidArgument: If source is neither a path nor bytes.
        DecodeError: If source cannot be parsed as an image.
        InternalFailure: If preprocessing or detection fails unexpectedly.
    """
    image, outcome = _decode_outcome(source, detector, config, artifact_dir)
    if not outcome.detected:
        return DetectResult(detected=False)

    return DetectResult(
        detected=True,
        data=outcome.payload,
        corners=corners_out(outcome.corners),
        qr_code_image=crop_data_uri(image, outcome, padding) if include_image else None,
        variant=outcome.variant,
    )


def detect_multiple(
    source: ImageInput,
    detector: Detector | None = None,
    config: CascadeConfig | None = None,
    padding: int = REGION_PADDING,
    include_image: bool = True,
) -> DetectMultipleResult:
    """Detect QR codes, reporting them as a list.

    Runs the same single-code cascade as detect_and_decode(), so the result
    holds at most one code.
    """
    image, outcome = _decode_outcome(source, detector, config, None)
    logger.debug("detect_multiple reports at most one code per image")
    if not outcome.detected:
        return DetectMultipleResult(detected=False, count=0, qr_codes=[])

    code = QRCodeOut(
        data=outcome.payload,
        corners=corners_out(outcome.corners),
        qr_code_image=crop_data_uri(image, outcome, padding) if include_image else None,
    )
    return DetectMultipleResult(detected=True, count=1, qr_codes=[code])


def has_code(source: ImageInput, detector: Detector | None = None) -> HasCodeResult:
    """Check for a QR code with a single locate call (no decoding, no cascade)."""
    image = load_image(source)
    corners = locate_only(image, detector or DEFAULT_DETECTOR)
    return HasCodeResult(has_qr_code=bool(corners), corners=corners_out(corners))
