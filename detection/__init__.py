"""
QR code detection module.

This module locates and decodes QR codes with OpenCV, retrying on enhanced
images when the plain image does not decode. It follows the same design
philosophy as the preprocessing module: pure functions, early validation,
and clear separation of concerns.

Key components:
- types: Core data structures (DetectionAttempt, CascadeOutcome, CroppedRegion)
- errors: Exception hierarchy (InvalidArgument, DecodeError, InternalFailure)
- detector: Detector protocol and the cv2.QRCodeDetector implementation
- cascade: The ordered fallback cascade and the single-call locate
- regions: Padded, clamped crop around a located code
- encoding: PNG / base64 encoding of crops

The main entry point is `run_cascade()` which returns a `CascadeOutcome`
with corners in original image coordinates.
"""

from .types import DetectionAttempt, CascadeOutcome, CroppedRegion
from .errors import QRScanError, InvalidArgument, DecodeError, InternalFailure
from .detector import Detector, OpenCVQRDetector, points_to_corners
from .cascade import run_cascade, locate_only, ORIGINAL_VARIANT
from .regions import extract_region
from .encoding import (
    encode_cropped_region,
    to_transport_text,
    to_data_uri,
    from_data_uri,
    PNG_DATA_URI_PREFIX,
)

__all__ = [
    "DetectionAttempt",
    "CascadeOutcome",
    "CroppedRegion",
    "QRScanError",
    "InvalidArgument",
    "DecodeError",
    "InternalFailure",
    "Detector",
    "OpenCVQRDetector",
    "points_to_corners",
    "run_cascade",
    "locate_only",
    "ORIGINAL_VARIANT",
    "extract_region",
    "encode_cropped_region",
    "to_transport_text",
    "to_data_uri",
    "from_data_uri",
    "PNG_DATA_URI_PREFIX",
]
