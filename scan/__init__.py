"""Detection service package (single-image operations and batch scans)."""

from .service import detect_and_decode, detect_multiple, has_code, crop_data_uri
from .pipeline import ScanRecord, scan_file, scan_files, summarize
from .schemas import (
    CornerOut,
    DetectResult,
    QRCodeOut,
    DetectMultipleResult,
    HasCodeResult,
    ErrorOut,
)

__all__ = [
    "detect_and_decode",
    "detect_multiple",
    "has_code",
    "crop_data_uri",
    "ScanRecord",
    "scan_file",
    "scan_files",
    "summarize",
    "CornerOut",
    "DetectResult",
    "QRCodeOut",
    "DetectMultipleResult",
    "HasCodeResult",
    "ErrorOut",
]
