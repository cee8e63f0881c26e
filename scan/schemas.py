"""Pydantic models for detection results.

These define the exact shape returned by the service functions, printed by
the CLI and served by the web API.
"""

from pydantic import BaseModel, Field

from geometry import Corners


class CornerOut(BaseModel):
    """A single corner point in original-image pixel coordinates."""
    x: float
    y: float


def corners_out(corners: Corners) -> list[CornerOut]:
    return [CornerOut(x=p[0], y=p[1]) for p in corners]


class DetectResult(BaseModel):
    """Result of detect_and_decode().

    qr_code_image is a PNG data URI of the padded crop around the code,
    present whenever at least 4 corners were located and images were
    requested.
    """
    detected: bool
    data: str | None = None
    corners: list[CornerOut] = Field(default_factory=list)
    qr_code_image: str | None = None
    variant: str | None = None


class QRCodeOut(BaseModel):
    """One entry of DetectMultipleResult.qr_codes."""
    data: str | None = None
    corners: list[CornerOut] = Field(default_factory=list)
    qr_code_image: str | None = None


class DetectMultipleResult(BaseModel):
    """Result of detect_multiple(). count is always 0 or 1."""
    detected: bool
    count: int
    qr_codes: list[QRCodeOut] = Field(default_factory=list)


class HasCodeResult(BaseModel):
    """Result of has_code()."""
    has_qr_code: bool
    corners: list[CornerOut] = Field(default_factory=list)


class ErrorOut(BaseModel):
    error: str
