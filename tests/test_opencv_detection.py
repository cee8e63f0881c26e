"""End-to-end tests with the real cv2.QRCodeDetector on rendered codes.

These are marked slow; run with `pytest --slow`.
"""

import io

import cv2
import numpy as np
import pytest
from PIL import Image

from detection import OpenCVQRDetector, run_cascade
from scan import detect_and_decode, has_code

PAYLOAD = "https://example.com/qr-cascade"
MODULE_PX = 8
BORDER = 40


def render_code(payload: str = PAYLOAD) -> np.ndarray:
    """Render a QR code as an RGB array with a white border around it."""
    modules = cv2.QRCodeEncoder.create().encode(payload)
    big = cv2.resize(
        modules,
        (modules.shape[1] * MODULE_PX, modules.shape[0] * MODULE_PX),
        interpolation=cv2.INTER_NEAREST,
    )
    framed = cv2.copyMakeBorder(
        big, BORDER, BORDER, BORDER, BORDER, cv2.BORDER_CONSTANT, value=255
    )
    return cv2.cvtColor(framed, cv2.COLOR_GRAY2RGB)


def png_bytes(image: np.ndarray) -> bytes:
    buf = io.BytesIO()
    Image.fromarray(image).save(buf, format="PNG")
    return buf.getvalue()


@pytest.mark.slow
def test_clean_code_decodes_on_original():
    outcome = run_cascade(render_code(), OpenCVQRDetector())
    assert outcome.payload == PAYLOAD
    assert outcome.variant == "original"
    assert outcome.attempts == 1


@pytest.mark.slow
def test_corners_lie_on_the_code():
    image = render_code()
    outcome = run_cascade(image, OpenCVQRDetector())

    height, width = image.shape[:2]
    tolerance = 2 * MODULE_PX
    for x, y in outcome.corners:
        assert BORDER - tolerance <= x <= width - BORDER + tolerance
        assert BORDER - tolerance <= y <= height - BORDER + tolerance


@pytest.mark.slow
def test_inverted_code_recovered():
    inverted = 255 - render_code()
    result = detect_and_decode(png_bytes(inverted))
    assert result.detected
    assert result.data == PAYLOAD


@pytest.mark.slow
def test_blank_image_not_detected():
    blank = np.full((200, 200, 3), 255, dtype=np.uint8)
    result = detect_and_decode(png_bytes(blank))
    assert not result.detected
    assert not has_code(png_bytes(blank)).has_qr_code


@pytest.mark.slow
def test_has_code_on_rendered_code():
    result = has_code(png_bytes(render_code()))
    assert result.has_qr_code
    assert len(result.corners) == 4
