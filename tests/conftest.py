"""Pytest configuration: fast-by-default TDD setup.

Slow tests (real cv2.QRCodeDetector on rendered codes) are skipped unless
--slow is passed.
Run the full suite:   pytest --slow
Run fast tests only:  pytest          (default)

Fast tests use ScriptedDetector, a test double that answers from a rule
function and records every image it is shown.
"""
import io
from dataclasses import dataclass, field
from typing import Callable

import numpy as np
import pytest
from PIL import Image

from detection import DetectionAttempt


@dataclass
class ScriptedDetector:
    """Detector double driven by a rule(image, call_index) -> DetectionAttempt."""

    rule: Callable[[np.ndarray, int], DetectionAttempt] = (
        lambda image, index: DetectionAttempt.not_found()
    )
    locate_corners: list = field(default_factory=list)
    decode_calls: list = field(default_factory=list)
    locate_calls: list = field(default_factory=list)

    def locate(self, image):
        self.locate_calls.append(image.copy())
        return [list(p) for p in self.locate_corners]

    def locate_and_decode(self, image):
        index = len(self.decode_calls)
        self.decode_calls.append(image.copy())
        return self.rule(image, index)


def pytest_addoption(parser):
    parser.addoption(
        "--slow",
        action="store_true",
        default=False,
        help="Run slow tests that use the real OpenCV QR detector",
    )


def pytest_collection_modifyitems(config, items):
    if config.getoption("--slow"):
        return  # run everything
    skip_slow = pytest.mark.skip(reason="slow test skipped, pass --slow to include")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture
def make_detector():
    """Factory for ScriptedDetector instances."""
    return ScriptedDetector


@pytest.fixture
def noisy_gray():
    """Deterministic 100x100 grayscale image with a mid-tone gradient and noise."""
    rng = np.random.default_rng(1234)
    gradient = np.tile(np.linspace(40, 210, 100), (100, 1))
    noise = rng.integers(-30, 30, size=(100, 100))
    return np.clip(gradient + noise, 0, 255).astype(np.uint8)


@pytest.fixture
def png_bytes():
    """Encoded 64x48 RGB PNG."""
    buf = io.BytesIO()
    Image.new("RGB", (64, 48), color=(200, 200, 200)).save(buf, format="PNG")
    return buf.getvalue()
