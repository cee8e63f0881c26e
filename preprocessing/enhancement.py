"""
Contrast, threshold, filter and morphology primitives.

Each function takes a single-channel uint8 image and returns a new one.
None of them mutate their input.
"""

import numpy as np
import cv2

# Fixed 3x3 sharpening kernel (identity plus a Laplacian)
SHARPEN_KERNEL = np.array(
    [
        [0, -1, 0],
        [-1, 5, -1],
        [0, -1, 0],
    ],
    dtype=np.float32,
)


def _require_grayscale(img: np.ndarray, operation: str) -> None:
    if not isinstance(img, np.ndarray):
        raise TypeError(f"Expected numpy.ndarray, got {type(img).__name__}")
    if img.ndim != 2:
        raise ValueError(
            f"{operation} requires grayscale input (2D array), "
            f"got {img.ndim}D array with shape {img.shape}"
        )
    if img.size == 0:
        raise ValueError("Image array is empty")


def apply_clahe(
    gray: np.ndarray,
    clip_limit: float = 2.0,
    tile_size: tuple[int, int] = (8, 8),
) -> np.ndarray:
    """Contrast Limited Adaptive Histogram Equalization."""
    _require_grayscale(gray, "CLAHE")
    clahe = cv2.createCLAHE(clipLimit=clip_limit, tileGridSize=tile_size)
    return clahe.apply(gray)


def adaptive_threshold(gray: np.ndarray, block_size: int, c: float) -> np.ndarray:
    """Binarize with a Gaussian-weighted local threshold.

    Args:
        gray: Grayscale input.
        block_size: Neighbourhood size; must be odd and greater than 1.
        c: Constant subtracted from the weighted mean.
    """
    _require_grayscale(gray, "Adaptive threshold")
    if block_size <= 1 or block_size % 2 == 0:
        raise ValueError(f"block_size must be odd and > 1, got {block_size}")
    return cv2.adaptiveThreshold(
        gray, 255, cv2.ADAPTIVE_THRESH_GAUSSIAN_C, cv2.THRESH_BINARY, block_size, c
    )


def otsu_threshold(gray: np.ndarray, inverted: bool = False) -> np.ndarray:
    """Binarize with Otsu's automatically chosen global threshold.

    With inverted=True, dark pixels become white and vice versa, which turns
    a light-on-dark code into the dark-on-light form the detector expects.
    """
    _require_grayscale(gray, "Otsu threshold")
    mode = cv2.THRESH_BINARY_INV if inverted else cv2.THRESH_BINARY
    _, binary = cv2.threshold(gray, 0, 255, mode | cv2.THRESH_OTSU)
    return binary


def bilateral_filter(
    gray: np.ndarray,
    diameter: int,
    sigma_color: float,
    sigma_space: float,
) -> np.ndarray:
    """Edge-preserving smoothing."""
    _require_grayscale(gray, "Bilateral filter")
    return cv2.bilateralFilter(gray, diameter, sigma_color, sigma_space)


def morph_close(gray: np.ndarray, kernel_size: int) -> np.ndarray:
    """Morphological closing with a square structuring element."""
    _require_grayscale(gray, "Morphological closing")
    if kernel_size <= 0:
        raise ValueError(f"kernel_size must be positive, got {kernel_size}")
    kernel = cv2.getStructuringElement(cv2.MORPH_RECT, (kernel_size, kernel_size))
    return cv2.morphologyEx(gray, cv2.MORPH_CLOSE, kernel)


def sharpen(gray: np.ndarray) -> np.ndarray:
    """Convolve with SHARPEN_KERNEL; output is saturated to uint8."""
    _require_grayscale(gray, "Sharpening")
    return cv2.filter2D(gray, -1, SHARPEN_KERNEL)


def gamma_lut(gamma: float) -> np.ndarray:
    """Build the 256-entry lookup table for `out = 255 * (in / 255) ** gamma`."""
    if gamma <= 0:
        raise ValueError(f"gamma must be positive, got {gamma}")
    levels = np.arange(256, dtype=np.float64) / 255.0
    return np.clip(np.round(255.0 * levels ** gamma), 0, 255).astype(np.uint8)


def adjust_gamma(gray: np.ndarray, gamma: float) -> np.ndarray:
    """Apply per-pixel gamma correction via a lookup table.

    gamma < 1 brightens shadows; gamma > 1 darkens highlights.
    """
    _require_grayscale(gray, "Gamma correction")
    return cv2.LUT(gray, gamma_lut(gamma))


def equalize_histogram(gray: np.ndarray) -> np.ndarray:
    """Global histogram equalization."""
    _require_grayscale(gray, "Histogram equalization")
    return cv2.equalizeHist(gray)
