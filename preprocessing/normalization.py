"""
Image normalization functions for preprocessing.

All functions are pure: they take an input and return a new output without
mutating the original array. Images are expected in RGB channel order, as
produced by `sources.load_image`.
"""

import numpy as np
import cv2


def validate_image(img: np.ndarray) -> None:
    """Check that img is a non-empty 2D or 3D numpy array.

    Raises:
        TypeError: If img is not a numpy array.
        ValueError: If img has invalid dimensions or is empty.
    """
    if not isinstance(img, np.ndarray):
        raise TypeError(f"Expected numpy.ndarray, got {type(img).__name__}")

    if img.ndim < 2 or img.ndim > 3:
        raise ValueError(
            f"Image must be 2D or 3D array, got {img.ndim}D array with shape {img.shape}"
        )

    if img.size == 0:
        raise ValueError("Image array is empty")


def to_grayscale(img: np.ndarray) -> np.ndarray:
    """Convert an image to a single-channel uint8 grayscale image.

    Pure function: returns a new array without modifying the input. An image
    that is already single-channel is passed through as a copy.

    Args:
        img: Input image. Can be:
             - RGB (3 channels): converted with ITU-R BT.601 luminance weights
             - RGBA (4 channels): alpha channel is dropped, then converted
             - Grayscale (2D or 1 channel): returned as a copy

    Returns:
        Grayscale image as 2D uint8 numpy array.

    Raises:
        ValueError: If input is not a valid image array.
        TypeError: If img is not a numpy array.

    Examples:
        >>> rgb = np.zeros((100, 200, 3), dtype=np.uint8)
        >>> to_grayscale(rgb).shape
        (100, 200)
    """
    validate_image(img)

    if img.ndim == 2:
        result = img.copy()
    else:
        channels = img.shape[2]
        if channels == 1:
            result = img[:, :, 0].copy()
        elif channels == 3:
            result = cv2.cvtColor(img, cv2.COLOR_RGB2GRAY)
        elif channels == 4:
            result = cv2.cvtColor(img, cv2.COLOR_RGBA2GRAY)
        else:
            raise ValueError(
                f"Unsupported number of channels: {channels}. "
                "Expected 1, 3 (RGB), or 4 (RGBA)."
            )

    if result.dtype != np.uint8:
        result = np.clip(result, 0, 255).astype(np.uint8)

    return result


def resize_by_factor(
    img: np.ndarray,
    factor: float,
    interpolation: int = cv2.INTER_CUBIC,
) -> np.ndarray:
    """Resize an image by a uniform scale factor.

    OpenCV picks the output size (about `width * factor` by `height * factor`)
    and maps coordinates with exactly `factor`, so a point at `x` lands at
    `(x + 0.5) * factor - 0.5` whatever rounding the pixel count needs.

    Args:
        img: Input image (2D grayscale or 3D color).
        factor: Scale factor (> 1 upscales, < 1 downscales).
        interpolation: OpenCV interpolation method. Default is INTER_CUBIC,
                      which gives the sharpest module edges when upscaling.

    Returns:
        Resized image with the same dtype as the input.

    Raises:
        ValueError: If factor is not positive or image is invalid.
        TypeError: If img is not a numpy array.

    Examples:
        >>> img = np.zeros((100, 200), dtype=np.uint8)
        >>> resize_by_factor(img, 2.0).shape
        (200, 400)
    """
    validate_image(img)

    if factor <= 0:
        raise ValueError(f"factor must be positive, got {factor}")

    if factor == 1.0:
        return img.copy()

    return cv2.resize(img, None, fx=factor, fy=factor, interpolation=interpolation)


def needs_upscale(shape: tuple[int, ...], min_dimension: int) -> bool:
    """Return True if either image dimension is below min_dimension."""
    height, width = shape[:2]
    return width < min_dimension or height < min_dimension
