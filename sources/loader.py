"""
Image loading from a file path or an in-memory encoded buffer.

Images are decoded with Pillow, rotated according to their EXIF
orientation tag, and returned as RGB uint8 numpy arrays.
"""

from __future__ import annotations

import io
import logging
import os
from pathlib import Path

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from detection.errors import DecodeError, InvalidArgument

logger = logging.getLogger(__name__)

ImageInput = str | os.PathLike | bytes | bytearray | memoryview


def read_source_bytes(source: ImageInput) -> bytes:
    """Return the encoded bytes of an image path or buffer.

    Raises:
        InvalidArgument: If source is neither a path nor a byte buffer.
        DecodeError: If the path cannot be read or the buffer is empty.
    """
    if isinstance(source, (bytes, bytearray, memoryview)):
        data = bytes(source)
    elif isinstance(source, (str, os.PathLike)):
        path = Path(source)
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise DecodeError(f"Failed to read image {path}: {exc}") from exc
    else:
        raise InvalidArgument(
            f"Expected an image path or bytes, got {type(source).__name__}"
        )

    if not data:
        raise DecodeError("Failed to read image: input is empty")
    return data


def decode_image_bytes(data: bytes) -> np.ndarray:
    """Decode encoded image bytes into an RGB uint8 array.

    Raises:
        DecodeError: If the bytes are not a readable image.
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            img = ImageOps.exif_transpose(img)
            if img.mode != "RGB":
                img = img.convert("RGB")
            array = np.array(img)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as exc:
        raise DecodeError(f"Failed to decode image: {exc}") from exc

    logger.debug("Decoded %sx%s image", array.shape[1], array.shape[0])
    return array


def load_image(source: ImageInput) -> np.ndarray:
    """Load an image from a path or encoded byte buffer.

    Args:
        source: File path (str or PathLike) or encoded image bytes.

    Returns:
        RGB image as (H, W, 3) uint8 numpy array.

    Raises:
        InvalidArgument: If source is neither a path nor a byte buffer.
        DecodeError: If the input cannot be read or parsed as an image.
    """
    return decode_image_bytes(read_source_bytes(source))
