"""
Encoding of cropped regions for transport.

Crops are stored losslessly as PNG and carried as base64 text, usually
wrapped in a `data:` URI so that browsers can display them directly.
"""

import base64
import io

from PIL import Image

from config import PNG_COMPRESSION_LEVEL

from .types import CroppedRegion

PNG_DATA_URI_PREFIX = "data:image/png;base64,"


def encode_cropped_region(
    region: CroppedRegion,
    compress_level: int = PNG_COMPRESSION_LEVEL,
) -> bytes:
    """Encode a cropped region as PNG bytes.

    Args:
        region: Region whose pixels are grayscale, RGB or RGBA uint8.
        compress_level: zlib compression level (0-9).

    Returns:
        PNG file contents.
    """
    buf = io.BytesIO()
    Image.fromarray(region.image).save(buf, format="PNG", compress_level=compress_level)
    return buf.getvalue()


def to_transport_text(data: bytes) -> str:
    """Standard base64 (A-Z a-z 0-9 + /) with '=' padding."""
    return base64.b64encode(data).decode("ascii")


def to_data_uri(png_bytes: bytes) -> str:
    """Wrap PNG bytes in a base64 data URI."""
    return PNG_DATA_URI_PREFIX + to_transport_text(png_bytes)


def from_data_uri(uri: str) -> bytes:
    """Inverse of to_data_uri.

    Raises:
        ValueError: If uri is not a PNG base64 data URI.
    """
    if not uri.startswith(PNG_DATA_URI_PREFIX):
        raise ValueError("Not a PNG base64 data URI")
    return base64.b64decode(uri[len(PNG_DATA_URI_PREFIX):], validate=True)
