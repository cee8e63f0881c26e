"""
Image source adapters.

This module provides:
- load_image: decode a file path or encoded byte buffer into an RGB array
- scan_local_images: find image files in a local directory
"""

from .loader import ImageInput, load_image, read_source_bytes, decode_image_bytes
from .local import IMAGE_EXTENSIONS, scan_local_images

__all__ = [
    "ImageInput",
    "load_image",
    "read_source_bytes",
    "decode_image_bytes",
    "IMAGE_EXTENSIONS",
    "scan_local_images",
]
