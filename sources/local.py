"""
Local directory image discovery.

Functions for finding image files to batch-scan for QR codes.
"""

from pathlib import Path

# Supported image extensions
IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".webp", ".bmp", ".tiff", ".tif", ".gif"}


def is_image_file(path: Path) -> bool:
    return path.is_file() and path.suffix.lower() in IMAGE_EXTENSIONS


def scan_local_images(path: str, recursive: bool = False) -> list[Path]:
    """Find all image files in a directory or return a single image file.

    Args:
        path: Path to directory or single image file to scan.
        recursive: Also search subdirectories.

    Returns:
        Sorted list of image file paths.

    Raises:
        ValueError: If path doesn't exist or isn't a valid image/directory.
    """
    file_path = Path(path).resolve()

    if file_path.is_file():
        if is_image_file(file_path):
            return [file_path]
        raise ValueError(f"{path} is not a supported image file")

    if not file_path.is_dir():
        raise ValueError(f"{path} is not a valid file or directory")

    candidates = file_path.rglob("*") if recursive else file_path.iterdir()
    return sorted(p for p in candidates if is_image_file(p))
