"""Single-image detection commands: detect, multi, has-code."""

from __future__ import annotations

import argparse
import logging

from config import REGION_PADDING
from detection import QRScanError
from scan import detect_and_decode, detect_multiple, has_code

logger = logging.getLogger(__name__)


def _add_image_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("image", help="Path to the image file")


def _add_crop_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--no-image",
        action="store_true",
        help="Omit the base64 PNG crop of the code from the output",
    )
    parser.add_argument(
        "--padding",
        type=int,
        default=REGION_PADDING,
        metavar="PX",
        help=f"Padding around the cropped code in pixels (default: {REGION_PADDING})",
    )


def add_detect_subparsers(subparsers: argparse._SubParsersAction) -> None:
    detect_parser = subparsers.add_parser(
        "detect",
        help="Detect and decode a QR code, retrying with enhanced images",
    )
    _add_image_argument(detect_parser)
    _add_crop_arguments(detect_parser)
    detect_parser.add_argument(
        "--artifact-dir",
        metavar="DIR",
        help="Save every preprocessing variant image to DIR for debugging",
    )
    detect_parser.set_defaults(_cmd=cmd_detect)

    multi_parser = subparsers.add_parser(
        "multi",
        help="Detect QR codes as a list (currently reports at most one)",
    )
    _add_image_argument(multi_parser)
    _add_crop_arguments(multi_parser)
    multi_parser.set_defaults(_cmd=cmd_multi)

    has_code_parser = subparsers.add_parser(
        "has-code",
        help="Quick check whether an image contains a QR code (no decoding)",
    )
    _add_image_argument(has_code_parser)
    has_code_parser.set_defaults(_cmd=cmd_has_code)


def _check_padding(args: argparse.Namespace) -> bool:
    if args.padding < 0:
        logger.error("--padding must be non-negative, got %s", args.padding)
        return False
    return True


def cmd_detect(args: argparse.Namespace) -> int:
    if not _check_padding(args):
        return 1
    try:
        result = detect_and_decode(
            args.image,
            padding=args.padding,
            include_image=not args.no_image,
            artifact_dir=args.artifact_dir,
        )
    except QRScanError as exc:
        logger.error("%s", exc)
        return 1

    if result.detected and result.data is None:
        logger.warning("QR code located but could not be decoded")
    print(result.model_dump_json(indent=2))
    return 0


def cmd_multi(args: argparse.Namespace) -> int:
    if not _check_padding(args):
        return 1
    try:
        result = detect_multiple(
            args.image,
            padding=args.padding,
            include_image=not args.no_image,
        )
    except QRScanError as exc:
        logger.error("%s", exc)
        return 1

    print(result.model_dump_json(indent=2))
    return 0


def cmd_has_code(args: argparse.Namespace) -> int:
    try:
        result = has_code(args.image)
    except QRScanError as exc:
        logger.error("%s", exc)
        return 1

    print(result.model_dump_json(indent=2))
    return 0
