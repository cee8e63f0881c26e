"""Batch scan command CLI parsing and control flow."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from config import DEFAULT_WORKERS
from scan import scan_files, summarize
from sources import scan_local_images

logger = logging.getLogger(__name__)


def add_scan_subparser(subparsers: argparse._SubParsersAction) -> None:
    scan_parser = subparsers.add_parser(
        "scan",
        help="Scan a local directory or file for QR codes",
    )
    scan_parser.add_argument(
        "source",
        help="Local directory or image file path",
    )
    scan_parser.add_argument(
        "-r", "--recursive",
        action="store_true",
        help="Include images in subdirectories",
    )
    scan_parser.add_argument(
        "--workers", "-j",
        type=int,
        default=DEFAULT_WORKERS,
        help=f"Number of images to process concurrently (default: {DEFAULT_WORKERS})",
    )
    scan_parser.add_argument(
        "--limit", "-n",
        type=int,
        default=None,
        help="Maximum number of images to process (default: all)",
    )
    scan_parser.add_argument(
        "--output", "-o",
        metavar="FILE",
        help="Write JSON lines to FILE instead of stdout",
    )
    scan_parser.add_argument(
        "--with-image",
        action="store_true",
        help="Include the base64 PNG crop of each code",
    )
    scan_parser.set_defaults(_cmd=cmd_scan)


def cmd_scan(args: argparse.Namespace) -> int:
    if args.workers <= 0:
        logger.error("--workers must be positive, got %s", args.workers)
        return 1

    try:
        image_files = scan_local_images(args.source, recursive=args.recursive)
    except ValueError as exc:
        logger.error("%s", exc)
        return 1

    logger.info("Found %s images in %s", len(image_files), args.source)
    if not image_files:
        logger.warning("No images found.")
        return 0

    if args.limit is not None:
        image_files = image_files[:args.limit]
        logger.info("Processing limited to %s images", args.limit)

    out = sys.stdout
    if args.output:
        try:
            out = Path(args.output).open("w", encoding="utf-8")
        except OSError as exc:
            logger.error("Cannot write %s: %s", args.output, exc)
            return 1
    records = []
    try:
        for record in scan_files(
            image_files,
            workers=args.workers,
            include_image=args.with_image,
            progress=out is not sys.stdout,
        ):
            records.append(record)
            out.write(record.to_json() + "\n")
    finally:
        if out is not sys.stdout:
            out.close()

    stats = summarize(records)
    logger.info("%s", "=" * 50)
    logger.info("Scan Complete!")
    logger.info("%s", "=" * 50)
    logger.info("Files scanned:  %s", stats["files_scanned"])
    logger.info("Decoded:        %s", stats["decoded"])
    logger.info("Located only:   %s", stats["located_only"])
    logger.info("Not found:      %s", stats["not_found"])
    logger.info("Errors:         %s", stats["errors"])
    if args.output:
        logger.info("Results saved to %s", args.output)
    return 0
