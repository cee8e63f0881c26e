#!/usr/bin/env python3
"""
Unified CLI for the QR code scanner.

Usage:
    qrscan detect <image>        # Detect and decode, retrying with enhanced images
    qrscan multi <image>         # Same cascade, reported as a list of codes
    qrscan has-code <image>      # Quick presence check (no decoding)
    qrscan scan <path>           # Batch scan a directory or file (JSON lines)
    qrscan serve                 # Launch the HTTP API (port 30003)
"""

import argparse
import logging
import sys

from logging_utils import configure_logging, add_logging_args
from cli.detect import add_detect_subparsers
from cli.scan import add_scan_subparser

logger = logging.getLogger(__name__)


def cmd_serve(args: argparse.Namespace) -> int:
    """Launch the detection web service."""
    from web import main
    serve_argv = ["--host", args.host, "--port", str(args.port)]
    if args.log_level:
        serve_argv += ["--log-level", args.log_level]
    serve_argv += ["--verbose"] * args.verbose + ["--quiet"] * args.quiet
    return main(serve_argv)


def build_parser() -> argparse.ArgumentParser:
    from config import WEB_HOST, WEB_PORT

    parser = argparse.ArgumentParser(
        prog="qrscan",
        description="QR code scanner - locate and decode QR codes in degraded images",
    )
    add_logging_args(parser)
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    add_detect_subparsers(subparsers)
    add_scan_subparser(subparsers)

    serve_parser = subparsers.add_parser(
        "serve",
        help=f"Launch the HTTP API (port {WEB_PORT})",
    )
    serve_parser.add_argument("--host", default=WEB_HOST, help="Bind address")
    serve_parser.add_argument("--port", type=int, default=WEB_PORT, help="Port")
    serve_parser.set_defaults(_cmd=cmd_serve)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level, args.verbose, args.quiet)

    cmd = getattr(args, "_cmd", None)
    if cmd is None:
        parser.print_help()
        return 1
    return cmd(args)


if __name__ == "__main__":
    sys.exit(main())
