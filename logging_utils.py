"""Shared logging configuration for the CLI and the web service.

Log records go to stderr; stdout is reserved for command results (JSON).
"""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"

LEVEL_NAMES = ("debug", "info", "warning", "error", "critical")

# Libraries whose DEBUG output drowns out the cascade trace under -v
# (Pillow logs every PNG chunk it parses).
NOISY_LOGGERS = ("PIL",)


def add_logging_args(parser) -> None:
    """Add --log-level, -v and -q options to an argparse parser."""
    parser.add_argument(
        "--log-level",
        choices=LEVEL_NAMES,
        help="Set log verbosity explicitly (overrides -v/-q)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="More output; -v traces each cascade variant",
    )
    parser.add_argument(
        "-q", "--quiet",
        action="count",
        default=0,
        help="Less output; -q hides progress info, -qq shows errors only",
    )


def resolve_log_level(
    log_level: str | None = None,
    verbose: int = 0,
    quiet: int = 0,
) -> int:
    """Map --log-level or the net -v/-q count to a logging level.

    The default is INFO. Each -v steps toward DEBUG and each -q toward
    ERROR; the result never leaves the DEBUG..ERROR range.
    """
    if log_level:
        return logging.getLevelName(log_level.upper())

    steps = [logging.DEBUG, logging.INFO, logging.WARNING, logging.ERROR]
    index = min(max(1 - verbose + quiet, 0), len(steps) - 1)
    return steps[index]


def quiet_noisy_loggers(level: int) -> None:
    """Keep third-party loggers at INFO or above even when we run at DEBUG."""
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.INFO))


def configure_logging(
    log_level: str | None = None,
    verbose: int = 0,
    quiet: int = 0,
) -> int:
    """Configure root logging on stderr and return the active level.

    Safe to call more than once: later calls only adjust levels.
    """
    level = resolve_log_level(log_level=log_level, verbose=verbose, quiet=quiet)
    root_logger = logging.getLogger()

    if root_logger.handlers:
        root_logger.setLevel(level)
        for handler in root_logger.handlers:
            handler.setLevel(level)
    else:
        logging.basicConfig(
            level=level,
            format=LOG_FORMAT,
            datefmt=DATE_FORMAT,
            stream=sys.stderr,
        )

    quiet_noisy_loggers(level)
    return level
