from __future__ import annotations

import logging
import sys

QUIET_LOGGERS = ("httpx", "httpcore")


def setup_logging(level: int = logging.WARNING) -> None:
    """Send log records to stderr. Call once from the CLI entry point."""
    root = logging.getLogger()
    root.setLevel(level)

    # Avoid duplicate handlers when invoked repeatedly (tests, re-entry).
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
