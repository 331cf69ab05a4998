"""Main entry point for OT Tracker."""

import logging
import sys
from typing import Optional

from ot_tracker.config import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: Optional[str] = None):
    """Configure root logging to stdout.

    Args:
        level: Level name overriding the configured ``log_level``.
    """
    level_name = (level or get_settings().log_level).upper()

    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    # uvicorn's per-request access log duplicates RequestLoggingMiddleware
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def main():
    """Main entry point - runs CLI."""
    setup_logging()

    from ot_tracker.cli.commands import app

    app()


if __name__ == "__main__":
    main()
