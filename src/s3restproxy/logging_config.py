"""Process-wide logging setup."""

from __future__ import annotations

import logging
import sys


def setup_logging(level: str = "INFO") -> logging.Logger:
    """
    Configure logging to stdout for the proxy and its libraries.

    Safe to call again once settings are loaded; later calls only change the level.
    """
    logging.basicConfig(
        format="%(asctime)s - s3restproxy - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger().setLevel(level.upper())
    return logging.getLogger("s3restproxy")
