"""Command-line entry point for the REST-to-S3 proxy.

Usage:
    python -m s3restproxy [--host HOST] [--port PORT] [--log-level LEVEL]

Configuration comes from the environment (AWS_BUCKET, AWS_ACCESS_KEY_ID and
AWS_SECRET_ACCESS_KEY are required); command-line flags override it.

Examples:
    # Serve the "artifacts" bucket on the default port 8000
    AWS_BUCKET=artifacts AWS_ACCESS_KEY_ID=... AWS_SECRET_ACCESS_KEY=... python -m s3restproxy

    # Against a local MinIO, re-checking health every 10 seconds
    AWS_ENDPOINT_URL=http://localhost:9000 HEALTH_CACHE_INTERVAL=10 python -m s3restproxy --port 8080
"""

from __future__ import annotations

import argparse
import logging
import sys

import uvicorn

from . import __version__
from .app import create_app
from .config import LOG_LEVELS, describe_settings, load_settings
from .logging_config import setup_logging
from .result import Failure, Success


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="s3restproxy",
        description="Expose an S3 bucket through GET, PUT and DELETE requests",
    )
    parser.add_argument("--host", help="Listening address (env HOST)")
    parser.add_argument("--port", type=int, help="Listening port (env PORT)")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Logging level (env LOG_LEVEL)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Load configuration and serve until interrupted.

    Returns:
        Exit code:
            0: Server stopped normally
            1: Configuration missing or invalid
    """
    args = build_parser().parse_args(argv)
    overrides = {
        name: value
        for name, value in (("host", args.host), ("port", args.port), ("log_level", args.log_level))
        if value is not None
    }

    setup_logging(args.log_level or "INFO")
    logger.info("s3restproxy: %s", __version__)

    match load_settings(**overrides):
        case Failure(error):
            logger.error(error.message)
            return 1
        case Success(settings):
            pass

    setup_logging(settings.log_level)
    for line in describe_settings(settings):
        logger.info(line)

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        log_config=None,
    )
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
