"""REST gateway onto a single S3 bucket, with a cached /healthz probe."""

from __future__ import annotations

__version__ = "0.1.0"
