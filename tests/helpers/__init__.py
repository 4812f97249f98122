# tests/helpers/__init__.py
"""Shared test utilities: Result unwrapping, a fake S3 client and a fake clock.

Usage:
    >>> from tests.helpers import FakeS3Client, client_error, expect_failure
    >>> fake = FakeS3Client("test-bucket")
    >>> fake.fail("GetObject", client_error("AccessDenied", "Access Denied"))
"""

from __future__ import annotations

from tests.helpers.clock import FakeClock
from tests.helpers.fake_s3 import FakeS3Client, FakeStreamingBody, client_error
from tests.helpers.result_utils import expect_failure, expect_success

__all__ = [
    "FakeClock",
    "FakeS3Client",
    "FakeStreamingBody",
    "client_error",
    "expect_failure",
    "expect_success",
]
