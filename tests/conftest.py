# tests/conftest.py
"""Global PyTest fixtures for the test-suite.

No test talks to real S3: the object store is backed by ``FakeS3Client``
and the health cache by ``FakeClock``.
"""

from __future__ import annotations

import signal
from types import FrameType
from typing import Callable, Generator

import pytest
from fastapi.testclient import TestClient

from s3restproxy.app import create_app
from s3restproxy.config import ProxySettings
from s3restproxy.s3_operations import S3Operations
from s3restproxy.store import ObjectStore
from tests.helpers import FakeClock, FakeS3Client
from tests.helpers.constants import HEALTH_INTERVAL_SECONDS, HEALTH_KEY, TEST_BUCKET

DEFAULT_TEST_TIMEOUT_SECONDS = 10.0


def _build_timeout_handler(
    timeout_seconds: float,
) -> Callable[[int, FrameType | None], None]:
    """Create SIGALRM handler that fails the test when timeout is reached."""

    def _handle_timeout(signum: int, frame: FrameType | None) -> None:
        pytest.fail(f"Test exceeded {timeout_seconds:.0f}s timeout", pytrace=True)

    return _handle_timeout


@pytest.fixture(autouse=True)
def per_test_timeout() -> Generator[None, None, None]:
    """Fail any test that hangs, e.g. on a store call that never returns."""
    if not hasattr(signal, "SIGALRM") or not hasattr(signal, "setitimer"):
        yield
        return

    previous_handler = signal.getsignal(signal.SIGALRM)
    signal.signal(signal.SIGALRM, _build_timeout_handler(DEFAULT_TEST_TIMEOUT_SECONDS))
    signal.setitimer(signal.ITIMER_REAL, DEFAULT_TEST_TIMEOUT_SECONDS)
    try:
        yield
    finally:
        signal.setitimer(signal.ITIMER_REAL, 0.0)
        signal.signal(signal.SIGALRM, previous_handler)


@pytest.fixture
def settings() -> ProxySettings:
    return ProxySettings(
        aws_bucket=TEST_BUCKET,
        aws_access_key_id="test-access-key",
        aws_secret_access_key="test-secret-key",
        aws_region="eu-west-1",
        health_file=HEALTH_KEY,
        health_cache_interval=HEALTH_INTERVAL_SECONDS,
    )


@pytest.fixture
def fake_s3() -> FakeS3Client:
    """Fake S3 client whose bucket already holds the health-check object."""
    client = FakeS3Client(TEST_BUCKET)
    client.objects[(TEST_BUCKET, HEALTH_KEY)] = (b"", None)
    return client


@pytest.fixture
def store(fake_s3: FakeS3Client) -> ObjectStore:
    return ObjectStore(S3Operations(fake_s3), TEST_BUCKET)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def client(
    settings: ProxySettings, store: ObjectStore, clock: FakeClock
) -> Generator[TestClient, None, None]:
    """
    HTTP client for the proxy app, with its lifespan running.

    Usage:
        def test_something(client: TestClient) -> None:
            assert client.get("/healthz").text == "OK"
    """
    app = create_app(settings, store=store, clock=clock)
    with TestClient(app) as test_client:
        yield test_client
