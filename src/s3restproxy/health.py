"""Cached liveness probe against the backing bucket.

A probe reads a designated health-check object. Successful checks are cached
for ``interval_seconds`` so frequent polling does not hit S3 on every request.
Failures are never cached: after a failed check the next probe checks again.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Protocol

from .errors import StoreFailure
from .result import Failure, Result, Success
from .s3_operations import StoredObject


logger = logging.getLogger(__name__)

HEALTHY = "OK"


class HealthCache:
    """Time window during which the last passing check is trusted.

    The timestamp is only touched under the lock, and only through
    ``is_due`` and ``record_pass``. Two probes may both find the window
    expired and both run a live check; that is harmless, the lock only
    guarantees consistent reads and writes of the timestamp.

    Attributes:
        interval_seconds: Minimum age of the last pass before re-checking
    """

    def __init__(
        self,
        interval_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.interval_seconds = interval_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._last_check_time: float | None = None

    def now(self) -> float:
        return self._clock()

    def is_due(self, now: float) -> bool:
        """Whether a live check must run at time ``now``."""
        with self._lock:
            return (
                self._last_check_time is None
                or now - self._last_check_time > self.interval_seconds
            )

    def record_pass(self, checked_at: float) -> None:
        """Record a passing check; an older result never overwrites a newer one."""
        with self._lock:
            if self._last_check_time is None or checked_at > self._last_check_time:
                self._last_check_time = checked_at


class _HealthObjectReader(Protocol):
    async def get(self, key: str) -> Result[StoredObject, StoreFailure]: ...


class HealthProber:
    """Checks that the health-check object in the bucket can be read."""

    def __init__(self, store: _HealthObjectReader, health_key: str, cache: HealthCache) -> None:
        self.health_key = health_key
        self._store = store
        self._cache = cache

    async def check(self) -> Result[str, StoreFailure]:
        """Return Success("OK"), or the store failure of a live check.

        Only elapsed time gates re-checking; within the window the probe
        answers "OK" without contacting S3.
        """
        now = self._cache.now()
        if not self._cache.is_due(now):
            return Success(HEALTHY)

        logger.info("Making health check for path '%s'", self.health_key)
        match await self._store.get(self.health_key):
            case Success(_):
                self._cache.record_pass(now)
                logger.info("Health check passed")
                return Success(HEALTHY)
            case Failure(error):
                logger.error("Health check failed: %s", error)
                return Failure(error)
