"""
Thread-safe rate limiting for provider API calls.

Each source adapter owns (or shares, via ``get_rate_limiter``) one limiter per
provider so that concurrent fan-out never exceeds the provider's published
request rate.

Usage:
    from abs_investigator.utils.rate_limiting import get_rate_limiter

    limiter = get_rate_limiter("sec_edgar", requests_per_second=10.0)

    with limiter:
        session.get(url, timeout=timeout)
"""

import logging
import time
from threading import Lock

from abs_investigator.utils.parallel import untimed

logger = logging.getLogger(__name__)


class RateLimiter:
    """
    Enforces a minimum interval between calls to one provider.

    Safe to share between the worker threads of a fan-out: callers queue on
    an internal lock and each sleeps only as long as needed.

    Args:
        requests_per_second: Maximum requests per second allowed
        source_name: Provider name (for logging)
    """

    def __init__(self, requests_per_second: float, source_name: str = "default"):
        if requests_per_second <= 0:
            raise ValueError(f"requests_per_second must be > 0, got {requests_per_second}")

        self.requests_per_second = requests_per_second
        self.source_name = source_name
        self.min_interval = 1.0 / requests_per_second
        self._lock = Lock()
        self._last_call = 0.0

    def __call__(self) -> float:
        """
        Wait until the next call is allowed.

        Inside a fan-out call the wait does not count against the call's
        timeout.

        Returns:
            Seconds spent sleeping (0.0 when no wait was needed)
        """
        with untimed(), self._lock:
            now = time.monotonic()
            elapsed = now - self._last_call
            slept = 0.0

            if self._last_call and elapsed < self.min_interval:
                slept = self.min_interval - elapsed
                logger.debug(f"{self.source_name}: throttling for {slept:.3f}s")
                time.sleep(slept)

            self._last_call = time.monotonic()
            return slept

    def __enter__(self):
        self()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        return False

    def reset(self) -> None:
        """Forget the last call time so the next call proceeds immediately."""
        with self._lock:
            self._last_call = 0.0


# Shared limiters keyed by provider name
_rate_limiters: dict[str, RateLimiter] = {}
_rate_limiters_lock = Lock()


def get_rate_limiter(
    source_name: str,
    requests_per_second: float,
    create_if_missing: bool = True,
) -> RateLimiter | None:
    """
    Get or create the shared rate limiter for a provider.

    Two adapters talking to the same provider (e.g. the SEC filing search and
    the SEC registrant lookup) must draw from one budget, so they share the
    limiter registered under the provider's name. The rate of an existing
    limiter is not changed.

    Args:
        source_name: Provider name (e.g., "sec_edgar", "openfigi")
        requests_per_second: Rate used when the limiter is created
        create_if_missing: If False, return None for unknown providers

    Returns:
        RateLimiter instance, or None
    """
    with _rate_limiters_lock:
        if source_name in _rate_limiters:
            return _rate_limiters[source_name]

        if not create_if_missing:
            return None

        limiter = RateLimiter(requests_per_second=requests_per_second, source_name=source_name)
        _rate_limiters[source_name] = limiter
        return limiter
