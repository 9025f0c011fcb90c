"""Implementation of a rate limiter.

Controls the frequency of outgoing requests to prevent hitting API rate limits.
Enforces a minimum delay between consecutive calls sharing one limiter.
"""

import logging
from threading import Lock
from typing import Optional

from shopgen.domain.interfaces.clock import Clock
from shopgen.infrastructure.resilience.clock import SystemClock

logger = logging.getLogger(__name__)

DEFAULT_MIN_DELAY_SECONDS = 1.0 # 1 second between calls

class RateLimiter:
    """Minimum-interval rate limiter (one call per min_delay seconds)."""

    def __init__(self, min_delay: float = DEFAULT_MIN_DELAY_SECONDS, clock: Optional[Clock] = None):
        """Initializes the rate limiter.

        Args:
            min_delay: Minimum number of seconds between two granted calls.
                Zero or negative disables waiting.
            clock: Clock used to read time and sleep (system clock if None).
        """
        self.min_delay = max(0.0, float(min_delay))
        self.clock = clock or SystemClock()
        self._last_call: Optional[float] = None
        self._lock = Lock() # Thread safety for timestamp access
        logger.info(f"RateLimiter initialized: min delay {self.min_delay:.2f}s between calls")

    @property
    def last_call(self) -> Optional[float]:
        """Clock time of the most recently granted call, or None."""
        return self._last_call

    def _wait_needed(self, now: float) -> float:
        if self._last_call is None:
            return 0.0
        return max(0.0, self._last_call + self.min_delay - now)

    def get_wait_time(self) -> float:
        """Estimates the time needed before the next request can be made."""
        with self._lock:
            return self._wait_needed(self.clock.now())

    def wait_for_permission(self) -> float:
        """Blocks until a request is permitted, then records it as the last call.

        The slot is reserved under the lock and the sleep happens outside it,
        so concurrent callers queue up one min_delay apart.

        Returns:
            The number of seconds waited.
        """
        with self._lock:
            now = self.clock.now()
            wait_time = self._wait_needed(now)
            self._last_call = now + wait_time

        if wait_time > 0:
            logger.info(f"Rate limiting: waiting {wait_time:.2f}s before next API call")
            self.clock.sleep(wait_time)
        else:
            logger.debug("Rate limit permission granted.")
        return wait_time
