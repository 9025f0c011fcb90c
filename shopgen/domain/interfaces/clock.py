"""Interface for time measurement and waiting.

Rate limiting, backoff and cache expiry all read time and sleep through
this port, so tests can simulate elapsed time without real waits.
"""

import abc


class Clock(abc.ABC):
    """Abstract Base Class for a monotonic clock that can block."""

    @abc.abstractmethod
    def now(self) -> float:
        """Returns the current time in seconds (monotonic, arbitrary origin)."""
        pass

    @abc.abstractmethod
    def sleep(self, seconds: float) -> None:
        """Blocks the calling thread for the given number of seconds."""
        pass
