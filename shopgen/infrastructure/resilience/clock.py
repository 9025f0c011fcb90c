"""Wall-clock implementation of the Clock interface."""

import time

from shopgen.domain.interfaces.clock import Clock


class SystemClock(Clock):
    """Clock backed by time.monotonic and time.sleep."""

    def now(self) -> float:
        return time.monotonic()

    def sleep(self, seconds: float) -> None:
        if seconds > 0:
            time.sleep(seconds)
