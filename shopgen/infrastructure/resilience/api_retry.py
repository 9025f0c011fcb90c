"""Service for executing API calls with automatic retries.

Implements exponential backoff for handling transient errors like
rate limits (429), timeouts or temporary server issues (5xx). Every attempt
first passes through the rate limiter.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

# Infrastructure Layer Imports
from shopgen.infrastructure.resilience.rate_limiter import RateLimiter
from shopgen.infrastructure.resilience.clock import SystemClock

# Domain Layer Imports
from shopgen.domain.interfaces.clock import Clock
from shopgen.domain.errors import ExhaustedRetries, InvalidInput, TransientCallError
from shopgen.domain.events.api_events import (
    DomainEvent, ApiCallInitiated, ApiCallSucceeded, ApiCallFailed,
    ApiCallDeferred, RetryScheduled
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_RETRIES = 3
DEFAULT_BACKOFF_BASE = 2.0

EventListener = Callable[[DomainEvent], None]


def log_event(event: DomainEvent) -> None:
    """Default event listener: records the event at DEBUG level."""
    logger.debug(f"EVENT: {event}")


@dataclass(frozen=True)
class RetryOutcome(Generic[T]):
    """Result of a retried call and the attempt that produced it."""
    result: T
    attempts: int

# --- Retry Service ---

class ApiRetryService:
    """Handles API call execution with rate limiting and bounded retries."""

    def __init__(
        self,
        rate_limiter: RateLimiter,
        clock: Optional[Clock] = None,
        provider_name: str = "openai",
        max_retries: int = DEFAULT_MAX_RETRIES,
        backoff_base: float = DEFAULT_BACKOFF_BASE,
        event_listener: Optional[EventListener] = None,
    ):
        """Initializes the ApiRetryService.

        Args:
            rate_limiter: The rate limiter every attempt must pass through.
            clock: Clock used for backoff sleeps (system clock if None).
            provider_name: Name of the provider being called (for logging/events).
            max_retries: Default maximum number of attempts per call.
            backoff_base: Base of the exponential backoff; the wait after
                attempt k is backoff_base ** k seconds.
            event_listener: Receives domain events (logged at DEBUG if None).
        """
        self.rate_limiter = rate_limiter
        self.clock = clock or SystemClock()
        self.provider_name = provider_name
        self.max_retries = max_retries
        self.backoff_base = backoff_base
        self.event_listener = event_listener or log_event

        logger.info(
            f"ApiRetryService initialized: max_retries={max_retries}, "
            f"backoff_base={backoff_base}, provider='{provider_name}'"
        )

    def backoff_delay(self, attempt: int) -> float:
        """Seconds to wait after a failed attempt (2s, 4s, 8s... with base 2)."""
        return float(self.backoff_base ** attempt)

    def execute_with_retry(
        self,
        func: Callable[..., T],
        *args: Any,
        max_retries: Optional[int] = None,
        endpoint_name: Optional[str] = None,
        **kwargs: Any
    ) -> RetryOutcome[T]:
        """Executes a blocking function with rate limiting and retries.

        Only TransientCallError triggers a retry. Any other exception
        propagates immediately.

        Args:
            func: The function (API call) to execute.
            *args: Positional arguments for the function.
            max_retries: Maximum attempts for this call (service default if None).
            endpoint_name: Name of the API endpoint called, for logs/events.
            **kwargs: Keyword arguments for the function.

        Returns:
            A RetryOutcome holding the result and the 1-based attempt number.

        Raises:
            ExhaustedRetries: If every attempt raised TransientCallError.
            InvalidInput: If max_retries is below 1.
        """
        attempts_allowed = self.max_retries if max_retries is None else max_retries
        if attempts_allowed < 1:
            raise InvalidInput(f"maxRetries must be at least 1, got {attempts_allowed}")

        endpoint = endpoint_name or getattr(func, "__name__", "call")
        last_error: Optional[TransientCallError] = None

        for attempt in range(1, attempts_allowed + 1):
            # 1. Wait for rate limit permission
            waited = self.rate_limiter.wait_for_permission()
            if waited > 0:
                self.event_listener(ApiCallDeferred(
                    provider=self.provider_name, endpoint=endpoint, wait_time_seconds=waited
                ))

            # 2. Execute the function
            logger.info(f"Calling {self.provider_name}.{endpoint} (attempt {attempt}/{attempts_allowed})")
            self.event_listener(ApiCallInitiated(
                provider=self.provider_name, endpoint=endpoint, attempt_number=attempt
            ))
            start_time = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except TransientCallError as e:
                last_error = e
                logger.warning(f"Attempt {attempt} failed: {e.message}")
                if attempt == attempts_allowed:
                    break
                delay = self.backoff_delay(attempt)
                logger.info(f"Waiting {delay:.0f}s before retry...")
                self.event_listener(RetryScheduled(
                    provider=self.provider_name, endpoint=endpoint,
                    attempt_number=attempt, delay_seconds=delay, error_message=e.message
                ))
                self.clock.sleep(delay)
                continue

            latency_ms = (time.perf_counter() - start_time) * 1000
            logger.info(f"{self.provider_name}.{endpoint} succeeded on attempt {attempt}")
            self.event_listener(ApiCallSucceeded(
                provider=self.provider_name, endpoint=endpoint,
                attempt_number=attempt, latency_ms=latency_ms
            ))
            return RetryOutcome(result=result, attempts=attempt)

        # --- Loop finished without returning: every attempt failed ---
        logger.error(f"All {attempts_allowed} attempts failed for {self.provider_name}.{endpoint}")
        self.event_listener(ApiCallFailed(
            provider=self.provider_name, endpoint=endpoint,
            error_type=type(last_error).__name__, error_message=last_error.message,
            attempts=attempts_allowed
        ))
        raise ExhaustedRetries(last_error, attempts_allowed) from last_error
