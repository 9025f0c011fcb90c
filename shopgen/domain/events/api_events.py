"""Events emitted while an outbound image call is gated, attempted and retried.

ApiRetryService and ImageGenerationService hand them to an event listener,
which logs them at DEBUG unless another one is injected.
"""

import time
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class DomainEvent:
    """Base class for domain events, stamped with wall-clock time."""
    timestamp: float = field(default_factory=time.time, init=False)


@dataclass
class CallEvent(DomainEvent):
    """Event about one endpoint of one provider (e.g. openai / images.generate)."""
    provider: str
    endpoint: str


@dataclass
class ApiCallInitiated(CallEvent):
    attempt_number: int


@dataclass
class ApiCallSucceeded(CallEvent):
    attempt_number: int
    latency_ms: float


@dataclass
class ApiCallFailed(CallEvent):
    """Every attempt failed. ExhaustedRetries is raised right after."""
    error_type: str
    error_message: str
    attempts: int


@dataclass
class ApiCallDeferred(CallEvent):
    """The rate-limit gate held the call back."""
    wait_time_seconds: float


@dataclass
class RetryScheduled(CallEvent):
    attempt_number: int
    delay_seconds: float
    error_message: Optional[str] = None


@dataclass
class CacheHitServed(DomainEvent):
    cache_key: str
