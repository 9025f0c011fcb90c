"""API Resilience Implementations.

Contains services for handling API rate limits and retries with exponential
backoff, plus the system clock they wait on.
Bounded Context: API Resilience
"""
