"""Application Service for resilient image generation.

Wraps a single outbound image API call with a TTL cache keyed by the request
fingerprint, the shared rate-limit gate and bounded retries with exponential
backoff. All shared state (cache, gate timestamp) is owned by the injected
collaborators, so each instance is isolated.
"""

import logging
from dataclasses import replace
from typing import Callable, Optional

# Domain Layer Imports
from shopgen.domain.errors import ConfigurationError, InvalidInput
from shopgen.domain.events.api_events import CacheHitServed
from shopgen.domain.interfaces.cache import CacheService
from shopgen.domain.interfaces.image_model import ImageModel
from shopgen.domain.models.common import ApiKey, CacheStats, PromptText
from shopgen.domain.models.image import (
    ImageGenerationResult, ImageOptions, ImageRequest, create_cache_key
)

# Infrastructure Layer Imports
from shopgen.infrastructure.resilience.api_retry import ApiRetryService

logger = logging.getLogger(__name__)

CredentialProvider = Callable[[], Optional[str]]

class ImageGenerationService:
    """Generates images through the image model with caching and retries."""

    def __init__(
        self,
        image_model: ImageModel,
        cache_service: CacheService,
        api_retry_service: ApiRetryService,
        credential_provider: CredentialProvider,
        cache_ttl: Optional[float] = None,
    ):
        """Initializes the ImageGenerationService.

        Args:
            image_model: Adapter performing the outbound call.
            cache_service: Store for successful results.
            api_retry_service: Executes calls through the rate limiter with retries.
            credential_provider: Returns the API key, or None when not configured.
            cache_ttl: TTL for new entries (the cache default if None).
        """
        self.image_model = image_model
        self.cache_service = cache_service
        self.api_retry_service = api_retry_service
        self.credential_provider = credential_provider
        self.cache_ttl = cache_ttl

    def execute(self, prompt: str, options: Optional[ImageOptions] = None) -> ImageGenerationResult:
        """Generates an image for the prompt, serving from cache when possible.

        Args:
            prompt: Free-text description of the image.
            options: Model, size, quality, style, retry bound and cache flag.
                A max_retries of None uses the retry service default.

        Returns:
            The image result, marked with whether it came from the cache and
            how many outbound attempts were used (0 for a cache hit).

        Raises:
            InvalidInput: Empty prompt or max_retries below 1.
            ConfigurationError: No API key configured, or the key was rejected.
            ExhaustedRetries: Every attempt failed with a transient error.
        """
        if not prompt or not prompt.strip():
            raise InvalidInput("Prompt is required")

        api_key = self.credential_provider()
        if not api_key:
            raise ConfigurationError("OpenAI API key not configured")

        options = options or ImageOptions()
        if options.max_retries is not None and options.max_retries < 1:
            raise InvalidInput(f"maxRetries must be at least 1, got {options.max_retries}")

        cache_key = create_cache_key(prompt, options) if options.use_cache else None

        # Check cache first if enabled
        if cache_key is not None:
            cached = self.cache_service.get(cache_key)
            if cached is not None:
                logger.info(f"Using cached image for prompt: {prompt[:50]}...")
                self.api_retry_service.event_listener(CacheHitServed(cache_key=cache_key))
                return replace(cached, from_cache=True, attempts=0)

        logger.info(f"Generating image ({options.model}, {options.size}): {prompt[:50]}...")
        request = ImageRequest(prompt=PromptText(prompt), options=options)
        outcome = self.api_retry_service.execute_with_retry(
            self.image_model.generate_image,
            request,
            ApiKey(api_key),
            max_retries=options.max_retries,
            endpoint_name="images.generate",
        )

        result = ImageGenerationResult(
            image_url=outcome.result.url,
            revised_prompt=outcome.result.revised_prompt,
            from_cache=False,
            attempts=outcome.attempts,
        )

        # Cache the successful result if caching is enabled
        if cache_key is not None:
            self.cache_service.set(cache_key, result, ttl=self.cache_ttl)
            logger.debug("Cached image result for future use")

        logger.info(f"Image generated successfully on attempt {outcome.attempts}")
        return result

    def cache_stats(self) -> CacheStats:
        """Returns the cache entry count and hit/miss counters."""
        return self.cache_service.stats()

    def clear_cache(self) -> None:
        """Drops every cached image result."""
        self.cache_service.clear()
