"""Concrete implementation of the ImageModel interface using the OpenAI API.

Hides the specifics of the OpenAI client library and translates requests/
responses between the domain model and the OpenAI images API format.
Retries are handled by ApiRetryService, so the SDK's own retries are disabled.
"""

import logging
from threading import Lock
from typing import Any, Dict

from openai import OpenAI, APIError, AuthenticationError, PermissionDeniedError

# Domain Layer Imports
from shopgen.domain.errors import ConfigurationError, TransientCallError
from shopgen.domain.interfaces.image_model import ImageModel
from shopgen.domain.models.common import ApiKey
from shopgen.domain.models.image import GeneratedImage, ImageRequest

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 60.0

class DalleClient(ImageModel):
    """OpenAI DALL-E implementation of the ImageModel interface."""

    provider_name = "openai"

    def __init__(self, timeout: float = DEFAULT_TIMEOUT_SECONDS):
        """Initializes the adapter.

        Args:
            timeout: Per-request timeout in seconds.
        """
        self.timeout = timeout
        self._clients: Dict[str, OpenAI] = {}
        self._lock = Lock()
        logger.info(f"DalleClient initialized with timeout={timeout}s")

    def _client_for(self, api_key: ApiKey) -> OpenAI:
        """Returns an SDK client for the key, creating it on first use."""
        with self._lock:
            client = self._clients.get(api_key)
            if client is None:
                client = OpenAI(api_key=api_key, timeout=self.timeout, max_retries=0)
                self._clients[api_key] = client
            return client

    def _build_request_body(self, request: ImageRequest) -> Dict[str, Any]:
        options = request.options
        body: Dict[str, Any] = {
            "model": options.model,
            "prompt": request.prompt,
            "n": 1,
            "size": options.size,
            "response_format": "url",
        }
        # Add DALL-E 3 specific options
        if options.supports_quality_and_style:
            body["quality"] = options.quality
            body["style"] = options.style
        return body

    def _parse_response(self, response: Any) -> GeneratedImage:
        """Extracts the first image from the SDK response object."""
        try:
            image = response.data[0]
            url = image.url
        except (AttributeError, IndexError, TypeError) as e:
            logger.error(f"Failed to parse OpenAI image response: {e}")
            raise TransientCallError(f"Invalid response structure from OpenAI: {e}", cause=e) from e
        if not url:
            raise TransientCallError("OpenAI returned no image URL")
        return GeneratedImage(url=url, revised_prompt=getattr(image, "revised_prompt", None))

    def generate_image(self, request: ImageRequest, api_key: ApiKey) -> GeneratedImage:
        """Sends one image generation request to OpenAI and waits for the result."""
        body = self._build_request_body(request)
        logger.debug(f"Sending image request to OpenAI model: {body['model']}, size={body['size']}")
        client = self._client_for(api_key)
        try:
            response = client.images.generate(**body)
        except (AuthenticationError, PermissionDeniedError) as e:
            logger.error(f"OpenAI rejected the API key: {e.message}")
            raise ConfigurationError(f"OpenAI API key rejected: {e.message}") from e
        except APIError as e:
            # Connection errors, timeouts, 429 and 5xx all land here
            logger.warning(f"OpenAI API error ({type(e).__name__}): {e.message}")
            raise TransientCallError(e.message, cause=e) from e
        return self._parse_response(response)
