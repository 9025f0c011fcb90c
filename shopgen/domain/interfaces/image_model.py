"""Interface for image generation models.

Defines the contract for sending a single generation request to an
image provider (e.g., OpenAI DALL-E).
"""

import abc

from ..models.common import ApiKey
from ..models.image import GeneratedImage, ImageRequest


class ImageModel(abc.ABC):
    """Abstract Base Class for image model interactions."""

    provider_name: str = "image"

    @abc.abstractmethod
    def generate_image(self, request: ImageRequest, api_key: ApiKey) -> GeneratedImage:
        """Sends one generation request to the provider and blocks for the result.

        Args:
            request: The prompt and options for the image.
            api_key: Credential used to authenticate the call.

        Returns:
            The generated image URL and the provider's revised prompt, if any.

        Raises:
            TransientCallError: On network, timeout, rate-limit or server errors.
            ConfigurationError: When the provider rejects the credential.
        """
        pass
