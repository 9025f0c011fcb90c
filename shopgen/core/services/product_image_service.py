"""Application Service for generating catalog product images.

Resolves the product, builds a photography prompt when the caller gives
none, delegates to ImageGenerationService and shapes the response the way
the store's API clients expect it.
"""

import logging
from typing import Any, Dict, List, Optional

# Core Layer Imports
from shopgen.core.services.image_generation_service import (
    CredentialProvider, ImageGenerationService
)

# Domain Layer Imports
from shopgen.domain.errors import ConfigurationError, ProductNotFound
from shopgen.domain.interfaces.product_catalog import ProductCatalog
from shopgen.domain.models.common import ProductId
from shopgen.domain.models.image import ImageOptions
from shopgen.domain.models.product import Product

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = (
    "Professional product photography of {name}, {description}, white background, "
    "high quality, e-commerce style, studio lighting, commercial photo"
)
API_KEY_PREFIX_LENGTH = 10
DEFAULT_CACHE_TTL_SECONDS = 3600
SERVICE_FEATURES = [
    "Retry logic with exponential backoff",
    "Response caching ({ttl} TTL)",
    "Rate limiting",
    "Configurable options",
    "Cache statistics",
]


def build_product_prompt(product: Product) -> str:
    """Builds the default photography prompt for a product."""
    return PROMPT_TEMPLATE.format(name=product.name, description=product.description)


def hit_rate_percent(hit_rate: float) -> int:
    """Hit rate as a whole percentage, halves rounded up (0.125 -> 13)."""
    return int(hit_rate * 100 + 0.5)


def describe_ttl(seconds: float) -> str:
    """Renders a TTL the way people say it: '1 hour', '90 minutes', '45 seconds'."""
    seconds = int(seconds)
    for unit, size in (("hour", 3600), ("minute", 60)):
        if seconds >= size and seconds % size == 0:
            count = seconds // size
            return f"{count} {unit}{'s' if count != 1 else ''}"
    return f"{seconds} second{'s' if seconds != 1 else ''}"


class ProductImageService:
    """Generates product images and exposes cache administration."""

    def __init__(
        self,
        image_service: ImageGenerationService,
        catalog: ProductCatalog,
        credential_provider: CredentialProvider,
        cache_ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS,
    ):
        self.image_service = image_service
        self.catalog = catalog
        self.credential_provider = credential_provider
        self.cache_ttl_seconds = cache_ttl_seconds

    def generate_for_product(
        self,
        product_id: str,
        prompt: Optional[str] = None,
        options: Optional[ImageOptions] = None,
    ) -> Dict[str, Any]:
        """Generates an image for a catalog product.

        Args:
            product_id: Identifier of the product in the catalog.
            prompt: Custom prompt; built from the product when empty.
            options: Image options (defaults if None).

        Returns:
            Response payload with the image URL, prompts and generation metadata.

        Raises:
            ConfigurationError: No API key configured.
            ProductNotFound: The catalog has no such product.
        """
        if not self.credential_provider():
            raise ConfigurationError("OpenAI API key not configured")

        product = self.catalog.find_by_id(ProductId(product_id))
        if product is None:
            raise ProductNotFound(product_id)

        effective_prompt = prompt or build_product_prompt(product)
        logger.info(f"Generating image for product {product_id}, prompt: {effective_prompt[:100]}...")

        options = options or ImageOptions()
        result = self.image_service.execute(effective_prompt, options)

        return {
            "message": "Image generated successfully",
            "image_url": result.image_url,
            "prompt": effective_prompt,
            "revised_prompt": result.revised_prompt,
            "product_id": product_id,
            "metadata": {
                "from_cache": result.from_cache,
                "attempts": result.attempts,
                "model": options.model,
                "size": options.size,
                "quality": options.quality,
                "style": options.style,
            },
        }

    def cache_stats(self) -> Dict[str, Any]:
        stats = self.image_service.cache_stats()
        return {
            **stats,
            "cache_size": stats["keys"],
            "hit_rate_percentage": hit_rate_percent(stats["hit_rate"]),
        }

    def clear_cache(self) -> None:
        self.image_service.clear_cache()

    def service_status(self) -> Dict[str, Any]:
        """Reports whether the service is configured, without calling the API."""
        api_key = self.credential_provider()
        stats = self.image_service.cache_stats()
        return {
            "message": "Image service status - OpenAI DALL-E with retry logic and caching",
            "has_api_key": bool(api_key),
            "api_key_prefix": f"{api_key[:API_KEY_PREFIX_LENGTH]}..." if api_key else "not found",
            "service": "OpenAI",
            "features": [feature.format(ttl=describe_ttl(self.cache_ttl_seconds)) for feature in SERVICE_FEATURES],
            "cache_info": {
                "size": stats["keys"],
                "hit_rate": f"{hit_rate_percent(stats['hit_rate'])}%",
                "total_requests": stats["hits"] + stats["misses"],
            },
            "is_working": bool(api_key),
        }

    def list_products(self) -> List[Product]:
        return self.catalog.list_products()
