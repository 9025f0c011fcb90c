"""Command Handler: Orchestrates CLI command execution.

Receives commands from the main entry point (main.py), delegates the work to
ProductImageService and translates the outcome into an HTTP-style status
code: 200 on success, otherwise the status carried by the raised error.
"""

import hmac
import logging
from typing import Any, Callable, Dict, Optional

# Core Services Imports
from shopgen.core.services.product_image_service import ProductImageService

# Domain Layer Imports
from shopgen.domain.errors import AccessDenied, ShopgenError
from shopgen.domain.interfaces.user_interface import UserInterface
from shopgen.domain.models.image import ImageOptions

logger = logging.getLogger(__name__)

STATUS_OK = 200
STATUS_INTERNAL_ERROR = 500
MISSING_KEY_WARNING = "OpenAI API key not configured. Set OPENAI_API_KEY or openai.api_key in the config file."

TokenProvider = Callable[[], Optional[str]]

class CommandHandler:
    """Handles incoming commands and delegates to the product image service."""

    def __init__(
        self,
        product_image_service: ProductImageService,
        ui: UserInterface,
        access_token_provider: Optional[TokenProvider] = None,
    ):
        """Initializes the CommandHandler.

        Args:
            product_image_service: Service performing the image operations.
            ui: Where results and errors are rendered.
            access_token_provider: Returns the token gated commands require,
                or None to leave them open.
        """
        self.product_image_service = product_image_service
        self.ui = ui
        self.access_token_provider = access_token_provider or (lambda: None)

    def _check_access(self, token: Optional[str]) -> None:
        expected = self.access_token_provider()
        if not expected:
            return
        if not token or not hmac.compare_digest(token.encode("utf-8"), expected.encode("utf-8")):
            raise AccessDenied("Access denied. Invalid or missing token.")

    def _run(self, action: str, operation: Callable[[], Any], render: Callable[[Any], None]) -> int:
        """Runs an operation, renders its result and maps failures to a status code."""
        try:
            result = operation()
        except ShopgenError as e:
            logger.error(f"{action} failed ({e.status_code}): {e.message}")
            self.ui.display_error(f"{action} failed: {e.message}", status_code=e.status_code)
            return e.status_code
        except Exception as e:
            logger.error(f"Unexpected error during {action.lower()}: {e}", exc_info=True)
            self.ui.display_error(f"{action} failed: {e}", status_code=STATUS_INTERNAL_ERROR)
            return STATUS_INTERNAL_ERROR
        render(result)
        return STATUS_OK

    def handle_generate(
        self,
        product_id: str,
        prompt: Optional[str] = None,
        options: Optional[ImageOptions] = None,
        token: Optional[str] = None,
    ) -> int:
        """Handles the 'generate' command for a catalog product."""
        logger.info(f"Handling 'generate' command for product: {product_id}")

        def operation() -> Dict[str, Any]:
            self._check_access(token)
            return self.product_image_service.generate_for_product(product_id, prompt, options)

        return self._run("Image generation", operation, self.ui.display_image_result)

    def handle_cache_stats(self, token: Optional[str] = None) -> int:
        """Handles the 'cache-stats' command."""
        logger.info("Handling 'cache-stats' command")

        def operation() -> Dict[str, Any]:
            self._check_access(token)
            return self.product_image_service.cache_stats()

        return self._run("Cache statistics", operation, self.ui.display_cache_stats)

    def handle_clear_cache(self, token: Optional[str] = None) -> int:
        """Handles the 'clear-cache' command."""
        logger.info("Handling 'clear-cache' command")

        def operation() -> None:
            self._check_access(token)
            self.product_image_service.clear_cache()

        return self._run(
            "Clear cache", operation,
            lambda _: self.ui.display_info("Image cache cleared successfully"),
        )

    def handle_status(self) -> int:
        """Handles the 'status' command. Not gated."""
        logger.info("Handling 'status' command")

        def render(status: Dict[str, Any]) -> None:
            self.ui.display_service_status(status)
            if not status.get("has_api_key"):
                self.ui.display_warning(MISSING_KEY_WARNING)

        return self._run("Status check", self.product_image_service.service_status, render)

    def handle_list_products(self) -> int:
        """Handles the 'list-products' command."""
        logger.info("Handling 'list-products' command")
        return self._run("Listing products", self.product_image_service.list_products, self.ui.display_products)
