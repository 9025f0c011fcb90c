"""Interface for interacting with the user (output only).

Defines the contract for displaying information, errors, warnings and
structured results, allowing different UI implementations (e.g., console).
"""

import abc
from typing import Any, Dict, List

from ..models.product import Product

class UserInterface(abc.ABC):
    """Abstract Base Class for user interaction."""

    @abc.abstractmethod
    def display_output(self, output: str, **kwargs: Any) -> None:
        """Displays standard output to the user.

        Args:
            output: The string to display.
            **kwargs: Additional arguments for formatting (e.g., title).
        """
        pass

    @abc.abstractmethod
    def display_error(self, error_message: str, **kwargs: Any) -> None:
        """Displays an error message to the user.

        Args:
            error_message: The error message string.
            **kwargs: Additional arguments for formatting (e.g., status_code).
        """
        pass

    @abc.abstractmethod
    def display_warning(self, warning_message: str, **kwargs: Any) -> None:
        """Displays a warning message to the user."""
        pass

    @abc.abstractmethod
    def display_info(self, info_message: str, **kwargs: Any) -> None:
        """Displays an informational message to the user."""
        pass

    @abc.abstractmethod
    def get_prompt(self, prompt_message: str = "> ") -> str:
        """Reads one line of input from the user.

        Raises:
            EOFError: When input is closed.
        """
        pass

    @abc.abstractmethod
    def display_image_result(self, response: Dict[str, Any]) -> None:
        """Displays the response of a product image generation."""
        pass

    @abc.abstractmethod
    def display_cache_stats(self, stats: Dict[str, Any]) -> None:
        """Displays cache statistics."""
        pass

    @abc.abstractmethod
    def display_service_status(self, status: Dict[str, Any]) -> None:
        """Displays the image service self-check."""
        pass

    @abc.abstractmethod
    def display_products(self, products: List[Product]) -> None:
        """Displays a listing of catalog products."""
        pass
