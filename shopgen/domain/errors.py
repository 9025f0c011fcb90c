"""Error taxonomy for image generation.

Every error carries the HTTP-style status code the inbound glue reports to
the user: 400 for bad input, 401 for a rejected access token, 404 for an
unknown product and 500 for configuration or upstream failures.
"""

from typing import Optional


class ShopgenError(Exception):
    """Base class for errors surfaced to callers with a status code."""
    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class InvalidInput(ShopgenError):
    """Raised for a missing prompt or out-of-range options. Never retried."""
    status_code = 400


class AccessDenied(ShopgenError):
    """Raised when a gated operation is invoked without a valid access token."""
    status_code = 401


class ProductNotFound(ShopgenError):
    """Raised when the product catalog has no entry for an identifier."""
    status_code = 404

    def __init__(self, product_id: str):
        super().__init__("Product not found")
        self.product_id = product_id


class ConfigurationError(ShopgenError):
    """Raised when a required credential or setting is absent. Never retried."""
    status_code = 500


class TransientCallError(ShopgenError):
    """Raised by image model adapters for network or API failures worth retrying."""
    status_code = 500

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class ExhaustedRetries(ShopgenError):
    """Raised when every attempt failed. Wraps the last transient error."""
    status_code = 500

    def __init__(self, last_error: TransientCallError, attempts: int):
        self.last_error = last_error
        self.attempts = attempts
        super().__init__(f"Failed to generate image after {attempts} attempts: {last_error.message}")
