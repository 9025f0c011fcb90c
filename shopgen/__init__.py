"""shopgen: product image generation for an e-commerce catalog.

Wraps an external image-generation API with a TTL cache, a minimum-delay
rate-limit gate and bounded retries with exponential backoff.
"""

__version__ = "1.0.0"
