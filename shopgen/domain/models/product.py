"""Domain model for catalog products."""

from dataclasses import dataclass
from typing import Optional

from .common import ProductId

@dataclass(frozen=True)
class Product:
    """Entity representing a product in the store catalog."""
    id: ProductId
    name: str
    description: str
    price: float = 0.0
    category: Optional[str] = None
