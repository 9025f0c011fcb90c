"""Interface for product catalog lookups.

The catalog is owned by the store's CRUD backend; image generation only
needs to resolve a product by identifier.
"""

import abc
from typing import List, Optional

from ..models.common import ProductId
from ..models.product import Product


class ProductCatalog(abc.ABC):
    """Abstract Base Class for read access to store products."""

    @abc.abstractmethod
    def find_by_id(self, product_id: ProductId) -> Optional[Product]:
        """Looks up a product by identifier.

        Returns:
            The product, or None if the catalog has no such identifier.
        """
        pass

    @abc.abstractmethod
    def list_products(self) -> List[Product]:
        """Returns every product in the catalog."""
        pass
