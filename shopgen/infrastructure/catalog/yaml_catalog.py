"""Product catalog loaded from a YAML file.

Expected layout::

    products:
      - id: "64f1c0..."
        name: "Ceramic Mug"
        description: "Hand-glazed 350ml mug"
        price: 12.5
        category: "Kitchen"
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from shopgen.domain.errors import ConfigurationError
from shopgen.domain.interfaces.product_catalog import ProductCatalog
from shopgen.domain.models.common import ProductId
from shopgen.domain.models.product import Product

logger = logging.getLogger(__name__)

class YamlProductCatalog(ProductCatalog):
    """Read-only catalog backed by a YAML document."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self._products: Optional[Dict[str, Product]] = None

    def _load(self) -> Dict[str, Product]:
        if self._products is not None:
            return self._products
        if not self.path.is_file():
            raise ConfigurationError(f"Product catalog not found: {self.path}")
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                document = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Failed to parse product catalog {self.path}: {e}") from e

        entries = document.get("products") if isinstance(document, dict) else None
        if not isinstance(entries, list):
            raise ConfigurationError(f"Product catalog {self.path} has no 'products' list")

        products: Dict[str, Product] = {}
        for raw in entries:
            if not isinstance(raw, dict) or "id" not in raw or "name" not in raw:
                logger.warning(f"Skipping malformed catalog entry: {raw!r}")
                continue
            product = Product(
                id=ProductId(str(raw["id"])),
                name=str(raw["name"]),
                description=str(raw.get("description", "")),
                price=float(raw.get("price", 0) or 0),
                category=raw.get("category"),
            )
            products[product.id] = product
        logger.info(f"Loaded {len(products)} products from {self.path}")
        self._products = products
        return products

    def find_by_id(self, product_id: ProductId) -> Optional[Product]:
        return self._load().get(str(product_id))

    def list_products(self) -> List[Product]:
        return list(self._load().values())
