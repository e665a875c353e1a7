"""Catalog Store: repository queries over the Product aggregate."""

import structlog
from protean.exceptions import ObjectNotFoundError

from storefront.catalogue.product import Product
from storefront.domain import storefront

logger = structlog.get_logger(__name__)

SORT_KEYS = ("newest", "price-low", "price-high", "rating")


@storefront.repository(part_of=Product)
class ProductCatalog:
    """Repository for the Product aggregate.

    Catalog order is the ``position`` field: seeded and restored products keep
    their stored order and newly listed products are appended at the end.
    """

    def find(self, product_id) -> Product | None:
        """Return the product, or None when it does not exist (e.g. deleted by an admin)."""
        if not product_id:
            return None
        try:
            return self.get(product_id)
        except ObjectNotFoundError:
            logger.debug("Product not found", product_id=str(product_id))
            return None

    def ordered(self) -> list[Product]:
        """All products in catalog order."""
        return sorted(self._dao.query.all().items, key=lambda p: p.position)

    def featured(self) -> list[Product]:
        return [product for product in self.ordered() if product.is_featured]

    def next_position(self) -> int:
        positions = [product.position for product in self._dao.query.all().items]
        return max(positions, default=-1) + 1

    def browse(self, category=None, search="", max_price=None, sort="newest") -> list[Product]:
        """Filter and sort the catalog the way the product listing page does.

        ``search`` matches name or description case-insensitively. ``newest``
        keeps catalog order; ``rating`` sorts best-rated first.
        """
        if sort not in SORT_KEYS:
            logger.debug("Unknown sort key, using catalog order", sort=sort)
            sort = "newest"

        term = (search or "").strip().lower()
        products = [
            product
            for product in self.ordered()
            if (not term or term in (product.name or "").lower() or term in (product.description or "").lower())
            and (not category or product.category == category)
            and (max_price is None or product.price <= max_price)
        ]

        if sort == "price-low":
            products.sort(key=lambda p: p.price)
        elif sort == "price-high":
            products.sort(key=lambda p: p.price, reverse=True)
        elif sort == "rating":
            products.sort(key=lambda p: p.rating, reverse=True)
        return products
