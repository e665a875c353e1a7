"""Product management (admin) — commands and handler."""

import json

import structlog
from protean import handle
from protean.fields import Boolean, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.shared.identity import time_derived_id

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Product")
class UpsertProduct:
    """Replace the product with ``product_id`` or, when there is none, list a new one."""

    product_id = Identifier()  # Unknown or missing → a new product is created
    name = String(required=True, max_length=255)
    description = Text()
    price = Float(required=True, min_value=0.0)
    category = String(max_length=100)
    image = String(max_length=500)
    stock = Integer(default=0, min_value=0)
    rating = Float(default=0.0, min_value=0.0, max_value=5.0)
    is_featured = Boolean(default=False)
    reviews = Text()  # JSON: list of {id, user_id, user_name, rating, comment, date}


@storefront.command(part_of="Product")
class DeleteProduct:
    product_id = Identifier(required=True)


@storefront.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(UpsertProduct)
    def upsert_product(self, command):
        repo = current_domain.repository_for(Product)
        existing = repo.find(command.product_id)

        if existing is not None:
            reviews = json.loads(command.reviews) if isinstance(command.reviews, str) else (command.reviews or [])
            existing.replace_details(
                name=command.name,
                price=command.price,
                description=command.description,
                category=command.category,
                image=command.image,
                stock=command.stock or 0,
                rating=command.rating or 0.0,
                is_featured=command.is_featured,
                reviews=reviews,
            )
            repo.add(existing)
            logger.info("Product replaced", product_id=str(existing.id))
            return str(existing.id)

        product = Product.create(
            product_id=time_derived_id("p"),
            name=command.name,
            price=command.price,
            position=repo.next_position(),
            description=command.description,
            category=command.category,
            image=command.image,
            stock=command.stock or 0,
            is_featured=command.is_featured,
        )
        repo.add(product)
        logger.info("Product added", product_id=str(product.id), name=product.name)
        return str(product.id)

    @handle(DeleteProduct)
    def delete_product(self, command):
        """Remove a product. Carts and placed orders keep their own copies of its data."""
        repo = current_domain.repository_for(Product)
        product = repo.find(command.product_id)
        if product is None:
            logger.info("Product already absent, nothing to delete", product_id=str(command.product_id))
            return

        repo._dao.delete(product)
        logger.info("Product deleted", product_id=str(command.product_id))
