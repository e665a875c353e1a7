"""Cart item management — commands and handler.

Every quantity-affecting command re-reads the product from the catalog so
the stock ceiling reflects admin edits made after the item was first added.
A product that no longer exists is treated as having no stock.
"""

import structlog
from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart
from storefront.catalogue.product import Product
from storefront.domain import storefront

logger = structlog.get_logger(__name__)


@storefront.command(part_of="ShoppingCart")
class AddToCart:
    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(default=1)


@storefront.command(part_of="ShoppingCart")
class UpdateCartQuantity:
    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@storefront.command(part_of="ShoppingCart")
class RemoveFromCart:
    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.command(part_of="ShoppingCart")
class ClearCart:
    cart_id = Identifier(required=True)


@storefront.command(part_of="ShoppingCart")
class PruneCart:
    """Drop lines whose product has been deleted from the catalog."""

    cart_id = Identifier(required=True)


def _current_stock(product):
    return product.stock if product is not None else 0


@storefront.command_handler(part_of=ShoppingCart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get(command.cart_id)

        product = current_domain.repository_for(Product).find(command.product_id)
        if product is None:
            logger.warning("Cannot add unknown product to cart", product_id=str(command.product_id))
            return False

        added = cart.add_item(
            product_id=command.product_id,
            quantity=command.quantity if command.quantity is not None else 1,
            stock=product.stock,
            name=product.name,
            price=product.price,
            image=product.image,
        )
        repo.add(cart)

        if not added:
            logger.info("Product is out of stock", product_id=str(command.product_id))
        return added

    @handle(UpdateCartQuantity)
    def update_cart_quantity(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get(command.cart_id)

        product = current_domain.repository_for(Product).find(command.product_id)
        cart.update_item_quantity(
            product_id=command.product_id,
            quantity=command.quantity,
            stock=_current_stock(product),
        )
        repo.add(cart)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get(command.cart_id)
        cart.remove_item(command.product_id)
        repo.add(cart)

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get(command.cart_id)
        cart.clear()
        repo.add(cart)

    @handle(PruneCart)
    def prune_cart(self, command):
        """Returns the names of the lines that were dropped."""
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get(command.cart_id)
        catalog = current_domain.repository_for(Product)

        dropped = []
        for item in cart.lines:
            if catalog.find(item.product_id) is None:
                dropped.append(item.name or str(item.product_id))
                cart.remove_item(item.product_id)

        if dropped:
            repo.add(cart)
            logger.info("Removed cart lines for deleted products", cart_id=str(cart.id), count=len(dropped))
        return dropped
