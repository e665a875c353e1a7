"""Cart management — command and handler."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart
from storefront.domain import storefront


@storefront.command(part_of="ShoppingCart")
class CreateCart:
    """Create the device's shopping cart."""

    cart_id = Identifier()  # Generated when absent


@storefront.command_handler(part_of=ShoppingCart)
class ManageCartHandler:
    @handle(CreateCart)
    def create_cart(self, command):
        cart = ShoppingCart.create(cart_id=command.cart_id)
        current_domain.repository_for(ShoppingCart).add(cart)
        return str(cart.id)
