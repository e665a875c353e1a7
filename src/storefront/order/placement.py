"""Order placement (checkout) — the order factory, command and handler."""

from datetime import UTC, datetime

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart
from storefront.domain import storefront
from storefront.order.order import Order
from storefront.shared.errors import NotAuthenticated
from storefront.shared.identity import time_derived_id

logger = structlog.get_logger(__name__)


def place_order(cart, user_id, shipping_address, placed_on=None):
    """Freeze the cart's current lines into a new pending Order.

    The cart itself is left untouched; appending to the ledger and clearing
    the cart are the caller's job.

    Raises:
        NotAuthenticated: no user is signed in.
        ValidationError: the cart is empty.
    """
    if not user_id:
        raise NotAuthenticated({"user": ["Sign in to place an order"]})
    if not cart.items:
        raise ValidationError({"cart": ["Cannot place an order for an empty cart"]})

    lines = [
        {
            "product_id": str(item.product_id),
            "name": item.name,
            "price": item.price,
            "quantity": item.quantity,
            "image": item.image,
        }
        for item in cart.lines
    ]

    return Order.place(
        order_id=time_derived_id("ord-"),
        user_id=user_id,
        lines=lines,
        shipping_address=shipping_address,
        placed_on=placed_on or datetime.now(UTC).date().isoformat(),
    )


@storefront.command(part_of="Order")
class PlaceOrder:
    cart_id = Identifier(required=True)
    user_id = Identifier()  # Absent when nobody is signed in
    shipping_address = Text()


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def checkout(self, command):
        cart_repo = current_domain.repository_for(ShoppingCart)
        cart = cart_repo.get(command.cart_id)

        order = place_order(cart, command.user_id, command.shipping_address or "")
        current_domain.repository_for(Order).append(order)

        cart.clear()
        cart_repo.add(cart)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            user_id=str(order.user_id),
            total=order.total,
            item_count=len(order.items),
        )
        return str(order.id)
