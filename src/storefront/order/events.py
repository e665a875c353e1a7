"""Domain events for the Order aggregate."""

from protean.fields import Float, Identifier, Integer, String, Text

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """A cart was frozen into a new order at checkout."""

    __version__ = "v1"

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of {product_id, name, price, quantity, image}
    item_count = Integer(required=True)
    total = Float(required=True)
    date = String(required=True, max_length=10)


@storefront.event(part_of="Order")
class OrderStatusChanged:
    """An admin moved the order to a different status."""

    __version__ = "v1"

    order_id = Identifier(required=True)
    previous_status = String(required=True, max_length=20)
    new_status = String(required=True, max_length=20)
