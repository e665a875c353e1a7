"""Order aggregate, the immutable record of a checkout.

Items, total, date and shipping address are fixed when the order is placed.
Only ``status`` changes afterwards, and only through admin action.

Status flow:
    PENDING → PROCESSING → SHIPPED → DELIVERED
    CANCELLED from any non-terminal state

Transitions are not validated unless the caller asks for strict mode; the
storefront lets admins set any status by default.
"""

import json
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import Float, HasMany, Identifier, Integer, String, Text

from storefront.domain import storefront
from storefront.order.events import OrderPlaced, OrderStatusChanged


class OrderStatus(Enum):
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


# State machine transition map, enforced only in strict mode
_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PROCESSING, OrderStatus.CANCELLED},
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED, OrderStatus.CANCELLED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}


@storefront.entity(part_of="Order")
class OrderItem:
    """A frozen copy of a cart line: later product edits never reach it."""

    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)
    image = String(max_length=500)
    line_no = Integer(default=0)


@storefront.aggregate
class Order:
    user_id = Identifier(required=True)
    items = HasMany(OrderItem)
    total = Float(default=0.0, min_value=0.0)
    status = String(
        choices=OrderStatus,
        default=OrderStatus.PENDING.value,
    )
    date = String(max_length=10)  # ISO date string
    shipping_address = Text()
    sequence = Integer(default=0)  # Ledger position, higher is newer

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, order_id, user_id, lines, shipping_address, placed_on):
        """Create a pending order from snapshot lines.

        Args:
            lines: List of dicts with product_id, name, price, quantity, image.
            placed_on: ISO ``YYYY-MM-DD`` date string.
        """
        total = sum(line["price"] * line["quantity"] for line in lines)

        order = cls(
            id=order_id,
            user_id=user_id,
            items=[OrderItem(line_no=index, **line) for index, line in enumerate(lines, start=1)],
            total=total,
            status=OrderStatus.PENDING.value,
            date=placed_on,
            shipping_address=shipping_address,
        )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user_id),
                items=json.dumps(lines),
                item_count=len(lines),
                total=total,
                date=placed_on,
            )
        )
        return order

    @property
    def lines(self):
        return sorted(self.items, key=lambda item: item.line_no)

    # -------------------------------------------------------------------
    # Status
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status):
        current = OrderStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

    def change_status(self, new_status, strict=False):
        """Move the order to ``new_status``. Setting the current status again does nothing."""
        try:
            target = OrderStatus(new_status.value if isinstance(new_status, OrderStatus) else new_status)
        except ValueError:
            raise ValidationError({"status": [f"Unknown order status: {new_status}"]}) from None

        previous = OrderStatus(self.status)
        if target == previous:
            return

        if strict:
            self._assert_can_transition(target)

        self.status = target.value

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous.value,
                new_status=target.value,
            )
        )
