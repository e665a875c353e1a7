"""Order status updates (admin) — command and handler."""

from protean import handle
from protean.fields import Boolean, Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.order import Order


@storefront.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, max_length=20)
    strict = Boolean(default=False)


@storefront.command_handler(part_of=Order)
class UpdateOrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        """Returns True when a matching order was found."""
        ledger = current_domain.repository_for(Order)
        order = ledger.update_status(command.order_id, command.status, strict=bool(command.strict))
        return order is not None
