"""Order Ledger: every order ever placed, newest first."""

import structlog
from protean.exceptions import ObjectNotFoundError

from storefront.domain import storefront
from storefront.order.order import Order

logger = structlog.get_logger(__name__)


class UserOrders:
    """Lazy view of one user's orders in ledger order.

    Nothing is read until iteration starts, and every iteration reads the
    ledger afresh, so the view can be walked any number of times.
    """

    def __init__(self, ledger, user_id):
        self._ledger = ledger
        self._user_id = str(user_id)

    def __iter__(self):
        return (order for order in self._ledger.newest_first() if str(order.user_id) == self._user_id)


@storefront.repository(part_of=Order)
class OrderLedger:
    """Repository for the Order aggregate.

    Ledger order is kept in ``Order.sequence``: appending gives the order a
    sequence above every existing one, so it sorts first.
    """

    def append(self, order: Order) -> Order:
        order.sequence = self._next_sequence()
        self.add(order)
        logger.info("Order appended to ledger", order_id=str(order.id), sequence=order.sequence)
        return order

    def newest_first(self) -> list[Order]:
        return sorted(self._dao.query.all().items, key=lambda o: o.sequence, reverse=True)

    def by_user(self, user_id) -> UserOrders:
        return UserOrders(self, user_id)

    def find(self, order_id) -> Order | None:
        if not order_id:
            return None
        try:
            return self.get(order_id)
        except ObjectNotFoundError:
            return None

    def update_status(self, order_id, new_status, strict=False) -> Order | None:
        """Change an order's status. Unknown order ids are ignored."""
        order = self.find(order_id)
        if order is None:
            logger.info("No order to update", order_id=str(order_id))
            return None

        order.change_status(new_status, strict=strict)
        self.add(order)
        return order

    def _next_sequence(self) -> int:
        sequences = [order.sequence for order in self._dao.query.all().items]
        return max(sequences, default=0) + 1
