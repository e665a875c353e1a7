"""Admin dashboard figures derived from the order ledger."""

from dataclasses import dataclass, field

from storefront.order.order import OrderStatus

CHART_POINTS = 7


@dataclass(frozen=True)
class SalesPoint:
    date: str
    amount: float


@dataclass(frozen=True)
class DashboardStats:
    total_revenue: float
    total_orders: int
    pending_orders: int
    total_products: int
    total_customers: int
    sales: list[SalesPoint] = field(default_factory=list)


def summarize(orders, product_count):
    """Build dashboard figures from ledger-ordered ``orders``.

    The sales chart plots the trailing seven entries of the ledger list, the
    same slice the admin panel has always shown.
    """
    orders = list(orders)
    return DashboardStats(
        total_revenue=sum(order.total for order in orders),
        total_orders=len(orders),
        pending_orders=sum(1 for order in orders if order.status == OrderStatus.PENDING.value),
        total_products=product_count,
        total_customers=len({order.user_id for order in orders}),
        sales=[SalesPoint(date=order.date, amount=order.total) for order in orders[-CHART_POINTS:]],
    )
