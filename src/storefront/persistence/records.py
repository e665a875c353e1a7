"""Pydantic shapes of the durable state keys, and their mapping to aggregates.

Stored JSON uses camelCase field names (``productId``, ``isFeatured``,
``shippingAddress``). These are external contracts, separate from the
domain model, and must stay stable so saved state keeps loading.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from storefront.cart.cart import CartItem, ShoppingCart
from storefront.catalogue.product import Product, Review
from storefront.order.order import Order, OrderItem, OrderStatus


class UserRole(Enum):
    GUEST = "GUEST"
    CUSTOMER = "CUSTOMER"
    ADMIN = "ADMIN"


class Record(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    def dump(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------
class User(Record):
    id: str
    name: str
    email: str
    role: UserRole = UserRole.CUSTOMER
    avatar: str | None = None


class Category(Record):
    id: str
    name: str
    slug: str
    image: str = ""


class ReviewRecord(Record):
    id: str
    user_id: str
    user_name: str
    rating: int = Field(default=5, ge=0, le=5)
    comment: str = ""
    date: str


class ProductRecord(Record):
    id: str
    name: str
    description: str = ""
    price: float = Field(ge=0)
    category: str = ""
    image: str = ""
    stock: int = Field(default=0, ge=0)
    rating: float = Field(default=0.0, ge=0, le=5)
    reviews: list[ReviewRecord] = Field(default_factory=list)
    is_featured: bool = False


class CartProductRecord(Record):
    """Display copy of a product inside a cart line."""

    id: str
    name: str = ""
    price: float = Field(default=0.0, ge=0)
    image: str = ""


class CartItemRecord(Record):
    product_id: str
    quantity: int = Field(ge=1)
    product: CartProductRecord


class OrderItemRecord(Record):
    product_id: str
    name: str
    price: float = Field(ge=0)
    quantity: int = Field(ge=1)
    image: str = ""


class OrderRecord(Record):
    id: str
    user_id: str
    items: list[OrderItemRecord]
    total: float = Field(ge=0)
    status: OrderStatus = OrderStatus.PENDING
    date: str
    shipping_address: str = ""


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
def product_from_record(record: ProductRecord, position: int) -> Product:
    return Product(
        id=record.id,
        name=record.name,
        description=record.description,
        price=record.price,
        category=record.category,
        image=record.image,
        stock=record.stock,
        rating=record.rating,
        is_featured=record.is_featured,
        position=position,
        reviews=[
            Review(
                id=review.id,
                user_id=review.user_id,
                user_name=review.user_name,
                rating=review.rating,
                comment=review.comment,
                date=review.date,
            )
            for review in record.reviews
        ],
    )


def product_to_record(product: Product) -> ProductRecord:
    return ProductRecord(
        id=str(product.id),
        name=product.name,
        description=product.description or "",
        price=product.price,
        category=product.category or "",
        image=product.image or "",
        stock=product.stock,
        rating=product.rating or 0.0,
        is_featured=bool(product.is_featured),
        reviews=[
            ReviewRecord(
                id=str(review.id),
                user_id=str(review.user_id),
                user_name=review.user_name or "",
                rating=review.rating,
                comment=review.comment or "",
                date=review.date or "",
            )
            for review in product.reviews
        ],
    )


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
def cart_from_records(records: list[CartItemRecord], cart_id=None) -> ShoppingCart:
    """Rebuild the cart as it was saved. Duplicate product lines keep the first one."""
    cart = ShoppingCart.create(cart_id=cart_id)
    seen = set()
    for line_no, record in enumerate(records, start=1):
        if record.product_id in seen:
            continue
        seen.add(record.product_id)
        cart.add_items(
            CartItem(
                product_id=record.product_id,
                quantity=record.quantity,
                name=record.product.name,
                price=record.product.price,
                image=record.product.image,
                line_no=line_no,
            )
        )
    return cart


def cart_to_records(cart: ShoppingCart) -> list[CartItemRecord]:
    return [
        CartItemRecord(
            product_id=str(item.product_id),
            quantity=item.quantity,
            product=CartProductRecord(
                id=str(item.product_id),
                name=item.name or "",
                price=item.price or 0.0,
                image=item.image or "",
            ),
        )
        for item in cart.lines
    ]


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
def order_from_record(record: OrderRecord, sequence: int) -> Order:
    return Order(
        id=record.id,
        user_id=record.user_id,
        items=[
            OrderItem(
                product_id=item.product_id,
                name=item.name,
                price=item.price,
                quantity=item.quantity,
                image=item.image,
                line_no=line_no,
            )
            for line_no, item in enumerate(record.items, start=1)
        ],
        total=record.total,
        status=record.status.value,
        date=record.date,
        shipping_address=record.shipping_address,
        sequence=sequence,
    )


def order_to_record(order: Order) -> OrderRecord:
    return OrderRecord(
        id=str(order.id),
        user_id=str(order.user_id),
        items=[
            OrderItemRecord(
                product_id=str(item.product_id),
                name=item.name,
                price=item.price,
                quantity=item.quantity,
                image=item.image or "",
            )
            for item in order.lines
        ],
        total=order.total,
        status=OrderStatus(order.status),
        date=order.date or "",
        shipping_address=order.shipping_address or "",
    )
