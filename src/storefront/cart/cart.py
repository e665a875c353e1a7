"""Shopping Cart aggregate, the current shopper's pending purchase.

A cart holds at most one line per product. Quantities are never rejected:
they are clamped to ``[1, stock]`` using the stock value supplied by the
caller, which must be read from the catalog at the moment of the call. A
line whose quantity would fall below 1 is removed instead.

Each line also keeps a display copy of the product (name, price, image).
The copy is used for the subtotal and for the order snapshot at checkout,
but never for stock decisions.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from storefront.cart.events import (
    CartCleared,
    CartItemAdded,
    CartItemRemoved,
    CartQuantityUpdated,
)
from storefront.domain import storefront


@storefront.entity(part_of="ShoppingCart")
class CartItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    name = String(max_length=255)
    price = Float(default=0.0, min_value=0.0)
    image = String(max_length=500)
    line_no = Integer(default=0)


@storefront.aggregate
class ShoppingCart:
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def one_line_per_product(self):
        product_ids = [str(item.product_id) for item in self.items]
        if len(product_ids) != len(set(product_ids)):
            raise ValidationError({"items": ["A product can appear only once in the cart"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, cart_id=None):
        now = datetime.now(UTC)
        if cart_id:
            return cls(id=cart_id, created_at=now, updated_at=now)
        return cls(created_at=now, updated_at=now)

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def find_item(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    @property
    def lines(self):
        """Cart lines in the order they were first added."""
        return sorted(self.items, key=lambda item: item.line_no)

    @property
    def subtotal(self):
        return sum(item.quantity * item.price for item in self.items)

    @property
    def item_count(self):
        return sum(item.quantity for item in self.items)

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, product_id, quantity, stock, name=None, price=0.0, image=None):
        """Add ``quantity`` units of a product, capped at the current ``stock``.

        Returns True when the product is in the cart afterwards, False when it
        is out of stock (an existing line for it is dropped in that case).
        """
        quantity = max(1, int(quantity))
        existing = self.find_item(product_id)

        if stock < 1:
            if existing:
                self.remove_item(product_id)
            return False

        now = datetime.now(UTC)

        if existing:
            existing.quantity = min(existing.quantity + quantity, stock)
            existing.name = name
            existing.price = price
            existing.image = image
            new_quantity = existing.quantity
        else:
            new_quantity = min(quantity, stock)
            self.add_items(
                CartItem(
                    product_id=product_id,
                    quantity=new_quantity,
                    name=name,
                    price=price,
                    image=image,
                    line_no=max((i.line_no for i in self.items), default=0) + 1,
                )
            )

        self.updated_at = now

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                product_id=str(product_id),
                product_name=name,
                requested_quantity=quantity,
                new_quantity=new_quantity,
            )
        )
        return True

    def update_item_quantity(self, product_id, quantity, stock):
        """Set a line's quantity, clamped to ``[1, stock]``.

        A quantity below 1, or a stock of 0, removes the line. Unknown
        products are ignored.
        """
        item = self.find_item(product_id)
        if item is None:
            return

        if quantity < 1 or stock < 1:
            self.remove_item(product_id)
            return

        previous_quantity = item.quantity
        new_quantity = min(int(quantity), stock)
        if new_quantity == previous_quantity:
            return

        item.quantity = new_quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                product_id=str(product_id),
                previous_quantity=previous_quantity,
                new_quantity=new_quantity,
            )
        )

    def remove_item(self, product_id):
        """Remove a line. Removing a product that is not in the cart does nothing."""
        item = self.find_item(product_id)
        if item is None:
            return

        self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemRemoved(
                cart_id=str(self.id),
                product_id=str(product_id),
            )
        )

    def clear(self):
        items = list(self.items)
        if not items:
            return

        for item in items:
            self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartCleared(
                cart_id=str(self.id),
                items_removed=len(items),
            )
        )
