"""Product aggregate root with its Review entity.

The catalog is the source of truth for price, stock and rating at any
instant. Carts re-read stock from here on every quantity change, and orders
copy price and name at checkout so later edits never reach them.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import (
    Boolean,
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    Text,
)

from storefront.catalogue.events import ProductAdded, ProductReplaced
from storefront.domain import storefront


@storefront.entity(part_of="Product")
class Review:
    """A customer review shown on the product page."""

    user_id = Identifier()
    user_name = String(max_length=255)
    rating = Integer(default=5, min_value=0, max_value=5)
    comment = Text()
    date = String(max_length=10)  # ISO date string


@storefront.aggregate
class Product:
    name = String(required=True, max_length=255)
    description = Text()
    price = Float(required=True, min_value=0.0)
    category = String(max_length=100)
    image = String(max_length=500)
    stock = Integer(default=0, min_value=0)
    rating = Float(default=0.0, min_value=0.0, max_value=5.0)
    reviews = HasMany(Review)
    is_featured = Boolean(default=False)
    position = Integer(default=0)  # Catalog display order
    updated_at = DateTime()

    @invariant.post
    def reviews_must_have_unique_ids(self):
        ids = [str(review.id) for review in self.reviews]
        if len(ids) != len(set(ids)):
            raise ValidationError({"reviews": ["Each review must have a unique identifier"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(
        cls,
        product_id,
        name,
        price,
        position,
        description=None,
        category=None,
        image=None,
        stock=0,
        is_featured=False,
    ):
        """Create a freshly listed product. New products start unrated and without reviews."""
        product = cls(
            id=product_id,
            name=name,
            description=description,
            price=price,
            category=category,
            image=image,
            stock=stock,
            rating=0.0,
            is_featured=bool(is_featured),
            position=position,
            updated_at=datetime.now(UTC),
        )

        product.raise_(
            ProductAdded(
                product_id=str(product.id),
                name=product.name,
                price=product.price,
                stock=product.stock,
            )
        )
        return product

    # -------------------------------------------------------------------
    # Admin edits
    # -------------------------------------------------------------------
    def replace_details(
        self,
        name,
        price,
        description=None,
        category=None,
        image=None,
        stock=0,
        rating=0.0,
        is_featured=False,
        reviews=None,
    ):
        """Replace every editable attribute. The identifier and catalog position are kept.

        Args:
            reviews: List of dicts with id, user_id, user_name, rating, comment, date.
        """
        previous_price = self.price
        previous_stock = self.stock

        self.name = name
        self.description = description
        self.price = price
        self.category = category
        self.image = image
        self.stock = stock
        self.rating = rating
        self.is_featured = bool(is_featured)

        for review in list(self.reviews):
            self.remove_reviews(review)
        for review_data in reviews or []:
            self.add_reviews(Review(**review_data))

        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductReplaced(
                product_id=str(self.id),
                name=self.name,
                previous_price=previous_price,
                new_price=self.price,
                previous_stock=previous_stock,
                new_stock=self.stock,
            )
        )

    @property
    def in_stock(self):
        return self.stock > 0
