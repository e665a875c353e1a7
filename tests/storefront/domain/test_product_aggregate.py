"""Tests for the Product aggregate and its Review entity."""

import pytest
from protean.exceptions import ValidationError
from storefront.catalogue.events import ProductAdded, ProductReplaced
from storefront.catalogue.product import Product


def _make_product(**overrides):
    defaults = {"product_id": "p100", "name": "Desk Lamp", "price": 45.0, "position": 0, "stock": 12}
    defaults.update(overrides)
    return Product.create(**defaults)


class TestProductCreation:
    def test_create_product(self):
        product = _make_product(description="Warm light", category="home", is_featured=True)

        assert str(product.id) == "p100"
        assert product.name == "Desk Lamp"
        assert product.price == 45.0
        assert product.stock == 12
        assert product.category == "home"
        assert product.is_featured is True

    def test_new_product_starts_unrated(self):
        product = _make_product()
        assert product.rating == 0.0
        assert len(product.reviews) == 0

    def test_create_raises_event(self):
        product = _make_product()

        assert len(product._events) == 1
        event = product._events[0]
        assert isinstance(event, ProductAdded)
        assert event.product_id == "p100"
        assert event.stock == 12

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            _make_product(price=-1.0)

    def test_negative_stock_rejected(self):
        with pytest.raises(ValidationError):
            _make_product(stock=-3)

    def test_in_stock(self):
        assert _make_product(stock=1).in_stock is True
        assert _make_product(stock=0).in_stock is False


class TestReplaceDetails:
    def test_replaces_every_editable_attribute(self):
        product = _make_product(position=3)
        product._events.clear()

        product.replace_details(
            name="Desk Lamp XL",
            price=55.0,
            description="Brighter",
            category="home",
            image="lamp.jpg",
            stock=4,
            rating=4.5,
            is_featured=True,
        )

        assert str(product.id) == "p100"
        assert product.position == 3
        assert product.name == "Desk Lamp XL"
        assert product.price == 55.0
        assert product.stock == 4
        assert product.rating == 4.5
        assert product.is_featured is True

        event = product._events[0]
        assert isinstance(event, ProductReplaced)
        assert event.previous_price == 45.0
        assert event.new_price == 55.0
        assert event.previous_stock == 12
        assert event.new_stock == 4

    def test_replaces_reviews(self):
        product = _make_product()
        product.replace_details(
            name="Desk Lamp",
            price=45.0,
            reviews=[
                {
                    "id": "r1",
                    "user_id": "u2",
                    "user_name": "Ahmed Ali",
                    "rating": 5,
                    "comment": "Lovely",
                    "date": "2024-01-02",
                }
            ],
        )
        assert len(product.reviews) == 1
        assert product.reviews[0].comment == "Lovely"

        product.replace_details(name="Desk Lamp", price=45.0, reviews=[])
        assert len(product.reviews) == 0
