"""Shared BDD fixtures and step definitions for the storefront cart."""

import pytest
from pytest_bdd import given, parsers, then, when
from storefront.cart.cart import ShoppingCart


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def catalog():
    """Product id -> (price, stock), as the catalog reports them."""
    return {}


@pytest.fixture()
def outcome():
    """Container for the placed order or the captured validation error."""
    return {"order": None, "exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("an empty cart", target_fixture="cart")
def empty_cart():
    cart = ShoppingCart.create()
    cart._events.clear()
    return cart


@given(parsers.parse('a product "{product_id}" priced {price:g} with stock {stock:d}'))
def product_in_catalog(catalog, product_id, price, stock):
    catalog[product_id] = (price, stock)


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.parse('I add {quantity:d} of "{product_id}" to the cart'))
def add_to_cart(cart, catalog, product_id, quantity):
    price, stock = catalog.get(product_id, (0.0, 0))
    cart.add_item(
        product_id=product_id,
        quantity=quantity,
        stock=stock,
        name=f"Product {product_id}",
        price=price,
    )


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.parse('the cart holds {quantity:d} of "{product_id}"'))
def cart_holds(cart, product_id, quantity):
    item = cart.find_item(product_id)
    assert item is not None
    assert item.quantity == quantity


@then("the cart is empty")
def cart_is_empty(cart):
    assert len(cart.items) == 0


@then(parsers.parse("the cart has {count:d} line"))
def cart_has_lines(cart, count):
    assert len(cart.items) == count
