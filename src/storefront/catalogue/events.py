"""Domain events for the Product aggregate."""

from protean.fields import Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductAdded:
    """A new product was added to the catalog by an admin."""

    __version__ = "v1"

    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    price = Float(required=True)
    stock = Integer(required=True)


@storefront.event(part_of="Product")
class ProductReplaced:
    """An existing product's details were replaced wholesale."""

    __version__ = "v1"

    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    previous_price = Float(required=True)
    new_price = Float(required=True)
    previous_stock = Integer(required=True)
    new_stock = Integer(required=True)
