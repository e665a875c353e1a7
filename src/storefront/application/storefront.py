"""Storefront controller, the single owner of the shopper's application state.

The controller is the only mutation entry point a UI needs. It turns user
actions into domain commands, saves each changed collection to the state
store straight after the change, and reports outcomes through the one-way
``notify(message, severity)`` and ``navigate(screen, params)`` callbacks.

Domain errors never escape: a missing sign-in sends the user to the login
screen, other rule violations become an error notification, and missing
products degrade to ``None`` or a no-op.

All methods must run inside an active ``storefront`` domain context.
"""

import json

import structlog
from protean.exceptions import InvalidDataError, ValidationError
from protean.utils.globals import current_domain
from pydantic import TypeAdapter
from pydantic import ValidationError as RecordValidationError

from storefront.cart.cart import ShoppingCart
from storefront.cart.items import AddToCart, ClearCart, PruneCart, RemoveFromCart, UpdateCartQuantity
from storefront.catalogue.management import DeleteProduct, UpsertProduct
from storefront.catalogue.product import Product
from storefront.enhancement.gemini import DescriptionEnhancer
from storefront.order.dashboard import summarize
from storefront.order.order import Order
from storefront.order.placement import PlaceOrder
from storefront.order.status import UpdateOrderStatus
from storefront.persistence.records import (
    CartItemRecord,
    Category,
    OrderRecord,
    ProductRecord,
    User,
    UserRole,
    cart_from_records,
    cart_to_records,
    order_from_record,
    order_to_record,
    product_from_record,
    product_to_record,
)
from storefront.persistence.seed import (
    INITIAL_CATEGORIES,
    INITIAL_ORDERS,
    INITIAL_PRODUCTS,
    MOCK_ADMIN,
    MOCK_CUSTOMER,
)
from storefront.persistence.state_store import CART, ORDERS, PRODUCTS, USER
from storefront.shared.errors import NotAuthenticated
from storefront.utils.logging import bind_session, remove_context
from storefront.utils.settings import Settings

logger = structlog.get_logger(__name__)

SUCCESS = "success"
INFO = "info"
ERROR = "error"


def _log_notification(message, severity):
    logger.info("Notification", message=message, severity=severity)


def _log_navigation(screen, params=None):
    logger.debug("Navigation requested", screen=screen, params=params)


def _first_message(exc: ValidationError | InvalidDataError) -> str:
    for messages in (exc.messages or {}).values():
        if messages:
            return messages[0]
    return "The request could not be completed"


class Storefront:
    def __init__(self, store, settings=None, enhancer=None, notify=None, navigate=None):
        self.store = store
        self.settings = settings or Settings.from_env()
        self.enhancer = enhancer or DescriptionEnhancer.from_settings(self.settings)
        self._notify = notify or _log_notification
        self._navigate = navigate or _log_navigation
        self.cart_id = None
        self.user = None

    # -------------------------------------------------------------------
    # Repositories
    # -------------------------------------------------------------------
    @property
    def catalog(self):
        return current_domain.repository_for(Product)

    @property
    def ledger(self):
        return current_domain.repository_for(Order)

    @property
    def cart(self):
        return current_domain.repository_for(ShoppingCart).get(self.cart_id)

    # -------------------------------------------------------------------
    # Startup
    # -------------------------------------------------------------------
    def load(self):
        """Restore every collection from the state store, seeding the ones that are missing."""
        products = self._load_records(PRODUCTS, ProductRecord, INITIAL_PRODUCTS)
        for position, record in enumerate(products):
            self.catalog.add(product_from_record(record, position))

        orders = self._load_records(ORDERS, OrderRecord, INITIAL_ORDERS)
        for index, record in enumerate(orders):
            self.ledger.add(order_from_record(record, sequence=len(orders) - index))

        cart = cart_from_records(self._load_records(CART, CartItemRecord, []))
        current_domain.repository_for(ShoppingCart).add(cart)
        self.cart_id = str(cart.id)

        self.user = self._load_user()
        bind_session(self.store.directory, self.user.id if self.user else None)

        self._save_products()
        self._save_orders()
        self._save_cart()

        logger.info(
            "Storefront state loaded",
            products=len(products),
            orders=len(orders),
            cart_lines=len(cart.items),
            signed_in=self.user is not None,
        )

    def _load_records(self, key, record_cls, default):
        adapter = TypeAdapter(list[record_cls])
        raw = self.store.load(key)
        if raw is None:
            return adapter.validate_python(default)

        try:
            return adapter.validate_python(raw)
        except RecordValidationError as exc:
            logger.warning("Saved state does not match the expected shape, using defaults", key=key, error=str(exc))
            return adapter.validate_python(default)

    def _load_user(self):
        raw = self.store.load(USER)
        if raw is None:
            return None
        try:
            return User.model_validate(raw)
        except RecordValidationError as exc:
            logger.warning("Discarding saved user", error=str(exc))
            self.store.remove(USER)
            return None

    # -------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------
    def _save_products(self):
        self.store.save(PRODUCTS, [product_to_record(p).dump() for p in self.catalog.ordered()])

    def _save_orders(self):
        self.store.save(ORDERS, [order_to_record(o).dump() for o in self.ledger.newest_first()])

    def _save_cart(self):
        self.store.save(CART, [line.dump() for line in cart_to_records(self.cart)])

    def save_all(self):
        self._save_products()
        self._save_orders()
        self._save_cart()
        if self.user is not None:
            self.store.save(USER, self.user.dump())

    # -------------------------------------------------------------------
    # Session
    # -------------------------------------------------------------------
    def sign_in(self, role):
        """Sign in as the mock admin or the mock customer. No credentials are checked.

        ``role`` is a UserRole or its name in any case. Returns the signed-in
        user, or None for an unknown role.
        """
        try:
            role = role if isinstance(role, UserRole) else UserRole(str(role).strip().upper())
        except ValueError:
            logger.warning("Sign-in refused for unknown role", role=role)
            self._notify(f"Unknown role: {role}", ERROR)
            return None

        self.user = User.model_validate(MOCK_ADMIN if role is UserRole.ADMIN else MOCK_CUSTOMER)
        self.store.save(USER, self.user.dump())
        bind_session(self.store.directory, self.user.id)

        logger.info("User signed in", role=self.user.role.value)
        self._navigate("home", None)
        self._notify(f"Welcome, {self.user.name}", INFO)
        return self.user

    def sign_out(self):
        self.user = None
        self.store.remove(USER)
        remove_context("user_id")

        self._navigate("home", None)
        self._notify("You have been signed out", INFO)

    @property
    def is_admin(self):
        return self.user is not None and self.user.role is UserRole.ADMIN

    def _require_admin(self, action):
        if self.is_admin:
            return True
        logger.warning("Admin action refused", action=action, user_id=self.user.id if self.user else None)
        self._notify("Access denied", ERROR)
        return False

    # -------------------------------------------------------------------
    # Catalog
    # -------------------------------------------------------------------
    def categories(self):
        return [Category.model_validate(category) for category in INITIAL_CATEGORIES]

    def products(self):
        return self.catalog.ordered()

    def featured(self):
        return self.catalog.featured()

    def browse(self, category=None, search="", max_price=None, sort="newest"):
        return self.catalog.browse(category=category, search=search, max_price=max_price, sort=sort)

    def find_product(self, product_id):
        return self.catalog.find(product_id)

    async def enhance_description(self, product_id):
        """Return a rewritten description for display. The product itself is not changed."""
        product = self.catalog.find(product_id)
        if product is None:
            return None
        return await self.enhancer.enhance(product.name, product.description or "")

    # -------------------------------------------------------------------
    # Cart
    # -------------------------------------------------------------------
    def add_to_cart(self, product, quantity=1):
        """Add a product (or product id) to the cart. Returns True when it was added."""
        product_id = str(getattr(product, "id", product))
        current = self.catalog.find(product_id)
        if current is None:
            logger.warning("Cannot add missing product", product_id=product_id)
            return False

        added = current_domain.process(
            AddToCart(cart_id=self.cart_id, product_id=product_id, quantity=quantity),
            asynchronous=False,
        )
        self._save_cart()

        if added:
            self._notify(f'"{current.name}" was added to your cart', SUCCESS)
        return bool(added)

    def remove_from_cart(self, product_id):
        current_domain.process(
            RemoveFromCart(cart_id=self.cart_id, product_id=str(product_id)),
            asynchronous=False,
        )
        self._save_cart()

    def update_quantity(self, product_id, quantity):
        current_domain.process(
            UpdateCartQuantity(cart_id=self.cart_id, product_id=str(product_id), quantity=int(quantity)),
            asynchronous=False,
        )
        self._save_cart()

    def clear_cart(self):
        current_domain.process(ClearCart(cart_id=self.cart_id), asynchronous=False)
        self._save_cart()

    def prune_cart(self):
        """Drop lines whose product was deleted, telling the user which ones went."""
        dropped = current_domain.process(PruneCart(cart_id=self.cart_id), asynchronous=False)
        if dropped:
            self._save_cart()
            self._notify(f"No longer available and removed from your cart: {', '.join(dropped)}", INFO)
        return dropped

    def cart_lines(self):
        return self.cart.lines

    @property
    def subtotal(self):
        return self.cart.subtotal

    @property
    def item_count(self):
        return self.cart.item_count

    # -------------------------------------------------------------------
    # Checkout and history
    # -------------------------------------------------------------------
    def place_order(self, shipping_address):
        """Check out the cart. Returns the new order id, or None when checkout did not happen."""
        try:
            order_id = current_domain.process(
                PlaceOrder(
                    cart_id=self.cart_id,
                    user_id=self.user.id if self.user else None,
                    shipping_address=shipping_address,
                ),
                asynchronous=False,
            )
        except NotAuthenticated:
            logger.info("Checkout requires a signed-in user")
            self._navigate("login", None)
            return None
        except (ValidationError, InvalidDataError) as exc:
            self._notify(_first_message(exc), ERROR)
            return None

        self._save_orders()
        self._save_cart()

        self._navigate("profile", None)
        self._notify("Your order was placed successfully!", SUCCESS)
        return order_id

    def my_orders(self):
        if self.user is None:
            return ()
        return self.ledger.by_user(self.user.id)

    # -------------------------------------------------------------------
    # Admin
    # -------------------------------------------------------------------
    def all_orders(self):
        if not self._require_admin("all_orders"):
            return None
        return self.ledger.newest_first()

    def upsert_product(self, product):
        """Save a product from the admin editor.

        ``product`` is a dict with id (optional), name, description, price,
        category, image, stock, rating, is_featured and reviews (list of dicts).
        Returns the product id, or None when nothing was saved.
        """
        if not self._require_admin("upsert_product"):
            return None

        fields = dict(product)
        reviews = fields.pop("reviews", None)
        try:
            product_id = current_domain.process(
                UpsertProduct(
                    product_id=fields.pop("id", None) or None,
                    reviews=json.dumps(reviews) if reviews is not None else None,
                    **fields,
                ),
                asynchronous=False,
            )
        except (ValidationError, InvalidDataError) as exc:
            self._notify(_first_message(exc), ERROR)
            return None

        self._save_products()
        return product_id

    def delete_product(self, product_id):
        if not self._require_admin("delete_product"):
            return False

        current_domain.process(DeleteProduct(product_id=str(product_id)), asynchronous=False)
        self._save_products()
        return True

    def update_order_status(self, order_id, status):
        """Returns True when the order exists and now carries ``status``."""
        if not self._require_admin("update_order_status"):
            return False

        try:
            found = current_domain.process(
                UpdateOrderStatus(
                    order_id=str(order_id),
                    status=status.value if hasattr(status, "value") else str(status),
                    strict=self.settings.strict_status,
                ),
                asynchronous=False,
            )
        except (ValidationError, InvalidDataError) as exc:
            self._notify(_first_message(exc), ERROR)
            return False

        if found:
            self._save_orders()
        return bool(found)

    def dashboard(self):
        if not self._require_admin("dashboard"):
            return None
        return summarize(self.ledger.newest_first(), len(self.catalog.ordered()))
