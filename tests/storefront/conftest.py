import os

import pytest
from protean.utils.globals import current_domain
from pydantic import TypeAdapter
from storefront.application.storefront import Storefront
from storefront.catalogue.product import Product
from storefront.enhancement.gemini import DescriptionEnhancer
from storefront.persistence.records import ProductRecord, product_from_record
from storefront.persistence.seed import INITIAL_PRODUCTS
from storefront.persistence.state_store import JsonStateStore
from storefront.utils.logging import clear_context
from storefront.utils.settings import Settings


@pytest.fixture(scope="session")
def _storefront_domain(request):
    """Initialize the storefront domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from storefront.domain import storefront

    storefront.init()
    return storefront


@pytest.fixture(autouse=True)
def run_around_tests(_storefront_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _storefront_domain.domain_context()
    ctx.push()

    yield

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()
    clear_context()


@pytest.fixture()
def seeded_catalog():
    """The four seed products, in seed order."""
    catalog = current_domain.repository_for(Product)
    records = TypeAdapter(list[ProductRecord]).validate_python(INITIAL_PRODUCTS)
    for position, record in enumerate(records):
        catalog.add(product_from_record(record, position))
    return catalog


@pytest.fixture()
def state_store(tmp_path):
    return JsonStateStore(tmp_path / "state")


class Recorder:
    """Collects controller notifications and navigation requests."""

    def __init__(self):
        self.notifications = []
        self.navigations = []

    def notify(self, message, severity):
        self.notifications.append((message, severity))

    def navigate(self, screen, params=None):
        self.navigations.append((screen, params))

    @property
    def last_notification(self):
        return self.notifications[-1] if self.notifications else None

    @property
    def last_screen(self):
        return self.navigations[-1][0] if self.navigations else None


@pytest.fixture()
def recorder():
    return Recorder()


@pytest.fixture()
def settings(tmp_path):
    return Settings(state_dir=tmp_path / "state")


@pytest.fixture()
def offline_enhancer():
    """An enhancer with no model client: every call falls back."""
    return DescriptionEnhancer(client=None)


@pytest.fixture()
def shop(state_store, settings, offline_enhancer, recorder):
    """A loaded storefront controller over a fresh state directory."""
    controller = Storefront(
        state_store,
        settings=settings,
        enhancer=offline_enhancer,
        notify=recorder.notify,
        navigate=recorder.navigate,
    )
    controller.load()
    return controller
