"""Storefront bounded context: catalog, shopping cart, checkout and order history.

All state lives in the domain's in-memory providers and is mirrored to a
local JSON key-value store by the storefront controller after every change.
"""

import logging

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging(log_dir="logs", log_file_prefix="storefront")

# Suppress noisy library loggers
logging.getLogger("protean").setLevel(logging.WARNING)

logger = get_logger(__name__)

# Domain Composition Root
storefront = Domain(name="storefront")
