"""Domain-specific error conditions."""

from protean.exceptions import ValidationError


class NotAuthenticated(ValidationError):
    """Checkout was attempted without a signed-in user."""
