"""Product domain exceptions.

Raised by the Service Layer when business rules are violated.
The API layer (Views) catches these and translates them into
appropriate HTTP responses.
"""

from __future__ import annotations

from modules.core.exceptions import DuplicateResource, ResourceNotFound


class ProductAlreadyExists(DuplicateResource):
    """Another product already uses the same SKU or name."""


class ProductNotFound(ResourceNotFound):
    """The requested product does not exist."""
