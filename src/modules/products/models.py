"""Product model: the single entity of the catalog.

Invariants backed by the database:
- ``name`` and ``sku`` are unique (UNIQUE INDEX on each column).
- ``price >= 0.01`` and ``stock_quantity >= 0`` (CHECK constraints).

Field-level validation (lengths, SKU pattern, price range) happens at the
API boundary in ``modules.products.dtos``; the constraints here are the
last line of defence.
"""

from __future__ import annotations

from decimal import Decimal

from django.db import models

from modules.core.models import TimestampedModel


class ProductCategory(models.TextChoices):
    ELECTRONICS = "ELECTRONICS", "Electronics"
    FURNITURE = "FURNITURE", "Furniture"
    KITCHEN = "KITCHEN", "Kitchen"
    CLOTHING = "CLOTHING", "Clothing"
    BOOKS = "BOOKS", "Books"
    SPORTS = "SPORTS", "Sports"
    TOYS = "TOYS", "Toys"
    HEALTH = "HEALTH", "Health"
    BEAUTY = "BEAUTY", "Beauty"
    AUTOMOTIVE = "AUTOMOTIVE", "Automotive"
    OTHER = "OTHER", "Other"


class Product(TimestampedModel):
    """Catalog product.

    ``unique=True`` on ``name`` and ``sku`` creates a UNIQUE INDEX for each,
    which also serves their look-ups; only ``category`` needs an extra index.
    """

    name = models.CharField(max_length=100, unique=True)
    description = models.CharField(max_length=500, null=True, blank=True)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    sku = models.CharField(max_length=20, unique=True)
    category = models.CharField(max_length=20, choices=ProductCategory.choices)
    stock_quantity = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "products"
        ordering = ["id"]
        indexes = [
            models.Index(fields=["category"], name="products_category_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gte=Decimal("0.01")),
                name="products_price_min",
            ),
            models.CheckConstraint(
                condition=models.Q(stock_quantity__gte=0),
                name="products_stock_non_negative",
            ),
        ]

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Product):
            return NotImplemented
        return self.id == other.id and self.sku == other.sku

    def __hash__(self) -> int:
        return hash((self.id, self.sku))

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.sku} - {self.name}"
