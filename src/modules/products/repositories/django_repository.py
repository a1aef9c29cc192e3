"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's QuerySet API, one
explicit query per access pattern.  Look-ups follow the Null Object
pattern: they return ``None`` instead of raising, and the Service Layer
decides how to translate a missing entity into an API response.

Timestamps are assigned here: ``insert`` sets ``created_at`` and
``updated_at`` to the same instant, ``update`` refreshes only
``updated_at``.  UNIQUE constraint violations that slip past the
service's pre-checks (concurrent writers) surface as
``ProductAlreadyExists``.
"""

from __future__ import annotations

from typing import List, NoReturn, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.db.models import Count, Q

from modules.core.dtos import PageRequestDTO
from modules.core.repositories.interfaces import Page
from modules.core.repositories.pagination import paginate
from modules.products.exceptions import ProductAlreadyExists
from modules.products.models import Product
from modules.products.repositories.interfaces import CategoryCount, IProductRepository

logger = structlog.get_logger(__name__)

MUTABLE_FIELDS = (
    "name",
    "description",
    "price",
    "sku",
    "category",
    "stock_quantity",
)


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Point look-ups
    # ------------------------------------------------------------------

    def get_by_id(self, id: int) -> Optional[Product]:
        """Retrieve a product by primary key.

        Returns ``None`` for non-existent or non-integer IDs.
        """
        try:
            return Product.objects.filter(id=id).first()
        except (TypeError, ValueError, ValidationError):
            return None

    def get_by_sku(self, sku: str) -> Optional[Product]:
        return Product.objects.filter(sku=sku).first()

    def get_by_name(self, name: str) -> Optional[Product]:
        return Product.objects.filter(name=name).first()

    def exists_by_sku(self, sku: str) -> bool:
        return Product.objects.filter(sku=sku).exists()

    def exists_by_name(self, name: str) -> bool:
        return Product.objects.filter(name=name).exists()

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def insert(self, entity: Product) -> Product:
        """Persist a new product; storage assigns ``id`` and timestamps."""
        entity.stamp_created()
        try:
            with transaction.atomic():
                entity.save(force_insert=True)
        except IntegrityError as exc:
            self._raise_conflict(entity, exc)
        logger.info("product.saved", product_id=entity.id, sku=entity.sku, is_new=True)
        return entity

    def update(self, entity: Product) -> Product:
        """Persist every mutable field and refresh ``updated_at``."""
        entity.stamp_updated()
        try:
            with transaction.atomic():
                entity.save(update_fields=[*MUTABLE_FIELDS, "updated_at"])
        except IntegrityError as exc:
            self._raise_conflict(entity, exc)
        logger.info("product.saved", product_id=entity.id, sku=entity.sku, is_new=False)
        return entity

    def delete(self, id: int) -> bool:
        """Hard-delete a product by ID.

        Returns ``True`` if a row was removed, ``False`` otherwise.
        """
        try:
            deleted, _ = Product.objects.filter(id=id).delete()
        except (TypeError, ValueError, ValidationError):
            return False
        if deleted:
            logger.info("product.deleted", product_id=id)
        return deleted > 0

    def _raise_conflict(self, entity: Product, exc: IntegrityError) -> NoReturn:
        others = Product.objects.exclude(pk=entity.pk) if entity.pk else Product.objects.all()
        if others.filter(sku=entity.sku).exists():
            logger.warning("product.unique_violation", field="sku", sku=entity.sku)
            raise ProductAlreadyExists(
                f"Product with SKU {entity.sku} already exists"
            ) from exc
        if others.filter(name=entity.name).exists():
            logger.warning("product.unique_violation", field="name", name=entity.name)
            raise ProductAlreadyExists(
                f"Product with name {entity.name} already exists"
            ) from exc
        raise exc

    # ------------------------------------------------------------------
    # Scans
    # ------------------------------------------------------------------

    def list_page(self, page_request: PageRequestDTO) -> Page[Product]:
        return paginate(Product.objects.all(), page_request)

    def list_by_category(self, category: str) -> List[Product]:
        return list(Product.objects.filter(category=category).order_by("id"))

    def list_by_category_page(
        self, category: str, page_request: PageRequestDTO
    ) -> Page[Product]:
        return paginate(Product.objects.filter(category=category), page_request)

    def search_page(self, term: str, page_request: PageRequestDTO) -> Page[Product]:
        queryset = Product.objects.filter(
            Q(name__icontains=term)
            | Q(description__icontains=term)
            | Q(sku__icontains=term)
        )
        return paginate(queryset, page_request)

    def search_by_category_page(
        self, category: str, term: str, page_request: PageRequestDTO
    ) -> Page[Product]:
        # SKU is not part of the category-scoped match.
        queryset = Product.objects.filter(category=category).filter(
            Q(name__icontains=term) | Q(description__icontains=term)
        )
        return paginate(queryset, page_request)

    def list_low_stock(self, threshold: int) -> List[Product]:
        return list(
            Product.objects.filter(stock_quantity__lt=threshold).order_by("id")
        )

    def list_out_of_stock(self) -> List[Product]:
        return list(Product.objects.filter(stock_quantity=0).order_by("id"))

    # ------------------------------------------------------------------
    # Aggregates
    # ------------------------------------------------------------------

    def count_by_category(self, category: str) -> int:
        return Product.objects.filter(category=category).count()

    def count_grouped_by_category(self) -> List[CategoryCount]:
        rows = (
            Product.objects.values("category")
            .annotate(count=Count("id"))
            .order_by("category")
        )
        return [CategoryCount(category=row["category"], count=row["count"]) for row in rows]
