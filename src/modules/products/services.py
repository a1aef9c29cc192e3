"""Product service layer (Use Cases).

Orchestrates business logic for the Product aggregate, delegating
persistence to the injected ``IProductRepository``.

Business rules enforced here:
- SKU must be unique (checked before name).
- Name must be unique.
- On update, uniqueness is re-checked only for values that changed.
- ``stock_quantity`` defaults to 0 when not supplied.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

import structlog
from django.db import transaction

from modules.products.exceptions import ProductAlreadyExists, ProductNotFound
from modules.products.models import Product

if TYPE_CHECKING:
    from modules.core.dtos import PageRequestDTO
    from modules.core.repositories.interfaces import Page
    from modules.products.dtos import ProductDTO
    from modules.products.repositories.interfaces import (
        CategoryCount,
        IProductRepository,
    )

logger = structlog.get_logger(__name__)

DEFAULT_STOCK_QUANTITY = 0


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: IProductRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_product(self, dto: ProductDTO) -> Product:
        """Create a new product after enforcing uniqueness rules.

        Raises:
            ProductAlreadyExists: if the SKU or the name is already taken.
        """
        log = logger.bind(sku=dto.sku, name=dto.name, category=dto.category)
        log.info("product.create_requested")

        if self._repo.exists_by_sku(dto.sku):
            log.warning("product.duplicate_sku")
            raise ProductAlreadyExists(f"Product with SKU {dto.sku} already exists")

        if self._repo.exists_by_name(dto.name):
            log.warning("product.duplicate_name")
            raise ProductAlreadyExists(f"Product with name {dto.name} already exists")

        product = Product(
            name=dto.name,
            description=dto.description,
            price=dto.price,
            sku=dto.sku,
            category=dto.category,
            stock_quantity=_stock_or_default(dto.stock_quantity),
        )
        product = self._repo.insert(product)
        log.info("product.created", product_id=product.id)
        return product

    @transaction.atomic
    def update_product(self, id: int, dto: ProductDTO) -> Product:
        """Replace every mutable field of an existing product.

        Raises:
            ProductNotFound: if the product does not exist.
            ProductAlreadyExists: if a changed SKU or name belongs to
                another product.
        """
        product = self._repo.get_by_id(id)
        if not product:
            logger.warning("product.update_missing", product_id=id)
            raise ProductNotFound(f"Product not found with ID: {id}")

        log = logger.bind(product_id=id)

        if dto.sku != product.sku and self._repo.exists_by_sku(dto.sku):
            log.warning("product.duplicate_sku", sku=dto.sku)
            raise ProductAlreadyExists(f"Product with SKU {dto.sku} already exists")

        if dto.name != product.name and self._repo.exists_by_name(dto.name):
            log.warning("product.duplicate_name", name=dto.name)
            raise ProductAlreadyExists(f"Product with name {dto.name} already exists")

        product.name = dto.name
        product.description = dto.description
        product.price = dto.price
        product.sku = dto.sku
        product.category = dto.category
        product.stock_quantity = _stock_or_default(dto.stock_quantity)

        product = self._repo.update(product)
        log.info("product.updated", name=product.name)
        return product

    @transaction.atomic
    def delete_product(self, id: int) -> None:
        """Permanently remove a product.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        if not self._repo.delete(id):
            logger.warning("product.delete_missing", product_id=id)
            raise ProductNotFound(f"Product not found with ID: {id}")
        logger.info("product.deleted", product_id=id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_product_by_id(self, id: int) -> Optional[Product]:
        """Look-up by ID; ``None`` when absent."""
        return self._repo.get_by_id(id)

    def get_product(self, id: int) -> Product:
        """Retrieve a single product by ID.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        product = self._repo.get_by_id(id)
        if not product:
            raise ProductNotFound(f"Product not found with ID: {id}")
        logger.info("product.retrieved", product_id=id)
        return product

    def get_product_by_sku(self, sku: str) -> Optional[Product]:
        """Look-up by SKU; ``None`` when absent."""
        return self._repo.get_by_sku(sku)

    def get_all_products(self, page_request: PageRequestDTO) -> Page[Product]:
        return self._repo.list_page(page_request)

    def get_products_by_category(self, category: str) -> List[Product]:
        return self._repo.list_by_category(category)

    def get_products_by_category_page(
        self, category: str, page_request: PageRequestDTO
    ) -> Page[Product]:
        return self._repo.list_by_category_page(category, page_request)

    def search_products(
        self, term: str, page_request: PageRequestDTO
    ) -> Page[Product]:
        """Case-insensitive substring search over name, description and SKU."""
        logger.debug("product.search", term=term)
        return self._repo.search_page(term, page_request)

    def search_products_by_category(
        self, category: str, term: str, page_request: PageRequestDTO
    ) -> Page[Product]:
        """Search within ``category``; matches name or description only."""
        logger.debug("product.search", term=term, category=category)
        return self._repo.search_by_category_page(category, term, page_request)

    def get_low_stock_products(self, threshold: int) -> List[Product]:
        """Products with stock strictly below ``threshold``.

        A negative threshold is not an error; it simply matches nothing.
        """
        return self._repo.list_low_stock(threshold)

    def get_out_of_stock_products(self) -> List[Product]:
        return self._repo.list_out_of_stock()

    def exists_by_sku(self, sku: str) -> bool:
        return self._repo.exists_by_sku(sku)

    def exists_by_name(self, name: str) -> bool:
        return self._repo.exists_by_name(name)

    def count_products_by_category(self, category: str) -> int:
        return self._repo.count_by_category(category)

    def get_product_count_by_category(self) -> List[CategoryCount]:
        """Per-category counts; categories without products are omitted."""
        return self._repo.count_grouped_by_category()


def _stock_or_default(value: Optional[int]) -> int:
    return DEFAULT_STOCK_QUANTITY if value is None else value
