"""Product repository interface.

Extends ``IRepository[Product]`` with one explicit query per access
pattern: point look-ups, uniqueness checks, paginated scans, search,
stock thresholds and per-category counts.
"""

from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional

from modules.core.repositories.interfaces import IRepository, Page

if TYPE_CHECKING:
    from modules.core.dtos import PageRequestDTO
    from modules.products.models import Product


@dataclass(frozen=True)
class CategoryCount:
    category: str
    count: int


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate."""

    # Point look-ups

    @abstractmethod
    def get_by_sku(self, sku: str) -> Optional[Product]:
        """Retrieve a product by exact SKU."""

    @abstractmethod
    def get_by_name(self, name: str) -> Optional[Product]:
        """Retrieve a product by exact name."""

    @abstractmethod
    def exists_by_sku(self, sku: str) -> bool:
        """Whether any product uses ``sku``."""

    @abstractmethod
    def exists_by_name(self, name: str) -> bool:
        """Whether any product uses ``name``."""

    # Scans

    @abstractmethod
    def list_page(self, page_request: PageRequestDTO) -> Page[Product]:
        """All products, paginated and ordered."""

    @abstractmethod
    def list_by_category(self, category: str) -> List[Product]:
        """Every product in ``category``."""

    @abstractmethod
    def list_by_category_page(
        self, category: str, page_request: PageRequestDTO
    ) -> Page[Product]:
        """Products in ``category``, paginated and ordered."""

    @abstractmethod
    def search_page(self, term: str, page_request: PageRequestDTO) -> Page[Product]:
        """Case-insensitive substring match on name, description or SKU."""

    @abstractmethod
    def search_by_category_page(
        self, category: str, term: str, page_request: PageRequestDTO
    ) -> Page[Product]:
        """Within ``category``: substring match on name or description only."""

    @abstractmethod
    def list_low_stock(self, threshold: int) -> List[Product]:
        """Products with ``stock_quantity`` strictly below ``threshold``."""

    @abstractmethod
    def list_out_of_stock(self) -> List[Product]:
        """Products with ``stock_quantity`` equal to zero."""

    # Aggregates

    @abstractmethod
    def count_by_category(self, category: str) -> int:
        """Number of products in ``category``."""

    @abstractmethod
    def count_grouped_by_category(self) -> List[CategoryCount]:
        """One entry per non-empty category."""
