"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF Views) and the
Service layer.  DTOs are immutable (``frozen=True``).

- ``ProductDTO``: writable product fields, validated identically for
  create and update.  One validator per field; Pydantic collects the
  failures of every field into a single error.
- ``ProductPageRequestDTO``: pagination with product sort keys.
- ``SearchQueryDTO`` / ``LowStockQueryDTO``: query-string parameters.
"""

from __future__ import annotations

import re
from decimal import Decimal
from typing import Any, ClassVar, Dict, Optional

from django.conf import settings
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

from modules.core.dtos import PageRequestDTO
from modules.products.models import ProductCategory

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500
SKU_MIN_LENGTH = 3
SKU_MAX_LENGTH = 20
SKU_PATTERN = re.compile(r"[A-Z0-9-]+")
STOCK_MAX = 2_147_483_647
PRICE_MIN = Decimal("0.01")
PRICE_MAX = Decimal("99999.99")
PRICE_QUANTUM = Decimal("0.01")


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class ProductDTO(BaseModel):
    """Immutable DTO for product create and update requests.

    Accepts ``stockQuantity`` or ``stock_quantity``.  A missing
    ``stockQuantity`` stays ``None``; the service applies the default.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    description: Optional[str] = None
    price: Decimal
    sku: str
    category: ProductCategory
    stock_quantity: Optional[int] = Field(
        default=None, alias="stockQuantity", strict=True
    )

    @field_validator("name")
    @classmethod
    def name_must_fit_bounds(cls, v: str) -> str:
        if not v.strip():
            raise PydanticCustomError("blank", "Product name is required")
        if not NAME_MIN_LENGTH <= len(v) <= NAME_MAX_LENGTH:
            raise PydanticCustomError(
                "length",
                "Product name must be between {min} and {max} characters",
                {"min": NAME_MIN_LENGTH, "max": NAME_MAX_LENGTH},
            )
        return v

    @field_validator("description")
    @classmethod
    def description_must_fit_bounds(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and len(v) > DESCRIPTION_MAX_LENGTH:
            raise PydanticCustomError(
                "length",
                "Product description must not exceed {max} characters",
                {"max": DESCRIPTION_MAX_LENGTH},
            )
        return v

    @field_validator("price")
    @classmethod
    def price_must_be_in_range(cls, v: Decimal) -> Decimal:
        if v < PRICE_MIN:
            raise PydanticCustomError(
                "min_value", "Product price must be at least {min}", {"min": "0.01"}
            )
        if v > PRICE_MAX:
            raise PydanticCustomError(
                "max_value",
                "Product price must not exceed {max}",
                {"max": "99999.99"},
            )
        if v != v.quantize(PRICE_QUANTUM):
            raise PydanticCustomError(
                "decimal_places",
                "Product price must have at most 2 fraction digits",
            )
        return v

    @field_validator("sku")
    @classmethod
    def sku_must_match_pattern(cls, v: str) -> str:
        if not v.strip():
            raise PydanticCustomError("blank", "Product SKU is required")
        if not SKU_MIN_LENGTH <= len(v) <= SKU_MAX_LENGTH:
            raise PydanticCustomError(
                "length",
                "Product SKU must be between {min} and {max} characters",
                {"min": SKU_MIN_LENGTH, "max": SKU_MAX_LENGTH},
            )
        if not SKU_PATTERN.fullmatch(v):
            raise PydanticCustomError(
                "pattern",
                "Product SKU must contain only uppercase letters, numbers, and hyphens",
            )
        return v

    @field_validator("category", mode="before")
    @classmethod
    def category_is_case_insensitive(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v

    @field_validator("stock_quantity")
    @classmethod
    def stock_must_fit_bounds(cls, v: Optional[int]) -> Optional[int]:
        if v is None:
            return v
        if v < 0:
            raise PydanticCustomError(
                "min_value", "Stock quantity cannot be negative"
            )
        if v > STOCK_MAX:
            raise PydanticCustomError(
                "max_value",
                "Stock quantity must not exceed {max}",
                {"max": STOCK_MAX},
            )
        return v


class ProductPageRequestDTO(PageRequestDTO):
    """Pagination over products; sort keys use the API's field names."""

    sort_fields: ClassVar[Dict[str, str]] = {
        "id": "id",
        "name": "name",
        "price": "price",
        "sku": "sku",
        "category": "category",
        "stockQuantity": "stock_quantity",
        "createdAt": "created_at",
        "updatedAt": "updated_at",
    }


class SearchQueryDTO(BaseModel):
    """``?searchTerm=`` is required; an empty term matches everything."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    search_term: str = Field(alias="searchTerm")


class LowStockQueryDTO(BaseModel):
    """``?threshold=``; negative values are accepted and match nothing."""

    model_config = ConfigDict(frozen=True)

    threshold: int = Field(default_factory=lambda: settings.CATALOG_LOW_STOCK_THRESHOLD)


class CategoryDTO(BaseModel):
    """Category path segment, matched case-insensitively."""

    model_config = ConfigDict(frozen=True)

    category: ProductCategory

    @field_validator("category", mode="before")
    @classmethod
    def category_is_case_insensitive(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v
