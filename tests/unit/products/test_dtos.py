"""Unit tests for Product DTOs (Pydantic v2).

Covers:
- ProductDTO: valid construction, alias handling, each field rule,
  multiple violations reported together, immutability.
- SearchQueryDTO, LowStockQueryDTO, CategoryDTO.
"""

from __future__ import annotations

from decimal import Decimal

import pytest
from pydantic import ValidationError

from modules.core.dtos import parse_dto
from modules.core.exceptions import RequestValidationError
from modules.products.dtos import (
    CategoryDTO,
    LowStockQueryDTO,
    ProductDTO,
    SearchQueryDTO,
)
from modules.products.models import ProductCategory

pytestmark = pytest.mark.unit


def _payload(**overrides):
    data = {
        "name": "Wireless Headphones",
        "description": "Noise cancelling",
        "price": "149.90",
        "sku": "WH-001-BLK",
        "category": "ELECTRONICS",
        "stockQuantity": 25,
    }
    data.update(overrides)
    return data


def _violations(**overrides):
    with pytest.raises(RequestValidationError) as exc_info:
        parse_dto(ProductDTO, _payload(**overrides))
    return exc_info.value.violations


# ===========================================================================
# ProductDTO
# ===========================================================================


class TestProductDTOValid:
    def test_all_fields(self):
        dto = ProductDTO.model_validate(_payload())
        assert dto.name == "Wireless Headphones"
        assert dto.price == Decimal("149.90")
        assert dto.sku == "WH-001-BLK"
        assert dto.category == ProductCategory.ELECTRONICS
        assert dto.stock_quantity == 25

    def test_snake_case_stock_quantity_accepted(self):
        data = _payload()
        del data["stockQuantity"]
        data["stock_quantity"] = 4
        assert ProductDTO.model_validate(data).stock_quantity == 4

    def test_optional_fields_default_to_none(self):
        data = _payload()
        del data["description"]
        del data["stockQuantity"]
        dto = ProductDTO.model_validate(data)
        assert dto.description is None
        assert dto.stock_quantity is None

    def test_category_case_insensitive(self):
        dto = ProductDTO.model_validate(_payload(category="kitchen"))
        assert dto.category == ProductCategory.KITCHEN

    @pytest.mark.parametrize("price", ["0.01", "99999.99", 10, 12.5])
    def test_price_bounds_inclusive(self, price):
        assert ProductDTO.model_validate(_payload(price=price)).price == Decimal(str(price))

    def test_boundary_lengths_accepted(self):
        dto = ProductDTO.model_validate(
            _payload(name="AB", sku="A-1", description="x" * 500)
        )
        assert dto.name == "AB"
        assert dto.sku == "A-1"


class TestProductDTOInvalid:
    def test_blank_name(self):
        violations = _violations(name="   ")
        assert violations == [
            {"code": "blank", "detail": "Product name is required", "attr": "name"}
        ]

    @pytest.mark.parametrize("name", ["A", "x" * 101])
    def test_name_length(self, name):
        violation = _violations(name=name)[0]
        assert violation["code"] == "length"
        assert violation["detail"] == "Product name must be between 2 and 100 characters"

    def test_description_too_long(self):
        violation = _violations(description="x" * 501)[0]
        assert violation["attr"] == "description"
        assert violation["detail"] == "Product description must not exceed 500 characters"

    @pytest.mark.parametrize(
        ("price", "code"),
        [
            ("0.00", "min_value"),
            ("-5", "min_value"),
            ("100000.00", "max_value"),
            ("1.005", "decimal_places"),
        ],
    )
    def test_price_rules(self, price, code):
        violation = _violations(price=price)[0]
        assert violation["attr"] == "price"
        assert violation["code"] == code

    def test_missing_price(self):
        data = _payload()
        del data["price"]
        with pytest.raises(RequestValidationError) as exc_info:
            parse_dto(ProductDTO, data)
        assert exc_info.value.violations[0]["attr"] == "price"
        assert exc_info.value.violations[0]["code"] == "missing"

    @pytest.mark.parametrize(
        ("sku", "code"),
        [
            ("", "blank"),
            ("AB", "length"),
            ("A" * 21, "length"),
            ("wh-001", "pattern"),
            ("WH_001", "pattern"),
            ("WH 001", "pattern"),
            ("WH-001\n", "pattern"),
        ],
    )
    def test_sku_rules(self, sku, code):
        violation = _violations(sku=sku)[0]
        assert violation["attr"] == "sku"
        assert violation["code"] == code

    def test_unknown_category(self):
        violation = _violations(category="WEAPONS")[0]
        assert violation["attr"] == "category"
        assert violation["code"] == "enum"

    def test_negative_stock(self):
        violation = _violations(stockQuantity=-1)[0]
        assert violation["attr"] == "stockQuantity"
        assert violation["detail"] == "Stock quantity cannot be negative"

    def test_stock_above_integer_range(self):
        violation = _violations(stockQuantity=2_147_483_648)[0]
        assert violation["attr"] == "stockQuantity"
        assert violation["code"] == "max_value"

    def test_stock_upper_bound_accepted(self):
        dto = ProductDTO.model_validate(_payload(stockQuantity=2_147_483_647))
        assert dto.stock_quantity == 2_147_483_647

    @pytest.mark.parametrize("stock", [True, "5", 2.5])
    def test_stock_must_be_a_json_integer(self, stock):
        violation = _violations(stockQuantity=stock)[0]
        assert violation["attr"] == "stockQuantity"
        assert violation["code"] == "int_type"

    def test_reports_every_failing_field(self):
        violations = _violations(name="", price="0", sku="bad sku")
        assert {v["attr"] for v in violations} == {"name", "price", "sku"}


class TestProductDTOFrozen:
    def test_is_immutable(self):
        dto = ProductDTO.model_validate(_payload())
        with pytest.raises(ValidationError):
            dto.name = "Changed"


# ===========================================================================
# Query DTOs
# ===========================================================================


class TestSearchQueryDTO:
    def test_reads_camel_case_param(self):
        assert SearchQueryDTO.model_validate({"searchTerm": "mouse"}).search_term == "mouse"

    def test_empty_term_allowed(self):
        assert SearchQueryDTO.model_validate({"searchTerm": ""}).search_term == ""

    def test_missing_term_rejected(self):
        with pytest.raises(RequestValidationError) as exc_info:
            parse_dto(SearchQueryDTO, {})
        assert exc_info.value.violations[0]["attr"] == "searchTerm"


class TestLowStockQueryDTO:
    def test_default_threshold(self):
        assert LowStockQueryDTO().threshold == 10

    def test_negative_threshold_allowed(self):
        assert LowStockQueryDTO.model_validate({"threshold": "-3"}).threshold == -3

    def test_non_numeric_threshold_rejected(self):
        with pytest.raises(RequestValidationError):
            parse_dto(LowStockQueryDTO, {"threshold": "many"})


class TestCategoryDTO:
    @pytest.mark.parametrize("value", ["BOOKS", "books", "Books"])
    def test_case_insensitive(self, value):
        assert CategoryDTO(category=value).category == ProductCategory.BOOKS

    def test_unknown_rejected(self):
        with pytest.raises(RequestValidationError) as exc_info:
            parse_dto(CategoryDTO, {"category": "GARDEN"})
        assert exc_info.value.violations[0]["attr"] == "category"
