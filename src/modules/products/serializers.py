"""Product DRF serializers for API output.

Input validation lives in the Pydantic DTOs (``dtos.py``); these
serializers only render domain objects as JSON with camelCase keys.
"""

from __future__ import annotations

from typing import Any, Dict

from rest_framework import serializers

from modules.core.repositories.interfaces import Page
from modules.products.models import Product


class ProductSerializer(serializers.ModelSerializer):
    """Read-only representation of a Product."""

    stockQuantity = serializers.IntegerField(source="stock_quantity", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "description",
            "price",
            "sku",
            "category",
            "stockQuantity",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = fields


class CategoryCountSerializer(serializers.Serializer):
    category = serializers.CharField(read_only=True)
    count = serializers.IntegerField(read_only=True)


def serialize_page(page: Page[Product]) -> Dict[str, Any]:
    """Render a ``Page`` of products as the paginated response body."""
    return {
        "content": ProductSerializer(page.items, many=True).data,
        "page": page.page,
        "size": page.size,
        "totalElements": page.total_elements,
        "totalPages": page.total_pages,
        "last": page.is_last,
    }
