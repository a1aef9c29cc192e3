"""QuerySet slicing into ``Page`` objects."""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.db import models

from modules.core.repositories.interfaces import Page

if TYPE_CHECKING:
    from modules.core.dtos import PageRequestDTO


def paginate(queryset: models.QuerySet, page_request: PageRequestDTO) -> Page:
    """Order ``queryset`` as requested and return the requested slice.

    A page index past the end yields an empty ``items`` list, not an error.
    """
    total = queryset.count()
    ordered = queryset.order_by(*page_request.ordering)
    start = page_request.offset
    items = list(ordered[start : start + page_request.size]) if start < total else []
    return Page(
        items=items,
        page=page_request.page,
        size=page_request.size,
        total_elements=total,
    )
