"""Generic repository interface (Dependency Inversion Principle).

Provides ``IRepository[T]``, the base abstract class that all
domain-specific repository interfaces extend, and the ``Page`` value
object returned by paginated queries.  Service-layer code depends on
these abstractions, never on Django ORM directly.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Generic, List, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    """One slice of an ordered result set.

    ``page`` is zero-based.  ``total_pages`` is 0 for an empty result.
    """

    items: List[T] = field(default_factory=list)
    page: int = 0
    size: int = 10
    total_elements: int = 0

    @property
    def total_pages(self) -> int:
        if self.size <= 0:
            return 0
        return math.ceil(self.total_elements / self.size)

    @property
    def is_last(self) -> bool:
        return self.page + 1 >= self.total_pages


class IRepository(ABC, Generic[T]):
    """Base generic repository contract.

    Type parameter ``T`` represents the domain entity managed by the
    repository (e.g. ``Product``).
    """

    @abstractmethod
    def get_by_id(self, id: int) -> Optional[T]:
        """Retrieve an entity by its primary key."""

    @abstractmethod
    def insert(self, entity: T) -> T:
        """Persist a new entity, assigning generated fields."""

    @abstractmethod
    def update(self, entity: T) -> T:
        """Persist changes to an existing entity."""

    @abstractmethod
    def delete(self, id: int) -> bool:
        """Permanently remove an entity by ID."""
