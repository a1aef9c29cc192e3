"""Shared DTOs and parsing helpers for the API boundary.

- ``PageRequestDTO``: validated ``page`` / ``size`` / ``sort`` /
  ``direction`` query parameters.
- ``parse_dto``: validates raw request data into a DTO, raising
  ``RequestValidationError`` with every violation found.
"""

from __future__ import annotations

from typing import Any, ClassVar, Dict, List, Type, TypeVar

from django.conf import settings
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticCustomError

from modules.core.exceptions import RequestValidationError, Violation

D = TypeVar("D", bound=BaseModel)


def violations_from(exc: PydanticValidationError) -> List[Violation]:
    """Convert a Pydantic error into the API's violation list."""
    violations: List[Violation] = []
    for error in exc.errors():
        loc = ".".join(str(part) for part in error["loc"])
        violations.append(
            {"code": error["type"], "detail": error["msg"], "attr": loc or None}
        )
    return violations


def parse_dto(dto_class: Type[D], data: Any) -> D:
    """Validate ``data`` into ``dto_class``.

    Raises:
        RequestValidationError: with one violation per failing field.
    """
    try:
        return dto_class.model_validate(data)
    except PydanticValidationError as exc:
        raise RequestValidationError(violations_from(exc)) from exc


class PageRequestDTO(BaseModel):
    """Pagination and ordering parameters.

    ``direction`` equal to ``"desc"`` (any case) sorts descending; any
    other value sorts ascending.  Subclasses widen ``sort_fields``, which
    maps public sort keys to model fields.
    """

    model_config = ConfigDict(frozen=True)

    sort_fields: ClassVar[Dict[str, str]] = {"id": "id"}

    page: int = Field(default=0, ge=0)
    size: int = Field(
        default=settings.CATALOG_DEFAULT_PAGE_SIZE,
        ge=1,
        le=settings.CATALOG_MAX_PAGE_SIZE,
    )
    sort: str = "id"
    direction: str = "asc"

    @field_validator("sort")
    @classmethod
    def sort_must_be_known(cls, v: str) -> str:
        if v not in cls.sort_fields:
            raise PydanticCustomError(
                "invalid_sort",
                "Cannot sort by '{sort}'. Allowed: {allowed}.",
                {"sort": v, "allowed": ", ".join(sorted(cls.sort_fields))},
            )
        return v

    @field_validator("direction")
    @classmethod
    def normalise_direction(cls, v: str) -> str:
        return "desc" if v.lower() == "desc" else "asc"

    @property
    def descending(self) -> bool:
        return self.direction == "desc"

    @property
    def offset(self) -> int:
        return self.page * self.size

    @property
    def ordering(self) -> List[str]:
        """ORM ``order_by`` arguments, with ``id`` as tie-breaker."""
        prefix = "-" if self.descending else ""
        field = self.sort_fields[self.sort]
        ordering = [f"{prefix}{field}"]
        if field != "id":
            ordering.append(f"{prefix}id")
        return ordering
