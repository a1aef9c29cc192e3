"""Shared error taxonomy and the DRF exception handler.

Domain exceptions are raised by the Service Layer; the API layer maps
them to HTTP responses.  Every error body follows one format::

    {"type": "client_error",
     "errors": [{"code": "not_found", "detail": "...", "attr": null}]}
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Optional

import structlog
from django.core.exceptions import PermissionDenied
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import set_rollback

logger = structlog.get_logger(__name__)

VALIDATION_ERROR = "validation_error"
CLIENT_ERROR = "client_error"
SERVER_ERROR = "server_error"

Violation = Dict[str, Optional[str]]


# ---------------------------------------------------------------------------
# Domain exceptions
# ---------------------------------------------------------------------------


class DomainError(Exception):
    """Base class for business-rule failures."""

    code = "error"
    status_code = status.HTTP_400_BAD_REQUEST


class ResourceNotFound(DomainError):
    """The operation target does not exist."""

    code = "not_found"
    status_code = status.HTTP_404_NOT_FOUND


class DuplicateResource(DomainError):
    """A uniqueness rule would be violated."""

    code = "conflict"
    status_code = status.HTTP_409_CONFLICT


class InvalidRequest(DomainError):
    """Business-rule validation beyond field-level checks."""

    code = "invalid"
    status_code = status.HTTP_400_BAD_REQUEST


class RequestValidationError(Exception):
    """Field-level validation failed at the API boundary.

    Carries every violation found, not only the first one.
    """

    def __init__(self, violations: List[Violation]) -> None:
        super().__init__("; ".join(str(v["detail"]) for v in violations))
        self.violations = violations


# ---------------------------------------------------------------------------
# Response builders
# ---------------------------------------------------------------------------


def error_body(error_type: str, errors: List[Violation]) -> Dict[str, Any]:
    return {"type": error_type, "errors": errors}


def domain_error_response(exc: DomainError) -> Response:
    """Translate a ``DomainError`` into its HTTP response."""
    body = error_body(
        CLIENT_ERROR,
        [{"code": exc.code, "detail": str(exc), "attr": None}],
    )
    return Response(body, status=exc.status_code)


def validation_error_response(violations: List[Violation]) -> Response:
    return Response(
        error_body(VALIDATION_ERROR, violations),
        status=status.HTTP_400_BAD_REQUEST,
    )


def _flatten(detail: Any, attr: Optional[str] = None) -> Iterator[Violation]:
    if isinstance(detail, dict):
        for key, value in detail.items():
            name = str(key) if attr is None else f"{attr}.{key}"
            yield from _flatten(value, None if key == "non_field_errors" else name)
    elif isinstance(detail, list):
        for item in detail:
            yield from _flatten(item, attr)
    else:
        yield {
            "code": getattr(detail, "code", None) or "invalid",
            "detail": str(detail),
            "attr": attr,
        }


# ---------------------------------------------------------------------------
# DRF EXCEPTION_HANDLER
# ---------------------------------------------------------------------------


def api_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Render every error raised inside a DRF view in the standard format.

    Unexpected exceptions are logged with their traceback and produce a
    generic 500; they are never retried.
    """
    if isinstance(exc, Http404):
        exc = exceptions.NotFound()
    elif isinstance(exc, PermissionDenied):
        exc = exceptions.PermissionDenied()

    if isinstance(exc, RequestValidationError):
        return validation_error_response(exc.violations)

    if isinstance(exc, DomainError):
        return domain_error_response(exc)

    if isinstance(exc, exceptions.APIException):
        headers = {}
        if getattr(exc, "wait", None):
            headers["Retry-After"] = str(int(exc.wait))
        if isinstance(exc, exceptions.ValidationError):
            body = error_body(VALIDATION_ERROR, list(_flatten(exc.detail)))
        else:
            body = error_body(
                CLIENT_ERROR if exc.status_code < 500 else SERVER_ERROR,
                list(_flatten(exc.detail)),
            )
        set_rollback()
        return Response(body, status=exc.status_code, headers=headers)

    view = context.get("view")
    logger.exception(
        "unhandled_exception",
        view=view.__class__.__name__ if view else None,
        error=str(exc),
    )
    set_rollback()
    return Response(
        error_body(
            SERVER_ERROR,
            [
                {
                    "code": "error",
                    "detail": "An unexpected error occurred.",
                    "attr": None,
                }
            ],
        ),
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
