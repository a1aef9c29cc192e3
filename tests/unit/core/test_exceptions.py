"""Unit tests for the API exception handler and error bodies."""

from __future__ import annotations

import pytest
from django.http import Http404
from rest_framework import exceptions

from modules.core.exceptions import (
    DuplicateResource,
    InvalidRequest,
    RequestValidationError,
    ResourceNotFound,
    api_exception_handler,
    domain_error_response,
)

pytestmark = pytest.mark.unit


class TestDomainErrorResponse:
    @pytest.mark.parametrize(
        ("exc", "status_code", "code"),
        [
            (ResourceNotFound("gone"), 404, "not_found"),
            (DuplicateResource("taken"), 409, "conflict"),
            (InvalidRequest("bad"), 400, "invalid"),
        ],
    )
    def test_maps_status_and_code(self, exc, status_code, code):
        response = domain_error_response(exc)
        assert response.status_code == status_code
        assert response.data == {
            "type": "client_error",
            "errors": [{"code": code, "detail": str(exc), "attr": None}],
        }


class TestApiExceptionHandler:
    def test_request_validation_error(self):
        violations = [
            {"code": "blank", "detail": "Product name is required", "attr": "name"},
            {"code": "pattern", "detail": "bad sku", "attr": "sku"},
        ]
        response = api_exception_handler(RequestValidationError(violations), {})
        assert response.status_code == 400
        assert response.data["type"] == "validation_error"
        assert response.data["errors"] == violations

    def test_domain_error(self):
        response = api_exception_handler(DuplicateResource("taken"), {})
        assert response.status_code == 409
        assert response.data["errors"][0]["code"] == "conflict"

    def test_http404(self):
        response = api_exception_handler(Http404(), {})
        assert response.status_code == 404
        assert response.data["type"] == "client_error"
        assert response.data["errors"][0]["code"] == "not_found"

    def test_drf_validation_error_is_flattened(self):
        exc = exceptions.ValidationError({"price": ["A valid number is required."]})
        response = api_exception_handler(exc, {})
        assert response.status_code == 400
        assert response.data["type"] == "validation_error"
        assert response.data["errors"] == [
            {"code": "invalid", "detail": "A valid number is required.", "attr": "price"}
        ]

    def test_parse_error(self):
        response = api_exception_handler(exceptions.ParseError(), {})
        assert response.status_code == 400
        assert response.data["type"] == "client_error"
        assert response.data["errors"][0]["code"] == "parse_error"

    def test_unexpected_error_is_generic_500(self):
        response = api_exception_handler(RuntimeError("db exploded"), {})
        assert response.status_code == 500
        assert response.data == {
            "type": "server_error",
            "errors": [
                {
                    "code": "error",
                    "detail": "An unexpected error occurred.",
                    "attr": None,
                }
            ],
        }
