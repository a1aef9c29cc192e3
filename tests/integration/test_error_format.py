"""Integration tests for standardized error responses."""

import pytest

pytestmark = pytest.mark.integration

BASE_URL = "/api/v1/products"


def _assert_standard_format(data):
    assert set(data) == {"type", "errors"}
    assert isinstance(data["errors"], list)
    assert data["errors"]
    for error in data["errors"]:
        assert set(error) == {"code", "detail", "attr"}


class TestStandardizedErrors:
    def test_validation_error_has_standard_format(self, api_client):
        response = api_client.post(BASE_URL, {"name": "x"}, format="json")
        assert response.status_code == 400
        data = response.json()
        _assert_standard_format(data)
        assert data["type"] == "validation_error"

    def test_parse_error_has_standard_format(self, api_client):
        response = api_client.post(BASE_URL, data="{", content_type="application/json")
        assert response.status_code == 400
        _assert_standard_format(response.json())

    def test_not_found_has_standard_format(self, api_client):
        response = api_client.get(f"{BASE_URL}/424242")
        assert response.status_code == 404
        data = response.json()
        _assert_standard_format(data)
        assert data["type"] == "client_error"

    def test_method_not_allowed_has_standard_format(self, api_client):
        response = api_client.patch(f"{BASE_URL}/1", {}, format="json")
        assert response.status_code == 405
        data = response.json()
        _assert_standard_format(data)
        assert data["errors"][0]["code"] == "method_not_allowed"

    def test_conflict_has_standard_format(self, api_client, make_product):
        make_product(name="Taken", sku="TAKEN-1")
        response = api_client.post(
            BASE_URL,
            {
                "name": "Taken",
                "price": "5.00",
                "sku": "FREE-1",
                "category": "OTHER",
            },
            format="json",
        )
        assert response.status_code == 409
        _assert_standard_format(response.json())
