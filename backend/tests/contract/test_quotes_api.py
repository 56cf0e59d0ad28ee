"""Contract tests for draft quote endpoints."""

import pytest
from fastapi.testclient import TestClient


pytestmark = pytest.mark.contract

API_PREFIX = "/api/v1"


@pytest.fixture
def quote_id(client: TestClient) -> str:
    """Open an empty draft and return its ID."""
    response = client.post(f"{API_PREFIX}/quotes")
    return response.json()["data"]["id"]


def get_form(client: TestClient, quote_id: str) -> dict:
    return client.get(f"{API_PREFIX}/quotes/{quote_id}").json()["data"]["form"]


class TestCreateQuote:
    """Contract tests for POST /api/v1/quotes."""

    def test_create_with_defaults(self, client: TestClient):
        response = client.post(f"{API_PREFIX}/quotes")

        assert response.status_code == 201
        data = response.json()
        assert data["success"] is True
        assert data["data"]["settingsLoaded"] is False
        assert data["data"]["canRemoveItems"] is False
        assert len(data["data"]["form"]["items"]) == 1
        assert data["data"]["form"]["items"][0]["formulationType"] == "Tablet"

    def test_settings_seeded_in_background(self, client: TestClient, quote_id: str, org_settings: dict):
        data = client.get(f"{API_PREFIX}/quotes/{quote_id}").json()["data"]

        assert data["settingsLoaded"] is True
        assert data["form"]["terms"] == org_settings["terms"]
        assert data["form"]["bankDetails"] == org_settings["bankDetails"]
        assert data["companySettings"]["invoiceLabel"] == "PROFORMA"

    def test_create_with_header_and_items(
        self, client: TestClient, sample_header: dict, sample_item_data: dict
    ):
        response = client.post(
            f"{API_PREFIX}/quotes",
            json={"fields": {**sample_header, "gstNumber": "x"}, "items": [sample_item_data]},
        )

        data = response.json()["data"]
        assert data["ignoredFields"] == ["gstNumber"]
        assert data["form"]["partyName"] == "Sunrise Pharma"
        assert data["form"]["items"][0]["brandName"] == "Paracip 650"
        assert data["form"]["items"][0]["lineAmount"] == pytest.approx(56000)

    def test_invalid_item_payload(self, client: TestClient):
        response = client.post(f"{API_PREFIX}/quotes", json={"items": [{"quantity": "lots"}]})
        assert response.status_code == 422

        data = response.json()
        assert data["success"] is False
        assert data["error_code"] == "VALIDATION_ERROR"
        assert data["details"]["errors"]


class TestQuoteLookup:
    def test_not_found(self, client: TestClient):
        response = client.get(f"{API_PREFIX}/quotes/invalid-id")

        assert response.status_code == 404
        data = response.json()
        assert data["success"] is False
        assert data["error_code"] == "QUOTE_NOT_FOUND"

    def test_delete(self, client: TestClient, quote_id: str):
        response = client.delete(f"{API_PREFIX}/quotes/{quote_id}")
        assert response.status_code == 200

        assert client.get(f"{API_PREFIX}/quotes/{quote_id}").status_code == 404
        assert client.delete(f"{API_PREFIX}/quotes/{quote_id}").status_code == 404


class TestHeaderUpdate:
    """Contract tests for PATCH /api/v1/quotes/{id}."""

    def test_update_header(self, client: TestClient, quote_id: str):
        response = client.patch(
            f"{API_PREFIX}/quotes/{quote_id}",
            json={"partyName": "Sunrise Pharma", "taxPercent": "12", "colour": "red"},
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["ignoredFields"] == ["colour"]
        assert data["form"]["partyName"] == "Sunrise Pharma"
        assert data["form"]["taxPercent"] == 12


class TestItemOperations:
    """Contract tests for /api/v1/quotes/{id}/items."""

    def test_add_and_remove(self, client: TestClient, quote_id: str):
        response = client.post(f"{API_PREFIX}/quotes/{quote_id}/items")
        assert response.status_code == 200
        assert len(response.json()["data"]["form"]["items"]) == 2
        assert response.json()["data"]["canRemoveItems"] is True

        response = client.delete(f"{API_PREFIX}/quotes/{quote_id}/items/1")
        assert len(response.json()["data"]["form"]["items"]) == 1

    def test_remove_last_item_is_ignored(self, client: TestClient, quote_id: str):
        response = client.delete(f"{API_PREFIX}/quotes/{quote_id}/items/0")

        assert response.status_code == 200
        assert len(response.json()["data"]["form"]["items"]) == 1

    def test_out_of_range_index_is_ignored(self, client: TestClient, quote_id: str):
        before = get_form(client, quote_id)["items"]
        response = client.patch(
            f"{API_PREFIX}/quotes/{quote_id}/items/5",
            json={"field": "brandName", "value": "X"},
        )

        assert response.status_code == 200
        assert response.json()["data"]["form"]["items"] == before

    def test_update_field_resets_dependents(self, client: TestClient, sample_item_data: dict):
        quote_id = client.post(
            f"{API_PREFIX}/quotes", json={"items": [sample_item_data]}
        ).json()["data"]["id"]

        response = client.patch(
            f"{API_PREFIX}/quotes/{quote_id}/items/0",
            json={"field": "formulationType", "value": "Injection"},
        )

        item = response.json()["data"]["form"]["items"][0]
        assert item["formulationType"] == "Injection"
        assert item["packing"] == ""
        assert item["packagingType"] == ""
        assert item["pvcType"] == ""
        assert item["brandName"] == "Paracip 650"

    def test_duplicate(self, client: TestClient, quote_id: str):
        client.patch(
            f"{API_PREFIX}/quotes/{quote_id}/items/0",
            json={"field": "brandName", "value": "Cofsils"},
        )
        response = client.post(f"{API_PREFIX}/quotes/{quote_id}/items/0/duplicate")

        items = response.json()["data"]["form"]["items"]
        assert len(items) == 2
        assert items[1]["brandName"] == "Cofsils"
        assert items[1]["id"] != items[0]["id"]

    def test_replace(self, client: TestClient, quote_id: str, sample_item_data: dict):
        response = client.put(f"{API_PREFIX}/quotes/{quote_id}/items/0", json=sample_item_data)

        item = response.json()["data"]["form"]["items"][0]
        assert item["brandName"] == "Paracip 650"
        assert item["pvcType"] == "Clear PVC"

    def test_item_ops_on_missing_quote(self, client: TestClient):
        response = client.post(f"{API_PREFIX}/quotes/missing/items")
        assert response.status_code == 404


class TestValidateAndPreview:
    def test_validate_empty_quote(self, client: TestClient, quote_id: str):
        response = client.post(f"{API_PREFIX}/quotes/{quote_id}/validate")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["valid"] is False
        assert set(data["errors"]) == {"partyName", "marketedBy", "clientEmail", "items"}
        assert data["itemErrors"][0]["brandName"] == "Brand name is required"

    def test_validate_complete_quote(
        self, client: TestClient, sample_header: dict, sample_item_data: dict
    ):
        quote_id = client.post(
            f"{API_PREFIX}/quotes",
            json={"fields": sample_header, "items": [sample_item_data]},
        ).json()["data"]["id"]

        data = client.post(f"{API_PREFIX}/quotes/{quote_id}/validate").json()["data"]
        assert data == {"valid": True, "errors": {}, "itemErrors": [{}]}

    def test_preview(self, client: TestClient, sample_item_data: dict):
        quote_id = client.post(
            f"{API_PREFIX}/quotes",
            json={
                "fields": {"taxPercent": 12, "cylinderCharges": 1000},
                "items": [sample_item_data],
            },
        ).json()["data"]["id"]

        response = client.get(f"{API_PREFIX}/quotes/{quote_id}/preview")

        assert response.status_code == 200
        data = response.json()["data"]
        totals = data["totals"]
        assert totals["subtotal"] == pytest.approx(56000)
        assert totals["taxOnSubtotal"] == pytest.approx(6720)
        assert totals["taxOnCharges"] == pytest.approx(180)
        assert totals["total"] == pytest.approx(63900)
        assert totals["advancePayment"] == pytest.approx(63900 * 0.35)
        assert data["flags"]["hasBlister"] is True
        assert data["companySettings"]["companyEmail"] == "sales@example.com"
