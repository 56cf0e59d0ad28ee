"""Contract tests for health and formulation catalog endpoints."""

import pytest
from fastapi.testclient import TestClient


pytestmark = pytest.mark.contract

API_PREFIX = "/api/v1"


class TestHealthEndpoint:
    def test_health(self, client: TestClient):
        response = client.get(f"{API_PREFIX}/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"] == "0.1.0"
        assert data["store"]["drafts"] == 0


class TestListFormulations:
    """Contract tests for GET /api/v1/formulations."""

    def test_list_formulations(self, client: TestClient):
        response = client.get(f"{API_PREFIX}/formulations")

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        names = [entry["formulation_type"] for entry in data["data"]["formulations"]]
        assert names[0] == "Tablet"
        assert "I.V/Fluid" in names
        assert len(names) == 11

    def test_sub_option_lists(self, client: TestClient):
        data = client.get(f"{API_PREFIX}/formulations").json()["data"]
        assert data["custom_option"] == "Custom"
        assert data["injection_types"] == ["Dry Injection", "Liquid Injection"]
        assert data["pvc_types"] == ["Clear PVC", "Amber PVC"]


class TestGetFormulation:
    """Contract tests for GET /api/v1/formulations/{type}."""

    def test_type_with_slash(self, client: TestClient):
        response = client.get(f"{API_PREFIX}/formulations/Syrup/Suspension")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["known"] is True
        assert data["packing_options"][0] == "2ml"
        assert data["layout"]["packing_label"] == "Unit Pack"
        assert data["layout"]["show_carton"] is True

    def test_injection_layout(self, client: TestClient):
        response = client.get(
            f"{API_PREFIX}/formulations/Injection",
            params={"injection_type": "Dry Injection"},
        )
        data = response.json()["data"]
        assert data["requires_packing"] is False
        assert data["layout"]["show_packaging_type"] is False
        assert data["layout"]["show_dry_injection_fields"] is True

    def test_unknown_type_is_not_an_error(self, client: TestClient):
        response = client.get(f"{API_PREFIX}/formulations/Gel")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["known"] is False
        assert data["packing_options"] == []
