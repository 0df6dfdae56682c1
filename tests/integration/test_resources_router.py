"""
Integration tests for the resource catalog router.

Tests listing, key validation and Tenant Admin maintenance at /api/resources.
"""

import pytest

from casedesk.services.resources import ResourceCatalog


@pytest.fixture
def catalog_entries(test_db, tenant, other_tenant):
    catalog = ResourceCatalog(test_db)
    catalog.create(tenant.id, {"category": "complaint_types", "key": "verbal", "label": "Verbal", "sort_order": 2})
    catalog.create(tenant.id, {"category": "complaint_types", "key": "mobbing", "label": "Mobbing", "sort_order": 1})
    catalog.create(tenant.id, {"category": "complaint_severity", "key": "low", "label": "Low"})
    catalog.create(other_tenant.id, {"category": "complaint_types", "key": "globex-only", "label": "Globex only"})


class TestListResources:
    """Test GET /api/resources endpoints."""

    def test_grouped(self, client, catalog_entries, alice_headers):
        response = client.get("/api/resources", headers=alice_headers)

        assert response.status_code == 200
        data = response.json()["data"]
        assert response.json()["message"] == "Success"
        assert sorted(data) == ["complaint_severity", "complaint_types"]
        assert [r["key"] for r in data["complaint_types"]] == ["mobbing", "verbal"]

    def test_category(self, client, catalog_entries, alice_headers):
        response = client.get("/api/resources/complaint_types", headers=alice_headers)
        assert [r["key"] for r in response.json()["data"]] == ["mobbing", "verbal"]

    def test_empty_category(self, client, catalog_entries, alice_headers):
        assert client.get("/api/resources/evidence_types", headers=alice_headers).status_code == 404

    def test_unknown_category(self, client, alice_headers):
        assert client.get("/api/resources/colours", headers=alice_headers).status_code == 400

    def test_requires_auth(self, client):
        assert client.get("/api/resources").status_code == 401

    @pytest.mark.parametrize("key,valid", [("mobbing", True), ("globex-only", False), ("nope", False)])
    def test_validate_key(self, client, catalog_entries, alice_headers, key, valid):
        response = client.get(f"/api/resources/complaint_types/{key}/validate", headers=alice_headers)
        assert response.json()["data"] == {"category": "complaint_types", "key": key, "valid": valid}


class TestMaintainResources:
    """Test POST/PUT/DELETE /api/resources endpoints."""

    def test_create(self, client, admin_headers):
        response = client.post(
            "/api/resources",
            headers=admin_headers,
            json={"category": "complaint_types", "key": "cyber", "label": "Cyberbullying", "metadata": {"color": "red"}},
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["key"] == "cyber"
        assert data["is_active"] is True
        assert data["metadata"] == {"color": "red"}

    @pytest.mark.parametrize(
        "metadata",
        [
            {"nested": {"a": [1, 2, {"b": 3}]}},
            {"tags": ["red", "blue"]},
        ],
    )
    def test_create_rejects_nested_metadata(self, client, admin_headers, metadata):
        response = client.post(
            "/api/resources",
            headers=admin_headers,
            json={"category": "complaint_types", "key": "cyber", "label": "Cyberbullying", "metadata": metadata},
        )
        assert response.status_code == 400

    def test_create_accepts_scalar_metadata(self, client, admin_headers):
        metadata = {"color": "red", "weight": 3, "ratio": 0.5, "visible": True, "icon": None}
        response = client.post(
            "/api/resources",
            headers=admin_headers,
            json={"category": "complaint_types", "key": "cyber", "label": "Cyberbullying", "metadata": metadata},
        )
        assert response.status_code == 201
        assert response.json()["data"]["metadata"] == metadata

    def test_update_rejects_nested_metadata(self, client, catalog_entries, admin_headers):
        response = client.put(
            "/api/resources/complaint_types/verbal", headers=admin_headers, json={"metadata": {"rules": {"max": 1}}}
        )
        assert response.status_code == 400

    def test_create_duplicate(self, client, catalog_entries, admin_headers):
        response = client.post(
            "/api/resources",
            headers=admin_headers,
            json={"category": "complaint_types", "key": "verbal", "label": "Verbal again"},
        )
        assert response.status_code == 409

    def test_create_invalid_key(self, client, admin_headers):
        response = client.post(
            "/api/resources", headers=admin_headers, json={"category": "complaint_types", "key": "has space", "label": "X"}
        )
        assert response.status_code == 400

    def test_create_requires_admin(self, client, hr_headers):
        response = client.post(
            "/api/resources", headers=hr_headers, json={"category": "complaint_types", "key": "cyber", "label": "Cyber"}
        )
        assert response.status_code == 403

    def test_update(self, client, catalog_entries, admin_headers):
        response = client.put(
            "/api/resources/complaint_types/verbal",
            headers=admin_headers,
            json={"label": "Verbal abuse", "sort_order": 0},
        )
        assert response.status_code == 200
        assert response.json()["data"]["label"] == "Verbal abuse"

        listing = client.get("/api/resources/complaint_types", headers=admin_headers)
        assert [r["key"] for r in listing.json()["data"]] == ["verbal", "mobbing"]

    def test_update_missing(self, client, admin_headers):
        response = client.put("/api/resources/complaint_types/ghost", headers=admin_headers, json={"label": "Ghost"})
        assert response.status_code == 404

    def test_deactivate(self, client, catalog_entries, admin_headers):
        response = client.delete("/api/resources/complaint_types/verbal", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["data"]["is_active"] is False

        active = client.get("/api/resources/complaint_types", headers=admin_headers)
        assert [r["key"] for r in active.json()["data"]] == ["mobbing"]

        everything = client.get("/api/resources/complaint_types", params={"active_only": False}, headers=admin_headers)
        assert len(everything.json()["data"]) == 2

        validation = client.get("/api/resources/complaint_types/verbal/validate", headers=admin_headers)
        assert validation.json()["data"]["valid"] is False

    def test_other_tenant_entry_not_found(self, client, catalog_entries, admin_headers):
        assert client.delete("/api/resources/complaint_types/globex-only", headers=admin_headers).status_code == 404
