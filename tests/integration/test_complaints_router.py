"""
Integration tests for the complaints router.

Tests intake, visibility, the status workflow, assignment, evidence and
resolution at /api/complaints.
"""

import pytest

from casedesk.models import Complaint
from casedesk.services.resources import ResourceCatalog

from tests.fixtures.data import complaint_payload as build_complaint_payload
from tests.fixtures.factories import auth_headers_for, create_complaint, create_user


def file_complaint(client, headers, payload):
    response = client.post("/api/complaints", headers=headers, json=payload)
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestCreateComplaint:
    """Test POST /api/complaints endpoint."""

    def test_creates_draft(self, client, alice, bob, alice_headers, complaint_payload):
        data = file_complaint(client, alice_headers, complaint_payload)

        assert data["status"] == "draft"
        assert data["complainant"]["id"] == alice.id
        assert data["accused"]["id"] == bob.id
        assert data["is_confidential"] is True
        assert data["resolution"] is None
        assert len(data["timeline"]) == 1
        assert data["timeline"][0]["action"] == "created"

    def test_against_self(self, client, alice, alice_headers):
        response = client.post("/api/complaints", headers=alice_headers, json=build_complaint_payload(accused_id=alice.id))
        assert response.status_code == 400

    def test_accused_from_other_tenant(self, client, test_db, alice_headers, other_tenant):
        outsider = create_user(test_db, other_tenant, email="outsider@globex.test")
        response = client.post("/api/complaints", headers=alice_headers, json=build_complaint_payload(accused_id=outsider.id))
        assert response.status_code == 404

    def test_unknown_type(self, client, alice_headers, complaint_payload):
        complaint_payload["type"] = "gossip"
        response = client.post("/api/complaints", headers=alice_headers, json=complaint_payload)

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "type"

    def test_tenant_catalog_type(self, client, test_db, tenant, alice_headers, complaint_payload):
        ResourceCatalog(test_db).create(tenant.id, {"category": "complaint_types", "key": "mobbing", "label": "Mobbing"})
        complaint_payload["type"] = "mobbing"

        data = file_complaint(client, alice_headers, complaint_payload)
        assert data["type"] == "mobbing"

    def test_short_title(self, client, alice_headers, complaint_payload):
        complaint_payload["title"] = "Hey"
        assert client.post("/api/complaints", headers=alice_headers, json=complaint_payload).status_code == 400


class TestListComplaints:
    """Test GET /api/complaints endpoint."""

    @pytest.fixture
    def complaints(self, test_db, alice, bob, investigator):
        return [
            create_complaint(test_db, alice, bob, title="Filed by Alice"),
            create_complaint(test_db, bob, alice, title="Filed by Bob", status="submitted"),
            create_complaint(test_db, bob, alice, title="Assigned to Ivan", status="investigating", assigned_to=investigator),
        ]

    def titles(self, response):
        return sorted(c["title"] for c in response.json()["data"])

    def test_employee_sees_own(self, client, complaints, alice_headers):
        response = client.get("/api/complaints", headers=alice_headers)
        assert self.titles(response) == ["Filed by Alice"]

    def test_investigator_sees_assigned(self, client, complaints, investigator_headers):
        response = client.get("/api/complaints", headers=investigator_headers)
        assert self.titles(response) == ["Assigned to Ivan"]

    def test_hr_sees_all(self, client, complaints, hr_headers):
        response = client.get("/api/complaints", headers=hr_headers)
        assert len(response.json()["data"]) == 3
        assert response.json()["pagination"]["total"] == 3
        assert response.json()["message"] == "Success"

    def test_filter_by_status(self, client, complaints, hr_headers):
        response = client.get("/api/complaints", params={"status": "submitted"}, headers=hr_headers)
        assert self.titles(response) == ["Filed by Bob"]

    def test_invalid_status_filter(self, client, hr_headers):
        assert client.get("/api/complaints", params={"status": "lost"}, headers=hr_headers).status_code == 400

    def test_other_tenant_invisible(self, client, test_db, complaints, other_tenant):
        outsider_admin = create_user(test_db, other_tenant, email="boss@globex.test", role="Tenant Admin")
        response = client.get("/api/complaints", headers=auth_headers_for(outsider_admin))
        assert response.json()["data"] == []
        assert response.json()["pagination"]["totalPages"] == 0


class TestGetComplaint:
    """Test GET /api/complaints/{complaint_id} endpoint."""

    def test_complainant_can_read(self, client, test_db, alice, bob, alice_headers):
        complaint = create_complaint(test_db, alice, bob)
        response = client.get(f"/api/complaints/{complaint.id}", headers=alice_headers)
        assert response.status_code == 200
        assert response.json()["data"]["description"].startswith("Inappropriate")

    def test_accused_cannot_read(self, client, test_db, alice, bob, bob_headers):
        complaint = create_complaint(test_db, alice, bob)
        assert client.get(f"/api/complaints/{complaint.id}", headers=bob_headers).status_code == 403

    def test_missing(self, client, hr_headers):
        response = client.get("/api/complaints/9999", headers=hr_headers)
        assert response.status_code == 404
        assert response.json() == {
            "success": False,
            "message": "Complaint not found",
            "request_id": response.headers["X-Request-ID"],
        }

    def test_other_tenant_not_found(self, client, test_db, alice, bob, other_tenant):
        complaint = create_complaint(test_db, alice, bob)
        outsider_admin = create_user(test_db, other_tenant, email="boss@globex.test", role="Tenant Admin")
        response = client.get(f"/api/complaints/{complaint.id}", headers=auth_headers_for(outsider_admin))
        assert response.status_code == 404


class TestStatusWorkflow:
    """Test PUT /api/complaints/{complaint_id}/status endpoint."""

    def test_full_case_flow(self, client, test_db, alice, investigator, alice_headers, hr_headers, investigator_headers, complaint_payload):
        """Alice files and submits, HR assigns Ivan, Ivan resolves as founded."""
        complaint_id = file_complaint(client, alice_headers, complaint_payload)["id"]

        submitted = client.put(f"/api/complaints/{complaint_id}/status", headers=alice_headers, json={"status": "submitted"})
        assert submitted.status_code == 200
        assert submitted.json()["data"]["status"] == "submitted"
        assert len(submitted.json()["data"]["timeline"]) == 2

        assigned = client.post(
            f"/api/complaints/{complaint_id}/assign", headers=hr_headers, json={"investigator_id": investigator.id}
        )
        assert assigned.status_code == 200
        assert assigned.json()["data"]["status"] == "investigating"
        assert assigned.json()["data"]["assigned_to"]["id"] == investigator.id

        resolved = client.post(
            f"/api/complaints/{complaint_id}/resolve",
            headers=investigator_headers,
            json={"outcome": "founded", "actions_taken": ["Written warning"], "notes": "Witnesses confirmed the events"},
        )
        assert resolved.status_code == 200
        data = resolved.json()["data"]
        assert data["status"] == "resolved"
        assert data["resolution"]["outcome"] == "founded"
        assert data["resolution"]["resolved_by"] == investigator.id
        assert data["resolution"]["actions_taken"] == ["Written warning"]
        assert [e["action"] for e in data["timeline"]] == ["created", "status_changed", "assigned", "resolved"]

    def test_employee_cannot_resolve(self, client, test_db, alice, bob, alice_headers):
        complaint = create_complaint(test_db, alice, bob, status="submitted")

        response = client.put(f"/api/complaints/{complaint.id}/status", headers=alice_headers, json={"status": "resolved"})

        assert response.status_code == 403
        test_db.expire_all()
        stored = test_db.get(Complaint, complaint.id)
        assert stored.status == "submitted"
        assert len(stored.timeline) == 1

    @pytest.mark.parametrize(
        "role,target,expected",
        [
            ("RRHH", "under_review", 200),
            ("RRHH", "closed", 200),
            ("RRHH", "draft", 403),
            ("Tenant Admin", "draft", 200),
            ("Investigador", "under_review", 403),
            ("Investigador", "resolved", 200),
        ],
    )
    def test_role_matrix(self, client, test_db, tenant, alice, bob, role, target, expected):
        actor = create_user(test_db, tenant, email="actor@acme.test", role=role)
        complaint = create_complaint(test_db, alice, bob, status="submitted", assigned_to=actor if role == "Investigador" else None)

        response = client.put(
            f"/api/complaints/{complaint.id}/status", headers=auth_headers_for(actor), json={"status": target}
        )
        assert response.status_code == expected

    def test_unassigned_investigator_denied(self, client, test_db, alice, bob, investigator_headers):
        complaint = create_complaint(test_db, alice, bob, status="submitted")
        response = client.put(
            f"/api/complaints/{complaint.id}/status", headers=investigator_headers, json={"status": "investigating"}
        )
        assert response.status_code == 403

    def test_missing_complaint(self, client, hr_headers):
        response = client.put("/api/complaints/9999/status", headers=hr_headers, json={"status": "closed"})
        assert response.status_code == 404

    def test_notes_recorded(self, client, test_db, alice, bob, hr_headers):
        complaint = create_complaint(test_db, alice, bob, status="submitted")
        response = client.put(
            f"/api/complaints/{complaint.id}/status",
            headers=hr_headers,
            json={"status": "under_review", "notes": "Initial review started"},
        )
        entry = response.json()["data"]["timeline"][-1]
        assert entry["notes"] == "Initial review started"
        assert entry["previous_status"] == "submitted"
        assert entry["new_status"] == "under_review"


class TestAssignInvestigator:
    """Test POST /api/complaints/{complaint_id}/assign endpoint."""

    def test_employee_denied(self, client, test_db, alice, bob, investigator, alice_headers):
        complaint = create_complaint(test_db, alice, bob, status="submitted")
        response = client.post(
            f"/api/complaints/{complaint.id}/assign", headers=alice_headers, json={"investigator_id": investigator.id}
        )
        assert response.status_code == 403

    def test_assignee_must_be_investigator(self, client, test_db, alice, bob, hr_headers):
        complaint = create_complaint(test_db, alice, bob, status="submitted")
        response = client.post(f"/api/complaints/{complaint.id}/assign", headers=hr_headers, json={"investigator_id": bob.id})
        assert response.status_code == 404

    def test_inactive_investigator(self, client, test_db, tenant, alice, bob, hr_headers):
        retired = create_user(test_db, tenant, email="retired@acme.test", role="Investigador", is_active=False)
        complaint = create_complaint(test_db, alice, bob, status="submitted")
        response = client.post(f"/api/complaints/{complaint.id}/assign", headers=hr_headers, json={"investigator_id": retired.id})
        assert response.status_code == 404


class TestEvidence:
    """Test POST /api/complaints/{complaint_id}/evidence endpoint."""

    def test_adds_evidence(self, client, test_db, alice, bob, alice_headers):
        complaint = create_complaint(test_db, alice, bob)
        response = client.post(
            f"/api/complaints/{complaint.id}/evidence",
            headers=alice_headers,
            json={
                "type": "image",
                "filename": "a1b2c3.png",
                "original_name": "screenshot.png",
                "url": "https://files.acme.test/a1b2c3.png",
                "size": 20480,
            },
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["evidence"][0]["original_name"] == "screenshot.png"
        assert data["evidence"][0]["uploaded_by_id"] == alice.id
        assert data["timeline"][-1]["action"] == "evidence_added"

    def test_invalid_type(self, client, test_db, alice, bob, alice_headers):
        complaint = create_complaint(test_db, alice, bob)
        response = client.post(
            f"/api/complaints/{complaint.id}/evidence",
            headers=alice_headers,
            json={"type": "hologram", "filename": "x", "original_name": "x", "url": "x", "size": 1},
        )
        assert response.status_code == 400


class TestResolve:
    """Test POST /api/complaints/{complaint_id}/resolve endpoint."""

    def test_employee_denied(self, client, test_db, alice, bob, alice_headers):
        complaint = create_complaint(test_db, alice, bob, status="investigating")
        response = client.post(f"/api/complaints/{complaint.id}/resolve", headers=alice_headers, json={"outcome": "unfounded"})
        assert response.status_code == 403

    def test_investigator_must_be_assigned(self, client, test_db, alice, bob, investigator_headers):
        complaint = create_complaint(test_db, alice, bob, status="investigating")
        response = client.post(
            f"/api/complaints/{complaint.id}/resolve", headers=investigator_headers, json={"outcome": "unfounded"}
        )
        assert response.status_code == 403

    def test_hr_resolves_any(self, client, test_db, alice, bob, hr_user, hr_headers):
        complaint = create_complaint(test_db, alice, bob, status="investigating")
        response = client.post(
            f"/api/complaints/{complaint.id}/resolve", headers=hr_headers, json={"outcome": "insufficient_evidence"}
        )
        assert response.status_code == 200
        assert response.json()["data"]["resolution"]["resolved_by"] == hr_user.id


class TestTimelineAndStats:
    """Test timeline and statistics endpoints."""

    def test_timeline(self, client, test_db, alice, bob, alice_headers):
        complaint = create_complaint(test_db, alice, bob)
        response = client.get(f"/api/complaints/{complaint.id}/timeline", headers=alice_headers)
        assert response.status_code == 200
        assert [e["action"] for e in response.json()["data"]] == ["created"]

    def test_stats(self, client, test_db, alice, bob, hr_headers):
        create_complaint(test_db, alice, bob, type="sexual", severity="high")
        create_complaint(test_db, alice, bob, status="submitted")

        response = client.get("/api/complaints/stats", headers=hr_headers)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["total"] == 2
        assert data["status_counts"]["draft"] == 1
        assert data["status_counts"]["closed"] == 0
        assert data["type_counts"]["sexual"] == 1
        assert data["severity_counts"]["high"] == 1

    def test_stats_requires_supervisor(self, client, alice_headers):
        assert client.get("/api/complaints/stats", headers=alice_headers).status_code == 403
