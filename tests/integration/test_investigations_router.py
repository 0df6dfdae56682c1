"""
Integration tests for the investigations router.

Tests opening, scoping, status updates, completion, suspension,
cancellation and the case file at /api/investigations.
"""

from datetime import datetime, timedelta

import pytest

from casedesk.models import Complaint

from tests.fixtures.data import CONCLUSION_SUMMARY, investigation_payload
from tests.fixtures.factories import auth_headers_for, create_complaint, create_user


@pytest.fixture
def submitted_complaint(test_db, alice, bob):
    return create_complaint(test_db, alice, bob, status="submitted")


@pytest.fixture
def investigation(client, hr_headers, submitted_complaint, investigator):
    response = client.post(
        "/api/investigations",
        headers=hr_headers,
        json=investigation_payload(submitted_complaint.id, investigator.id),
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


def complete(client, headers, investigation_id, outcome="substantiated", **extra):
    return client.post(
        f"/api/investigations/{investigation_id}/complete",
        headers=headers,
        json={"outcome": outcome, "summary": CONCLUSION_SUMMARY, **extra},
    )


class TestCreateInvestigation:
    """Test POST /api/investigations endpoint."""

    def test_opens_and_moves_complaint(self, test_db, investigation, submitted_complaint, investigator, hr_user):
        assert investigation["status"] == "pending"
        assert investigation["priority"] == "high"
        assert investigation["investigator"]["id"] == investigator.id
        assert investigation["assigned_by"]["id"] == hr_user.id
        assert investigation["objectives"] == ["Interview witnesses", "Review meeting recordings"]
        assert investigation["timeline"][0]["action"] == "created"

        test_db.expire_all()
        complaint = test_db.get(Complaint, submitted_complaint.id)
        assert complaint.status == "investigating"
        assert complaint.assigned_to_id == investigator.id
        assert complaint.timeline[-1].action == "investigation_started"

    def test_duplicate_active(self, client, hr_headers, investigation, submitted_complaint, investigator):
        response = client.post(
            "/api/investigations",
            headers=hr_headers,
            json=investigation_payload(submitted_complaint.id, investigator.id),
        )
        assert response.status_code == 409

    def test_employee_denied(self, client, alice_headers, submitted_complaint, investigator):
        response = client.post(
            "/api/investigations",
            headers=alice_headers,
            json=investigation_payload(submitted_complaint.id, investigator.id),
        )
        assert response.status_code == 403

    def test_investigator_cannot_open(self, client, investigator_headers, submitted_complaint, investigator):
        response = client.post(
            "/api/investigations",
            headers=investigator_headers,
            json=investigation_payload(submitted_complaint.id, investigator.id),
        )
        assert response.status_code == 403

    def test_employee_as_investigator(self, client, hr_headers, submitted_complaint, bob):
        response = client.post(
            "/api/investigations", headers=hr_headers, json=investigation_payload(submitted_complaint.id, bob.id)
        )
        assert response.status_code == 404

    def test_unknown_complaint(self, client, hr_headers, investigator):
        response = client.post("/api/investigations", headers=hr_headers, json=investigation_payload(9999, investigator.id))
        assert response.status_code == 404

    def test_past_completion_date(self, client, hr_headers, submitted_complaint, investigator):
        payload = investigation_payload(
            submitted_complaint.id,
            investigator.id,
            estimated_completion_date=(datetime.utcnow() - timedelta(days=1)).isoformat(),
        )
        response = client.post("/api/investigations", headers=hr_headers, json=payload)
        assert response.status_code == 400

    def test_blank_objective(self, client, hr_headers, submitted_complaint, investigator):
        payload = investigation_payload(submitted_complaint.id, investigator.id, objectives=["  "])
        assert client.post("/api/investigations", headers=hr_headers, json=payload).status_code == 400


class TestListInvestigations:
    """Test GET /api/investigations endpoint."""

    def test_investigator_sees_own(self, client, test_db, tenant, alice, bob, hr_headers, investigation, investigator_headers):
        other = create_user(test_db, tenant, email="olga@acme.test", role="Investigador")
        second = create_complaint(test_db, bob, alice, status="submitted")
        client.post("/api/investigations", headers=hr_headers, json=investigation_payload(second.id, other.id))

        own = client.get("/api/investigations", headers=investigator_headers)
        assert [i["id"] for i in own.json()["data"]] == [investigation["id"]]

        everything = client.get("/api/investigations", headers=hr_headers)
        assert everything.json()["pagination"]["total"] == 2

    def test_employee_denied(self, client, alice_headers):
        assert client.get("/api/investigations", headers=alice_headers).status_code == 403

    def test_filter_by_status(self, client, hr_headers, investigation):
        response = client.get("/api/investigations", params={"status": "in_progress"}, headers=hr_headers)
        assert response.json()["data"] == []

    def test_stats(self, client, hr_headers, investigation):
        response = client.get("/api/investigations/stats", headers=hr_headers)
        data = response.json()["data"]
        assert data["overview"]["total"] == 1
        assert data["overview"]["pending"] == 1
        assert data["by_priority"]["high"] == 1


class TestUpdateInvestigation:
    """Test PUT /api/investigations/{investigation_id} endpoint."""

    def test_investigator_moves_status(self, client, investigator_headers, investigation):
        response = client.put(
            f"/api/investigations/{investigation['id']}",
            headers=investigator_headers,
            json={"status": "in_progress", "notes": "Kick-off done"},
        )
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["status"] == "in_progress"
        assert data["notes"] == "Kick-off done"
        assert data["timeline"][-1]["previous_status"] == "pending"

    @pytest.mark.parametrize("target", ["completed", "cancelled"])
    def test_dedicated_statuses_rejected(self, client, hr_headers, investigation, target):
        response = client.put(f"/api/investigations/{investigation['id']}", headers=hr_headers, json={"status": target})
        assert response.status_code == 400

    def test_investigator_cannot_suspend_via_update(self, client, investigator_headers, investigation):
        response = client.put(
            f"/api/investigations/{investigation['id']}", headers=investigator_headers, json={"status": "suspended"}
        )
        assert response.status_code == 403

    def test_other_investigator_denied(self, client, test_db, tenant, investigation):
        stranger = create_user(test_db, tenant, email="olga@acme.test", role="Investigador")
        response = client.put(
            f"/api/investigations/{investigation['id']}", headers=auth_headers_for(stranger), json={"priority": "low"}
        )
        assert response.status_code == 403


class TestCompleteInvestigation:
    """Test POST /api/investigations/{investigation_id}/complete endpoint."""

    def test_substantiated_resolves_founded(self, client, test_db, investigator, investigator_headers, investigation):
        response = complete(
            client,
            investigator_headers,
            investigation["id"],
            recommendations=[{"type": "disciplinary", "description": "Formal written warning", "priority": "high"}],
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["status"] == "completed"
        assert data["conclusion"]["outcome"] == "substantiated"
        assert data["conclusion"]["completed_by"] == investigator.id
        assert data["actual_completion_date"] is not None
        assert data["recommendations"][0]["status"] == "pending"

        test_db.expire_all()
        complaint = test_db.get(Complaint, investigation["complaint_id"])
        assert complaint.status == "resolved"
        assert complaint.resolution_outcome == "founded"
        assert complaint.resolved_by_id == investigator.id

    @pytest.mark.parametrize("outcome", ["unsubstantiated", "partially_substantiated", "inconclusive", "unfounded"])
    def test_other_outcomes_resolve_unfounded(self, client, test_db, hr_headers, investigation, outcome):
        assert complete(client, hr_headers, investigation["id"], outcome=outcome).status_code == 200

        test_db.expire_all()
        assert test_db.get(Complaint, investigation["complaint_id"]).resolution_outcome == "unfounded"

    def test_recommendation_assignee_from_other_tenant(self, client, test_db, other_tenant, hr_headers, investigation):
        outsider = create_user(test_db, other_tenant, email="outsider@globex.test")

        response = complete(
            client,
            hr_headers,
            investigation["id"],
            recommendations=[{"type": "training", "description": "Run the course", "assigned_to": outsider.id}],
        )

        assert response.status_code == 404
        test_db.expire_all()
        assert test_db.get(Complaint, investigation["complaint_id"]).status == "investigating"
        detail = client.get(f"/api/investigations/{investigation['id']}", headers=hr_headers).json()["data"]
        assert detail["status"] == "pending"
        assert detail["recommendations"] == []

    def test_recommendation_assignee_unknown(self, client, hr_headers, investigation):
        response = complete(
            client,
            hr_headers,
            investigation["id"],
            recommendations=[{"type": "policy", "description": "Update the policy", "assigned_to": 99999}],
        )
        assert response.status_code == 404

    def test_short_summary(self, client, hr_headers, investigation):
        response = client.post(
            f"/api/investigations/{investigation['id']}/complete",
            headers=hr_headers,
            json={"outcome": "inconclusive", "summary": "Too short"},
        )
        assert response.status_code == 400

    def test_complete_twice(self, client, hr_headers, investigation):
        complete(client, hr_headers, investigation["id"])
        assert complete(client, hr_headers, investigation["id"]).status_code == 400

    def test_completed_blocks_new_investigation(self, client, hr_headers, investigation, investigator):
        complete(client, hr_headers, investigation["id"])
        response = client.post(
            "/api/investigations",
            headers=hr_headers,
            json=investigation_payload(investigation["complaint_id"], investigator.id),
        )
        assert response.status_code == 409


class TestSuspendAndCancel:
    """Test suspend and cancel endpoints."""

    def test_hr_suspends(self, client, hr_headers, investigation):
        response = client.post(
            f"/api/investigations/{investigation['id']}/suspend", headers=hr_headers, json={"reason": "Accused on leave"}
        )
        assert response.status_code == 200
        assert response.json()["data"]["status"] == "suspended"
        assert response.json()["data"]["timeline"][-1]["notes"] == "Accused on leave"

    def test_investigator_cannot_suspend(self, client, investigator_headers, investigation):
        response = client.post(f"/api/investigations/{investigation['id']}/suspend", headers=investigator_headers, json={})
        assert response.status_code == 403

    def test_cancelled_is_gone(self, client, hr_headers, investigation):
        response = client.post(f"/api/investigations/{investigation['id']}/cancel", headers=hr_headers, json={})
        assert response.status_code == 200
        assert response.json()["data"]["status"] == "cancelled"

        assert client.get(f"/api/investigations/{investigation['id']}", headers=hr_headers).status_code == 404
        listing = client.get("/api/investigations", headers=hr_headers)
        assert listing.json()["pagination"]["total"] == 0

    def test_cancelled_allows_new_investigation(self, client, hr_headers, investigation, investigator):
        client.post(f"/api/investigations/{investigation['id']}/cancel", headers=hr_headers, json={})
        response = client.post(
            "/api/investigations",
            headers=hr_headers,
            json=investigation_payload(investigation["complaint_id"], investigator.id),
        )
        assert response.status_code == 201

    def test_other_tenant_not_found(self, client, test_db, other_tenant, investigation):
        outsider = create_user(test_db, other_tenant, email="boss@globex.test", role="Tenant Admin")
        response = client.post(
            f"/api/investigations/{investigation['id']}/cancel", headers=auth_headers_for(outsider), json={}
        )
        assert response.status_code == 404


class TestCaseFile:
    """Test evidence, custody, interviews, findings and recommendations."""

    @pytest.fixture
    def evidence(self, client, investigator_headers, investigation):
        response = client.post(
            f"/api/investigations/{investigation['id']}/evidence",
            headers=investigator_headers,
            json={
                "type": "email",
                "title": "Email thread",
                "source": "Mail server export",
                "url": "https://files.acme.test/thread.eml",
                "relevance": "high",
            },
        )
        assert response.status_code == 201, response.text
        return response.json()["data"]

    def test_evidence_starts_custody(self, evidence, investigator):
        assert evidence["collected_by_id"] == investigator.id
        assert [entry["action"] for entry in evidence["chain_of_custody"]] == ["collected"]

    def test_evidence_url_must_be_http(self, client, investigator_headers, investigation):
        response = client.post(
            f"/api/investigations/{investigation['id']}/evidence",
            headers=investigator_headers,
            json={"type": "document", "title": "Memo", "source": "HR", "url": "ftp://files/memo.pdf"},
        )
        assert response.status_code == 400

    def test_custody_entry(self, client, investigator_headers, investigation, evidence):
        response = client.post(
            f"/api/investigations/{investigation['id']}/evidence/{evidence['id']}/custody",
            headers=investigator_headers,
            json={"action": "reviewed", "notes": "Headers checked"},
        )
        assert response.status_code == 200
        custody = response.json()["data"]["chain_of_custody"]
        assert [entry["action"] for entry in custody] == ["collected", "reviewed"]
        assert custody[-1]["notes"] == "Headers checked"

    def test_custody_unknown_evidence(self, client, investigator_headers, investigation):
        response = client.post(
            f"/api/investigations/{investigation['id']}/evidence/9999/custody",
            headers=investigator_headers,
            json={"action": "reviewed"},
        )
        assert response.status_code == 404

    def test_interview(self, client, alice, investigator, investigator_headers, investigation):
        response = client.post(
            f"/api/investigations/{investigation['id']}/interviews",
            headers=investigator_headers,
            json={
                "interviewee_id": alice.id,
                "interview_date": datetime.utcnow().isoformat(),
                "duration_minutes": 45,
                "type": "complainant",
                "summary": "Complainant described the three incidents in detail.",
                "key_points": ["Incidents happened in meetings"],
            },
        )
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["interviewee_id"] == alice.id
        assert data["interviewer_id"] == investigator.id
        assert data["follow_up_required"] is False

    def test_interview_unknown_person(self, client, investigator_headers, investigation):
        response = client.post(
            f"/api/investigations/{investigation['id']}/interviews",
            headers=investigator_headers,
            json={
                "interviewee_id": 9999,
                "interview_date": datetime.utcnow().isoformat(),
                "type": "witness",
                "summary": "Witness could not be reached.",
            },
        )
        assert response.status_code == 404

    def test_finding_with_own_evidence(self, client, investigator_headers, investigation, evidence):
        response = client.post(
            f"/api/investigations/{investigation['id']}/findings",
            headers=investigator_headers,
            json={
                "category": "behavioral",
                "description": "Pattern of hostile remarks toward the complainant.",
                "severity": "high",
                "supporting_evidence": [evidence["id"]],
            },
        )
        assert response.status_code == 201
        assert response.json()["data"]["supporting_evidence"] == [evidence["id"]]

    def test_finding_with_foreign_evidence(self, client, investigator_headers, investigation):
        response = client.post(
            f"/api/investigations/{investigation['id']}/findings",
            headers=investigator_headers,
            json={
                "category": "factual",
                "description": "Refers to evidence outside this case.",
                "severity": "low",
                "supporting_evidence": [9999],
            },
        )
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "supporting_evidence"

    def test_recommendation_update(self, client, hr_headers, alice, investigation):
        completed = complete(
            client,
            hr_headers,
            investigation["id"],
            recommendations=[{"type": "training", "description": "Respectful workplace course"}],
        )
        recommendation_id = completed.json()["data"]["recommendations"][0]["id"]

        response = client.put(
            f"/api/investigations/{investigation['id']}/recommendations/{recommendation_id}",
            headers=hr_headers,
            json={"status": "in_progress", "assigned_to": alice.id},
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["status"] == "in_progress"
        assert data["assigned_to_id"] == alice.id

    def test_unknown_recommendation(self, client, hr_headers, investigation):
        response = client.put(
            f"/api/investigations/{investigation['id']}/recommendations/9999",
            headers=hr_headers,
            json={"status": "completed"},
        )
        assert response.status_code == 404
