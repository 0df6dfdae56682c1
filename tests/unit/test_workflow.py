"""
Unit tests for the case workflow engine.

Tests role allow-lists, status changes with their timeline entries,
conclusion mapping and investigation guards.
"""

import pytest

from casedesk.models import Complaint, Investigation
from casedesk.services import workflow
from casedesk.services.errors import PermissionDenied, ValidationFailed


def make_complaint(status="draft", complainant_id=1, assigned_to_id=None):
    return Complaint(
        id=10,
        tenant_id=1,
        complainant_id=complainant_id,
        accused_id=2,
        status=status,
        assigned_to_id=assigned_to_id,
    )


def make_investigation(status="pending", investigator_id=3):
    return Investigation(id=20, tenant_id=1, complaint_id=10, investigator_id=investigator_id, status=status)


class TestComplaintStatusPermissions:
    """Test the role allow-lists."""

    @pytest.mark.parametrize(
        "role,allowed",
        [
            ("Empleado", {"draft", "submitted"}),
            ("Investigador", {"investigating", "resolved"}),
            ("RRHH", {"submitted", "under_review", "investigating", "resolved", "closed"}),
            ("Tenant Admin", {"draft", "submitted", "under_review", "investigating", "resolved", "closed"}),
        ],
    )
    def test_allowed_statuses(self, role, allowed):
        assert set(workflow.allowed_complaint_statuses(role)) == allowed

    def test_unknown_role_has_no_statuses(self):
        assert workflow.allowed_complaint_statuses("Contractor") == ()
        assert workflow.can_set_complaint_status("Contractor", "draft") is False

    def test_employee_cannot_resolve(self):
        with pytest.raises(PermissionDenied):
            workflow.ensure_complaint_status_allowed("Empleado", "resolved")

    def test_hr_cannot_return_to_draft(self):
        assert workflow.can_set_complaint_status("RRHH", "draft") is False


class TestChangeComplaintStatus:
    """Test role-gated status changes."""

    def test_records_one_timeline_entry(self):
        complaint = make_complaint()
        entry = workflow.change_complaint_status(complaint, "submitted", actor_id=1, role="Empleado")

        assert complaint.status == "submitted"
        assert len(complaint.timeline) == 1
        assert entry.previous_status == "draft"
        assert entry.new_status == "submitted"
        assert entry.action == "status_changed"
        assert entry.user_id == 1

    def test_denied_change_leaves_complaint_untouched(self):
        complaint = make_complaint()
        with pytest.raises(PermissionDenied):
            workflow.change_complaint_status(complaint, "resolved", actor_id=1, role="Empleado")

        assert complaint.status == "draft"
        assert len(complaint.timeline) == 0

    def test_flat_check_ignores_current_status(self):
        """Any status in the allow-list is reachable from any current status."""
        complaint = make_complaint(status="closed")
        workflow.change_complaint_status(complaint, "draft", actor_id=99, role="Tenant Admin")
        assert complaint.status == "draft"

    def test_outsider_cannot_access(self):
        complaint = make_complaint(complainant_id=1)
        with pytest.raises(PermissionDenied):
            workflow.change_complaint_status(complaint, "submitted", actor_id=5, role="Empleado")

    def test_assigned_investigator_can_access(self):
        complaint = make_complaint(status="under_review", assigned_to_id=3)
        workflow.change_complaint_status(complaint, "investigating", actor_id=3, role="Investigador")
        assert complaint.status == "investigating"

    def test_resolving_stamps_resolver(self):
        complaint = make_complaint(status="investigating")
        workflow.change_complaint_status(complaint, "resolved", actor_id=7, role="RRHH")

        assert complaint.resolved_by_id == 7
        assert complaint.resolved_at is not None


class TestConclusionMapping:
    """Test investigation conclusion to complaint outcome mapping."""

    def test_substantiated_is_founded(self):
        assert workflow.complaint_outcome_for("substantiated") == "founded"

    @pytest.mark.parametrize(
        "outcome", ["unsubstantiated", "partially_substantiated", "inconclusive", "unfounded"]
    )
    def test_everything_else_is_unfounded(self, outcome):
        assert workflow.complaint_outcome_for(outcome) == "unfounded"


class TestInvestigationGuards:
    """Test investigation lifecycle guards."""

    def test_other_investigator_denied(self):
        investigation = make_investigation(investigator_id=3)
        with pytest.raises(PermissionDenied):
            workflow.ensure_investigation_actor(investigation, actor_id=4, role="Investigador")

    def test_supervisor_allowed_on_any_case(self):
        investigation = make_investigation(investigator_id=3)
        workflow.ensure_investigation_actor(investigation, actor_id=4, role="RRHH")

    @pytest.mark.parametrize("status", ["completed", "cancelled"])
    def test_dedicated_statuses_rejected_in_update(self, status):
        investigation = make_investigation()
        with pytest.raises(ValidationFailed):
            workflow.ensure_investigation_update_allowed(investigation, status, "Tenant Admin")

    def test_investigator_cannot_suspend(self):
        investigation = make_investigation()
        with pytest.raises(PermissionDenied):
            workflow.ensure_investigation_update_allowed(investigation, "suspended", "Investigador")

    def test_completed_investigation_is_closed(self):
        investigation = make_investigation(status="completed")
        with pytest.raises(ValidationFailed):
            workflow.ensure_investigation_update_allowed(investigation, "analysis", "Tenant Admin")

    def test_transition_to_completed_sets_completion_date(self):
        investigation = make_investigation(status="report_draft")
        entry = workflow.transition_investigation(investigation, "completed", actor_id=3)

        assert investigation.actual_completion_date is not None
        assert entry.previous_status == "report_draft"
        assert entry.notes == "Status changed from report_draft to completed"

    def test_cancel_deactivates(self):
        investigation = make_investigation()
        investigation.is_active = True
        workflow.transition_investigation(investigation, "cancelled", actor_id=3)
        assert investigation.is_active is False
