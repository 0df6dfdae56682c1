### Description ###
# CaseDesk - Multi-tenant HR Case Management API
# - Case Workflow Engine -
# Author: CaseDesk Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
Case Workflow Engine

Status rules for complaints and investigations:
- Role-gated allow-lists of target statuses for complaints
- Investigation lifecycle guards (suspend/cancel/complete)
- One place that mutates a case status and appends its timeline entry

Complaint transitions are a flat role-capability check: a role may move a
complaint to any status in its allow-list regardless of the current status.

Functions here never touch the session; callers commit.
"""

import logging
from datetime import datetime

from casedesk.models.complaint import Complaint, ComplaintTimelineEntry
from casedesk.models.enums import (
    ComplaintAction,
    ComplaintStatus,
    ConclusionOutcome,
    InvestigationAction,
    InvestigationStatus,
    ResolutionOutcome,
    UserRole,
)
from casedesk.models.investigation import Investigation, InvestigationTimelineEntry
from casedesk.services.errors import PermissionDenied, ValidationFailed

logger = logging.getLogger(__name__)

# Roles that supervise every case in a tenant
CASE_SUPERVISOR_ROLES = frozenset({UserRole.HR.value, UserRole.TENANT_ADMIN.value})

# Roles that may be put in charge of an investigation
INVESTIGATOR_ROLES = frozenset(
    {UserRole.INVESTIGATOR.value, UserRole.HR.value, UserRole.TENANT_ADMIN.value}
)

COMPLAINT_STATUS_PERMISSIONS: dict[str, tuple[str, ...]] = {
    UserRole.EMPLOYEE.value: (
        ComplaintStatus.DRAFT.value,
        ComplaintStatus.SUBMITTED.value,
    ),
    UserRole.INVESTIGATOR.value: (
        ComplaintStatus.INVESTIGATING.value,
        ComplaintStatus.RESOLVED.value,
    ),
    UserRole.HR.value: (
        ComplaintStatus.SUBMITTED.value,
        ComplaintStatus.UNDER_REVIEW.value,
        ComplaintStatus.INVESTIGATING.value,
        ComplaintStatus.RESOLVED.value,
        ComplaintStatus.CLOSED.value,
    ),
    UserRole.TENANT_ADMIN.value: (
        ComplaintStatus.DRAFT.value,
        ComplaintStatus.SUBMITTED.value,
        ComplaintStatus.UNDER_REVIEW.value,
        ComplaintStatus.INVESTIGATING.value,
        ComplaintStatus.RESOLVED.value,
        ComplaintStatus.CLOSED.value,
    ),
}

# Reachable only through complete/cancel, never through a generic update
INVESTIGATION_DEDICATED_STATUSES = frozenset(
    {InvestigationStatus.COMPLETED.value, InvestigationStatus.CANCELLED.value}
)

INVESTIGATION_SUPERVISOR_STATUSES = frozenset({InvestigationStatus.SUSPENDED.value})


def is_case_supervisor(role: str) -> bool:
    return role in CASE_SUPERVISOR_ROLES


def allowed_complaint_statuses(role: str) -> tuple[str, ...]:
    """Target statuses a role may set on a complaint (empty for unknown roles)"""
    return COMPLAINT_STATUS_PERMISSIONS.get(role, ())


def can_set_complaint_status(role: str, new_status: str) -> bool:
    return new_status in allowed_complaint_statuses(role)


def ensure_complaint_status_allowed(role: str, new_status: str) -> None:
    """Raise PermissionDenied unless `role` may move a complaint to `new_status`"""
    if not can_set_complaint_status(role, new_status):
        raise PermissionDenied(f"Role '{role}' cannot change a complaint to status '{new_status}'")


def ensure_complaint_access(complaint: Complaint, actor_id: int, role: str) -> None:
    if not complaint.can_user_access(actor_id, role):
        raise PermissionDenied("You do not have access to this complaint")


def transition_complaint(
    complaint: Complaint,
    new_status: str,
    actor_id: int,
    notes: str | None = None,
    action: str = ComplaintAction.STATUS_CHANGED.value,
) -> ComplaintTimelineEntry:
    """
    Set a complaint's status and append exactly one timeline entry.

    Entering `resolved` stamps resolver and time unless already resolved.
    """
    previous_status = complaint.status
    complaint.status = new_status

    if new_status == ComplaintStatus.RESOLVED.value and complaint.resolved_at is None:
        complaint.resolved_at = datetime.utcnow()
        complaint.resolved_by_id = actor_id

    return complaint.add_timeline_entry(
        action,
        actor_id,
        notes=notes,
        previous_status=previous_status,
        new_status=new_status,
    )


def change_complaint_status(
    complaint: Complaint,
    new_status: str,
    actor_id: int,
    role: str,
    notes: str | None = None,
) -> ComplaintTimelineEntry:
    """
    Role-gated status change.

    Raises PermissionDenied when the actor cannot see the complaint or the
    role may not set `new_status`; the complaint is left untouched then.
    """
    ensure_complaint_access(complaint, actor_id, role)
    ensure_complaint_status_allowed(role, new_status)

    entry = transition_complaint(complaint, new_status, actor_id, notes=notes)
    logger.info(
        f"Complaint {complaint.id}: {entry.previous_status} -> {new_status} by user {actor_id}"
    )
    return entry


def complaint_outcome_for(conclusion_outcome: str) -> str:
    """Map an investigation conclusion onto the complaint resolution outcome"""
    if conclusion_outcome == ConclusionOutcome.SUBSTANTIATED.value:
        return ResolutionOutcome.FOUNDED.value
    return ResolutionOutcome.UNFOUNDED.value


# ========================================
# Investigations
# ========================================

def ensure_investigation_actor(investigation: Investigation, actor_id: int, role: str) -> None:
    """Only the assigned investigator works a case, unless the actor supervises"""
    if is_case_supervisor(role):
        return
    if investigation.investigator_id != actor_id:
        raise PermissionDenied("Only the assigned investigator can work on this investigation")


def ensure_case_supervisor(role: str, message: str) -> None:
    if not is_case_supervisor(role):
        raise PermissionDenied(message)


def ensure_investigation_open(investigation: Investigation) -> None:
    if investigation.status == InvestigationStatus.COMPLETED.value:
        raise ValidationFailed("The investigation is already completed")


def ensure_investigation_update_allowed(investigation: Investigation, new_status: str, role: str) -> None:
    """
    Guard a status change requested through a generic update.

    completed and cancelled have dedicated operations; suspended needs a
    supervisor.
    """
    ensure_investigation_open(investigation)
    if new_status in INVESTIGATION_DEDICATED_STATUSES:
        raise ValidationFailed(
            f"Status '{new_status}' can only be set through its dedicated operation"
        )
    if new_status in INVESTIGATION_SUPERVISOR_STATUSES:
        ensure_case_supervisor(role, "Only HR or a tenant admin can suspend investigations")


def transition_investigation(
    investigation: Investigation,
    new_status: str,
    actor_id: int,
    notes: str | None = None,
    action: str = InvestigationAction.STATUS_CHANGED.value,
) -> InvestigationTimelineEntry:
    """Set an investigation's status and append exactly one timeline entry"""
    previous_status = investigation.status
    investigation.status = new_status

    if new_status == InvestigationStatus.COMPLETED.value:
        investigation.actual_completion_date = datetime.utcnow()
    elif new_status == InvestigationStatus.CANCELLED.value:
        investigation.is_active = False

    return investigation.add_timeline_entry(
        action,
        actor_id,
        notes=notes or f"Status changed from {previous_status} to {new_status}",
        previous_status=previous_status,
        new_status=new_status,
    )
