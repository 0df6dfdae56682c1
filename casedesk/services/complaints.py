### Description ###
# CaseDesk - Multi-tenant HR Case Management API
# - Complaint Service -
# Author: CaseDesk Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
Complaint Service

Complaint intake, role-scoped listing, status changes, investigator
assignment, evidence and resolution. Every status change is delegated to
services.workflow so that each one leaves exactly one timeline entry.
"""

import logging
from datetime import datetime
from typing import Any

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from casedesk.models.complaint import Complaint, ComplaintEvidence, ComplaintTimelineEntry
from casedesk.models.enums import (
    ComplaintAction,
    ComplaintPriority,
    ComplaintSeverity,
    ComplaintStatus,
    ComplaintType,
    ResourceCategory,
    UserRole,
    values,
)
from casedesk.models.user import User
from casedesk.services import workflow
from casedesk.services.errors import NotFound, PermissionDenied, ValidationFailed
from casedesk.services.resources import ResourceCatalog

logger = logging.getLogger(__name__)

COMPLAINT_SORT_FIELDS = {
    "created_at": Complaint.created_at,
    "updated_at": Complaint.updated_at,
    "incident_date": Complaint.incident_date,
    "reported_date": Complaint.reported_date,
    "severity": Complaint.severity,
    "priority": Complaint.priority,
    "status": Complaint.status,
    "title": Complaint.title,
}

# Form fields checked against the tenant catalog
CATALOG_FIELDS = (
    ("type", ResourceCategory.COMPLAINT_TYPES.value),
    ("severity", ResourceCategory.COMPLAINT_SEVERITY.value),
    ("priority", ResourceCategory.COMPLAINT_PRIORITY.value),
)


class ComplaintService:
    """Complaint operations for one session"""

    def __init__(self, db: Session):
        self.db = db
        self.catalog = ResourceCatalog(db)

    # ========================================
    # Lookups
    # ========================================

    def _load(self, tenant_id: int, complaint_id: int) -> Complaint:
        complaint = (
            self.db.query(Complaint)
            .filter(Complaint.id == complaint_id, Complaint.tenant_id == tenant_id)
            .first()
        )
        if complaint is None:
            raise NotFound("Complaint not found")
        return complaint

    def _active_user(self, tenant_id: int, user_id: int, roles: tuple[str, ...] | None = None) -> User | None:
        query = self.db.query(User).filter(
            User.id == user_id, User.tenant_id == tenant_id, User.is_active.is_(True)
        )
        if roles:
            query = query.filter(User.role.in_(roles))
        return query.first()

    def get(self, actor: User, complaint_id: int) -> Complaint:
        complaint = self._load(actor.tenant_id, complaint_id)
        workflow.ensure_complaint_access(complaint, actor.id, actor.role)
        return complaint

    def timeline(self, actor: User, complaint_id: int) -> list[ComplaintTimelineEntry]:
        return list(self.get(actor, complaint_id).timeline)

    # ========================================
    # Intake and listing
    # ========================================

    def _check_catalog_values(self, tenant_id: int, data: dict[str, Any]) -> None:
        errors = []
        for field, category in CATALOG_FIELDS:
            value = data.get(field)
            if value is not None and not self.catalog.is_allowed_value(tenant_id, category, value):
                errors.append({"field": field, "message": f"'{value}' is not a valid {field}"})
        if errors:
            raise ValidationFailed("Invalid input data", errors=errors)

    def create(self, actor: User, data: dict[str, Any]) -> Complaint:
        """
        File a complaint with the actor as complainant.

        Raises:
            NotFound: accused is not an active user of the tenant
            ValidationFailed: accused is the actor, or a catalog value is unknown
        """
        accused = self._active_user(actor.tenant_id, data["accused_id"])
        if accused is None:
            raise NotFound("Accused user not found")
        if accused.id == actor.id:
            raise ValidationFailed("You cannot file a complaint against yourself")

        self._check_catalog_values(actor.tenant_id, data)

        complaint = Complaint(
            tenant_id=actor.tenant_id,
            complainant_id=actor.id,
            accused_id=accused.id,
            type=data["type"],
            severity=data.get("severity") or ComplaintSeverity.MEDIUM.value,
            priority=data.get("priority") or ComplaintPriority.NORMAL.value,
            title=data["title"],
            description=data["description"],
            location=data.get("location"),
            incident_date=data["incident_date"],
            is_confidential=data.get("is_confidential", True),
            status=ComplaintStatus.DRAFT.value,
            resolution_actions_taken=[],
        )
        complaint.add_timeline_entry(
            ComplaintAction.CREATED.value,
            actor.id,
            notes="Complaint created",
            new_status=ComplaintStatus.DRAFT.value,
        )
        self.db.add(complaint)
        self.db.commit()
        self.db.refresh(complaint)

        logger.info(f"Complaint {complaint.id} created by {actor.email}")
        return complaint

    def list_complaints(
        self,
        actor: User,
        *,
        status: str | None = None,
        type: str | None = None,
        severity: str | None = None,
        priority: str | None = None,
        assigned_to: int | None = None,
        complainant_id: int | None = None,
        accused_id: int | None = None,
        sort_by: str = "created_at",
        sort_order: str = "desc",
        page: int = 1,
        limit: int = 10,
    ) -> tuple[list[Complaint], int]:
        """
        Complaints visible to the actor.

        Employees see their own, investigators what they filed or were
        assigned, HR and tenant admins everything in the tenant.
        """
        query = self.db.query(Complaint).filter(Complaint.tenant_id == actor.tenant_id)
        if actor.role == UserRole.EMPLOYEE.value:
            query = query.filter(Complaint.complainant_id == actor.id)
        elif actor.role == UserRole.INVESTIGATOR.value:
            query = query.filter(
                or_(Complaint.assigned_to_id == actor.id, Complaint.complainant_id == actor.id)
            )

        filters = (
            (Complaint.status, status),
            (Complaint.type, type),
            (Complaint.severity, severity),
            (Complaint.priority, priority),
            (Complaint.assigned_to_id, assigned_to),
            (Complaint.complainant_id, complainant_id),
            (Complaint.accused_id, accused_id),
        )
        for column, value in filters:
            if value is not None:
                query = query.filter(column == value)

        total = query.count()
        column = COMPLAINT_SORT_FIELDS.get(sort_by, Complaint.created_at)
        ordering = column.asc() if sort_order == "asc" else column.desc()
        complaints = query.order_by(ordering, Complaint.id).offset((page - 1) * limit).limit(limit).all()
        return complaints, total

    def stats(self, tenant_id: int) -> dict[str, Any]:
        """Counts by status, type and severity, zero-filled for built-in values"""

        def counts(column, defaults: list[str]) -> dict[str, int]:
            result = {value: 0 for value in defaults}
            rows = (
                self.db.query(column, func.count(Complaint.id))
                .filter(Complaint.tenant_id == tenant_id)
                .group_by(column)
                .all()
            )
            for value, count in rows:
                result[value] = count
            return result

        status_counts = counts(Complaint.status, values(ComplaintStatus))
        return {
            "total": sum(status_counts.values()),
            "status_counts": status_counts,
            "type_counts": counts(Complaint.type, values(ComplaintType)),
            "severity_counts": counts(Complaint.severity, values(ComplaintSeverity)),
        }

    # ========================================
    # Workflow operations
    # ========================================

    def change_status(self, actor: User, complaint_id: int, new_status: str, notes: str | None = None) -> Complaint:
        complaint = self._load(actor.tenant_id, complaint_id)
        workflow.change_complaint_status(complaint, new_status, actor.id, actor.role, notes=notes)
        self.db.commit()
        self.db.refresh(complaint)
        return complaint

    def assign_investigator(
        self, actor: User, complaint_id: int, investigator_id: int, notes: str | None = None
    ) -> Complaint:
        """
        Put an investigator in charge and move the complaint to investigating.

        Raises:
            PermissionDenied: actor is not HR or tenant admin
            NotFound: complaint, or an active Investigador with that id
        """
        complaint = self._load(actor.tenant_id, complaint_id)
        workflow.ensure_case_supervisor(actor.role, "Only HR or a tenant admin can assign investigators")

        investigator = self._active_user(actor.tenant_id, investigator_id, roles=(UserRole.INVESTIGATOR.value,))
        if investigator is None:
            raise NotFound("Investigator not found or not valid")

        complaint.assigned_to_id = investigator.id
        complaint.assigned_at = datetime.utcnow()
        workflow.transition_complaint(
            complaint,
            ComplaintStatus.INVESTIGATING.value,
            actor.id,
            notes=notes or f"Assigned to {investigator.full_name}",
            action=ComplaintAction.ASSIGNED.value,
        )
        self.db.commit()
        self.db.refresh(complaint)

        logger.info(f"Investigator {investigator.email} assigned to complaint {complaint.id} by {actor.email}")
        return complaint

    def add_evidence(self, actor: User, complaint_id: int, data: dict[str, Any]) -> Complaint:
        complaint = self.get(actor, complaint_id)
        complaint.evidence.append(
            ComplaintEvidence(
                type=data["type"],
                filename=data["filename"],
                original_name=data["original_name"],
                url=data["url"],
                size=data["size"],
                uploaded_by_id=actor.id,
                uploaded_at=datetime.utcnow(),
            )
        )
        complaint.add_timeline_entry(
            ComplaintAction.EVIDENCE_ADDED.value,
            actor.id,
            notes=f"Evidence added: {data['original_name']}",
        )
        self.db.commit()
        self.db.refresh(complaint)

        logger.info(f"Evidence added to complaint {complaint.id} by {actor.email}")
        return complaint

    def resolve(self, actor: User, complaint_id: int, data: dict[str, Any]) -> Complaint:
        """
        Record the resolution and move the complaint to resolved.

        Investigators may only resolve complaints assigned to them.
        """
        complaint = self._load(actor.tenant_id, complaint_id)
        if actor.role not in workflow.INVESTIGATOR_ROLES:
            raise PermissionDenied("You do not have permission to resolve complaints")
        if actor.role == UserRole.INVESTIGATOR.value and complaint.assigned_to_id != actor.id:
            raise PermissionDenied("You can only resolve complaints assigned to you")

        complaint.resolution_outcome = data["outcome"]
        complaint.resolution_actions_taken = list(data.get("actions_taken") or [])
        complaint.resolution_notes = data.get("notes")
        complaint.resolved_at = datetime.utcnow()
        complaint.resolved_by_id = actor.id
        workflow.transition_complaint(
            complaint,
            ComplaintStatus.RESOLVED.value,
            actor.id,
            notes=data.get("notes"),
            action=ComplaintAction.RESOLVED.value,
        )
        self.db.commit()
        self.db.refresh(complaint)

        logger.info(f"Complaint {complaint.id} resolved by {actor.email} as {data['outcome']}")
        return complaint
