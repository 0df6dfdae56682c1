### Description ###
# CaseDesk - Multi-tenant HR Case Management API
# - Investigation Service -
# Author: CaseDesk Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
Investigation Service

Opening, working and closing investigations. Operations that also touch the
parent complaint (opening and completion) change both rows in the same
session and commit once.

Cancelled investigations are inactive and behave as not found.
"""

import logging
from datetime import datetime
from typing import Any

from sqlalchemy.orm import Session

from casedesk.models.complaint import Complaint
from casedesk.models.enums import (
    ComplaintAction,
    ComplaintStatus,
    CustodyAction,
    InvestigationAction,
    InvestigationPriority,
    InvestigationStatus,
    RecommendationStatus,
    UserRole,
    values,
)
from casedesk.models.investigation import (
    Finding,
    Interview,
    Investigation,
    InvestigationEvidence,
    Recommendation,
)
from casedesk.models.user import User
from casedesk.services import workflow
from casedesk.services.errors import Conflict, NotFound, ValidationFailed

logger = logging.getLogger(__name__)

INVESTIGATION_SORT_FIELDS = {
    "created_at": Investigation.created_at,
    "updated_at": Investigation.updated_at,
    "estimated_completion_date": Investigation.estimated_completion_date,
    "priority": Investigation.priority,
    "status": Investigation.status,
}

UPDATABLE_FIELDS = ("priority", "estimated_completion_date", "scope", "objectives", "notes")


class InvestigationService:
    """Investigation operations for one session"""

    def __init__(self, db: Session):
        self.db = db

    # ========================================
    # Lookups
    # ========================================

    def _load(self, tenant_id: int, investigation_id: int) -> Investigation:
        investigation = (
            self.db.query(Investigation)
            .filter(
                Investigation.id == investigation_id,
                Investigation.tenant_id == tenant_id,
                Investigation.is_active.is_(True),
            )
            .first()
        )
        if investigation is None:
            raise NotFound("Investigation not found")
        return investigation

    def _load_for_work(self, actor: User, investigation_id: int) -> Investigation:
        investigation = self._load(actor.tenant_id, investigation_id)
        workflow.ensure_investigation_actor(investigation, actor.id, actor.role)
        return investigation

    def _active_user(self, tenant_id: int, user_id: int) -> User | None:
        return (
            self.db.query(User)
            .filter(User.id == user_id, User.tenant_id == tenant_id, User.is_active.is_(True))
            .first()
        )

    def get(self, actor: User, investigation_id: int) -> Investigation:
        return self._load_for_work(actor, investigation_id)

    def _scoped(self, actor: User):
        query = self.db.query(Investigation).filter(
            Investigation.tenant_id == actor.tenant_id, Investigation.is_active.is_(True)
        )
        if actor.role == UserRole.INVESTIGATOR.value:
            query = query.filter(Investigation.investigator_id == actor.id)
        return query

    def list_investigations(
        self,
        actor: User,
        *,
        status: str | None = None,
        priority: str | None = None,
        investigator_id: int | None = None,
        complaint_id: int | None = None,
        overdue_only: bool = False,
        sort_by: str = "created_at",
        sort_order: str = "desc",
        page: int = 1,
        limit: int = 10,
    ) -> tuple[list[Investigation], int]:
        """Active investigations; investigators only see their own"""
        query = self._scoped(actor)
        if status:
            query = query.filter(Investigation.status == status)
        if priority:
            query = query.filter(Investigation.priority == priority)
        if investigator_id is not None:
            query = query.filter(Investigation.investigator_id == investigator_id)
        if complaint_id is not None:
            query = query.filter(Investigation.complaint_id == complaint_id)
        if overdue_only:
            query = query.filter(
                Investigation.estimated_completion_date < datetime.utcnow(),
                Investigation.status != InvestigationStatus.COMPLETED.value,
            )

        total = query.count()
        column = INVESTIGATION_SORT_FIELDS.get(sort_by, Investigation.created_at)
        ordering = column.asc() if sort_order == "asc" else column.desc()
        investigations = query.order_by(ordering, Investigation.id).offset((page - 1) * limit).limit(limit).all()
        return investigations, total

    def stats(self, actor: User) -> dict[str, Any]:
        investigations = self._scoped(actor).all()

        by_status = {value: 0 for value in values(InvestigationStatus)}
        by_priority = {value: 0 for value in values(InvestigationPriority)}
        for investigation in investigations:
            by_status[investigation.status] = by_status.get(investigation.status, 0) + 1
            by_priority[investigation.priority] = by_priority.get(investigation.priority, 0) + 1

        total = len(investigations)
        avg_duration = (
            round(sum(i.duration_days for i in investigations) / total, 1) if total else 0
        )
        return {
            "overview": {
                "total": total,
                "pending": by_status[InvestigationStatus.PENDING.value],
                "in_progress": by_status[InvestigationStatus.IN_PROGRESS.value],
                "completed": by_status[InvestigationStatus.COMPLETED.value],
                "overdue": sum(1 for i in investigations if i.is_overdue),
                "avg_duration_days": avg_duration,
            },
            "by_status": by_status,
            "by_priority": by_priority,
        }

    # ========================================
    # Lifecycle
    # ========================================

    def create(self, actor: User, data: dict[str, Any]) -> Investigation:
        """
        Open an investigation and move its complaint to investigating.

        Raises:
            NotFound: complaint, or an active investigator-capable user
            Conflict: the complaint already has an active investigation
        """
        complaint = (
            self.db.query(Complaint)
            .filter(Complaint.id == data["complaint_id"], Complaint.tenant_id == actor.tenant_id)
            .first()
        )
        if complaint is None:
            raise NotFound("Complaint not found")

        investigator = self._active_user(actor.tenant_id, data["investigator_id"])
        if investigator is None or investigator.role not in workflow.INVESTIGATOR_ROLES:
            raise NotFound("Investigator not found or not allowed to investigate")

        existing = (
            self.db.query(Investigation.id)
            .filter(
                Investigation.complaint_id == complaint.id,
                Investigation.tenant_id == actor.tenant_id,
                Investigation.is_active.is_(True),
            )
            .first()
        )
        if existing is not None:
            raise Conflict("An active investigation already exists for this complaint")

        investigation = Investigation(
            tenant_id=actor.tenant_id,
            complaint_id=complaint.id,
            investigator_id=investigator.id,
            assigned_by_id=actor.id,
            status=InvestigationStatus.PENDING.value,
            priority=data.get("priority") or InvestigationPriority.NORMAL.value,
            estimated_completion_date=data["estimated_completion_date"],
            investigation_type=data.get("investigation_type") or "formal",
            methodology=data.get("methodology") or "mixed",
            scope=data["scope"],
            objectives=list(data["objectives"]),
            confidentiality_level=data.get("confidentiality_level") or "confidential",
            notes=data.get("notes"),
            is_active=True,
        )
        investigation.add_timeline_entry(
            InvestigationAction.CREATED.value,
            actor.id,
            notes="Investigation created",
            new_status=InvestigationStatus.PENDING.value,
        )
        self.db.add(investigation)

        complaint.assigned_to_id = investigator.id
        complaint.assigned_at = datetime.utcnow()
        workflow.transition_complaint(
            complaint,
            ComplaintStatus.INVESTIGATING.value,
            actor.id,
            notes=f"Investigation opened, investigator {investigator.full_name}",
            action=ComplaintAction.INVESTIGATION_STARTED.value,
        )

        self.db.commit()
        self.db.refresh(investigation)

        logger.info(f"Investigation {investigation.id} opened on complaint {complaint.id} by {actor.email}")
        return investigation

    def update(self, actor: User, investigation_id: int, changes: dict[str, Any]) -> Investigation:
        """
        Edit working fields and optionally move the status.

        Raises:
            ValidationFailed: investigation completed, or target status needs
                its dedicated operation
            PermissionDenied: suspending without HR/admin role
        """
        investigation = self._load_for_work(actor, investigation_id)
        workflow.ensure_investigation_open(investigation)

        new_status = changes.get("status")
        if new_status and new_status != investigation.status:
            workflow.ensure_investigation_update_allowed(investigation, new_status, actor.role)
            workflow.transition_investigation(investigation, new_status, actor.id)

        for field in UPDATABLE_FIELDS:
            if changes.get(field) is not None:
                setattr(investigation, field, changes[field])

        self.db.commit()
        self.db.refresh(investigation)

        logger.info(f"Investigation {investigation.id} updated by {actor.email}")
        return investigation

    def complete(self, actor: User, investigation_id: int, data: dict[str, Any]) -> Investigation:
        """
        Write the conclusion and resolve the parent complaint.

        substantiated maps to a founded complaint, every other outcome to
        unfounded.

        Raises:
            NotFound: a recommendation assignee is not an active user of the tenant
        """
        investigation = self._load_for_work(actor, investigation_id)
        workflow.ensure_investigation_open(investigation)

        for item in data.get("recommendations") or []:
            if item.get("assigned_to") is not None and self._active_user(actor.tenant_id, item["assigned_to"]) is None:
                raise NotFound("Assigned user not found")

        now = datetime.utcnow()
        outcome = data["outcome"]
        investigation.conclusion_outcome = outcome
        investigation.conclusion_summary = data["summary"]
        investigation.completed_by_id = actor.id
        investigation.completed_at = now
        for item in data.get("recommendations") or []:
            investigation.recommendations.append(
                Recommendation(
                    type=item["type"],
                    description=item["description"],
                    priority=item.get("priority") or "medium",
                    assigned_to_id=item.get("assigned_to"),
                    due_date=item.get("due_date"),
                    status=RecommendationStatus.PENDING.value,
                )
            )
        workflow.transition_investigation(
            investigation,
            InvestigationStatus.COMPLETED.value,
            actor.id,
            notes=f"Investigation completed with outcome: {outcome}",
            action=InvestigationAction.COMPLETED.value,
        )

        complaint = investigation.complaint
        complaint.resolution_outcome = workflow.complaint_outcome_for(outcome)
        complaint.resolution_notes = data["summary"]
        complaint.resolved_at = now
        complaint.resolved_by_id = actor.id
        workflow.transition_complaint(
            complaint,
            ComplaintStatus.RESOLVED.value,
            actor.id,
            notes=f"Resolved by investigation {investigation.id}",
            action=ComplaintAction.RESOLVED.value,
        )

        self.db.commit()
        self.db.refresh(investigation)

        logger.info(f"Investigation {investigation.id} completed by {actor.email} as {outcome}")
        return investigation

    def suspend(self, actor: User, investigation_id: int, reason: str | None = None) -> Investigation:
        investigation = self._load(actor.tenant_id, investigation_id)
        workflow.ensure_case_supervisor(actor.role, "Only HR or a tenant admin can suspend investigations")
        workflow.ensure_investigation_open(investigation)

        workflow.transition_investigation(
            investigation,
            InvestigationStatus.SUSPENDED.value,
            actor.id,
            notes=reason or "Investigation suspended",
            action=InvestigationAction.SUSPENDED.value,
        )
        self.db.commit()
        self.db.refresh(investigation)

        logger.info(f"Investigation {investigation.id} suspended by {actor.email}")
        return investigation

    def cancel(self, actor: User, investigation_id: int, reason: str | None = None) -> Investigation:
        investigation = self._load(actor.tenant_id, investigation_id)
        workflow.ensure_case_supervisor(actor.role, "Only HR or a tenant admin can cancel investigations")
        workflow.ensure_investigation_open(investigation)

        workflow.transition_investigation(
            investigation,
            InvestigationStatus.CANCELLED.value,
            actor.id,
            notes=reason or "Investigation cancelled",
            action=InvestigationAction.CANCELLED.value,
        )
        self.db.commit()
        self.db.refresh(investigation)

        logger.info(f"Investigation {investigation.id} cancelled by {actor.email}")
        return investigation

    # ========================================
    # Case file
    # ========================================

    def add_evidence(self, actor: User, investigation_id: int, data: dict[str, Any]) -> InvestigationEvidence:
        investigation = self._load_for_work(actor, investigation_id)

        evidence = InvestigationEvidence(
            type=data["type"],
            title=data["title"],
            description=data.get("description"),
            filename=data.get("filename"),
            url=data.get("url"),
            source=data["source"],
            relevance=data.get("relevance") or "medium",
            collected_by_id=actor.id,
            collected_date=datetime.utcnow(),
            chain_of_custody=[],
        )
        evidence.add_custody_entry(actor.id, CustodyAction.COLLECTED.value, "Evidence added to the investigation")
        investigation.evidence.append(evidence)
        investigation.add_timeline_entry(
            InvestigationAction.EVIDENCE_COLLECTED.value,
            actor.id,
            notes=f"Evidence added: {data['title']}",
        )
        self.db.commit()
        self.db.refresh(evidence)

        logger.info(f"Evidence {evidence.id} added to investigation {investigation.id} by {actor.email}")
        return evidence

    def add_custody_entry(
        self, actor: User, investigation_id: int, evidence_id: int, action: str, notes: str | None = None
    ) -> InvestigationEvidence:
        investigation = self._load_for_work(actor, investigation_id)
        evidence = next((e for e in investigation.evidence if e.id == evidence_id), None)
        if evidence is None:
            raise NotFound("Evidence not found")

        evidence.add_custody_entry(actor.id, action, notes)
        self.db.commit()
        self.db.refresh(evidence)
        return evidence

    def add_interview(self, actor: User, investigation_id: int, data: dict[str, Any]) -> Interview:
        investigation = self._load_for_work(actor, investigation_id)

        interviewee = self._active_user(actor.tenant_id, data["interviewee_id"])
        if interviewee is None:
            raise NotFound("Interviewee not found")

        interview = Interview(
            interviewee_id=interviewee.id,
            interviewer_id=actor.id,
            conducted_by_id=actor.id,
            interview_date=data["interview_date"],
            duration_minutes=data.get("duration_minutes"),
            location=data.get("location"),
            type=data["type"],
            summary=data["summary"],
            key_points=list(data.get("key_points") or []),
            follow_up_required=bool(data.get("follow_up_required")),
            follow_up_notes=data.get("follow_up_notes"),
            recording_url=data.get("recording_url"),
            transcript_url=data.get("transcript_url"),
        )
        investigation.interviews.append(interview)
        investigation.add_timeline_entry(
            InvestigationAction.INTERVIEW_CONDUCTED.value,
            actor.id,
            notes=f"Interview conducted with {interviewee.full_name}",
        )
        self.db.commit()
        self.db.refresh(interview)

        logger.info(f"Interview {interview.id} added to investigation {investigation.id} by {actor.email}")
        return interview

    def add_finding(self, actor: User, investigation_id: int, data: dict[str, Any]) -> Finding:
        """
        Raises:
            ValidationFailed: supporting_evidence lists ids from another investigation
        """
        investigation = self._load_for_work(actor, investigation_id)

        supporting = list(data.get("supporting_evidence") or [])
        known = {e.id for e in investigation.evidence}
        unknown = [evidence_id for evidence_id in supporting if evidence_id not in known]
        if unknown:
            raise ValidationFailed(
                "Supporting evidence must belong to this investigation",
                errors=[{"field": "supporting_evidence", "message": f"Unknown evidence ids: {unknown}"}],
            )

        finding = Finding(
            category=data["category"],
            description=data["description"],
            severity=data["severity"],
            supporting_evidence=supporting,
            recommendations=list(data.get("recommendations") or []),
            documented_by_id=actor.id,
            documented_at=datetime.utcnow(),
        )
        investigation.findings.append(finding)
        investigation.add_timeline_entry(
            InvestigationAction.FINDING_DOCUMENTED.value,
            actor.id,
            notes=f"Finding documented ({data['category']}, {data['severity']})",
        )
        self.db.commit()
        self.db.refresh(finding)

        logger.info(f"Finding {finding.id} added to investigation {investigation.id} by {actor.email}")
        return finding

    def update_recommendation(
        self, actor: User, investigation_id: int, recommendation_id: int, changes: dict[str, Any]
    ) -> Recommendation:
        investigation = self._load_for_work(actor, investigation_id)
        recommendation = next((r for r in investigation.recommendations if r.id == recommendation_id), None)
        if recommendation is None:
            raise NotFound("Recommendation not found")

        if changes.get("assigned_to") is not None:
            assignee = self._active_user(actor.tenant_id, changes["assigned_to"])
            if assignee is None:
                raise NotFound("Assigned user not found")
            recommendation.assigned_to_id = assignee.id
        if changes.get("due_date") is not None:
            recommendation.due_date = changes["due_date"]

        previous_status = recommendation.status
        if changes.get("status"):
            recommendation.status = changes["status"]

        investigation.add_timeline_entry(
            InvestigationAction.RECOMMENDATION_UPDATED.value,
            actor.id,
            notes=changes.get("notes") or f"Recommendation {recommendation.id}: {previous_status} -> {recommendation.status}",
        )
        self.db.commit()
        self.db.refresh(recommendation)
        return recommendation
