### Description ###
# CaseDesk - Multi-tenant HR Case Management API
# - Investigation Model -
# Author: CaseDesk Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
Investigation Model

A structured inquiry opened against a complaint. Evidence (with its chain of
custody), interviews, findings and conclusion recommendations are child
tables; the timeline is append-only.

At most one active investigation may reference a complaint; that rule is
enforced by services.investigations when opening one.
"""

import math
from datetime import datetime

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from casedesk.database import Base
from casedesk.models.enums import (
    ConfidentialityLevel,
    EvidenceRelevance,
    InvestigationPriority,
    InvestigationStatus,
    InvestigationType,
    Methodology,
    RecommendationPriority,
    RecommendationStatus,
)

PROGRESS_BY_STATUS = {
    InvestigationStatus.PENDING.value: 0,
    InvestigationStatus.IN_PROGRESS.value: 20,
    InvestigationStatus.EVIDENCE_REVIEW.value: 40,
    InvestigationStatus.INTERVIEWS_PENDING.value: 50,
    InvestigationStatus.ANALYSIS.value: 70,
    InvestigationStatus.REPORT_DRAFT.value: 85,
    InvestigationStatus.COMPLETED.value: 100,
    InvestigationStatus.SUSPENDED.value: 0,
    InvestigationStatus.CANCELLED.value: 0,
}


class Investigation(Base):
    """Investigation model - one inquiry into one complaint"""

    __tablename__ = "investigations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    tenant_id = Column(Integer, ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False, index=True)
    complaint_id = Column(Integer, ForeignKey("complaints.id"), nullable=False, index=True)
    investigator_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    assigned_by_id = Column(Integer, ForeignKey("users.id"), nullable=False)

    status = Column(String(30), default=InvestigationStatus.PENDING.value, nullable=False, index=True)
    priority = Column(String(20), default=InvestigationPriority.NORMAL.value, nullable=False)
    estimated_completion_date = Column(DateTime, nullable=False)
    actual_completion_date = Column(DateTime, nullable=True)
    investigation_type = Column(String(20), default=InvestigationType.FORMAL.value, nullable=False)
    methodology = Column(String(20), default=Methodology.MIXED.value, nullable=False)
    scope = Column(String(1000), nullable=False)
    objectives = Column(JSON, default=list, nullable=False)
    confidentiality_level = Column(
        String(30), default=ConfidentialityLevel.CONFIDENTIAL.value, nullable=False
    )
    is_active = Column(Boolean, default=True, nullable=False)
    notes = Column(String(2000), nullable=True)

    # Conclusion
    conclusion_outcome = Column(String(30), nullable=True)
    conclusion_summary = Column(Text, nullable=True)
    completed_by_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    completed_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    complaint = relationship("Complaint")
    investigator = relationship("User", foreign_keys=[investigator_id])
    assigned_by = relationship("User", foreign_keys=[assigned_by_id])
    completed_by = relationship("User", foreign_keys=[completed_by_id])
    timeline = relationship(
        "InvestigationTimelineEntry",
        back_populates="investigation",
        cascade="all, delete-orphan",
        order_by="InvestigationTimelineEntry.id",
    )
    evidence = relationship(
        "InvestigationEvidence",
        back_populates="investigation",
        cascade="all, delete-orphan",
        order_by="InvestigationEvidence.id",
    )
    interviews = relationship(
        "Interview",
        back_populates="investigation",
        cascade="all, delete-orphan",
        order_by="Interview.id",
    )
    findings = relationship(
        "Finding",
        back_populates="investigation",
        cascade="all, delete-orphan",
        order_by="Finding.id",
    )
    recommendations = relationship(
        "Recommendation",
        back_populates="investigation",
        cascade="all, delete-orphan",
        order_by="Recommendation.id",
    )

    def __repr__(self):
        return f"<Investigation(id={self.id}, complaint_id={self.complaint_id}, status='{self.status}')>"

    @property
    def progress_percentage(self) -> int:
        return PROGRESS_BY_STATUS.get(self.status, 0)

    @property
    def is_overdue(self) -> bool:
        if self.status == InvestigationStatus.COMPLETED.value:
            return False
        return self.estimated_completion_date is not None and self.estimated_completion_date < datetime.utcnow()

    @property
    def duration_days(self) -> int:
        """Whole days from creation to completion (or now), rounded up"""
        start = self.created_at or datetime.utcnow()
        end = self.actual_completion_date or datetime.utcnow()
        return max(0, math.ceil((end - start).total_seconds() / 86400))

    @property
    def conclusion(self) -> dict | None:
        if not self.conclusion_outcome:
            return None
        return {
            "outcome": self.conclusion_outcome,
            "summary": self.conclusion_summary,
            "completed_by": self.completed_by_id,
            "completed_at": self.completed_at,
        }

    def add_timeline_entry(
        self,
        action: str,
        user_id: int,
        notes: str | None = None,
        previous_status: str | None = None,
        new_status: str | None = None,
    ) -> "InvestigationTimelineEntry":
        entry = InvestigationTimelineEntry(
            action=action,
            user_id=user_id,
            timestamp=datetime.utcnow(),
            notes=notes,
            previous_status=previous_status,
            new_status=new_status,
        )
        self.timeline.append(entry)
        return entry


class InvestigationTimelineEntry(Base):
    """Append-only audit log entry for an investigation"""

    __tablename__ = "investigation_timeline"

    id = Column(Integer, primary_key=True, autoincrement=True)
    investigation_id = Column(
        Integer, ForeignKey("investigations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    action = Column(String(30), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    timestamp = Column(DateTime, default=datetime.utcnow, nullable=False)
    notes = Column(String(1000), nullable=True)
    previous_status = Column(String(30), nullable=True)
    new_status = Column(String(30), nullable=True)

    investigation = relationship("Investigation", back_populates="timeline")


class InvestigationEvidence(Base):
    """
    Evidence collected during an investigation.

    chain_of_custody is a JSON list of {user_id, action, timestamp, notes};
    append with add_custody_entry so the change is persisted.
    """

    __tablename__ = "investigation_evidence"

    id = Column(Integer, primary_key=True, autoincrement=True)
    investigation_id = Column(
        Integer, ForeignKey("investigations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    type = Column(String(20), nullable=False)
    title = Column(String(200), nullable=False)
    description = Column(String(1000), nullable=True)
    filename = Column(String(255), nullable=True)
    url = Column(String(1000), nullable=True)
    source = Column(String(255), nullable=False)
    collected_date = Column(DateTime, default=datetime.utcnow, nullable=False)
    collected_by_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    relevance = Column(String(10), default=EvidenceRelevance.MEDIUM.value, nullable=False)
    chain_of_custody = Column(JSON, default=list, nullable=False)

    investigation = relationship("Investigation", back_populates="evidence")

    def add_custody_entry(self, user_id: int, action: str, notes: str | None = None) -> dict:
        entry = {
            "user_id": user_id,
            "action": action,
            "timestamp": datetime.utcnow().isoformat(),
            "notes": notes,
        }
        # Reassign so SQLAlchemy sees the JSON column change
        self.chain_of_custody = list(self.chain_of_custody or []) + [entry]
        return entry


class Interview(Base):
    """Interview record"""

    __tablename__ = "investigation_interviews"

    id = Column(Integer, primary_key=True, autoincrement=True)
    investigation_id = Column(
        Integer, ForeignKey("investigations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    interviewee_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    interviewer_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    interview_date = Column(DateTime, nullable=False)
    duration_minutes = Column(Integer, nullable=True)
    location = Column(String(300), nullable=True)
    type = Column(String(20), nullable=False)
    summary = Column(Text, nullable=False)
    key_points = Column(JSON, default=list, nullable=False)
    follow_up_required = Column(Boolean, default=False, nullable=False)
    follow_up_notes = Column(Text, nullable=True)
    recording_url = Column(String(1000), nullable=True)
    transcript_url = Column(String(1000), nullable=True)
    conducted_by_id = Column(Integer, ForeignKey("users.id"), nullable=False)

    investigation = relationship("Investigation", back_populates="interviews")


class Finding(Base):
    """Documented finding; supporting_evidence holds evidence ids of the same investigation"""

    __tablename__ = "investigation_findings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    investigation_id = Column(
        Integer, ForeignKey("investigations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    category = Column(String(30), nullable=False)
    description = Column(String(2000), nullable=False)
    severity = Column(String(20), nullable=False)
    supporting_evidence = Column(JSON, default=list, nullable=False)
    recommendations = Column(JSON, default=list, nullable=False)
    documented_by_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    documented_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    investigation = relationship("Investigation", back_populates="findings")


class Recommendation(Base):
    """Conclusion recommendation, tracked to completion"""

    __tablename__ = "investigation_recommendations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    investigation_id = Column(
        Integer, ForeignKey("investigations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    type = Column(String(20), nullable=False)
    description = Column(Text, nullable=False)
    priority = Column(String(10), default=RecommendationPriority.MEDIUM.value, nullable=False)
    assigned_to_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    due_date = Column(DateTime, nullable=True)
    status = Column(String(20), default=RecommendationStatus.PENDING.value, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    investigation = relationship("Investigation", back_populates="recommendations")
