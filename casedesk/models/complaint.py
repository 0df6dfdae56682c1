### Description ###
# CaseDesk - Multi-tenant HR Case Management API
# - Complaint Model -
# Author: CaseDesk Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
Complaint Model

A harassment report filed by an employee against another member of the same
tenant. Evidence attachments and the append-only timeline are child tables.
Status changes go through services.workflow, never by assigning `status`
directly.
"""

from datetime import datetime

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from casedesk.database import Base
from casedesk.models.enums import (
    ComplaintPriority,
    ComplaintSeverity,
    ComplaintStatus,
    UserRole,
)


class Complaint(Base):
    """Complaint model - one harassment report"""

    __tablename__ = "complaints"

    id = Column(Integer, primary_key=True, autoincrement=True)
    tenant_id = Column(Integer, ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False, index=True)
    complainant_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    accused_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    type = Column(String(50), nullable=False, index=True)
    severity = Column(String(20), default=ComplaintSeverity.MEDIUM.value, nullable=False)
    status = Column(String(20), default=ComplaintStatus.DRAFT.value, nullable=False, index=True)
    priority = Column(String(20), default=ComplaintPriority.NORMAL.value, nullable=False)

    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    location = Column(String(300), nullable=True)
    incident_date = Column(DateTime, nullable=False)
    reported_date = Column(DateTime, default=datetime.utcnow, nullable=False)
    is_confidential = Column(Boolean, default=True, nullable=False)

    # Assignment
    assigned_to_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    assigned_at = Column(DateTime, nullable=True)

    # Resolution
    resolution_outcome = Column(String(30), nullable=True)
    resolution_actions_taken = Column(JSON, default=list, nullable=False)
    resolution_notes = Column(Text, nullable=True)
    resolved_at = Column(DateTime, nullable=True)
    resolved_by_id = Column(Integer, ForeignKey("users.id"), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    complainant = relationship("User", foreign_keys=[complainant_id])
    accused = relationship("User", foreign_keys=[accused_id])
    assigned_to = relationship("User", foreign_keys=[assigned_to_id])
    resolved_by = relationship("User", foreign_keys=[resolved_by_id])
    timeline = relationship(
        "ComplaintTimelineEntry",
        back_populates="complaint",
        cascade="all, delete-orphan",
        order_by="ComplaintTimelineEntry.id",
    )
    evidence = relationship(
        "ComplaintEvidence",
        back_populates="complaint",
        cascade="all, delete-orphan",
        order_by="ComplaintEvidence.id",
    )

    def __repr__(self):
        return f"<Complaint(id={self.id}, status='{self.status}')>"

    @property
    def resolution(self) -> dict | None:
        """Resolution record, or None while unresolved"""
        if not (self.resolution_outcome or self.resolved_at):
            return None
        return {
            "outcome": self.resolution_outcome,
            "actions_taken": list(self.resolution_actions_taken or []),
            "notes": self.resolution_notes,
            "resolved_at": self.resolved_at,
            "resolved_by": self.resolved_by_id,
        }

    def can_user_access(self, user_id: int, role: str) -> bool:
        """
        Check if a user may see this complaint.

        Tenant Admin and RRHH see everything; otherwise only the complainant
        and the assigned investigator.
        """
        if role in (UserRole.TENANT_ADMIN.value, UserRole.HR.value):
            return True
        if self.complainant_id == user_id:
            return True
        if self.assigned_to_id is not None and self.assigned_to_id == user_id:
            return True
        return False

    def add_timeline_entry(
        self,
        action: str,
        user_id: int,
        notes: str | None = None,
        previous_status: str | None = None,
        new_status: str | None = None,
    ) -> "ComplaintTimelineEntry":
        entry = ComplaintTimelineEntry(
            action=action,
            user_id=user_id,
            timestamp=datetime.utcnow(),
            notes=notes,
            previous_status=previous_status,
            new_status=new_status,
        )
        self.timeline.append(entry)
        return entry


class ComplaintTimelineEntry(Base):
    """Append-only audit log entry for a complaint"""

    __tablename__ = "complaint_timeline"

    id = Column(Integer, primary_key=True, autoincrement=True)
    complaint_id = Column(Integer, ForeignKey("complaints.id", ondelete="CASCADE"), nullable=False, index=True)
    action = Column(String(30), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    timestamp = Column(DateTime, default=datetime.utcnow, nullable=False)
    notes = Column(String(1000), nullable=True)
    previous_status = Column(String(20), nullable=True)
    new_status = Column(String(20), nullable=True)

    complaint = relationship("Complaint", back_populates="timeline")
    user = relationship("User")


class ComplaintEvidence(Base):
    """Attachment metadata for a complaint (the file itself lives elsewhere)"""

    __tablename__ = "complaint_evidence"

    id = Column(Integer, primary_key=True, autoincrement=True)
    complaint_id = Column(Integer, ForeignKey("complaints.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(String(20), nullable=False)
    filename = Column(String(255), nullable=False)
    original_name = Column(String(255), nullable=False)
    url = Column(String(1000), nullable=False)
    size = Column(Integer, nullable=False)
    uploaded_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    uploaded_by_id = Column(Integer, ForeignKey("users.id"), nullable=False)

    complaint = relationship("Complaint", back_populates="evidence")
