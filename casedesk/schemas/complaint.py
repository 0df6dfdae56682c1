### Description ###
# CaseDesk - Multi-tenant HR Case Management API
# - Complaint Schemas -
# Author: CaseDesk Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
Complaint Schemas

Pydantic models for complaint intake, workflow requests and responses.
Type, severity and priority are plain strings here; they are checked against
the tenant's resource catalog by the complaint service.
"""

from datetime import datetime
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from casedesk.schemas.user import UserSummary
from casedesk.utils.dates import naive_utc

COMPLAINT_STATUSES = Literal["draft", "submitted", "under_review", "investigating", "resolved", "closed"]
RESOLUTION_OUTCOMES = Literal["founded", "unfounded", "partially_founded", "insufficient_evidence"]
EVIDENCE_TYPES = Literal["document", "image", "video", "audio"]


# ========================================
# Requests
# ========================================

class ComplaintCreate(BaseModel):
    """File a complaint (the caller is the complainant)"""

    accused_id: int = Field(..., ge=1, description="User the complaint is about")
    type: str = Field(..., min_length=1, max_length=50, description="Complaint type key")
    severity: Optional[str] = Field(None, max_length=20)
    priority: Optional[str] = Field(None, max_length=20)
    title: str = Field(..., min_length=5, max_length=200)
    description: str = Field(..., min_length=20, max_length=5000)
    location: Optional[str] = Field(None, max_length=300)
    incident_date: datetime
    is_confidential: bool = True

    @field_validator("title", "description")
    @classmethod
    def strip_text(cls, value: str) -> str:
        return value.strip()

    @field_validator("incident_date")
    @classmethod
    def incident_not_in_future(cls, value: datetime) -> datetime:
        value = naive_utc(value)
        if value > datetime.utcnow():
            raise ValueError("Incident date cannot be in the future")
        return value


class ComplaintStatusUpdate(BaseModel):
    status: COMPLAINT_STATUSES
    notes: Optional[str] = Field(None, max_length=1000)


class AssignInvestigatorRequest(BaseModel):
    investigator_id: int = Field(..., ge=1)
    notes: Optional[str] = Field(None, max_length=1000)


class ComplaintEvidenceCreate(BaseModel):
    """Attachment metadata; the upload itself happens elsewhere"""

    type: EVIDENCE_TYPES
    filename: str = Field(..., min_length=1, max_length=255)
    original_name: str = Field(..., min_length=1, max_length=255)
    url: str = Field(..., min_length=1, max_length=1000)
    size: int = Field(..., ge=0)


class ResolveComplaintRequest(BaseModel):
    outcome: RESOLUTION_OUTCOMES
    actions_taken: List[str] = Field(default_factory=list)
    notes: Optional[str] = Field(None, max_length=2000)


# ========================================
# Responses
# ========================================

class TimelineEntryResponse(BaseModel):
    id: int
    action: str
    user_id: int
    timestamp: datetime
    notes: Optional[str] = None
    previous_status: Optional[str] = None
    new_status: Optional[str] = None

    class Config:
        from_attributes = True


class ComplaintEvidenceResponse(BaseModel):
    id: int
    type: str
    filename: str
    original_name: str
    url: str
    size: int
    uploaded_at: datetime
    uploaded_by_id: int

    class Config:
        from_attributes = True


class ResolutionResponse(BaseModel):
    outcome: Optional[str] = None
    actions_taken: List[str] = Field(default_factory=list)
    notes: Optional[str] = None
    resolved_at: Optional[datetime] = None
    resolved_by: Optional[int] = None


class ComplaintListItem(BaseModel):
    """Complaint row for list views"""

    id: int
    tenant_id: int
    complainant: UserSummary
    accused: UserSummary
    type: str
    severity: str
    priority: str
    status: str
    title: str
    incident_date: datetime
    reported_date: datetime
    is_confidential: bool
    assigned_to: Optional[UserSummary] = None
    assigned_at: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ComplaintResponse(ComplaintListItem):
    """Full complaint with evidence, resolution and timeline"""

    description: str
    location: Optional[str] = None
    resolution: Optional[ResolutionResponse] = None
    evidence: List[ComplaintEvidenceResponse] = Field(default_factory=list)
    timeline: List[TimelineEntryResponse] = Field(default_factory=list)


class ComplaintStats(BaseModel):
    total: int
    status_counts: Dict[str, int]
    type_counts: Dict[str, int]
    severity_counts: Dict[str, int]
