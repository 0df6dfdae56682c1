### Description ###
# CaseDesk - Multi-tenant HR Case Management API
# - Investigation Schemas -
# Author: CaseDesk Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
Investigation Schemas

Pydantic models for investigation lifecycle requests, case-file entries
(evidence, interviews, findings, recommendations) and responses.
"""

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from casedesk.schemas.complaint import TimelineEntryResponse
from casedesk.schemas.user import UserSummary
from casedesk.utils.dates import naive_utc

PRIORITIES = Literal["low", "normal", "high", "urgent"]
# completed and cancelled are listed so the service can reject them with a clear message
STATUSES = Literal[
    "pending",
    "in_progress",
    "evidence_review",
    "interviews_pending",
    "analysis",
    "report_draft",
    "completed",
    "suspended",
    "cancelled",
]
CONCLUSION_OUTCOMES = Literal[
    "substantiated", "unsubstantiated", "partially_substantiated", "inconclusive", "unfounded"
]


def _objectives_not_blank(objectives: Optional[List[str]]) -> Optional[List[str]]:
    if objectives is None:
        return None
    cleaned = [objective.strip() for objective in objectives]
    if any(not objective for objective in cleaned):
        raise ValueError("Objectives must be non-empty strings")
    if any(len(objective) > 500 for objective in cleaned):
        raise ValueError("Each objective must be at most 500 characters")
    return cleaned


def _future_date(value: Optional[datetime]) -> Optional[datetime]:
    if value is None:
        return None
    value = naive_utc(value)
    if value <= datetime.utcnow():
        raise ValueError("Estimated completion date must be in the future")
    return value


# ========================================
# Lifecycle requests
# ========================================

class InvestigationCreate(BaseModel):
    """Open an investigation on a complaint"""

    complaint_id: int = Field(..., ge=1)
    investigator_id: int = Field(..., ge=1)
    priority: PRIORITIES = "normal"
    estimated_completion_date: datetime
    investigation_type: Literal["formal", "informal", "preliminary", "follow_up"] = "formal"
    methodology: Literal["interviews", "document_review", "observation", "mixed"] = "mixed"
    scope: str = Field(..., min_length=10, max_length=1000)
    objectives: List[str] = Field(..., min_length=1)
    confidentiality_level: Literal["public", "internal", "confidential", "highly_confidential"] = "confidential"
    notes: Optional[str] = Field(None, max_length=2000)

    @field_validator("objectives")
    @classmethod
    def check_objectives(cls, value):
        return _objectives_not_blank(value)

    @field_validator("estimated_completion_date")
    @classmethod
    def check_completion_date(cls, value):
        return _future_date(value)


class InvestigationUpdate(BaseModel):
    status: Optional[STATUSES] = None
    priority: Optional[PRIORITIES] = None
    estimated_completion_date: Optional[datetime] = None
    scope: Optional[str] = Field(None, min_length=10, max_length=1000)
    objectives: Optional[List[str]] = Field(None, min_length=1)
    notes: Optional[str] = Field(None, max_length=2000)

    @field_validator("objectives")
    @classmethod
    def check_objectives(cls, value):
        return _objectives_not_blank(value)

    @field_validator("estimated_completion_date")
    @classmethod
    def check_completion_date(cls, value):
        return _future_date(value)


class RecommendationCreate(BaseModel):
    type: Literal["disciplinary", "training", "policy", "procedural", "other"]
    description: str = Field(..., min_length=1, max_length=2000)
    priority: Literal["low", "medium", "high", "urgent"] = "medium"
    assigned_to: Optional[int] = Field(None, ge=1)
    due_date: Optional[datetime] = None

    @field_validator("due_date")
    @classmethod
    def normalize_due_date(cls, value):
        return naive_utc(value) if value is not None else None


class CompleteInvestigationRequest(BaseModel):
    outcome: CONCLUSION_OUTCOMES
    summary: str = Field(..., min_length=50, max_length=3000)
    recommendations: List[RecommendationCreate] = Field(default_factory=list)


class ReasonRequest(BaseModel):
    """Reason for suspending or cancelling"""

    reason: Optional[str] = Field(None, max_length=1000)


# ========================================
# Case-file requests
# ========================================

class EvidenceCreate(BaseModel):
    type: Literal["document", "interview", "email", "photo", "video", "other"]
    title: str = Field(..., min_length=3, max_length=200)
    description: Optional[str] = Field(None, max_length=1000)
    filename: Optional[str] = Field(None, max_length=255)
    url: Optional[str] = Field(None, max_length=1000, pattern=r"^https?://")
    source: str = Field(..., min_length=1, max_length=255)
    relevance: Literal["high", "medium", "low"] = "medium"


class CustodyEntryCreate(BaseModel):
    action: Literal["collected", "reviewed", "analyzed", "transferred"]
    notes: Optional[str] = Field(None, max_length=1000)


class InterviewCreate(BaseModel):
    interviewee_id: int = Field(..., ge=1)
    interview_date: datetime
    duration_minutes: Optional[int] = Field(None, ge=1, le=480)
    location: Optional[str] = Field(None, max_length=300)
    type: Literal["witness", "complainant", "accused", "expert", "other"]
    summary: str = Field(..., min_length=10, max_length=5000)
    key_points: List[str] = Field(default_factory=list)
    follow_up_required: bool = False
    follow_up_notes: Optional[str] = None
    recording_url: Optional[str] = Field(None, max_length=1000, pattern=r"^https?://")
    transcript_url: Optional[str] = Field(None, max_length=1000, pattern=r"^https?://")

    @field_validator("interview_date")
    @classmethod
    def normalize_date(cls, value):
        return naive_utc(value)


class FindingCreate(BaseModel):
    category: Literal["factual", "policy_violation", "procedural", "behavioral"]
    description: str = Field(..., min_length=10, max_length=2000)
    severity: Literal["low", "medium", "high", "critical"]
    supporting_evidence: List[int] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)


class RecommendationUpdate(BaseModel):
    status: Optional[Literal["pending", "in_progress", "completed", "cancelled"]] = None
    assigned_to: Optional[int] = Field(None, ge=1)
    due_date: Optional[datetime] = None
    notes: Optional[str] = Field(None, max_length=1000)

    @field_validator("due_date")
    @classmethod
    def normalize_due_date(cls, value):
        return naive_utc(value) if value is not None else None


# ========================================
# Responses
# ========================================

class EvidenceResponse(BaseModel):
    id: int
    type: str
    title: str
    description: Optional[str] = None
    filename: Optional[str] = None
    url: Optional[str] = None
    source: str
    collected_date: datetime
    collected_by_id: int
    relevance: str
    chain_of_custody: List[Dict[str, Any]] = Field(default_factory=list)

    class Config:
        from_attributes = True


class InterviewResponse(BaseModel):
    id: int
    interviewee_id: int
    interviewer_id: int
    interview_date: datetime
    duration_minutes: Optional[int] = None
    location: Optional[str] = None
    type: str
    summary: str
    key_points: List[str] = Field(default_factory=list)
    follow_up_required: bool
    follow_up_notes: Optional[str] = None
    recording_url: Optional[str] = None
    transcript_url: Optional[str] = None
    conducted_by_id: int

    class Config:
        from_attributes = True


class FindingResponse(BaseModel):
    id: int
    category: str
    description: str
    severity: str
    supporting_evidence: List[int] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    documented_by_id: int
    documented_at: datetime

    class Config:
        from_attributes = True


class RecommendationResponse(BaseModel):
    id: int
    type: str
    description: str
    priority: str
    assigned_to_id: Optional[int] = None
    due_date: Optional[datetime] = None
    status: str
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ConclusionResponse(BaseModel):
    outcome: str
    summary: Optional[str] = None
    completed_by: Optional[int] = None
    completed_at: Optional[datetime] = None


class InvestigationListItem(BaseModel):
    """Investigation row for list views"""

    id: int
    tenant_id: int
    complaint_id: int
    investigator: UserSummary
    assigned_by: UserSummary
    status: str
    priority: str
    estimated_completion_date: datetime
    actual_completion_date: Optional[datetime] = None
    investigation_type: str
    methodology: str
    confidentiality_level: str
    progress_percentage: int
    is_overdue: bool
    duration_days: int
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class InvestigationResponse(InvestigationListItem):
    """Full investigation with its case file"""

    scope: str
    objectives: List[str] = Field(default_factory=list)
    notes: Optional[str] = None
    conclusion: Optional[ConclusionResponse] = None
    evidence: List[EvidenceResponse] = Field(default_factory=list)
    interviews: List[InterviewResponse] = Field(default_factory=list)
    findings: List[FindingResponse] = Field(default_factory=list)
    recommendations: List[RecommendationResponse] = Field(default_factory=list)
    timeline: List[TimelineEntryResponse] = Field(default_factory=list)


class InvestigationOverview(BaseModel):
    total: int
    pending: int
    in_progress: int
    completed: int
    overdue: int
    avg_duration_days: float


class InvestigationStats(BaseModel):
    overview: InvestigationOverview
    by_status: Dict[str, int]
    by_priority: Dict[str, int]
