### Description ###
# CaseDesk - Multi-tenant HR Case Management API
# - Domain Enumerations -
# Author: CaseDesk Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
Domain Enumerations

Built-in vocabularies shared by models, schemas and the workflow engine.
Values are the stored/serialized strings.
"""

from enum import Enum


class UserRole(str, Enum):
    EMPLOYEE = "Empleado"
    HR = "RRHH"
    INVESTIGATOR = "Investigador"
    TENANT_ADMIN = "Tenant Admin"


class SubscriptionPlan(str, Enum):
    BASIC = "Basic"
    STANDARD = "Standard"
    PREMIUM = "Premium"


class SubscriptionStatus(str, Enum):
    ACTIVE = "active"
    TRIAL = "trial"
    SUSPENDED = "suspended"
    CANCELLED = "cancelled"


class TenantStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    PENDING = "pending"


class ComplaintType(str, Enum):
    SEXUAL = "sexual"
    PSYCHOLOGICAL = "psychological"
    DISCRIMINATION = "discrimination"
    OTHER = "other"


class ComplaintSeverity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ComplaintPriority(str, Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"


class ComplaintStatus(str, Enum):
    DRAFT = "draft"
    SUBMITTED = "submitted"
    UNDER_REVIEW = "under_review"
    INVESTIGATING = "investigating"
    RESOLVED = "resolved"
    CLOSED = "closed"


class ResolutionOutcome(str, Enum):
    FOUNDED = "founded"
    UNFOUNDED = "unfounded"
    PARTIALLY_FOUNDED = "partially_founded"
    INSUFFICIENT_EVIDENCE = "insufficient_evidence"


class ComplaintAction(str, Enum):
    CREATED = "created"
    SUBMITTED = "submitted"
    ASSIGNED = "assigned"
    INVESTIGATION_STARTED = "investigation_started"
    EVIDENCE_ADDED = "evidence_added"
    STATUS_CHANGED = "status_changed"
    RESOLVED = "resolved"
    CLOSED = "closed"


class EvidenceType(str, Enum):
    DOCUMENT = "document"
    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"


class InvestigationStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    EVIDENCE_REVIEW = "evidence_review"
    INTERVIEWS_PENDING = "interviews_pending"
    ANALYSIS = "analysis"
    REPORT_DRAFT = "report_draft"
    COMPLETED = "completed"
    SUSPENDED = "suspended"
    CANCELLED = "cancelled"


class InvestigationPriority(str, Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"


class InvestigationType(str, Enum):
    FORMAL = "formal"
    INFORMAL = "informal"
    PRELIMINARY = "preliminary"
    FOLLOW_UP = "follow_up"


class Methodology(str, Enum):
    INTERVIEWS = "interviews"
    DOCUMENT_REVIEW = "document_review"
    OBSERVATION = "observation"
    MIXED = "mixed"


class ConfidentialityLevel(str, Enum):
    PUBLIC = "public"
    INTERNAL = "internal"
    CONFIDENTIAL = "confidential"
    HIGHLY_CONFIDENTIAL = "highly_confidential"


class InvestigationAction(str, Enum):
    CREATED = "created"
    ASSIGNED = "assigned"
    STARTED = "started"
    EVIDENCE_COLLECTED = "evidence_collected"
    INTERVIEW_CONDUCTED = "interview_conducted"
    FINDING_DOCUMENTED = "finding_documented"
    ANALYSIS_COMPLETED = "analysis_completed"
    REPORT_DRAFTED = "report_drafted"
    COMPLETED = "completed"
    SUSPENDED = "suspended"
    CANCELLED = "cancelled"
    STATUS_CHANGED = "status_changed"
    RECOMMENDATION_UPDATED = "recommendation_updated"


class InvestigationEvidenceType(str, Enum):
    DOCUMENT = "document"
    INTERVIEW = "interview"
    EMAIL = "email"
    PHOTO = "photo"
    VIDEO = "video"
    OTHER = "other"


class EvidenceRelevance(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class CustodyAction(str, Enum):
    COLLECTED = "collected"
    REVIEWED = "reviewed"
    ANALYZED = "analyzed"
    TRANSFERRED = "transferred"


class InterviewType(str, Enum):
    WITNESS = "witness"
    COMPLAINANT = "complainant"
    ACCUSED = "accused"
    EXPERT = "expert"
    OTHER = "other"


class FindingCategory(str, Enum):
    FACTUAL = "factual"
    POLICY_VIOLATION = "policy_violation"
    PROCEDURAL = "procedural"
    BEHAVIORAL = "behavioral"


class FindingSeverity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ConclusionOutcome(str, Enum):
    SUBSTANTIATED = "substantiated"
    UNSUBSTANTIATED = "unsubstantiated"
    PARTIALLY_SUBSTANTIATED = "partially_substantiated"
    INCONCLUSIVE = "inconclusive"
    UNFOUNDED = "unfounded"


class RecommendationType(str, Enum):
    DISCIPLINARY = "disciplinary"
    TRAINING = "training"
    POLICY = "policy"
    PROCEDURAL = "procedural"
    OTHER = "other"


class RecommendationPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class RecommendationStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ResourceCategory(str, Enum):
    COMPLAINT_TYPES = "complaint_types"
    COMPLAINT_SEVERITY = "complaint_severity"
    COMPLAINT_PRIORITY = "complaint_priority"
    COMPLAINT_STATUS = "complaint_status"
    USER_ROLES = "user_roles"
    EVIDENCE_TYPES = "evidence_types"
    RESOLUTION_OUTCOMES = "resolution_outcomes"
    TIMELINE_ACTIONS = "timeline_actions"


def values(enum_cls) -> list[str]:
    """Stored values of an enumeration, in declaration order"""
    return [member.value for member in enum_cls]
