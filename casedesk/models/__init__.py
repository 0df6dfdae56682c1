### Description ###
# CaseDesk - Multi-tenant HR Case Management API
# - Models Package -
# Author: CaseDesk Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
Models Package

SQLAlchemy models for the application database:
- Tenant: Organization account and license counter
- User: Tenant member with role and lockout state
- Complaint: Harassment report with timeline and evidence
- Investigation: Inquiry into a complaint with evidence, interviews,
  findings and recommendations
- Resource: Tenant-customizable catalog entry
"""

from casedesk.models.tenant import Tenant
from casedesk.models.user import User, hash_password, verify_password
from casedesk.models.complaint import Complaint, ComplaintEvidence, ComplaintTimelineEntry
from casedesk.models.investigation import (
    Finding,
    Interview,
    Investigation,
    InvestigationEvidence,
    InvestigationTimelineEntry,
    Recommendation,
)
from casedesk.models.resource import Resource

__all__ = [
    "Tenant",
    "User",
    "Complaint",
    "ComplaintEvidence",
    "ComplaintTimelineEntry",
    "Investigation",
    "InvestigationEvidence",
    "InvestigationTimelineEntry",
    "Interview",
    "Finding",
    "Recommendation",
    "Resource",
    "hash_password",
    "verify_password",
]
