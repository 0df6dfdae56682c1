### Description ###
# CaseDesk - Multi-tenant HR Case Management API
# - API Services Package -
# Author: CaseDesk Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
API Services Package

Business rules shared by every transport:
- workflow: complaint/investigation status engine
- complaints, investigations, users, resources: per-entity operations
- auth, tokens, tenants: login, JWTs, tenant lookup and licenses
"""

from .complaints import ComplaintService
from .errors import ServiceError
from .investigations import InvestigationService
from .resources import ResourceCatalog
from .users import UserService

__all__ = [
    "ComplaintService",
    "InvestigationService",
    "ResourceCatalog",
    "ServiceError",
    "UserService",
]
