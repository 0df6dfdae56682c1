### Description ###
# CaseDesk - Multi-tenant HR Case Management API
# - API Middleware Package -
# Author: CaseDesk Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
API Middleware Package

Contains middleware and request dependencies:
- auth: bearer token validation and role allow-lists
- tenant: X-Tenant-Slug resolution for login
- logging: Request/response logging
- rate_limit: slowapi limiter
"""

from .auth import (
    AuthContext,
    get_current_user,
    require_case_staff,
    require_roles,
    require_supervisor,
    require_tenant_admin,
)
from .logging import RequestLoggingMiddleware
from .tenant import get_request_tenant

__all__ = [
    "AuthContext",
    "RequestLoggingMiddleware",
    "get_current_user",
    "get_request_tenant",
    "require_case_staff",
    "require_roles",
    "require_supervisor",
    "require_tenant_admin",
]
