### Description ###
# CaseDesk - Multi-tenant HR Case Management API
# - API Schemas Package -
# Author: CaseDesk Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
API Schemas Package

Contains Pydantic models for request/response validation:
- auth: login and token schemas
- user: user administration schemas
- complaint: complaint schemas
- investigation: investigation schemas
- resource: catalog schemas
- responses: Common response schemas
"""

from .responses import APIResponse, ErrorDetail, ErrorResponse, PaginatedResponse, PaginationMeta, paginated

__all__ = [
    "APIResponse",
    "ErrorDetail",
    "ErrorResponse",
    "PaginatedResponse",
    "PaginationMeta",
    "paginated",
]
