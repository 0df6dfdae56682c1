### Description ###
# CaseDesk - Multi-tenant HR Case Management API
# - Authentication Schemas -
# Author: CaseDesk Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
Authentication Schemas

Pydantic models for login, token refresh and session endpoints.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from casedesk.schemas.user import UserResponse


class LoginRequest(BaseModel):
    """Login credentials (tenant comes from the X-Tenant-Slug header)"""

    email: str = Field(..., min_length=3, max_length=100, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    password: str = Field(..., min_length=6, max_length=100)


class RefreshRequest(BaseModel):
    # Optional so a missing token is reported as 400 by the service
    refresh_token: Optional[str] = None


class TenantBranding(BaseModel):
    logo_url: Optional[str] = None
    primary_color: str
    secondary_color: str


class TenantSummary(BaseModel):
    """Tenant details returned with a session"""

    id: int
    name: str
    slug: str
    subscription_plan: str
    subscription_status: str
    subscription_end: Optional[datetime] = None
    branding: TenantBranding

    class Config:
        from_attributes = True


class TokenPair(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Access token lifetime in seconds")


class AccessToken(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int


class LoginResponse(TokenPair):
    """Tokens plus user and tenant summaries"""

    user: UserResponse
    tenant: TenantSummary


class SessionResponse(BaseModel):
    """Current user and tenant for a valid access token"""

    user: UserResponse
    tenant: TenantSummary


class TokenVerification(BaseModel):
    valid: bool = True
    user_id: int
    tenant_id: int
    role: str
    expires_at: Optional[datetime] = None
