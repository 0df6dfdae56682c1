### Description ###
# CaseDesk - Multi-tenant HR Case Management API
# - Authentication Router -
# Author: CaseDesk Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
Authentication API Endpoints

- POST /auth/login - Password login (tenant from X-Tenant-Slug)
- POST /auth/refresh - Exchange a refresh token for an access token
- POST /auth/logout - End the session (tokens are stateless)
- GET /auth/me - Current user and tenant
- GET /auth/verify - Check an access token
"""

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from casedesk.database import get_db
from casedesk.middleware import AuthContext, get_current_user, get_request_tenant
from casedesk.middleware.rate_limit import get_auth_rate_limit, limiter
from casedesk.models.tenant import Tenant
from casedesk.schemas.auth import (
    AccessToken,
    LoginRequest,
    LoginResponse,
    RefreshRequest,
    SessionResponse,
    TenantSummary,
    TokenVerification,
)
from casedesk.schemas.responses import APIResponse
from casedesk.schemas.user import UserResponse
from casedesk.services import auth as auth_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/login",
    response_model=APIResponse[LoginResponse],
    summary="Login",
    description="Authenticate with email and password inside the tenant named by X-Tenant-Slug",
)
@limiter.limit(get_auth_rate_limit)
async def login(
    request: Request,
    credentials: LoginRequest,
    tenant: Tenant = Depends(get_request_tenant),
    db: Session = Depends(get_db),
) -> APIResponse[LoginResponse]:
    """
    Log in and receive tokens

    Five consecutive failures lock the account for 30 minutes.
    """
    user, tokens = auth_service.login(db, tenant, credentials.email, credentials.password)
    request.state.user_email = user.email

    return APIResponse(
        success=True,
        message="Login successful",
        data=LoginResponse(
            **tokens,
            user=UserResponse.model_validate(user),
            tenant=TenantSummary.model_validate(tenant),
        ),
    )


@router.post(
    "/refresh",
    response_model=APIResponse[AccessToken],
    summary="Refresh access token",
    description="Exchange a refresh token for a new access token",
)
@limiter.limit(get_auth_rate_limit)
async def refresh(
    request: Request,
    body: RefreshRequest,
    db: Session = Depends(get_db),
) -> APIResponse[AccessToken]:
    token = auth_service.refresh_access_token(db, body.refresh_token)
    return APIResponse(success=True, message="Token refreshed", data=AccessToken(**token))


@router.post(
    "/logout",
    response_model=APIResponse[None],
    summary="Logout",
    description="End the session. Tokens are stateless; clients discard them.",
)
async def logout(auth: AuthContext = Depends(get_current_user)) -> APIResponse[None]:
    logger.info(f"Logout for {auth.user.email} ({auth.tenant.slug})")
    return APIResponse(success=True, message="Logout successful")


@router.get(
    "/me",
    response_model=APIResponse[SessionResponse],
    summary="Current session",
    description="Return the authenticated user and tenant",
)
async def me(auth: AuthContext = Depends(get_current_user)) -> APIResponse[SessionResponse]:
    return APIResponse(
        success=True,
        data=SessionResponse(
            user=UserResponse.model_validate(auth.user),
            tenant=TenantSummary.model_validate(auth.tenant),
        ),
    )


@router.get(
    "/verify",
    response_model=APIResponse[TokenVerification],
    summary="Verify token",
    description="Check that the bearer access token is valid",
)
async def verify(auth: AuthContext = Depends(get_current_user)) -> APIResponse[TokenVerification]:
    exp = auth.claims.get("exp")
    return APIResponse(
        success=True,
        message="Token is valid",
        data=TokenVerification(
            user_id=auth.user_id,
            tenant_id=auth.tenant_id,
            role=auth.role,
            expires_at=datetime.utcfromtimestamp(exp) if exp else None,
        ),
    )
