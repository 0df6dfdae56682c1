### Description ###
# CaseDesk - Multi-tenant HR Case Management API
# - Authentication Middleware -
# Author: CaseDesk Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
Authentication Middleware

Validates bearer access tokens and enforces role allow-lists:
- Access token must verify (signature, issuer, audience, expiry)
- User must exist in the token's tenant, be active and not locked
- Tenant must be active with a usable subscription
"""

from typing import Optional

from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from casedesk.database import get_db
from casedesk.models.enums import UserRole
from casedesk.models.tenant import Tenant
from casedesk.models.user import User
from casedesk.services.tokens import TokenError, TokenExpired, decode_access_token

# Bearer token security scheme
bearer_scheme = HTTPBearer(auto_error=False)


class AuthContext:
    """Authenticated caller attached to a request"""

    def __init__(self, user: User, tenant: Tenant, claims: dict):
        self.user = user
        self.tenant = tenant
        self.claims = claims

    @property
    def user_id(self) -> int:
        return self.user.id

    @property
    def tenant_id(self) -> int:
        return self.tenant.id

    @property
    def role(self) -> str:
        return self.user.role

    def has_role(self, *roles: str) -> bool:
        return self.user.role in roles


def _unauthorized(message: str, code: Optional[str] = None) -> HTTPException:
    detail = {"message": message, "code": code} if code else message
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    request: Request,
    bearer: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
    db: Session = Depends(get_db),
) -> AuthContext:
    """
    Authenticate the request from its bearer access token.

    Raises:
        HTTPException 401: token missing, invalid or expired; user unknown or inactive
        HTTPException 423: account locked
        HTTPException 403: tenant inactive or subscription not usable
    """
    if not bearer or not bearer.credentials:
        raise _unauthorized("Access token required")

    try:
        claims = decode_access_token(bearer.credentials)
    except TokenExpired:
        raise _unauthorized("Token has expired", code="TOKEN_EXPIRED")
    except TokenError:
        raise _unauthorized("Invalid token")

    user = (
        db.query(User)
        .filter(User.id == claims.get("user_id"), User.tenant_id == claims.get("tenant_id"))
        .first()
    )
    if user is None:
        raise _unauthorized("User not found")
    if not user.is_active:
        raise _unauthorized("Account is inactive")
    if user.is_locked():
        raise HTTPException(
            status_code=status.HTTP_423_LOCKED,
            detail={"message": "Account temporarily locked", "code": "ACCOUNT_LOCKED"},
        )

    tenant = user.tenant
    if not tenant.is_active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Tenant is inactive")
    if not tenant.has_active_subscription():
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Tenant subscription is not active")

    # Store for request logging
    request.state.user_email = user.email
    request.state.tenant_slug = tenant.slug

    return AuthContext(user=user, tenant=tenant, claims=claims)


def require_roles(*roles: str):
    """
    Dependency factory for role allow-lists.

    An empty allow-list admits any authenticated user.

    Usage:
        @router.post("/", dependencies=[Depends(require_roles("RRHH"))])
    """
    allowed = tuple(role.value if isinstance(role, UserRole) else role for role in roles)

    async def check_roles(auth: AuthContext = Security(get_current_user)) -> AuthContext:
        if allowed and auth.role not in allowed:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You do not have permission to perform this action",
            )
        return auth

    return check_roles


# Convenience dependencies
require_tenant_admin = require_roles(UserRole.TENANT_ADMIN)
require_supervisor = require_roles(UserRole.HR, UserRole.TENANT_ADMIN)
require_case_staff = require_roles(UserRole.INVESTIGATOR, UserRole.HR, UserRole.TENANT_ADMIN)
