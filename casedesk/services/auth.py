### Description ###
# CaseDesk - Multi-tenant HR Case Management API
# - Authentication Service -
# Author: CaseDesk Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
Authentication Service

Password login with lockout, and access-token renewal from a refresh token.
"""

import logging

from sqlalchemy.orm import Session

from casedesk.models.tenant import Tenant
from casedesk.models.user import MAX_FAILED_LOGINS, User
from casedesk.services.errors import AccountLocked, AuthenticationFailed, PermissionDenied, ValidationFailed
from casedesk.services.tokens import (
    TokenError,
    create_access_token,
    create_refresh_token,
    decode_refresh_token,
)

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


def login(db: Session, tenant: Tenant, email: str, password: str) -> tuple[User, dict]:
    """
    Check credentials for a user of `tenant` and issue tokens.

    The failure counter is committed before a failed attempt is reported, so
    the fifth consecutive failure locks the account for 30 minutes.

    Returns:
        Tuple of (user, tokens dict)

    Raises:
        AuthenticationFailed: unknown email, inactive account or bad password
        AccountLocked: account inside its lockout window
    """
    user = (
        db.query(User)
        .filter(User.tenant_id == tenant.id, User.email == email.strip().lower())
        .first()
    )
    if user is None:
        logger.warning(f"Login failed for unknown email {email} in tenant {tenant.slug}")
        raise AuthenticationFailed(INVALID_CREDENTIALS)

    if user.is_locked():
        logger.warning(f"Login attempt on locked account {user.email} ({tenant.slug})")
        raise AccountLocked("Account temporarily locked. Try again later.")

    if not user.is_active:
        raise AuthenticationFailed("Account is inactive")

    if not user.check_password(password):
        locked = user.register_failed_login()
        db.commit()
        if locked:
            logger.warning(
                f"Account {user.email} ({tenant.slug}) locked after {MAX_FAILED_LOGINS} failed logins"
            )
        raise AuthenticationFailed(INVALID_CREDENTIALS)

    user.record_login()
    db.commit()
    db.refresh(user)

    logger.info(f"Login successful for {user.email} ({user.role}) in tenant {tenant.slug}")
    return user, issue_tokens(user)


def issue_tokens(user: User) -> dict:
    access_token, expires_in = create_access_token(user)
    return {
        "access_token": access_token,
        "refresh_token": create_refresh_token(user),
        "token_type": "bearer",
        "expires_in": expires_in,
    }


def refresh_access_token(db: Session, refresh_token: str | None) -> dict:
    """
    Exchange a refresh token for a new access token.

    Raises:
        ValidationFailed: token missing
        AuthenticationFailed: token invalid/expired, or user gone or inactive
        PermissionDenied: the user's tenant is not active
    """
    if not refresh_token:
        raise ValidationFailed("Refresh token is required")

    try:
        claims = decode_refresh_token(refresh_token)
    except TokenError:
        raise AuthenticationFailed("Invalid or expired refresh token")

    user = db.query(User).filter(User.id == claims.get("user_id")).first()
    if user is None or not user.is_active or user.tenant_id != claims.get("tenant_id"):
        raise AuthenticationFailed("Invalid user")

    if not user.tenant.is_active:
        raise PermissionDenied("Tenant is inactive")

    access_token, expires_in = create_access_token(user)
    logger.info(f"Access token renewed for {user.email}")
    return {"access_token": access_token, "token_type": "bearer", "expires_in": expires_in}
