### Description ###
# CaseDesk - Multi-tenant HR Case Management API
# - Token Service -
# Author: CaseDesk Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
Token Service

Signs and verifies JWTs with PyJWT. Access and refresh tokens share the
signing secret but use separate audiences, so one can never stand in for the
other.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from casedesk.config import get_api_settings

ACCESS_AUDIENCE = "casedesk-users"
REFRESH_AUDIENCE = "casedesk-refresh"


class TokenError(Exception):
    """Token is malformed, has a bad signature or the wrong audience/issuer"""


class TokenExpired(TokenError):
    """Token signature is valid but its exp has passed"""


def _encode(claims: dict[str, Any], audience: str, lifetime: timedelta) -> str:
    settings = get_api_settings()
    now = datetime.now(timezone.utc)
    payload = {
        **claims,
        "iss": settings.jwt_issuer,
        "aud": audience,
        "iat": now,
        "exp": now + lifetime,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def _decode(token: str, audience: str) -> dict[str, Any]:
    settings = get_api_settings()
    try:
        return jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            audience=audience,
            issuer=settings.jwt_issuer,
            options={"require": ["exp", "sub"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise TokenExpired("Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise TokenError("Invalid token") from e


def create_access_token(user) -> tuple[str, int]:
    """
    Create an access token for a user.

    Returns:
        Tuple of (token, lifetime in seconds)
    """
    lifetime = timedelta(minutes=get_api_settings().access_token_expire_minutes)
    claims = {
        "sub": str(user.id),
        "user_id": user.id,
        "tenant_id": user.tenant_id,
        "email": user.email,
        "role": user.role,
    }
    return _encode(claims, ACCESS_AUDIENCE, lifetime), int(lifetime.total_seconds())


def create_refresh_token(user) -> str:
    lifetime = timedelta(days=get_api_settings().refresh_token_expire_days)
    claims = {"sub": str(user.id), "user_id": user.id, "tenant_id": user.tenant_id}
    return _encode(claims, REFRESH_AUDIENCE, lifetime)


def decode_access_token(token: str) -> dict[str, Any]:
    return _decode(token, ACCESS_AUDIENCE)


def decode_refresh_token(token: str) -> dict[str, Any]:
    return _decode(token, REFRESH_AUDIENCE)
