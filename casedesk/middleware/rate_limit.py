### Description ###
# CaseDesk - Multi-tenant HR Case Management API
# - Rate Limiting Middleware -
# Author: CaseDesk Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
Rate Limiting Middleware

Moving-window rate limiting per client IP using slowapi. The general limit
applies to every route; login and token refresh carry the stricter
authentication limit.
"""

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from casedesk.config import get_api_settings

settings = get_api_settings()


def get_client_identifier(request: Request) -> str:
    """Rate limit key: the client address"""
    return f"ip:{get_remote_address(request)}"


def get_auth_rate_limit() -> str:
    return get_api_settings().rate_limit_auth


# Create limiter instance
limiter = Limiter(
    key_func=get_client_identifier,
    default_limits=[settings.rate_limit_default],
    storage_uri=settings.rate_limit_storage_uri,
    strategy="moving-window",
    enabled=settings.rate_limit_enabled,
)


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> Response:
    """Render rate limit errors in the standard error envelope"""
    retry_after = getattr(exc, "retry_after", None) or 60
    return JSONResponse(
        status_code=429,
        content={
            "success": False,
            "message": f"Too many requests. Rate limit exceeded: {exc.detail}",
            "code": "RATE_LIMITED",
            "request_id": getattr(request.state, "request_id", None),
        },
        headers={"Retry-After": str(retry_after)},
    )
