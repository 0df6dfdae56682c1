### Description ###
# CaseDesk - Multi-tenant HR Case Management API
# - Request Logging Middleware -
# Author: CaseDesk Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
Request Logging Middleware

Logs all API requests with attribution information:
- Who: authenticated user email and tenant slug
- What: method, path and query string
- Result: status code and response time

Request bodies are never logged; complaint contents are confidential.
"""

import time
import uuid
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from casedesk.utils import setup_logger

# Set up API logger
api_logger = setup_logger("casedesk_api", log_to_console=False)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware for logging all API requests

    Captures:
    - Request ID (8 chars, echoed as X-Request-ID)
    - Method and path
    - User and tenant (set by the auth dependencies)
    - Client IP
    - Response status and time
    """

    # Paths that are not worth a log line
    EXCLUDE = (
        "/health",
        "/favicon.ico",
    )

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        # Generate request ID
        request_id = str(uuid.uuid4())[:8]
        request.state.request_id = request_id

        start_time = time.time()

        method = request.method
        path = request.url.path
        query = str(request.url.query) if request.url.query else ""
        client_ip = request.client.host if request.client else "unknown"

        try:
            response = await call_next(request)
            status_code = response.status_code
        except Exception as e:
            api_logger.error(f"[{request_id}] ERROR {method} {path} - {e!s}")
            raise

        response_time = (time.time() - start_time) * 1000  # ms
        response.headers["X-Request-ID"] = request_id

        if path.startswith(self.EXCLUDE):
            return response

        user = getattr(request.state, "user_email", None) or "anonymous"
        tenant = getattr(request.state, "tenant_slug", None) or "-"
        log_entry = (
            f"[{request_id}] "
            f"{method} {path}"
            f"{f'?{query}' if query else ''} "
            f"| user={user} "
            f"| tenant={tenant} "
            f"| ip={client_ip} "
            f"| status={status_code} "
            f"| time={response_time:.2f}ms"
        )

        # Log at appropriate level
        if status_code >= 500:
            api_logger.error(log_entry)
        elif status_code >= 400:
            api_logger.warning(log_entry)
        else:
            api_logger.info(log_entry)

        return response
