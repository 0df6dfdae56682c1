### Description ###
# CaseDesk - Multi-tenant HR Case Management API
# - Service Errors -
# Author: CaseDesk Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
Service Errors

Exceptions raised by the service layer. Each carries the HTTP status it maps
to; casedesk.main renders them with the standard error envelope.
"""

from typing import Any


class ServiceError(Exception):
    """Base class for domain failures surfaced to the caller"""

    status_code = 500
    code: str | None = None

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None, code: str | None = None):
        super().__init__(message)
        self.message = message
        self.errors = errors
        if code is not None:
            self.code = code


class ValidationFailed(ServiceError):
    status_code = 400


class AuthenticationFailed(ServiceError):
    status_code = 401


class PermissionDenied(ServiceError):
    status_code = 403


class NotFound(ServiceError):
    status_code = 404


class Conflict(ServiceError):
    status_code = 409


class AccountLocked(ServiceError):
    status_code = 423
    code = "ACCOUNT_LOCKED"
