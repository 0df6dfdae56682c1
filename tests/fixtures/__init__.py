"""
Test fixtures and factories for CaseDesk tests.
"""

from tests.fixtures.data import DEFAULT_PASSWORD, complaint_payload, investigation_payload
from tests.fixtures.factories import (
    auth_headers_for,
    create_complaint,
    create_tenant,
    create_user,
)

__all__ = [
    "DEFAULT_PASSWORD",
    "complaint_payload",
    "investigation_payload",
    "auth_headers_for",
    "create_complaint",
    "create_tenant",
    "create_user",
]
