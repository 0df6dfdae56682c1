### Description ###
# CaseDesk - Multi-tenant HR Case Management API
# - Tenant Resolution Middleware -
# Author: CaseDesk Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
Tenant Resolution Middleware

Resolves the tenant for unauthenticated entry points (login) from the
X-Tenant-Slug header. Authenticated requests take their tenant from the
access token instead.
"""

from typing import Optional

from fastapi import Depends, Header, HTTPException, Request, status
from sqlalchemy.orm import Session

from casedesk.database import get_db
from casedesk.models.tenant import Tenant
from casedesk.services.tenants import is_valid_slug, resolve_tenant_by_slug

TENANT_HEADER = "X-Tenant-Slug"


async def get_request_tenant(
    request: Request,
    x_tenant_slug: Optional[str] = Header(None, alias=TENANT_HEADER),
    db: Session = Depends(get_db),
) -> Tenant:
    """
    Resolve the active tenant named by the X-Tenant-Slug header.

    Raises:
        HTTPException 400: header missing or malformed
        HTTPException 401: no active tenant with that slug
    """
    if not x_tenant_slug:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Missing {TENANT_HEADER} header",
        )

    slug = x_tenant_slug.strip().lower()
    if not is_valid_slug(slug):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid tenant slug. Use lowercase letters, digits and hyphens only.",
        )

    tenant = resolve_tenant_by_slug(db, slug)
    if tenant is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Tenant not found or inactive",
        )

    request.state.tenant_slug = tenant.slug
    return tenant
