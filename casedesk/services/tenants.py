### Description ###
# CaseDesk - Multi-tenant HR Case Management API
# - Tenant Service -
# Author: CaseDesk Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
Tenant Service

Tenant lookup and license accounting. License counters only move through
conditional UPDATE statements checked by rowcount, so concurrent user
creation can never push licenses_in_use past licenses_total. Nothing here
commits; the caller's unit of work does.
"""

import logging
import re
from datetime import datetime

from sqlalchemy import update
from sqlalchemy.orm import Session

from casedesk.models.enums import SubscriptionStatus, TenantStatus, UserRole
from casedesk.models.tenant import Tenant
from casedesk.models.user import User, hash_password
from casedesk.services.errors import Conflict, PermissionDenied, ValidationFailed

logger = logging.getLogger(__name__)

SLUG_PATTERN = re.compile(r"^[a-z0-9-]+$")


def is_valid_slug(slug: str | None) -> bool:
    return bool(slug) and SLUG_PATTERN.match(slug) is not None


def resolve_tenant_by_slug(db: Session, slug: str) -> Tenant | None:
    """Active tenant for a slug, or None when unknown or not active"""
    return (
        db.query(Tenant)
        .filter(Tenant.slug == slug, Tenant.status == TenantStatus.ACTIVE.value)
        .first()
    )


def acquire_license(db: Session, tenant_id: int) -> None:
    """
    Consume one license.

    Raises:
        PermissionDenied: when the tenant is at its license cap
    """
    result = db.execute(
        update(Tenant)
        .where(Tenant.id == tenant_id, Tenant.licenses_in_use < Tenant.licenses_total)
        .values(licenses_in_use=Tenant.licenses_in_use + 1)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        logger.warning(f"Tenant {tenant_id} has no licenses available")
        raise PermissionDenied("No licenses available. Contact your administrator.")


def release_license(db: Session, tenant_id: int) -> bool:
    """Give back one license (floor zero). Returns False when already at zero."""
    result = db.execute(
        update(Tenant)
        .where(Tenant.id == tenant_id, Tenant.licenses_in_use > 0)
        .values(licenses_in_use=Tenant.licenses_in_use - 1)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount == 1


def onboard_tenant(
    db: Session,
    *,
    name: str,
    slug: str,
    tax_id: str,
    email: str,
    licenses_total: int,
    admin_email: str,
    admin_password: str,
    admin_first_name: str = "Admin",
    admin_last_name: str = "User",
    subscription_plan: str = "Basic",
    subscription_status: str = SubscriptionStatus.ACTIVE.value,
    subscription_end: datetime | None = None,
) -> tuple[Tenant, User]:
    """
    Create an active tenant and its first Tenant Admin in one transaction.

    The admin consumes one license.
    """
    if not is_valid_slug(slug):
        raise ValidationFailed("Slug may only contain lowercase letters, digits and hyphens")

    duplicate = (
        db.query(Tenant)
        .filter((Tenant.slug == slug) | (Tenant.tax_id == tax_id) | (Tenant.email == email.lower()))
        .first()
    )
    if duplicate:
        raise Conflict("A tenant with this slug, tax id or email already exists")

    tenant = Tenant(
        name=name,
        slug=slug,
        tax_id=tax_id,
        email=email.lower(),
        licenses_total=licenses_total,
        licenses_in_use=0,
        subscription_plan=subscription_plan,
        subscription_status=subscription_status,
        subscription_end=subscription_end,
        status=TenantStatus.ACTIVE.value,
    )
    db.add(tenant)
    db.flush()

    acquire_license(db, tenant.id)
    admin = User(
        tenant_id=tenant.id,
        first_name=admin_first_name,
        last_name=admin_last_name,
        email=admin_email.lower(),
        password_hash=hash_password(admin_password),
        role=UserRole.TENANT_ADMIN.value,
    )
    db.add(admin)
    db.commit()
    db.refresh(tenant)
    db.refresh(admin)

    logger.info(f"Tenant '{slug}' onboarded with admin {admin.email}")
    return tenant, admin
