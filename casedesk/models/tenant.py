### Description ###
# CaseDesk - Multi-tenant HR Case Management API
# - Tenant Model -
# Author: CaseDesk Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
Tenant Model

Represents an organization using CaseDesk. The tenant is the unit of data
isolation: every user, complaint, investigation and catalog entry belongs to
exactly one tenant.
"""

from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from casedesk.database import Base
from casedesk.models.enums import SubscriptionPlan, SubscriptionStatus, TenantStatus

DEFAULT_LOGO_URL = "https://placehold.co/200x50/000/fff?text=Logo"
DEFAULT_PRIMARY_COLOR = "#0056b3"
DEFAULT_SECONDARY_COLOR = "#4CAF50"

USABLE_SUBSCRIPTION_STATUSES = (SubscriptionStatus.ACTIVE.value, SubscriptionStatus.TRIAL.value)


class Tenant(Base):
    """
    Tenant model - an organization account.

    Licenses cap the number of users the tenant may register. The counter is
    only moved through conditional UPDATEs (see services.tenants) and the
    check constraints keep 0 <= licenses_in_use <= licenses_total.
    """

    __tablename__ = "tenants"
    __table_args__ = (
        CheckConstraint("licenses_in_use >= 0", name="ck_tenants_licenses_in_use_floor"),
        CheckConstraint("licenses_in_use <= licenses_total", name="ck_tenants_licenses_cap"),
        CheckConstraint(
            "licenses_total >= 1 AND licenses_total <= 10000", name="ck_tenants_licenses_total_range"
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    slug = Column(String(100), nullable=False, unique=True, index=True)
    tax_id = Column(String(20), nullable=False, unique=True)
    address = Column(String(300), nullable=True)
    phone = Column(String(20), nullable=True)
    email = Column(String(255), nullable=False, unique=True)

    # Subscription
    subscription_plan = Column(String(20), default=SubscriptionPlan.BASIC.value, nullable=False)
    subscription_status = Column(String(20), default=SubscriptionStatus.TRIAL.value, nullable=False)
    subscription_start = Column(DateTime, default=datetime.utcnow, nullable=False)
    subscription_end = Column(DateTime, nullable=True)

    # Branding
    logo_url = Column(String(500), default=DEFAULT_LOGO_URL, nullable=True)
    primary_color = Column(String(7), default=DEFAULT_PRIMARY_COLOR, nullable=False)
    secondary_color = Column(String(7), default=DEFAULT_SECONDARY_COLOR, nullable=False)

    # Licenses
    licenses_total = Column(Integer, nullable=False)
    licenses_in_use = Column(Integer, default=0, nullable=False)

    status = Column(String(20), default=TenantStatus.PENDING.value, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    users = relationship("User", back_populates="tenant", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Tenant(id={self.id}, slug='{self.slug}')>"

    @property
    def is_active(self) -> bool:
        return self.status == TenantStatus.ACTIVE.value

    def has_active_subscription(self, now: datetime | None = None) -> bool:
        """Subscription is active or trial and has not run past its end date"""
        if self.subscription_status not in USABLE_SUBSCRIPTION_STATUSES:
            return False
        now = now or datetime.utcnow()
        if self.subscription_end and self.subscription_end < now:
            return False
        return True

    @property
    def branding(self) -> dict:
        return {
            "logo_url": self.logo_url,
            "primary_color": self.primary_color,
            "secondary_color": self.secondary_color,
        }
