### Description ###
# CaseDesk - Multi-tenant HR Case Management API
# - Resource Model -
# Author: CaseDesk Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
Resource Model

Tenant-scoped catalog entry (category + key -> label) letting each tenant
customize display vocabularies such as complaint types or severities.
"""

from datetime import datetime

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Index, Integer, String, UniqueConstraint

from casedesk.database import Base


class Resource(Base):
    """
    Resource model - one catalog entry.

    `meta` is stored in the `metadata` column (the attribute name is reserved
    by SQLAlchemy's declarative base).
    """

    __tablename__ = "resources"
    __table_args__ = (
        UniqueConstraint("tenant_id", "category", "key", name="uq_resources_tenant_category_key"),
        Index("ix_resources_tenant_category_active", "tenant_id", "category", "is_active"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    tenant_id = Column(Integer, ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False, index=True)
    category = Column(String(50), nullable=False)
    key = Column(String(100), nullable=False)
    label = Column(String(200), nullable=False)
    description = Column(String(500), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    sort_order = Column(Integer, default=0, nullable=False)
    meta = Column("metadata", JSON, default=dict, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<Resource(id={self.id}, category='{self.category}', key='{self.key}')>"
