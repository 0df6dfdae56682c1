### Description ###
# CaseDesk - Multi-tenant HR Case Management API
# - Resource Catalog Service -
# Author: CaseDesk Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
Resource Catalog Service

CRUD over tenant + category + key catalog entries. Deletion is always soft
(is_active=False). Complaint forms validate their vocabularies through
`is_allowed_value`, which falls back to the built-in enumerations when a
tenant has not customized a category.
"""

import logging
from collections import defaultdict
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from casedesk.models.enums import (
    ComplaintAction,
    ComplaintPriority,
    ComplaintSeverity,
    ComplaintStatus,
    ComplaintType,
    EvidenceType,
    ResolutionOutcome,
    ResourceCategory,
    UserRole,
    values,
)
from casedesk.models.resource import Resource
from casedesk.services.errors import Conflict, NotFound, ValidationFailed

logger = logging.getLogger(__name__)

CATEGORIES = tuple(values(ResourceCategory))

# Vocabulary used when a tenant has no active entries in a category
BUILTIN_VOCABULARIES: dict[str, tuple[str, ...]] = {
    ResourceCategory.COMPLAINT_TYPES.value: tuple(values(ComplaintType)),
    ResourceCategory.COMPLAINT_SEVERITY.value: tuple(values(ComplaintSeverity)),
    ResourceCategory.COMPLAINT_PRIORITY.value: tuple(values(ComplaintPriority)),
    ResourceCategory.COMPLAINT_STATUS.value: tuple(values(ComplaintStatus)),
    ResourceCategory.USER_ROLES.value: tuple(values(UserRole)),
    ResourceCategory.EVIDENCE_TYPES.value: tuple(values(EvidenceType)),
    ResourceCategory.RESOLUTION_OUTCOMES.value: tuple(values(ResolutionOutcome)),
    ResourceCategory.TIMELINE_ACTIONS.value: tuple(values(ComplaintAction)),
}

UPDATABLE_FIELDS = ("label", "description", "sort_order", "meta", "is_active")


def ensure_category(category: str) -> None:
    if category not in CATEGORIES:
        raise ValidationFailed(
            f"Unknown category '{category}'",
            errors=[{"field": "category", "message": f"Must be one of: {', '.join(CATEGORIES)}"}],
        )


class ResourceCatalog:
    """Catalog access for one session"""

    def __init__(self, db: Session):
        self.db = db

    def _query(self, tenant_id: int, category: str | None = None, active_only: bool = True):
        query = self.db.query(Resource).filter(Resource.tenant_id == tenant_id)
        if category is not None:
            query = query.filter(Resource.category == category)
        if active_only:
            query = query.filter(Resource.is_active.is_(True))
        return query

    def _find(self, tenant_id: int, category: str, key: str) -> Resource:
        resource = self._query(tenant_id, category, active_only=False).filter(Resource.key == key).first()
        if resource is None:
            raise NotFound("Resource not found")
        return resource

    def get_all_grouped(self, tenant_id: int, active_only: bool = True) -> dict[str, list[Resource]]:
        """Entries grouped by category, each group ordered by sort_order then label"""
        grouped: dict[str, list[Resource]] = defaultdict(list)
        rows = (
            self._query(tenant_id, active_only=active_only)
            .order_by(Resource.category, Resource.sort_order, Resource.label)
            .all()
        )
        for resource in rows:
            grouped[resource.category].append(resource)
        return dict(grouped)

    def get_by_category(self, tenant_id: int, category: str, active_only: bool = True) -> list[Resource]:
        ensure_category(category)
        resources = (
            self._query(tenant_id, category, active_only=active_only)
            .order_by(Resource.sort_order, Resource.label)
            .all()
        )
        if not resources:
            raise NotFound(f"No resources found for category '{category}'")
        return resources

    def validate_key(self, tenant_id: int, category: str, key: str) -> bool:
        """True when an active entry exists for (category, key)"""
        return self._query(tenant_id, category).filter(Resource.key == key).first() is not None

    def is_allowed_value(self, tenant_id: int, category: str, value: str) -> bool:
        """
        Check a form value against the tenant's catalog.

        Tenants that define active entries for the category are held to
        them; otherwise the built-in vocabulary applies.
        """
        if self._query(tenant_id, category).first() is not None:
            return self.validate_key(tenant_id, category, value)
        return value in BUILTIN_VOCABULARIES.get(category, ())

    def create(self, tenant_id: int, data: dict[str, Any]) -> Resource:
        """
        Raises:
            Conflict: (tenant, category, key) already exists, active or not
        """
        category = data["category"]
        ensure_category(category)
        existing = self._query(tenant_id, category, active_only=False).filter(Resource.key == data["key"]).first()
        if existing is not None:
            raise Conflict(f"A resource with key '{data['key']}' already exists in category '{category}'")

        resource = Resource(
            tenant_id=tenant_id,
            category=category,
            key=data["key"],
            label=data["label"],
            description=data.get("description"),
            sort_order=data.get("sort_order") or 0,
            meta=data.get("meta") or {},
            is_active=True,
        )
        self.db.add(resource)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise Conflict(f"A resource with key '{data['key']}' already exists in category '{category}'")
        self.db.refresh(resource)

        logger.info(f"Resource {category}/{resource.key} created for tenant {tenant_id}")
        return resource

    def update(self, tenant_id: int, category: str, key: str, changes: dict[str, Any]) -> Resource:
        ensure_category(category)
        resource = self._find(tenant_id, category, key)
        for field in UPDATABLE_FIELDS:
            if field in changes and changes[field] is not None:
                setattr(resource, field, changes[field])
        self.db.commit()
        self.db.refresh(resource)

        logger.info(f"Resource {category}/{key} updated for tenant {tenant_id}")
        return resource

    def deactivate(self, tenant_id: int, category: str, key: str) -> Resource:
        ensure_category(category)
        resource = self._find(tenant_id, category, key)
        resource.is_active = False
        self.db.commit()
        self.db.refresh(resource)

        logger.info(f"Resource {category}/{key} deactivated for tenant {tenant_id}")
        return resource
