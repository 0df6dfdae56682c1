### Description ###
# CaseDesk - Multi-tenant HR Case Management API
# - User Service -
# Author: CaseDesk Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
User Service

Tenant-scoped user administration. Creating a user consumes a license and
deleting one releases it; both happen in the same transaction as the row
change.
"""

import logging
from typing import Any

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from casedesk.models.complaint import Complaint, ComplaintEvidence, ComplaintTimelineEntry
from casedesk.models.investigation import (
    Finding,
    Interview,
    Investigation,
    InvestigationEvidence,
    InvestigationTimelineEntry,
    Recommendation,
)
from casedesk.models.tenant import Tenant
from casedesk.models.user import User, hash_password
from casedesk.services import tenants
from casedesk.services.errors import Conflict, NotFound, ValidationFailed

logger = logging.getLogger(__name__)

USER_SORT_FIELDS = {
    "created_at": User.created_at,
    "updated_at": User.updated_at,
    "first_name": User.first_name,
    "last_name": User.last_name,
    "email": User.email,
    "role": User.role,
    "department": User.department,
    "last_login_at": User.last_login_at,
}

UPDATABLE_FIELDS = ("first_name", "last_name", "email", "role", "department", "is_active")


class UserService:
    """User administration for one session"""

    def __init__(self, db: Session):
        self.db = db

    def _email_taken(self, tenant_id: int, email: str, exclude_id: int | None = None) -> bool:
        query = self.db.query(User.id).filter(User.tenant_id == tenant_id, User.email == email)
        if exclude_id is not None:
            query = query.filter(User.id != exclude_id)
        return query.first() is not None

    def get(self, tenant_id: int, user_id: int) -> User:
        user = self.db.query(User).filter(User.id == user_id, User.tenant_id == tenant_id).first()
        if user is None:
            raise NotFound("User not found")
        return user

    def list_users(
        self,
        tenant_id: int,
        *,
        role: str | None = None,
        department: str | None = None,
        is_active: bool | None = None,
        search: str | None = None,
        sort_by: str = "created_at",
        sort_order: str = "desc",
        page: int = 1,
        limit: int = 10,
    ) -> tuple[list[User], int]:
        query = self.db.query(User).filter(User.tenant_id == tenant_id)
        if role:
            query = query.filter(User.role == role)
        if department:
            query = query.filter(User.department == department)
        if is_active is not None:
            query = query.filter(User.is_active == is_active)
        if search:
            pattern = f"%{search}%"
            query = query.filter(
                or_(
                    User.first_name.ilike(pattern),
                    User.last_name.ilike(pattern),
                    User.email.ilike(pattern),
                    User.department.ilike(pattern),
                )
            )

        total = query.count()
        column = USER_SORT_FIELDS.get(sort_by, User.created_at)
        ordering = column.asc() if sort_order == "asc" else column.desc()
        users = query.order_by(ordering, User.id).offset((page - 1) * limit).limit(limit).all()
        return users, total

    def stats(self, tenant_id: int) -> dict[str, Any]:
        base = self.db.query(User).filter(User.tenant_id == tenant_id)
        total = base.count()
        active = base.filter(User.is_active.is_(True)).count()

        by_role = dict(
            self.db.query(User.role, func.count(User.id))
            .filter(User.tenant_id == tenant_id)
            .group_by(User.role)
            .all()
        )
        by_department = {
            (department or "unassigned"): count
            for department, count in self.db.query(User.department, func.count(User.id))
            .filter(User.tenant_id == tenant_id)
            .group_by(User.department)
            .all()
        }

        tenant = self.db.get(Tenant, tenant_id)
        return {
            "total": total,
            "active": active,
            "inactive": total - active,
            "licenses": {
                "total": tenant.licenses_total,
                "in_use": tenant.licenses_in_use,
                "available": tenant.licenses_total - tenant.licenses_in_use,
            },
            "by_role": by_role,
            "by_department": by_department,
        }

    def create(self, tenant_id: int, data: dict[str, Any], created_by: User) -> User:
        """
        Create a user and consume one license.

        Raises:
            Conflict: email already used in this tenant
            PermissionDenied: tenant license cap reached
        """
        email = data["email"].strip().lower()
        if self._email_taken(tenant_id, email):
            raise Conflict("A user with this email already exists in this tenant")

        tenants.acquire_license(self.db, tenant_id)
        user = User(
            tenant_id=tenant_id,
            first_name=data["first_name"],
            last_name=data["last_name"],
            email=email,
            password_hash=hash_password(data["password"]),
            role=data["role"],
            department=data.get("department"),
            is_active=data.get("is_active", True),
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise Conflict("A user with this email already exists in this tenant")
        self.db.refresh(user)

        logger.info(f"User {user.email} ({user.role}) created by {created_by.email}")
        return user

    def update(self, tenant_id: int, user_id: int, changes: dict[str, Any], updated_by: User) -> User:
        user = self.get(tenant_id, user_id)

        if changes.get("email"):
            changes["email"] = changes["email"].strip().lower()
            if self._email_taken(tenant_id, changes["email"], exclude_id=user.id):
                raise Conflict("A user with this email already exists in this tenant")

        for field in UPDATABLE_FIELDS:
            if field in changes and changes[field] is not None:
                setattr(user, field, changes[field])
        if changes.get("password"):
            user.set_password(changes["password"])

        self.db.commit()
        self.db.refresh(user)
        logger.info(f"User {user.email} updated by {updated_by.email}")
        return user

    def _is_referenced(self, user_id: int) -> bool:
        checks = (
            self.db.query(Complaint.id).filter(
                or_(
                    Complaint.complainant_id == user_id,
                    Complaint.accused_id == user_id,
                    Complaint.assigned_to_id == user_id,
                    Complaint.resolved_by_id == user_id,
                )
            ),
            self.db.query(ComplaintTimelineEntry.id).filter(ComplaintTimelineEntry.user_id == user_id),
            self.db.query(ComplaintEvidence.id).filter(ComplaintEvidence.uploaded_by_id == user_id),
            self.db.query(Investigation.id).filter(
                or_(
                    Investigation.investigator_id == user_id,
                    Investigation.assigned_by_id == user_id,
                    Investigation.completed_by_id == user_id,
                )
            ),
            self.db.query(InvestigationTimelineEntry.id).filter(InvestigationTimelineEntry.user_id == user_id),
            self.db.query(InvestigationEvidence.id).filter(InvestigationEvidence.collected_by_id == user_id),
            self.db.query(Interview.id).filter(
                or_(
                    Interview.interviewee_id == user_id,
                    Interview.interviewer_id == user_id,
                    Interview.conducted_by_id == user_id,
                )
            ),
            self.db.query(Finding.id).filter(Finding.documented_by_id == user_id),
            self.db.query(Recommendation.id).filter(Recommendation.assigned_to_id == user_id),
        )
        return any(query.first() is not None for query in checks)

    def delete(self, tenant_id: int, user_id: int, deleted_by: User) -> None:
        """
        Hard-delete a user and release one license.

        Raises:
            ValidationFailed: deleting your own account
            Conflict: user appears in case records (deactivate instead)
        """
        user = self.get(tenant_id, user_id)
        if user.id == deleted_by.id:
            raise ValidationFailed("You cannot delete your own account")
        if self._is_referenced(user.id):
            raise Conflict("User is referenced by case records; deactivate the account instead")

        self.db.delete(user)
        tenants.release_license(self.db, tenant_id)
        self.db.commit()
        logger.info(f"User {user.email} deleted by {deleted_by.email}")

    def toggle_status(self, tenant_id: int, user_id: int, changed_by: User) -> User:
        user = self.get(tenant_id, user_id)
        if user.id == changed_by.id:
            raise ValidationFailed("You cannot deactivate your own account")

        user.is_active = not user.is_active
        self.db.commit()
        self.db.refresh(user)
        logger.info(
            f"User {user.email} {'activated' if user.is_active else 'deactivated'} by {changed_by.email}"
        )
        return user
