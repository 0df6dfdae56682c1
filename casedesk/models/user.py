### Description ###
# CaseDesk - Multi-tenant HR Case Management API
# - User Model -
# Author: CaseDesk Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
User Model

Stores tenant members with:
- Email unique per tenant (lowercased), not globally
- Password hashed with bcrypt
- Role from a fixed set (Empleado, RRHH, Investigador, Tenant Admin)
- Failed-login counter and temporary lockout
"""

from datetime import datetime, timedelta

import bcrypt as _bcrypt
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from casedesk.config import get_api_settings
from casedesk.database import Base
from casedesk.models.enums import UserRole

MAX_FAILED_LOGINS = 5
LOCKOUT_DURATION = timedelta(minutes=30)


def hash_password(plaintext: str) -> str:
    """Hash a password using bcrypt"""
    rounds = get_api_settings().bcrypt_rounds
    return _bcrypt.hashpw(plaintext.encode(), _bcrypt.gensalt(rounds=rounds)).decode()


def verify_password(plaintext: str, hashed: str) -> bool:
    """Verify a plaintext password against a hash"""
    if not hashed:
        return False
    return _bcrypt.checkpw(plaintext.encode(), hashed.encode())


class User(Base):
    """
    User model - a member of one tenant.

    The password hash is never serialized; schemas expose only profile data.
    """

    __tablename__ = "users"
    __table_args__ = (UniqueConstraint("tenant_id", "email", name="uq_users_tenant_email"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    tenant_id = Column(Integer, ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False, index=True)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    email = Column(String(255), nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), default=UserRole.EMPLOYEE.value, nullable=False, index=True)
    department = Column(String(100), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    # Login tracking
    last_login_at = Column(DateTime, nullable=True)
    failed_login_attempts = Column(Integer, default=0, nullable=False)
    account_locked_until = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    tenant = relationship("Tenant", back_populates="users")

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def set_password(self, plaintext: str) -> None:
        self.password_hash = hash_password(plaintext)

    def check_password(self, plaintext: str) -> bool:
        return verify_password(plaintext, self.password_hash)

    def is_locked(self, now: datetime | None = None) -> bool:
        """Check if the account is inside a lockout window"""
        if not self.account_locked_until:
            return False
        return self.account_locked_until > (now or datetime.utcnow())

    def register_failed_login(self, now: datetime | None = None) -> bool:
        """
        Count a failed password check.

        A lock that has already expired starts the count over. Returns True
        when this failure locked the account.
        """
        now = now or datetime.utcnow()
        if self.account_locked_until and self.account_locked_until <= now:
            self.failed_login_attempts = 0
            self.account_locked_until = None

        self.failed_login_attempts = (self.failed_login_attempts or 0) + 1
        if self.failed_login_attempts >= MAX_FAILED_LOGINS:
            self.account_locked_until = now + LOCKOUT_DURATION
            return True
        return False

    def reset_failed_logins(self) -> None:
        self.failed_login_attempts = 0
        self.account_locked_until = None

    def record_login(self, now: datetime | None = None) -> None:
        self.reset_failed_logins()
        self.last_login_at = now or datetime.utcnow()
