### Description ###
# CaseDesk - Multi-tenant HR Case Management API
# - User Schemas -
# Author: CaseDesk Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
User Schemas

Pydantic models for user administration endpoints.
"""

import re
from datetime import datetime
from typing import Dict, Literal, Optional

from pydantic import BaseModel, Field, field_validator

ROLE_VALUES = Literal["Empleado", "RRHH", "Investigador", "Tenant Admin"]

NAME_PATTERN = r"^[a-zA-ZáéíóúÁÉÍÓÚñÑüÜ\s'-]+$"
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"
PASSWORD_RULE = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)")


def _check_password_strength(value: Optional[str]) -> Optional[str]:
    if value is not None and not PASSWORD_RULE.match(value):
        raise ValueError("Password must contain an uppercase letter, a lowercase letter and a digit")
    return value


class UserCreate(BaseModel):
    """Create a user in the caller's tenant"""

    first_name: str = Field(..., min_length=2, max_length=50, pattern=NAME_PATTERN)
    last_name: str = Field(..., min_length=2, max_length=50, pattern=NAME_PATTERN)
    email: str = Field(..., max_length=100, pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=8, max_length=100)
    role: ROLE_VALUES = "Empleado"
    department: Optional[str] = Field(None, max_length=100)
    is_active: bool = True

    @field_validator("password")
    @classmethod
    def check_password_strength(cls, value):
        return _check_password_strength(value)


class UserUpdate(BaseModel):
    """Update user fields"""

    first_name: Optional[str] = Field(None, min_length=2, max_length=50, pattern=NAME_PATTERN)
    last_name: Optional[str] = Field(None, min_length=2, max_length=50, pattern=NAME_PATTERN)
    email: Optional[str] = Field(None, max_length=100, pattern=EMAIL_PATTERN)
    password: Optional[str] = Field(None, min_length=8, max_length=100)
    role: Optional[ROLE_VALUES] = None
    department: Optional[str] = Field(None, max_length=100)
    is_active: Optional[bool] = None

    @field_validator("password")
    @classmethod
    def check_password_strength(cls, value):
        return _check_password_strength(value)


class UserResponse(BaseModel):
    """User response (never includes the password hash)"""

    id: int
    tenant_id: int
    first_name: str
    last_name: str
    full_name: str
    email: str
    role: str
    department: Optional[str] = None
    is_active: bool
    last_login_at: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class UserSummary(BaseModel):
    """Compact user reference embedded in case records"""

    id: int
    full_name: str
    email: str
    role: str

    class Config:
        from_attributes = True


class LicenseUsage(BaseModel):
    total: int
    in_use: int
    available: int


class UserStats(BaseModel):
    total: int
    active: int
    inactive: int
    licenses: LicenseUsage
    by_role: Dict[str, int]
    by_department: Dict[str, int]
