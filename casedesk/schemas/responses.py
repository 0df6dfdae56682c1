### Description ###
# CaseDesk - Multi-tenant HR Case Management API
# - Common Response Schemas -
# Author: CaseDesk Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
Common Response Schemas

Pydantic models for the response envelope shared by every endpoint:
{success, message, data?, errors?, pagination?}
"""

import math
from typing import Any, Generic, List, Optional, TypeVar

from pydantic import AliasChoices, BaseModel, Field

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Standard API response wrapper"""

    success: bool = True
    message: str = "Success"
    data: Optional[T] = None


class PaginationMeta(BaseModel):
    """Pagination metadata"""

    page: int = Field(ge=1, description="Current page number")
    limit: int = Field(ge=1, le=100, description="Items per page")
    total: int = Field(ge=0, description="Total number of items")
    total_pages: int = Field(
        ge=0,
        validation_alias=AliasChoices("total_pages", "totalPages"),
        serialization_alias="totalPages",
        description="Total number of pages",
    )

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "PaginationMeta":
        total_pages = math.ceil(total / limit) if total > 0 else 0
        return cls(page=page, limit=limit, total=total, total_pages=total_pages)


class PaginatedResponse(BaseModel, Generic[T]):
    """Paginated API response"""

    success: bool = True
    message: str = "Success"
    data: List[T] = Field(default_factory=list)
    pagination: PaginationMeta


class ErrorDetail(BaseModel):
    """Error detail for validation errors"""

    field: Optional[str] = None
    message: str


class ErrorResponse(BaseModel):
    """Standard error response"""

    success: bool = False
    message: str
    errors: Optional[List[ErrorDetail]] = None
    code: Optional[str] = None
    request_id: Optional[str] = None


class HealthResponse(BaseModel):
    """Health check response"""

    status: str = "healthy"
    version: str
    environment: str
    database_connected: bool


def paginated(items: List[Any], page: int, limit: int, total: int, message: str = "Success") -> PaginatedResponse:
    """Wrap a page of items in the paginated envelope"""
    return PaginatedResponse(
        success=True,
        message=message,
        data=items,
        pagination=PaginationMeta.build(page, limit, total),
    )
