### Description ###
# CaseDesk - Multi-tenant HR Case Management API
# - Resource Catalog Schemas -
# Author: CaseDesk Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
Resource Catalog Schemas

Pydantic models for tenant catalog entries. The `metadata` map of scalar values
is exposed under that name; the ORM attribute is `meta`.
"""

from datetime import datetime
from typing import Dict, List, Optional, Union

from pydantic import AliasChoices, BaseModel, Field, StrictBool, StrictFloat, StrictInt, StrictStr

KEY_PATTERN = r"^[a-zA-Z0-9_-]+$"

# Metadata values are flat scalars
MetadataValue = Union[StrictStr, StrictInt, StrictFloat, StrictBool, None]


def _metadata_field(default=None):
    return Field(
        default,
        validation_alias=AliasChoices("meta", "metadata"),
        serialization_alias="metadata",
        description="Flat map of string, number, boolean or null values",
    )


class ResourceCreate(BaseModel):
    category: str = Field(..., min_length=1, max_length=50)
    key: str = Field(..., min_length=1, max_length=100, pattern=KEY_PATTERN)
    label: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=500)
    sort_order: int = Field(0, ge=0)
    meta: Optional[Dict[str, MetadataValue]] = _metadata_field()


class ResourceUpdate(BaseModel):
    label: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=500)
    sort_order: Optional[int] = Field(None, ge=0)
    meta: Optional[Dict[str, MetadataValue]] = _metadata_field()
    is_active: Optional[bool] = None


class ResourceResponse(BaseModel):
    id: int
    category: str
    key: str
    label: str
    description: Optional[str] = None
    is_active: bool
    sort_order: int
    meta: Dict[str, MetadataValue] = _metadata_field({})
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class KeyValidation(BaseModel):
    category: str
    key: str
    valid: bool


ResourceGroups = Dict[str, List[ResourceResponse]]
