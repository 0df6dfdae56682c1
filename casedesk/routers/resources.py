### Description ###
# CaseDesk - Multi-tenant HR Case Management API
# - Resource Catalog Router -
# Author: CaseDesk Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
Resource Catalog API Endpoints

- GET /resources - All entries grouped by category
- GET /resources/{category} - Entries of one category
- GET /resources/{category}/{key}/validate - Check a key
- POST /resources - Create an entry (Tenant Admin)
- PUT /resources/{category}/{key} - Update an entry (Tenant Admin)
- DELETE /resources/{category}/{key} - Deactivate an entry (Tenant Admin)
"""

from typing import List

from fastapi import APIRouter, Depends, Query, status

from casedesk.dependencies import get_resource_catalog
from casedesk.middleware import AuthContext, get_current_user, require_tenant_admin
from casedesk.schemas.resource import KeyValidation, ResourceCreate, ResourceGroups, ResourceResponse, ResourceUpdate
from casedesk.schemas.responses import APIResponse
from casedesk.services.resources import ResourceCatalog

router = APIRouter()


@router.get(
    "",
    response_model=APIResponse[ResourceGroups],
    summary="List catalog",
    description="All catalog entries of the caller's tenant grouped by category",
)
async def list_resources(
    auth: AuthContext = Depends(get_current_user),
    catalog: ResourceCatalog = Depends(get_resource_catalog),
    active_only: bool = Query(True, description="Only active entries"),
) -> APIResponse[ResourceGroups]:
    grouped = catalog.get_all_grouped(auth.tenant_id, active_only=active_only)
    return APIResponse(
        success=True,
        data={
            category: [ResourceResponse.model_validate(r) for r in resources]
            for category, resources in grouped.items()
        },
    )


@router.get(
    "/{category}",
    response_model=APIResponse[List[ResourceResponse]],
    summary="List category",
)
async def list_category(
    category: str,
    auth: AuthContext = Depends(get_current_user),
    catalog: ResourceCatalog = Depends(get_resource_catalog),
    active_only: bool = Query(True, description="Only active entries"),
) -> APIResponse[List[ResourceResponse]]:
    resources = catalog.get_by_category(auth.tenant_id, category, active_only=active_only)
    return APIResponse(success=True, data=[ResourceResponse.model_validate(r) for r in resources])


@router.get(
    "/{category}/{key}/validate",
    response_model=APIResponse[KeyValidation],
    summary="Validate key",
    description="Check whether an active entry exists for the category and key",
)
async def validate_key(
    category: str,
    key: str,
    auth: AuthContext = Depends(get_current_user),
    catalog: ResourceCatalog = Depends(get_resource_catalog),
) -> APIResponse[KeyValidation]:
    valid = catalog.validate_key(auth.tenant_id, category, key)
    return APIResponse(success=True, data=KeyValidation(category=category, key=key, valid=valid))


@router.post(
    "",
    response_model=APIResponse[ResourceResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create entry",
)
async def create_resource(
    data: ResourceCreate,
    auth: AuthContext = Depends(require_tenant_admin),
    catalog: ResourceCatalog = Depends(get_resource_catalog),
) -> APIResponse[ResourceResponse]:
    resource = catalog.create(auth.tenant_id, data.model_dump())
    return APIResponse(success=True, message="Resource created", data=ResourceResponse.model_validate(resource))


@router.put(
    "/{category}/{key}",
    response_model=APIResponse[ResourceResponse],
    summary="Update entry",
)
async def update_resource(
    category: str,
    key: str,
    data: ResourceUpdate,
    auth: AuthContext = Depends(require_tenant_admin),
    catalog: ResourceCatalog = Depends(get_resource_catalog),
) -> APIResponse[ResourceResponse]:
    resource = catalog.update(auth.tenant_id, category, key, data.model_dump(exclude_unset=True))
    return APIResponse(success=True, message="Resource updated", data=ResourceResponse.model_validate(resource))


@router.delete(
    "/{category}/{key}",
    response_model=APIResponse[ResourceResponse],
    summary="Deactivate entry",
    description="Soft delete: the entry stays but is no longer active",
)
async def deactivate_resource(
    category: str,
    key: str,
    auth: AuthContext = Depends(require_tenant_admin),
    catalog: ResourceCatalog = Depends(get_resource_catalog),
) -> APIResponse[ResourceResponse]:
    resource = catalog.deactivate(auth.tenant_id, category, key)
    return APIResponse(success=True, message="Resource deactivated", data=ResourceResponse.model_validate(resource))
