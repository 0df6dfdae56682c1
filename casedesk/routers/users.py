### Description ###
# CaseDesk - Multi-tenant HR Case Management API
# - User Router -
# Author: CaseDesk Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
User API Endpoints

- GET /users - List users in the caller's tenant
- GET /users/stats - User and license statistics (Tenant Admin)
- GET /users/{user_id} - Get one user
- POST /users - Create a user, consuming a license (Tenant Admin)
- PUT /users/{user_id} - Update a user (Tenant Admin)
- DELETE /users/{user_id} - Delete a user, releasing a license (Tenant Admin)
- PATCH /users/{user_id}/status - Toggle the active flag (Tenant Admin)
"""

from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query, status

from casedesk.dependencies import get_user_service
from casedesk.middleware import AuthContext, get_current_user, require_tenant_admin
from casedesk.schemas.responses import APIResponse, PaginatedResponse, paginated
from casedesk.schemas.user import UserCreate, UserResponse, UserStats, UserUpdate
from casedesk.services.users import UserService

router = APIRouter()

SORT_FIELDS = Literal[
    "created_at", "updated_at", "first_name", "last_name", "email", "role", "department", "last_login_at"
]


@router.get(
    "",
    response_model=PaginatedResponse[UserResponse],
    summary="List users",
    description="List users of the caller's tenant with filtering, search and pagination",
)
async def list_users(
    auth: AuthContext = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
    role: Optional[Literal["Empleado", "RRHH", "Investigador", "Tenant Admin"]] = Query(None),
    department: Optional[str] = Query(None, max_length=100),
    is_active: Optional[bool] = Query(None),
    search: Optional[str] = Query(None, min_length=2, max_length=100, description="Search name, email or department"),
    sort_by: SORT_FIELDS = Query("created_at"),
    sort_order: Literal["asc", "desc"] = Query("desc"),
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(10, ge=1, le=100, description="Items per page"),
) -> PaginatedResponse[UserResponse]:
    users, total = service.list_users(
        auth.tenant_id,
        role=role,
        department=department,
        is_active=is_active,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit,
    )
    return paginated([UserResponse.model_validate(u) for u in users], page, limit, total)


@router.get(
    "/stats",
    response_model=APIResponse[UserStats],
    summary="User statistics",
    description="Counts by status, role and department, plus license usage",
)
async def user_stats(
    auth: AuthContext = Depends(require_tenant_admin),
    service: UserService = Depends(get_user_service),
) -> APIResponse[UserStats]:
    return APIResponse(success=True, data=UserStats(**service.stats(auth.tenant_id)))


@router.get(
    "/{user_id}",
    response_model=APIResponse[UserResponse],
    summary="Get user",
)
async def get_user(
    user_id: int,
    auth: AuthContext = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
) -> APIResponse[UserResponse]:
    user = service.get(auth.tenant_id, user_id)
    return APIResponse(success=True, data=UserResponse.model_validate(user))


@router.post(
    "",
    response_model=APIResponse[UserResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create user",
    description="Create a user in the caller's tenant. Consumes one license.",
)
async def create_user(
    data: UserCreate,
    auth: AuthContext = Depends(require_tenant_admin),
    service: UserService = Depends(get_user_service),
) -> APIResponse[UserResponse]:
    user = service.create(auth.tenant_id, data.model_dump(), created_by=auth.user)
    return APIResponse(success=True, message="User created", data=UserResponse.model_validate(user))


@router.put(
    "/{user_id}",
    response_model=APIResponse[UserResponse],
    summary="Update user",
)
async def update_user(
    user_id: int,
    data: UserUpdate,
    auth: AuthContext = Depends(require_tenant_admin),
    service: UserService = Depends(get_user_service),
) -> APIResponse[UserResponse]:
    user = service.update(auth.tenant_id, user_id, data.model_dump(exclude_unset=True), updated_by=auth.user)
    return APIResponse(success=True, message="User updated", data=UserResponse.model_validate(user))


@router.delete(
    "/{user_id}",
    response_model=APIResponse[None],
    summary="Delete user",
    description="Delete a user with no case history. Releases one license.",
)
async def delete_user(
    user_id: int,
    auth: AuthContext = Depends(require_tenant_admin),
    service: UserService = Depends(get_user_service),
) -> APIResponse[None]:
    service.delete(auth.tenant_id, user_id, deleted_by=auth.user)
    return APIResponse(success=True, message="User deleted")


@router.patch(
    "/{user_id}/status",
    response_model=APIResponse[UserResponse],
    summary="Toggle user status",
    description="Activate or deactivate a user",
)
async def toggle_user_status(
    user_id: int,
    auth: AuthContext = Depends(require_tenant_admin),
    service: UserService = Depends(get_user_service),
) -> APIResponse[UserResponse]:
    user = service.toggle_status(auth.tenant_id, user_id, changed_by=auth.user)
    state = "activated" if user.is_active else "deactivated"
    return APIResponse(success=True, message=f"User {state}", data=UserResponse.model_validate(user))
