### Description ###
# CaseDesk - Multi-tenant HR Case Management API
# - Complaint Router -
# Author: CaseDesk Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
Complaint API Endpoints

- POST /complaints - File a complaint
- GET /complaints - List complaints visible to the caller
- GET /complaints/stats - Complaint statistics (HR, Tenant Admin)
- GET /complaints/{id} - Get one complaint
- PUT /complaints/{id}/status - Change status (role-gated)
- POST /complaints/{id}/assign - Assign an investigator (HR, Tenant Admin)
- POST /complaints/{id}/evidence - Attach evidence metadata
- POST /complaints/{id}/resolve - Record the resolution
- GET /complaints/{id}/timeline - Audit trail
"""

from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, Query, status

from casedesk.dependencies import get_complaint_service
from casedesk.middleware import AuthContext, get_current_user, require_supervisor
from casedesk.schemas.complaint import (
    COMPLAINT_STATUSES,
    AssignInvestigatorRequest,
    ComplaintEvidenceCreate,
    ComplaintCreate,
    ComplaintListItem,
    ComplaintResponse,
    ComplaintStats,
    ComplaintStatusUpdate,
    ResolveComplaintRequest,
    TimelineEntryResponse,
)
from casedesk.schemas.responses import APIResponse, PaginatedResponse, paginated
from casedesk.services.complaints import ComplaintService

router = APIRouter()

SORT_FIELDS = Literal[
    "created_at", "updated_at", "incident_date", "reported_date", "severity", "priority", "status", "title"
]


@router.post(
    "",
    response_model=APIResponse[ComplaintResponse],
    status_code=status.HTTP_201_CREATED,
    summary="File complaint",
    description="Create a complaint in draft status with the caller as complainant",
)
async def create_complaint(
    data: ComplaintCreate,
    auth: AuthContext = Depends(get_current_user),
    service: ComplaintService = Depends(get_complaint_service),
) -> APIResponse[ComplaintResponse]:
    complaint = service.create(auth.user, data.model_dump())
    return APIResponse(success=True, message="Complaint created", data=ComplaintResponse.model_validate(complaint))


@router.get(
    "",
    response_model=PaginatedResponse[ComplaintListItem],
    summary="List complaints",
    description="Employees see their own complaints, investigators their assigned ones, HR and admins all",
)
async def list_complaints(
    auth: AuthContext = Depends(get_current_user),
    service: ComplaintService = Depends(get_complaint_service),
    status_filter: Optional[COMPLAINT_STATUSES] = Query(None, alias="status"),
    type: Optional[str] = Query(None, max_length=50),
    severity: Optional[str] = Query(None, max_length=20),
    priority: Optional[str] = Query(None, max_length=20),
    assigned_to: Optional[int] = Query(None, ge=1),
    complainant_id: Optional[int] = Query(None, ge=1),
    accused_id: Optional[int] = Query(None, ge=1),
    sort_by: SORT_FIELDS = Query("created_at"),
    sort_order: Literal["asc", "desc"] = Query("desc"),
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(10, ge=1, le=100, description="Items per page"),
) -> PaginatedResponse[ComplaintListItem]:
    complaints, total = service.list_complaints(
        auth.user,
        status=status_filter,
        type=type,
        severity=severity,
        priority=priority,
        assigned_to=assigned_to,
        complainant_id=complainant_id,
        accused_id=accused_id,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit,
    )
    return paginated([ComplaintListItem.model_validate(c) for c in complaints], page, limit, total)


@router.get(
    "/stats",
    response_model=APIResponse[ComplaintStats],
    summary="Complaint statistics",
)
async def complaint_stats(
    auth: AuthContext = Depends(require_supervisor),
    service: ComplaintService = Depends(get_complaint_service),
) -> APIResponse[ComplaintStats]:
    return APIResponse(success=True, data=ComplaintStats(**service.stats(auth.tenant_id)))


@router.get(
    "/{complaint_id}",
    response_model=APIResponse[ComplaintResponse],
    summary="Get complaint",
)
async def get_complaint(
    complaint_id: int,
    auth: AuthContext = Depends(get_current_user),
    service: ComplaintService = Depends(get_complaint_service),
) -> APIResponse[ComplaintResponse]:
    complaint = service.get(auth.user, complaint_id)
    return APIResponse(success=True, data=ComplaintResponse.model_validate(complaint))


@router.put(
    "/{complaint_id}/status",
    response_model=APIResponse[ComplaintResponse],
    summary="Change complaint status",
    description="Move a complaint to a status the caller's role is allowed to set",
)
async def change_status(
    complaint_id: int,
    data: ComplaintStatusUpdate,
    auth: AuthContext = Depends(get_current_user),
    service: ComplaintService = Depends(get_complaint_service),
) -> APIResponse[ComplaintResponse]:
    complaint = service.change_status(auth.user, complaint_id, data.status, notes=data.notes)
    return APIResponse(
        success=True,
        message=f"Complaint status changed to {complaint.status}",
        data=ComplaintResponse.model_validate(complaint),
    )


@router.post(
    "/{complaint_id}/assign",
    response_model=APIResponse[ComplaintResponse],
    summary="Assign investigator",
)
async def assign_investigator(
    complaint_id: int,
    data: AssignInvestigatorRequest,
    auth: AuthContext = Depends(get_current_user),
    service: ComplaintService = Depends(get_complaint_service),
) -> APIResponse[ComplaintResponse]:
    complaint = service.assign_investigator(auth.user, complaint_id, data.investigator_id, notes=data.notes)
    return APIResponse(success=True, message="Investigator assigned", data=ComplaintResponse.model_validate(complaint))


@router.post(
    "/{complaint_id}/evidence",
    response_model=APIResponse[ComplaintResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Add evidence",
)
async def add_evidence(
    complaint_id: int,
    data: ComplaintEvidenceCreate,
    auth: AuthContext = Depends(get_current_user),
    service: ComplaintService = Depends(get_complaint_service),
) -> APIResponse[ComplaintResponse]:
    complaint = service.add_evidence(auth.user, complaint_id, data.model_dump())
    return APIResponse(success=True, message="Evidence added", data=ComplaintResponse.model_validate(complaint))


@router.post(
    "/{complaint_id}/resolve",
    response_model=APIResponse[ComplaintResponse],
    summary="Resolve complaint",
)
async def resolve_complaint(
    complaint_id: int,
    data: ResolveComplaintRequest,
    auth: AuthContext = Depends(get_current_user),
    service: ComplaintService = Depends(get_complaint_service),
) -> APIResponse[ComplaintResponse]:
    complaint = service.resolve(auth.user, complaint_id, data.model_dump())
    return APIResponse(success=True, message="Complaint resolved", data=ComplaintResponse.model_validate(complaint))


@router.get(
    "/{complaint_id}/timeline",
    response_model=APIResponse[List[TimelineEntryResponse]],
    summary="Complaint timeline",
)
async def complaint_timeline(
    complaint_id: int,
    auth: AuthContext = Depends(get_current_user),
    service: ComplaintService = Depends(get_complaint_service),
) -> APIResponse[List[TimelineEntryResponse]]:
    entries = service.timeline(auth.user, complaint_id)
    return APIResponse(success=True, data=[TimelineEntryResponse.model_validate(e) for e in entries])
