### Description ###
# CaseDesk - Multi-tenant HR Case Management API
# - Investigation Router -
# Author: CaseDesk Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
Investigation API Endpoints

Opening and closing an investigation needs HR or Tenant Admin; day-to-day
work (evidence, interviews, findings) is open to the assigned investigator.
"""

from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query, status

from casedesk.dependencies import get_investigation_service
from casedesk.middleware import AuthContext, require_case_staff, require_supervisor
from casedesk.schemas.investigation import (
    PRIORITIES,
    STATUSES,
    CompleteInvestigationRequest,
    CustodyEntryCreate,
    EvidenceCreate,
    EvidenceResponse,
    FindingCreate,
    FindingResponse,
    InterviewCreate,
    InterviewResponse,
    InvestigationCreate,
    InvestigationListItem,
    InvestigationResponse,
    InvestigationStats,
    InvestigationUpdate,
    ReasonRequest,
    RecommendationResponse,
    RecommendationUpdate,
)
from casedesk.schemas.responses import APIResponse, PaginatedResponse, paginated
from casedesk.services.investigations import InvestigationService

router = APIRouter()

SORT_FIELDS = Literal["created_at", "updated_at", "estimated_completion_date", "priority", "status"]


# ========================================
# Lifecycle
# ========================================

@router.post(
    "",
    response_model=APIResponse[InvestigationResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Open investigation",
    description="Open an investigation on a complaint and move the complaint to investigating",
)
async def create_investigation(
    data: InvestigationCreate,
    auth: AuthContext = Depends(require_supervisor),
    service: InvestigationService = Depends(get_investigation_service),
) -> APIResponse[InvestigationResponse]:
    investigation = service.create(auth.user, data.model_dump())
    return APIResponse(
        success=True,
        message="Investigation created",
        data=InvestigationResponse.model_validate(investigation),
    )


@router.get(
    "",
    response_model=PaginatedResponse[InvestigationListItem],
    summary="List investigations",
    description="Active investigations; investigators only see their own",
)
async def list_investigations(
    auth: AuthContext = Depends(require_case_staff),
    service: InvestigationService = Depends(get_investigation_service),
    status_filter: Optional[STATUSES] = Query(None, alias="status"),
    priority: Optional[PRIORITIES] = Query(None),
    investigator_id: Optional[int] = Query(None, ge=1),
    complaint_id: Optional[int] = Query(None, ge=1),
    overdue_only: bool = Query(False),
    sort_by: SORT_FIELDS = Query("created_at"),
    sort_order: Literal["asc", "desc"] = Query("desc"),
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(10, ge=1, le=100, description="Items per page"),
) -> PaginatedResponse[InvestigationListItem]:
    investigations, total = service.list_investigations(
        auth.user,
        status=status_filter,
        priority=priority,
        investigator_id=investigator_id,
        complaint_id=complaint_id,
        overdue_only=overdue_only,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit,
    )
    return paginated([InvestigationListItem.model_validate(i) for i in investigations], page, limit, total)


@router.get(
    "/stats",
    response_model=APIResponse[InvestigationStats],
    summary="Investigation statistics",
)
async def investigation_stats(
    auth: AuthContext = Depends(require_case_staff),
    service: InvestigationService = Depends(get_investigation_service),
) -> APIResponse[InvestigationStats]:
    return APIResponse(success=True, data=InvestigationStats(**service.stats(auth.user)))


@router.get(
    "/{investigation_id}",
    response_model=APIResponse[InvestigationResponse],
    summary="Get investigation",
)
async def get_investigation(
    investigation_id: int,
    auth: AuthContext = Depends(require_case_staff),
    service: InvestigationService = Depends(get_investigation_service),
) -> APIResponse[InvestigationResponse]:
    investigation = service.get(auth.user, investigation_id)
    return APIResponse(success=True, data=InvestigationResponse.model_validate(investigation))


@router.put(
    "/{investigation_id}",
    response_model=APIResponse[InvestigationResponse],
    summary="Update investigation",
    description="Edit working fields or move the status (completed and cancelled have their own endpoints)",
)
async def update_investigation(
    investigation_id: int,
    data: InvestigationUpdate,
    auth: AuthContext = Depends(require_case_staff),
    service: InvestigationService = Depends(get_investigation_service),
) -> APIResponse[InvestigationResponse]:
    investigation = service.update(auth.user, investigation_id, data.model_dump(exclude_unset=True))
    return APIResponse(
        success=True,
        message="Investigation updated",
        data=InvestigationResponse.model_validate(investigation),
    )


@router.post(
    "/{investigation_id}/complete",
    response_model=APIResponse[InvestigationResponse],
    summary="Complete investigation",
    description="Record the conclusion and resolve the parent complaint",
)
async def complete_investigation(
    investigation_id: int,
    data: CompleteInvestigationRequest,
    auth: AuthContext = Depends(require_case_staff),
    service: InvestigationService = Depends(get_investigation_service),
) -> APIResponse[InvestigationResponse]:
    investigation = service.complete(auth.user, investigation_id, data.model_dump())
    return APIResponse(
        success=True,
        message="Investigation completed",
        data=InvestigationResponse.model_validate(investigation),
    )


@router.post(
    "/{investigation_id}/suspend",
    response_model=APIResponse[InvestigationResponse],
    summary="Suspend investigation",
)
async def suspend_investigation(
    investigation_id: int,
    data: ReasonRequest,
    auth: AuthContext = Depends(require_supervisor),
    service: InvestigationService = Depends(get_investigation_service),
) -> APIResponse[InvestigationResponse]:
    investigation = service.suspend(auth.user, investigation_id, reason=data.reason)
    return APIResponse(
        success=True,
        message="Investigation suspended",
        data=InvestigationResponse.model_validate(investigation),
    )


@router.post(
    "/{investigation_id}/cancel",
    response_model=APIResponse[InvestigationResponse],
    summary="Cancel investigation",
)
async def cancel_investigation(
    investigation_id: int,
    data: ReasonRequest,
    auth: AuthContext = Depends(require_supervisor),
    service: InvestigationService = Depends(get_investigation_service),
) -> APIResponse[InvestigationResponse]:
    investigation = service.cancel(auth.user, investigation_id, reason=data.reason)
    return APIResponse(
        success=True,
        message="Investigation cancelled",
        data=InvestigationResponse.model_validate(investigation),
    )


# ========================================
# Case file
# ========================================

@router.post(
    "/{investigation_id}/evidence",
    response_model=APIResponse[EvidenceResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Add evidence",
)
async def add_evidence(
    investigation_id: int,
    data: EvidenceCreate,
    auth: AuthContext = Depends(require_case_staff),
    service: InvestigationService = Depends(get_investigation_service),
) -> APIResponse[EvidenceResponse]:
    evidence = service.add_evidence(auth.user, investigation_id, data.model_dump())
    return APIResponse(success=True, message="Evidence added", data=EvidenceResponse.model_validate(evidence))


@router.post(
    "/{investigation_id}/evidence/{evidence_id}/custody",
    response_model=APIResponse[EvidenceResponse],
    summary="Record custody event",
    description="Append an entry to an evidence item's chain of custody",
)
async def add_custody_entry(
    investigation_id: int,
    evidence_id: int,
    data: CustodyEntryCreate,
    auth: AuthContext = Depends(require_case_staff),
    service: InvestigationService = Depends(get_investigation_service),
) -> APIResponse[EvidenceResponse]:
    evidence = service.add_custody_entry(auth.user, investigation_id, evidence_id, data.action, data.notes)
    return APIResponse(success=True, message="Custody entry recorded", data=EvidenceResponse.model_validate(evidence))


@router.post(
    "/{investigation_id}/interviews",
    response_model=APIResponse[InterviewResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Add interview",
)
async def add_interview(
    investigation_id: int,
    data: InterviewCreate,
    auth: AuthContext = Depends(require_case_staff),
    service: InvestigationService = Depends(get_investigation_service),
) -> APIResponse[InterviewResponse]:
    interview = service.add_interview(auth.user, investigation_id, data.model_dump())
    return APIResponse(success=True, message="Interview added", data=InterviewResponse.model_validate(interview))


@router.post(
    "/{investigation_id}/findings",
    response_model=APIResponse[FindingResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Add finding",
)
async def add_finding(
    investigation_id: int,
    data: FindingCreate,
    auth: AuthContext = Depends(require_case_staff),
    service: InvestigationService = Depends(get_investigation_service),
) -> APIResponse[FindingResponse]:
    finding = service.add_finding(auth.user, investigation_id, data.model_dump())
    return APIResponse(success=True, message="Finding documented", data=FindingResponse.model_validate(finding))


@router.put(
    "/{investigation_id}/recommendations/{recommendation_id}",
    response_model=APIResponse[RecommendationResponse],
    summary="Update recommendation",
    description="Track a conclusion recommendation to completion",
)
async def update_recommendation(
    investigation_id: int,
    recommendation_id: int,
    data: RecommendationUpdate,
    auth: AuthContext = Depends(require_case_staff),
    service: InvestigationService = Depends(get_investigation_service),
) -> APIResponse[RecommendationResponse]:
    recommendation = service.update_recommendation(
        auth.user, investigation_id, recommendation_id, data.model_dump(exclude_unset=True)
    )
    return APIResponse(
        success=True,
        message="Recommendation updated",
        data=RecommendationResponse.model_validate(recommendation),
    )
