### Description ###
# CaseDesk - Multi-tenant HR Case Management API
# - FastAPI Dependencies -
# Author: CaseDesk Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
FastAPI Dependencies

Provides per-request service instances bound to the request's database
session.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from casedesk.database import get_db
from casedesk.services import ComplaintService, InvestigationService, ResourceCatalog, UserService


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(db)


def get_complaint_service(db: Session = Depends(get_db)) -> ComplaintService:
    return ComplaintService(db)


def get_investigation_service(db: Session = Depends(get_db)) -> InvestigationService:
    return InvestigationService(db)


def get_resource_catalog(db: Session = Depends(get_db)) -> ResourceCatalog:
    return ResourceCatalog(db)
