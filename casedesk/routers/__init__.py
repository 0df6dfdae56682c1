### Description ###
# CaseDesk - Multi-tenant HR Case Management API
# - API Routers Package -
# Author: CaseDesk Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
API Routers Package

Contains endpoint routers for different resources:
- auth: login and session endpoints
- users: user administration
- complaints: complaint workflow
- investigations: investigation workflow
- resources: tenant catalog
"""

from .auth import router as auth_router
from .complaints import router as complaints_router
from .investigations import router as investigations_router
from .resources import router as resources_router
from .users import router as users_router

__all__ = [
    "auth_router",
    "complaints_router",
    "investigations_router",
    "resources_router",
    "users_router",
]
