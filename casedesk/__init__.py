"""
CaseDesk - Multi-tenant HR case management API

Packages:
- models: SQLAlchemy models (tenants, users, complaints, investigations, resources)
- services: Domain rules, including the case workflow engine
- routers: FastAPI endpoints
- middleware: Tenant resolution, authentication, logging, rate limiting
"""

__version__ = "1.0.0"
