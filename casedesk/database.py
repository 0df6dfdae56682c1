### Description ###
# CaseDesk - Multi-tenant HR Case Management API
# - App Database Setup -
# Author: CaseDesk Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
App Database Setup

Relational store for tenants, users, complaints, investigations and the
resource catalog. SQLite by default; any SQLAlchemy URL works.

Uses synchronous SQLAlchemy (no greenlet dependency).
"""

import logging
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import declarative_base, sessionmaker

from casedesk.config import get_api_settings

logger = logging.getLogger(__name__)


def build_engine(database_url: str):
    """Create an engine, preparing the SQLite data directory when needed"""
    url = make_url(database_url)
    connect_args = {}
    if url.get_backend_name() == "sqlite":
        # Allow multi-threaded access
        connect_args["check_same_thread"] = False
        if url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)

    return create_engine(
        database_url,
        connect_args=connect_args,
        echo=False,  # Set True for SQL debugging
    )


DATABASE_URL = get_api_settings().database_url

engine = build_engine(DATABASE_URL)

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for models
Base = declarative_base()


def get_db():
    """
    Dependency that provides a database session.

    Usage:
        @app.get("/endpoint")
        def endpoint(db: Session = Depends(get_db)):
            ...
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None):
    """
    Initialize the database - create all tables.

    Call this on application startup.
    """
    # Import models to register them with Base
    from casedesk.models import complaint, investigation, resource, tenant, user  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
    logger.info(f"Database initialized at: {make_url(DATABASE_URL).render_as_string(hide_password=True)}")


def drop_db(bind=None):
    """Drop all tables (use with caution!)"""
    Base.metadata.drop_all(bind=bind or engine)
