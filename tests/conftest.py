"""
Shared pytest fixtures for CaseDesk API tests.

Provides:
- Isolated SQLite database per test
- FastAPI TestClient with the database dependency overridden
- A tenant ("acme") with one user per role, plus bearer headers for each
"""

import os
import tempfile
from pathlib import Path

# Settings are read once at import time, so the test environment has to be in
# place before any casedesk module is imported.
_TEST_DATA_DIR = Path(tempfile.mkdtemp(prefix="casedesk-tests-"))
os.environ.setdefault("CASEDESK_DATABASE_URL", f"sqlite:///{_TEST_DATA_DIR / 'app.db'}")
os.environ.setdefault("CASEDESK_CONFIG_PATH", str(_TEST_DATA_DIR / "config.yaml"))
os.environ.setdefault("CASEDESK_ENVIRONMENT", "test")
os.environ.setdefault("CASEDESK_JWT_SECRET", "test-secret-key-with-enough-length-for-hs256")
os.environ.setdefault("CASEDESK_BCRYPT_ROUNDS", "4")
os.environ.setdefault("CASEDESK_LOG_TO_FILE", "false")
os.environ.setdefault("CASEDESK_RATE_LIMIT_ENABLED", "false")

import pytest
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session

from casedesk.database import Base, get_db
from casedesk.main import app
from casedesk.models import Tenant, User

from tests.fixtures.factories import auth_headers_for, create_tenant, create_user


# ============================================
# Database Fixtures
# ============================================


@pytest.fixture(scope="function")
def test_engine(tmp_path):
    """
    Create an isolated SQLite database engine for each test.

    Uses a file-based database in tmp_path to avoid connection isolation
    issues with in-memory SQLite.
    """
    db_path = tmp_path / "test.db"
    engine = create_engine(
        f"sqlite:///{db_path}",
        connect_args={"check_same_thread": False},
    )
    return engine


@pytest.fixture(scope="function")
def test_db(test_engine) -> Generator[Session, None, None]:
    """
    Create database tables and provide a session.

    Tables are created before and dropped after each test.
    """
    from casedesk import models  # noqa: F401

    Base.metadata.create_all(bind=test_engine)

    TestingSessionLocal = sessionmaker(bind=test_engine)
    db = TestingSessionLocal()

    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture(scope="function")
def client(test_db: Session) -> Generator[TestClient, None, None]:
    """
    FastAPI TestClient with database dependency overridden.

    Uses the test_db session instead of the production database.
    """

    def override_get_db():
        try:
            yield test_db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# ============================================
# Tenant and User Fixtures
# ============================================


@pytest.fixture
def tenant(test_db: Session) -> Tenant:
    """Active tenant with room for ten users."""
    return create_tenant(test_db, name="Acme Corp", slug="acme", licenses_total=10)


@pytest.fixture
def other_tenant(test_db: Session) -> Tenant:
    """A second tenant, for isolation checks."""
    return create_tenant(
        test_db,
        name="Globex",
        slug="globex",
        tax_id="77.000.111-2",
        email="contact@globex.test",
        licenses_total=5,
    )


@pytest.fixture
def admin(test_db: Session, tenant: Tenant) -> User:
    return create_user(test_db, tenant, email="admin@acme.test", role="Tenant Admin", first_name="Ada")


@pytest.fixture
def hr_user(test_db: Session, tenant: Tenant) -> User:
    return create_user(test_db, tenant, email="hr@acme.test", role="RRHH", first_name="Helen")


@pytest.fixture
def investigator(test_db: Session, tenant: Tenant) -> User:
    return create_user(test_db, tenant, email="ivan@acme.test", role="Investigador", first_name="Ivan")


@pytest.fixture
def alice(test_db: Session, tenant: Tenant) -> User:
    """Employee who files complaints."""
    return create_user(test_db, tenant, email="alice@acme.test", role="Empleado", first_name="Alice")


@pytest.fixture
def bob(test_db: Session, tenant: Tenant) -> User:
    """Employee complaints are filed against."""
    return create_user(test_db, tenant, email="bob@acme.test", role="Empleado", first_name="Bob")


@pytest.fixture
def admin_headers(admin: User) -> dict[str, str]:
    return auth_headers_for(admin)


@pytest.fixture
def hr_headers(hr_user: User) -> dict[str, str]:
    return auth_headers_for(hr_user)


@pytest.fixture
def investigator_headers(investigator: User) -> dict[str, str]:
    return auth_headers_for(investigator)


@pytest.fixture
def alice_headers(alice: User) -> dict[str, str]:
    return auth_headers_for(alice)


@pytest.fixture
def bob_headers(bob: User) -> dict[str, str]:
    return auth_headers_for(bob)


# ============================================
# Convenience Fixtures
# ============================================


@pytest.fixture
def complaint_payload(bob: User) -> dict:
    """Valid complaint body from Alice about Bob."""
    from tests.fixtures.data import complaint_payload

    return complaint_payload(accused_id=bob.id)
