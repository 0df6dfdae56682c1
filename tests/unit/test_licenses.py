"""
Unit tests for tenant license counting.

Tests the conditional updates that consume and release licenses.
"""

import pytest

from casedesk.models import Tenant
from casedesk.services.errors import PermissionDenied
from casedesk.services.tenants import acquire_license, release_license

from tests.fixtures.factories import create_tenant


def licenses_in_use(db, tenant):
    db.expire_all()
    return db.get(Tenant, tenant.id).licenses_in_use


class TestAcquireLicense:
    """Test acquire_license."""

    def test_consumes_one(self, test_db):
        tenant = create_tenant(test_db, slug="small", licenses_total=2)

        acquire_license(test_db, tenant.id)
        test_db.commit()

        assert licenses_in_use(test_db, tenant) == 1

    def test_fails_at_cap(self, test_db):
        tenant = create_tenant(test_db, slug="small", licenses_total=1)
        acquire_license(test_db, tenant.id)
        test_db.commit()

        with pytest.raises(PermissionDenied):
            acquire_license(test_db, tenant.id)
        assert licenses_in_use(test_db, tenant) == 1


class TestReleaseLicense:
    """Test release_license."""

    def test_releases_one(self, test_db):
        tenant = create_tenant(test_db, slug="small", licenses_total=3)
        tenant.licenses_in_use = 2
        test_db.commit()

        assert release_license(test_db, tenant.id) is True
        test_db.commit()
        assert licenses_in_use(test_db, tenant) == 1

    def test_floor_zero(self, test_db):
        tenant = create_tenant(test_db, slug="small", licenses_total=3)

        assert release_license(test_db, tenant.id) is False
        test_db.commit()
        assert licenses_in_use(test_db, tenant) == 0
