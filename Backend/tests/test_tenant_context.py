"""
Tests for TenantContext and the request tenancy dependencies.

Run with: pytest tests/test_tenant_context.py -v
"""

import pytest
from fastapi import HTTPException
from starlette.requests import Request

from momantza.tenancy import (
    RequestTenancy,
    TenantContext,
    TenantResolutionSource,
    get_request_tenancy,
    get_tenant_context_or_none,
    require_tenant_context,
)

from .conftest import ACME_ID


def make_request(tenancy=None) -> Request:
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/api/halls",
        "headers": [],
        "query_string": b"",
        "state": {},
    }
    request = Request(scope)
    if tenancy is not None:
        request.state.tenancy = tenancy
    return request


@pytest.fixture
def acme_context() -> TenantContext:
    return TenantContext(
        tenant_id=ACME_ID,
        domain_hint="acme.momantza.com",
        source=TenantResolutionSource.SUBDOMAIN,
        tenant_name="Acme Halls",
    )


class TestTenantContext:

    def test_is_immutable(self, acme_context):
        with pytest.raises(Exception):  # FrozenInstanceError
            acme_context.tenant_id = None

    def test_equality_by_value(self, acme_context):
        assert acme_context == TenantContext(
            tenant_id=ACME_ID,
            domain_hint="acme.momantza.com",
            source=TenantResolutionSource.SUBDOMAIN,
            tenant_name="Acme Halls",
        )


class TestDependencies:

    def test_missing_middleware_gives_empty_tenancy(self):
        tenancy = get_request_tenancy(make_request())

        assert tenancy == RequestTenancy()
        assert not tenancy.is_resolved

    def test_context_or_none(self, acme_context):
        request = make_request(RequestTenancy(tenant_context=acme_context, raw_subdomain="acme"))
        assert get_tenant_context_or_none(request) is acme_context
        assert get_tenant_context_or_none(make_request(RequestTenancy())) is None

    def test_require_returns_context(self, acme_context):
        request = make_request(RequestTenancy(tenant_context=acme_context))
        assert require_tenant_context(request) is acme_context

    def test_require_raises_404_with_hints(self):
        request = make_request(RequestTenancy(raw_subdomain="nobody", path_tenant_id="not-a-uuid"))

        with pytest.raises(HTTPException) as exc_info:
            require_tenant_context(request)

        assert exc_info.value.status_code == 404
        error = exc_info.value.detail["error"]
        assert error["code"] == "TENANT_NOT_FOUND"
        assert error["details"] == {"subdomain": "nobody", "path_tenant_id": "not-a-uuid"}

    def test_require_without_hints_has_no_details(self):
        with pytest.raises(HTTPException) as exc_info:
            require_tenant_context(make_request())

        assert "details" not in exc_info.value.detail["error"]
